# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""GNSS signal classification and aggregation.

Raw per-signal status reports are resolved to carrier labels and folded
into one entry per satellite:

- **frequency**: carrier frequency label tables per constellation and the
  primary carrier test
- **aggregation**: grouping of signal statuses into a SatelliteGroup with
  in-view/in-use counters and dual-frequency flags
- **measurement_state**: tracking and accumulated delta range state checks
  deciding which raw observables are valid

Examples:
    >>> from pygnssraw.gnss import aggregate
    >>> from pygnssraw.core import GnssType, SignalStatus
    >>> group = aggregate([
    ...     SignalStatus(5, GnssType.NAVSTAR, cn0_dbhz=40.0, carrier_frequency_hz=1575.42e6),
    ...     SignalStatus(5, GnssType.NAVSTAR, cn0_dbhz=35.0, carrier_frequency_hz=1176.45e6),
    ... ])
    >>> group.metadata.is_dual_frequency_per_sat_in_view
    True
"""

from .aggregation import (aggregate, create_gnss_satellite_key,
                          create_gnss_status_key, partition_counts)
from .frequency import (CARRIER_TABLES, PRIMARY_CARRIERS, SBAS_CARRIER_TABLES,
                        CarrierBand, CarrierTable, carrier_frequency_label,
                        carrier_frequency_label_any,
                        carrier_frequency_label_for_status, carrier_table,
                        is_primary_carrier)
from .measurement_state import (SYNC_STATE_RULES, SyncRule, check_adr_state,
                                check_sync_state, rinex_attribute, rinex_band,
                                sync_rule)

__all__ = [
    'aggregate', 'create_gnss_satellite_key', 'create_gnss_status_key',
    'partition_counts',
    'CARRIER_TABLES', 'SBAS_CARRIER_TABLES', 'PRIMARY_CARRIERS',
    'CarrierBand', 'CarrierTable', 'carrier_table', 'carrier_frequency_label',
    'carrier_frequency_label_for_status', 'carrier_frequency_label_any',
    'is_primary_carrier',
    'SYNC_STATE_RULES', 'SyncRule', 'sync_rule', 'check_sync_state',
    'check_adr_state', 'rinex_band', 'rinex_attribute',
]
