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

"""Core Raw GNSS Module.

This module provides the fundamental pieces shared by the aggregation and
RINEX encoding layers:

- **Constants**: carrier frequencies, tracking and accumulated delta range
  state bits, RINEX layout parameters and observation limits
- **Constellations**: GnssType and SbasType enumerations with RINEX
  identifiers and SBAS operator lookup
- **Data Structures**: signal status, satellite groups, receiver clock,
  raw measurements and GPS ephemerides
- **Time Systems**: GPS week/seconds of week from a receiver clock, calendar
  formatting anchored at the GPS epoch, BeiDou offset and week crossover

Example Usage:
    >>> from pygnssraw.core import *
    >>>
    >>> clock = GnssClock(time_nanos=0, full_bias_nanos=-1434488539658000000)
    >>> format_gpst_epoch(gps_time_nanos(clock))
    '2025 06 20 21 02 19.658000'
"""

from .constants import *
from .data_structures import *
from .gnss_type import *
from .time import *
