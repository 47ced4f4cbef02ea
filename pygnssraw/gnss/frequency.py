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

"""GNSS carrier frequency classification.

This module resolves a reported carrier frequency to the canonical label of
the signal it belongs to (e.g. "L1", "E5a", "B1C"). Receivers report carrier
frequencies as floats with some jitter, so each label is matched against a
frequency band rather than an exact value.

The supported labels per constellation are:

- GPS (NAVSTAR): L1, L2, L3, L4, L5
- GLONASS: L1, L2 (FDMA bands), L3, L5, L1-C
- Galileo: E1, E5, E5a, E5b, E6
- BeiDou: B1, B1-2, B1C, B2, B2a, B3
- QZSS: L1, L2, L5, L6
- IRNSS: L5, S
- SBAS: L1 and, for EGNOS, MSAS and WAAS, L5

Functions:
    carrier_frequency_label: Label for a constellation, svid and frequency
    carrier_frequency_label_any: Label for a frequency of unknown constellation
    is_primary_carrier: Whether a label is a primary (L1-type) carrier

Notes:
    - A frequency that is present but matches no band yields CF_UNKNOWN
    - A missing frequency, or a receiver without carrier frequency
      support, yields CF_UNSUPPORTED
    - Bands are checked in declaration order; the first match wins where
      two bands overlap (GPS L3/L4)
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from ..core.constants import (CF_TOLERANCE_MHZ, CF_UNKNOWN, CF_UNSUPPORTED,
                              HZ_TO_MHZ)
from ..core.data_structures import SignalStatus
from ..core.gnss_type import GnssType, SbasType, sbas_type_from_svid


@dataclass(frozen=True)
class CarrierBand:
    """A labelled carrier frequency band, bounds inclusive (MHz)"""
    label: str
    low_mhz: float
    high_mhz: float

    def contains(self, frequency_mhz: float) -> bool:
        return self.low_mhz <= frequency_mhz <= self.high_mhz


def carrier(label: str, center_mhz: float, tolerance_mhz: float = CF_TOLERANCE_MHZ) -> CarrierBand:
    """Band centred on a nominal carrier frequency"""
    return CarrierBand(label, center_mhz - tolerance_mhz, center_mhz + tolerance_mhz)


class CarrierTable:
    """Ordered set of carrier bands with vectorised lookup.

    Parameters
    ----------
    bands : Iterable[CarrierBand]
        Bands in priority order
    """

    def __init__(self, bands: Iterable[CarrierBand]):
        self.bands: Tuple[CarrierBand, ...] = tuple(bands)
        self._lows = np.array([b.low_mhz for b in self.bands], dtype=np.float64)
        self._highs = np.array([b.high_mhz for b in self.bands], dtype=np.float64)

    def __iter__(self):
        return iter(self.bands)

    def __len__(self):
        return len(self.bands)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(b.label for b in self.bands)

    def lookup(self, frequency_mhz: float) -> str:
        """
        Label of the first band containing the frequency

        Returns
        -------
        str
            Carrier label, or CF_UNKNOWN if no band matches
        """
        if not self.bands or not np.isfinite(frequency_mhz):
            return CF_UNKNOWN
        hits = np.flatnonzero((self._lows <= frequency_mhz) & (frequency_mhz <= self._highs))
        if hits.size == 0:
            return CF_UNKNOWN
        return self.bands[hits[0]].label


CARRIER_TABLES: Dict[GnssType, CarrierTable] = {
    GnssType.NAVSTAR: CarrierTable([
        carrier("L1", 1575.42),
        carrier("L2", 1227.6),
        carrier("L3", 1381.05),
        carrier("L4", 1379.913),
        carrier("L5", 1176.45),
    ]),
    GnssType.GLONASS: CarrierTable([
        # FDMA channels span 1598.0625-1605.375 and 1242.9375-1248.625 MHz
        CarrierBand("L1", 1598.0, 1606.0),
        CarrierBand("L2", 1242.0, 1249.0),
        carrier("L3", 1207.14),
        carrier("L5", 1176.45),
        carrier("L1-C", 1575.42),
    ]),
    GnssType.BEIDOU: CarrierTable([
        carrier("B1", 1561.098),
        carrier("B1-2", 1589.742),
        carrier("B1C", 1575.42),
        carrier("B2", 1207.14),
        carrier("B2a", 1176.45),
        carrier("B3", 1268.52),
    ]),
    GnssType.QZSS: CarrierTable([
        carrier("L1", 1575.42),
        carrier("L2", 1227.6),
        carrier("L5", 1176.45),
        carrier("L6", 1278.75),
    ]),
    GnssType.GALILEO: CarrierTable([
        carrier("E1", 1575.42),
        carrier("E5", 1191.795),
        carrier("E5a", 1176.45),
        carrier("E5b", 1207.14),
        carrier("E6", 1278.75),
    ]),
    GnssType.IRNSS: CarrierTable([
        carrier("L5", 1176.45),
        carrier("S", 2492.028),
    ]),
}

# SBAS signals are resolved per operator, which is derived from the PRN
SBAS_CARRIER_TABLES: Dict[SbasType, CarrierTable] = {
    SbasType.EGNOS: CarrierTable([carrier("L1", 1575.42), carrier("L5", 1176.45)]),
    SbasType.MSAS: CarrierTable([carrier("L1", 1575.42), carrier("L5", 1176.45)]),
    SbasType.GAGAN: CarrierTable([carrier("L1", 1575.42)]),
    SbasType.WAAS: CarrierTable([carrier("L1", 1575.42), carrier("L5", 1176.45)]),
}

PRIMARY_CARRIERS: Dict[GnssType, frozenset] = {
    GnssType.NAVSTAR: frozenset({"L1"}),
    GnssType.GLONASS: frozenset({"L1", "L1-C"}),
    GnssType.GALILEO: frozenset({"E1"}),
    GnssType.BEIDOU: frozenset({"B1", "B1C"}),
    GnssType.QZSS: frozenset({"L1"}),
    GnssType.SBAS: frozenset({"L1"}),
    GnssType.IRNSS: frozenset(),
}

ALL_PRIMARY_CARRIERS = frozenset().union(*PRIMARY_CARRIERS.values())

# Search order used when the constellation is not known
_ANY_CONSTELLATION_ORDER = (
    GnssType.NAVSTAR,
    GnssType.GALILEO,
    GnssType.GLONASS,
    GnssType.BEIDOU,
    GnssType.QZSS,
    GnssType.IRNSS,
)


def carrier_table(gnss_type: GnssType, svid: Optional[int] = None) -> Optional[CarrierTable]:
    """Reference table for a constellation (and SBAS PRN), or None"""
    if gnss_type == GnssType.SBAS:
        if svid is None:
            return None
        return SBAS_CARRIER_TABLES.get(sbas_type_from_svid(svid))
    return CARRIER_TABLES.get(gnss_type)


def carrier_frequency_label(gnss_type: GnssType,
                            svid: Optional[int],
                            carrier_frequency_hz: Optional[float],
                            cf_supported: bool = True) -> str:
    """Get the carrier frequency label for a signal.

    Parameters
    ----------
    gnss_type : GnssType
        Constellation of the signal
    svid : Optional[int]
        Satellite id; required to resolve SBAS signals, ignored otherwise
    carrier_frequency_hz : Optional[float]
        Reported carrier frequency in Hz, or None if not reported
    cf_supported : bool, optional
        Whether the receiver supports carrier frequency reporting at all.
        Default is True.

    Returns
    -------
    str
        Carrier label such as "L1" or "E5a", CF_UNSUPPORTED if no frequency
        is available, or CF_UNKNOWN if the frequency matches no known signal

    Examples
    --------
    >>> carrier_frequency_label(GnssType.NAVSTAR, 5, 1575.42e6)
    'L1'
    >>> carrier_frequency_label(GnssType.SBAS, 131, 1176.45e6)
    'L5'
    >>> carrier_frequency_label(GnssType.GALILEO, 3, None)
    'unsupported'
    """
    if not cf_supported or carrier_frequency_hz is None:
        return CF_UNSUPPORTED
    table = carrier_table(gnss_type, svid)
    if table is None:
        return CF_UNKNOWN
    return table.lookup(carrier_frequency_hz * HZ_TO_MHZ)


def carrier_frequency_label_for_status(status: SignalStatus, cf_supported: bool = True) -> str:
    """Get the carrier frequency label of a SignalStatus"""
    return carrier_frequency_label(status.gnss_type, status.svid,
                                   status.carrier_frequency_hz, cf_supported)


def carrier_frequency_label_any(frequency_mhz: float) -> str:
    """
    Label for a frequency whose constellation is not known, e.g. an antenna
    calibration frequency. Constellations are tried in a fixed order and the
    first known label is returned.
    """
    for gnss_type in _ANY_CONSTELLATION_ORDER:
        label = CARRIER_TABLES[gnss_type].lookup(frequency_mhz)
        if label != CF_UNKNOWN:
            return label
    return CF_UNKNOWN


def is_primary_carrier(label: str, gnss_type: Optional[GnssType] = None) -> bool:
    """Check whether a carrier label is a primary carrier frequency.

    Primary carriers are the L1-type signals (L1, E1, B1, B1C, L1-C); secondary
    signals such as L5, E5a or B2a are not primary.

    Parameters
    ----------
    label : str
        Carrier frequency label
    gnss_type : Optional[GnssType]
        Constellation the label belongs to. If None, the label is checked
        against the primary carriers of all constellations.

    Returns
    -------
    bool
        True if the label is a primary carrier
    """
    if gnss_type is None:
        return label in ALL_PRIMARY_CARRIERS
    return label in PRIMARY_CARRIERS.get(gnss_type, frozenset())
