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

"""Core data structures for raw GNSS status, measurements and ephemerides"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

import pandas as pd

from .constants import CF_UNKNOWN, CF_UNSUPPORTED, NO_DATA, EpochFlag
from .gnss_type import GnssType, SbasType, sbas_type_from_svid

SatelliteKey = Tuple[GnssType, int]


@dataclass(frozen=True)
class SignalStatus:
    """Status of a single signal (one frequency) from one satellite.

    Attributes
    ----------
    svid : int
        Satellite identifier (PRN for most constellations)
    gnss_type : GnssType
        Constellation broadcasting the signal
    cn0_dbhz : float
        Carrier-to-noise density in dB-Hz, NO_DATA if not tracked
    has_almanac : bool
        True if almanac data is available for the satellite
    has_ephemeris : bool
        True if ephemeris data is available for the satellite
    used_in_fix : bool
        True if the signal contributed to the latest position fix
    elevation_degrees : float
        Satellite elevation angle
    azimuth_degrees : float
        Satellite azimuth angle
    carrier_frequency_hz : Optional[float]
        Carrier frequency, None if the receiver did not report one
    state : int
        Tracking state bitmask (STATE_* bits)
    accumulated_delta_range_state : int
        Accumulated delta range state bitmask (ADR_STATE_* bits)
    sbas_type : SbasType
        SBAS operator, derived from the svid for SBAS signals
    baseband_cn0_dbhz : Optional[float]
        Baseband carrier-to-noise density, if available
    """
    svid: int
    gnss_type: GnssType
    cn0_dbhz: float = NO_DATA
    has_almanac: bool = False
    has_ephemeris: bool = False
    used_in_fix: bool = False
    elevation_degrees: float = 0.0
    azimuth_degrees: float = 0.0
    carrier_frequency_hz: Optional[float] = None
    state: int = 0
    accumulated_delta_range_state: int = 0
    sbas_type: SbasType = SbasType.UNKNOWN
    baseband_cn0_dbhz: Optional[float] = None

    def __post_init__(self):
        if self.gnss_type == GnssType.SBAS and self.sbas_type == SbasType.UNKNOWN:
            object.__setattr__(self, 'sbas_type', sbas_type_from_svid(self.svid))

    @property
    def has_carrier_frequency(self) -> bool:
        return self.carrier_frequency_hz is not None

    @property
    def in_view(self) -> bool:
        return self.cn0_dbhz != NO_DATA

    @property
    def satellite_key(self) -> SatelliteKey:
        return (self.gnss_type, self.svid)


@dataclass
class Satellite:
    """A satellite and the signals received from it in one snapshot.

    The ``status`` mapping is keyed by carrier frequency label, so a label
    appears at most once per satellite.
    """
    gnss_type: GnssType
    svid: int
    status: Dict[str, SignalStatus] = field(default_factory=dict)

    @property
    def key(self) -> SatelliteKey:
        return (self.gnss_type, self.svid)

    @property
    def sbas_type(self) -> SbasType:
        if self.gnss_type != GnssType.SBAS:
            return SbasType.UNKNOWN
        return sbas_type_from_svid(self.svid)

    @property
    def carrier_labels(self) -> List[str]:
        """Labels of known carrier frequencies, excluding sentinels"""
        return [label for label in self.status
                if label not in (CF_UNKNOWN, CF_UNSUPPORTED)]

    @property
    def num_signals_in_view(self) -> int:
        return sum(1 for s in self.status.values() if s.in_view)

    @property
    def num_signals_used(self) -> int:
        return sum(1 for s in self.status.values() if s.used_in_fix)

    @property
    def used_in_fix(self) -> bool:
        return self.num_signals_used > 0

    @property
    def max_cn0_dbhz(self) -> float:
        if not self.status:
            return NO_DATA
        return max(s.cn0_dbhz for s in self.status.values())


@dataclass
class SatelliteMetadata:
    """Summary of a satellite group.

    ``unknown_carrier_statuses`` and ``duplicate_carrier_statuses`` are
    diagnostic buckets keyed by signal key ("<svid> <GNSS> [<SBAS>] <label>").
    Every signal routed there is kept, in arrival order.
    """
    num_signals_in_view: int = 0
    num_signals_used: int = 0
    num_signals_total: int = 0
    num_sats_in_view: int = 0
    num_sats_used: int = 0
    num_sats_total: int = 0
    supported_gnss: Set[GnssType] = field(default_factory=set)
    supported_gnss_cfs: Set[str] = field(default_factory=set)
    supported_sbas: Set[SbasType] = field(default_factory=set)
    supported_sbas_cfs: Set[str] = field(default_factory=set)
    unknown_carrier_statuses: Dict[str, List[SignalStatus]] = field(default_factory=dict)
    duplicate_carrier_statuses: Dict[str, List[SignalStatus]] = field(default_factory=dict)
    is_dual_frequency_per_sat_in_view: bool = False
    is_dual_frequency_per_sat_in_use: bool = False
    is_non_primary_carrier_freq_in_view: bool = False
    is_non_primary_carrier_freq_in_use: bool = False

    @property
    def num_unknown_carrier_statuses(self) -> int:
        return sum(len(v) for v in self.unknown_carrier_statuses.values())

    @property
    def num_duplicate_carrier_statuses(self) -> int:
        return sum(len(v) for v in self.duplicate_carrier_statuses.values())


@dataclass
class SatelliteGroup:
    """Satellites keyed by (GnssType, svid) plus their summary metadata"""
    satellites: Dict[SatelliteKey, Satellite] = field(default_factory=dict)
    metadata: SatelliteMetadata = field(default_factory=SatelliteMetadata)

    def __len__(self):
        return len(self.satellites)

    @property
    def gnss_satellites(self) -> Dict[SatelliteKey, Satellite]:
        return {k: v for k, v in self.satellites.items() if k[0] != GnssType.SBAS}

    @property
    def sbas_satellites(self) -> Dict[SatelliteKey, Satellite]:
        return {k: v for k, v in self.satellites.items() if k[0] == GnssType.SBAS}

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the group into one row per stored signal.

        Returns
        -------
        pd.DataFrame
            Columns: gnss, svid, sbas, label, cn0_dbhz, used_in_fix,
            elevation, azimuth, has_almanac, has_ephemeris, carrier_frequency_hz
        """
        columns = ['gnss', 'svid', 'sbas', 'label', 'cn0_dbhz', 'used_in_fix',
                   'elevation', 'azimuth', 'has_almanac', 'has_ephemeris',
                   'carrier_frequency_hz']
        rows = []
        for (gnss_type, svid), sat in self.satellites.items():
            for label, s in sat.status.items():
                rows.append({
                    'gnss': gnss_type.value,
                    'svid': svid,
                    'sbas': s.sbas_type.value if gnss_type == GnssType.SBAS else None,
                    'label': label,
                    'cn0_dbhz': s.cn0_dbhz,
                    'used_in_fix': s.used_in_fix,
                    'elevation': s.elevation_degrees,
                    'azimuth': s.azimuth_degrees,
                    'has_almanac': s.has_almanac,
                    'has_ephemeris': s.has_ephemeris,
                    'carrier_frequency_hz': s.carrier_frequency_hz,
                })
        df = pd.DataFrame(rows, columns=columns)
        if not df.empty:
            df = df.sort_values(['gnss', 'svid', 'label']).reset_index(drop=True)
        return df


@dataclass(frozen=True)
class GnssClock:
    """Receiver hardware clock snapshot.

    GPS time in nanoseconds is ``time_nanos - (full_bias_nanos + bias_nanos)``.
    """
    time_nanos: int
    full_bias_nanos: int
    bias_nanos: float = 0.0
    leap_second: Optional[int] = None
    hardware_clock_discontinuity_count: int = 0


@dataclass(frozen=True)
class GnssMeasurement:
    """Raw pseudorange/carrier/Doppler measurement for one signal"""
    svid: int
    gnss_type: GnssType
    state: int = 0
    received_sv_time_nanos: int = 0
    time_offset_nanos: float = 0.0
    cn0_dbhz: float = NO_DATA
    pseudorange_rate_meters_per_second: float = 0.0
    accumulated_delta_range_state: int = 0
    accumulated_delta_range_meters: float = 0.0
    carrier_frequency_hz: Optional[float] = None

    @property
    def has_carrier_frequency(self) -> bool:
        return self.carrier_frequency_hz is not None


@dataclass
class ObservationEpoch:
    """A clock snapshot and the measurements collected with it"""
    clock: GnssClock
    measurements: List[GnssMeasurement] = field(default_factory=list)
    epoch_flag: int = EpochFlag.OK


@dataclass
class GpsEphemeris:
    """GPS LNAV broadcast ephemeris for one satellite.

    Times (toc, toe, tom) are seconds of the GPS week given by ``week``.
    Angles are in radians, rates in radians/second.
    """
    prn: int
    week: int
    toc: float
    toe: float
    tom: float = 0.0
    sv_clock_bias: float = 0.0
    sv_clock_drift: float = 0.0
    sv_clock_drift_rate: float = 0.0
    iode: int = 0
    iodc: int = 0
    crs: float = 0.0
    delta_n: float = 0.0
    m0: float = 0.0
    cuc: float = 0.0
    e: float = 0.0
    cus: float = 0.0
    root_of_a: float = 0.0
    cic: float = 0.0
    omega0: float = 0.0
    cis: float = 0.0
    i0: float = 0.0
    crc: float = 0.0
    omega: float = 0.0
    omega_dot: float = 0.0
    i_dot: float = 0.0
    l2_code: int = 0
    l2_flag: int = 0
    sv_accuracy_m: float = 0.0
    sv_health: int = 0
    tgd: float = 0.0
    fit_interval: float = 0.0
