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

"""RINEX 3.03 header records.

Every header line is a 60 column data zone followed by the record label in
columns 61-80. The builders here return complete lines including the
trailing newline so headers can be assembled by concatenation.
"""

from datetime import datetime, timezone
from typing import List, Mapping, Optional, Sequence

from ..config import RinexHeaderConfig
from ..core.constants import RINEX_DATA_WIDTH, RINEX_MAX_OBS_TYPES_PER_LINE
from ..core.data_structures import GnssClock
from ..core.gnss_type import GnssType
from ..core.time import format_gpst, gps_time_nanos, gpst_fraction

OBSERVATION_DATA = "OBSERVATION DATA"
NAVIGATION_DATA = "N: GNSS NAV DATA"
MIXED_SYSTEM = "M: MIXED"

# Entries per line of the GLONASS records
GLONASS_SLOTS_PER_LINE = 8
GLONASS_BIASES_PER_LINE = 4


def header_line(data: str, label: str) -> str:
    """Pad the data zone to 60 columns and append the label"""
    if len(data) > RINEX_DATA_WIDTH:
        raise ValueError(f"Header data for '{label}' exceeds {RINEX_DATA_WIDTH} columns: '{data}'")
    return f"{data:<{RINEX_DATA_WIDTH}s}{label}\n"


def _field(value: str, width: int) -> str:
    """Left-justified text field, truncated to its width"""
    return f"{value:<{width}.{width}s}"


def version_type_line(version: float, file_type: str, system: str = MIXED_SYSTEM) -> str:
    """RINEX VERSION / TYPE: F9.2, 11X, A20 file type, A20 satellite system"""
    data = f"{version:9.2f}{'':11s}{_field(file_type, 20)}{_field(system, 20)}"
    return header_line(data, "RINEX VERSION / TYPE")


def run_by_line(run_at: datetime, program: str, agency: str) -> str:
    """
    PGM / RUN BY / DATE with the creation time in UTC

    A naive run_at is taken to be UTC already.
    """
    if run_at.tzinfo is not None:
        run_at = run_at.astimezone(timezone.utc)
    date = run_at.strftime("%Y%m%d %H%M%S") + " UTC"
    return header_line(f"{_field(program, 20)}{_field(agency, 20)}{_field(date, 20)}",
                       "PGM / RUN BY / DATE")


def end_of_header_line() -> str:
    return header_line("", "END OF HEADER")


def marker_name_line(marker_name: str) -> str:
    return header_line(_field(marker_name, 60), "MARKER NAME")


def marker_type_line(marker_type: str) -> str:
    return header_line(_field(marker_type, 20), "MARKER TYPE")


def observer_agency_line(observer: str, agency: str) -> str:
    return header_line(f"{_field(observer, 20)}{_field(agency, 40)}", "OBSERVER / AGENCY")


def receiver_line(number: str, receiver_type: str, version: str) -> str:
    return header_line(f"{_field(number, 20)}{_field(receiver_type, 20)}{_field(version, 20)}",
                       "REC # / TYPE / VERS")


def antenna_line(number: str, antenna_type: str) -> str:
    return header_line(f"{_field(number, 20)}{_field(antenna_type, 20)}", "ANT # / TYPE")


def _triplet(values: Sequence[float]) -> str:
    return "".join(f"{v:14.4f}" for v in values)


def approx_position_line(xyz: Sequence[float]) -> str:
    """APPROX POSITION XYZ: 3F14.4 ECEF meters"""
    return header_line(_triplet(xyz), "APPROX POSITION XYZ")


def antenna_delta_line(hen: Sequence[float]) -> str:
    """ANTENNA: DELTA H/E/N: 3F14.4 meters"""
    return header_line(_triplet(hen), "ANTENNA: DELTA H/E/N")


def obs_types_lines(obs_types: Mapping[GnssType, Sequence[str]]) -> str:
    """SYS / # / OBS TYPES records.

    Parameters
    ----------
    obs_types : Mapping[GnssType, Sequence[str]]
        Observation codes per constellation, e.g. {GnssType.NAVSTAR:
        ['C1C', 'L1C', 'D1C', 'S1C']}. Constellations without a RINEX
        character or without codes are skipped.

    Returns
    -------
    str
        One record per 13 observation types; continuation records leave the
        system and count columns blank.
    """
    lines = []
    for gnss_type, codes in obs_types.items():
        sys_char = gnss_type.to_rinex_char()
        if sys_char is None or not codes:
            continue
        for i in range(0, len(codes), RINEX_MAX_OBS_TYPES_PER_LINE):
            chunk = codes[i:i + RINEX_MAX_OBS_TYPES_PER_LINE]
            prefix = f"{sys_char}  {len(codes):3d}" if i == 0 else " " * 6
            body = "".join(f" {code:3s}" for code in chunk)
            lines.append(header_line(prefix + body, "SYS / # / OBS TYPES"))
    return "".join(lines)


def time_of_first_obs_line(clock: GnssClock, time_system: str = "GPS") -> str:
    """TIME OF FIRST OBS: 5I6, F13.7, 5X, A3"""
    gpst_ns = gps_time_nanos(clock)
    year, month, day, hour, minute, second = (int(v) for v in format_gpst(gpst_ns).split())
    data = "".join(f"{v:6d}" for v in (year, month, day, hour, minute))
    data += f"{second:5d}.{gpst_fraction(gpst_ns, 7)}{'':5s}{time_system:3s}"
    return header_line(data, "TIME OF FIRST OBS")


def glonass_slot_frequency_lines(slots: Mapping[str, int]) -> str:
    """GLONASS SLOT / FRQ # records.

    Eight "Rnn kk" entries per line after the I3 satellite count;
    continuation lines are indented by four blanks. Empty if no slots are
    given.
    """
    if not slots:
        return ""
    entries = [f"{sat:3s} {frq:2d} " for sat, frq in slots.items()]
    lines = []
    for i in range(0, len(entries), GLONASS_SLOTS_PER_LINE):
        prefix = f"{len(slots):3d} " if i == 0 else " " * 4
        data = prefix + "".join(entries[i:i + GLONASS_SLOTS_PER_LINE])
        lines.append(header_line(data, "GLONASS SLOT / FRQ #"))
    return "".join(lines)


def glonass_code_phase_bias_lines(biases: Mapping[str, float]) -> str:
    """GLONASS COD/PHS/BIS# records, blank data zone if no biases are known"""
    if not biases:
        return header_line("", "GLONASS COD/PHS/BIS#")
    entries = [f" {code:3s} {bias:8.3f}" for code, bias in biases.items()]
    lines = []
    for i in range(0, len(entries), GLONASS_BIASES_PER_LINE):
        lines.append(header_line("".join(entries[i:i + GLONASS_BIASES_PER_LINE]),
                                 "GLONASS COD/PHS/BIS#"))
    return "".join(lines)


def ionospheric_corr_lines(alpha: Optional[Sequence[float]],
                           beta: Optional[Sequence[float]]) -> str:
    """IONOSPHERIC CORR records for the GPS Klobuchar alpha and beta terms"""
    lines = []
    for name, params in (("GPSA", alpha), ("GPSB", beta)):
        if params is None:
            continue
        if len(params) != 4:
            raise ValueError(f"{name} needs 4 Klobuchar parameters, got {len(params)}")
        data = f"{name} " + "".join(f"{v:12.4E}" for v in params)
        lines.append(header_line(data, "IONOSPHERIC CORR"))
    return "".join(lines)


def leap_seconds_line(leap_seconds: int) -> str:
    return header_line(f"{leap_seconds:6d}", "LEAP SECONDS")


def generate_observation_header(obs_types: Mapping[GnssType, Sequence[str]],
                                first_epoch: GnssClock,
                                run_at: datetime,
                                config: Optional[RinexHeaderConfig] = None) -> str:
    """Build the header of a RINEX observation file.

    Parameters
    ----------
    obs_types : Mapping[GnssType, Sequence[str]]
        Observation codes per constellation, see
        rinex_obs.collect_observation_types()
    first_epoch : GnssClock
        Clock of the first epoch written
    run_at : datetime
        File creation time
    config : Optional[RinexHeaderConfig]
        Station and receiver metadata, defaults if None

    Returns
    -------
    str
        Header text ending with END OF HEADER
    """
    if config is None:
        config = RinexHeaderConfig()
    parts: List[str] = [
        version_type_line(config.version, OBSERVATION_DATA),
        run_by_line(run_at, config.program, config.agency),
        marker_name_line(config.marker_name),
        marker_type_line(config.marker_type),
        observer_agency_line(config.observer, config.agency),
        receiver_line(config.receiver_number, config.receiver_type, config.receiver_version),
        antenna_line(config.antenna_number, config.antenna_type),
        approx_position_line(config.approx_position_xyz),
        antenna_delta_line(config.antenna_delta_hen),
        obs_types_lines(obs_types),
        time_of_first_obs_line(first_epoch),
        glonass_slot_frequency_lines(config.glonass_slot_frequencies),
        glonass_code_phase_bias_lines(config.glonass_code_phase_biases),
        end_of_header_line(),
    ]
    return "".join(parts)


def generate_navigation_header(run_at: datetime,
                               config: Optional[RinexHeaderConfig] = None,
                               ion_alpha: Optional[Sequence[float]] = None,
                               ion_beta: Optional[Sequence[float]] = None,
                               leap_seconds: Optional[int] = None) -> str:
    """Build the header of a RINEX navigation file.

    Ionospheric parameters and leap seconds are written only when given.
    """
    if config is None:
        config = RinexHeaderConfig()
    parts: List[str] = [
        version_type_line(config.version, NAVIGATION_DATA),
        run_by_line(run_at, config.program, config.agency),
        ionospheric_corr_lines(ion_alpha, ion_beta),
    ]
    if leap_seconds is not None:
        parts.append(leap_seconds_line(leap_seconds))
    parts.append(end_of_header_line())
    return "".join(parts)
