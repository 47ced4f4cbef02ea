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

"""RINEX 3.03 GPS navigation message records"""

import logging
from typing import Iterable, List

from ..core.constants import S_TO_NS, WEEK_NANOS
from ..core.data_structures import GpsEphemeris
from ..core.gnss_type import GnssType
from ..core.time import format_gpst

logger = logging.getLogger(__name__)

# Indentation of the broadcast orbit lines (4X)
ORBIT_INDENT = " " * 4


def format_nav_value(value: float) -> str:
    """D19.12 field written with an 'E' exponent, e.g. '+1.234567890123E-05'"""
    return f"{float(value):+.12E}"


def _row(values: Iterable[float]) -> str:
    return "".join(format_nav_value(v) for v in values)


def toc_epoch(ephemeris: GpsEphemeris) -> str:
    """Clock reference time as 'yyyy mm dd HH MM SS'

    A TOC outside the week is not checked and rolls into the adjacent week.
    """
    return format_gpst(ephemeris.week * WEEK_NANOS + int(round(ephemeris.toc * S_TO_NS)))


def encode_navigation_record(ephemeris: GpsEphemeris) -> str:
    """Write one GPS ephemeris as a RINEX navigation record.

    Parameters
    ----------
    ephemeris : GpsEphemeris
        Broadcast ephemeris; toc, toe and tom are seconds of ``week``

    Returns
    -------
    str
        Eight lines: the SV / epoch / clock line followed by the seven
        broadcast orbit lines
    """
    eph = ephemeris
    sys_char = GnssType.NAVSTAR.to_rinex_char()
    lines: List[str] = [
        f"{sys_char}{eph.prn:02d} {toc_epoch(eph)}"
        + _row((eph.sv_clock_bias, eph.sv_clock_drift, eph.sv_clock_drift_rate)),
    ]
    orbits = [
        (eph.iode, eph.crs, eph.delta_n, eph.m0),
        (eph.cuc, eph.e, eph.cus, eph.root_of_a),
        (eph.toe, eph.cic, eph.omega0, eph.cis),
        (eph.i0, eph.crc, eph.omega, eph.omega_dot),
        (eph.i_dot, eph.l2_code, eph.week, eph.l2_flag),
        (eph.sv_accuracy_m, eph.sv_health, eph.tgd, eph.iodc),
        (eph.tom, eph.fit_interval),
    ]
    lines.extend(ORBIT_INDENT + _row(orbit) for orbit in orbits)
    logger.debug(f"Encoded navigation record for G{eph.prn:02d} week {eph.week} toc {eph.toc}")
    return "\n".join(lines) + "\n"


def encode_navigation_records(ephemerides: Iterable[GpsEphemeris]) -> str:
    """Concatenate the records of several ephemerides"""
    return "".join(encode_navigation_record(eph) for eph in ephemerides)
