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

"""Constellation and SBAS operator identification.

The constellation codes follow the platform GNSS status numbering:

- 0: unknown
- 1: GPS (NAVSTAR)
- 2: SBAS
- 3: GLONASS
- 4: QZSS
- 5: BeiDou
- 6: Galileo
- 7: IRNSS/NavIC
"""

from enum import Enum
from typing import Optional


class GnssType(Enum):
    """Global Navigation Satellite System enumeration"""
    NAVSTAR = "NAVSTAR"
    GLONASS = "GLONASS"
    GALILEO = "GALILEO"
    QZSS = "QZSS"
    BEIDOU = "BEIDOU"
    IRNSS = "IRNSS"
    SBAS = "SBAS"
    UNKNOWN = "UNKNOWN"

    def to_rinex_char(self) -> Optional[str]:
        """RINEX satellite system identifier, or None if unknown"""
        return GNSS_TO_RINEX_CHAR.get(self)

    @classmethod
    def from_constellation_type(cls, constellation_type: int) -> 'GnssType':
        """Map a platform constellation code to GnssType"""
        return CONSTELLATION_TO_GNSS.get(constellation_type, cls.UNKNOWN)

    @classmethod
    def from_rinex_char(cls, c: str) -> 'GnssType':
        """Map a RINEX satellite system character to GnssType"""
        return RINEX_CHAR_TO_GNSS.get(c.upper(), cls.UNKNOWN)

    @classmethod
    def from_string(cls, name: str) -> Optional['GnssType']:
        """Parse the enum name, returning None if unrecognised"""
        try:
            return cls[name]
        except KeyError:
            return None


class SbasType(Enum):
    """SBAS operator enumeration"""
    EGNOS = "EGNOS"
    WAAS = "WAAS"
    GAGAN = "GAGAN"
    MSAS = "MSAS"
    SDCM = "SDCM"
    SNAS = "SNAS"        # now known as BDSBAS
    SOUTHPAN = "SOUTHPAN"
    UNKNOWN = "UNKNOWN"


GNSS_TO_RINEX_CHAR = {
    GnssType.NAVSTAR: 'G',
    GnssType.GLONASS: 'R',
    GnssType.GALILEO: 'E',
    GnssType.QZSS: 'J',
    GnssType.BEIDOU: 'C',
    GnssType.IRNSS: 'I',
    GnssType.SBAS: 'S',
}

RINEX_CHAR_TO_GNSS = {v: k for k, v in GNSS_TO_RINEX_CHAR.items()}

CONSTELLATION_TO_GNSS = {
    0: GnssType.UNKNOWN,
    1: GnssType.NAVSTAR,
    2: GnssType.SBAS,
    3: GnssType.GLONASS,
    4: GnssType.QZSS,
    5: GnssType.BEIDOU,
    6: GnssType.GALILEO,
    7: GnssType.IRNSS,
}

# SBAS PRN assignments per operator
SBAS_PRNS = {
    SbasType.EGNOS: (120, 123, 126, 136),
    SbasType.SDCM: (125, 140, 141),
    SbasType.SNAS: (130, 143, 144),
    SbasType.WAAS: (131, 133, 135, 138),
    SbasType.GAGAN: (127, 128, 139),
    SbasType.MSAS: (129, 137),
    SbasType.SOUTHPAN: (122,),
}

_PRN_TO_SBAS = {prn: sbas for sbas, prns in SBAS_PRNS.items() for prn in prns}


def sbas_type_from_svid(svid: int) -> SbasType:
    """Get the SBAS operator broadcasting with the given PRN.

    Parameters
    ----------
    svid : int
        SBAS PRN (120-158)

    Returns
    -------
    SbasType
        Operator, or SbasType.UNKNOWN for unassigned PRNs
    """
    return _PRN_TO_SBAS.get(svid, SbasType.UNKNOWN)
