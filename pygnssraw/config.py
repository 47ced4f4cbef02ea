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

"""
RINEX Header Configuration
==========================

Station, receiver and program metadata written to RINEX headers. Values
not known on a phone default to the conventional "unknown" strings.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List

from .core.constants import RINEX_VERSION

DEFAULT_PROGRAM = "pygnssraw"
DEFAULT_AGENCY = "unknown"
DEFAULT_MARKER_NAME = "UNKN"
DEFAULT_MARKER_TYPE = "SMARTPHONE"
UNKNOWN = "unknown"


@dataclass
class RinexHeaderConfig:
    """Metadata for RINEX OBS and NAV headers.

    Attributes
    ----------
    version : float
        RINEX format version
    program : str
        Program that created the file (PGM / RUN BY / DATE)
    agency : str
        Agency running the program, also used in OBSERVER / AGENCY
    marker_name, marker_type : str
        Site marker
    observer : str
        Observer name
    receiver_number, receiver_type, receiver_version : str
        REC # / TYPE / VERS fields
    antenna_number, antenna_type : str
        ANT # / TYPE fields
    approx_position_xyz : List[float]
        Approximate ECEF marker position in meters
    antenna_delta_hen : List[float]
        Antenna height, east and north eccentricities in meters
    glonass_slot_frequencies : Dict[str, int]
        GLONASS satellite ("R01") to FDMA frequency channel number
    glonass_code_phase_biases : Dict[str, float]
        GLONASS observation code ("C1C") to code-phase bias in meters
    """
    version: float = RINEX_VERSION
    program: str = DEFAULT_PROGRAM
    agency: str = DEFAULT_AGENCY
    marker_name: str = DEFAULT_MARKER_NAME
    marker_type: str = DEFAULT_MARKER_TYPE
    observer: str = UNKNOWN
    receiver_number: str = UNKNOWN
    receiver_type: str = UNKNOWN
    receiver_version: str = UNKNOWN
    antenna_number: str = UNKNOWN
    antenna_type: str = UNKNOWN
    approx_position_xyz: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    antenna_delta_hen: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    glonass_slot_frequencies: Dict[str, int] = field(default_factory=dict)
    glonass_code_phase_biases: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.approx_position_xyz) != 3:
            raise ValueError(f"approx_position_xyz needs 3 values: {self.approx_position_xyz}")
        if len(self.antenna_delta_hen) != 3:
            raise ValueError(f"antenna_delta_hen needs 3 values: {self.antenna_delta_hen}")

    @classmethod
    def from_dict(cls, config: dict) -> 'RinexHeaderConfig':
        """Configure from dictionary

        Unrecognised keys raise ValueError so that typos are not silently
        ignored.

        Example config:
        {
            'program': 'my-logger',
            'marker_name': 'ROOF',
            'receiver_type': 'Pixel 7',
            'approx_position_xyz': [4027893.0, 307045.0, 4919474.0]
        }
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown RINEX header settings: {sorted(unknown)}")
        return cls(**config)
