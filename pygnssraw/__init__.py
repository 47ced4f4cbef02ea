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
pygnssraw - Raw GNSS Status Aggregation and RINEX Encoding

A Python library that groups per-signal GNSS status reports from
multi-frequency receivers into satellites, and encodes raw clock,
measurement and GPS ephemeris data as RINEX 3.03 observation and
navigation text.
"""

__version__ = "1.0.0"
__author__ = "pygnssraw Development Team"
__title__ = "pygnssraw"
__description__ = "Raw GNSS status aggregation and RINEX 3.03 encoding"

from .config import RinexHeaderConfig
from .core import *
from .gnss import *
from .io import *
