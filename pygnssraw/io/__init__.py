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

"""RINEX 3.03 writers for pygnssraw.

The functions return text only; writing it to a file is left to the
caller.
"""

from .rinex_header import (generate_navigation_header,
                           generate_observation_header, end_of_header_line,
                           run_by_line, version_type_line)
from .rinex_nav import encode_navigation_record, encode_navigation_records
from .rinex_obs import (collect_observation_types, encode_observation_epoch,
                        format_observation, generate_observations,
                        observation_codes, process_measurement)

__all__ = [
    'generate_observation_header', 'generate_navigation_header',
    'version_type_line', 'run_by_line', 'end_of_header_line',
    'encode_navigation_record', 'encode_navigation_records',
    'encode_observation_epoch', 'generate_observations', 'process_measurement',
    'observation_codes', 'collect_observation_types', 'format_observation',
]
