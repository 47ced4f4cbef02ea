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

"""GNSS Constants, Raw Measurement Flags and RINEX Parameters"""

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)

# Fundamental GNSS clock rate
FREQ_F0 = 10.23E6     # fundamental frequency (Hz)

# GPS frequencies
FREQ_L1 = 1.57542E9   # L1 frequency (Hz)
FREQ_L2 = 1.22760E9   # L2 frequency (Hz)
FREQ_L5 = 1.17645E9   # L5 frequency (Hz)

# Default wavelength when a measurement carries no carrier frequency
LAMBDA_L1 = CLIGHT / (154 * FREQ_F0)

# Unit conversions
S_TO_NS = 1_000_000_000
NS_TO_S = 1e-9
NS_TO_US = 1e-3
NS_TO_MS = 1e-6
HZ_TO_MHZ = 1e-6

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]   # GPS time reference epoch
WEEK_SECONDS = 7 * 24 * 60 * 60  # seconds per week
WEEK_NANOS = WEEK_SECONDS * S_TO_NS
GPS_BDS_OFFSET = 14              # BDST to GPST leap seconds difference

# Observation limits
MAX_PSEUDORANGE_M = 40e6         # pseudoranges above this are not reported (m)
WEEK_CROSSOVER_TOLERANCE = 10.0  # max residual after week rollover (s)

# Carrier frequency classification
CF_TOLERANCE_MHZ = 1.0           # carrier frequency match tolerance (MHz)
CF_UNKNOWN = "unknown"           # frequency present but not recognised
CF_UNSUPPORTED = "unsupported"   # no carrier frequency available

# Signal strength sentinel
NO_DATA = 0.0

# Measurement tracking state bits
STATE_UNKNOWN = 0
STATE_CODE_LOCK = 1 << 0
STATE_BIT_SYNC = 1 << 1
STATE_SUBFRAME_SYNC = 1 << 2
STATE_TOW_DECODED = 1 << 3
STATE_MSEC_AMBIGUOUS = 1 << 4
STATE_SYMBOL_SYNC = 1 << 5
STATE_GLO_STRING_SYNC = 1 << 6
STATE_GLO_TOD_DECODED = 1 << 7
STATE_BDS_D2_BIT_SYNC = 1 << 8
STATE_BDS_D2_SUBFRAME_SYNC = 1 << 9
STATE_GAL_E1BC_CODE_LOCK = 1 << 10
STATE_GAL_E1C_2ND_CODE_LOCK = 1 << 11
STATE_GAL_E1B_PAGE_SYNC = 1 << 12
STATE_SBAS_SYNC = 1 << 13
STATE_TOW_KNOWN = 1 << 14
STATE_GLO_TOD_KNOWN = 1 << 15
STATE_2ND_CODE_LOCK = 1 << 16

STATE_NAMES = {
    STATE_CODE_LOCK: "STATE_CODE_LOCK",
    STATE_BIT_SYNC: "STATE_BIT_SYNC",
    STATE_SUBFRAME_SYNC: "STATE_SUBFRAME_SYNC",
    STATE_TOW_DECODED: "STATE_TOW_DECODED",
    STATE_MSEC_AMBIGUOUS: "STATE_MSEC_AMBIGUOUS",
    STATE_SYMBOL_SYNC: "STATE_SYMBOL_SYNC",
    STATE_GLO_STRING_SYNC: "STATE_GLO_STRING_SYNC",
    STATE_GLO_TOD_DECODED: "STATE_GLO_TOD_DECODED",
    STATE_BDS_D2_BIT_SYNC: "STATE_BDS_D2_BIT_SYNC",
    STATE_BDS_D2_SUBFRAME_SYNC: "STATE_BDS_D2_SUBFRAME_SYNC",
    STATE_GAL_E1BC_CODE_LOCK: "STATE_GAL_E1BC_CODE_LOCK",
    STATE_GAL_E1C_2ND_CODE_LOCK: "STATE_GAL_E1C_2ND_CODE_LOCK",
    STATE_GAL_E1B_PAGE_SYNC: "STATE_GAL_E1B_PAGE_SYNC",
    STATE_SBAS_SYNC: "STATE_SBAS_SYNC",
    STATE_TOW_KNOWN: "STATE_TOW_KNOWN",
    STATE_GLO_TOD_KNOWN: "STATE_GLO_TOD_KNOWN",
    STATE_2ND_CODE_LOCK: "STATE_2ND_CODE_LOCK",
}

# Accumulated delta range state bits
ADR_STATE_UNKNOWN = 0
ADR_STATE_VALID = 1 << 0
ADR_STATE_RESET = 1 << 1
ADR_STATE_CYCLE_SLIP = 1 << 2
ADR_STATE_HALF_CYCLE_RESOLVED = 1 << 3
ADR_STATE_HALF_CYCLE_REPORTED = 1 << 4

# RINEX layout
RINEX_VERSION = 3.03
RINEX_DATA_WIDTH = 60            # width of the header data zone
RINEX_OBS_WIDTH = 16             # F14.3 value plus LLI and signal strength
RINEX_MAX_OBS_TYPES_PER_LINE = 13


class EpochFlag:
    """Epoch flags as defined by RINEX v3.03"""
    OK = 0
    POWER_FAILURE = 1
    MOVING_ANTENNA = 2
    NEW_SITE = 3
    HEADER_INFORMATION = 4
    EXTERNAL_EVENT = 5
    CYCLE_SLIP = 6
