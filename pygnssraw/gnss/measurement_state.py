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

"""Validity of raw measurements from their tracking and ADR state bits.

A pseudorange is only meaningful once the receiver has resolved the full
transmit time of the signal, which each constellation signals through a
different combination of tracking state bits. The required bits are kept in
SYNC_STATE_RULES, keyed by constellation and RINEX band, so each rule can be
checked on its own.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..core.constants import (ADR_STATE_VALID, FREQ_F0, STATE_BIT_SYNC,
                              STATE_CODE_LOCK, STATE_GAL_E1B_PAGE_SYNC,
                              STATE_GAL_E1BC_CODE_LOCK,
                              STATE_GAL_E1C_2ND_CODE_LOCK,
                              STATE_GLO_STRING_SYNC, STATE_GLO_TOD_DECODED,
                              STATE_MSEC_AMBIGUOUS, STATE_NAMES,
                              STATE_SBAS_SYNC, STATE_SUBFRAME_SYNC,
                              STATE_SYMBOL_SYNC, STATE_TOW_DECODED)
from ..core.data_structures import GnssMeasurement
from ..core.gnss_type import GnssType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncRule:
    """Tracking state requirement for a valid pseudorange.

    Attributes
    ----------
    required : int
        Bits that must all be set
    forbidden : int
        Bits that must all be clear
    override : Optional[Callable[[int], 'SyncRule']]
        If given, called with the state to select the rule actually applied
    """
    required: int = 0
    forbidden: int = STATE_MSEC_AMBIGUOUS
    override: Optional[Callable[[int], 'SyncRule']] = None

    def resolve(self, state: int) -> 'SyncRule':
        if self.override is not None:
            return self.override(state)
        return self

    def missing_bits(self, state: int) -> int:
        """Required bits not set in state"""
        return self.required & ~state

    def offending_bits(self, state: int) -> int:
        """Forbidden bits set in state"""
        return self.forbidden & state

    def is_satisfied(self, state: int) -> bool:
        rule = self.resolve(state)
        return rule.missing_bits(state) == 0 and rule.offending_bits(state) == 0


TOW_SYNC = STATE_CODE_LOCK | STATE_TOW_DECODED | STATE_BIT_SYNC | STATE_SUBFRAME_SYNC

GPS_RULE = SyncRule(TOW_SYNC)
QZSS_RULE = SyncRule(TOW_SYNC)
BEIDOU_RULE = SyncRule(TOW_SYNC)
SBAS_RULE = SyncRule(STATE_CODE_LOCK | STATE_TOW_DECODED | STATE_BIT_SYNC
                     | STATE_SYMBOL_SYNC | STATE_SBAS_SYNC)
GLONASS_RULE = SyncRule(STATE_CODE_LOCK | STATE_SYMBOL_SYNC | STATE_BIT_SYNC
                        | STATE_GLO_TOD_DECODED | STATE_GLO_STRING_SYNC)
UNKNOWN_RULE = SyncRule(STATE_CODE_LOCK | STATE_TOW_DECODED)

# Galileo E1: with the E1C secondary code lock the pilot alone resolves the
# time, otherwise the E1B data channel must be page synchronised
GALILEO_E1C_RULE = SyncRule(STATE_GAL_E1BC_CODE_LOCK | STATE_GAL_E1C_2ND_CODE_LOCK)
GALILEO_E1B_RULE = SyncRule(STATE_GAL_E1BC_CODE_LOCK | STATE_TOW_DECODED
                            | STATE_BIT_SYNC | STATE_GAL_E1B_PAGE_SYNC)
GALILEO_E5_RULE = SyncRule(TOW_SYNC)


def galileo_e1_rule(state: int) -> SyncRule:
    """Select the Galileo E1 rule from the E1C secondary code lock bit"""
    if state & STATE_GAL_E1C_2ND_CODE_LOCK:
        return GALILEO_E1C_RULE
    return GALILEO_E1B_RULE


GALILEO_E1_RULE = SyncRule(override=galileo_e1_rule)

# Keyed by (constellation, RINEX band); band None applies to every band
SYNC_STATE_RULES: Dict[Tuple[GnssType, Optional[int]], SyncRule] = {
    (GnssType.NAVSTAR, None): GPS_RULE,
    (GnssType.SBAS, None): SBAS_RULE,
    (GnssType.GLONASS, None): GLONASS_RULE,
    (GnssType.QZSS, None): QZSS_RULE,
    (GnssType.BEIDOU, None): BEIDOU_RULE,
    (GnssType.GALILEO, 1): GALILEO_E1_RULE,
    (GnssType.GALILEO, 5): GALILEO_E5_RULE,
    (GnssType.UNKNOWN, None): UNKNOWN_RULE,
}


def rinex_band(carrier_frequency_hz: Optional[float]) -> Optional[int]:
    """Obtain the RINEX frequency band from a carrier frequency.

    The frequency is expressed as a multiple of the 10.23 MHz fundamental
    frequency. A missing frequency is assumed to be GPS L1.

    Parameters
    ----------
    carrier_frequency_hz : Optional[float]
        Carrier frequency in Hz, or None

    Returns
    -------
    Optional[int]
        RINEX band (1, 2 or 5), or None if it cannot be determined
    """
    if carrier_frequency_hz is None:
        ifreq = 154
    else:
        ifreq = int(np.round(carrier_frequency_hz / FREQ_F0))

    if ifreq >= 154:   # GPS/QZSS L1, Galileo E1, GLONASS G1 (156)
        return 1
    if ifreq == 115:   # GPS/QZSS L5, Galileo E5a, IRNSS L5
        return 5
    if ifreq == 153:   # BeiDou B1I
        return 2
    return None


def rinex_attribute(band: int, gnss_type: GnssType, state: int) -> str:
    """Generate the RINEX 3 attribute character for a given band.

    Defaults to 'C'. Galileo E1 uses 'B' when only the E1B data channel is
    page synchronised, band 5 uses 'Q' and BeiDou B1I uses 'I'.
    """
    attr = 'C'

    if band == 1 and gnss_type == GnssType.GALILEO:
        if not state & STATE_GAL_E1C_2ND_CODE_LOCK and state & STATE_GAL_E1B_PAGE_SYNC:
            attr = 'B'

    if band == 5:
        attr = 'Q'

    if band == 2 and gnss_type == GnssType.BEIDOU:
        attr = 'I'

    return attr


def sync_rule(gnss_type: GnssType, band: Optional[int]) -> Optional[SyncRule]:
    """Rule for a constellation and band, or None if there is none"""
    rule = SYNC_STATE_RULES.get((gnss_type, band))
    if rule is None:
        rule = SYNC_STATE_RULES.get((gnss_type, None))
    return rule


def _describe(bits: int) -> str:
    return ", ".join(name for bit, name in STATE_NAMES.items() if bits & bit)


def check_sync_state(measurement: GnssMeasurement) -> bool:
    """
    Check if the pseudorange of a measurement is valid from its sync bits

    Returns:
    --------
    bool
        True if the constellation/band rule is satisfied
    """
    state = measurement.state
    band = rinex_band(measurement.carrier_frequency_hz)
    rule = sync_rule(measurement.gnss_type, band)
    if rule is None:
        logger.debug(f"No sync rule for {measurement.gnss_type.value} band {band}")
        return False

    rule = rule.resolve(state)
    missing = rule.missing_bits(state)
    if missing:
        logger.debug(f"State [0x{state:04x} {state:017b}] is missing {_describe(missing)}")
        return False
    offending = rule.offending_bits(state)
    if offending:
        logger.debug(f"State [0x{state:04x} {state:017b}] has {_describe(offending)}")
        return False
    return True


def check_adr_state(measurement: GnssMeasurement) -> bool:
    """Check if the accumulated delta range of a measurement is valid"""
    state = measurement.accumulated_delta_range_state
    if not state & ADR_STATE_VALID:
        logger.debug(f"ADR state [0x{state:02x} {state:08b}] has ADR_STATE_VALID not set")
        return False
    return True
