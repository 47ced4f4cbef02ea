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

"""GPS Time Conversions for Raw Receiver Clocks

The receiver reports time as nanoseconds on an arbitrary hardware counter
plus a bias relative to true GPS time. The helpers here derive GPS week,
seconds of week and calendar strings from such a snapshot, and handle the
constellation-specific transmit time scales.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from .constants import (GPS_BDS_OFFSET, GPST0, NS_TO_S, S_TO_NS,
                        WEEK_CROSSOVER_TOLERANCE, WEEK_NANOS, WEEK_SECONDS)
from .data_structures import GnssClock
from .gnss_type import GnssType

__all__ = [
    'GPS_EPOCH', 'gps_time_nanos', 'gps_week_number', 'gps_seconds_of_week',
    'gps_week_tow', 'gpst_to_datetime', 'format_gpst', 'gpst_fraction',
    'format_gpst_seconds', 'format_gpst_epoch', 'bdst_to_gpst_seconds', 'transmit_time_seconds',
    'reception_time_seconds', 'check_week_crossover',
]

logger = logging.getLogger(__name__)

GPS_EPOCH = datetime(*GPST0)


def gps_time_nanos(clock: GnssClock) -> int:
    """
    GPS time of the clock snapshot in nanoseconds since the GPS epoch

    The sub-nanosecond part of the bias is rounded away so that the result
    stays an exact integer.
    """
    return clock.time_nanos - clock.full_bias_nanos - int(round(clock.bias_nanos))


def gps_week_number(clock: GnssClock) -> int:
    """GPS week number derived from the full bias of the clock"""
    return (-clock.full_bias_nanos) // WEEK_NANOS


def gps_seconds_of_week(clock: GnssClock) -> float:
    """GPS seconds of week of the clock snapshot"""
    week = gps_week_number(clock)
    return (gps_time_nanos(clock) - week * WEEK_NANOS) * NS_TO_S


def gps_week_tow(clock: GnssClock) -> Tuple[int, float]:
    """
    GPS week and time of week of the clock snapshot

    Returns:
    --------
    tuple : (week, tow)
    """
    return gps_week_number(clock), gps_seconds_of_week(clock)


def gpst_to_datetime(gpst_ns: int) -> datetime:
    """
    Calendar time of a GPS instant, truncated to the whole second

    Whole seconds are added to the GPS epoch with datetime arithmetic so the
    full nanosecond count never passes through a 32-bit or float conversion.
    """
    return GPS_EPOCH + timedelta(seconds=int(gpst_ns // S_TO_NS))


def format_gpst(gpst_ns: int, fmt: str = "%Y %m %d %H %M %S") -> str:
    """
    Format the whole-second part of a GPS instant

    Parameters:
    -----------
    gpst_ns : int
        GPS time in nanoseconds since the GPS epoch
    fmt : str
        strftime format string

    Returns:
    --------
    str
        Formatted calendar time
    """
    return gpst_to_datetime(gpst_ns).strftime(fmt)


def gpst_fraction(gpst_ns: int, digits: int = 6) -> str:
    """
    Sub-second part of a GPS instant as a fixed-width decimal fraction

    The fraction is truncated, not rounded, so it can never carry into the
    seconds already rendered by format_gpst().
    """
    if not 1 <= digits <= 9:
        raise ValueError(f"Fraction digits must be in range [1, 9]: {digits}")
    frac_ns = int(gpst_ns % S_TO_NS)
    return f"{frac_ns // 10 ** (9 - digits):0{digits}d}"


def format_gpst_seconds(gpst_ns: int, digits: int = 6) -> str:
    """Seconds of minute with fraction, e.g. '19.658000'"""
    return f"{format_gpst(gpst_ns, '%S')}.{gpst_fraction(gpst_ns, digits)}"


def format_gpst_epoch(gpst_ns: int, digits: int = 6) -> str:
    """Calendar epoch with fraction, e.g. '1980 01 06 00 00 00.000000'"""
    return f"{format_gpst(gpst_ns)}.{gpst_fraction(gpst_ns, digits)}"


def bdst_to_gpst_seconds(bdst_seconds: float) -> float:
    """Convert BeiDou time to GPS time by adding the BDST-GPST leap offset"""
    return bdst_seconds + GPS_BDS_OFFSET


def transmit_time_seconds(gnss_type: GnssType, received_sv_time_nanos: int) -> Optional[float]:
    """
    Signal transmit time as GPS seconds of week

    GPS, QZSS, Galileo and SBAS share the GPS time scale; BeiDou is shifted
    by the BDST-GPST offset. GLONASS reports time of day, whose conversion to
    time of week is not supported, so None is returned.

    Parameters:
    -----------
    gnss_type : GnssType
        Constellation of the measurement
    received_sv_time_nanos : int
        Received satellite time in nanoseconds

    Returns:
    --------
    Optional[float]
        Transmit time in seconds, or None if not convertible
    """
    if gnss_type == GnssType.GLONASS:
        logger.debug("GLONASS time of day to time of week conversion is not supported")
        return None
    t_tx = received_sv_time_nanos * NS_TO_S
    if gnss_type == GnssType.BEIDOU:
        return bdst_to_gpst_seconds(t_tx)
    return t_tx


def reception_time_seconds(clock: GnssClock, time_offset_nanos: float) -> float:
    """Measurement reception time as GPS seconds of week"""
    return gps_seconds_of_week(clock) - time_offset_nanos * NS_TO_S


def check_week_crossover(t_rx: float, t_tx: float) -> Optional[float]:
    """
    Propagation time corrected for week rollover

    Parameters:
    -----------
    t_rx : float
        Reception time in seconds of week
    t_tx : float
        Transmit time in seconds of week

    Returns:
    --------
    Optional[float]
        Propagation time in seconds, or None if the residual after removing
        whole weeks is still larger than the crossover tolerance
    """
    tau = t_rx - t_tx
    if abs(tau) > WEEK_SECONDS / 2:
        del_sec = round(tau / WEEK_SECONDS) * WEEK_SECONDS
        rho_sec = tau - del_sec
        if abs(rho_sec) > WEEK_CROSSOVER_TOLERANCE:
            logger.debug(f"Week crossover residual {rho_sec:.3f} s exceeds tolerance")
            return None
        tau = rho_sec
    return tau
