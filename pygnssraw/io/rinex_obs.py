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

"""RINEX 3.03 observation records from raw GNSS measurements.

Each raw measurement yields four observables on its RINEX band: pseudorange
(C), carrier phase (L), Doppler (D) and signal strength (S). The pseudorange
is only reported when the tracking state proves the transmit time is
resolved, and the carrier phase only when the accumulated delta range is
valid. Unavailable observables are written as blank fields so that columns
stay aligned.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Optional

from ..core.constants import (CLIGHT, LAMBDA_L1, MAX_PSEUDORANGE_M,
                              RINEX_OBS_WIDTH, EpochFlag)
from ..core.data_structures import GnssClock, GnssMeasurement, ObservationEpoch
from ..core.gnss_type import GnssType
from ..core.time import (check_week_crossover, format_gpst, gps_time_nanos,
                         gpst_fraction, reception_time_seconds,
                         transmit_time_seconds)
from ..gnss.measurement_state import (check_adr_state, check_sync_state,
                                      rinex_attribute, rinex_band)

logger = logging.getLogger(__name__)

SUPPORTED_EPOCH_FLAGS = (EpochFlag.OK, EpochFlag.POWER_FAILURE)

# Observable types in the order they are written
OBSERVABLES = ('C', 'L', 'D', 'S')

BLANK_FIELD = ' ' * RINEX_OBS_WIDTH


def wavelength(measurement: GnssMeasurement) -> float:
    """Carrier wavelength in meters, GPS L1 if no frequency is reported"""
    if measurement.has_carrier_frequency:
        return CLIGHT / measurement.carrier_frequency_hz
    return LAMBDA_L1


def observation_codes(measurement: GnssMeasurement) -> List[str]:
    """
    RINEX observation codes produced for a measurement, e.g.
    ['C1C', 'L1C', 'D1C', 'S1C']. Empty if the band cannot be determined.
    """
    band = rinex_band(measurement.carrier_frequency_hz)
    if band is None:
        return []
    attr = rinex_attribute(band, measurement.gnss_type, measurement.state)
    return [f"{obs}{band}{attr}" for obs in OBSERVABLES]


def collect_observation_types(measurements: Iterable[GnssMeasurement]) -> Dict[GnssType, List[str]]:
    """
    Observation types per constellation for the SYS / # / OBS TYPES header,
    in first-seen order
    """
    obs_types: Dict[GnssType, List[str]] = OrderedDict()
    for m in measurements:
        if m.gnss_type.to_rinex_char() is None:
            continue
        codes = obs_types.setdefault(m.gnss_type, [])
        for code in observation_codes(m):
            if code not in codes:
                codes.append(code)
    return obs_types


def pseudorange(clock: GnssClock, measurement: GnssMeasurement) -> Optional[float]:
    """
    Pseudorange in meters from reception and transmit times

    Returns
    -------
    Optional[float]
        Pseudorange, or None if the transmit time cannot be converted, the
        week crossover cannot be resolved or the range is implausible
    """
    t_tx = transmit_time_seconds(measurement.gnss_type, measurement.received_sv_time_nanos)
    if t_tx is None:
        return None
    t_rx = reception_time_seconds(clock, measurement.time_offset_nanos)
    tau = check_week_crossover(t_rx, t_tx)
    if tau is None:
        return None
    rho = tau * CLIGHT
    if rho > MAX_PSEUDORANGE_M:
        logger.debug(f"Pseudorange {rho:.3f} m for {measurement.gnss_type.value} "
                     f"{measurement.svid} exceeds {MAX_PSEUDORANGE_M:.0f} m")
        return None
    return rho


def process_measurement(clock: GnssClock, measurement: GnssMeasurement) -> Dict[str, Optional[float]]:
    """Process a raw measurement into RINEX observables.

    Computes the pseudorange (m), carrier phase (cycles), Doppler (Hz) and
    C/N0 (dB-Hz). The pseudorange is None unless the tracking state is
    synchronised; the carrier phase is None unless the ADR state is valid.

    Parameters
    ----------
    clock : GnssClock
        Receiver clock of the epoch
    measurement : GnssMeasurement
        Raw measurement

    Returns
    -------
    Dict[str, Optional[float]]
        Ordered mapping from observation code (e.g. 'C1C') to value, empty if
        the RINEX band cannot be determined
    """
    codes = observation_codes(measurement)
    if not codes:
        return {}
    code_c, code_l, code_d, code_s = codes
    lam = wavelength(measurement)

    observations: Dict[str, Optional[float]] = OrderedDict()
    observations[code_c] = pseudorange(clock, measurement) if check_sync_state(measurement) else None
    if check_adr_state(measurement):
        observations[code_l] = measurement.accumulated_delta_range_meters / lam
    else:
        observations[code_l] = None
    observations[code_d] = -measurement.pseudorange_rate_meters_per_second / lam
    observations[code_s] = measurement.cn0_dbhz
    return observations


def format_observation(value: Optional[float]) -> str:
    """F14.3 value followed by zero LLI and signal strength flags, or blanks

    Values that do not fit in 14 columns are blanked.
    """
    if value is None:
        return BLANK_FIELD
    text = f"{value:14.3f}"
    if len(text) > RINEX_OBS_WIDTH - 2:
        return BLANK_FIELD
    return text + "00"


def format_epoch_line(clock: GnssClock, epoch_flag: int, num_satellites: int) -> str:
    """Epoch record line: '> yyyy mm dd HH MM SS.sssssss  f nnn'"""
    gpst_ns = gps_time_nanos(clock)
    date_part = format_gpst(gpst_ns, "> %Y %m %d %H %M %S")
    return f"{date_part}.{gpst_fraction(gpst_ns, 7)}  {epoch_flag:1d}{num_satellites:3d}\n"


def format_observation_line(satellite_char: str, svid: int,
                            observations: Mapping[str, Optional[float]]) -> str:
    """Satellite line: system letter, 2-digit PRN and fixed-width observables"""
    body = "".join(format_observation(v) for v in observations.values())
    return f"{satellite_char}{svid:02d}{body}\n"


def encode_observation_epoch(epoch: ObservationEpoch, strict: bool = False) -> Optional[str]:
    """Write an observation epoch and its per-satellite measurements.

    Parameters
    ----------
    epoch : ObservationEpoch
        Clock snapshot, measurements and RINEX epoch flag
    strict : bool, optional
        If True, raise NotImplementedError for unsupported epoch flags
        instead of returning None. Default is False.

    Returns
    -------
    Optional[str]
        The RINEX text of the epoch, or None if the epoch flag is not OK or
        power failure (event records are not generated)

    Notes
    -----
    Measurements without a RINEX system letter or without a RINEX band are
    skipped and not counted in the epoch line.
    """
    if epoch.epoch_flag not in SUPPORTED_EPOCH_FLAGS:
        msg = f"RINEX event records are not implemented (epoch flag {epoch.epoch_flag})"
        if strict:
            raise NotImplementedError(msg)
        logger.warning(msg)
        return None

    lines: List[str] = []
    for m in epoch.measurements:
        satellite_char = m.gnss_type.to_rinex_char()
        if satellite_char is None:
            logger.warning(f"Skipping measurement of svid {m.svid} with unknown constellation")
            continue
        observations = process_measurement(epoch.clock, m)
        if not observations:
            logger.warning(f"Skipping {satellite_char}{m.svid:02d}: no RINEX band for "
                           f"carrier frequency {m.carrier_frequency_hz} Hz")
            continue
        lines.append(format_observation_line(satellite_char, m.svid, observations))

    return format_epoch_line(epoch.clock, epoch.epoch_flag, len(lines)) + "".join(lines)


def generate_observations(clock: GnssClock, measurements: Iterable[GnssMeasurement],
                          epoch_flag: int = EpochFlag.OK, strict: bool = False) -> Optional[str]:
    """Convenience wrapper around encode_observation_epoch()"""
    return encode_observation_epoch(ObservationEpoch(clock, list(measurements), epoch_flag),
                                    strict=strict)
