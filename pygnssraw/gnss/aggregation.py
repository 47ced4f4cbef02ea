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

"""Grouping of per-signal status reports into satellites.

Multi-frequency receivers report one status per signal, so a satellite
tracked on L1 and L5 appears twice in a snapshot. aggregate() folds such a
snapshot into one Satellite per (constellation, svid), each holding its
signals keyed by carrier label, and derives the summary counters and
capability flags shown to the user.
"""

import logging
from typing import Dict, Iterable, List

from ..core.constants import CF_UNKNOWN, CF_UNSUPPORTED
from ..core.data_structures import (Satellite, SatelliteGroup,
                                    SatelliteKey, SatelliteMetadata,
                                    SignalStatus)
from ..core.gnss_type import GnssType, SbasType
from .frequency import carrier_frequency_label_for_status, is_primary_carrier

logger = logging.getLogger(__name__)


def create_gnss_satellite_key(status: SignalStatus) -> str:
    """Key identifying a satellite by svid and constellation (and SBAS operator)"""
    if status.gnss_type == GnssType.SBAS:
        return f"{status.svid} {status.gnss_type.value} {status.sbas_type.value}"
    return f"{status.svid} {status.gnss_type.value}"


def create_gnss_status_key(status: SignalStatus, label: str) -> str:
    """Key identifying a single signal of a satellite by its carrier label"""
    return f"{create_gnss_satellite_key(status)} {label}"


def _is_known_label(label: str) -> bool:
    return label not in (CF_UNKNOWN, CF_UNSUPPORTED)


def aggregate(signals: Iterable[SignalStatus], cf_supported: bool = True) -> SatelliteGroup:
    """Group a snapshot of signal statuses into satellites.

    Parameters
    ----------
    signals : Iterable[SignalStatus]
        All signal statuses of one snapshot
    cf_supported : bool, optional
        Whether the receiver reports carrier frequencies. If False every
        signal is labelled CF_UNSUPPORTED. Default is True.

    Returns
    -------
    SatelliteGroup
        Satellites keyed by (GnssType, svid) and summary metadata. Signals
        with an unrecognised frequency are kept in
        ``metadata.unknown_carrier_statuses``; a second signal claiming a
        label a satellite already holds is kept in
        ``metadata.duplicate_carrier_statuses``.

    Notes
    -----
    A satellite counts once towards ``num_sats_in_view`` (``num_sats_used``)
    when its first signal with C/N0 (used in fix) is stored. Dual-frequency
    flags require two known carrier labels on the same satellite.
    """
    signals = list(signals)
    satellites: Dict[SatelliteKey, Satellite] = {}
    metadata = SatelliteMetadata(num_signals_total=len(signals))

    for s in signals:
        if s.used_in_fix:
            metadata.num_signals_used += 1
        if s.in_view:
            metadata.num_signals_in_view += 1

        if s.gnss_type == GnssType.SBAS:
            if s.sbas_type != SbasType.UNKNOWN:
                metadata.supported_sbas.add(s.sbas_type)
        elif s.gnss_type != GnssType.UNKNOWN:
            metadata.supported_gnss.add(s.gnss_type)

        label = carrier_frequency_label_for_status(s, cf_supported)
        if label == CF_UNKNOWN:
            logger.debug(f"Unknown carrier frequency {s.carrier_frequency_hz} Hz "
                         f"for {create_gnss_satellite_key(s)}")
            metadata.unknown_carrier_statuses.setdefault(
                create_gnss_status_key(s, label), []).append(s)
            continue

        if _is_known_label(label):
            if s.gnss_type == GnssType.SBAS:
                if s.sbas_type != SbasType.UNKNOWN:
                    metadata.supported_sbas_cfs.add(label)
            elif s.gnss_type != GnssType.UNKNOWN:
                metadata.supported_gnss_cfs.add(label)
            if not is_primary_carrier(label, s.gnss_type):
                metadata.is_non_primary_carrier_freq_in_view = True
                if s.used_in_fix:
                    metadata.is_non_primary_carrier_freq_in_use = True

        sat = satellites.get(s.satellite_key)
        if sat is None:
            sat = Satellite(s.gnss_type, s.svid)
            satellites[s.satellite_key] = sat

        if label in sat.status:
            logger.warning(f"Duplicate {label} signal for {create_gnss_satellite_key(s)}")
            metadata.duplicate_carrier_statuses.setdefault(
                create_gnss_status_key(s, label), []).append(s)
            continue

        sat.status[label] = s

        if s.in_view:
            if sat.num_signals_in_view == 1:
                metadata.num_sats_in_view += 1
            if _count_known(sat, in_use=False) > 1:
                metadata.is_dual_frequency_per_sat_in_view = True
        if s.used_in_fix:
            if sat.num_signals_used == 1:
                metadata.num_sats_used += 1
            if _count_known(sat, in_use=True) > 1:
                metadata.is_dual_frequency_per_sat_in_use = True

    metadata.num_sats_total = len(satellites)
    return SatelliteGroup(satellites, metadata)


def _count_known(sat: Satellite, in_use: bool) -> int:
    """Number of known carrier labels of a satellite that are in view or in use"""
    count = 0
    for label, s in sat.status.items():
        if not _is_known_label(label):
            continue
        if s.used_in_fix if in_use else s.in_view:
            count += 1
    return count


def partition_counts(group: SatelliteGroup) -> List[int]:
    """
    Number of signals stored in satellites, in the unknown-carrier bucket and
    in the duplicate-carrier bucket. The three always sum to the input size.
    """
    stored = sum(len(sat.status) for sat in group.satellites.values())
    return [stored,
            group.metadata.num_unknown_carrier_statuses,
            group.metadata.num_duplicate_carrier_statuses]
