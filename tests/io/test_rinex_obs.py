#!/usr/bin/env python3
"""Test suite for RINEX observation encoding"""

import unittest

from pygnssraw.core.constants import (
    ADR_STATE_VALID, CLIGHT, STATE_MSEC_AMBIGUOUS, STATE_TOW_DECODED, EpochFlag
)
from pygnssraw.core.data_structures import GnssClock, GnssMeasurement, ObservationEpoch
from pygnssraw.core.gnss_type import GnssType
from pygnssraw.gnss.measurement_state import TOW_SYNC
from pygnssraw.io.rinex_obs import (
    BLANK_FIELD, collect_observation_types, encode_observation_epoch,
    format_observation, generate_observations, observation_codes,
    process_measurement, pseudorange, wavelength
)

# 2025-06-20 21:02:19.658 GPST, week 2371, tow 507739.658 s
GPST_NS = 1434488539_658_000_000
TOW_NS = 507739_658_000_000
L1 = 1575.42e6
L5 = 1176.45e6


def gps_l1(svid=5, state=TOW_SYNC, adr_state=ADR_STATE_VALID, **kwargs):
    params = dict(
        svid=svid, gnss_type=GnssType.NAVSTAR, state=state,
        received_sv_time_nanos=TOW_NS - 70_000_000,
        cn0_dbhz=41.5, pseudorange_rate_meters_per_second=-100.0,
        accumulated_delta_range_state=adr_state,
        accumulated_delta_range_meters=1000.0, carrier_frequency_hz=L1,
    )
    params.update(kwargs)
    return GnssMeasurement(**params)


class TestObservationCodes(unittest.TestCase):
    """Test observation codes of a measurement"""

    def test_gps_l1(self):
        self.assertEqual(observation_codes(gps_l1()), ['C1C', 'L1C', 'D1C', 'S1C'])

    def test_l5(self):
        self.assertEqual(observation_codes(gps_l1(carrier_frequency_hz=L5)),
                         ['C5Q', 'L5Q', 'D5Q', 'S5Q'])

    def test_unmapped_band(self):
        self.assertEqual(observation_codes(gps_l1(carrier_frequency_hz=1227.6e6)), [])

    def test_collect_per_constellation(self):
        measurements = [
            gps_l1(), gps_l1(svid=7), gps_l1(carrier_frequency_hz=L5),
            GnssMeasurement(3, GnssType.GALILEO, carrier_frequency_hz=L1),
            GnssMeasurement(1, GnssType.UNKNOWN, carrier_frequency_hz=L1),
        ]
        obs_types = collect_observation_types(measurements)
        self.assertEqual(list(obs_types), [GnssType.NAVSTAR, GnssType.GALILEO])
        self.assertEqual(obs_types[GnssType.NAVSTAR],
                         ['C1C', 'L1C', 'D1C', 'S1C', 'C5Q', 'L5Q', 'D5Q', 'S5Q'])


class TestProcessMeasurement(unittest.TestCase):
    """Test observable computation"""

    def setUp(self):
        self.clock = GnssClock(time_nanos=0, full_bias_nanos=-GPST_NS)

    def test_all_valid(self):
        obs = process_measurement(self.clock, gps_l1())
        self.assertEqual(list(obs), ['C1C', 'L1C', 'D1C', 'S1C'])
        lam = CLIGHT / L1
        self.assertAlmostEqual(obs['C1C'], 0.07 * CLIGHT, delta=1.0)
        self.assertAlmostEqual(obs['L1C'], 1000.0 / lam, places=6)
        self.assertAlmostEqual(obs['D1C'], 100.0 / lam, places=6)
        self.assertEqual(obs['S1C'], 41.5)

    def test_missing_tow_blanks_only_pseudorange(self):
        obs = process_measurement(self.clock, gps_l1(state=TOW_SYNC & ~STATE_TOW_DECODED))
        self.assertIsNone(obs['C1C'])
        self.assertIsNotNone(obs['L1C'])
        self.assertIsNotNone(obs['D1C'])
        self.assertEqual(obs['S1C'], 41.5)

    def test_invalid_adr_blanks_only_phase(self):
        obs = process_measurement(self.clock, gps_l1(adr_state=0))
        self.assertIsNone(obs['L1C'])
        self.assertIsNotNone(obs['C1C'])

    def test_msec_ambiguous(self):
        obs = process_measurement(self.clock, gps_l1(state=TOW_SYNC | STATE_MSEC_AMBIGUOUS))
        self.assertIsNone(obs['C1C'])

    def test_default_wavelength(self):
        m = gps_l1(carrier_frequency_hz=None)
        self.assertAlmostEqual(wavelength(m), CLIGHT / L1, places=12)
        obs = process_measurement(self.clock, m)
        self.assertIn('C1C', obs)

    def test_beidou_offset(self):
        m = GnssMeasurement(
            svid=20, gnss_type=GnssType.BEIDOU, state=TOW_SYNC,
            received_sv_time_nanos=TOW_NS - 14_000_000_000 - 80_000_000,
            carrier_frequency_hz=1561.098e6,
        )
        obs = process_measurement(self.clock, m)
        self.assertEqual(list(obs), ['C2I', 'L2I', 'D2I', 'S2I'])
        self.assertAlmostEqual(obs['C2I'], 0.08 * CLIGHT, delta=1.0)

    def test_glonass_pseudorange_unsupported(self):
        m = GnssMeasurement(svid=4, gnss_type=GnssType.GLONASS, state=0xFFFF & ~STATE_MSEC_AMBIGUOUS,
                            carrier_frequency_hz=1602.0e6, cn0_dbhz=30.0)
        obs = process_measurement(self.clock, m)
        self.assertIsNone(obs['C1C'])
        self.assertEqual(obs['S1C'], 30.0)

    def test_implausible_range_suppressed(self):
        m = gps_l1(received_sv_time_nanos=TOW_NS - 200_000_000)
        self.assertIsNone(pseudorange(self.clock, m))

    def test_week_crossover_residual_suppressed(self):
        m = gps_l1(received_sv_time_nanos=TOW_NS - 400_000_000_000_000)
        self.assertIsNone(process_measurement(self.clock, m)['C1C'])

    def test_unmapped_band(self):
        self.assertEqual(process_measurement(self.clock, gps_l1(carrier_frequency_hz=1227.6e6)), {})


class TestFormatObservation(unittest.TestCase):
    """Test fixed-width observation fields"""

    def test_value(self):
        self.assertEqual(format_observation(41.5), "        41.50000")
        self.assertEqual(format_observation(-525.5), "      -525.50000")

    def test_blank(self):
        self.assertEqual(format_observation(None), " " * 16)
        self.assertEqual(BLANK_FIELD, " " * 16)

    def test_width_preserved(self):
        for value in (None, 0.0, 20985472.061, -123456789.123, 1e12,
                      -1.5e9, -9999999999.0, 9999999999.0):
            self.assertEqual(len(format_observation(value)), 16)

    def test_overflow_blanked(self):
        self.assertEqual(format_observation(-1.5e9), BLANK_FIELD)
        self.assertEqual(format_observation(1e10), BLANK_FIELD)
        self.assertEqual(format_observation(-999999999.999), "-999999999.99900")
        self.assertEqual(format_observation(9999999999.0), "9999999999.00000")


class TestEncodeObservationEpoch(unittest.TestCase):
    """Test epoch records"""

    def setUp(self):
        self.clock = GnssClock(time_nanos=0, full_bias_nanos=-GPST_NS)

    def test_epoch_line(self):
        text = encode_observation_epoch(ObservationEpoch(self.clock, [gps_l1(), gps_l1(svid=12)]))
        lines = text.splitlines()
        self.assertEqual(lines[0], "> 2025 06 20 21 02 19.6580000  0  2")
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[1].startswith("G05"))
        self.assertTrue(lines[2].startswith("G12"))

    def test_satellite_line_layout(self):
        text = encode_observation_epoch(ObservationEpoch(self.clock, [gps_l1(svid=3)]))
        line = text.splitlines()[1]
        self.assertEqual(len(line), 3 + 4 * 16)
        self.assertEqual(line[:3], "G03")
        self.assertTrue(line.endswith("        41.50000"))

    def test_blank_line_same_width(self):
        full = encode_observation_epoch(ObservationEpoch(self.clock, [gps_l1()]))
        blank = encode_observation_epoch(ObservationEpoch(
            self.clock, [gps_l1(state=0, adr_state=0)]))
        full_line = full.splitlines()[1]
        blank_line = blank.splitlines()[1]
        self.assertEqual(len(full_line), len(blank_line))
        self.assertEqual(blank_line[3:35], " " * 32)

    def test_large_negative_phase_keeps_width(self):
        text = encode_observation_epoch(ObservationEpoch(
            self.clock, [gps_l1(accumulated_delta_range_meters=-3.0e8)]))
        line = text.splitlines()[1]
        self.assertEqual(len(line), 3 + 4 * 16)
        self.assertEqual(line[19:35], BLANK_FIELD)
        self.assertTrue(line.endswith("        41.50000"))

    def test_power_failure_flag(self):
        text = encode_observation_epoch(
            ObservationEpoch(self.clock, [gps_l1()], EpochFlag.POWER_FAILURE))
        self.assertEqual(text.splitlines()[0][-6:], "  1  1")

    def test_unsupported_flag(self):
        epoch = ObservationEpoch(self.clock, [gps_l1()], EpochFlag.EXTERNAL_EVENT)
        self.assertIsNone(encode_observation_epoch(epoch))
        with self.assertRaises(NotImplementedError):
            encode_observation_epoch(epoch, strict=True)

    def test_skipped_measurements_not_counted(self):
        measurements = [
            gps_l1(),
            gps_l1(svid=8, carrier_frequency_hz=1227.6e6),
            GnssMeasurement(1, GnssType.UNKNOWN, carrier_frequency_hz=L1),
        ]
        text = encode_observation_epoch(ObservationEpoch(self.clock, measurements))
        lines = text.splitlines()
        self.assertTrue(lines[0].endswith("  0  1"))
        self.assertEqual(len(lines), 2)

    def test_empty_epoch(self):
        text = encode_observation_epoch(ObservationEpoch(self.clock))
        self.assertEqual(text, "> 2025 06 20 21 02 19.6580000  0  0\n")

    def test_generate_observations(self):
        self.assertEqual(
            generate_observations(self.clock, [gps_l1()]),
            encode_observation_epoch(ObservationEpoch(self.clock, [gps_l1()])))
        self.assertIsNone(generate_observations(self.clock, [gps_l1()], EpochFlag.NEW_SITE))


if __name__ == '__main__':
    unittest.main()
