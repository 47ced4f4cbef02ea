#!/usr/bin/env python3
"""Test suite for GPS time conversions"""

import unittest

from pygnssraw.core.data_structures import GnssClock
from pygnssraw.core.gnss_type import GnssType
from pygnssraw.core.time import (
    bdst_to_gpst_seconds, check_week_crossover, format_gpst,
    format_gpst_epoch, format_gpst_seconds, gps_seconds_of_week,
    gps_time_nanos, gps_week_number, gps_week_tow, gpst_fraction,
    reception_time_seconds, transmit_time_seconds
)

# 2025-06-20 21:02:19.658 GPST
GPST_NS = 1434488539_658_000_000


class TestReceiverClock(unittest.TestCase):
    """Test GPS time derived from a receiver clock snapshot"""

    def setUp(self):
        self.clock = GnssClock(time_nanos=1_000_000, full_bias_nanos=-(GPST_NS - 1_000_000))

    def test_gps_time_nanos(self):
        self.assertEqual(gps_time_nanos(self.clock), GPST_NS)

    def test_sub_nanosecond_bias_is_rounded(self):
        clock = GnssClock(time_nanos=0, full_bias_nanos=-GPST_NS, bias_nanos=0.4)
        self.assertEqual(gps_time_nanos(clock), GPST_NS)
        clock = GnssClock(time_nanos=0, full_bias_nanos=-GPST_NS, bias_nanos=2.0)
        self.assertEqual(gps_time_nanos(clock), GPST_NS - 2)

    def test_week_and_tow(self):
        self.assertEqual(gps_week_number(self.clock), 2371)
        self.assertAlmostEqual(gps_seconds_of_week(self.clock), 507739.658, places=6)
        week, tow = gps_week_tow(self.clock)
        self.assertEqual(week, 2371)
        self.assertAlmostEqual(tow, 507739.658, places=6)

    def test_reception_time(self):
        t_rx = reception_time_seconds(self.clock, 500_000.0)
        self.assertAlmostEqual(t_rx, 507739.6575, places=6)


class TestCalendarFormatting(unittest.TestCase):
    """Test calendar rendering of GPS instants"""

    def test_gps_epoch(self):
        self.assertEqual(format_gpst_epoch(0), "1980 01 06 00 00 00.000000")

    def test_format_gpst(self):
        self.assertEqual(format_gpst(GPST_NS), "2025 06 20 21 02 19")
        self.assertEqual(format_gpst(GPST_NS, "%Y%m%d"), "20250620")

    def test_format_gpst_week_tow(self):
        ns = (2200 * 604800 + 432000) * 1_000_000_000
        self.assertEqual(format_gpst(ns), "2022 03 11 00 00 00")

    def test_fraction(self):
        self.assertEqual(gpst_fraction(GPST_NS), "658000")
        self.assertEqual(gpst_fraction(GPST_NS, 7), "6580000")
        self.assertEqual(format_gpst_seconds(GPST_NS), "19.658000")
        self.assertEqual(format_gpst_epoch(GPST_NS), "2025 06 20 21 02 19.658000")

    def test_fraction_truncates(self):
        self.assertEqual(gpst_fraction(1_999_999_999, 6), "999999")
        self.assertEqual(gpst_fraction(1_234_567_891, 7), "2345678")

    def test_fraction_digits_range(self):
        with self.assertRaises(ValueError):
            gpst_fraction(GPST_NS, 0)
        with self.assertRaises(ValueError):
            gpst_fraction(GPST_NS, 10)


class TestTransmitTime(unittest.TestCase):
    """Test constellation time scales"""

    def test_beidou_offset(self):
        self.assertEqual(bdst_to_gpst_seconds(100.0), 114.0)
        self.assertAlmostEqual(transmit_time_seconds(GnssType.BEIDOU, 1_000_000_000), 15.0)

    def test_gps_scale(self):
        for gnss_type in (GnssType.NAVSTAR, GnssType.GALILEO, GnssType.QZSS, GnssType.SBAS):
            self.assertAlmostEqual(transmit_time_seconds(gnss_type, 2_000_000_000), 2.0)

    def test_glonass_not_converted(self):
        self.assertIsNone(transmit_time_seconds(GnssType.GLONASS, 2_000_000_000))


class TestWeekCrossover(unittest.TestCase):
    """Test propagation time week rollover correction"""

    def test_no_crossover(self):
        self.assertAlmostEqual(check_week_crossover(100.07, 100.0), 0.07, places=9)

    def test_receiver_ahead_by_a_week(self):
        self.assertAlmostEqual(check_week_crossover(604800.05, 0.0), 0.05, places=6)

    def test_receiver_rolled_over(self):
        self.assertAlmostEqual(check_week_crossover(0.02, 604799.95), 0.07, places=6)

    def test_residual_too_large(self):
        self.assertIsNone(check_week_crossover(604830.0, 0.0))
        self.assertIsNone(check_week_crossover(400000.0, 0.0))


if __name__ == '__main__':
    unittest.main()
