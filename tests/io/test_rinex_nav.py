#!/usr/bin/env python3
"""Test suite for RINEX navigation encoding"""

import unittest

from pygnssraw.core.data_structures import GpsEphemeris
from pygnssraw.io.rinex_nav import (
    encode_navigation_record, encode_navigation_records, format_nav_value, toc_epoch
)

FIELD = 19


def fields(line, indent):
    body = line[indent:]
    return [body[i:i + FIELD] for i in range(0, len(body), FIELD)]


class TestFormatNavValue(unittest.TestCase):
    """Test D19.12 numeric fields"""

    def test_positive(self):
        self.assertEqual(format_nav_value(1.2345e-5), "+1.234500000000E-05")

    def test_negative(self):
        self.assertEqual(format_nav_value(-2.5), "-2.500000000000E+00")

    def test_zero_and_integer(self):
        self.assertEqual(format_nav_value(0.0), "+0.000000000000E+00")
        self.assertEqual(format_nav_value(2200), "+2.200000000000E+03")

    def test_width(self):
        for value in (0.0, 1e-99, -6.02e23, 5153.7, -1.0):
            self.assertEqual(len(format_nav_value(value)), FIELD)


class TestEncodeNavigationRecord(unittest.TestCase):
    """Test GPS navigation records"""

    def setUp(self):
        self.eph = GpsEphemeris(
            prn=7, week=2200, toc=432000.0, toe=432000.0, tom=425000.0,
            sv_clock_bias=1.2345e-5, sv_clock_drift=-1.5e-12, sv_clock_drift_rate=0.0,
            iode=45, iodc=301, crs=-12.5, delta_n=4.5e-9, m0=1.25,
            cuc=-6.0e-7, e=0.0123, cus=8.0e-6, root_of_a=5153.65,
            cic=1.0e-7, omega0=-2.75, cis=-3.0e-8, i0=0.96, crc=250.0,
            omega=0.5, omega_dot=-8.1e-9, i_dot=1.2e-10, l2_code=1, l2_flag=0,
            sv_accuracy_m=2.0, sv_health=0, tgd=-1.1e-8, fit_interval=4.0,
        )
        self.lines = encode_navigation_record(self.eph).splitlines()

    def test_line_count(self):
        self.assertEqual(len(self.lines), 8)
        self.assertTrue(encode_navigation_record(self.eph).endswith("\n"))

    def test_epoch_line(self):
        line = self.lines[0]
        self.assertEqual(line[:23], "G07 2022 03 11 00 00 00")
        self.assertEqual(fields(line, 23), [
            "+1.234500000000E-05", "-1.500000000000E-12", "+0.000000000000E+00"])

    def test_toc_includes_week(self):
        self.assertEqual(toc_epoch(self.eph), "2022 03 11 00 00 00")

    def test_orbit_layout(self):
        for line in self.lines[1:7]:
            self.assertEqual(len(line), 4 + 4 * FIELD)
            self.assertTrue(line.startswith("    "))
        self.assertEqual(len(self.lines[7]), 4 + 2 * FIELD)

    def test_orbit_values(self):
        self.assertEqual(fields(self.lines[1], 4)[0], "+4.500000000000E+01")     # IODE
        self.assertEqual(fields(self.lines[2], 4)[3], "+5.153650000000E+03")     # sqrt(A)
        self.assertEqual(fields(self.lines[3], 4)[2], "-2.750000000000E+00")     # OMEGA0
        self.assertEqual(fields(self.lines[5], 4)[2], "+2.200000000000E+03")     # week
        self.assertEqual(fields(self.lines[6], 4)[3], "+3.010000000000E+02")     # IODC
        self.assertEqual(fields(self.lines[7], 4), ["+4.250000000000E+05", "+4.000000000000E+00"])

    def test_omega_dot_is_not_omega0(self):
        i0, crc, omega, omega_dot = fields(self.lines[4], 4)
        self.assertEqual(omega, "+5.000000000000E-01")
        self.assertEqual(omega_dot, "-8.100000000000E-09")

    def test_toc_past_end_of_week_not_rejected(self):
        self.eph.toc = 604800.0 + 7200.0
        self.assertEqual(toc_epoch(self.eph), "2022 03 13 02 00 00")
        self.assertEqual(len(encode_navigation_record(self.eph).splitlines()), 8)

    def test_multiple_records(self):
        text = encode_navigation_records([self.eph, self.eph])
        self.assertEqual(len(text.splitlines()), 16)


if __name__ == '__main__':
    unittest.main()
