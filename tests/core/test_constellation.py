#!/usr/bin/env python3
"""Test suite for constellation codes"""

import unittest

from gnsslog.core.constellation import (CHAR_TO_CONSTELLATION,
                                        ConstellationType,
                                        constellation_code, to_constellation)


class TestConstellationCode(unittest.TestCase):
    """Test constellation to RINEX system character mapping"""

    def test_defined_constellations(self):
        """Every defined constellation maps to its fixed letter"""
        expected = {
            ConstellationType.GPS: 'G',
            ConstellationType.GLONASS: 'R',
            ConstellationType.BEIDOU: 'C',
            ConstellationType.GALILEO: 'E',
            ConstellationType.QZSS: 'J',
            ConstellationType.SBAS: 'S',
            ConstellationType.IRNSS: 'I',
        }
        for constellation, char in expected.items():
            self.assertEqual(constellation_code(constellation), char)

    def test_raw_integer_values(self):
        """Receiver integer values map like the enum members"""
        self.assertEqual(constellation_code(1), 'G')
        self.assertEqual(constellation_code(3), 'R')
        self.assertEqual(constellation_code(5), 'C')
        self.assertEqual(constellation_code(6), 'E')

    def test_unknown_values(self):
        """Undefined values map to '?'"""
        self.assertEqual(constellation_code(ConstellationType.UNKNOWN), '?')
        self.assertEqual(constellation_code(0), '?')
        self.assertEqual(constellation_code(8), '?')
        self.assertEqual(constellation_code(-1), '?')

    def test_mapping_is_total_and_stable(self):
        """Each enum member yields exactly one letter on repeated lookups"""
        for constellation in ConstellationType:
            first = constellation_code(constellation)
            self.assertEqual(len(first), 1)
            self.assertEqual(constellation_code(constellation), first)

    def test_letters_are_unique(self):
        self.assertEqual(len(CHAR_TO_CONSTELLATION), 7)
        self.assertEqual(CHAR_TO_CONSTELLATION['E'], ConstellationType.GALILEO)


class TestToConstellation(unittest.TestCase):

    def test_known_value(self):
        self.assertIs(to_constellation(4), ConstellationType.QZSS)

    def test_unknown_value(self):
        self.assertIs(to_constellation(99), ConstellationType.UNKNOWN)


if __name__ == '__main__':
    unittest.main()
