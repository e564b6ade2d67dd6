#!/usr/bin/env python3
"""Test suite for log file headers"""

import unittest

from gnsslog.core.settings import SessionSettings
from gnsslog.io.headers import (FIX_COLUMNS, NAV_COLUMNS, RAW_COLUMNS,
                                RINEX_HEADER_LINES, primary_header,
                                primary_header_lines, rinex_header,
                                version_string)


class TestPrimaryHeader(unittest.TestCase):

    def setUp(self):
        self.settings = SessionSettings(base_directory="/tmp/gnss", app_version="v3.0.0.1",
                                        platform_release="13", manufacturer="Google",
                                        model="Pixel 7")

    def test_version_string(self):
        self.assertEqual(version_string(self.settings),
                         "v3.0.0.1 Platform: 13 Manufacturer: Google Model: Pixel 7")

    def test_lines(self):
        lines = primary_header_lines(self.settings)
        self.assertTrue(all(line.startswith("# ") for line in lines))
        self.assertEqual(lines[0], "# ")
        self.assertEqual(lines[1], "# Header Description:")
        self.assertEqual(lines[3], "# Version: v3.0.0.1 Platform: 13 Manufacturer: Google Model: Pixel 7")
        self.assertEqual(lines[5], "# Raw," + ",".join(RAW_COLUMNS))
        self.assertEqual(lines[7], "# Fix," + ",".join(FIX_COLUMNS))
        self.assertEqual(lines[9], "# Nav," + ",".join(NAV_COLUMNS))
        self.assertEqual(lines[-1], "# ")
        self.assertEqual(len(lines), 11)

    def test_header_text(self):
        text = primary_header(self.settings)
        self.assertTrue(text.endswith("# \n"))
        self.assertEqual(text.count("\n"), 11)
        self.assertEqual(text, primary_header(self.settings))

    def test_schema_columns(self):
        self.assertEqual(len(RAW_COLUMNS), 29)
        self.assertEqual(RAW_COLUMNS[0], "ElapsedRealtimeMillis")
        self.assertEqual(RAW_COLUMNS[-1], "AgcDb")
        self.assertEqual(FIX_COLUMNS[-1], "(UTC)TimeInMs")
        self.assertEqual(NAV_COLUMNS[-1], "Data(Bytes)")


class TestRinexHeader(unittest.TestCase):

    def test_version_line(self):
        self.assertEqual(RINEX_HEADER_LINES[0],
                         "     3.04           OBSERVATION DATA    M  RINEX VERSION / TYPE")

    def test_ends_with_end_of_header(self):
        self.assertTrue(RINEX_HEADER_LINES[-1].endswith("END OF HEADER"))
        self.assertEqual(len(RINEX_HEADER_LINES), 16)

    def test_obs_types(self):
        self.assertIn("G    C1C L1C D1C S1C", rinex_header())

    def test_text(self):
        text = rinex_header()
        self.assertEqual(text.splitlines(), RINEX_HEADER_LINES)
        self.assertTrue(text.endswith("END OF HEADER\n"))


if __name__ == '__main__':
    unittest.main()
