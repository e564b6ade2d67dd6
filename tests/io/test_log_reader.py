#!/usr/bin/env python3
"""Test suite for reading primary logs back into DataFrames"""

import os
import shutil
import tempfile
import unittest
from datetime import datetime

import numpy as np
import pandas as pd

from gnsslog.core.constellation import ConstellationType
from gnsslog.core.data_structures import (ClockSnapshot, Fix,
                                          NavigationMessage, NmeaSentence,
                                          SatelliteMeasurement)
from gnsslog.core.settings import SessionSettings
from gnsslog.io.headers import FIX_COLUMNS, NAV_COLUMNS, RAW_COLUMNS
from gnsslog.io.log_reader import read_gnss_log
from gnsslog.io.session import SessionManager


class TestReadGnssLog(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        manager = SessionManager(SessionSettings(base_directory=self.test_dir),
                                 now=lambda: datetime(2024, 5, 1, 13, 45, 9),
                                 elapsed_millis=lambda: 42)
        manager.start_session()
        clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000, leap_second=18)
        manager.on_clock_and_measurement(clock, SatelliteMeasurement(svid=7, cn0_dbhz=41.5))
        manager.on_clock_and_measurement(
            clock, SatelliteMeasurement(svid=11, constellation_type=ConstellationType.GALILEO,
                                        carrier_frequency_hz=1575420030.0, snr_in_db=30.5))
        manager.on_fix(Fix("gps", 37.422, -122.084, 5.5, 1.25, 3.0, 1700000000123))
        manager.on_navigation_message(NavigationMessage(5, 257, 1, 3, 2, bytes([0x8B, 0x00, 0x7F])))
        manager.on_nmea(NmeaSentence("$GPGGA,123519,4807.038,N*47", 1700000000123))
        self.path, _ = manager.end_session()

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _write(self, lines):
        path = os.path.join(self.test_dir, "handmade.txt")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
        return path

    def test_record_types(self):
        frames = read_gnss_log(self.path)
        self.assertEqual(set(frames), {"Raw", "Fix", "Nav", "NMEA"})
        self.assertEqual(len(frames["Raw"]), 2)
        self.assertEqual(len(frames["Fix"]), 1)
        self.assertEqual(len(frames["Nav"]), 1)
        self.assertEqual(len(frames["NMEA"]), 1)

    def test_raw_columns_and_values(self):
        raw = read_gnss_log(self.path)["Raw"]
        self.assertListEqual(list(raw.columns), RAW_COLUMNS)
        self.assertEqual(raw["ElapsedRealtimeMillis"].tolist(), [42, 42])
        self.assertEqual(raw["FullBiasNanos"].iloc[0], -50000)
        self.assertEqual(raw["LeapSecond"].iloc[0], 18)
        self.assertEqual(raw["Svid"].tolist(), [7, 11])
        self.assertEqual(raw["ConstellationType"].tolist(), [1, 6])
        self.assertAlmostEqual(raw["Cn0DbHz"].iloc[0], 41.5)

    def test_missing_values_are_not_zero(self):
        raw = read_gnss_log(self.path)["Raw"]
        self.assertTrue(np.isnan(raw["CarrierFrequencyHz"].iloc[0]))
        self.assertAlmostEqual(raw["CarrierFrequencyHz"].iloc[1], 1575420030.0)
        self.assertTrue(pd.isna(raw["CarrierCycles"].iloc[0]))
        self.assertTrue(np.isnan(raw["BiasNanos"].iloc[0]))
        self.assertTrue(np.isnan(raw["AgcDb"]).all())

    def test_fix(self):
        fix = read_gnss_log(self.path)["Fix"]
        self.assertListEqual(list(fix.columns), FIX_COLUMNS)
        self.assertEqual(fix["Provider"].iloc[0], "gps")
        self.assertAlmostEqual(fix["Latitude"].iloc[0], 37.422)
        self.assertEqual(fix["(UTC)TimeInMs"].iloc[0], 1700000000123)

    def test_nav(self):
        nav = read_gnss_log(self.path)["Nav"]
        self.assertListEqual(list(nav.columns), NAV_COLUMNS)
        self.assertEqual(nav["Type"].iloc[0], 257)
        self.assertEqual(nav["Data(Bytes)"].iloc[0], [-117, 0, 127])

    def test_nmea_keeps_delimiters(self):
        nmea = read_gnss_log(self.path)["NMEA"]
        self.assertEqual(nmea["Sentence"].iloc[0], "$GPGGA,123519,4807.038,N*47")
        self.assertEqual(nmea["TimestampMillis"].iloc[0], 1700000000123)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            read_gnss_log(os.path.join(self.test_dir, "missing.txt"))

    def test_header_only(self):
        path = self._write(["# ", "# Header Description:", "# "])
        frames = read_gnss_log(path)
        self.assertTrue(all(df.empty for df in frames.values()))
        self.assertListEqual(list(frames["Raw"].columns), RAW_COLUMNS)

    def test_malformed_strict(self):
        path = self._write(["Fix,gps,1.0,2.0"])
        with self.assertRaises(ValueError):
            read_gnss_log(path)

    def test_malformed_lenient(self):
        path = self._write(["Fix,gps,1.0,2.0",
                            "Bogus,1,2",
                            "Fix,gps,1.000000,2.000000,0.000000,0.000000,0.000000,1000"])
        fix = read_gnss_log(path, strict=False)["Fix"]
        self.assertEqual(len(fix), 1)
        self.assertEqual(fix["(UTC)TimeInMs"].iloc[0], 1000)

    def test_header_schema_overrides_columns(self):
        path = self._write(["# Fix,Provider,Lat,Lon,Alt,Speed,Acc,Time",
                            "Fix,gps,1.0,2.0,3.0,4.0,5.0,1000"])
        fix = read_gnss_log(path)["Fix"]
        self.assertListEqual(list(fix.columns),
                             ["Provider", "Lat", "Lon", "Alt", "Speed", "Acc", "Time"])
        self.assertEqual(fix["Time"].iloc[0], 1000)


if __name__ == '__main__':
    unittest.main()
