#!/usr/bin/env python3
"""Test suite for primary log and RINEX record encoders"""

import unittest
from datetime import datetime, timezone

from gnsslog.core.constellation import ConstellationType
from gnsslog.core.data_structures import (ClockSnapshot, Fix,
                                          NavigationMessage, NmeaSentence,
                                          SatelliteMeasurement)
from gnsslog.io.encoder import (encode_clock, encode_clock_and_measurement,
                                encode_fix, encode_measurement,
                                encode_navigation_message, encode_nmea,
                                encode_raw, encode_rinex_fix,
                                encode_rinex_observation)
from gnsslog.io.headers import RAW_COLUMNS

DATE_BLOCK_1S = "1970 1  1  0  0  1.000      "


class TestRawRecord(unittest.TestCase):
    """Test the clock and measurement parts of Raw records"""

    def setUp(self):
        self.clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000)
        self.measurement = SatelliteMeasurement(svid=7, cn0_dbhz=41.5,
                                                received_sv_time_nanos=123456789012)

    def test_clock_without_optional_values(self):
        self.assertEqual(encode_clock(self.clock, 42), "Raw,42,1000000000,,,-50000,,,,,0,")

    def test_clock_fragment_matches_clock_columns(self):
        fields = encode_clock(self.clock, 42).split(",")
        self.assertEqual(fields[-1], "")
        self.assertEqual(len(fields) - 2, RAW_COLUMNS.index("Svid"))
        self.assertEqual(fields[1 + RAW_COLUMNS.index("FullBiasNanos")], "-50000")
        self.assertEqual(fields[1 + RAW_COLUMNS.index("HardwareClockDiscontinuityCount")], "0")

    def test_clock_with_optional_values(self):
        clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000,
                              hardware_clock_discontinuity_count=3, leap_second=18,
                              time_uncertainty_nanos=0.0, bias_nanos=0.5,
                              bias_uncertainty_nanos=10.25, drift_nanos_per_second=-1.5,
                              drift_uncertainty_nanos_per_second=2.0)
        self.assertEqual(encode_clock(clock, 7),
                         "Raw,7,1000000000,18,0.0,-50000,0.5,10.25,-1.5,2.0,3,")

    def test_measurement_without_optional_values(self):
        self.assertEqual(encode_measurement(self.measurement),
                         "7,0.0,0,123456789012,0,41.5,0.0,0.0,0,0.0,0.0,,,,,0,,1,")

    def test_measurement_with_optional_values(self):
        m = SatelliteMeasurement(svid=11, constellation_type=ConstellationType.GALILEO,
                                 carrier_frequency_hz=1575420030.0, carrier_cycles=12,
                                 carrier_phase=0.25, carrier_phase_uncertainty=0.01,
                                 snr_in_db=30.5, automatic_gain_control_level_db=-2.0)
        fields = encode_measurement(m).split(",")
        self.assertEqual(fields[11:15], ["1575420030.0", "12", "0.25", "0.01"])
        self.assertEqual(fields[16], "30.5")
        self.assertEqual(fields[17], "6")
        self.assertEqual(fields[18], "-2.0")

    def test_agc_written_only_when_supported(self):
        m = SatelliteMeasurement(svid=11, automatic_gain_control_level_db=-2.0)
        self.assertTrue(encode_measurement(m, agc_supported=True).endswith(",-2.0"))
        self.assertTrue(encode_measurement(m, agc_supported=False).endswith(","))

    def test_raw_row_matches_schema(self):
        row = encode_raw(self.clock, self.measurement, 42)
        fields = row.split(",")
        self.assertEqual(fields[0], "Raw")
        self.assertEqual(len(fields) - 1, len(RAW_COLUMNS))
        self.assertTrue(row.startswith("Raw,42,1000000000,,,-50000,,,,,0,7,"))

    def test_column_count_independent_of_has_flags(self):
        full = SatelliteMeasurement(svid=1, carrier_frequency_hz=1.0, carrier_cycles=1,
                                    carrier_phase=1.0, carrier_phase_uncertainty=1.0,
                                    snr_in_db=1.0, automatic_gain_control_level_db=1.0)
        full_clock = ClockSnapshot(time_nanos=1, leap_second=1, time_uncertainty_nanos=1.0,
                                   bias_nanos=1.0, bias_uncertainty_nanos=1.0,
                                   drift_nanos_per_second=1.0,
                                   drift_uncertainty_nanos_per_second=1.0)
        sparse = encode_raw(self.clock, self.measurement, 0).split(",")
        dense = encode_raw(full_clock, full, 0).split(",")
        self.assertEqual(len(sparse), len(dense))
        self.assertNotIn("", dense)

    def test_clock_and_measurement_triple(self):
        clock_part, measurement_part, rinex = encode_clock_and_measurement(
            self.clock, self.measurement, 42)
        self.assertTrue(clock_part.endswith(","))
        self.assertEqual(clock_part + measurement_part, encode_raw(self.clock, self.measurement, 42))
        self.assertEqual(rinex, encode_rinex_observation(self.clock, self.measurement))


class TestRinexObservation(unittest.TestCase):

    def test_gps_line(self):
        clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000)
        m = SatelliteMeasurement(svid=7, cn0_dbhz=41.5, received_sv_time_nanos=123456789012)
        self.assertEqual(encode_rinex_observation(clock, m),
                         DATE_BLOCK_1S + "  0    G07" + "    " + "        41.500"
                         + "    " + " 123.456789012")

    def test_constellation_letters(self):
        clock = ClockSnapshot(time_nanos=1000000000)
        glonass = SatelliteMeasurement(svid=24, constellation_type=ConstellationType.GLONASS)
        unknown = SatelliteMeasurement(svid=3, constellation_type=ConstellationType.UNKNOWN)
        self.assertIn("  0    R24    ", encode_rinex_observation(clock, glonass))
        self.assertIn("  0    ?03    ", encode_rinex_observation(clock, unknown))

    def test_date_from_truncated_time_nanos(self):
        clock = ClockSnapshot(time_nanos=1999999999)
        line = encode_rinex_observation(clock, SatelliteMeasurement(svid=1))
        self.assertTrue(line.startswith("1970 1  1  0  0  1.999      "))


class TestFix(unittest.TestCase):

    def setUp(self):
        self.fix = Fix("gps", 37.422, -122.084, 5.5, 1.25, 3.0, 1700000000123)

    def test_primary(self):
        self.assertEqual(encode_fix(self.fix),
                         "Fix,gps,37.422000,-122.084000,5.500000,1.250000,3.000000,1700000000123")

    def test_rinex(self):
        self.assertEqual(encode_rinex_fix(self.fix),
                         "2023 11 14 22 13 20.123     " + "  0    G00"
                         + "    " + "     37.422000"
                         + "    " + "   -122.084000"
                         + "    " + "         5.500")


class TestNavigationMessage(unittest.TestCase):

    def setUp(self):
        self.nav = NavigationMessage(svid=5, type=257, status=1, message_id=3,
                                     submessage_id=2, data=bytes([0x8B, 0x00, 0x7F, 0xFF]))
        self.now = datetime(2024, 5, 1, 12, 30, 45, 678000, tzinfo=timezone.utc)

    def test_primary_signed_bytes(self):
        primary, _ = encode_navigation_message(self.nav, self.now)
        self.assertEqual(primary, "Nav,5,257,1,3,2,-117,0,127,-1")

    def test_rinex_hex_bytes(self):
        _, rinex = encode_navigation_message(self.nav, self.now)
        self.assertEqual(rinex, "2024 5  1  12 30 45.678     " + "  0    05"
                         + "    257    1    3    2 8B 00 7F FF")

    def test_empty_data(self):
        nav = NavigationMessage(svid=12, type=769, status=0, message_id=1, submessage_id=1)
        primary, rinex = encode_navigation_message(nav, self.now)
        self.assertEqual(primary, "Nav,12,769,0,1,1")
        self.assertTrue(rinex.endswith("  0    12    769    0    1    1"))

    def test_default_wall_clock(self):
        _, rinex = encode_navigation_message(self.nav)
        self.assertRegex(rinex, r"^\d{4} ")


class TestNmea(unittest.TestCase):

    def test_sentence_trimmed(self):
        sentence = NmeaSentence("  $GPGGA,123519,4807.038,N*47\r\n", 1700000000123)
        self.assertEqual(encode_nmea(sentence), "NMEA,$GPGGA,123519,4807.038,N*47,1700000000123")


if __name__ == '__main__':
    unittest.main()
