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

"""Fixed headers of the primary and RINEX log files"""

from typing import List

from ..core.constants import (COMMENT_START, LINE_TERMINATOR, RECORD_FIX,
                              RECORD_NAV, RECORD_RAW, VERSION_TAG)
from ..core.settings import SessionSettings

RAW_COLUMNS = [
    "ElapsedRealtimeMillis", "TimeNanos", "LeapSecond", "TimeUncertaintyNanos",
    "FullBiasNanos", "BiasNanos", "BiasUncertaintyNanos", "DriftNanosPerSecond",
    "DriftUncertaintyNanosPerSecond", "HardwareClockDiscontinuityCount",
    "Svid", "TimeOffsetNanos", "State", "ReceivedSvTimeNanos",
    "ReceivedSvTimeUncertaintyNanos", "Cn0DbHz", "PseudorangeRateMetersPerSecond",
    "PseudorangeRateUncertaintyMetersPerSecond",
    "AccumulatedDeltaRangeState", "AccumulatedDeltaRangeMeters",
    "AccumulatedDeltaRangeUncertaintyMeters", "CarrierFrequencyHz", "CarrierCycles",
    "CarrierPhase", "CarrierPhaseUncertainty", "MultipathIndicator", "SnrInDb",
    "ConstellationType", "AgcDb",
]

FIX_COLUMNS = [
    "Provider", "Latitude", "Longitude", "Altitude", "Speed", "Accuracy", "(UTC)TimeInMs",
]

NAV_COLUMNS = [
    "Svid", "Type", "Status", "MessageId", "Sub-messageId", "Data(Bytes)",
]

NMEA_COLUMNS = ["Sentence", "TimestampMillis"]

# RINEX 3.04 observation header, labels as expected by RINEX tooling
RINEX_HEADER_LINES = [
    "     3.04           OBSERVATION DATA    M  RINEX VERSION / TYPE",
    "GNSS Logger                     PROGRAM",
    "Google                          AGENCY",
    "Sample Station Name             MARKER NAME",
    "Sample Marker Number            MARKER NUMBER",
    "NONE                            MARKER TYPE",
    "Sample Receiver Type            REC # / TYPE / VERS",
    "Sample Antenna Type             ANT # / TYPE",
    "    0.00000000       0.00000000       0.00000000                  APPROX POSITION XYZ",
    "    0.00000000       0.00000000       0.00000000                  ANTENNA: DELTA H/E/N",
    "                                                            WAVELENGTH FACT L1/2",
    "G    C1C L1C D1C S1C                                                         SYS / # / OBS TYPES",
    "                                                            TIME OF FIRST OBS",
    "                                                            TIME OF LAST OBS",
    "     0                            LEAP SECONDS",
    "                                                            END OF HEADER",
]


def version_string(settings: SessionSettings) -> str:
    """Version line content, e.g. ``v1.0.0 Platform: 6.1 Manufacturer: Linux Model: x86_64``"""
    return (f"{settings.app_version} Platform: {settings.platform_release} "
            f"Manufacturer: {settings.manufacturer} Model: {settings.model}")


def schema_line(record_type: str, columns: List[str]) -> str:
    return ",".join([record_type] + list(columns))


def primary_header_lines(settings: SessionSettings) -> List[str]:
    """
    Comment lines opening every primary log

    Parameters:
    -----------
    settings : SessionSettings
        Provides the version and device information

    Returns:
    --------
    List[str]
        Header lines without line terminators, each starting with ``# ``
    """
    body = [
        "",
        "Header Description:",
        "",
        VERSION_TAG + version_string(settings),
        "",
        schema_line(RECORD_RAW, RAW_COLUMNS),
        "",
        schema_line(RECORD_FIX, FIX_COLUMNS),
        "",
        schema_line(RECORD_NAV, NAV_COLUMNS),
        "",
    ]
    return [COMMENT_START + line for line in body]


def primary_header(settings: SessionSettings) -> str:
    return "".join(line + LINE_TERMINATOR for line in primary_header_lines(settings))


def rinex_header() -> str:
    return "".join(line + LINE_TERMINATOR for line in RINEX_HEADER_LINES)


__all__ = [
    'RAW_COLUMNS', 'FIX_COLUMNS', 'NAV_COLUMNS', 'NMEA_COLUMNS',
    'RINEX_HEADER_LINES', 'version_string', 'schema_line',
    'primary_header_lines', 'primary_header', 'rinex_header',
]
