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

"""I/O for gnsslog: record encoders, log sessions and log read-back."""

from .encoder import (
    encode_clock,
    encode_clock_and_measurement,
    encode_fix,
    encode_measurement,
    encode_navigation_message,
    encode_nmea,
    encode_raw,
    encode_rinex_fix,
    encode_rinex_observation,
)
from .headers import (FIX_COLUMNS, NAV_COLUMNS, NMEA_COLUMNS, RAW_COLUMNS,
                      RINEX_HEADER_LINES, primary_header, primary_header_lines,
                      rinex_header)
from .log_reader import read_gnss_log
from .session import Session, SessionHandle, SessionManager

__all__ = [
    'encode_clock', 'encode_measurement', 'encode_clock_and_measurement',
    'encode_raw', 'encode_rinex_observation', 'encode_fix', 'encode_rinex_fix',
    'encode_navigation_message', 'encode_nmea',
    'RAW_COLUMNS', 'FIX_COLUMNS', 'NAV_COLUMNS', 'NMEA_COLUMNS',
    'RINEX_HEADER_LINES', 'primary_header', 'primary_header_lines', 'rinex_header',
    'read_gnss_log',
    'Session', 'SessionHandle', 'SessionManager',
]
