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

"""Log File Constants and Defaults"""

# File naming
FILE_PREFIX = "gnss_log"           # primary log directory and file prefix
RINEX_FILE_PREFIX = "RINEX"        # RINEX log directory and file prefix
FILE_EXTENSION = ".txt"
FILE_TIMESTAMP_FORMAT = "%Y_%m_%d_%H_%M_%S"

# Record layout
COMMENT_START = "# "
RECORD_DELIMITER = ","
LINE_TERMINATOR = "\n"
VERSION_TAG = "Version: "

# Record type tags (first field of every primary log record)
RECORD_RAW = "Raw"
RECORD_FIX = "Fix"
RECORD_NAV = "Nav"
RECORD_NMEA = "NMEA"

# Retention policy
MAX_FILES_STORED = 100
MINIMUM_USABLE_FILE_SIZE_BYTES = 1000

# Version string written into the primary log header
APP_VERSION = "v1.0.0"

# Time
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1e9

# RINEX body placeholders
RINEX_EPOCH_FLAG = "  0    "     # epoch flag and receiver clock offset
RINEX_FIELD_SEP = "    "
RINEX_FIX_SATELLITE = "G00"       # fixes carry no satellite
