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

"""Core GNSS Logging Module.

This module provides the building blocks shared by the encoders and the
session manager:

- **Constants**: file prefixes, record tags, retention defaults
- **Constellations**: constellation enum and RINEX system characters
- **Data Structures**: immutable receiver events (clock, measurement,
  navigation message, fix, NMEA sentence)
- **Formatting**: locale independent number formatting
- **Time**: RINEX date blocks and file name timestamps
- **Settings**: session configuration from defaults, dicts or TOML
- **Errors**: storage and file errors

Example Usage:
    >>> from gnsslog.core import *
    >>>
    >>> clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000)
    >>> clock.has_leap_second
    False
    >>> constellation_code(ConstellationType.GALILEO)
    'E'
"""

from .constants import *
from .constellation import *
from .data_structures import *
from .errors import *
from .formatting import *
from .settings import *
from .time import *
