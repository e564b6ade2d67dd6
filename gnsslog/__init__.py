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

"""
gnsslog - GNSS raw measurement logging

Serializes raw GNSS receiver events (clock snapshots, satellite measurements,
navigation messages, fixes and NMEA sentences) into a comma-delimited debug
log and a line-per-record RINEX-style observation log.
"""

__version__ = "1.0.0"
__author__ = "gnsslog Development Team"
__title__ = "gnsslog"
__description__ = "GNSS raw measurement file logger"

from .core import *
from .io import *
