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

"""Errors raised while opening, writing and closing log files"""

from pathlib import Path
from typing import Optional, Union


class GnssLogError(Exception):
    """Base class for gnsslog errors"""


class StorageUnavailable(GnssLogError):
    """The log directory cannot be created or is not writable"""

    def __init__(self, message: str, directory: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.directory = Path(directory) if directory is not None else None


class SinkIOError(GnssLogError):
    """An open, write or close on an already selected log file failed"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


__all__ = ['GnssLogError', 'StorageUnavailable', 'SinkIOError']
