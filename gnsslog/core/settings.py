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
Session Settings
================

Where log files go, how many are retained, and what device information is
written into the primary log header. Settings come from defaults, a plain
dictionary, or the ``[session]`` table of a TOML file.

Example TOML::

    [session]
    base_directory = "/data/gnss"
    max_files_stored = 50
    agc_supported = false

    [logging]
    default_level = "DEBUG"
"""

import logging
import platform
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Union

from .constants import (APP_VERSION, FILE_PREFIX, MAX_FILES_STORED,
                        MINIMUM_USABLE_FILE_SIZE_BYTES, RINEX_FILE_PREFIX)

logger = logging.getLogger(__name__)


@dataclass
class SessionSettings:
    """Settings of a SessionManager.

    Attributes
    ----------
    base_directory : Path
        Storage root; the primary and RINEX directories are created below it
    primary_subdirectory : str
        Directory name of primary logs under ``base_directory``
    rinex_subdirectory : str
        Directory name of RINEX logs under ``base_directory``
    max_files_stored : int
        Retention limit applied by ``prune_stale_files``
    minimum_usable_file_size_bytes : int
        Files smaller than this are considered incomplete
    app_version : str
        Version written after ``Version:`` in the primary header
    platform_release, manufacturer, model : str
        Device information written into the primary header
    agc_supported : bool
        Whether the receiver platform reports the AGC level
    """
    base_directory: Path = field(default_factory=lambda: Path.cwd() / "gnss_data")
    primary_subdirectory: str = FILE_PREFIX
    rinex_subdirectory: str = RINEX_FILE_PREFIX
    max_files_stored: int = MAX_FILES_STORED
    minimum_usable_file_size_bytes: int = MINIMUM_USABLE_FILE_SIZE_BYTES
    app_version: str = APP_VERSION
    platform_release: str = field(default_factory=platform.release)
    manufacturer: str = field(default_factory=platform.system)
    model: str = field(default_factory=platform.machine)
    agc_supported: bool = True

    def __post_init__(self):
        self.base_directory = Path(self.base_directory)
        if self.max_files_stored < 0:
            raise ValueError(f"max_files_stored must be non-negative, got {self.max_files_stored}")
        if self.minimum_usable_file_size_bytes < 0:
            raise ValueError("minimum_usable_file_size_bytes must be non-negative, "
                             f"got {self.minimum_usable_file_size_bytes}")

    @property
    def primary_directory(self) -> Path:
        return self.base_directory / self.primary_subdirectory

    @property
    def rinex_directory(self) -> Path:
        return self.base_directory / self.rinex_subdirectory

    @classmethod
    def from_dict(cls, config: dict) -> 'SessionSettings':
        """Create settings from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown session settings: {unknown}. Must be among {sorted(known)}")
        return cls(**config)


def load_settings(path: Union[str, Path],
                  configure_logging: bool = True) -> SessionSettings:
    """
    Load session settings from a TOML file

    Parameters:
    -----------
    path : str or Path
        TOML file with an optional ``[session]`` table and an optional
        ``[logging]`` table
    configure_logging : bool
        Apply the ``[logging]`` table through ``setup_logger_from_config``

    Returns:
    --------
    SessionSettings
        Settings built from the ``[session]`` table (defaults if absent)
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    with config_path.open("rb") as fh:
        config = tomllib.load(fh)

    logging_config: Optional[dict] = config.get("logging")
    if configure_logging and logging_config:
        from ..logger import setup_logger_from_config
        setup_logger_from_config(logging_config)

    settings = SessionSettings.from_dict(config.get("session", {}))
    logger.info(f"Loaded session settings from {config_path}: base directory {settings.base_directory}")
    return settings


__all__ = ['SessionSettings', 'load_settings']
