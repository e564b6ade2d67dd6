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

"""Logging session lifecycle: open, append, close and prune log files.

A session is a pair of output files opened together: the primary log
(``gnss_log/gnss_log_<timestamp>.txt``) and the RINEX log
(``RINEX/RINEX_<timestamp>.txt``). All session state and every
encode-then-append runs under one lock per SessionManager, so records from
concurrent producers never interleave within a line and nothing is appended
to a file that is being closed.

File errors never escape the manager: they are logged, reported once
through the ``notify`` callback, and the failing record is dropped.
"""

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import (Callable, Iterable, List, Optional, Sequence, TextIO,
                    Tuple, Union)

from ..core.constants import (FILE_EXTENSION, FILE_PREFIX, LINE_TERMINATOR,
                              RINEX_FILE_PREFIX)
from ..core.data_structures import (ClockAndMeasurement, ClockSnapshot, Fix,
                                    MeasurementsEvent, NavigationMessage,
                                    NmeaSentence, SatelliteMeasurement)
from ..core.errors import SinkIOError, StorageUnavailable
from ..core.settings import SessionSettings
from ..core.time import (elapsed_realtime_millis, file_timestamp, local_now,
                         utc_now)
from ..logger import LogLevel
from .encoder import (encode_clock_and_measurement, encode_fix,
                      encode_navigation_message, encode_nmea,
                      encode_rinex_fix)
from .headers import primary_header, rinex_header

logger = logging.getLogger(__name__)

ERROR_WRITING_FILE = "Problem writing to file."
ERROR_WRITING_RINEX = "Error writing to RINEX file"
ERROR_CLOSING_FILE = "Unable to close all file streams."
ERROR_CLOSING_RINEX = "Unable to close RINEX file stream."

PathLike = Union[str, Path]


@dataclass(frozen=True)
class SessionHandle:
    """What the caller learns about a started session.

    ``rinex_path`` is None when the RINEX file could not be opened; the
    primary log keeps running in that case.
    """
    primary_path: Path
    rinex_path: Optional[Path]
    started_at: datetime


@dataclass
class Session:
    """Open files of one logging session, owned by a single SessionManager"""
    primary_path: Path
    rinex_path: Optional[Path]
    started_at: datetime
    primary_sink: Optional[TextIO] = None
    rinex_sink: Optional[TextIO] = None

    @property
    def primary_open(self) -> bool:
        return self.primary_sink is not None

    @property
    def rinex_open(self) -> bool:
        return self.rinex_sink is not None

    def handle(self) -> SessionHandle:
        return SessionHandle(self.primary_path, self.rinex_path, self.started_at)


def _open_sink(path: Path) -> TextIO:
    return open(path, "w", encoding="utf-8", newline=LINE_TERMINATOR)


def _ensure_directory(directory: Path) -> Path:
    """Create a log directory if needed and check that it is writable."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageUnavailable(f"Failed to create directory: {directory}", directory) from exc
    if not directory.is_dir() or not os.access(directory, os.W_OK):
        raise StorageUnavailable(f"Cannot write to external storage: {directory}", directory)
    return directory


def _session_paths(primary_dir: Path, rinex_dir: Path, stamp: str) -> Tuple[Path, Path]:
    """File pair named after ``stamp``, suffixed ``_1``, ``_2``... if that name is taken."""
    suffix = ""
    count = 0
    while True:
        primary_path = primary_dir / f"{FILE_PREFIX}_{stamp}{suffix}{FILE_EXTENSION}"
        rinex_path = rinex_dir / f"{RINEX_FILE_PREFIX}_{stamp}{suffix}{FILE_EXTENSION}"
        if not primary_path.exists() and not rinex_path.exists():
            break
        count += 1
        suffix = f"_{count}"
    if count:
        logger.warning(f"Log files for {stamp} already exist, using suffix {suffix}")
    return primary_path, rinex_path


class SessionManager:
    """
    Owns the lifecycle of GNSS logging sessions

    Parameters:
    -----------
    settings : SessionSettings, optional
        Directories, retention limits and header device information
    notify : Callable[[str], None], optional
        Receives user-facing success and failure messages
    publish : Callable[[List[Path]], None], optional
        Receives the completed files from ``end_session_and_list_files``
    now : Callable[[], datetime], optional
        Clock for file name timestamps (local time by default)
    wall_clock : Callable[[], datetime], optional
        Wall clock stamped on navigation message RINEX lines
    elapsed_millis : Callable[[], int], optional
        Monotonic clock for the elapsed-time column of Raw records
    """

    def __init__(self,
                 settings: Optional[SessionSettings] = None,
                 notify: Optional[Callable[[str], None]] = None,
                 publish: Optional[Callable[[List[Path]], None]] = None,
                 now: Callable[[], datetime] = local_now,
                 wall_clock: Callable[[], datetime] = utc_now,
                 elapsed_millis: Callable[[], int] = elapsed_realtime_millis):
        self.settings = settings if settings is not None else SessionSettings()
        self.notify = notify
        self.publish = publish
        self._now = now
        self._wall_clock = wall_clock
        self._elapsed_millis = elapsed_millis
        self._lock = threading.Lock()
        self._session: Optional[Session] = None
        self._pending_messages: List[str] = []

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    # notify runs only after the lock is released, so callbacks may query the manager

    def _report_error(self, message: str, exc: Optional[BaseException] = None):
        logger.error(message, exc_info=exc)
        self._pending_messages.append(message)

    def _report_info(self, message: str):
        logger.info(message)
        self._pending_messages.append(message)

    def _deliver_messages(self):
        with self._lock:
            messages, self._pending_messages = self._pending_messages, []
        if self.notify is None:
            return
        for message in messages:
            self.notify(message)

    @contextmanager
    def _locked(self):
        """Hold the session lock, then hand queued messages to ``notify``."""
        try:
            with self._lock:
                yield
        finally:
            self._deliver_messages()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def primary_directory(self) -> Path:
        return self.settings.primary_directory

    @property
    def rinex_directory(self) -> Path:
        return self.settings.rinex_directory

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.primary_open

    @property
    def current_session(self) -> Optional[SessionHandle]:
        with self._lock:
            return self._session.handle() if self._session is not None else None

    def start_session(self) -> Optional[SessionHandle]:
        """
        Open a new pair of log files and write their headers

        A session that is still open is closed first. Returns None when the
        storage is unavailable or the primary log cannot be created; in that
        case no file is left open. A RINEX failure is reported but the
        session still starts with the primary log only.

        Returns:
        --------
        SessionHandle or None
            Paths and start time of the new session
        """
        with self._locked():
            if self._session is not None:
                self._close_session_locked()

            try:
                primary_dir = _ensure_directory(self.primary_directory)
                rinex_dir = _ensure_directory(self.rinex_directory)
            except StorageUnavailable as exc:
                self._report_error(str(exc), exc)
                return None

            started_at = self._now()
            primary_path, rinex_path = _session_paths(primary_dir, rinex_dir,
                                                      file_timestamp(started_at))

            try:
                primary_sink = self._open_with_header(primary_path, primary_header(self.settings))
            except SinkIOError as exc:
                self._report_error(str(exc), exc.__cause__)
                return None
            self._report_info(f"File opened: {primary_path}")

            try:
                rinex_sink = self._open_with_header(rinex_path, rinex_header())
            except SinkIOError as exc:
                self._report_error(str(exc), exc.__cause__)
                rinex_sink = None
                rinex_path = None
            else:
                self._report_info(f"RINEX File opened: {rinex_path}")

            self._session = Session(primary_path=primary_path,
                                    rinex_path=rinex_path,
                                    started_at=started_at,
                                    primary_sink=primary_sink,
                                    rinex_sink=rinex_sink)
            return self._session.handle()

    @staticmethod
    def _open_with_header(path: Path, header: str) -> TextIO:
        try:
            sink = _open_sink(path)
        except OSError as exc:
            raise SinkIOError(f"Could not open file: {path}", path) from exc
        try:
            sink.write(header)
        except OSError as exc:
            try:
                sink.close()
            except OSError:
                logger.debug(f"Ignoring close failure of uninitialized file {path}")
            raise SinkIOError(f"Could not initialize file: {path}", path) from exc
        return sink

    def end_session(self) -> Tuple[Optional[Path], Optional[Path]]:
        """
        Flush and close both log files

        Returns:
        --------
        Tuple[Optional[Path], Optional[Path]]
            (primary path, RINEX path); None for a file that was never
            opened. Paths are returned even if closing failed.
        """
        with self._locked():
            if self._session is None:
                return None, None
            return self._close_session_locked()

    def end_session_and_list_files(self) -> List[Path]:
        """End the session and hand the completed files to ``publish``."""
        paths = [path for path in self.end_session() if path is not None]
        if paths and self.publish is not None:
            try:
                self.publish(paths)
            except Exception as exc:
                with self._locked():
                    self._report_error(f"Unable to publish log files: {exc}", exc)
        return paths

    def _close_session_locked(self) -> Tuple[Optional[Path], Optional[Path]]:
        session = self._session
        self._session = None
        self._close_primary_locked(session)
        self._close_rinex_locked(session)
        logger.info(f"Session started at {session.started_at} closed")
        return session.primary_path, session.rinex_path

    def _close_primary_locked(self, session: Session):
        if session.primary_sink is None:
            return
        sink, session.primary_sink = session.primary_sink, None
        try:
            try:
                sink.flush()
            finally:
                sink.close()
        except OSError as exc:
            self._report_error(ERROR_CLOSING_FILE, exc)

    def _close_rinex_locked(self, session: Session):
        if session.rinex_sink is None:
            return
        sink, session.rinex_sink = session.rinex_sink, None
        try:
            try:
                sink.flush()
            finally:
                sink.close()
        except OSError as exc:
            self._report_error(ERROR_CLOSING_RINEX, exc)

    def start_rinex_logging(self) -> Optional[SessionHandle]:
        """Start a session unless one with an open RINEX log is running."""
        with self._locked():
            if self._session is not None and self._session.rinex_open:
                return self._session.handle()
        return self.start_session()

    def stop_rinex_logging(self) -> Optional[Path]:
        """Close only the RINEX log; the primary log keeps recording."""
        with self._locked():
            if self._session is None or not self._session.rinex_open:
                return None
            self._close_rinex_locked(self._session)
            logger.info(f"RINEX logging stopped: {self._session.rinex_path}")
            return self._session.rinex_path

    def __enter__(self):
        self.start_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_session()

    # ------------------------------------------------------------------
    # Appending
    # ------------------------------------------------------------------

    def append_primary(self, line: str):
        """Append one record to the primary log, dropped if it is closed."""
        with self._locked():
            self._write_primary_locked(line)

    def append_rinex(self, line: str):
        """Append one record to the RINEX log, dropped if it is closed."""
        with self._locked():
            self._write_rinex_locked(line)

    def _write_primary_locked(self, line: str):
        session = self._session
        if session is None or session.primary_sink is None:
            logger.log(LogLevel.TRACE.value, "Primary log closed, record dropped")
            return
        try:
            session.primary_sink.write(line + LINE_TERMINATOR)
        except OSError as exc:
            self._report_error(ERROR_WRITING_FILE, exc)

    def _write_rinex_locked(self, line: str):
        session = self._session
        if session is None or session.rinex_sink is None:
            logger.log(LogLevel.TRACE.value, "RINEX log closed, record dropped")
            return
        try:
            session.rinex_sink.write(line + LINE_TERMINATOR)
        except OSError as exc:
            self._report_error(ERROR_WRITING_RINEX, exc)

    # ------------------------------------------------------------------
    # Event sink
    # ------------------------------------------------------------------

    def on_clock_and_measurement(self, clock: ClockSnapshot, measurement: SatelliteMeasurement):
        with self._locked():
            self._log_measurement_locked(clock, measurement)

    def on_measurements(self, event: MeasurementsEvent):
        """Log every measurement of a batch under a single lock hold."""
        with self._locked():
            for pair in event:
                self._log_measurement_locked(pair.clock, pair.measurement)

    def _log_measurement_locked(self, clock: ClockSnapshot, measurement: SatelliteMeasurement):
        if self._session is None:
            return
        clock_part, measurement_part, rinex_line = encode_clock_and_measurement(
            clock, measurement, self._elapsed_millis(), self.settings.agc_supported)
        self._write_primary_locked(clock_part + measurement_part)
        self._write_rinex_locked(rinex_line)

    def on_fix(self, fix: Fix):
        with self._locked():
            if self._session is None:
                return
            self._write_primary_locked(encode_fix(fix))
            self._write_rinex_locked(encode_rinex_fix(fix))

    def on_navigation_message(self, nav: NavigationMessage):
        with self._locked():
            if self._session is None:
                return
            primary_line, rinex_line = encode_navigation_message(nav, self._wall_clock())
            self._write_primary_locked(primary_line)
            self._write_rinex_locked(rinex_line)

    def on_nmea(self, sentence: NmeaSentence):
        with self._locked():
            if self._session is None:
                return
            self._write_primary_locked(encode_nmea(sentence))

    def handle_event(self, event):
        """Route any supported receiver event to its ``on_*`` method."""
        if isinstance(event, ClockAndMeasurement):
            self.on_clock_and_measurement(event.clock, event.measurement)
        elif isinstance(event, MeasurementsEvent):
            self.on_measurements(event)
        elif isinstance(event, Fix):
            self.on_fix(event)
        elif isinstance(event, NavigationMessage):
            self.on_navigation_message(event)
        elif isinstance(event, NmeaSentence):
            self.on_nmea(event)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    # ------------------------------------------------------------------
    # Retention
    # ------------------------------------------------------------------

    def prune_stale_files(self,
                          retained_paths: Optional[Iterable[PathLike]] = None,
                          max_files: Optional[int] = None,
                          min_usable_bytes: Optional[int] = None,
                          directory: Optional[PathLike] = None) -> List[Path]:
        """
        Delete undersized and excess log files

        Files below ``min_usable_bytes`` are deleted first, then the oldest
        files (by modification time) until at most ``max_files`` remain.
        Retained paths and the files of the open session are never deleted.

        Parameters:
        -----------
        retained_paths : Iterable of paths, optional
            Files that must be kept regardless of size or age
        max_files : int, optional
            Maximum number of files kept (settings default)
        min_usable_bytes : int, optional
            Minimum size of a usable file (settings default)
        directory : path, optional
            Directory to prune, the primary log directory by default

        Returns:
        --------
        List[Path]
            Deleted files
        """
        if max_files is None:
            max_files = self.settings.max_files_stored
        if min_usable_bytes is None:
            min_usable_bytes = self.settings.minimum_usable_file_size_bytes
        target = Path(directory) if directory is not None else self.primary_directory

        with self._locked():
            retained = {Path(p).resolve() for p in (retained_paths or ())}
            if self._session is not None:
                retained.update(p.resolve() for p in (self._session.primary_path,
                                                      self._session.rinex_path) if p is not None)
            deleted = _prune_directory(target, retained, max_files, min_usable_bytes,
                                       self._report_error)

        if deleted:
            logger.info(f"Pruned {len(deleted)} stale log files from {target}")
        return deleted


def _prune_directory(directory: Path,
                     retained: set,
                     max_files: int,
                     min_usable_bytes: int,
                     report: Callable[[str, Optional[BaseException]], None]) -> List[Path]:
    if not directory.is_dir():
        return []

    entries: List[Tuple[Path, os.stat_result]] = []
    for path in directory.iterdir():
        try:
            if path.is_file():
                entries.append((path, path.stat()))
        except OSError as exc:
            logger.warning(f"Cannot stat {path}: {exc}")

    deleted: List[Path] = []

    def _delete(path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return True
        except OSError as exc:
            report(f"Unable to delete stale log file: {path}", exc)
            return False
        deleted.append(path)
        return True

    remaining: List[Tuple[Path, os.stat_result]] = []
    for path, stat in entries:
        is_retained = path.resolve() in retained
        if not is_retained and stat.st_size < min_usable_bytes:
            if _delete(path):
                continue
        remaining.append((path, stat))

    excess = len(remaining) - max_files
    if excess > 0:
        oldest_first: Sequence[Tuple[Path, os.stat_result]] = sorted(
            remaining, key=lambda item: (item[1].st_mtime, item[0].name))
        for path, _ in oldest_first:
            if excess <= 0:
                break
            if path.resolve() in retained:
                continue
            if _delete(path):
                excess -= 1

    return deleted


__all__ = ['Session', 'SessionHandle', 'SessionManager']
