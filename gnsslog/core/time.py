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

"""Time conversions for log file names and RINEX date blocks"""

import time
from datetime import datetime, timedelta, timezone
from typing import Optional

from .constants import FILE_TIMESTAMP_FORMAT, NANOS_PER_MILLI

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

RINEX_DATE_BLOCK_FORMAT = "%-4d %-2d %-2d %-2d %-2d %-11.3f"


def nanos_to_millis(nanos: int) -> int:
    """Convert nanoseconds to milliseconds, truncating toward zero."""
    millis = abs(int(nanos)) // NANOS_PER_MILLI
    return -millis if nanos < 0 else millis


def millis_to_datetime(epoch_millis: int) -> datetime:
    """Convert milliseconds since the Unix epoch to an aware UTC datetime."""
    return UNIX_EPOCH + timedelta(milliseconds=int(epoch_millis))


def datetime_to_millis(dt: datetime) -> int:
    """Convert a datetime (naive values are taken as UTC) to epoch milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - UNIX_EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def format_rinex_date_block(epoch_millis: int) -> str:
    """
    Format the RINEX date block of a record

    Parameters:
    -----------
    epoch_millis : int
        Time in milliseconds since the Unix epoch, interpreted in UTC

    Returns:
    --------
    str
        Year, month, day, hour, minute left aligned in 4/2/2/2/2 columns,
        then seconds with milliseconds left aligned in an 11 column field
    """
    dt = millis_to_datetime(epoch_millis)
    seconds = dt.second + (dt.microsecond // 1000) / 1000.0
    return RINEX_DATE_BLOCK_FORMAT % (dt.year, dt.month, dt.day, dt.hour, dt.minute, seconds)


def utc_now() -> datetime:
    """Current wall clock time in UTC"""
    return datetime.now(timezone.utc)


def local_now() -> datetime:
    """Current wall clock time in the host time zone"""
    return datetime.now()


def file_timestamp(dt: Optional[datetime] = None) -> str:
    """Timestamp used in log file names, e.g. ``2024_05_01_13_45_09``."""
    if dt is None:
        dt = local_now()
    return dt.strftime(FILE_TIMESTAMP_FORMAT)


def elapsed_realtime_millis() -> int:
    """Monotonic milliseconds, the elapsed-time column of Raw records"""
    return int(time.monotonic() * 1000)


__all__ = [
    'UNIX_EPOCH', 'RINEX_DATE_BLOCK_FORMAT', 'nanos_to_millis',
    'millis_to_datetime', 'datetime_to_millis', 'format_rinex_date_block',
    'utc_now', 'local_now', 'file_timestamp', 'elapsed_realtime_millis',
]
