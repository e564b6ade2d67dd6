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

"""Locale independent number formatting for log records.

Python's ``%`` and ``str.format`` operators never consult the host locale,
and numpy's positional float formatter always uses ``.`` as the decimal
separator, so every helper here produces the same text on every host.
"""

from numbers import Integral
from typing import Optional

import numpy as np

EMPTY_FIELD = ""


def format_decimal(value) -> str:
    """Format a number in its default decimal form.

    Integers are written exactly. Floats use the shortest representation that
    round-trips, always positional (never scientific) and always with at
    least one fractional digit.

    Parameters
    ----------
    value : int or float
        Value to format

    Returns
    -------
    str
        Decimal text

    Examples
    --------
    >>> format_decimal(-50000)
    '-50000'
    >>> format_decimal(1.0)
    '1.0'
    >>> format_decimal(1e-05)
    '0.00001'
    """
    if isinstance(value, (bool, np.bool_)):
        return str(int(value))
    if isinstance(value, Integral):
        return str(int(value))
    return np.format_float_positional(float(value), unique=True, trim='0')


def format_optional(value: Optional[object]) -> str:
    """Format an optional value, empty when the has-flag is false."""
    if value is None:
        return EMPTY_FIELD
    return format_decimal(value)


def format_fixed(value: float, width: int = 0, precision: int = 6) -> str:
    """Format a float with a fixed number of decimals, right aligned.

    ``format_fixed(x)`` matches C's ``%f``; ``format_fixed(x, 14, 3)``
    matches ``%14.3f``.
    """
    return "%*.*f" % (width, precision, value)


def signed_bytes(data: bytes) -> np.ndarray:
    """View raw message bytes as signed 8-bit integers (-128..127)."""
    return np.frombuffer(bytes(data), dtype=np.int8)


def format_hex_bytes(data: bytes) -> str:
    """Render each byte as two-digit uppercase hex, each preceded by a space."""
    return "".join(" %02X" % b for b in bytes(data))


__all__ = [
    'EMPTY_FIELD', 'format_decimal', 'format_optional', 'format_fixed',
    'signed_bytes', 'format_hex_bytes',
]
