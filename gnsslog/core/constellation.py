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

"""Constellation identifiers and RINEX system codes.

The receiver reports the constellation of every measurement as a small
integer. The values follow the receiver platform numbering:

- UNKNOWN: 0
- GPS: 1
- SBAS: 2
- GLONASS: 3
- QZSS: 4
- BEIDOU: 5
- GALILEO: 6
- IRNSS: 7

RINEX identifies a satellite system with a single character, which is what
the observation log writes in front of the satellite id.
"""

from enum import IntEnum

UNKNOWN_SYSTEM_CHAR = '?'


class ConstellationType(IntEnum):
    """Satellite constellation as reported with each measurement."""
    UNKNOWN = 0
    GPS = 1
    SBAS = 2
    GLONASS = 3
    QZSS = 4
    BEIDOU = 5
    GALILEO = 6
    IRNSS = 7


# Constellation to RINEX system character mapping
CONSTELLATION_TO_CHAR = {
    ConstellationType.GPS: 'G',
    ConstellationType.GLONASS: 'R',
    ConstellationType.BEIDOU: 'C',
    ConstellationType.GALILEO: 'E',
    ConstellationType.QZSS: 'J',
    ConstellationType.SBAS: 'S',
    ConstellationType.IRNSS: 'I',
}

# RINEX system character to constellation mapping
CHAR_TO_CONSTELLATION = {v: k for k, v in CONSTELLATION_TO_CHAR.items()}


def constellation_code(constellation_type):
    """Get the RINEX system character for a constellation.

    Parameters
    ----------
    constellation_type : ConstellationType or int
        Constellation as an enum member or its raw integer value

    Returns
    -------
    str
        One of 'G', 'R', 'C', 'E', 'J', 'S', 'I', or '?' for any value
        without a defined system character (including UNKNOWN and integers
        outside the enum)

    Examples
    --------
    >>> constellation_code(ConstellationType.GALILEO)
    'E'
    >>> constellation_code(3)  # GLONASS
    'R'
    >>> constellation_code(42)
    '?'
    """
    # IntEnum members hash like their int value, so raw ints hit the table too
    return CONSTELLATION_TO_CHAR.get(constellation_type, UNKNOWN_SYSTEM_CHAR)


def to_constellation(value):
    """Coerce a raw integer into a ConstellationType, UNKNOWN if undefined."""
    try:
        return ConstellationType(value)
    except ValueError:
        return ConstellationType.UNKNOWN


__all__ = [
    'ConstellationType', 'CONSTELLATION_TO_CHAR', 'CHAR_TO_CONSTELLATION',
    'UNKNOWN_SYSTEM_CHAR', 'constellation_code', 'to_constellation',
]
