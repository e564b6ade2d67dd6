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

"""Record encoders for the primary and RINEX logs.

Every function here is pure: it turns one receiver event into text and
performs no I/O. Primary log records are comma-delimited with the record type
as first field; optional values whose has-flag is false render as an empty
field, so the column count of a record type never changes. RINEX records are
fixed-width lines that start with a UTC date block.

Examples
--------
>>> from gnsslog.core import ClockSnapshot
>>> clock = ClockSnapshot(time_nanos=1000000000, full_bias_nanos=-50000)
>>> encode_clock(clock, elapsed_millis=42)
'Raw,42,1000000000,,,-50000,,,,,0,'
"""

from datetime import datetime
from typing import Optional, Tuple

from ..core.constants import (NANOS_PER_SECOND, RECORD_DELIMITER, RECORD_FIX,
                              RECORD_NAV, RECORD_NMEA, RECORD_RAW,
                              RINEX_EPOCH_FLAG, RINEX_FIELD_SEP,
                              RINEX_FIX_SATELLITE)
from ..core.constellation import constellation_code
from ..core.data_structures import (ClockSnapshot, Fix, NavigationMessage,
                                    NmeaSentence, SatelliteMeasurement)
from ..core.formatting import (EMPTY_FIELD, format_decimal, format_fixed,
                               format_hex_bytes, format_optional,
                               signed_bytes)
from ..core.time import (datetime_to_millis, format_rinex_date_block,
                         nanos_to_millis, utc_now)


def encode_clock(clock: ClockSnapshot, elapsed_millis: int) -> str:
    """Clock part of a Raw record, ending with the delimiter that joins the measurement part."""
    fields = [
        RECORD_RAW,
        format_decimal(elapsed_millis),
        format_decimal(clock.time_nanos),
        format_optional(clock.leap_second),
        format_optional(clock.time_uncertainty_nanos),
        format_decimal(clock.full_bias_nanos),
        format_optional(clock.bias_nanos),
        format_optional(clock.bias_uncertainty_nanos),
        format_optional(clock.drift_nanos_per_second),
        format_optional(clock.drift_uncertainty_nanos_per_second),
        format_decimal(clock.hardware_clock_discontinuity_count),
    ]
    return RECORD_DELIMITER.join(fields) + RECORD_DELIMITER


def encode_measurement(measurement: SatelliteMeasurement, agc_supported: bool = True) -> str:
    """Measurement part of a Raw record.

    The AGC level is written only when the platform supports it and the
    receiver populated it.
    """
    agc = EMPTY_FIELD
    if agc_supported:
        agc = format_optional(measurement.automatic_gain_control_level_db)

    fields = [
        format_decimal(measurement.svid),
        format_decimal(measurement.time_offset_nanos),
        format_decimal(measurement.state),
        format_decimal(measurement.received_sv_time_nanos),
        format_decimal(measurement.received_sv_time_uncertainty_nanos),
        format_decimal(measurement.cn0_dbhz),
        format_decimal(measurement.pseudorange_rate_meters_per_second),
        format_decimal(measurement.pseudorange_rate_uncertainty_meters_per_second),
        format_decimal(measurement.accumulated_delta_range_state),
        format_decimal(measurement.accumulated_delta_range_meters),
        format_decimal(measurement.accumulated_delta_range_uncertainty_meters),
        format_optional(measurement.carrier_frequency_hz),
        format_optional(measurement.carrier_cycles),
        format_optional(measurement.carrier_phase),
        format_optional(measurement.carrier_phase_uncertainty),
        format_decimal(measurement.multipath_indicator),
        format_optional(measurement.snr_in_db),
        format_decimal(int(measurement.constellation_type)),
        agc,
    ]
    return RECORD_DELIMITER.join(fields)


def encode_clock_and_measurement(clock: ClockSnapshot,
                                 measurement: SatelliteMeasurement,
                                 elapsed_millis: int,
                                 agc_supported: bool = True) -> Tuple[str, str, str]:
    """
    Encode one measurement and its clock

    Parameters:
    -----------
    clock : ClockSnapshot
        Receiver clock of the measurement batch
    measurement : SatelliteMeasurement
        Measurement of one satellite signal
    elapsed_millis : int
        Monotonic time of logging in milliseconds
    agc_supported : bool
        Whether the platform reports the AGC level

    Returns:
    --------
    Tuple[str, str, str]
        (clock fragment, measurement fragment, RINEX line). The primary log
        row is the clock fragment directly followed by the measurement
        fragment.
    """
    return (encode_clock(clock, elapsed_millis),
            encode_measurement(measurement, agc_supported),
            encode_rinex_observation(clock, measurement))


def encode_raw(clock: ClockSnapshot, measurement: SatelliteMeasurement,
               elapsed_millis: int, agc_supported: bool = True) -> str:
    """Complete Raw row of the primary log"""
    clock_part, measurement_part, _ = encode_clock_and_measurement(
        clock, measurement, elapsed_millis, agc_supported)
    return clock_part + measurement_part


def encode_rinex_observation(clock: ClockSnapshot, measurement: SatelliteMeasurement) -> str:
    """RINEX line of one measurement: date block, system and svid, C/N0, received time in seconds."""
    date_block = format_rinex_date_block(nanos_to_millis(clock.time_nanos))
    return (date_block
            + RINEX_EPOCH_FLAG
            + constellation_code(measurement.constellation_type)
            + "%02d" % measurement.svid
            + RINEX_FIELD_SEP
            + format_fixed(measurement.cn0_dbhz, 14, 3)
            + RINEX_FIELD_SEP
            + format_fixed(measurement.received_sv_time_nanos / NANOS_PER_SECOND, 14, 9))


def encode_fix(fix: Fix) -> str:
    fields = [
        RECORD_FIX,
        fix.provider,
        format_fixed(fix.latitude),
        format_fixed(fix.longitude),
        format_fixed(fix.altitude),
        format_fixed(fix.speed),
        format_fixed(fix.accuracy),
        "%d" % fix.time_millis,
    ]
    return RECORD_DELIMITER.join(fields)


def encode_rinex_fix(fix: Fix) -> str:
    return (format_rinex_date_block(fix.time_millis)
            + RINEX_EPOCH_FLAG
            + RINEX_FIX_SATELLITE
            + RINEX_FIELD_SEP
            + format_fixed(fix.latitude, 14, 6)
            + RINEX_FIELD_SEP
            + format_fixed(fix.longitude, 14, 6)
            + RINEX_FIELD_SEP
            + format_fixed(fix.altitude, 14, 3))


def encode_navigation_message(nav: NavigationMessage,
                              now: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Encode a navigation message

    Parameters:
    -----------
    nav : NavigationMessage
        Navigation message of one satellite
    now : datetime, optional
        Wall clock time stamped on the RINEX line (navigation messages carry
        no time of their own). Defaults to the current UTC time.

    Returns:
    --------
    Tuple[str, str]
        (primary line, RINEX line). Data bytes are signed decimals in the
        primary line and two-digit uppercase hex in the RINEX line.
    """
    fields = [
        RECORD_NAV,
        format_decimal(nav.svid),
        format_decimal(nav.type),
        format_decimal(nav.status),
        format_decimal(nav.message_id),
        format_decimal(nav.submessage_id),
    ]
    fields.extend(format_decimal(b) for b in signed_bytes(nav.data))
    primary_line = RECORD_DELIMITER.join(fields)

    if now is None:
        now = utc_now()
    rinex_line = (format_rinex_date_block(datetime_to_millis(now))
                  + RINEX_EPOCH_FLAG
                  + "%02d" % nav.svid
                  + RINEX_FIELD_SEP + "%d" % nav.type
                  + RINEX_FIELD_SEP + "%d" % nav.status
                  + RINEX_FIELD_SEP + "%d" % nav.message_id
                  + RINEX_FIELD_SEP + "%d" % nav.submessage_id
                  + format_hex_bytes(nav.data))
    return primary_line, rinex_line


def encode_nmea(sentence: NmeaSentence) -> str:
    return RECORD_DELIMITER.join([RECORD_NMEA, sentence.text.strip(), "%d" % sentence.timestamp_millis])


__all__ = [
    'encode_clock', 'encode_measurement', 'encode_clock_and_measurement',
    'encode_raw', 'encode_rinex_observation', 'encode_fix', 'encode_rinex_fix',
    'encode_navigation_message', 'encode_nmea',
]
