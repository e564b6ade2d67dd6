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

"""Receiver event data structures"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .constellation import ConstellationType


@dataclass(frozen=True)
class ClockSnapshot:
    """GNSS receiver clock state attached to a batch of measurements.

    Optional fields use ``None`` when the receiver did not populate them;
    the matching ``has_*`` property is the has-flag of that field.

    Attributes
    ----------
    time_nanos : int
        Receiver hardware clock value in nanoseconds
    full_bias_nanos : int
        Difference between hardware clock and GPS time in nanoseconds
    hardware_clock_discontinuity_count : int
        Count of hardware clock discontinuities since boot
    leap_second : int, optional
        Leap second count
    time_uncertainty_nanos : float, optional
        1-sigma uncertainty of ``time_nanos``
    bias_nanos : float, optional
        Sub-nanosecond clock bias
    bias_uncertainty_nanos : float, optional
        1-sigma uncertainty of the bias
    drift_nanos_per_second : float, optional
        Clock drift
    drift_uncertainty_nanos_per_second : float, optional
        1-sigma uncertainty of the drift
    """
    time_nanos: int
    full_bias_nanos: int = 0
    hardware_clock_discontinuity_count: int = 0
    leap_second: Optional[int] = None
    time_uncertainty_nanos: Optional[float] = None
    bias_nanos: Optional[float] = None
    bias_uncertainty_nanos: Optional[float] = None
    drift_nanos_per_second: Optional[float] = None
    drift_uncertainty_nanos_per_second: Optional[float] = None

    @property
    def has_leap_second(self) -> bool:
        return self.leap_second is not None

    @property
    def has_time_uncertainty_nanos(self) -> bool:
        return self.time_uncertainty_nanos is not None

    @property
    def has_bias_nanos(self) -> bool:
        return self.bias_nanos is not None

    @property
    def has_bias_uncertainty_nanos(self) -> bool:
        return self.bias_uncertainty_nanos is not None

    @property
    def has_drift_nanos_per_second(self) -> bool:
        return self.drift_nanos_per_second is not None

    @property
    def has_drift_uncertainty_nanos_per_second(self) -> bool:
        return self.drift_uncertainty_nanos_per_second is not None


@dataclass(frozen=True)
class SatelliteMeasurement:
    """Raw measurement of a single satellite signal.

    Attributes
    ----------
    svid : int
        Satellite id within its constellation
    constellation_type : ConstellationType
        Constellation of the satellite
    time_offset_nanos : float
        Offset of the measurement from the clock ``time_nanos``
    state : int
        Tracking state bitmask
    received_sv_time_nanos : int
        Received satellite time of week in nanoseconds
    received_sv_time_uncertainty_nanos : int
        1-sigma uncertainty of the received satellite time
    cn0_dbhz : float
        Carrier-to-noise density in dB-Hz
    pseudorange_rate_meters_per_second : float
        Pseudorange rate (Doppler derived)
    pseudorange_rate_uncertainty_meters_per_second : float
        1-sigma uncertainty of the pseudorange rate
    accumulated_delta_range_state : int
        Accumulated delta range state bitmask
    accumulated_delta_range_meters : float
        Accumulated delta range since the last channel reset
    accumulated_delta_range_uncertainty_meters : float
        1-sigma uncertainty of the accumulated delta range
    multipath_indicator : int
        Multipath indicator (0 unknown, 1 detected, 2 not detected)

    Notes
    -----
    Carrier fields, ``snr_in_db`` and ``automatic_gain_control_level_db`` are
    optional; ``None`` means the has-flag is false. The AGC level is only
    available on newer receiver platforms.
    """
    svid: int
    constellation_type: ConstellationType = ConstellationType.GPS
    time_offset_nanos: float = 0.0
    state: int = 0
    received_sv_time_nanos: int = 0
    received_sv_time_uncertainty_nanos: int = 0
    cn0_dbhz: float = 0.0
    pseudorange_rate_meters_per_second: float = 0.0
    pseudorange_rate_uncertainty_meters_per_second: float = 0.0
    accumulated_delta_range_state: int = 0
    accumulated_delta_range_meters: float = 0.0
    accumulated_delta_range_uncertainty_meters: float = 0.0
    multipath_indicator: int = 0
    carrier_frequency_hz: Optional[float] = None
    carrier_cycles: Optional[int] = None
    carrier_phase: Optional[float] = None
    carrier_phase_uncertainty: Optional[float] = None
    snr_in_db: Optional[float] = None
    automatic_gain_control_level_db: Optional[float] = None

    @property
    def has_carrier_frequency_hz(self) -> bool:
        return self.carrier_frequency_hz is not None

    @property
    def has_carrier_cycles(self) -> bool:
        return self.carrier_cycles is not None

    @property
    def has_carrier_phase(self) -> bool:
        return self.carrier_phase is not None

    @property
    def has_carrier_phase_uncertainty(self) -> bool:
        return self.carrier_phase_uncertainty is not None

    @property
    def has_snr_in_db(self) -> bool:
        return self.snr_in_db is not None

    @property
    def has_automatic_gain_control_level_db(self) -> bool:
        return self.automatic_gain_control_level_db is not None


@dataclass(frozen=True)
class NavigationMessage:
    """Navigation message bits decoded by the receiver for one satellite."""
    svid: int
    type: int
    status: int
    message_id: int
    submessage_id: int
    data: bytes = b""


@dataclass(frozen=True)
class Fix:
    """Location fix reported by a location provider.

    ``time_millis`` is the UTC time of the fix in milliseconds since the
    Unix epoch.
    """
    provider: str
    latitude: float
    longitude: float
    altitude: float = 0.0
    speed: float = 0.0
    accuracy: float = 0.0
    time_millis: int = 0


@dataclass(frozen=True)
class NmeaSentence:
    """Raw NMEA sentence with its reception timestamp in milliseconds."""
    text: str
    timestamp_millis: int


@dataclass(frozen=True)
class ClockAndMeasurement:
    """A single measurement paired with the clock it was taken against."""
    clock: ClockSnapshot
    measurement: SatelliteMeasurement


@dataclass(frozen=True)
class MeasurementsEvent:
    """Batch of measurements sharing one clock snapshot."""
    clock: ClockSnapshot
    measurements: Tuple[SatelliteMeasurement, ...] = field(default_factory=tuple)

    def __iter__(self):
        for measurement in self.measurements:
            yield ClockAndMeasurement(self.clock, measurement)

    def __len__(self):
        return len(self.measurements)


# Events accepted by SessionManager.handle_event
GnssEvent = Union[ClockAndMeasurement, MeasurementsEvent, NavigationMessage, Fix, NmeaSentence]


__all__ = [
    'ClockSnapshot', 'SatelliteMeasurement', 'NavigationMessage', 'Fix',
    'NmeaSentence', 'ClockAndMeasurement', 'MeasurementsEvent', 'GnssEvent',
]
