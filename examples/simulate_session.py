#!/usr/bin/env python3
"""
Simulated GNSS Logging Session
==============================

This example demonstrates:
1. Starting a logging session (primary log and RINEX log)
2. Feeding synthetic measurements, fixes, navigation messages and NMEA
3. Ending the session and pruning old log files
4. Reading the primary log back with pandas
"""

import sys
from pathlib import Path

import numpy as np

from gnsslog.core import (ClockSnapshot, ConstellationType, Fix,
                          MeasurementsEvent, NavigationMessage, NmeaSentence,
                          SatelliteMeasurement, SessionSettings)
from gnsslog.io import SessionManager, read_gnss_log
from gnsslog.logger import setup_logger

GPS_L1_HZ = 1575.42e6


def synthetic_epoch(epoch, rng, full_bias_nanos=-1_300_000_000_000_000_000):
    """One clock snapshot with measurements of a few GPS and Galileo satellites"""
    time_nanos = 1_000_000_000 * (epoch + 1)
    clock = ClockSnapshot(time_nanos=time_nanos,
                          full_bias_nanos=full_bias_nanos,
                          bias_nanos=float(rng.normal(0.0, 0.5)),
                          bias_uncertainty_nanos=10.0,
                          drift_nanos_per_second=float(rng.normal(0.0, 1.0)))

    measurements = []
    for svid, constellation in [(3, ConstellationType.GPS), (7, ConstellationType.GPS),
                                (12, ConstellationType.GALILEO), (24, ConstellationType.GALILEO)]:
        measurements.append(SatelliteMeasurement(
            svid=svid,
            constellation_type=constellation,
            state=16431,
            received_sv_time_nanos=int(time_nanos - rng.integers(65, 85) * 1_000_000),
            received_sv_time_uncertainty_nanos=20,
            cn0_dbhz=round(float(rng.uniform(25.0, 48.0)), 2),
            pseudorange_rate_meters_per_second=float(rng.normal(0.0, 300.0)),
            pseudorange_rate_uncertainty_meters_per_second=0.05,
            carrier_frequency_hz=GPS_L1_HZ,
        ))
    return MeasurementsEvent(clock, tuple(measurements))


def run_session(base_directory, epochs=10, seed=0):
    logger = setup_logger("gnsslog", "INFO")
    rng = np.random.default_rng(seed)

    settings = SessionSettings(base_directory=base_directory)
    manager = SessionManager(settings, notify=lambda message: logger.info(f"[notify] {message}"))

    if manager.start_session() is None:
        logger.error("Could not start logging session")
        return None

    start_millis = 1_700_000_000_000
    for epoch in range(epochs):
        manager.handle_event(synthetic_epoch(epoch, rng))
        manager.handle_event(Fix("gps", 35.681 + 1e-6 * epoch, 139.767, 40.0, 0.5, 4.0,
                                 start_millis + 1000 * epoch))
        manager.handle_event(NmeaSentence(f"$GPGGA,{epoch:06d},3540.86,N,13946.02,E,1,08*5A\r\n",
                                          start_millis + 1000 * epoch))
        if epoch % 5 == 0:
            manager.handle_event(NavigationMessage(svid=3, type=0x0101, status=1, message_id=epoch,
                                                   submessage_id=1,
                                                   data=rng.integers(0, 256, 40, dtype=np.uint8).tobytes()))

    files = manager.end_session_and_list_files()
    logger.info(f"Session files: {[str(f) for f in files]}")

    deleted = manager.prune_stale_files(retained_paths=files)
    logger.info(f"Pruned {len(deleted)} files")

    frames = read_gnss_log(files[0])
    raw = frames["Raw"]
    logger.info(f"Read back {len(raw)} raw measurements")
    print(raw.groupby("ConstellationType")["Cn0DbHz"].mean())
    return files


if __name__ == "__main__":
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("gnss_data")
    run_session(output)
