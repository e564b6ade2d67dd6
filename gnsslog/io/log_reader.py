"""Read a primary GNSS log back into pandas DataFrames.

The primary log is the comma-delimited ``gnss_log_<timestamp>.txt`` file
written by :class:`gnsslog.io.session.SessionManager`. Each record type
(``Raw``, ``Fix``, ``Nav``, ``NMEA``) becomes its own DataFrame, with columns
named after the schema lines of the file header. Empty fields mean "value
not available" and are read as missing values, never as zero.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from ..core.constants import (COMMENT_START, RECORD_DELIMITER, RECORD_FIX,
                              RECORD_NAV, RECORD_NMEA, RECORD_RAW)
from .headers import FIX_COLUMNS, NAV_COLUMNS, NMEA_COLUMNS, RAW_COLUMNS

logger = logging.getLogger(__name__)

RECORD_TYPES = (RECORD_RAW, RECORD_FIX, RECORD_NAV, RECORD_NMEA)

RAW_INTEGER_COLUMNS = {
    "ElapsedRealtimeMillis", "TimeNanos", "LeapSecond", "FullBiasNanos",
    "HardwareClockDiscontinuityCount", "Svid", "State", "ReceivedSvTimeNanos",
    "ReceivedSvTimeUncertaintyNanos", "AccumulatedDeltaRangeState",
    "CarrierCycles", "MultipathIndicator", "ConstellationType",
}

FIX_FLOAT_COLUMNS = ["Latitude", "Longitude", "Altitude", "Speed", "Accuracy"]

# Nav records end with a variable number of data bytes
NAV_FIXED_FIELDS = len(NAV_COLUMNS) - 1


def _parse_int(token: str):
    return pd.NA if token == "" else int(token)


def _parse_float(token: str) -> float:
    return np.nan if token == "" else float(token)


def _schema_from_comment(line: str) -> Optional[tuple]:
    body = line[len(COMMENT_START):] if line.startswith(COMMENT_START) else line[1:]
    parts = body.strip().split(RECORD_DELIMITER)
    if len(parts) > 1 and parts[0] in (RECORD_RAW, RECORD_FIX, RECORD_NAV):
        return parts[0], parts[1:]
    return None


def _raw_frame(rows: List[List[str]], columns: List[str]) -> pd.DataFrame:
    data = {}
    for idx, name in enumerate(columns):
        values = [row[idx] for row in rows]
        if name in RAW_INTEGER_COLUMNS:
            data[name] = pd.array([_parse_int(v) for v in values], dtype="Int64")
        else:
            data[name] = np.array([_parse_float(v) for v in values], dtype=np.float64)
    return pd.DataFrame(data, columns=columns)


def _fix_frame(rows: List[List[str]], columns: List[str]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=columns)
    for name in FIX_FLOAT_COLUMNS:
        if name in df.columns:
            df[name] = np.array([_parse_float(v) for v in df[name]], dtype=np.float64)
    time_column = columns[-1]
    df[time_column] = pd.array([_parse_int(v) for v in df[time_column]], dtype="Int64")
    return df


def _nav_frame(rows: List[List[str]], columns: List[str]) -> pd.DataFrame:
    fixed_columns = columns[:NAV_FIXED_FIELDS]
    data = {
        name: pd.array([_parse_int(row[idx]) for row in rows], dtype="Int64")
        for idx, name in enumerate(fixed_columns)
    }
    data[columns[NAV_FIXED_FIELDS]] = [[int(b) for b in row[NAV_FIXED_FIELDS:]] for row in rows]
    return pd.DataFrame(data, columns=columns[:NAV_FIXED_FIELDS + 1])


def _nmea_frame(rows: List[List[str]]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=NMEA_COLUMNS)
    df["TimestampMillis"] = pd.array([_parse_int(v) for v in df["TimestampMillis"]], dtype="Int64")
    return df


def read_gnss_log(path: str | Path, strict: bool = True) -> Dict[str, pd.DataFrame]:
    """
    Parse a primary GNSS log into one DataFrame per record type

    Parameters
    ----------
    path : str or Path
        Primary log file
    strict : bool
        Raise on malformed records; otherwise skip them with a warning

    Returns
    -------
    Dict[str, pd.DataFrame]
        Keys ``Raw``, ``Fix``, ``Nav`` and ``NMEA``. Nav data bytes are kept
        as a list of signed integers per row.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        In strict mode, on a record with an unknown type or a wrong number
        of fields
    """
    log_path = Path(path)
    if not log_path.exists():
        raise FileNotFoundError(log_path)

    schemas = {
        RECORD_RAW: list(RAW_COLUMNS),
        RECORD_FIX: list(FIX_COLUMNS),
        RECORD_NAV: list(NAV_COLUMNS),
    }
    rows: Dict[str, List[List[str]]] = {record: [] for record in RECORD_TYPES}

    def _malformed(line_no: int, reason: str):
        message = f"{log_path}:{line_no}: {reason}"
        if strict:
            raise ValueError(message)
        logger.warning(f"Skipping malformed record {message}")

    with log_path.open("r", encoding="utf-8") as fh:
        for line_no, line in enumerate(fh, start=1):
            line = line.rstrip("\r\n")
            if not line:
                continue
            if line.startswith("#"):
                schema = _schema_from_comment(line)
                if schema is not None:
                    schemas[schema[0]] = schema[1]
                continue

            record, _, rest = line.partition(RECORD_DELIMITER)
            if record == RECORD_NMEA:
                # Sentences contain the delimiter themselves; the timestamp is the last field
                sentence, sep, timestamp = rest.rpartition(RECORD_DELIMITER)
                if not sep:
                    _malformed(line_no, "NMEA record without timestamp")
                    continue
                rows[RECORD_NMEA].append([sentence, timestamp])
                continue
            if record not in schemas:
                _malformed(line_no, f"unknown record type {record!r}")
                continue

            fields = rest.split(RECORD_DELIMITER)
            expected = len(schemas[record])
            if record == RECORD_NAV:
                if len(fields) < NAV_FIXED_FIELDS:
                    _malformed(line_no, f"Nav record with {len(fields)} fields")
                    continue
            elif len(fields) != expected:
                _malformed(line_no, f"{record} record with {len(fields)} fields, expected {expected}")
                continue
            rows[record].append(fields)

    frames = {
        RECORD_RAW: _raw_frame(rows[RECORD_RAW], schemas[RECORD_RAW]),
        RECORD_FIX: _fix_frame(rows[RECORD_FIX], schemas[RECORD_FIX]),
        RECORD_NAV: _nav_frame(rows[RECORD_NAV], schemas[RECORD_NAV]),
        RECORD_NMEA: _nmea_frame(rows[RECORD_NMEA]),
    }
    logger.info(f"Read {log_path.name}: " + ", ".join(f"{len(df)} {name}" for name, df in frames.items()))
    return frames


__all__ = ["RECORD_TYPES", "read_gnss_log"]
