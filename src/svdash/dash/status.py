"""Decoding of supervise/status records.

daemontools writes an 18-byte record and runit a 20-byte one; both start with
the same layout:

    [0, 8)    TAI64 label of the last state change, big-endian
    [8, 12)   nanoseconds, big-endian (unused here)
    [12, 16)  pid of the supervised process, little-endian, 0 when down

Only the first 16 bytes are interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


# TAI64 labels are offset by 2**62, plus 10 seconds of TAI-UTC difference.
TAI_OFFSET = 4611686018427387914

RECORD_SIZE = 18
MAX_RECORD_SIZE = 20


class StatusFormatError(ValueError):
    """Status record is too short to decode."""


@dataclass(frozen=True, slots=True)
class StatusRecord:
    pid: int | None
    uptime: int


def read_beu64(buf: bytes) -> int:
    return int.from_bytes(buf[:8], "big", signed=False)


def read_lei32(buf: bytes) -> int:
    return int.from_bytes(buf[:4], "little", signed=True)


def decode_pid(record: bytes) -> int | None:
    if len(record) < RECORD_SIZE:
        raise StatusFormatError(f"status record is {len(record)} bytes, need {RECORD_SIZE}")
    pid = read_lei32(record[12:16])
    return pid if pid > 0 else None


def decode_status(record: bytes, now: int) -> StatusRecord:
    """Decode pid and seconds since the last state change.

    A time base later than `now` (clock skew) yields an uptime of 0.
    """
    pid = decode_pid(record)
    when = read_beu64(record[0:8])
    uptime = now + TAI_OFFSET - when
    return StatusRecord(pid=pid, uptime=max(0, uptime))


def read_record(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read(MAX_RECORD_SIZE)


def read_status(path: Path, now: int) -> StatusRecord:
    """Read and decode a status file. Raises OSError or StatusFormatError."""
    return decode_status(read_record(path), now)
