from pathlib import Path

import pytest

from svdash.dash.status import TAI_OFFSET


NOW = 1_700_000_000


def make_record(pid: int = 0, started: int = NOW, size: int = 18) -> bytes:
    """Build a supervise/status record for a state change at `started`."""
    rec = bytearray(size)
    rec[0:8] = (started + TAI_OFFSET).to_bytes(8, "big")
    rec[12:16] = pid.to_bytes(4, "little", signed=True)
    return bytes(rec)


def make_service(
    base: Path,
    name: str,
    pid: int = 0,
    started: int = NOW,
    log_pid: int | None = None,
    down: bool = False,
    ok: bool = True,
) -> Path:
    svc = base / name
    sup = svc / "supervise"
    sup.mkdir(parents=True)
    if ok:
        (sup / "ok").touch()
    (sup / "status").write_bytes(make_record(pid, started))
    (sup / "control").touch()
    if log_pid is not None:
        log_sup = svc / "log" / "supervise"
        log_sup.mkdir(parents=True)
        (log_sup / "status").write_bytes(make_record(log_pid, started))
    if down:
        (svc / "down").touch()
    return svc


@pytest.fixture
def base(tmp_path: Path) -> Path:
    d = tmp_path / "service"
    d.mkdir()
    return d
