from __future__ import annotations

import logging
import time
from pathlib import Path

from .models import Service, ServiceRegistry
from .status import StatusFormatError, decode_pid, read_record, read_status


logger = logging.getLogger(__name__)


def status_path(base_dir: Path, name: str) -> Path:
    return base_dir / name / "supervise" / "status"


def log_status_path(base_dir: Path, name: str) -> Path:
    return base_dir / name / "log" / "supervise" / "status"


def down_path(base_dir: Path, name: str) -> Path:
    return base_dir / name / "down"


def _read_log_pid(path: Path) -> int | None:
    # Log supervision is optional; any failure means "no log process"
    try:
        return decode_pid(read_record(path))
    except (OSError, StatusFormatError):
        return None


def refresh_service(base_dir: Path, service: Service, now: int) -> None:
    """Overwrite the service's fields from its on-disk state."""
    try:
        rec = read_status(status_path(base_dir, service.name), now)
    except (OSError, StatusFormatError) as e:
        logger.debug("status of %s unreadable: %s", service.name, e)
        service.readable = False
        service.pid = None
        service.uptime = 0
    else:
        service.readable = True
        service.pid = rec.pid
        service.uptime = rec.uptime
    service.log_pid = _read_log_pid(log_status_path(base_dir, service.name))
    try:
        service.active = not down_path(base_dir, service.name).exists()
    except OSError:
        service.active = True


def refresh_all(base_dir: Path, registry: ServiceRegistry, now: int | None = None) -> None:
    """Refresh every service in registry order; one failure never stops the cycle."""
    if now is None:
        now = int(time.time())
    for svc in registry:
        refresh_service(base_dir, svc, now)
