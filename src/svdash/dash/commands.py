from __future__ import annotations

import logging
import os
from pathlib import Path

from .models import BROADCAST, ServiceRegistry


logger = logging.getLogger(__name__)


def control_path(base_dir: Path, name: str) -> Path:
    return base_dir / name / "supervise" / "control"


def targets(registry: ServiceRegistry, selection: int) -> list[str]:
    """Names a command goes to: every service for the broadcast slot, else one."""
    if selection == BROADCAST:
        return registry.names()
    return [registry[selection].name]


def write_control(path: Path, cmd: str) -> None:
    # The supervisor owns the fifo; never create it, never block on open
    fd = os.open(path, os.O_WRONLY | os.O_NONBLOCK)
    try:
        os.write(fd, cmd.encode("ascii"))
    finally:
        os.close(fd)


def send_command(base_dir: Path, registry: ServiceRegistry, selection: int, cmd: str) -> list[str]:
    """Write one command byte to each target's supervise/control.

    Returns the names the byte was delivered to. A service whose control
    channel cannot be opened or written is skipped.
    """
    if len(cmd) != 1 or not ("a" <= cmd <= "z"):
        raise ValueError(f"command must be a single lowercase letter, got {cmd!r}")
    sent: list[str] = []
    for name in targets(registry, selection):
        try:
            write_control(control_path(base_dir, name), cmd)
        except OSError as e:
            logger.debug("control %r to %s failed: %s", cmd, name, e)
            continue
        logger.debug("sent %r to %s", cmd, name)
        sent.append(name)
    return sent
