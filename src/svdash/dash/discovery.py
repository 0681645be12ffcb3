from __future__ import annotations

import logging
import os
from pathlib import Path

from .models import MAX_SERVICES, Service, ServiceRegistry


logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """The service directory cannot be used."""


def is_service_dir(path: Path) -> bool:
    """A directory qualifies once its supervisor has created supervise/ok."""
    try:
        return path.is_dir() and (path / "supervise" / "ok").exists()
    except OSError:
        return False


def _list_entries(base_dir: Path) -> list[str]:
    try:
        with os.scandir(base_dir) as it:
            return [entry.name for entry in it]
    except OSError as e:
        raise DiscoveryError(f"could not read directory '{base_dir}'") from e


def discover_services(base_dir: Path, limit: int = MAX_SERVICES) -> ServiceRegistry:
    """Build the registry from the supervised directories under base_dir.

    - Entries without supervise/ok are skipped.
    - Services are sorted by name so display order is stable.
    - At most `limit` services are kept; the rest are logged and dropped.
    """
    names = sorted(n for n in _list_entries(base_dir) if is_service_dir(base_dir / n))
    if not names:
        raise DiscoveryError(f"no services to supervise in '{base_dir}'")
    if len(names) > limit:
        logger.warning("%d services found, showing the first %d", len(names), limit)
        names = names[:limit]
    return ServiceRegistry((Service(name=n) for n in names), limit=limit)
