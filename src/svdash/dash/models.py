from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


MAX_SERVICES = 64
MAX_NAME = 32
MIN_NAME_WIDTH = 4

BROADCAST = -1


@dataclass(slots=True)
class Service:
    name: str
    active: bool = True
    pid: int | None = None
    log_pid: int | None = None
    uptime: int = 0
    # False when the last refresh could not read a usable status record
    readable: bool = False


class ServiceRegistry:
    """Ordered, bounded collection of services discovered at startup.

    The set of services never changes after construction; only the fields of
    each Service are rewritten by the refresher.
    """

    def __init__(self, services: Iterable[Service] = (), limit: int = MAX_SERVICES) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._services: list[Service] = []
        self._names: set[str] = set()
        for svc in services:
            self.add(svc)

    def add(self, service: Service) -> None:
        if service.name in self._names:
            raise ValueError(f"duplicate service name: {service.name}")
        if self.full:
            raise ValueError(f"too many services (limit {self.limit})")
        self._services.append(service)
        self._names.add(service.name)

    @property
    def full(self) -> bool:
        return len(self._services) >= self.limit

    @property
    def name_col_width(self) -> int:
        longest = max((len(s.name) for s in self._services), default=0)
        return min(max(MIN_NAME_WIDTH, longest), MAX_NAME)

    def names(self) -> list[str]:
        return [s.name for s in self._services]

    def __len__(self) -> int:
        return len(self._services)

    def __iter__(self) -> Iterator[Service]:
        return iter(self._services)

    def __getitem__(self, index: int) -> Service:
        return self._services[index]


def next_selection(selection: int, count: int) -> int:
    """Move down one slot; the broadcast slot (-1) sits before index 0."""
    return (selection + 2) % (count + 1) - 1


def prev_selection(selection: int, count: int) -> int:
    return (selection + count + 1) % (count + 1) - 1


@dataclass(slots=True)
class DashState:
    registry: ServiceRegistry
    selection: int = BROADCAST
    running: bool = True

    def select_next(self) -> None:
        self.selection = next_selection(self.selection, len(self.registry))

    def select_prev(self) -> None:
        self.selection = prev_selection(self.selection, len(self.registry))
