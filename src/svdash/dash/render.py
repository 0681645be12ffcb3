from __future__ import annotations

from typing import TextIO

from .models import Service, ServiceRegistry


PLACEHOLDER = "---"
# Columns taken by everything except the name column, plus the row markers
FIXED_COLS = 28
# Header line, the line the cursor rests on, and one spare
FIXED_ROWS = 3


def cursor_up(lines: int) -> str:
    return f"\x1b[{lines}A"


def format_uptime(seconds: int) -> tuple[int, str]:
    """Scale seconds to the largest unit reached: s, m, h, then d.

    Each step divides the already-scaled value, so 60 s is "1 m" and
    86400 s is "1 d".
    """
    value, unit = seconds, "s"
    if value >= 60:
        value, unit = value // 60, "m"
        if value >= 60:
            value, unit = value // 60, "h"
            if value >= 24:
                value, unit = value // 24, "d"
    return value, unit


def _pid_col(pid: int | None) -> str:
    return f"{pid:>5}" if pid else f"{PLACEHOLDER:>5}"


def display_name(name: str) -> str:
    """Printable form of a directory name; undecodable bytes become U+FFFD."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def header(width: int) -> str:
    return f" {'name':<{width}} active  main   log uptime\n"


def format_row(service: Service, width: int, selected: bool = False) -> str:
    lsel, rsel = ("<", ">") if selected else (" ", " ")
    name = display_name(service.name)[:width]
    active = "yes" if service.active else "no"
    if service.readable and service.pid:
        value, unit = format_uptime(service.uptime)
        uptime = f"{value:>4} {unit}"
    else:
        uptime = f"{PLACEHOLDER:>6}"
    return (
        f"{lsel}{name:<{width}} {active:<6} "
        f"{_pid_col(service.pid)} {_pid_col(service.log_pid)} {uptime}{rsel}\n"
    )


def min_size(registry: ServiceRegistry) -> tuple[int, int]:
    """(columns, rows) the table needs."""
    return registry.name_col_width + FIXED_COLS, len(registry) + FIXED_ROWS


class Renderer:
    """Draws the service table in place.

    `start` prints the header and reserves one line per service; every `draw`
    moves the cursor back up over those lines and rewrites them, so the table
    never scrolls.
    """

    def __init__(self, stream: TextIO, width: int) -> None:
        self.stream = stream
        self.width = width

    def start(self, count: int) -> None:
        self.stream.write(header(self.width))
        self.stream.write("\n" * count)
        self.stream.flush()

    def rows(self, registry: ServiceRegistry, selection: int) -> str:
        return "".join(
            format_row(svc, self.width, selected=(i == selection))
            for i, svc in enumerate(registry)
        )

    def draw(self, registry: ServiceRegistry, selection: int) -> None:
        self.stream.write(cursor_up(len(registry)) + self.rows(registry, selection))
        self.stream.flush()
