from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

from .commands import send_command
from .models import DashState, ServiceRegistry
from .refresh import refresh_all
from .render import Renderer
from .terminal import RawTerminal


logger = logging.getLogger(__name__)

# Seconds between refreshes when no key arrives
POLL_WINDOW = 1.0

KeyReader = Callable[[float], Optional[str]]
Dispatcher = Callable[[int, str], object]


class InputController:
    """Maps keystrokes to selection moves, quit, and commands.

    q quits, j/k move the selection, an uppercase letter sends its lowercase
    form to the selection (all services when nothing is selected). Other keys
    are ignored.
    """

    def __init__(self, state: DashState, dispatch: Dispatcher) -> None:
        self.state = state
        self.dispatch = dispatch

    def handle_key(self, key: str) -> bool:
        """Apply one key. Returns True when the key ends the poll window."""
        if key == "q":
            self.state.running = False
        elif key == "j":
            self.state.select_next()
        elif key == "k":
            self.state.select_prev()
        elif len(key) == 1 and "A" <= key <= "Z":
            self.dispatch(self.state.selection, key.lower())
        else:
            return False
        return True

    def poll(
        self,
        read_key: KeyReader,
        timeout: float = POLL_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Wait up to timeout seconds in total for a key that does something."""
        deadline = clock() + timeout
        while True:
            remaining = deadline - clock()
            if remaining <= 0:
                return
            key = read_key(remaining)
            if key is None:
                continue
            if self.handle_key(key):
                return


class Dashboard:
    def __init__(
        self,
        base_dir: Path,
        registry: ServiceRegistry,
        stream: TextIO,
        poll_window: float = POLL_WINDOW,
    ) -> None:
        self.base_dir = base_dir
        self.state = DashState(registry=registry)
        self.renderer = Renderer(stream, registry.name_col_width)
        self.controller = InputController(self.state, self._dispatch)
        self.poll_window = poll_window

    def _dispatch(self, selection: int, cmd: str) -> list[str]:
        return send_command(self.base_dir, self.state.registry, selection, cmd)

    def cycle(self, read_key: KeyReader) -> None:
        """One refresh, draw, and input round, in that order."""
        refresh_all(self.base_dir, self.state.registry)
        self.renderer.draw(self.state.registry, self.state.selection)
        self.controller.poll(read_key, self.poll_window)

    def run(self, read_key: KeyReader) -> None:
        self.renderer.start(len(self.state.registry))
        while self.state.running:
            self.cycle(read_key)


def run_dash(base_dir: Path, registry: ServiceRegistry, fd: int | None = None, stream: TextIO | None = None) -> None:
    """Run the dashboard on the controlling terminal until q is pressed."""
    if fd is None:
        fd = sys.stdin.fileno()
    if stream is None:
        stream = sys.stdout
    dash = Dashboard(base_dir, registry, stream)
    logger.debug("watching %d services under %s", len(registry), base_dir)
    with RawTerminal(fd) as term:
        dash.run(term.read_key)
    logger.debug("dashboard closed")
