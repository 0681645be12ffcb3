from __future__ import annotations

import os
import select
import signal
import sys
import termios
from typing import Optional


_EXIT_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def terminal_size(fd: Optional[int] = None) -> tuple[int, int]:
    """(columns, rows) of the terminal on fd (stdin by default), (0, 0) when unknown."""
    try:
        if fd is None:
            fd = sys.stdin.fileno()
        size = os.get_terminal_size(fd)
    except (OSError, ValueError):
        return 0, 0
    return size.columns, size.lines


def _exit_on_signal(signum, _frame) -> None:
    raise SystemExit(128 + signum)


class RawTerminal:
    """Non-canonical, no-echo terminal mode for the lifetime of a with block.

    The previous settings are restored on every way out of the block,
    including SIGTERM and SIGHUP, which are turned into SystemExit while the
    mode is held.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved: Optional[list] = None
        self._saved_handlers: dict[int, object] = {}

    def __enter__(self) -> "RawTerminal":
        self._saved = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        try:
            for sig in _EXIT_SIGNALS:
                self._saved_handlers[sig] = signal.signal(sig, _exit_on_signal)
        except BaseException:
            self.__exit__(None, None, None)
            raise
        return self

    def __exit__(self, *exc) -> None:
        try:
            if self._saved is not None:
                termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)
        finally:
            for sig, handler in self._saved_handlers.items():
                signal.signal(sig, handler)
            self._saved_handlers.clear()
            self._saved = None

    def read_key(self, timeout: float) -> Optional[str]:
        """Wait up to timeout seconds for one byte of input."""
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        except InterruptedError:
            return None
        if not ready:
            return None
        data = os.read(self.fd, 1)
        if not data:
            return None
        return data.decode("latin-1")
