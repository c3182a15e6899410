"""Terminal input/output used by the poll loop and prompts (POSIX only)."""

from __future__ import annotations

import codecs
import fcntl
import logging
import os
import sys
import termios
import time
from contextlib import contextmanager
from typing import ContextManager, Iterator, Optional, Protocol, TextIO

from .config import ReminderSettings

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[0;0H"


class TerminalSetupError(RuntimeError):
    """Raised when stdin cannot be switched into or out of polling mode."""


class Console(Protocol):
    def write(self, message: str) -> None: ...

    def prompt_line(self, message: str) -> str: ...

    def read_available(self) -> str: ...

    def blocking_input(self) -> ContextManager[None]: ...

    def pause(self, seconds: float) -> None: ...

    def clear(self) -> None: ...


class TerminalConsole:
    """Console on a real TTY: non-canonical, non-blocking stdin while polling."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        clear_screen: bool = True,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._clear_screen = clear_screen
        self._saved_attrs: Optional[list] = None
        self._saved_flags: Optional[int] = None
        self._polling = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def fd(self) -> int:
        return self._stdin.fileno()

    def enter(self) -> None:
        """Turn off canonical mode and make stdin non-blocking."""
        try:
            if self._saved_attrs is None:
                self._saved_attrs = termios.tcgetattr(self.fd)
                self._saved_flags = fcntl.fcntl(self.fd, fcntl.F_GETFL)
            attrs = termios.tcgetattr(self.fd)
            attrs[3] &= ~termios.ICANON
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
            fcntl.fcntl(self.fd, fcntl.F_SETFL, self._saved_flags | os.O_NONBLOCK)
        except (termios.error, OSError, ValueError) as exc:
            raise TerminalSetupError(f"cannot switch stdin to polling mode: {exc}") from exc
        self._polling = True
        logger.debug("Terminal switched to non-blocking input.")

    def restore(self) -> None:
        """Put back the terminal settings captured by :meth:`enter`."""
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved_attrs)
            fcntl.fcntl(self.fd, fcntl.F_SETFL, self._saved_flags)
        except (termios.error, OSError, ValueError) as exc:
            raise TerminalSetupError(f"cannot restore terminal settings: {exc}") from exc
        self._polling = False
        logger.debug("Terminal settings restored.")

    @contextmanager
    def blocking_input(self) -> Iterator[None]:
        was_polling = self._polling
        if was_polling:
            self.restore()
        try:
            yield
        finally:
            if was_polling:
                self.enter()

    def write(self, message: str) -> None:
        print(message, file=self._stdout, flush=True)

    def prompt_line(self, message: str) -> str:
        self._stdout.write(f"{message}\t")
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise EOFError("standard input closed")
        return line

    def read_available(self) -> str:
        try:
            data = os.read(self.fd, 1024)
        except BlockingIOError:
            return ""
        return self._decoder.decode(data)

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def clear(self) -> None:
        if self._clear_screen:
            self._stdout.write(CLEAR_SCREEN + "\n")
            self._stdout.flush()


def parse_speed_factor(text: str, settings: ReminderSettings) -> Optional[int]:
    """Return the speed factor in ``text`` or ``None`` when it is unusable."""
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if settings.accepts_speed(value) else None


def prompt_speed_factor(console: Console, settings: ReminderSettings) -> int:
    message = (
        "How many times would you like to speed it up? "
        f"({settings.min_speed}...{settings.max_speed})"
    )
    while True:
        speed_factor = parse_speed_factor(console.prompt_line(message), settings)
        if speed_factor is not None:
            break
    console.pause(settings.clear_delay.total_seconds())
    console.clear()
    return speed_factor
