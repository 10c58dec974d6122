"""Input Event Source

Polls a key reader with a fixed tick interval and feeds a bounded queue
with ``KeyPress`` events, or a ``Tick`` when the interval passes without
input. Reading blocks, so it runs in a worker thread and never stalls the
event loop.
"""
import asyncio
import codecs
import os
import select
import sys
import termios
import tty
from typing import Protocol

from wordref.core.logging import input_logger

from .events import InputEvent, KeyCode, KeyPress, Tick

log = input_logger()

# Seconds to wait for the rest of an escape sequence before reading Esc
ESCAPE_DELAY = 0.05

_ESCAPE_SEQUENCES = {
    "\x1b[C": KeyCode.RIGHT,
    "\x1b[D": KeyCode.LEFT,
    "\x1bOC": KeyCode.RIGHT,
    "\x1bOD": KeyCode.LEFT,
}
_SINGLE_KEYS = {
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
}


def decode_keys(data: str) -> list[KeyPress]:
    """Decode raw terminal bytes (already text) into key presses.

    ``data`` is taken as complete: a trailing lone ``\\x1b`` is Esc.
    """
    keys: list[KeyPress] = []
    i = 0
    while i < len(data):
        if data[i] == "\x1b":
            sequence = data[i:i + 3]
            if sequence in _ESCAPE_SEQUENCES:
                keys.append(KeyPress(_ESCAPE_SEQUENCES[sequence]))
                i += 3
                continue
            if len(sequence) == 3 and sequence[1] in "[O":
                # Unhandled CSI/SS3 key (up, down, F-keys...)
                keys.append(KeyPress(KeyCode.OTHER))
                i += 3
                continue
            keys.append(KeyPress(KeyCode.ESC))
            i += 1
            continue

        char = data[i]
        if char in _SINGLE_KEYS:
            keys.append(KeyPress(_SINGLE_KEYS[char]))
        elif char.isprintable():
            keys.append(KeyPress.of_char(char))
        else:
            keys.append(KeyPress(KeyCode.OTHER))
        i += 1
    return keys


def split_keys(data: str) -> tuple[list[KeyPress], str]:
    """Decode ``data`` except for an escape sequence cut off at its end.

    Returns the decoded keys and the unfinished prefix (``""``,
    ``"\\x1b"``, ``"\\x1b["`` or ``"\\x1bO"``) to prepend to the next read.
    """
    if data.endswith("\x1b"):
        cut = 1
    elif len(data) >= 2 and data[-2] == "\x1b" and data[-1] in "[O":
        cut = 2
    else:
        cut = 0
    end = len(data) - cut
    return decode_keys(data[:end]), data[end:]


class KeyReader(Protocol):
    def read_keys(self, timeout: float) -> list[KeyPress]:
        """Block up to ``timeout`` seconds; return the keys pressed, if any."""
        ...


class TerminalKeyReader:
    """Reads keys from a POSIX terminal in cbreak mode.

    Use as a context manager so the terminal mode is always restored.
    An escape sequence split across reads is completed from the next
    read; a lone ``\\x1b`` with nothing following within ``escape_delay``
    seconds is Esc.
    """

    def __init__(self, stream=None, escape_delay: float = ESCAPE_DELAY):
        self._fd = (stream or sys.stdin).fileno()
        self._escape_delay = escape_delay
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._saved: list | None = None

    def __enter__(self) -> "TerminalKeyReader":
        self._saved = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def _read(self, timeout: float) -> str | None:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None
        chunk = os.read(self._fd, 64)
        if not chunk:
            return None  # EOF
        return self._decoder.decode(chunk)

    def read_keys(self, timeout: float) -> list[KeyPress]:
        data = self._read(timeout)
        if data is None:
            return []

        keys, pending = split_keys(data)
        while pending:
            more = self._read(self._escape_delay)
            if more is None:
                keys.extend(decode_keys(pending))
                break
            rest, pending = split_keys(pending + more)
            keys.extend(rest)
        return keys


class InputEventSource:
    """Producer of input events on a bounded queue."""

    __slots__ = ("_reader", "_tick_rate")

    def __init__(self, reader: KeyReader, tick_rate: float):
        self._reader = reader
        self._tick_rate = tick_rate

    async def next_events(self) -> list[InputEvent]:
        keys = await asyncio.to_thread(self._reader.read_keys, self._tick_rate)
        if not keys:
            return [Tick()]
        return list(keys)

    async def run(self, events: asyncio.Queue) -> None:
        """Produce events until cancelled."""
        log.debug("input_started", tick_rate=self._tick_rate)
        while True:
            for event in await self.next_events():
                await events.put(event)
