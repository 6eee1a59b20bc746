"""Levelled log output and hex dumps in the library's console format."""

from __future__ import annotations

import enum
import inspect
import sys
import time
from collections.abc import Iterable
from typing import TextIO

RED = "\x1b[1;31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[1;33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"
NORMAL = "\x1b[0m"

_LINE_WIDTH = 78
_ASCII_OFFSET = 61
_BYTES_PER_LINE = 16


class LogLevel(enum.IntEnum):
    """Log levels; a message is shown when the logger's level is at least its own."""

    NONE = 0
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5
    VERBOSE = 6

    @property
    def letter(self) -> str:
        """Single letter tag used in log lines."""
        return self.name[0]

    @property
    def color(self) -> str:
        """Colour prefix for the level, empty for uncoloured levels."""
        if self is LogLevel.CRITICAL:
            return RED
        if self is LogLevel.ERROR:
            return YELLOW
        return ""


def file_name(path: str) -> str:
    """Return the part of ``path`` after the last '/' or '\\'."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1:]


def hex_dump(letter: str, label: str, data: Iterable[int], address: int = 0) -> str:
    """Render ``data`` as a labelled hex dump, 16 bytes per line with an ASCII column."""
    payload = bytes(data)
    parts = [f"[{letter}] {label}: @{address:X}/{len(payload) & 0xFFFFFFFF}:\n"]
    for offset in range(0, len(payload), _BYTES_PER_LINE):
        line = [" "] * _LINE_WIDTH
        line[60] = "|"
        line[77] = "|"
        prefix = f"  | {offset & 0xFFFF:04X}: "
        line[: len(prefix)] = prefix
        position = len(prefix)
        chunk = payload[offset:offset + _BYTES_PER_LINE]
        for step, byte in enumerate(chunk):
            if step == 8:
                position += 1
            line[position:position + 3] = f"{byte:02X} "
            position += 3
            line[_ASCII_OFFSET + step] = chr(byte) if 32 <= byte <= 127 else "."
        parts.append("".join(line) + "\n")
    return "".join(parts)


class ModbusLogger:
    """Writes levelled messages and hex dumps to a text stream."""

    def __init__(self, level: int = LogLevel.ERROR, stream: TextIO | None = None) -> None:
        self.level = LogLevel(level)
        self._stream = stream
        self._started = time.monotonic()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def enabled(self, level: int) -> bool:
        return self.level >= LogLevel(level)

    def _millis(self) -> int:
        return int((time.monotonic() - self._started) * 1000)

    def log(self, level: int, message: str) -> None:
        """Write ``message`` with a header naming time, caller file, line and function."""
        level = LogLevel(level)
        if not self.enabled(level):
            return
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is not None:
            where = file_name(caller.f_code.co_filename)
            line = caller.f_lineno
            func = caller.f_code.co_name
        else:
            where, line, func = "?", 0, "?"
        del frame, caller
        header = f"[{level.letter}] {self._millis()}| {where:<20} [{line:4d}] {func}: "
        self._emit(level, header + message)

    def raw(self, level: int, message: str) -> None:
        """Write ``message`` without a header."""
        level = LogLevel(level)
        if self.enabled(level):
            self._emit(level, message)

    def dump(self, level: int, label: str, data: Iterable[int]) -> None:
        """Write a hex dump of ``data`` under ``label``."""
        level = LogLevel(level)
        if self.enabled(level):
            self.stream.write(hex_dump(level.letter, label, data, id(data)))

    def _emit(self, level: LogLevel, text: str) -> None:
        color = level.color
        self.stream.write(f"{color}{text}{NORMAL}" if color else text)