"""Packed storage for Modbus coil (single bit) values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

MAX_COILS = 2000


class CoilError(ValueError):
    """Raised when a coil operation addresses coils or data that do not fit."""


def _pattern_bits(pattern: str) -> Iterator[bool]:
    """Yield the bits of a readable bit image such as ``"1101 _0011"``.

    ``'1'`` and ``'0'`` are bits, ``'_'`` drops the bit that follows it and
    any other character is ignored (it also cancels a pending ``'_'``).
    """
    skip = False
    for char in pattern:
        if char in "01":
            if skip:
                skip = False
            else:
                yield char == "1"
        elif char == "_":
            skip = True
        else:
            skip = False


def _last_byte_mask(size: int) -> int:
    return (1 << (((size - 1) & 0x07) + 1)) - 1


class CoilData:
    """A set of up to 2000 coils, packed LSB first into bytes as on the wire."""

    __hash__ = None  # mutable container

    def __init__(self, size: int = 0, init_value: bool = False) -> None:
        if size < 0:
            raise CoilError(f"coil count must not be negative: {size}")
        self._size = min(size, MAX_COILS)
        self._buffer = bytearray((self._size + 7) // 8)
        if init_value:
            self.init(True)

    @classmethod
    def from_pattern(cls, pattern: str) -> CoilData:
        """Build a coil set from a bit image; no or too many bits give an empty set."""
        coils = cls()
        try:
            coils.assign_pattern(pattern)
        except CoilError:
            pass
        return coils

    def copy(self) -> CoilData:
        duplicate = type(self)()
        duplicate._size = self._size
        duplicate._buffer = bytearray(self._buffer)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CoilData):
            return self._size == other._size and self._buffer == other._buffer
        if isinstance(other, str):
            bits = list(_pattern_bits(other))
            if len(bits) > self._size:
                return False
            return all(self._get(i) == bit for i, bit in enumerate(bits))
        return NotImplemented

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __getitem__(self, index: int) -> bool:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"coil index {index} out of range")
        return self._get(index)

    def __iter__(self) -> Iterator[bool]:
        return (self._get(i) for i in range(self._size))

    def __repr__(self) -> str:
        bits = "".join("1" if bit else "0" for bit in self)
        return f"{type(self).__name__}.from_pattern({bits!r})"

    def _get(self, index: int) -> bool:
        return bool(self._buffer[index >> 3] & (1 << (index & 0x07)))

    def _put(self, index: int, value: bool) -> None:
        mask = 1 << (index & 0x07)
        if value:
            self._buffer[index >> 3] |= mask
        else:
            self._buffer[index >> 3] &= ~mask & 0xFF

    def slice(self, start: int = 0, length: int = 0) -> CoilData:
        """Return a new set holding ``length`` coils from ``start`` (0 means to the end).

        Illegal parameters yield an empty set.
        """
        if not self._size or start < 0 or start > self._size:
            return type(self)()
        if length == 0:
            length = self._size - start
        if length < 0 or start + length > self._size:
            return type(self)()
        result = type(self)(length)
        for offset in range(length):
            if self._get(start + offset):
                result._put(offset, True)
        return result

    def set(self, index: int, value: bool) -> None:
        """Set a single coil."""
        if not 0 <= index < self._size:
            raise CoilError(f"coil index {index} out of range")
        self._put(index, bool(value))

    def set_bits(self, start: int, length: int, data: Iterable[int]) -> None:
        """Overwrite ``length`` coils from ``start`` with packed bits from ``data``."""
        packed = bytes(data)
        if length <= 0 or start < 0 or start + length > self._size:
            raise CoilError(f"coils {start}+{length} do not fit into {self._size} coils")
        if len(packed) < (length + 7) // 8:
            raise CoilError(f"{len(packed)} bytes are too few for {length} coils")
        for offset in range(length):
            self._put(start + offset, bool(packed[offset >> 3] & (1 << (offset & 0x07))))

    def set_coils(self, index: int, other: CoilData) -> None:
        """Copy another set's coils in from ``index`` until either set is exhausted."""
        if not other:
            raise CoilError("source coil set is empty")
        if not self._size or not 0 <= index < self._size:
            raise CoilError(f"coil index {index} out of range")
        length = min(self._size - index, len(other))
        for offset, bit in zip(range(length), other):
            self._put(index + offset, bit)

    def set_pattern(self, index: int, pattern: str) -> None:
        """Overwrite coils from ``index`` with a bit image until either is exhausted."""
        if not self._size or not 0 <= index < self._size:
            raise CoilError(f"coil index {index} out of range")
        for bit in _pattern_bits(pattern):
            if index >= self._size:
                break
            self._put(index, bit)
            index += 1

    def assign_pattern(self, pattern: str) -> None:
        """Re-initialise the whole set from a bit image.

        The old coils are dropped first; if the image has no bits or more
        than 2000, the set stays empty and CoilError is raised.
        """
        bits = list(_pattern_bits(pattern))
        self._size = 0
        self._buffer = bytearray()
        if not bits or len(bits) > MAX_COILS:
            raise CoilError(f"bit image holds {len(bits)} bits, need 1..{MAX_COILS}")
        self._size = len(bits)
        self._buffer = bytearray((self._size + 7) // 8)
        for index, bit in enumerate(bits):
            if bit:
                self._put(index, True)

    def init(self, value: bool = False) -> None:
        """Set every coil to ``value``."""
        if not self._size:
            return
        fill = 0xFF if value else 0x00
        self._buffer[:] = bytes([fill]) * len(self._buffer)
        self._buffer[-1] &= _last_byte_mask(self._size)

    def coils(self) -> int:
        return self._size

    def size(self) -> int:
        """Number of bytes the packed coils occupy."""
        return len(self._buffer)

    def data(self) -> bytes:
        return bytes(self._buffer)

    def coils_set_on(self) -> int:
        return sum(bin(byte).count("1") for byte in self._buffer)

    def coils_set_off(self) -> int:
        return self._size - self.coils_set_on()

    def format(self, label: str = "") -> str:
        """Render the coils as groups of four digits after ``label``, wrapped near 80 columns."""
        parts = [label]
        position = len(label)
        for index, bit in enumerate(self):
            parts.append("1" if bit else "0")
            position += 1
            if index % 4 == 3:
                if position >= 80:
                    parts.append("\n")
                    parts.append(" " * len(label))
                    position = len(label) + 1
                else:
                    parts.append(" ")
                    position += 1
        parts.append("\n")
        return "".join(parts)