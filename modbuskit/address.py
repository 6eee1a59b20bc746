"""IPv4 addresses as four mutable octets."""

from __future__ import annotations


def parse_ip(text: str) -> int:
    """Parse a dotted address such as "1.2.3.4" into its 32-bit value.

    Groups are stored as bytes (larger values wrap), missing trailing groups
    are zero, and any stray character or a fifth group yields 0.
    """
    octets = [0, 0, 0, 0]
    index = 0
    value = 0
    for char in text + "\0":
        if char in ".\0":
            octets[index] = value
            index += 1
            value = 0
            if char == "\0":
                break
            if index == 4:
                return 0
        elif "0" <= char <= "9":
            value = (value * 10 + ord(char) - ord("0")) & 0xFF
        else:
            return 0
    return int.from_bytes(bytes(octets), "big")


class IPAddress:
    """An IPv4 address; compares equal to other addresses, 32-bit ints and dotted strings."""

    def __init__(self, value: IPAddress | int | str | None = None) -> None:
        if value is None:
            number = 0
        elif isinstance(value, IPAddress):
            number = int(value)
        elif isinstance(value, str):
            number = parse_ip(value)
        elif isinstance(value, int):
            number = value & 0xFFFFFFFF
        else:
            raise TypeError(f"cannot make an IP address from {type(value).__name__}")
        self._octets = bytearray(number.to_bytes(4, "big"))

    @classmethod
    def from_octets(cls, b0: int, b1: int, b2: int, b3: int) -> IPAddress:
        address = cls()
        address._octets = bytearray(b & 0xFF for b in (b0, b1, b2, b3))
        return address

    def __int__(self) -> int:
        return int.from_bytes(self._octets, "big")

    def __getitem__(self, index: int) -> int:
        """Octet 0..3; any other index reads as 0."""
        if 0 <= index <= 3:
            return self._octets[index]
        return 0

    def __setitem__(self, index: int, value: int) -> None:
        """Set octet 0..3; writes to any other index are discarded."""
        if 0 <= index <= 3:
            self._octets[index] = value & 0xFF

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IPAddress):
            return self._octets == other._octets
        if isinstance(other, str):
            return int(self) == parse_ip(other)
        if isinstance(other, int):
            return int(self) == other & 0xFFFFFFFF
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self))

    def __str__(self) -> str:
        return ".".join(str(b) for b in self._octets)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def octets(self) -> tuple[int, int, int, int]:
        return tuple(self._octets)


NIL_ADDR = IPAddress()