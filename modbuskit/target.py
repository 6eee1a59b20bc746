"""Parse target descriptors of the form ``host[:port[:serverID]]``."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .address import NIL_ADDR, IPAddress
from .client import hostname_to_ip

DEFAULT_PORT = 502
DEFAULT_SERVER_ID = 1

_IP_PATTERN = re.compile(
    r"(([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3}))"
    r"(:([0-9]{1,5})(:([0-9]{1,3}))?)?"
)
_HOST_PATTERN = re.compile(
    r"(([a-zA-Z0-9][a-zA-Z0-9\-]*)(\.[a-zA-Z0-9][a-zA-Z0-9\-]*)*)"
    r"(:([0-9]{1,5})(:([0-9]{1,3}))?)?"
)


class TargetError(ValueError):
    """Raised for a descriptor that names no usable host, port or server ID."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class Target:
    """A Modbus TCP server: address, port and server ID."""

    ip: IPAddress
    port: int = DEFAULT_PORT
    server_id: int = DEFAULT_SERVER_ID


def parse_target(
    source: str,
    resolver: Callable[[str], IPAddress] | None = None,
) -> Target:
    """Parse ``IP[:port[:serverID]]`` or ``hostname[:port[:serverID]]``.

    Port defaults to 502 and server ID to 1. An address counts as an IP only
    if all four groups are 1..255; anything else is looked up as a host name
    with ``resolver``.
    """
    resolve = resolver if resolver is not None else hostname_to_ip

    match = _IP_PATTERN.fullmatch(source)
    if match and all(1 <= int(match.group(i)) <= 255 for i in range(2, 6)):
        ip = IPAddress(match.group(1))
        port_text, server_text = match.group(7), match.group(9)
    else:
        match = _HOST_PATTERN.fullmatch(source)
        if match is None:
            raise TargetError("host", f"invalid target descriptor {source!r}")
        ip = IPAddress(resolve(match.group(1)))
        if ip == NIL_ADDR:
            raise TargetError("host", f"no address found for host {match.group(1)!r}")
        port_text, server_text = match.group(5), match.group(7)

    port = DEFAULT_PORT
    server_id = DEFAULT_SERVER_ID
    if port_text:
        number = int(port_text)
        if not 0 < number < 65536:
            raise TargetError("port", f"invalid port number {number}")
        port = number
        if server_text:
            number = int(server_text)
            if not 0 < number < 248:
                raise TargetError("server_id", f"invalid server ID {number}")
            server_id = number
    return Target(ip, port, server_id)