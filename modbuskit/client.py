"""A plain TCP client connection with non-blocking peeking and draining."""

from __future__ import annotations

import logging
import socket
import time
from types import TracebackType

from .address import NIL_ADDR, IPAddress
from .logs import hex_dump

log = logging.getLogger(__name__)

_DRAIN_SECONDS = 2.0
_PEEK_LIMIT = 256


class ClientError(OSError):
    """Raised when a connection cannot be made or used."""


def hostname_to_ip(hostname: str) -> IPAddress:
    """Look up the first IPv4 address of ``hostname``; 0.0.0.0 if there is none."""
    log.debug("Looking for %r", hostname)
    try:
        infos = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as exc:
        log.error("getaddrinfo: %s", exc)
        return IPAddress()
    for family, _type, _proto, _name, sockaddr in infos:
        if family != socket.AF_INET:
            continue
        address = IPAddress(sockaddr[0])
        if address != NIL_ADDR:
            log.debug("Host %r=%s", hostname, address)
            return address
    log.debug("No IP for %r found", hostname)
    return IPAddress()


class Client:
    """A TCP connection to one host and port."""

    def __init__(self, host: IPAddress | int | str | None = None, port: int = 0) -> None:
        self._sock: socket.socket | None = None
        self._no_delay = False
        self.host = IPAddress()
        self.port = 0
        if host is not None:
            self.connect(host, port)

    def connect(self, host: IPAddress | int | str, port: int) -> None:
        """Connect to ``host`` (address or host name) and ``port``.

        An existing connection is closed first.
        """
        if isinstance(host, str):
            address = hostname_to_ip(host)
            if address == NIL_ADDR:
                raise ClientError(f"no such host {host!r}")
        else:
            address = IPAddress(host)
        if self._sock is not None:
            self.disconnect()
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((str(address), port))
        except (OSError, OverflowError) as exc:
            sock.close()
            raise ClientError(f"error connecting to {address}:{port}: {exc}") from exc
        if self._no_delay:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        log.debug("Connected.")
        self._sock = sock
        self.host = address
        self.port = port

    def disconnect(self) -> None:
        """Drain pending input for at most two seconds, then close the connection."""
        sock = self._sock
        if sock is not None:
            deadline = time.monotonic() + _DRAIN_SECONDS
            try:
                sock.settimeout(0.0)
                while time.monotonic() < deadline:
                    chunk = sock.recv(_PEEK_LIMIT)
                    if not chunk:
                        break
                    if log.isEnabledFor(logging.DEBUG):
                        log.debug("%s", hex_dump("D", "Read", chunk))
            except OSError:
                pass
            sock.close()
            self._sock = None
        self.host = IPAddress()
        self.port = 0

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise ClientError("not connected")
        return self._sock

    def _peek(self, size: int) -> bytes | None:
        """Peek without blocking: None if nothing is waiting, b"" if the peer closed."""
        sock = self._require()
        timeout = sock.gettimeout()
        sock.settimeout(0.0)
        try:
            return sock.recv(size, socket.MSG_PEEK)
        except BlockingIOError:
            return None
        finally:
            sock.settimeout(timeout)

    def write(self, data: int | bytes | bytearray | memoryview) -> int:
        """Send one byte or a block of bytes; return the number of bytes sent."""
        payload = bytes([data]) if isinstance(data, int) else bytes(data)
        sock = self._require()
        try:
            sent = sock.send(payload)
        except OSError as exc:
            raise ClientError(f"error sending: {exc}") from exc
        log.debug("send buffer[%d] -> %d", len(payload), sent)
        if sent <= 0 and payload:
            raise ClientError("nothing could be sent")
        return sent

    def available(self) -> int:
        """Number of bytes waiting to be read, at most 256."""
        if self._sock is None:
            return 0
        try:
            data = self._peek(_PEEK_LIMIT)
        except OSError:
            return 0
        return len(data) if data else 0

    def read(self, size: int = 1) -> bytes:
        """Read up to ``size`` bytes, waiting for data; b"" once the peer has closed."""
        sock = self._require()
        try:
            return sock.recv(size)
        except OSError as exc:
            raise ClientError(f"error reading: {exc}") from exc

    def peek(self) -> int | None:
        """The next byte without consuming it, or None if no byte is waiting."""
        if self._sock is None:
            return None
        try:
            data = self._peek(1)
        except OSError:
            return None
        return data[0] if data else None

    def flush(self) -> None:
        """Nothing is buffered locally, so there is nothing to flush."""

    def stop(self) -> None:
        """Close the connection if there is one."""
        if self._sock is not None:
            self.disconnect()

    def set_no_delay(self, flag: bool) -> None:
        """Switch the Nagle algorithm off (True) or on; kept for later connections too."""
        self._no_delay = bool(flag)
        if self._sock is not None:
            self._sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, int(self._no_delay))

    @property
    def no_delay(self) -> bool:
        if self._sock is not None:
            return bool(self._sock.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY))
        return self._no_delay

    def connected(self) -> bool:
        """True while the connection is open and the peer has not closed it."""
        if self._sock is None:
            return False
        try:
            data = self._peek(1)
        except OSError:
            return False
        return data is None or len(data) > 0

    def __bool__(self) -> bool:
        return self.connected()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()