"""Chat client protocol: client-list parsing and UDP peer messaging."""

from __future__ import annotations

import socket
import struct

__all__ = [
    "tokenize",
    "parse_client_list",
    "encode_message",
    "decode_message",
    "UdpPeer",
]

_NULL_LENGTH = 0xFFFFFFFF
_MAX_DATAGRAM = 65535


def tokenize(text: str, delimiter: str) -> list[str]:
    """Split on ``delimiter``; a trailing empty piece is dropped."""
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_client_list(data: str) -> list[tuple[str, int]]:
    """Parse ``ip,port`` lines into (ip, port) pairs."""
    clients = []
    for line in tokenize(data, "\n"):
        fields = tokenize(line, ",")
        if len(fields) < 2:
            raise ValueError(f"malformed client entry: {line!r}")
        clients.append((fields[0], int(fields[1])))
    return clients


def encode_message(message: str) -> bytes:
    """Serialise text as a 32-bit big-endian byte count and UTF-16BE data."""
    payload = message.encode("utf-16-be")
    return struct.pack(">I", len(payload)) + payload


def decode_message(datagram: bytes) -> str:
    """Inverse of :func:`encode_message`; raise ValueError on bad input."""
    if len(datagram) < 4:
        raise ValueError("datagram too short for a length prefix")
    (length,) = struct.unpack_from(">I", datagram)
    if length == _NULL_LENGTH:
        return ""
    if length % 2:
        raise ValueError("odd UTF-16 byte count")
    payload = datagram[4:4 + length]
    if len(payload) != length:
        raise ValueError("datagram shorter than its declared length")
    return payload.decode("utf-16-be")


class UdpPeer:
    """A UDP endpoint bound locally that talks to one remote peer."""

    def __init__(self, local_ip: str, local_port: int, remote_ip: str, remote_port: int) -> None:
        self.local_ip = local_ip
        self.remote_ip = remote_ip
        self.remote_port = remote_port
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind(("", local_port))
        except OSError:
            self._sock.close()
            raise
        self.local_port = self._sock.getsockname()[1]

    def send_message(self, message: str) -> None:
        """Send ``message`` to the remote peer."""
        self._sock.sendto(encode_message(message), (self.remote_ip, self.remote_port))

    def receive_message(self, timeout: float | None = None) -> tuple[str, int]:
        """Wait for one message; return it with the sender's port.

        Raises TimeoutError if nothing arrives within ``timeout`` seconds.
        """
        self._sock.settimeout(timeout)
        datagram, sender = self._sock.recvfrom(_MAX_DATAGRAM)
        return decode_message(datagram), sender[1]

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> UdpPeer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()