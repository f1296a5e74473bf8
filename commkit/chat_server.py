"""TCP chat server that tells every client who is logged in and echoes data."""

from __future__ import annotations

import argparse
import logging
import socket
import socketserver
import sys
import threading
from typing import Iterable

__all__ = ["DEFAULT_PORT", "format_client_list", "ChatServer", "main"]

log = logging.getLogger(__name__)

DEFAULT_PORT = 1234
_MAPPED_PREFIX = "::ffff:"


def _plain_ip(ip: str) -> str:
    if _MAPPED_PREFIX in ip:
        return ip[len(_MAPPED_PREFIX):]
    return ip


def format_client_list(peers: Iterable[tuple[str, int]]) -> str:
    """One ``ip,port`` line per peer, with IPv4-mapped prefixes removed."""
    return "".join(f"{_plain_ip(host)},{port}\n" for host, port in peers)


class _ChatHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        chat: ChatServer = self.server.chat
        sock: socket.socket = self.request
        chat._register(sock, (self.client_address[0], self.client_address[1]))
        try:
            while True:
                data = sock.recv(4096)
                if not data:
                    break
                log.debug("Received data from %s:%s: %r", *self.client_address[:2], data)
                chat._send(sock, data)
        except OSError:
            pass
        finally:
            chat._unregister(sock)


class _TCPServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True


class ChatServer:
    """Accepts clients, broadcasts the client list on each login, echoes data."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._clients: dict[socket.socket, tuple[str, int]] = {}
        self._server: _TCPServer | None = None
        self._thread: threading.Thread | None = None

    def start(self, host: str = "0.0.0.0", port: int = DEFAULT_PORT) -> int:
        """Listen and serve in the background; return the bound port."""
        if self._server is not None:
            raise RuntimeError("server is already running")
        server = _TCPServer((host, port), _ChatHandler)
        server.chat = self
        self._server = server
        self._thread = threading.Thread(target=server.serve_forever, daemon=True)
        self._thread.start()
        return server.server_address[1]

    def stop(self) -> None:
        """Stop accepting, disconnect every client and release the port."""
        if self._server is None:
            return
        self._server.shutdown()
        with self._lock:
            sockets = list(self._clients)
            self._clients.clear()
        for sock in sockets:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None

    def clients(self) -> list[tuple[str, int]]:
        """Addresses of the connected clients, in connection order."""
        with self._lock:
            return list(self._clients.values())

    def _register(self, sock: socket.socket, peer: tuple[str, int]) -> None:
        with self._lock:
            if sock in self._clients:
                return
            self._clients[sock] = peer
            log.info("Client connected: %s:%s", *peer)
            log.info("number of clients are %d", len(self._clients))
            data = format_client_list(self._clients.values()).encode("utf-8")
            for client in self._clients:
                try:
                    client.sendall(data)
                except OSError:
                    pass

    def _unregister(self, sock: socket.socket) -> None:
        with self._lock:
            peer = self._clients.pop(sock, None)
        if peer is not None:
            log.info("Client disconnected: %s:%s", *peer)

    def _send(self, sock: socket.socket, data: bytes) -> None:
        with self._lock:
            sock.sendall(data)

    def __enter__(self) -> ChatServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


def main(argv: list[str] | None = None) -> int:
    """Run the chat server until interrupted."""
    parser = argparse.ArgumentParser(description="Chat login server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    server = ChatServer()
    try:
        server.start(args.host, args.port)
    except (OSError, OverflowError):
        print("Failed to start server!", file=sys.stderr)
        return 1
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()
    return 0