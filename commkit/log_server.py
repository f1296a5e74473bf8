"""HTTP server that prints the bodies of the log batches it receives."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TextIO

__all__ = ["RESPONSE_BODY", "LogRequestHandler", "make_server", "main"]

RESPONSE_BODY = b"Continuous data stream..."

_log = logging.getLogger(__name__)


class LogRequestHandler(BaseHTTPRequestHandler):
    """Writes each request body to the server's output and answers 200."""

    protocol_version = "HTTP/1.1"
    server_version = "commkit-log-server"

    def do_POST(self) -> None:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self.send_error(400, "invalid Content-Length")
            return
        if length < 0:
            self.send_error(400, "invalid Content-Length")
            return
        body = self.rfile.read(length).decode("utf-8", errors="replace")
        server = self.server
        with server.lock:
            server.out.write(body + "\n")
            server.out.flush()
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(RESPONSE_BODY)))
        self.end_headers()
        self.wfile.write(RESPONSE_BODY)

    def log_message(self, format: str, *args: object) -> None:
        """Send access-log lines to the module logger instead of stderr."""
        _log.debug("%s - %s", self.address_string(), format % args)


class _LogServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], out: TextIO) -> None:
        super().__init__(address, LogRequestHandler)
        self.out = out
        self.lock = threading.Lock()


def make_server(host: str = "0.0.0.0", port: int = 13563, out: TextIO | None = None) -> _LogServer:
    """Create (but do not start) a log server writing bodies to ``out``."""
    return _LogServer((host, port), sys.stdout if out is None else out)


def main(argv: list[str] | None = None) -> int:
    """Run the log server until interrupted."""
    parser = argparse.ArgumentParser(description="Receive log batches over HTTP.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=13563)
    args = parser.parse_args(argv)
    try:
        server = make_server(args.host, args.port)
    except (OSError, OverflowError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Server is running on port {server.server_address[1]}")
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0