"""Buffered logger that publishes batches of records over HTTP."""

from __future__ import annotations

import argparse
import http.client
import itertools
import logging
import sys
import threading
from dataclasses import dataclass
from typing import Iterable, Protocol

__all__ = [
    "DEFAULT_PORT",
    "LogRecord",
    "format_records",
    "HttpLogClient",
    "Logger",
    "main",
]

log = logging.getLogger(__name__)

DEFAULT_PORT = 13563


@dataclass(frozen=True)
class LogRecord:
    """One logged event."""

    msg: str
    date: int
    thread_id: int
    log_level: int


def format_records(records: Iterable[LogRecord]) -> str:
    """Render records as the plain-text body sent to the log server."""
    return "".join(
        f"{record.msg}\ndate: {record.date}\nthread_id: {record.thread_id}"
        f"\nlog_level: {record.log_level}\n"
        for record in records
    )


class _Client(Protocol):
    def post(self, body: str) -> object: ...

    def close(self) -> None: ...


class HttpLogClient:
    """Keeps one HTTP connection open and posts text bodies to ``/``."""

    def __init__(self, host: str, port: int = DEFAULT_PORT, *, timeout: float = 5.0) -> None:
        self._conn = http.client.HTTPConnection(host, int(port), timeout=timeout)
        self._conn.connect()

    def post(self, body: str) -> int:
        """POST ``body`` as text/plain; return the response status."""
        self._conn.request(
            "POST",
            "/",
            body=body.encode("utf-8"),
            headers={
                "Host": "localhost",
                "User-Agent": "commkit",
                "Content-Type": "text/plain",
            },
        )
        response = self._conn.getresponse()
        response.read()
        return response.status

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> HttpLogClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Logger:
    """Collects records from any thread and publishes them in the background."""

    def __init__(
        self,
        ip: str = "127.0.0.1",
        component_name: str = "",
        *,
        port: int = DEFAULT_PORT,
        client: _Client | None = None,
    ) -> None:
        self.component_name = component_name
        self._client = client if client is not None else HttpLogClient(ip, port)
        self._buffer: list[LogRecord] = []
        self._cond = threading.Condition()
        self._closing = False
        self._closed = False
        self._levels = itertools.count(0)
        self._thread_ids = itertools.count(1000)
        self._dates = itertools.count(1212121)
        self._publisher = threading.Thread(target=self._publish, daemon=True)
        self._publisher.start()

    def log(self, msg: str) -> None:
        """Queue a message for publishing."""
        with self._cond:
            if self._closing:
                raise RuntimeError("logger is closed")
            self._buffer.append(
                LogRecord(
                    msg=msg,
                    date=next(self._dates),
                    thread_id=next(self._thread_ids),
                    log_level=next(self._levels),
                )
            )
            self._cond.notify()

    def _publish(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: bool(self._buffer) or self._closing)
                batch, self._buffer = self._buffer, []
                closing = self._closing
            if batch:
                try:
                    self._client.post(format_records(batch))
                except (OSError, http.client.HTTPException) as exc:
                    log.error("Write error: %s", exc)
            if closing:
                return

    def close(self) -> None:
        """Publish what is queued, stop the publisher and close the client."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._closing = True
            self._cond.notify_all()
        self._publisher.join()
        self._client.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Log a few sample messages to a log server."""
    parser = argparse.ArgumentParser(description="Send sample log messages.")
    parser.add_argument("ip", nargs="?", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        with Logger(args.ip, "my_logger", port=args.port) as logger:
            logger.log("Logger initialized")
            logger.log("This is an info message")
            logger.log("This is a debug message")
            logger.log("This is a warning message")
            logger.log("This is an error message")
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0