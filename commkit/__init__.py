"""HTTP log shipping, a TCP/UDP chat, a position simulator and small data structures."""

__version__ = "0.1.0"

__all__ = [
    "chat_protocol",
    "chat_server",
    "log_server",
    "logger",
    "positions",
    "reader_writer",
    "structures",
]