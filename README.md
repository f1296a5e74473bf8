# commkit

A small toolkit for moving text between processes and machines, with a few
utilities that go with it. It uses only the standard library.

## What is inside

- `commkit.logger`: `Logger` collects messages from any thread as
  `LogRecord`s and a background thread posts each batch as plain text through
  `HttpLogClient` (one kept-open HTTP connection, `POST /`). `format_records`
  renders a batch. `Logger` and `HttpLogClient` are context managers; closing
  a `Logger` publishes what is still queued before it stops. Logging after
  `close()` raises `RuntimeError`.
- `commkit.log_server`: `make_server(host, port, out)` builds an HTTP server
  whose `LogRequestHandler` writes the body of every POST to `out` (standard
  output by default) and answers `200` with a short plain-text body.
- `commkit.chat_server`: `ChatServer` accepts TCP clients. Whenever a client
  connects, every connected client is sent the list of peers, one `ip,port`
  line each (`format_client_list`, with `::ffff:` prefixes removed). Whatever
  a client sends is echoed back to it. `start()` serves in a background thread
  and returns the bound port; `clients()` lists the connected addresses.
- `commkit.chat_protocol`: `parse_client_list` turns the server's list back
  into `(ip, port)` pairs; `tokenize` splits on a delimiter and drops a
  trailing empty piece. `encode_message`/`decode_message` frame text as a
  32-bit big-endian byte count followed by UTF-16BE data, and `UdpPeer` sends
  and receives such messages directly between two peers over UDP.
- `commkit.positions`: `PositionGenerator` scatters players over a square
  field and moves each one a random step per round, keeping them inside the
  field. Each `Position` carries a sensor id, a `current_time_ms()` timestamp
  and a `Vector3`.
- `commkit.structures`: `RingBuffer` (fixed capacity; `push` on a full buffer
  raises `OverflowError`, `pop` on an empty one raises `IndexError`), heap
  helpers `max_heapify`, `make_heap` and `heap_drain`, `IntervalMap` (keeps
  only the boundaries where the value changes), and `CallLimiter` with
  `get_result`, which reports running sums that stop growing once the call
  limit is used up.
- `commkit.reader_writer`: `produce_consume` writes `0..count-1` from the
  calling thread while a reader thread hands each item, in order, to a
  callback; an exception from the callback is raised in the caller.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Ship log lines to a log server running in the same process:

```python
import io
import threading

from commkit.log_server import make_server
from commkit.logger import Logger

out = io.StringIO()
server = make_server("127.0.0.1", 0, out)
threading.Thread(target=server.serve_forever, daemon=True).start()

with Logger("127.0.0.1", port=server.server_address[1]) as logger:
    logger.log("hello")

server.shutdown()
print(out.getvalue())
```

Talk between two UDP peers:

```python
from commkit.chat_protocol import UdpPeer

with UdpPeer("127.0.0.1", 0, "127.0.0.1", 0) as a, \
     UdpPeer("127.0.0.1", 0, "127.0.0.1", a.local_port) as b:
    b.send_message("hi")
    print(a.receive_message(timeout=1.0))   # ('hi', <b's port>)
```

Keep an interval map canonical while assigning ranges:

```python
from commkit.structures import IntervalMap

m = IntervalMap("A")
m.assign(3, 5, "B")
print(m[4], m[6])   # B A
print(m.items())    # [(3, 'B'), (5, 'A')]
```

## Commands

| Command | What it does |
| --- | --- |
| `commkit-log-server [--host H] [--port P]` | run the HTTP server that prints posted log batches (port 13563 by default) |
| `commkit-logger [ip] [--port P]` | post a few sample log lines to the log server |
| `commkit-chat-server [--host H] [--port P]` | run the TCP chat server (port 1234 by default) |
| `commkit-positions [--players N] [--field-size S] [--step-size D] [--interval SEC] [--steps N]` | print simulated player positions, once a second by default |
| `commkit-reader-writer [--count N] [--write-delay SEC] [--read-delay SEC]` | run the reader/writer queue demonstration |

Run any command with `--help` to see its options.

## What it does not do

- There is no file transfer: no XMODEM implementation and no serial-port
  (UART) access.
- There is no chat window. The package has the server, the client-list
  parsing and the UDP peer, but no command that runs a chat client.
- Simulated positions are only printed; they are not published over the
  network.