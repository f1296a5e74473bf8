import http.client
import io
import threading

import pytest

from commkit.log_server import RESPONSE_BODY, make_server


@pytest.fixture
def running_server():
    out = io.StringIO()
    server = make_server("127.0.0.1", 0, out)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server.server_address[1], out
    server.shutdown()
    server.server_close()
    thread.join(5)


def test_post_body_is_written_and_answered(running_server):
    port, out = running_server
    conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
    conn.request("POST", "/", body=b"hello", headers={"Content-Type": "text/plain"})
    response = conn.getresponse()
    assert response.status == 200
    assert response.read() == b"Continuous data stream..."
    assert response.getheader("Content-Type") == "text/plain"
    conn.close()
    assert out.getvalue() == "hello\n"


def test_keep_alive_posts_in_order(running_server):
    port, out = running_server
    conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
    for body in ["one", "two", "three"]:
        conn.request("POST", "/", body=body.encode())
        response = conn.getresponse()
        assert response.read() == RESPONSE_BODY
    conn.close()
    assert out.getvalue().splitlines() == ["one", "two", "three"]


def test_invalid_content_length_rejected(running_server):
    port, out = running_server
    conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
    conn.putrequest("POST", "/")
    conn.putheader("Content-Length", "abc")
    conn.endheaders()
    response = conn.getresponse()
    assert response.status == 400
    conn.close()
    assert out.getvalue() == ""


def test_empty_post_writes_blank_line(running_server):
    port, out = running_server
    conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
    conn.request("POST", "/", body=b"")
    assert conn.getresponse().status == 200
    conn.close()
    assert out.getvalue() == "\n"