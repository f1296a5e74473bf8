import pytest

from commkit.chat_protocol import (
    UdpPeer,
    decode_message,
    encode_message,
    parse_client_list,
    tokenize,
)
from commkit.chat_server import format_client_list


def test_tokenize_drops_trailing_empty():
    assert tokenize("a\nb\n", "\n") == ["a", "b"]


def test_tokenize_keeps_inner_empty():
    assert tokenize("a\n\nb", "\n") == ["a", "", "b"]


def test_tokenize_empty_text():
    assert tokenize("", ",") == []


def test_tokenize_multichar_delimiter():
    assert tokenize("127.0.0.1  1234", "  ") == ["127.0.0.1", "1234"]


def test_tokenize_empty_delimiter_raises():
    with pytest.raises(ValueError):
        tokenize("abc", "")


def test_parse_client_list():
    data = "127.0.0.1,1234\n10.0.0.2,5000\n"
    assert parse_client_list(data) == [("127.0.0.1", 1234), ("10.0.0.2", 5000)]


def test_parse_round_trips_server_format():
    peers = [("127.0.0.1", 1234), ("192.168.0.10", 40000)]
    assert parse_client_list(format_client_list(peers)) == peers


def test_parse_malformed_entry_raises():
    with pytest.raises(ValueError):
        parse_client_list("127.0.0.1\n")


def test_parse_bad_port_raises():
    with pytest.raises(ValueError):
        parse_client_list("127.0.0.1,port\n")


def test_encode_wire_format():
    assert encode_message("hi") == b"\x00\x00\x00\x04\x00h\x00i"


def test_encode_empty():
    assert encode_message("") == b"\x00\x00\x00\x00"


@pytest.mark.parametrize("text", ["", "hello", "grüße", "你好", "smile \U0001F600"])
def test_round_trip(text):
    assert decode_message(encode_message(text)) == text


def test_decode_null_string():
    assert decode_message(b"\xff\xff\xff\xff") == ""


def test_decode_truncated_raises():
    with pytest.raises(ValueError):
        decode_message(encode_message("hello")[:-2])


def test_decode_short_prefix_raises():
    with pytest.raises(ValueError):
        decode_message(b"\x00\x00")


def test_decode_odd_length_raises():
    with pytest.raises(ValueError):
        decode_message(b"\x00\x00\x00\x03abc")


def test_peers_exchange_messages():
    with UdpPeer("127.0.0.1", 0, "127.0.0.1", 9) as a:
        with UdpPeer("127.0.0.1", 0, "127.0.0.1", a.local_port) as b:
            a.remote_port = b.local_port
            a.send_message("hello peer")
            message, port = b.receive_message(5.0)
            assert message == "hello peer"
            assert port == a.local_port
            b.send_message("reply")
            assert a.receive_message(5.0) == ("reply", b.local_port)


def test_receive_times_out():
    with UdpPeer("127.0.0.1", 0, "127.0.0.1", 9) as peer:
        with pytest.raises(TimeoutError):
            peer.receive_message(0.05)