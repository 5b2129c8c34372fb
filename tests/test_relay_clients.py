import io
import socket

import pytest

from sockdrills.relay_clients import (
    connect,
    receive_messages,
    receiver_main,
    send_messages,
    sender_main,
)
from sockdrills.relay_server import ClientRole


def _read_all(sock):
    chunks = []
    while True:
        data = sock.recv(1024)
        if not data:
            return b"".join(chunks)
        chunks.append(data)


def test_connect_sends_role():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        host, port = listener.getsockname()
        client = connect(host, port, ClientRole.RECEIVER)
        assert client.getpeername() == (host, port)
        assert client.type == socket.SOCK_STREAM
        conn, _ = listener.accept()
        with conn:
            conn.settimeout(5)
            client.close()
            assert _read_all(conn) == b"client2"


def test_connect_accepts_role_string():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        host, port = listener.getsockname()
        client = connect(host, port, "client1")
        assert client.getpeername() == (host, port)
        assert client.type == socket.SOCK_STREAM
        conn, _ = listener.accept()
        with conn:
            conn.settimeout(5)
            client.close()
            assert _read_all(conn) == b"client1"


def test_connect_invalid_host():
    with pytest.raises(ValueError):
        connect("999.1.1.1", 1, ClientRole.SENDER)


def test_connect_unknown_role():
    with pytest.raises(ValueError):
        connect("127.0.0.1", 1, "client3")


def test_send_messages_stops_at_termination():
    left, right = socket.socketpair()
    out = io.StringIO()
    with left, right:
        count = send_messages(left, ["hi\n", "The End\n", "after\n"], out)
        left.shutdown(socket.SHUT_WR)
        right.settimeout(5)
        assert _read_all(right) == b"hiThe End"
    assert count == 2
    assert 'Sent termination message "The End". Exiting.' in out.getvalue()


def test_send_messages_eof():
    left, right = socket.socketpair()
    out = io.StringIO()
    with left, right:
        count = send_messages(left, ["only\n"], out)
        left.shutdown(socket.SHUT_WR)
        right.settimeout(5)
        assert _read_all(right) == b"only"
    assert count == 1
    text = out.getvalue()
    assert text.startswith("> ")
    assert "Exiting due to input error or EOF." in text


def test_receive_messages_until_close():
    left, right = socket.socketpair()
    out = io.StringIO()
    with right:
        with left:
            left.sendall(b"one\n")
        assert receive_messages(right, out) is False
    text = out.getvalue()
    assert "Received: one\n" in text
    assert text.endswith("Server closed the connection.\n")


def test_receive_messages_termination():
    left, right = socket.socketpair()
    out = io.StringIO()
    with left, right:
        left.sendall(b"The End")
        assert receive_messages(right, out) is True
    assert 'Termination message "The End" received. Exiting.' in out.getvalue()


def test_sender_main_wrong_arguments(capsys):
    assert sender_main([]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_receiver_main_wrong_arguments(capsys):
    assert receiver_main(["127.0.0.1", "1", "extra"]) == 1
    assert "Usage:" in capsys.readouterr().err