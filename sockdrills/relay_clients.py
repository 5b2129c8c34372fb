"""The two clients of the relay server: one sends lines, one prints them."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Iterable
from typing import TextIO

from sockdrills.relay_server import (
    MAX_BUFFER_SIZE,
    TERMINATION_MESSAGE,
    ClientRole,
    parse_endpoint,
)


def connect(host: str, port: int, role: ClientRole | str) -> socket.socket:
    """Connect to the relay server and announce ``role``.

    Raises ValueError for an invalid IPv4 address and OSError when the
    connection or the greeting fails.
    """
    role = ClientRole(role)
    try:
        socket.inet_pton(socket.AF_INET, host)
    except OSError as exc:
        raise ValueError(f"Invalid address/ Address not supported: {host!r}") from exc
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((host, port))
        sock.sendall(role.value.encode("ascii"))
    except OSError:
        sock.close()
        raise
    return sock


def send_messages(sock: socket.socket, lines: Iterable[str], out: TextIO | None = None) -> int:
    """Send each line, without its newline, until the termination message.

    Prompts with "> " before each line. Returns the number of lines sent.
    """
    out = out or sys.stdout
    sent = 0
    source = iter(lines)
    while True:
        print("> ", end="", file=out, flush=True)
        line = next(source, None)
        if line is None:
            print("\nExiting due to input error or EOF.", file=out)
            break
        message = line.split("\n", 1)[0]
        try:
            sock.sendall(message.encode("utf-8"))
        except OSError as exc:
            print(f"Error sending message to server: {exc}", file=sys.stderr)
            break
        sent += 1
        if message == TERMINATION_MESSAGE:
            print(f'Sent termination message "{TERMINATION_MESSAGE}". Exiting.', file=out)
            break
    return sent


def receive_messages(sock: socket.socket, out: TextIO | None = None) -> bool:
    """Print data from the server until termination or disconnection.

    Returns True when the termination message arrived, False otherwise.
    """
    out = out or sys.stdout
    while True:
        try:
            data = sock.recv(MAX_BUFFER_SIZE)
        except OSError as exc:
            print(f"Error receiving message from server: {exc}", file=sys.stderr)
            return False
        if not data:
            print("Server closed the connection.", file=out)
            return False
        text = data.decode("utf-8", errors="replace")
        print(f"Received: {text}", end="", file=out, flush=True)
        if TERMINATION_MESSAGE in text:
            print(f'Termination message "{TERMINATION_MESSAGE}" received. Exiting.', file=out)
            return True


def _open(argv: list[str] | None, prog: str, role: ClientRole) -> socket.socket | None:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("args", nargs="*")
    args = parser.parse_args(argv).args
    try:
        host, port = parse_endpoint(args, parser.prog)
        return connect(host, port, role)
    except ValueError as exc:
        print(exc, file=sys.stderr)
    except OSError as exc:
        print(f"Error connecting to server: {exc}", file=sys.stderr)
    return None


def sender_main(argv: list[str] | None = None) -> int:
    """Connect as the sender and send lines typed on standard input."""
    sock = _open(argv, "relay-sender", ClientRole.SENDER)
    if sock is None:
        return 1
    with sock:
        print(f"Connected to server as {ClientRole.SENDER.value}. Enter messages:")
        try:
            send_messages(sock, sys.stdin, sys.stdout)
        except KeyboardInterrupt:
            pass
    print("Client1 shutting down.")
    return 0


def receiver_main(argv: list[str] | None = None) -> int:
    """Connect as the receiver and print what the server forwards."""
    sock = _open(argv, "relay-receiver", ClientRole.RECEIVER)
    if sock is None:
        return 1
    with sock:
        print(
            f"Connected to server as {ClientRole.RECEIVER.value}. Waiting for messages...",
            flush=True,
        )
        try:
            receive_messages(sock, sys.stdout)
        except KeyboardInterrupt:
            pass
    print("Client2 shutting down.")
    return 0