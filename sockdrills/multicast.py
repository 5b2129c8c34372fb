"""Send lines of text to a UDP multicast group and print what arrives there."""

from __future__ import annotations

import argparse
import socket
import struct
import sys
from collections.abc import Iterable, Iterator

MULTICAST_PORT = 12345
MULTICAST_ADDRESS = "239.0.0.1"
MAX_BUFFER_SIZE = 1024


def open_receiver(group: str = MULTICAST_ADDRESS, port: int = MULTICAST_PORT) -> socket.socket:
    """Bind a UDP socket to ``port`` on all interfaces and join ``group``.

    Raises OSError if any step fails; the socket is closed in that case.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", port))
        membership = struct.pack(
            "4s4s", socket.inet_aton(group), socket.inet_aton("0.0.0.0")
        )
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership)
    except OSError:
        sock.close()
        raise
    return sock


def open_sender(loopback: bool = False) -> socket.socket:
    """Create a UDP socket for sending multicast datagrams.

    Failing to set the loopback option is not fatal; a warning goes to stderr.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, int(bool(loopback)))
    except OSError as exc:
        print(f"Error setting multicast loopback: {exc}", file=sys.stderr)
    return sock


def receive_messages(sock: socket.socket, bufsize: int = MAX_BUFFER_SIZE) -> Iterator[bytes]:
    """Yield datagrams received on ``sock`` until the socket is closed.

    Receive errors on an open socket are reported on stderr and skipped.
    """
    while sock.fileno() != -1:
        try:
            data, _ = sock.recvfrom(bufsize)
        except OSError as exc:
            if sock.fileno() == -1:
                return
            print(f"Error receiving message: {exc}", file=sys.stderr)
            continue
        yield data


def _chunks(line: str, limit: int) -> Iterator[bytes]:
    data = line.encode("utf-8")
    for start in range(0, len(data), limit):
        yield data[start:start + limit]


def send_lines(
    sock: socket.socket,
    lines: Iterable[str],
    group: str = MULTICAST_ADDRESS,
    port: int = MULTICAST_PORT,
) -> int:
    """Send each line as one or more datagrams to ``group``:``port``.

    Lines longer than ``MAX_BUFFER_SIZE - 1`` bytes are split into several
    datagrams. Send errors are reported on stderr and do not stop the loop.
    Returns the number of datagrams sent successfully.
    """
    try:
        socket.inet_pton(socket.AF_INET, group)
    except OSError as exc:
        raise ValueError(f"Invalid multicast address: {group!r}") from exc

    sent = 0
    for line in lines:
        for chunk in _chunks(line, MAX_BUFFER_SIZE - 1):
            try:
                sock.sendto(chunk, (group, port))
            except OSError as exc:
                print(f"Error sending multicast message: {exc}", file=sys.stderr)
            else:
                sent += 1
    return sent


def receiver_main(argv: list[str] | None = None) -> int:
    """Join the multicast group and print every message received."""
    argparse.ArgumentParser(
        prog="multicast-receiver",
        description="Print messages sent to the multicast group.",
    ).parse_args(argv)

    try:
        sock = open_receiver(MULTICAST_ADDRESS, MULTICAST_PORT)
    except OSError as exc:
        print(f"Error setting up multicast receiver: {exc}", file=sys.stderr)
        return 1

    with sock:
        print(
            f"UDP Client for multicast started, joined group "
            f"{MULTICAST_ADDRESS} on port {MULTICAST_PORT}"
        )
        try:
            for data in receive_messages(sock):
                text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
                print(f"Received: {text}", end="", flush=True)
        except KeyboardInterrupt:
            pass
    print("Client shutting down.")
    return 0


def sender_main(argv: list[str] | None = None) -> int:
    """Read lines from stdin and send each to the multicast group."""
    argparse.ArgumentParser(
        prog="multicast-sender",
        description="Send lines from standard input to the multicast group.",
    ).parse_args(argv)

    with open_sender(loopback=False) as sock:
        print(
            f"UDP Server for multicast started, sending to "
            f"{MULTICAST_ADDRESS}:{MULTICAST_PORT}"
        )
        print("Enter messages to multicast (Ctrl+D to exit):", flush=True)
        try:
            send_lines(sock, sys.stdin, MULTICAST_ADDRESS, MULTICAST_PORT)
        except KeyboardInterrupt:
            pass
    print("\nServer shutting down.")
    return 0