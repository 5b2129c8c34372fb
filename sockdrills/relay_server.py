"""A TCP server that relays text from one sending client to one receiving client."""

from __future__ import annotations

import argparse
import socket
import sys
from enum import Enum
from typing import TextIO

MAX_BUFFER_SIZE = 1024
LISTEN_BACKLOG = 2
ROLE_BUFFER_SIZE = 9
TERMINATION_MESSAGE = "The End"


class ClientRole(str, Enum):
    """The greeting a client sends to say which end of the relay it is."""

    SENDER = "client1"
    RECEIVER = "client2"

    @property
    def label(self) -> str:
        return "Client1" if self is ClientRole.SENDER else "Client2"


def parse_endpoint(argv: list[str], prog: str) -> tuple[str, int]:
    """Return ``(host, port)`` from a two-item argument list.

    Raises ValueError carrying a usage line when the arguments are wrong.
    """
    usage = f"Usage: {prog} <SERVER_IP> <SERVER_PORT>"
    if len(argv) != 2:
        raise ValueError(usage)
    host, port_text = argv
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"Invalid port {port_text!r}\n{usage}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"Port out of range: {port}\n{usage}")
    return host, port


def _validate_ipv4(host: str) -> None:
    try:
        socket.inet_pton(socket.AF_INET, host)
    except OSError as exc:
        raise ValueError(f"Invalid address/ Address not supported: {host!r}") from exc


class RelayServer:
    """Accepts one sender and one receiver, then forwards the sender's data."""

    def __init__(self, host: str, port: int, out: TextIO | None = None) -> None:
        _validate_ipv4(host)
        self._out = out
        self.clients: dict[ClientRole, socket.socket] = {}
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.bind((host, port))
            self._listener.listen(LISTEN_BACKLOG)
        except OSError:
            self._listener.close()
            raise
        self.address: tuple[str, int] = self._listener.getsockname()

    def _print(self, *args: object, **kwargs: object) -> None:
        print(*args, file=self._out or sys.stdout, flush=True, **kwargs)

    def accept_clients(self) -> None:
        """Accept connections until both a sender and a receiver are attached."""
        while len(self.clients) < len(ClientRole):
            if self._listener.fileno() == -1:
                raise OSError("listening socket is closed")
            try:
                conn, (peer_host, peer_port) = self._listener.accept()
            except OSError as exc:
                if self._listener.fileno() == -1:
                    raise
                print(f"Error accepting client connection: {exc}", file=sys.stderr)
                continue

            try:
                greeting = conn.recv(ROLE_BUFFER_SIZE)
            except OSError as exc:
                print(f"Error receiving client type: {exc}", file=sys.stderr)
                conn.close()
                continue
            if not greeting:
                self._print("Client disconnected prematurely.")
                conn.close()
                continue

            client_type = greeting.decode("utf-8", errors="replace")
            try:
                role = ClientRole(client_type)
            except ValueError:
                self._print(f"Unknown client type received: {client_type}. Closing connection.")
                conn.close()
                continue

            if role in self.clients:
                self._print(f"{role.label} already connected. Rejecting new connection.")
                conn.close()
                continue
            self.clients[role] = conn
            self._print(f"{role.label} connected from {peer_host}:{peer_port}")

        self._print("Both clients connected. Starting message relay.")

    def relay(self) -> int:
        """Forward data from the sender to the receiver.

        Stops when the sender disconnects, a send fails, or a chunk contains
        the termination message. Returns the number of chunks forwarded.
        """
        sender = self.clients[ClientRole.SENDER]
        receiver = self.clients[ClientRole.RECEIVER]
        relayed = 0
        while True:
            try:
                data = sender.recv(MAX_BUFFER_SIZE)
            except OSError as exc:
                print(f"Error receiving from Client1: {exc}", file=sys.stderr)
                break
            if not data:
                break
            try:
                receiver.sendall(data)
            except OSError as exc:
                print(f"Error sending message to Client2: {exc}", file=sys.stderr)
                break
            relayed += 1
            text = data.decode("utf-8", errors="replace")
            self._print(f"Relayed from Client1 to Client2: {text}", end="")
            if TERMINATION_MESSAGE in text:
                self._print(f'Termination message "{TERMINATION_MESSAGE}" received. Shutting down.')
                break
        return relayed

    def close(self) -> None:
        """Close every client connection and the listening socket."""
        for conn in self.clients.values():
            conn.close()
        self.clients.clear()
        self._listener.close()

    def __enter__(self) -> RelayServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Run the relay server on the address given on the command line."""
    parser = argparse.ArgumentParser(prog="relay-server", add_help=True)
    parser.add_argument("args", nargs="*")
    args = parser.parse_args(argv).args
    try:
        host, port = parse_endpoint(args, parser.prog)
        server = RelayServer(host, port)
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1

    with server:
        print(f"Server listening on {host}:{port}", flush=True)
        try:
            server.accept_clients()
            server.relay()
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            print(f"Server error: {exc}", file=sys.stderr)
    print("Server shutting down.")
    return 0