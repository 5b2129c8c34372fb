# sockdrills

A handful of small command-line tools for exploring sockets and the
filesystem on POSIX systems. It uses the standard library only.

## Install

    pip install .

## Multicast chat

The receiver binds UDP port `12345` on all interfaces, joins group
`239.0.0.1` and prints every datagram it receives, prefixed with
`Received: `. Stop it with Ctrl+C:

    sockdrills-multicast-receive

The sender reads lines from standard input and sends each one to the
group; lines longer than 1023 bytes go out as several datagrams.
Multicast loopback is switched off, so a receiver on the same host may
not see the messages. Press Ctrl+D to stop:

    sockdrills-multicast-send

The group and port are fixed for these commands. From Python,
`sockdrills.multicast` provides `open_receiver(group, port)`,
`open_sender(loopback)`, `receive_messages(sock, bufsize)` (a generator
of datagrams that ends when the socket is closed) and
`send_lines(sock, lines, group, port)`, which returns the number of
datagrams sent and raises `ValueError` for an invalid IPv4 group address.

## Two-client TCP relay

Start the relay server on an IPv4 address and port:

    sockdrills-relay-server 127.0.0.1 9000

Connect the receiving client, which prints whatever the server forwards:

    sockdrills-relay-receive 127.0.0.1 9000

Connect the sending client and type messages at the `>` prompt:

    sockdrills-relay-send 127.0.0.1 9000

Each client first sends its role (`client1` for the sender, `client2` for
the receiver). The server accepts connections until it has one of each,
turning away unknown roles and a second client of a role already
connected, then forwards everything the sender writes to the receiver.
Sending `The End` shuts down all three; the server also stops when the
sender disconnects.

From Python, `sockdrills.relay_server.RelayServer(host, port, out)` is a
context manager with `accept_clients()`, `relay()` (returning the number
of chunks forwarded) and `close()`; its `address` attribute holds the
bound address, so port `0` picks a free port. `ClientRole` names the two
roles and `parse_endpoint(argv, prog)` turns an address and port into a
`(host, port)` pair, raising `ValueError` with a usage line when they are
wrong. `sockdrills.relay_clients` provides `connect(host, port, role)`,
`send_messages(sock, lines, out)` and `receive_messages(sock, out)`.

## Symlink depth probe

    sockdrills-symlink-depth

This creates a temporary directory inside the current directory, builds a
chain of symbolic links to a single file until the operating system
refuses to follow the chain, and reports how deep the chain got. It then
removes everything it created. The same measurement is available as
`sockdrills.symlink_depth.measure_symlink_depth(directory)`, which works
in the current directory when `directory` is omitted.

## Limits

Only IPv4 is supported: host names are not resolved, and the relay and
its clients need a dotted-quad address. The relay forwards in one
direction only, from the sender to the receiver.

## Tests

    pip install .[test]
    pytest