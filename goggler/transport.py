# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

import socket

from goggler.errors import InvalidAddressError, UnknownNetworkError

DEFAULT_NETWORK = "udp"

# network -> (address family, socket type)
NETWORKS = {
    "udp": (socket.AF_UNSPEC, socket.SOCK_DGRAM),
    "udp4": (socket.AF_INET, socket.SOCK_DGRAM),
    "udp6": (socket.AF_INET6, socket.SOCK_DGRAM),
    "tcp": (socket.AF_UNSPEC, socket.SOCK_STREAM),
    "tcp4": (socket.AF_INET, socket.SOCK_STREAM),
    "tcp6": (socket.AF_INET6, socket.SOCK_STREAM),
    "unix": (getattr(socket, "AF_UNIX", None), socket.SOCK_STREAM),
    "unixgram": (getattr(socket, "AF_UNIX", None), socket.SOCK_DGRAM),
}


def split_host_port(address):
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise InvalidAddressError(address, "missing ']'")
        host, rest = address[1:end], address[end + 1:]
        if not rest.startswith(":"):
            raise InvalidAddressError(address, "missing port")
        port = rest[1:]
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            raise InvalidAddressError(address, "missing port")
        if ":" in host:
            raise InvalidAddressError(address, "too many colons")
    try:
        port = int(port)
    except ValueError:
        raise InvalidAddressError(address, "invalid port")
    if not 0 <= port <= 65535:
        raise InvalidAddressError(address, "invalid port")
    return host or "localhost", port


class Connection(object):

    def __init__(self, sock, network, address, stream=True):
        self.sock = sock
        self.network = network
        self.address = address
        self.stream = stream

    def write(self, data):
        if self.stream:
            self.sock.sendall(data)
            return len(data)
        return self.sock.send(data)

    def close(self):
        self.sock.close()

    def __repr__(self):
        return "<Connection {} {}>".format(self.network, self.address)


def _dial_unix(family, socktype, address, timeout):
    if family is None:
        raise UnknownNetworkError("unix")
    sock = socket.socket(family, socktype)
    try:
        sock.settimeout(timeout)
        sock.connect(address)
    except socket.error:
        sock.close()
        raise
    return sock


def _dial_inet(family, socktype, address, timeout):
    host, port = split_host_port(address)
    last_error = None
    for af, kind, proto, _, sockaddr in socket.getaddrinfo(host, port, family, socktype):
        sock = socket.socket(af, kind, proto)
        try:
            sock.settimeout(timeout)
            sock.connect(sockaddr)
            return sock
        except socket.error as e:
            last_error = e
            sock.close()
    if last_error is None:
        last_error = socket.error("no addresses found for {!r}".format(address))
    raise last_error


def dial(network, address, timeout=None):
    network = network or DEFAULT_NETWORK
    try:
        family, socktype = NETWORKS[network]
    except KeyError:
        raise UnknownNetworkError(network)
    if network.startswith("unix"):
        sock = _dial_unix(family, socktype, address, timeout)
    else:
        sock = _dial_inet(family, socktype, address, timeout)
    return Connection(sock, network, address, stream=socktype == socket.SOCK_STREAM)
