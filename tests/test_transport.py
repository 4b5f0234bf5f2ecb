# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

import os
import shutil
import socket
import tempfile
import unittest

import mock

from goggler import transport
from goggler.errors import InvalidAddressError, UnknownNetworkError


def free_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


class SplitHostPortTestCase(unittest.TestCase):

    def test_host_and_port(self):
        self.assertEqual(transport.split_host_port("logs.example.com:514"), ("logs.example.com", 514))

    def test_ipv6(self):
        self.assertEqual(transport.split_host_port("[::1]:6514"), ("::1", 6514))

    def test_empty_host_is_localhost(self):
        self.assertEqual(transport.split_host_port(":514"), ("localhost", 514))

    def test_missing_port(self):
        self.assertRaises(InvalidAddressError, transport.split_host_port, "logs.example.com")
        self.assertRaises(InvalidAddressError, transport.split_host_port, "[::1]")

    def test_invalid_port(self):
        self.assertRaises(InvalidAddressError, transport.split_host_port, "host:syslog")
        self.assertRaises(InvalidAddressError, transport.split_host_port, "host:70000")

    def test_bare_ipv6(self):
        self.assertRaises(InvalidAddressError, transport.split_host_port, "::1:514")


class DialTestCase(unittest.TestCase):

    def test_unknown_network(self):
        self.assertRaises(UnknownNetworkError, transport.dial, "sctp", "127.0.0.1:514")

    def test_udp(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.addCleanup(server.close)
        server.bind(("127.0.0.1", 0))
        server.settimeout(2)
        conn = transport.dial("udp", "127.0.0.1:{}".format(server.getsockname()[1]))
        self.addCleanup(conn.close)
        self.assertFalse(conn.stream)
        self.assertEqual(conn.write(b"datagram"), 8)
        self.assertEqual(server.recv(1024), b"datagram")

    def test_empty_network_is_udp(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.addCleanup(server.close)
        server.bind(("127.0.0.1", 0))
        conn = transport.dial("", "127.0.0.1:{}".format(server.getsockname()[1]))
        self.addCleanup(conn.close)
        self.assertEqual(conn.network, "udp")
        self.assertEqual(conn.sock.type, socket.SOCK_DGRAM)

    def test_tcp(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.addCleanup(server.close)
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        server.settimeout(2)
        conn = transport.dial("tcp4", "127.0.0.1:{}".format(server.getsockname()[1]), timeout=2)
        self.addCleanup(conn.close)
        accepted, _ = server.accept()
        self.addCleanup(accepted.close)
        accepted.settimeout(2)
        self.assertTrue(conn.stream)
        self.assertEqual(conn.write(b"stream"), 6)
        self.assertEqual(accepted.recv(1024), b"stream")

    def test_tcp_refused(self):
        self.assertRaises(socket.error, transport.dial, "tcp", "127.0.0.1:{}".format(free_port()))

    @unittest.skipUnless(hasattr(socket, "AF_UNIX"), "unix sockets not available")
    def test_unixgram(self):
        tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmpdir)
        path = os.path.join(tmpdir, "log")
        server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        self.addCleanup(server.close)
        server.bind(path)
        server.settimeout(2)
        conn = transport.dial("unixgram", path)
        self.addCleanup(conn.close)
        conn.write(b"local")
        self.assertEqual(server.recv(1024), b"local")


class ConnectionTestCase(unittest.TestCase):

    def test_stream_write_uses_sendall(self):
        sock = mock.Mock()
        conn = transport.Connection(sock, "tcp", "host:514", stream=True)
        self.assertEqual(conn.write(b"abc"), 3)
        sock.sendall.assert_called_once_with(b"abc")

    def test_datagram_write_uses_send(self):
        sock = mock.Mock()
        sock.send.return_value = 3
        conn = transport.Connection(sock, "udp", "host:514", stream=False)
        self.assertEqual(conn.write(b"abc"), 3)
        sock.send.assert_called_once_with(b"abc")

    def test_write_error_propagates(self):
        sock = mock.Mock()
        sock.sendall.side_effect = socket.error("broken pipe")
        conn = transport.Connection(sock, "tcp", "host:514")
        self.assertRaises(socket.error, conn.write, b"abc")

    def test_close(self):
        sock = mock.Mock()
        transport.Connection(sock, "tcp", "host:514").close()
        sock.close.assert_called_once_with()
