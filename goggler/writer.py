# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

import logging
import os
import os.path
import socket
import sys
import threading

from datetime import datetime, timezone

from goggler import priority as _priority
from goggler import transport
from goggler.errors import MissingAddressError
from goggler.message import APPNAME_MAX, Message, header_field, render

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc)


def default_appname():
    if not sys.argv or not sys.argv[0]:
        return ""
    name = os.path.basename(sys.argv[0])
    name = "".join(c if 33 <= ord(c) <= 126 else "_" for c in name)
    return name[:APPNAME_MAX]


class Writer(object):
    """A connection to a syslog server.

    Every send holds the writer's lock for its whole duration, including
    the network write and any reconnect, so sends from many threads are
    serialized and never interleave on the wire. A failed write closes the
    connection, dials again and retries the write exactly once.
    """

    def __init__(self, network, address, appname, priority, hostname=None, procid=None,
                 formatter=None, clock=None, timeout=None):
        self.priority = _priority.validate(priority)
        if not address:
            raise MissingAddressError()
        self.network = network or transport.DEFAULT_NETWORK
        self.address = address
        if appname:
            header_field("APP-NAME", appname, APPNAME_MAX)
        self.appname = appname or default_appname()
        self.hostname = hostname if hostname is not None else socket.gethostname()
        self.procid = procid if procid is not None else str(os.getpid())
        self.formatter = formatter or render
        self.clock = clock or _now
        self.timeout = timeout
        self.conn = None
        self._lock = threading.Lock()

    def connect(self):
        # the caller holds self._lock
        if self.conn is not None:
            try:
                self.conn.close()
            except socket.error:
                # the old connection is discarded either way
                logger.debug("ignored error closing syslog connection to %s", self.address,
                             exc_info=True)
            self.conn = None
        self.conn = transport.dial(self.network, self.address, timeout=self.timeout)

    def close(self):
        with self._lock:
            if self.conn is not None:
                conn, self.conn = self.conn, None
                conn.close()

    def write(self, data):
        """Send ``data`` as the body of one message at the writer's own
        priority. Unlike the severity methods, no severity is OR'd in."""
        return self._write_and_retry(self.priority, data)

    def send(self, severity, text):
        """Send ``text`` with ``severity`` OR'd into the writer's priority and
        return the number of bytes written."""
        return self._write_and_retry(severity & _priority.SEVERITY_MASK, text)

    def _write(self, priority, text):
        msg = Message(priority, self.clock(), self.hostname, self.appname, self.procid,
                      msgid="", structured_data=[], message=text)
        data = self.formatter(msg)
        logger.debug("syslog message content: %s", data)
        return self.conn.write(data)

    def _write_and_retry(self, severity, text):
        pr = self.priority | severity
        with self._lock:
            if self.conn is not None:
                try:
                    return self._write(pr, text)
                except socket.error:
                    logger.warning("error writing to syslog server %s, reconnecting", self.address,
                                   exc_info=True)
            self.connect()
            return self._write(pr, text)

    def emerg(self, text):
        self._write_and_retry(_priority.LOG_EMERG, text)

    def alert(self, text):
        self._write_and_retry(_priority.LOG_ALERT, text)

    def crit(self, text):
        self._write_and_retry(_priority.LOG_CRIT, text)

    def err(self, text):
        self._write_and_retry(_priority.LOG_ERR, text)

    def warning(self, text):
        self._write_and_retry(_priority.LOG_WARNING, text)

    def notice(self, text):
        self._write_and_retry(_priority.LOG_NOTICE, text)

    def info(self, text):
        self._write_and_retry(_priority.LOG_INFO, text)

    def debug(self, text):
        self._write_and_retry(_priority.LOG_DEBUG, text)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        return "<Writer {} {} appname={!r}>".format(self.network, self.address, self.appname)


def dial(network, address, appname=None, priority=_priority.LOG_USER | _priority.LOG_INFO, **options):
    """Connect to the syslog server at ``address`` over ``network``.

    An empty network means udp; an empty appname falls back to the name of
    the running program. ``options`` may set ``hostname``, ``procid``,
    ``formatter``, ``clock`` and ``timeout``. The first connection is made
    here, so an unreachable server raises before a writer is returned.
    """
    w = Writer(network, address, appname, priority, **options)
    with w._lock:
        w.connect()
    return w
