# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

"""RFC5424 rendering of a single syslog message.

The header grammar is::

    <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID STRUCTURED-DATA [SP MSG]

Header fields that are empty render as the nil value ``-``.
"""

from datetime import timezone

from goggler import priority as _priority
from goggler.errors import InvalidMessageError

VERSION = 1
NILVALUE = b"-"

HOSTNAME_MAX = 255
APPNAME_MAX = 48
PROCID_MAX = 128
MSGID_MAX = 32
SD_NAME_MAX = 32


def header_field(name, value, max_length):
    if not value:
        return NILVALUE
    value = str(value)
    if len(value) > max_length:
        raise InvalidMessageError("{} is longer than {} characters".format(name, max_length))
    # PRINTUSASCII, %d33-126
    for char in value:
        if not 33 <= ord(char) <= 126:
            raise InvalidMessageError("{} contains an invalid character: {!r}".format(name, value))
    return value.encode("ascii")


def format_timestamp(timestamp):
    if timestamp is None:
        return NILVALUE
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    text = timestamp.isoformat(timespec="microseconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text.encode("ascii")


def _escape_param_value(value):
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("]", "\\]")


def format_structured_data(structured_data):
    if not structured_data:
        return NILVALUE
    out = []
    for sd_id, params in structured_data:
        element = "[" + header_field("SD-ID", sd_id, SD_NAME_MAX).decode("ascii")
        for name, value in params:
            element += ' {}="{}"'.format(header_field("PARAM-NAME", name, SD_NAME_MAX).decode("ascii"),
                                         _escape_param_value(str(value)))
        out.append(element + "]")
    return "".join(out).encode("utf-8")


class Message(object):
    """An outbound syslog record."""

    def __init__(self, priority, timestamp, hostname, appname, procid,
                 msgid="", structured_data=None, message=b""):
        self.priority = priority
        self.timestamp = timestamp
        self.hostname = hostname
        self.appname = appname
        self.procid = procid
        self.msgid = msgid
        self.structured_data = structured_data or []
        self.message = message

    def to_bytes(self):
        try:
            _priority.validate(self.priority)
        except ValueError as e:
            raise InvalidMessageError(str(e))
        header = b" ".join([
            "<{}>{}".format(self.priority, VERSION).encode("ascii"),
            format_timestamp(self.timestamp),
            header_field("HOSTNAME", self.hostname, HOSTNAME_MAX),
            header_field("APP-NAME", self.appname, APPNAME_MAX),
            header_field("PROCID", self.procid, PROCID_MAX),
            header_field("MSGID", self.msgid, MSGID_MAX),
            format_structured_data(self.structured_data),
        ])
        body = self.message
        if isinstance(body, str):
            body = body.encode("utf-8")
        if body:
            return header + b" " + body
        return header

    def write_to(self, sink):
        return sink.write(self.to_bytes())

    def __repr__(self):
        return "<Message priority={} appname={!r} message={!r}>".format(
            self.priority, self.appname, self.message)


def render(message):
    return message.to_bytes()
