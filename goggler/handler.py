# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

import logging

from goggler import priority
from goggler.writer import dial


class SkipOwnRecords(logging.Filter):
    """Drop records logged by goggler itself.

    The writer logs while holding its lock, so feeding those records back
    into the same writer would block the logging thread.
    """

    def filter(self, record):
        return not (record.name == "goggler" or record.name.startswith("goggler."))


class SysLogHandler(logging.Handler):
    """A logging handler that ships records through a :class:`Writer`.

    When no writer is given one is dialed with ``facility`` as its priority;
    each record's severity is OR'd in from its level name. The writer's own
    reconnect-once policy applies to every record; when that still fails the
    error goes to :meth:`handleError`.
    """

    def __init__(self, writer=None, network=None, address=None, appname=None,
                 facility=priority.LOG_USER, **options):
        super(SysLogHandler, self).__init__()
        if writer is None:
            writer = dial(network, address, appname, facility, **options)
        self.writer = writer
        self.addFilter(SkipOwnRecords())

    def mapPriority(self, levelname):
        return priority.level_to_severity(levelname)

    def emit(self, record):
        try:
            msg = self.format(record)
            self.writer.send(self.mapPriority(record.levelname), msg)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def close(self):
        try:
            self.writer.close()
        finally:
            super(SysLogHandler, self).close()
