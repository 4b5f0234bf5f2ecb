# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

from goggler.errors import InvalidPriorityError

# severities (RFC5424 section 6.2.1)
LOG_EMERG = 0
LOG_ALERT = 1
LOG_CRIT = 2
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7

# facilities, already shifted into place
LOG_KERN = 0 << 3
LOG_USER = 1 << 3
LOG_MAIL = 2 << 3
LOG_DAEMON = 3 << 3
LOG_AUTH = 4 << 3
LOG_SYSLOG = 5 << 3
LOG_LPR = 6 << 3
LOG_NEWS = 7 << 3
LOG_UUCP = 8 << 3
LOG_CRON = 9 << 3
LOG_AUTHPRIV = 10 << 3
LOG_FTP = 11 << 3
LOG_NTP = 12 << 3
LOG_SECURITY = 13 << 3
LOG_CONSOLE = 14 << 3
LOG_SOLARISCRON = 15 << 3
LOG_LOCAL0 = 16 << 3
LOG_LOCAL1 = 17 << 3
LOG_LOCAL2 = 18 << 3
LOG_LOCAL3 = 19 << 3
LOG_LOCAL4 = 20 << 3
LOG_LOCAL5 = 21 << 3
LOG_LOCAL6 = 22 << 3
LOG_LOCAL7 = 23 << 3

MAX_PRIORITY = LOG_LOCAL7 | LOG_DEBUG

SEVERITY_MASK = 0x07
FACILITY_MASK = 0xf8

severity_names = {
    "emerg": LOG_EMERG,
    "panic": LOG_EMERG,
    "alert": LOG_ALERT,
    "crit": LOG_CRIT,
    "critical": LOG_CRIT,
    "err": LOG_ERR,
    "error": LOG_ERR,
    "warning": LOG_WARNING,
    "warn": LOG_WARNING,
    "notice": LOG_NOTICE,
    "info": LOG_INFO,
    "debug": LOG_DEBUG,
}

facility_names = {
    "kern": LOG_KERN,
    "user": LOG_USER,
    "mail": LOG_MAIL,
    "daemon": LOG_DAEMON,
    "auth": LOG_AUTH,
    "security": LOG_AUTH,
    "syslog": LOG_SYSLOG,
    "lpr": LOG_LPR,
    "news": LOG_NEWS,
    "uucp": LOG_UUCP,
    "cron": LOG_CRON,
    "authpriv": LOG_AUTHPRIV,
    "ftp": LOG_FTP,
    "ntp": LOG_NTP,
    "console": LOG_CONSOLE,
    "solaris-cron": LOG_SOLARISCRON,
    "local0": LOG_LOCAL0,
    "local1": LOG_LOCAL1,
    "local2": LOG_LOCAL2,
    "local3": LOG_LOCAL3,
    "local4": LOG_LOCAL4,
    "local5": LOG_LOCAL5,
    "local6": LOG_LOCAL6,
    "local7": LOG_LOCAL7,
}

level_names = {
    "DEBUG": LOG_DEBUG,
    "INFO": LOG_INFO,
    "WARNING": LOG_WARNING,
    "ERROR": LOG_ERR,
    "CRITICAL": LOG_CRIT,
}


def validate(priority):
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise InvalidPriorityError(priority)
    if priority < 0 or priority > MAX_PRIORITY:
        raise InvalidPriorityError(priority)
    return priority


def _lookup(value, names, kind):
    if isinstance(value, str):
        try:
            return names[value.lower()]
        except KeyError:
            raise ValueError("unknown syslog {} {!r}".format(kind, value))
    return value


def encode(facility=LOG_USER, severity=LOG_INFO):
    """Combine a facility and a severity, given as names or numbers, into a
    priority value."""
    facility = _lookup(facility, facility_names, "facility")
    severity = _lookup(severity, severity_names, "severity")
    return validate(facility | severity)


def level_to_severity(levelname):
    return level_names.get(levelname, LOG_WARNING)
