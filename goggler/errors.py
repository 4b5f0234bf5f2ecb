# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.


class GogglerError(Exception):
    pass


class InvalidPriorityError(GogglerError, ValueError):

    def __init__(self, priority):
        super(InvalidPriorityError, self).__init__("invalid syslog priority: {!r}".format(priority))
        self.priority = priority


class MissingAddressError(GogglerError, ValueError):

    def __init__(self):
        super(MissingAddressError, self).__init__("syslog server address is needed")


class UnknownNetworkError(GogglerError, ValueError):

    def __init__(self, network):
        super(UnknownNetworkError, self).__init__("unknown network {!r}".format(network))
        self.network = network


class InvalidAddressError(GogglerError, ValueError):

    def __init__(self, address, reason):
        super(InvalidAddressError, self).__init__("address {!r}: {}".format(address, reason))
        self.address = address


class InvalidMessageError(GogglerError, ValueError):
    pass


class ConfigError(GogglerError):
    pass
