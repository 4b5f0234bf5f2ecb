# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

__version__ = "0.1.0"

from goggler.errors import (GogglerError, InvalidPriorityError, MissingAddressError,  # noqa
                            UnknownNetworkError, InvalidAddressError, InvalidMessageError,
                            ConfigError)
from goggler.writer import Writer, dial  # noqa
