# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

import codecs
import logging
import os

import yaml

from goggler import priority
from goggler.errors import ConfigError
from goggler.writer import dial

logger = logging.getLogger(__name__)

ENV_PREFIX = "GOGGLER_"

ENV_KEYS = {
    "GOGGLER_SYSLOG_NETWORK": "network",
    "GOGGLER_SYSLOG_ADDRESS": "address",
    "GOGGLER_APPNAME": "appname",
    "GOGGLER_SYSLOG_FACILITY": "facility",
    "GOGGLER_SYSLOG_SEVERITY": "severity",
    "GOGGLER_SYSLOG_TIMEOUT": "timeout",
}

DEFAULTS = {
    "network": "",
    "address": "",
    "appname": "",
    "facility": "user",
    "severity": "info",
    "timeout": None,
}


def load_yaml(path):
    try:
        with codecs.open(path, "r", encoding="utf-8", errors="ignore") as f:
            data = yaml.safe_load(f.read())
    except (IOError, yaml.YAMLError):
        logger.warning("could not read syslog config file %s", path, exc_info=True)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("{}: expected a mapping, got {}".format(path, type(data).__name__))
    return data


def load_config(path=None, envs=None):
    """Build the writer settings from an optional YAML file overlaid with
    ``GOGGLER_*`` environment variables."""
    app_envs = {}
    app_envs.update(os.environ)
    app_envs.update(envs or {})
    config = dict(DEFAULTS)
    path = path or app_envs.get(ENV_PREFIX + "CONFIG")
    if path:
        config.update((k, v) for k, v in load_yaml(path).items() if k in DEFAULTS)
    for name, key in ENV_KEYS.items():
        if app_envs.get(name):
            config[key] = app_envs[name]
    return config


def _timeout(value):
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError("invalid timeout {!r}".format(value))


def dial_from_config(config, **options):
    try:
        prio = priority.encode(config.get("facility") or "user", config.get("severity") or "info")
    except ValueError as e:
        raise ConfigError(str(e))
    options.setdefault("timeout", _timeout(config.get("timeout")))
    return dial(config.get("network"), config.get("address"), config.get("appname"), prio, **options)
