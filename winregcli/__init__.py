# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/__init__.py
"""
winregcli - Windows registry access through REG.EXE

Usage as a library:

    from winregcli import Registry, HKCU, REG_SZ

    reg = Registry(hive=HKCU, key="\\Software\\Example")
    reg.set("greeting", REG_SZ, "hello", lambda err, _: print(err or "written"))
"""
import logging

__version__ = "0.1.0"

from .core.exceptions import (
    CommandFailed,
    ExecutionError,
    InvalidArchitecture,
    InvalidHive,
    InvalidKeyPath,
    InvalidValueType,
    MissingCallback,
    WinRegError,
)
from .registry import *  # noqa: F401,F403
from .registry import __all__ as _registry_all

# Library default: silent unless the application configures logging.
logging.getLogger("winregcli").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "WinRegError",
    "CommandFailed",
    "ExecutionError",
    "InvalidArchitecture",
    "InvalidHive",
    "InvalidKeyPath",
    "InvalidValueType",
    "MissingCallback",
] + list(_registry_all)
