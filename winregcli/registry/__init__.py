# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/registry/__init__.py
"""
REG.EXE driven registry access.

- constants: hive ids, value type tags, architecture flags
- models: RegistryKey / RegistryItem records
- arguments: REG argument vectors
- runner: process execution
- parser: QUERY output parsing
- key: the Registry handle tying it all together
"""
from .constants import (
    DEFAULT_VALUE,
    HIVES,
    HKCC,
    HKCR,
    HKCU,
    HKLM,
    HKU,
    REG_BINARY,
    REG_DWORD,
    REG_EXPAND_SZ,
    REG_MULTI_SZ,
    REG_NONE,
    REG_QWORD,
    REG_SZ,
    REG_TYPES,
)
from .key import Registry
from .models import RegistryItem, RegistryKey
from .runner import CommandResult, RegRunner, default_reg_bin

__all__ = [
    "Registry",
    "RegistryKey",
    "RegistryItem",
    "RegRunner",
    "CommandResult",
    "default_reg_bin",
    "DEFAULT_VALUE",
    "HIVES",
    "HKLM",
    "HKCU",
    "HKCR",
    "HKU",
    "HKCC",
    "REG_TYPES",
    "REG_SZ",
    "REG_MULTI_SZ",
    "REG_EXPAND_SZ",
    "REG_DWORD",
    "REG_QWORD",
    "REG_BINARY",
    "REG_NONE",
]
