# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/constants.py
"""
Registry identifiers understood by REG.EXE.
"""
from __future__ import annotations

from typing import Dict, Tuple

# Hive ids (short form, what we pass on the command line)
HKLM = "HKLM"
HKCU = "HKCU"
HKCR = "HKCR"
HKU = "HKU"
HKCC = "HKCC"
HIVES: Tuple[str, ...] = (HKLM, HKCU, HKCR, HKU, HKCC)

# Long form, what REG prints back in QUERY output
HIVE_LONG_NAMES: Dict[str, str] = {
    HKLM: "HKEY_LOCAL_MACHINE",
    HKCU: "HKEY_CURRENT_USER",
    HKCR: "HKEY_CLASSES_ROOT",
    HKU: "HKEY_USERS",
    HKCC: "HKEY_CURRENT_CONFIG",
}
HIVE_SHORT_NAMES: Dict[str, str] = {v: k for k, v in HIVE_LONG_NAMES.items()}

# Value type tags
REG_SZ = "REG_SZ"
REG_MULTI_SZ = "REG_MULTI_SZ"
REG_EXPAND_SZ = "REG_EXPAND_SZ"
REG_DWORD = "REG_DWORD"
REG_QWORD = "REG_QWORD"
REG_BINARY = "REG_BINARY"
REG_NONE = "REG_NONE"
REG_TYPES: Tuple[str, ...] = (
    REG_SZ,
    REG_MULTI_SZ,
    REG_EXPAND_SZ,
    REG_DWORD,
    REG_QWORD,
    REG_BINARY,
    REG_NONE,
)

# Registry view selectors; only meaningful on 64-bit Windows.
X86 = "x86"
X64 = "x64"
ARCH_FLAGS: Dict[str, str] = {
    X86: "/reg:32",
    X64: "/reg:64",
}

# Name used for the default (unnamed) value of a key. REG addresses it with /ve.
DEFAULT_VALUE = ""

# Label REG prints in place of the default value's name.
DEFAULT_VALUE_LABEL = "(Default)"

# REG sub-commands
QUERY = "QUERY"
ADD = "ADD"
DELETE = "DELETE"

KEY_SEPARATOR = "\\"
