# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/parser.py
"""
Parsing of `REG QUERY` output.

REG prints a header line (the queried path), then either value rows

    HKEY_CURRENT_USER\\Software\\X
        name    REG_SZ    hello

or one line per subkey. The format is loose, so parsing is lenient: rows that
don't fit are dropped, never reported. Values are kept as the raw text REG
printed; nothing is decoded.
"""
from __future__ import annotations

import re
from typing import List, Optional

from ..core.exceptions import InvalidKeyPath
from .constants import DEFAULT_VALUE, DEFAULT_VALUE_LABEL, HIVE_LONG_NAMES, REG_TYPES
from .models import RegistryItem, RegistryKey

_TYPE_ALT = "|".join(REG_TYPES)

# <name> <TYPE> <value>. The name is lazy, so the row splits at the FIRST
# type tag: a value whose text contains " REG_SZ " survives intact, while a
# value NAME containing a type tag is cut short there. The value part is
# optional because an empty REG_SZ prints nothing after the tag.
ITEM_PATTERN = re.compile(rf"^(.*?)\s+({_TYPE_ALT})(?:\s+(.*))?$")

# A subkey row starts with one of the hive long names.
KEY_LINE_PATTERN = re.compile(r"^(" + "|".join(HIVE_LONG_NAMES.values()) + r")(.*)$")


def content_lines(stdout: str) -> List[str]:
    """Trimmed, non-blank lines with the leading header line removed."""
    lines = [ln.strip() for ln in (stdout or "").splitlines()]
    lines = [ln for ln in lines if ln]
    return lines[1:]


def _parse_item(line: str, ref: RegistryKey) -> Optional[RegistryItem]:
    m = ITEM_PATTERN.match(line)
    if m is None:
        return None
    name = m.group(1).strip()
    if name == DEFAULT_VALUE_LABEL:
        name = DEFAULT_VALUE
    return RegistryItem(
        host=ref.host,
        hive=ref.hive,
        key=ref.key,
        name=name,
        type=m.group(2),
        value=m.group(3) or "",
        arch=ref.arch,
    )


def parse_values(stdout: str, ref: RegistryKey) -> List[RegistryItem]:
    items: List[RegistryItem] = []
    for line in content_lines(stdout):
        item = _parse_item(line, ref)
        if item is not None:
            items.append(item)
    return items


def parse_value(stdout: str, ref: RegistryKey) -> Optional[RegistryItem]:
    """
    Single value lookup. The last matching row wins: older REG builds print an
    extra header row even when /v is given.
    """
    found: Optional[RegistryItem] = None
    for line in content_lines(stdout):
        item = _parse_item(line, ref)
        if item is not None:
            found = item
    return found


def parse_keys(stdout: str, ref: RegistryKey) -> List[RegistryKey]:
    keys: List[RegistryKey] = []
    for line in content_lines(stdout):
        m = KEY_LINE_PATTERN.match(line)
        if m is None:
            continue
        sub = m.group(2)
        # REG echoes the queried key itself among the rows
        if sub == ref.key:
            continue
        try:
            keys.append(ref.with_key(sub))
        except InvalidKeyPath:
            continue
    return keys
