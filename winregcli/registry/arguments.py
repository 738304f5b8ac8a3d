# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/arguments.py
"""
REG.EXE argument vectors.

Every builder returns a fresh list: [SUBCOMMAND, full key path, ...flags].
Nothing here touches the system.
"""
from __future__ import annotations

from typing import List, Optional

from ..core.exceptions import InvalidArchitecture, InvalidValueType
from .constants import ADD, ARCH_FLAGS, DEFAULT_VALUE, DELETE, QUERY, REG_TYPES
from .models import RegistryKey


def _arch_flag(arch: Optional[str]) -> List[str]:
    if not arch:
        return []
    flag = ARCH_FLAGS.get(arch)
    if flag is None:
        raise InvalidArchitecture(context={"arch": arch})
    return [flag]


def _value_selector(name: str) -> List[str]:
    # /ve addresses the default (unnamed) value
    if name == DEFAULT_VALUE:
        return ["/ve"]
    return ["/v", name]


def query_args(ref: RegistryKey) -> List[str]:
    """Used for both value listing and subkey listing."""
    return [QUERY, ref.path] + _arch_flag(ref.arch)


def get_args(ref: RegistryKey, name: str) -> List[str]:
    return [QUERY, ref.path] + _value_selector(name) + _arch_flag(ref.arch)


def set_args(ref: RegistryKey, name: str, value_type: str, value: str) -> List[str]:
    if value_type not in REG_TYPES:
        raise InvalidValueType(msg=f"illegal type specified: {value_type!r}", context={"type": value_type})
    return (
        [ADD, ref.path]
        + _value_selector(name)
        + ["/t", value_type, "/d", value, "/f"]
        + _arch_flag(ref.arch)
    )


def remove_args(ref: RegistryKey, name: str) -> List[str]:
    return [DELETE, ref.path, "/f"] + _value_selector(name) + _arch_flag(ref.arch)


def erase_values_args(ref: RegistryKey) -> List[str]:
    """Delete every value of the key; the key and its subkeys survive."""
    return [DELETE, ref.path, "/f", "/va"] + _arch_flag(ref.arch)


def erase_key_args(ref: RegistryKey) -> List[str]:
    """Delete the key itself, including all values and subkeys."""
    return [DELETE, ref.path, "/f"] + _arch_flag(ref.arch)


def create_args(ref: RegistryKey) -> List[str]:
    return [ADD, ref.path, "/f"] + _arch_flag(ref.arch)
