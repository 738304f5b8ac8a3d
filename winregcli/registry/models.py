# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/models.py
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..core.exceptions import InvalidArchitecture, InvalidHive, InvalidKeyPath
from .constants import ARCH_FLAGS, HIVE_SHORT_NAMES, HIVES, HKLM, KEY_SEPARATOR

# Zero or more "\segment" groups. A segment is any run of characters except the
# separator and control characters, so a trailing "\" never matches.
KEY_PATTERN = re.compile(r"(?:\\[^\\\x00-\x1f]+)*")


def _normalize_arch(arch: Optional[str]) -> Optional[str]:
    if arch is None or arch == "":
        return None
    if arch not in ARCH_FLAGS:
        raise InvalidArchitecture(context={"arch": arch})
    return arch


@dataclass(frozen=True)
class RegistryKey:
    """
    Immutable reference to one registry key.

    `key` is "" for the hive root, otherwise "\\Software\\Vendor" style.
    Navigation (parent/child) always builds a new reference.
    """
    host: str = ""
    hive: str = HKLM
    key: str = ""
    arch: Optional[str] = None

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "host", "" if self.host is None else str(self.host))
        object.__setattr__(self, "hive", HKLM if self.hive is None else str(self.hive))
        object.__setattr__(self, "key", "" if self.key is None else str(self.key))

        if self.hive not in HIVES:
            raise InvalidHive(msg=f"illegal hive specified: {self.hive!r}", context={"hive": self.hive})
        if KEY_PATTERN.fullmatch(self.key) is None:
            raise InvalidKeyPath(msg=f"illegal key specified: {self.key!r}", context={"key": self.key})
        object.__setattr__(self, "arch", _normalize_arch(self.arch))

    @property
    def path(self) -> str:
        prefix = f"\\\\{self.host}\\" if self.host else ""
        return prefix + self.hive + self.key

    @property
    def parent(self) -> "RegistryKey":
        idx = self.key.rfind(KEY_SEPARATOR)
        parent_key = self.key[:idx] if idx > 0 else ""
        return RegistryKey(host=self.host, hive=self.hive, key=parent_key, arch=self.arch)

    def child(self, name: str) -> "RegistryKey":
        return RegistryKey(host=self.host, hive=self.hive, key=f"{self.key}{KEY_SEPARATOR}{name}", arch=self.arch)

    def with_key(self, key: str) -> "RegistryKey":
        return RegistryKey(host=self.host, hive=self.hive, key=key, arch=self.arch)

    @classmethod
    def parse(cls, text: str, *, arch: Optional[str] = None) -> "RegistryKey":
        """
        Build a reference from a textual path.

        Accepts:
          - "HKCU\\Software\\X"
          - "HKEY_CURRENT_USER\\Software\\X"
          - "\\\\host\\HKLM\\Software"
        """
        s = (text or "").strip()
        host = ""
        if s.startswith("\\\\"):
            host, sep, s = s[2:].partition(KEY_SEPARATOR)
            if not host or not sep:
                raise InvalidKeyPath(msg=f"illegal key specified: {text!r}", context={"key": text})

        hive, sep, rest = s.partition(KEY_SEPARATOR)
        hive = hive.upper()
        hive = HIVE_SHORT_NAMES.get(hive, hive)
        key = (KEY_SEPARATOR + rest).rstrip(KEY_SEPARATOR) if sep else ""
        return cls(host=host, hive=hive, key=key, arch=arch)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class RegistryItem:
    """
    One value as printed by REG QUERY.

    `value` is the raw text REG printed (DWORDs stay "0x1"); decoding is
    left to the caller. The default value has name == "".
    """
    host: str
    hive: str
    key: str
    name: str
    type: str
    value: str
    arch: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
