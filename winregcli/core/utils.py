# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/core/utils.py
from __future__ import annotations

import json
import subprocess
from typing import Any, Sequence


class U:
    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except Exception:
            return repr(obj)

    @staticmethod
    def pretty_cmd(cmd: Sequence[str]) -> str:
        # REG runs on Windows, so quote the way CreateProcess will see it.
        return subprocess.list2cmdline([str(x) for x in cmd])

    @staticmethod
    def head(s: Any, limit: int = 1200) -> str:
        t = "" if s is None else str(s).strip()
        if len(t) <= limit:
            return t
        return t[:limit] + "…"
