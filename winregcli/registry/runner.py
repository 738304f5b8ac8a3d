# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/runner.py
"""
REG.EXE execution.

One call == one process. stdout and stderr are collected in full (subprocess
drains both pipes concurrently, so a chatty stderr can't wedge stdout) and
handed back only once the process has exited.
"""
from __future__ import annotations

import ntpath
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..core.exceptions import CommandFailed, ExecutionError
from ..core.logging_utils import safe_logger
from ..core.utils import U

REG_BIN_ENV = "WINREGCLI_REG_BIN"


def default_reg_bin(env: Optional[Mapping[str, str]] = None, platform: Optional[str] = None) -> str:
    """
    Pick the REG executable.

    On Windows the absolute %windir%\\system32\\reg.exe is preferred over a
    PATH lookup so a stray "reg.exe" earlier on PATH is never picked up.
    Elsewhere (tests, wine setups) the bare name is used.
    """
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    override = (env.get(REG_BIN_ENV) or "").strip()
    if override:
        return override

    if platform == "win32":
        windir = env.get("windir") or env.get("WINDIR") or env.get("SystemRoot")
        if windir:
            return ntpath.join(windir, "system32", "reg.exe")
    return "REG"


@dataclass(frozen=True)
class CommandResult:
    argv: Tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def raise_for_status(self) -> "CommandResult":
        if not self.ok:
            raise CommandFailed.from_output(self.argv, self.exit_code, self.stdout, self.stderr)
        return self


class RegRunner:
    """
    Minimal REG execution helper.

    - Inherits the caller's environment, no cwd, stdin closed.
    - A missing/unstartable binary raises ExecutionError; a non-zero exit is
      returned as data (see CommandResult.raise_for_status).
    - Logs what it runs and what came back to the injected logger only.
    """

    def __init__(self, *, logger: Any = None, reg_bin: Optional[str] = None):
        self.logger = safe_logger(logger)
        self.reg_bin = reg_bin or default_reg_bin()

    def run(self, argv: Sequence[str], *, logger: Any = None) -> CommandResult:
        log = safe_logger(logger) if logger is not None else self.logger
        args = tuple(str(a) for a in argv)
        full = [self.reg_bin, *args]
        log.debug("reg.exec: %s", U.pretty_cmd(full))

        try:
            p = subprocess.run(
                full,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            log.error("reg.exec: failed to start %s: %s", self.reg_bin, e)
            raise ExecutionError(
                msg=f"failed to execute {self.reg_bin}: {e}",
                cause=e,
                context={"reg_bin": self.reg_bin, "argv": " ".join(args)},
            ) from e

        out = p.stdout or ""
        err = p.stderr or ""
        log.debug("reg.exec: rc=%s stdout_len=%d stderr_len=%d", p.returncode, len(out), len(err))
        if err.strip():
            _trace(log, "reg.exec: stderr(head)=%s", U.head(err))
        if out.strip():
            _trace(log, "reg.exec: stdout(head)=%s", U.head(out))

        return CommandResult(argv=args, exit_code=p.returncode, stdout=out, stderr=err)


def _trace(log: Any, msg: str, *args: Any) -> None:
    fn = getattr(log, "trace", None)
    if callable(fn):
        fn(msg, *args)
    else:
        log.debug(msg, *args)
