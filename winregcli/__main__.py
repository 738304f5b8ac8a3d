# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/__main__.py
from __future__ import annotations

import sys
import traceback
from typing import Any, Optional, Sequence

from .cli.commands import run_command
from .cli.parser import parse_args_with_config
from .core.exceptions import CommandFailed, ExecutionError, Fatal, WinRegError, format_exception_for_cli


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger: Any, level: str, msg: str) -> None:
    """
    Best-effort logging without assuming logger exists or has a given method.
    """
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def main(argv: Optional[Sequence[str]] = None) -> None:
    logger: Optional[Any] = None

    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # the config loader logged it before raising
        raise SystemExit(e.code)
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        raise SystemExit(130)

    verbose = getattr(args, "verbose", 0)

    # Phase 2: run the command
    try:
        rc = run_command(args, logger)
    except CommandFailed as e:
        _safe_log(logger, "error", f"REG failed: {format_exception_for_cli(e, verbose=verbose)}")
        rc = 1
    except ExecutionError as e:
        _safe_log(logger, "error", format_exception_for_cli(e, verbose=verbose))
        rc = e.code
    except WinRegError as e:
        # usage errors (bad hive/key/arch/type) and Fatal
        _safe_log(logger, "error", format_exception_for_cli(e, verbose=verbose))
        rc = e.code
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        # Hard guardrail: unexpected exceptions should not fail silently.
        _safe_log(logger, "error", f"💥 UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
