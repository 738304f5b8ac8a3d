# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/cli/parser.py
from __future__ import annotations

import argparse
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.config_loader import Config
from ..core.logger import Log, c
from ..core.utils import U
from ..registry.constants import ARCH_FLAGS, REG_TYPES

EPILOG = r"""examples:
  winregcli values 'HKCU\Software\Microsoft\Windows\CurrentVersion\Run'
  winregcli get 'HKLM\SOFTWARE\Microsoft\Windows NT\CurrentVersion' ProductName
  winregcli --arch x86 keys 'HKLM\SOFTWARE'
  winregcli set 'HKCU\Software\Example' greeting REG_SZ 'hello world'
  winregcli --config site.yaml --json values '\\fileserver\HKLM\SOFTWARE\Example'
"""


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("config / logging")
    g.add_argument("--config", action="append", default=[], help="YAML/JSON config file (repeatable, later wins).")
    g.add_argument("-v", "--verbose", action="count", default=0, help="-vv debug, -vvv trace.")
    g.add_argument("-q", "--quiet", action="count", default=0, help="-q warnings only, -qq errors only.")
    g.add_argument("--log-file", dest="log_file", default=None, help="Also log to this file.")
    g.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")
    g.add_argument("--dump-config", action="store_true", help="Print the merged config and exit.")
    g.add_argument("--dump-args", action="store_true", help="Print the parsed arguments and exit.")


def _add_registry_knobs(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("registry")
    g.add_argument("--host", default="", help="Remote host (same as a \\\\host\\ prefix on KEY).")
    g.add_argument("--arch", choices=sorted(ARCH_FLAGS), default=None, help="Registry view on 64-bit Windows.")
    g.add_argument("--reg-bin", dest="reg_bin", default=None, help="REG executable to run (default: system32\\reg.exe).")
    g.add_argument("--json", action="store_true", help="Print results as JSON.")


def _add_commands(p: argparse.ArgumentParser) -> None:
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    def _cmd(name: str, help_text: str) -> argparse.ArgumentParser:
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("key", metavar="KEY", help=r"Key path, e.g. HKCU\Software\Example.")
        return sp

    _cmd("values", "List the values of KEY.")
    _cmd("keys", "List the direct subkeys of KEY.")

    sp = _cmd("get", "Show one value (the default value if NAME is omitted).")
    sp.add_argument("name", metavar="NAME", nargs="?", default="")

    sp = _cmd("set", "Write a value, overwriting any existing one.")
    sp.add_argument("name", metavar="NAME")
    sp.add_argument("value_type", metavar="TYPE", choices=REG_TYPES)
    sp.add_argument("value", metavar="VALUE")

    sp = _cmd("remove", "Delete one value (the default value if NAME is omitted).")
    sp.add_argument("name", metavar="NAME", nargs="?", default="")

    _cmd("create", "Create KEY (no-op if it exists).")
    _cmd("erase-values", "Delete every value of KEY, keeping subkeys.")
    _cmd("erase-key", "Delete KEY and everything below it.")

    sp = _cmd("exists", "Exit 0 if KEY (or value NAME) exists, 1 otherwise.")
    sp.add_argument("name", metavar="NAME", nargs="?", default=None)
    sp.add_argument("--default", dest="default_value", action="store_true", help="Test the default value.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="winregcli",
        description=c("winregcli: Windows registry access through REG.EXE", "green", ["bold"]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    _add_global_config_logging(p)
    _add_registry_knobs(p)
    _add_commands(p)
    return p


def _build_preparser() -> argparse.ArgumentParser:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    return pre


def _load_merged_config(logger: Any, cfgs: Sequence[str]) -> Dict[str, Any]:
    if not cfgs:
        return {}
    expanded = Config.expand_configs(logger, list(cfgs))
    return Config.load_many(logger, expanded)


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
    logger: Any = None,
) -> Tuple[argparse.Namespace, Dict[str, Any], Any]:
    """
    Flow:
      Phase 0: parse ONLY global flags needed to locate config/logging
      Phase 1: load+merge config files
      Phase 2: apply config as defaults onto the parser
      Phase 3: full parse to get final args
    """
    import sys

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()

    pre = _build_preparser()
    args0, _rest = pre.parse_known_args(argv)

    own_logger = logger is None
    if own_logger:
        logger = Log.setup(args0.verbose, args0.log_file, quiet=args0.quiet, json_logs=args0.json_logs)

    conf = _load_merged_config(logger, args0.config or [])

    if args0.dump_config:
        print(U.json_dump(conf))
        raise SystemExit(0)

    applied = Config.apply_as_defaults(logger, parser, conf)

    args = parser.parse_args(argv)

    # Logging knobs may come from config; rebuild handlers once we know them.
    if own_logger and applied.keys() & {"verbose", "quiet", "log_file", "json_logs"}:
        logger = Log.setup(args.verbose, args.log_file, quiet=args.quiet, json_logs=args.json_logs)

    if getattr(args, "dump_args", False):
        print(U.json_dump(vars(args)))
        raise SystemExit(0)

    return args, conf, logger
