# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/cli/commands.py
"""
CLI command handlers.

Each handler drives one Registry operation, waits for its callback and
renders the result (rich table or JSON). Errors propagate to main().
"""
from __future__ import annotations

import argparse
import sys
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.utils import U
from ..registry.constants import DEFAULT_VALUE, DEFAULT_VALUE_LABEL
from ..registry.key import Registry
from ..registry.models import RegistryItem, RegistryKey
from ..registry.runner import RegRunner

EXIT_OK = 0
EXIT_FALSE = 1


def wait_for(start: Callable[..., Any], *args: Any) -> Any:
    """
    Call a callback-style Registry operation and block for its outcome.
    `start(*args, cb)` must invoke cb(err, result) exactly once.
    """
    fut: Future = Future()

    def _done(err: Optional[BaseException], result: Any = None) -> None:
        if err is not None:
            fut.set_exception(err)
        else:
            fut.set_result(result)

    start(*args, _done)
    return fut.result()


def build_registry(
    args: argparse.Namespace,
    logger: Any,
    *,
    runner: Optional[RegRunner] = None,
    executor: Optional[Executor] = None,
) -> Registry:
    ref = RegistryKey.parse(args.key, arch=args.arch)
    if args.host and not ref.host:
        ref = RegistryKey(host=args.host, hive=ref.hive, key=ref.key, arch=ref.arch)
    if runner is None:
        runner = RegRunner(logger=logger, reg_bin=args.reg_bin)
    return Registry.from_ref(ref, runner=runner, executor=executor, logger=logger)


class _Output:
    def __init__(self, out: TextIO, as_json: bool):
        self.out = out
        self.as_json = as_json
        self.console = Console(file=out, highlight=False, soft_wrap=True)

    def json(self, obj: Any) -> None:
        self.out.write(U.json_dump(obj) + "\n")

    def items(self, title: str, items: List[RegistryItem]) -> None:
        if self.as_json:
            self.json([i.to_dict() for i in items])
            return
        table = Table(title=escape(title))
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Value")
        for i in items:
            name = DEFAULT_VALUE_LABEL if i.name == DEFAULT_VALUE else i.name
            table.add_row(escape(name), i.type, escape(i.value))
        self.console.print(table)

    def lines(self, lines: List[str]) -> None:
        if self.as_json:
            self.json(lines)
            return
        for ln in lines:
            self.console.print(escape(ln))

    def message(self, text: str) -> None:
        if self.as_json:
            self.json({"result": text})
            return
        self.console.print(escape(text))


def _cmd_values(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    out.items(reg.path, wait_for(reg.values))
    return EXIT_OK


def _cmd_keys(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    out.lines([k.path for k in wait_for(reg.keys)])
    return EXIT_OK


def _cmd_get(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    item = wait_for(reg.get, args.name)
    if item is None:
        out.message(f"value {args.name or DEFAULT_VALUE_LABEL} not found under {reg.path}")
        return EXIT_FALSE
    if out.as_json:
        out.json(item.to_dict())
    else:
        out.items(reg.path, [item])
    return EXIT_OK


def _cmd_set(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    wait_for(reg.set, args.name, args.value_type, args.value)
    out.message("value written")
    return EXIT_OK


def _cmd_remove(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    wait_for(reg.remove, args.name)
    out.message("value deleted")
    return EXIT_OK


def _cmd_create(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    wait_for(reg.create)
    out.message("key created")
    return EXIT_OK


def _cmd_erase_values(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    wait_for(reg.erase_values)
    out.message("values erased")
    return EXIT_OK


def _cmd_erase_key(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    wait_for(reg.erase_key)
    out.message("key erased")
    return EXIT_OK


def _cmd_exists(reg: Registry, args: argparse.Namespace, out: _Output) -> int:
    if args.default_value:
        exists = wait_for(reg.value_exists, DEFAULT_VALUE)
    elif args.name is not None:
        exists = wait_for(reg.value_exists, args.name)
    else:
        exists = wait_for(reg.key_exists)
    if out.as_json:
        out.json({"exists": exists})
    else:
        out.console.print("true" if exists else "false")
    return EXIT_OK if exists else EXIT_FALSE


COMMANDS: Dict[str, Callable[[Registry, argparse.Namespace, _Output], int]] = {
    "values": _cmd_values,
    "keys": _cmd_keys,
    "get": _cmd_get,
    "set": _cmd_set,
    "remove": _cmd_remove,
    "create": _cmd_create,
    "erase-values": _cmd_erase_values,
    "erase-key": _cmd_erase_key,
    "exists": _cmd_exists,
}


def run_command(
    args: argparse.Namespace,
    logger: Any,
    *,
    runner: Optional[RegRunner] = None,
    executor: Optional[Executor] = None,
    out: Optional[TextIO] = None,
) -> int:
    reg = build_registry(args, logger, runner=runner, executor=executor)
    logger.debug("command=%s path=%s arch=%s", args.command, reg.path, reg.arch)
    handler = COMMANDS[args.command]
    return handler(reg, args, _Output(out or sys.stdout, bool(args.json)))
