# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/registry/key.py
"""
Registry: the public handle for one registry key.

Each operation composes argument builder -> RegRunner -> parser and reports
through a completion callback `cb(err, result)`:

    reg = Registry(hive=HKCU, key="\\Software\\Microsoft\\Windows\\CurrentVersion\\Run")
    reg.values(lambda err, items: print(err or items))

Calls return immediately (the work runs on an executor) and return the
Registry itself so calls can be chained. The callback is invoked exactly once,
with either an error or a result.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence

from ..core.exceptions import CommandFailed, MissingCallback
from ..core.logger import Log
from ..core.logging_utils import safe_logger
from . import arguments as A
from . import parser as P
from .constants import HKLM
from .models import RegistryKey
from .runner import RegRunner

Callback = Callable[[Optional[BaseException], Any], None]

DEFAULT_MAX_WORKERS = 4

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def default_executor() -> ThreadPoolExecutor:
    """Process-wide pool shared by every Registry that wasn't given one."""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=DEFAULT_MAX_WORKERS, thread_name_prefix="winregcli")
        return _executor


def _require_callback(cb: Any) -> None:
    if not callable(cb):
        raise MissingCallback()


class Registry:
    def __init__(
        self,
        host: str = "",
        hive: str = HKLM,
        key: str = "",
        arch: Optional[str] = None,
        *,
        runner: Optional[RegRunner] = None,
        executor: Optional[Executor] = None,
        logger: Any = None,
    ):
        self._ref = RegistryKey(host=host, hive=hive, key=key, arch=arch)
        self._logger = safe_logger(logger)
        self._runner = runner if runner is not None else RegRunner(logger=self._logger)
        self._executor = executor

    @classmethod
    def from_ref(
        cls,
        ref: RegistryKey,
        *,
        runner: Optional[RegRunner] = None,
        executor: Optional[Executor] = None,
        logger: Any = None,
    ) -> "Registry":
        return cls(ref.host, ref.hive, ref.key, ref.arch, runner=runner, executor=executor, logger=logger)

    def _derive(self, ref: RegistryKey) -> "Registry":
        return Registry.from_ref(ref, runner=self._runner, executor=self._executor, logger=self._logger)

    # -------- read-only properties

    @property
    def ref(self) -> RegistryKey:
        return self._ref

    @property
    def host(self) -> str:
        return self._ref.host

    @property
    def hive(self) -> str:
        return self._ref.hive

    @property
    def key(self) -> str:
        return self._ref.key

    @property
    def arch(self) -> Optional[str]:
        return self._ref.arch

    @property
    def path(self) -> str:
        return self._ref.path

    @property
    def parent(self) -> "Registry":
        return self._derive(self._ref.parent)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") and name not in self.__dict__:
            super().__setattr__(name, value)
            return
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Registry({self.path!r}, arch={self.arch!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self._ref == other._ref

    def __hash__(self) -> int:
        return hash(self._ref)

    # -------- plumbing

    def _exec(self, argv: Sequence[str], log: Any) -> str:
        """Run REG; stdout on success, CommandFailed on non-zero exit."""
        return self._runner.run(argv, logger=log).raise_for_status().stdout

    def _dispatch(self, op: str, cb: Callback, work: Callable[[Any], Any]) -> "Registry":
        log = Log.bind(self._logger, op=op, path=self.path) if isinstance(self._logger, logging.Logger) else self._logger

        def task() -> None:
            try:
                result = work(log)
            except Exception as e:
                log.debug("%s failed: %s", op, e)
                self._deliver(cb, e, None, log)
                return
            self._deliver(cb, None, result, log)

        executor = self._executor if self._executor is not None else default_executor()
        executor.submit(task)
        return self

    @staticmethod
    def _deliver(cb: Callback, err: Optional[BaseException], result: Any, log: Any) -> None:
        try:
            cb(err, result)
        except Exception:
            # Nobody is left to hand this to; the worker thread must survive.
            log.error("completion callback raised", exc_info=True)

    # -------- operations

    def values(self, cb: Callback) -> "Registry":
        """List the key's values as RegistryItem records, in REG's order."""
        _require_callback(cb)
        argv = A.query_args(self._ref)
        return self._dispatch("values", cb, lambda log: P.parse_values(self._exec(argv, log), self._ref))

    def keys(self, cb: Callback) -> "Registry":
        """List direct subkeys as Registry handles sharing this one's runner/executor."""
        _require_callback(cb)
        argv = A.query_args(self._ref)

        def work(log: Any) -> List["Registry"]:
            return [self._derive(r) for r in P.parse_keys(self._exec(argv, log), self._ref)]

        return self._dispatch("keys", cb, work)

    def get(self, name: str, cb: Callback) -> "Registry":
        """Fetch one value; the result is None when REG printed no matching row."""
        _require_callback(cb)
        argv = A.get_args(self._ref, name)
        return self._dispatch("get", cb, lambda log: P.parse_value(self._exec(argv, log), self._ref))

    def set(self, name: str, value_type: str, value: str, cb: Callback) -> "Registry":
        _require_callback(cb)
        # raises InvalidValueType before anything is spawned
        argv = A.set_args(self._ref, name, value_type, value)
        return self._dispatch("set", cb, lambda log: self._unit(argv, log))

    def remove(self, name: str, cb: Callback) -> "Registry":
        _require_callback(cb)
        argv = A.remove_args(self._ref, name)
        return self._dispatch("remove", cb, lambda log: self._unit(argv, log))

    def create(self, cb: Callback) -> "Registry":
        """Create the key (and missing parents); succeeds if it already exists."""
        _require_callback(cb)
        argv = A.create_args(self._ref)
        return self._dispatch("create", cb, lambda log: self._unit(argv, log))

    def erase_values(self, cb: Callback) -> "Registry":
        """Delete all values of this key. Subkeys are left alone."""
        _require_callback(cb)
        argv = A.erase_values_args(self._ref)
        return self._dispatch("erase_values", cb, lambda log: self._unit(argv, log))

    def erase_key(self, cb: Callback) -> "Registry":
        """Delete this key with everything below it."""
        _require_callback(cb)
        argv = A.erase_key_args(self._ref)
        return self._dispatch("erase_key", cb, lambda log: self._unit(argv, log))

    clear = erase_values
    destroy = erase_key

    def key_exists(self, cb: Callback) -> "Registry":
        """
        True iff listing the key succeeds. A non-zero REG exit means "absent";
        a REG that can't be started is still an error.
        """
        _require_callback(cb)
        argv = A.query_args(self._ref)

        def work(log: Any) -> bool:
            try:
                self._exec(argv, log)
            except CommandFailed:
                return False
            return True

        return self._dispatch("key_exists", cb, work)

    def value_exists(self, name: str, cb: Callback) -> "Registry":
        _require_callback(cb)
        argv = A.get_args(self._ref, name)

        def work(log: Any) -> bool:
            try:
                out = self._exec(argv, log)
            except CommandFailed:
                return False
            return P.parse_value(out, self._ref) is not None

        return self._dispatch("value_exists", cb, work)

    def _unit(self, argv: Sequence[str], log: Any) -> None:
        self._exec(argv, log)
        return None
