# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

from winregcli.registry.runner import CommandResult


class FakeRunner:
    '''
    Stands in for RegRunner.

    Queue responses with ok()/fail()/raises(); each run() pops one.
    Every argv is recorded in .calls.
    '''
    def __init__(self):
        self.calls = []
        self._responses = []

    def ok(self, stdout="", stderr=""):
        self._responses.append(("result", 0, stdout, stderr))
        return self

    def fail(self, exit_code=1, stdout="", stderr="ERROR: The system was unable to find the specified registry key or value."):
        self._responses.append(("result", exit_code, stdout, stderr))
        return self

    def raises(self, exc):
        self._responses.append(("raise", exc, None, None))
        return self

    def run(self, argv, *, logger=None):
        argv = tuple(argv)
        self.calls.append(argv)
        if not self._responses:
            raise AssertionError(f"unexpected REG call: {argv}")
        kind, a, out, err = self._responses.pop(0)
        if kind == "raise":
            raise a
        return CommandResult(argv=argv, exit_code=a, stdout=out, stderr=err)
