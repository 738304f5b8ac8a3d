# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for CLI command handlers (fake REG, inline executor)."""
from __future__ import annotations

import io
import json

import pytest

from winregcli.cli.commands import build_registry, run_command, wait_for
from winregcli.cli.parser import build_parser
from winregcli.core.exceptions import CommandFailed, InvalidHive

QUERY_OUT = (
    "\r\nHKEY_CURRENT_USER\\Software\\Example\r\n"
    "    (Default)    REG_SZ    root\r\n"
    "    greeting    REG_SZ    hello world\r\n"
    "    Enabled    REG_DWORD    0x1\r\n\r\n"
)


@pytest.fixture
def run(fake_runner, inline_executor, fake_logger):
    def _run(*argv):
        args = build_parser().parse_args(list(argv))
        out = io.StringIO()
        rc = run_command(args, fake_logger, runner=fake_runner, executor=inline_executor, out=out)
        return rc, out.getvalue()

    return _run


@pytest.mark.unit
class TestBuildRegistry:
    def test_host_option_applies_to_local_paths(self, fake_logger, fake_runner):
        args = build_parser().parse_args(["--host", "srv", "--arch", "x86", "keys", "HKLM\\SOFTWARE"])
        reg = build_registry(args, fake_logger, runner=fake_runner)

        assert reg.path == "\\\\srv\\HKLM\\SOFTWARE"
        assert reg.arch == "x86"

    def test_path_host_wins(self, fake_logger, fake_runner):
        args = build_parser().parse_args(["--host", "srv", "keys", "\\\\box\\HKLM\\SOFTWARE"])
        assert build_registry(args, fake_logger, runner=fake_runner).host == "box"

    def test_bad_hive(self, fake_logger, fake_runner):
        args = build_parser().parse_args(["keys", "HKXX\\SOFTWARE"])
        with pytest.raises(InvalidHive):
            build_registry(args, fake_logger, runner=fake_runner)


@pytest.mark.unit
class TestWaitFor:
    def test_result(self):
        assert wait_for(lambda x, cb: cb(None, x * 2), 21) == 42

    def test_error_is_raised(self):
        def start(cb):
            cb(CommandFailed(exit_code=1), None)

        with pytest.raises(CommandFailed):
            wait_for(start)


@pytest.mark.unit
class TestCommands:
    def test_values_table(self, run, fake_runner):
        fake_runner.ok(QUERY_OUT)

        rc, out = run("values", "HKCU\\Software\\Example")

        assert rc == 0
        assert fake_runner.calls == [("QUERY", "HKCU\\Software\\Example")]
        assert "(Default)" in out
        assert "hello world" in out
        assert "REG_DWORD" in out

    def test_values_json(self, run, fake_runner):
        fake_runner.ok(QUERY_OUT)

        rc, out = run("--json", "values", "HKCU\\Software\\Example")

        rows = json.loads(out)
        assert rc == 0
        assert [r["name"] for r in rows] == ["", "greeting", "Enabled"]
        assert rows[2]["value"] == "0x1"
        assert rows[0]["hive"] == "HKCU"

    def test_keys(self, run, fake_runner):
        fake_runner.ok(
            "HKEY_CURRENT_USER\\Software\n"
            "HKEY_CURRENT_USER\\Software\\Example\n"
            "HKEY_CURRENT_USER\\Software\\Microsoft\n"
        )

        rc, out = run("--json", "keys", "HKEY_CURRENT_USER\\Software")

        assert rc == 0
        assert json.loads(out) == ["HKCU\\Software\\Example", "HKCU\\Software\\Microsoft"]

    def test_get(self, run, fake_runner):
        fake_runner.ok("HKEY_CURRENT_USER\\Software\\Example\n    Enabled    REG_DWORD    0x1\n")

        rc, out = run("--json", "get", "HKCU\\Software\\Example", "Enabled")

        assert rc == 0
        assert fake_runner.calls == [("QUERY", "HKCU\\Software\\Example", "/v", "Enabled")]
        assert json.loads(out)["value"] == "0x1"

    def test_get_default_value_without_row(self, run, fake_runner):
        fake_runner.ok("HKEY_CURRENT_USER\\Software\\Example\n")

        rc, out = run("get", "HKCU\\Software\\Example")

        assert rc == 1
        assert fake_runner.calls == [("QUERY", "HKCU\\Software\\Example", "/ve")]
        assert "not found" in out

    def test_set_with_arch(self, run, fake_runner):
        fake_runner.ok("The operation completed successfully.")

        rc, out = run("--arch", "x64", "set", "HKCU\\Software\\Example", "greeting", "REG_SZ", "hello world")

        assert rc == 0
        assert fake_runner.calls == [
            ("ADD", "HKCU\\Software\\Example", "/v", "greeting", "/t", "REG_SZ", "/d", "hello world", "/f", "/reg:64")
        ]
        assert "value written" in out

    def test_set_rejects_unknown_type(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["set", "HKCU\\X", "n", "REG_FOO", "v"])

    @pytest.mark.parametrize(
        "argv,reg_argv,message",
        [
            (["remove", "HKCU\\X", "old"], ("DELETE", "HKCU\\X", "/f", "/v", "old"), "value deleted"),
            (["create", "HKCU\\X"], ("ADD", "HKCU\\X", "/f"), "key created"),
            (["erase-values", "HKCU\\X"], ("DELETE", "HKCU\\X", "/f", "/va"), "values erased"),
            (["erase-key", "HKCU\\X"], ("DELETE", "HKCU\\X", "/f"), "key erased"),
        ],
    )
    def test_mutations(self, run, fake_runner, argv, reg_argv, message):
        fake_runner.ok("")

        rc, out = run("--json", *argv)

        assert rc == 0
        assert fake_runner.calls == [reg_argv]
        assert json.loads(out) == {"result": message}

    def test_failure_propagates(self, run, fake_runner):
        fake_runner.fail(exit_code=1)

        with pytest.raises(CommandFailed):
            run("values", "HKCU\\Missing")


@pytest.mark.unit
class TestExistsCommand:
    def test_key_exists(self, run, fake_runner):
        fake_runner.ok("HKEY_CURRENT_USER\\X\n")
        assert run("exists", "HKCU\\X") == (0, "true\n")

    def test_key_missing(self, run, fake_runner):
        fake_runner.fail()
        assert run("exists", "HKCU\\X") == (1, "false\n")

    def test_value_exists_json(self, run, fake_runner):
        fake_runner.ok("HKEY_CURRENT_USER\\X\n    bla    REG_SZ    1\n")

        rc, out = run("--json", "exists", "HKCU\\X", "bla")

        assert rc == 0
        assert json.loads(out) == {"exists": True}
        assert fake_runner.calls == [("QUERY", "HKCU\\X", "/v", "bla")]

    def test_default_value(self, run, fake_runner):
        fake_runner.ok("HKEY_CURRENT_USER\\X\n")

        rc, _out = run("exists", "--default", "HKCU\\X")

        assert rc == 1
        assert fake_runner.calls == [("QUERY", "HKCU\\X", "/ve")]
