# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int) -> int:
    # Exit codes are typically 0..255
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={ctx.get(k)!r}" for k in sorted(ctx.keys()))


@dataclass(eq=False)
class WinRegError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - safe code handling (never crashes on int())
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        if self.context is None:
            self.context = {}
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "WinRegError":
        if self.context is None:
            self.context = {}
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context), limit=600)}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(WinRegError):
    """
    User-facing fatal error (exit code should be honored by top-level main()).
    """
    pass


# Caller errors. These are raised synchronously, before any REG process is
# spawned, and never delivered through a completion callback.


class RegistryUsageError(WinRegError):
    pass


@dataclass(eq=False)
class InvalidHive(RegistryUsageError, ValueError):
    code: int = 2
    msg: str = "illegal hive specified"


@dataclass(eq=False)
class InvalidKeyPath(RegistryUsageError, ValueError):
    code: int = 2
    msg: str = "illegal key specified"


@dataclass(eq=False)
class InvalidArchitecture(RegistryUsageError, ValueError):
    code: int = 2
    msg: str = "illegal architecture specified (only x86 or x64 are supported)"


@dataclass(eq=False)
class InvalidValueType(RegistryUsageError, ValueError):
    code: int = 2
    msg: str = "illegal type specified"


@dataclass(eq=False)
class MissingCallback(RegistryUsageError, TypeError):
    code: int = 2
    msg: str = "must specify a callback"


@dataclass(eq=False)
class ExecutionError(WinRegError):
    """REG could not be started at all (missing binary, permissions, ...)."""
    code: int = 127
    msg: str = "failed to execute REG"


@dataclass(eq=False)
class CommandFailed(WinRegError):
    """
    REG started but exited non-zero.

    stdout/stderr are kept trimmed; the message prefers stderr because that
    is where REG writes its 'ERROR: ...' line.
    """
    msg: str = ""
    exit_code: int = 1
    stdout: str = ""
    stderr: str = ""
    argv: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.stdout = (self.stdout or "").strip()
        self.stderr = (self.stderr or "").strip()
        self.argv = tuple(self.argv or ())
        if not self.msg:
            detail = self.stderr or self.stdout or "no output"
            self.msg = f"process exited with code {self.exit_code}: {detail}"
        self.code = self.exit_code
        super().__post_init__()
        self.with_context(exit_code=self.exit_code, argv=" ".join(self.argv))

    @classmethod
    def from_output(cls, argv: Sequence[str], exit_code: int, stdout: str, stderr: str) -> "CommandFailed":
        return cls(exit_code=exit_code, stdout=stdout, stderr=stderr, argv=tuple(argv))


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, WinRegError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
