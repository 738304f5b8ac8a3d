# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/core/logger.py
"""
Logging for the winregcli CLI.

Library modules only ever log to the "winregcli" logger (silent by default);
Log.setup() is what the CLI calls to put handlers on it:

  -v / -vv / -vvv   INFO / DEBUG / TRACE   (TRACE shows REG output heads)
  -q / -qq          WARNING / ERROR
  --json-logs       NDJSON lines instead of the console format
  --log-file PATH   same records, also written to PATH (never coloured)

Registry operations log through Log.bind(logger, op=..., path=...), so
every line they emit carries the key it was about.
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from termcolor import colored as _colored

TRACE = 5
if not hasattr(logging, "TRACE"):
    logging.TRACE = TRACE  # type: ignore[attr-defined]
    logging.addLevelName(TRACE, "TRACE")


def _logger_trace(self: logging.Logger, msg: str, *args, **kwargs) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)


if not hasattr(logging.Logger, "trace"):
    logging.Logger.trace = _logger_trace  # type: ignore[attr-defined]

# level name -> (emoji, ascii fallback, colour)
_LEVELS: Dict[str, Tuple[str, str, str]] = {
    "TRACE": ("🧬", ".", "cyan"),
    "DEBUG": ("🔍", ".", "blue"),
    "INFO": ("✅", "*", "green"),
    "WARNING": ("⚠️", "!", "yellow"),
    "ERROR": ("💥", "x", "red"),
    "CRITICAL": ("🧨", "X", "red"),
}


def c(text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None, *, enable: bool = True) -> str:
    """Colorize text if enabled."""
    if not enable or not color:
        return text
    return _colored(text, color=color, attrs=attrs or [])


def _stderr_can_emoji() -> bool:
    # cmd.exe consoles are often cp437/cp850
    try:
        "✅".encode(getattr(sys.stderr, "encoding", None) or "utf-8")
        return True
    except (LookupError, UnicodeError):
        return False


def _ctx_text(ctx: Optional[Mapping[str, Any]]) -> str:
    if not ctx:
        return ""
    return " " + " ".join(f"{k}={str(v).replace(chr(10), ' ')}" for k, v in sorted(ctx.items()))


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Carries a context dict (op, path, ...) into every record as `record.ctx`.
    A call site's own `extra={"ctx": {...}}` is merged on top.
    """

    def __init__(self, logger: logging.Logger, ctx: Optional[Mapping[str, Any]] = None):
        super().__init__(logger, extra={"ctx": dict(ctx or {})})

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["ctx"] = {**self.extra["ctx"], **(extra.get("ctx") or {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(TRACE, msg, *args, **kwargs)

    def bind(self, **ctx: Any) -> "ContextLoggerAdapter":
        return ContextLoggerAdapter(self.logger, {**self.extra["ctx"], **ctx})


class ConsoleFormatter(logging.Formatter):
    """
    `12:04:31 🔍 DEBUG    reg.exec: rc=0 ... op=values path=HKCU\\X`

    detailed=True (-vvv and log files) adds milliseconds and module:line.
    """

    def __init__(self, *, color: bool = False, detailed: bool = False, emoji: bool = True):
        super().__init__()
        self.color = color
        self.detailed = detailed
        self.emoji = emoji

    def format(self, record: logging.LogRecord) -> str:
        icon, plain, colour = _LEVELS.get(record.levelname, ("•", "-", ""))
        when = _dt.datetime.fromtimestamp(record.created)
        ts = when.strftime("%H:%M:%S.%f")[:-3] if self.detailed else when.strftime("%H:%M:%S")
        where = f" [{record.module}:{record.lineno}]" if self.detailed else ""

        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            msg = c(msg, colour, ["bold"], enable=self.color)
        level = c(f"{record.levelname:<8}", colour, enable=self.color)

        line = f"{ts} {icon if self.emoji else plain} {level}{where} {msg}{_ctx_text(getattr(record, 'ctx', None))}"
        if record.exc_info:
            line += "\n" + c(self.formatException(record.exc_info), "red", enable=self.color)
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line (--json-logs)."""

    def format(self, record: logging.LogRecord) -> str:
        obj: Dict[str, Any] = {
            "ts": _dt.datetime.fromtimestamp(record.created, tz=_dt.timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        ctx = getattr(record, "ctx", None)
        if ctx:
            obj["ctx"] = {str(k): str(v) for k, v in ctx.items()}
        if record.exc_info:
            obj["exc"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)


class Log:
    @staticmethod
    def _level_from_flags(verbose: int, quiet: int) -> int:
        """Quiet wins over verbose if both are set."""
        if quiet >= 2:
            return logging.ERROR
        if quiet == 1:
            return logging.WARNING
        if verbose >= 3:
            return TRACE
        if verbose >= 2:
            return logging.DEBUG
        return logging.INFO

    @staticmethod
    def bind(logger: logging.Logger, **ctx: Any) -> ContextLoggerAdapter:
        return ContextLoggerAdapter(logger, ctx)

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        quiet: int = 0,
        color: Optional[bool] = None,
        json_logs: bool = False,
        logger_name: str = "winregcli",
    ) -> logging.Logger:
        """
        (Re)configure the CLI logger. Safe to call twice: the second call
        replaces the handlers from the first (config files may change -v).
        """
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        level = Log._level_from_flags(verbose, quiet)
        logger.setLevel(level)

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        if color is None:
            color = sys.stderr.isatty()

        handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        handlers[0].setFormatter(
            JsonFormatter() if json_logs
            else ConsoleFormatter(color=color, detailed=verbose >= 3, emoji=_stderr_can_emoji())
        )

        if log_file:
            path = Path(log_file).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setFormatter(JsonFormatter() if json_logs else ConsoleFormatter(detailed=True))
            handlers.append(fh)

        for h in handlers:
            h.setLevel(level)
            logger.addHandler(h)

        logger.debug("logging ready (level=%s, file=%s)", logging.getLevelName(level), log_file or "-")
        return logger
