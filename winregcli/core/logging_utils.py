# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Shared logging utilities for winregcli.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

PACKAGE_LOGGER = "winregcli"


def safe_logger(logger: Optional[Any], default_name: str = PACKAGE_LOGGER) -> Any:
    """
    Return `logger` if it looks like a logger, else the package logger.

    Anything with debug/error methods is accepted (LoggerAdapter, test fakes).
    The package logger has a NullHandler, so the fallback is silent unless the
    application configures logging.
    """
    if logger is not None and callable(getattr(logger, "debug", None)) and callable(getattr(logger, "error", None)):
        return logger
    return logging.getLogger(default_name)
