# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winregcli/config/config_loader.py
"""
Config files for the CLI.

YAML (or JSON, by suffix) mappings whose keys are the CLI's global option
dests. Several files may be given; later ones win. The merged mapping is
applied as argparse defaults, so explicit flags still override it.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from ..core.exceptions import Fatal

# Global CLI options a config file may preset. Everything else (subcommand
# arguments, --config, --dump-*) only makes sense on the command line.
CONFIG_KEYS = frozenset({"host", "arch", "reg_bin", "json", "log_file", "verbose", "quiet", "json_logs"})


def _fatal(logger: logging.Logger, msg: str, cause: Optional[BaseException] = None) -> Fatal:
    logger.error("%s", msg)
    return Fatal(2, msg, cause=cause)


def _deep_merge(base: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in extra.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in paths:
            p = Path(os.path.expandvars(str(raw))).expanduser()
            if not p.is_file():
                raise _fatal(logger, f"Config file not found: {p}")
            out.append(p.resolve())
        return out

    @staticmethod
    def load_one(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise _fatal(logger, f"Cannot read config {path}: {e}", e) from e

        try:
            if path.suffix.lower() == ".json":
                data = json.loads(raw) if raw.strip() else {}
            else:
                data = yaml.safe_load(raw)
        except (ValueError, yaml.YAMLError) as e:
            raise _fatal(logger, f"Cannot parse config {path}: {e}", e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise _fatal(logger, f"Config {path} must contain a mapping, got {type(data).__name__}")

        logger.debug("Loaded config %s keys=%s", path, sorted(data.keys()))
        return data

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = _deep_merge(merged, Config.load_one(logger, p))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Push CONFIG_KEYS entries into parser defaults. Anything else is reported and ignored.
        Returns the mapping that was applied.
        """
        known: Dict[str, Any] = {}
        for k, v in conf.items():
            key = str(k).replace("-", "_")
            if key in CONFIG_KEYS:
                known[key] = v
            else:
                logger.warning("Ignoring unknown config key: %s", k)
        if known:
            parser.set_defaults(**known)
            logger.debug("Config defaults applied: %s", sorted(known.keys()))
        return known
