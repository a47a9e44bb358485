# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
# Purpose: Defines the config unit so this responsibility stays isolated, testable, and easy to evolve.

"""
Configuration loading utilities for httpreply.

Conventions:
- Optional JSON config file, located via the HTTPREPLY_CONFIG environment variable.
- Environment variables override JSON values.
- JSON values can reference environment variables using ${VAR_NAME} placeholders.

The loader returns a plain dict; ``WriterConfig`` validates it.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

CONFIG_ENV_VAR = "HTTPREPLY_CONFIG"
DEFAULT_CONTENT_TYPE = "application/json"

_ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class WriterConfig(BaseModel):
    """Settings applied by every ``ResponseWriter``."""

    content_type: str = DEFAULT_CONTENT_TYPE
    default_headers: Dict[str, str] = Field(default_factory=dict)
    ensure_ascii: bool = False
    trailing_newline: bool = True

    def default_headers_with_content_type(self) -> Dict[str, str]:
        """Return the headers a fresh writer starts with, Content-Type included."""
        headers = {"Content-Type": self.content_type}
        headers.update(self.default_headers)
        return headers


def _interpolate_env(value: Any) -> Any:
    """Interpolate ${VAR} placeholders within strings using environment variables.

    Non-string types are returned unchanged.
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            var = match.group(1)
            return os.getenv(var, match.group(0))  # leave placeholder if unset

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(v) for v in value]
    return value


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deeply merge mapping 'override' into dict 'base'. Returns new dict.

    - For dict values, merges recursively.
    - For lists and scalars, override replaces base.
    """
    result: Dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(result.get(k), Mapping):
            result[k] = _deep_merge(dict(result[k]), v)  # type: ignore[index]
        else:
            result[k] = v
    return result


def load_json_file(path: os.PathLike[str] | str | None) -> Dict[str, Any]:
    """Load JSON from path if it exists; return empty dict if missing.

    Raises ValueError for malformed JSON.
    """
    if path is None:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON at {p}: {e}") from e


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


def _env_overrides() -> Dict[str, Any]:
    """Collect HTTPREPLY_* environment variables.

    Supported variables:
    - HTTPREPLY_CONTENT_TYPE -> content_type
    - HTTPREPLY_ENSURE_ASCII -> ensure_ascii (bool)
    - HTTPREPLY_TRAILING_NEWLINE -> trailing_newline (bool)
    """
    result: Dict[str, Any] = {}
    content_type = os.getenv("HTTPREPLY_CONTENT_TYPE")
    if content_type:
        result["content_type"] = content_type
    for name, key in (
        ("HTTPREPLY_ENSURE_ASCII", "ensure_ascii"),
        ("HTTPREPLY_TRAILING_NEWLINE", "trailing_newline"),
    ):
        raw = os.getenv(name)
        if raw is not None:
            result[key] = _parse_bool(name, raw)
    return result


def load_writer_config(
    path: os.PathLike[str] | str | None = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Load writer config with precedence: env > JSON file > defaults.

    When ``path`` is omitted the file named by HTTPREPLY_CONFIG is used, if any.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None
    base: Dict[str, Any] = dict(defaults or {})
    json_cfg = _interpolate_env(load_json_file(path))
    merged = _deep_merge(base, json_cfg)
    return _deep_merge(merged, _env_overrides())


def get_writer_config(
    path: os.PathLike[str] | str | None = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> WriterConfig:
    """Return a validated ``WriterConfig`` built from ``load_writer_config``."""
    return WriterConfig.model_validate(load_writer_config(path, defaults))
