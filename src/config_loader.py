from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from src.models.configs import ToolConfig


CONFIG_SECTION = "otl"

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".toml": tomllib.loads,
    ".json": json.loads,
}


def _read_config_mapping(path: Path) -> Dict[str, Any]:
    """Parse an otl config file by suffix; an empty document is an empty mapping."""

    if not path.is_file():
        raise FileNotFoundError(f"otl config file not found: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        supported = ", ".join(sorted(_PARSERS))
        raise ValueError(f"Unsupported config format '{path.suffix}' for {path} (expected one of {supported})")

    data = parser(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"otl config {path} must hold a mapping of settings, got {type(data).__name__}")
    return data


def load_tool_config(path: Path, base: ToolConfig | None = None) -> ToolConfig:
    """Load a config file; keys it leaves out keep the values of ``base``."""

    raw = _read_config_mapping(path)
    # Either a bare mapping or one nested under an "otl" key.
    section = raw.get(CONFIG_SECTION, raw)
    if not isinstance(section, dict):
        raise ValueError(f"otl config {path} has a non-mapping '{CONFIG_SECTION}' section")
    values = (base or ToolConfig()).model_dump()
    values.update(section)
    return ToolConfig.model_validate(values)


__all__ = ["load_tool_config"]
