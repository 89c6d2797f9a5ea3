# repo_inspector/config/loader.py
"""
Handles loading configuration from TOML files in the inspected repository
and layering it under explicit command-line values.
"""
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import toml

from repo_inspector.exceptions import ConfigError

from .settings import InspectorConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".repo-inspector.toml", "repo-inspector.toml", "pyproject.toml"]
PYPROJECT_TOOL_TABLES = ("repo-inspector", "repo_inspector")

CONFIG_KEY_TO_ATTR_MAP: Dict[str, str] = {
    "out": "out_dir",
    "out_dir": "out_dir",
    "debug": "debug",
    "max_bytes": "max_bytes",
    "head_sample_bytes": "head_sample_bytes",
    "non_printable_threshold": "non_printable_threshold",
    "treat_nul_as_binary": "treat_nul_as_binary",
    "concurrency": "concurrency",
    "exclude_dirs": "exclude_dirs",
    "exclude_files": "exclude_files",
    "exclude": "exclude_patterns",
    "exclude_patterns": "exclude_patterns",
}

_int_attrs = {"max_bytes", "head_sample_bytes", "concurrency"}
_bool_attrs = {"debug", "treat_nul_as_binary"}
_list_attrs = {"exclude_dirs", "exclude_files", "exclude_patterns"}


def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"could not read config file '{file_path}': {e}") from e
    if file_path.name == "pyproject.toml":
        tool_table = data.get("tool", {})
        for table_name in PYPROJECT_TOOL_TABLES:
            if table_name in tool_table:
                return tool_table[table_name]
        return {}
    return data


def find_project_config_file(repo_root: Path) -> Optional[Path]:
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = repo_root / filename
        if candidate.is_file():
            return candidate
    return None


def load_project_config(repo_root: Path) -> Dict[str, Any]:
    """
    Returns the settings table from the first project config file found in
    `repo_root`, keyed by config attribute name. Unknown keys are ignored with
    a warning.
    """
    config_file = find_project_config_file(repo_root)
    if config_file is None:
        log.debug("no_configuration_files_loaded", repo_root=str(repo_root))
        return {}

    raw = _load_toml_file_data(config_file)
    if raw and config_file.name != "pyproject.toml":
        log.info("loading_project_local_config", path=str(config_file))

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        attr = CONFIG_KEY_TO_ATTR_MAP.get(key)
        if attr is None:
            log.warning("unknown_config_key_ignored", key=key, path=str(config_file))
            continue
        values[attr] = _coerce_value(attr, value, config_file)
    return values


def _coerce_value(attr: str, value: Any, source: Path) -> Any:
    if attr in _int_attrs:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{attr}' in {source} must be an integer, got {value!r}")
        return value
    if attr == "non_printable_threshold":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{attr}' in {source} must be a number, got {value!r}")
        return float(value)
    if attr in _bool_attrs:
        if not isinstance(value, bool):
            raise ConfigError(f"'{attr}' in {source} must be true or false, got {value!r}")
        return value
    if attr in _list_attrs:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{attr}' in {source} must be a list of strings, got {value!r}")
        return list(value)
    if attr == "out_dir":
        # relative output paths in a project file are relative to that project.
        out = Path(value)
        return out if out.is_absolute() else source.parent / out
    return value


def build_config(repo_path: Path, cli_overrides: Optional[Dict[str, Any]] = None) -> InspectorConfig:
    """Layers dataclass defaults < project config file < explicit CLI values."""
    cli_overrides = cli_overrides or {}
    effective: Dict[str, Any] = dict(load_project_config(Path(repo_path)))
    effective.update(cli_overrides)
    effective["repo_path"] = Path(repo_path)

    valid_fields = {f.name for f in dataclass_fields(InspectorConfig) if f.init}
    unknown = set(effective) - valid_fields
    if unknown:
        raise ConfigError(f"unknown configuration options: {sorted(unknown)}")

    log.debug("effective_config_built", options={k: str(v) for k, v in effective.items()})
    return InspectorConfig(**effective)
