"""Load KneadConfig from knead.yaml / knead.toml if present.

Merges file config with CLI kwargs. CLI overrides file; a ``None`` override
means "not given on the command line" and leaves the file value alone.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from knead._errors import ConfigError
from knead.config import KneadConfig

CONFIG_FILENAMES = ("knead.yaml", "knead.yml", "knead.toml")

_CONFIG_KEYS = frozenset({
    "output", "host", "port", "live_reload", "tidy_html", "base_template",
    "content_dir", "templates_dir", "static_dir", "site",
})


def load_config(root: Path, **overrides: object) -> KneadConfig:
    """Load KneadConfig from root, optionally merging knead.yaml.

    Looks for knead.yaml, knead.yml, or knead.toml in root. If found, loads
    and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the config file is malformed.

    """
    file_config = _read_knead_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "site" in merged and not isinstance(merged["site"], dict):
        msg = f"'site' must be a mapping, got {type(merged['site']).__name__}"
        raise ConfigError(msg)
    try:
        return KneadConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid knead configuration in {root}: {exc}"
        raise ConfigError(msg) from exc


def find_config_file(root: Path) -> Path | None:
    """Return the first knead config file present in root, if any."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_knead_config(root: Path) -> dict[str, object]:
    """Read knead config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_knead_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_knead_section(data)


def _flatten_knead_section(data: dict[str, object]) -> dict[str, object]:
    """Extract knead.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("knead")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _CONFIG_KEYS:
                result[k] = v
    for k, v in data.items():
        if k != "knead" and k in _CONFIG_KEYS:
            result[k] = v
    return result
