"""Corpus configuration loaded from ``gtd.toml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "gtd.toml"

DEFAULT_PROJECTS_DIR = "Projects"
DEFAULT_CONTEXTS_DIR = "Contexts"


@dataclass(frozen=True)
class GtdConfig:
    projects_dir: str = DEFAULT_PROJECTS_DIR
    contexts_dir: str = DEFAULT_CONTEXTS_DIR
    skip_rules: tuple[str, ...] = field(default_factory=tuple)


def _coerce_dict(value: Any, section: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{section}] must be a table")
    return value


def _string(table: dict[str, Any], key: str, default: str, section: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{section}.{key} must be a non-empty string")
    return value.strip()


def parse_config(data: dict[str, Any]) -> GtdConfig:
    corpus = _coerce_dict(data.get("corpus"), "corpus")
    validate = _coerce_dict(data.get("validate"), "validate")

    skip = validate.get("skip", [])
    if not isinstance(skip, list) or not all(isinstance(s, str) for s in skip):
        raise ConfigError("validate.skip must be a list of rule ids")

    return GtdConfig(
        projects_dir=_string(corpus, "projects", DEFAULT_PROJECTS_DIR, "corpus"),
        contexts_dir=_string(corpus, "contexts", DEFAULT_CONTEXTS_DIR, "corpus"),
        skip_rules=tuple(s.strip() for s in skip if s.strip()),
    )


def load_config(root: Path) -> GtdConfig:
    """Load ``gtd.toml`` from the corpus root; defaults when the file is absent."""
    import tomllib

    path = root / CONFIG_FILENAME
    if not path.exists():
        return GtdConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {path.name}: {e}") from e

    return parse_config(data)
