"""Application configuration: settings schema and .mdtidy.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


CONFIG_FILE = ".mdtidy.yaml"
ENV_PREFIX = "MDTIDY"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class TableSettings(_Section):
    align:            bool = Field(default=True, description="Pad cells so columns line up")
    min_column_width: int  = Field(default=3, ge=0, description="Minimum cell content width")
    padding:          int  = Field(default=1, ge=0, description="Spaces on each side of cell content")


class HeadingSettings(_Section):
    blank_lines_before: int  = Field(default=2, ge=0, description="Blank lines before each heading")
    blank_lines_after:  int  = Field(default=1, ge=0, description="Blank lines after each heading")
    space_after_hash:   bool = Field(default=True, description="Repair '#Heading' into '# Heading'")


class ListSettings(_Section):
    indent_size:       int  = Field(default=2, ge=1, description="Spaces per nesting level")
    marker:            str  = Field(default="-", pattern=r"^[-*+]$", description="Bullet marker character")
    normalize_numbers: bool = Field(default=True, description="Renumber ordered runs consecutively")


class CodeSettings(_Section):
    ensure_language_tag: bool = Field(default=False, description="Tag untagged fences as 'text'")
    fence_style:         str  = Field(default="```", pattern=r"^(```|~~~)$", description="``` or ~~~")


class Settings(_Section):
    tables:   TableSettings   = Field(default_factory=TableSettings)
    headings: HeadingSettings = Field(default_factory=HeadingSettings)
    lists:    ListSettings    = Field(default_factory=ListSettings)
    code:     CodeSettings    = Field(default_factory=CodeSettings)


def _find_config_file(path: Optional[Path]) -> Optional[Path]:
    """Explicit path, else ./.mdtidy.yaml, else ~/.mdtidy.yaml."""
    if path is not None:
        if not path.exists():
            raise ValueError(f"Config file not found: {path}")
        return path
    for candidate in (Path(CONFIG_FILE), Path.home() / CONFIG_FILE):
        if candidate.exists():
            return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data


def _merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Merge updates into base one section deep, skipping None values."""
    merged = {k: dict(v) if isinstance(v, dict) else v for k, v in base.items()}
    for section, values in updates.items():
        if isinstance(values, dict):
            target = merged.setdefault(section, {})
            if isinstance(target, dict):
                target.update({k: v for k, v in values.items() if v is not None})
                continue
        if values is not None:
            merged[section] = values
    return merged


def load_config(path: Optional[Path] = None, overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from YAML, then MDTIDY_<SECTION>_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    source = _find_config_file(path)
    if source is not None:
        data = _read_yaml(source)

    env: dict[str, dict[str, str]] = {}
    for section, info in Settings.model_fields.items():
        for name in info.annotation.model_fields:
            if val := os.getenv(f"{ENV_PREFIX}_{section.upper()}_{name.upper()}"):
                env.setdefault(section, {})[name] = val
    data = _merge(data, env)

    if overrides:
        data = _merge(data, overrides)

    try:
        return Settings(**data)
    except ValidationError as e:
        origin = source.name if source is not None else "configuration"
        raise ValueError(f"Invalid {origin}: {e}") from e


def dump_config(settings: Settings) -> str:
    """Render settings as YAML suitable for writing to .mdtidy.yaml."""
    return yaml.safe_dump(settings.model_dump(), default_flow_style=False, sort_keys=False)
