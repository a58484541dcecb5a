"""
Configuration schema for PhraseEvo.

``phrasevo/configs/config_default.yaml`` lists every recognised key with its
type, default and description.  The schema drives three things: the base
layer of every loaded configuration, the type checks applied by
:class:`~phrasevo.utils.config_loader.ConfigLoader`, and the reference tables
printed by ``describe-config`` or written to ``CONFIG.md``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import yaml

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "configs" / "config_default.yaml"

_TYPE_CHECKS = {
    "str": lambda value: isinstance(value, str),
    "int": lambda value: isinstance(value, int) and not isinstance(value, bool),
    "float": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "bool": lambda value: isinstance(value, bool),
}


@dataclass(frozen=True)
class ConfigField:
    """One key of the configuration schema."""

    section: str
    name: str
    type: str
    default: Any
    description: str

    @property
    def optional(self) -> bool:
        return self.type.startswith("Optional[")

    @property
    def base_type(self) -> str:
        return self.type[len("Optional["):-1] if self.optional else self.type

    def accepts(self, value: Any) -> bool:
        """True when ``value`` matches the declared type (``None`` only for optional keys)."""
        if value is None:
            return self.optional
        check = _TYPE_CHECKS.get(self.base_type)
        return check(value) if check else True

    def as_dict(self) -> Dict[str, Any]:
        return {
            "section": self.section,
            "key": self.name,
            "type": self.type,
            "default": self.default,
            "description": self.description,
        }


def _load_schema(path: Path = SCHEMA_PATH) -> Dict[str, Dict[str, ConfigField]]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration schema file not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {
        section: {
            key: ConfigField(
                section=section,
                name=key,
                type=str(meta.get("type", "Any")),
                default=meta.get("default"),
                description=str(meta.get("description", "")).strip(),
            )
            for key, meta in entries.items()
        }
        for section, entries in raw.items()
    }


CONFIG_SCHEMA: Dict[str, Dict[str, ConfigField]] = _load_schema()


def _select(section: Optional[str]) -> Dict[str, Dict[str, ConfigField]]:
    if not section:
        return CONFIG_SCHEMA
    if section not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config section '{section}'. Options: {list(CONFIG_SCHEMA)}")
    return {section: CONFIG_SCHEMA[section]}


def iter_fields(section: Optional[str] = None) -> Iterator[ConfigField]:
    """Yield schema fields, optionally restricted to one section."""

    for fields in _select(section).values():
        yield from fields.values()


def find_field(key: str) -> Optional[ConfigField]:
    """Look a key up by name in any section; dashes and case are ignored."""

    normalized = key.strip().lower().replace("-", "_")
    for field in iter_fields():
        if field.name.lower() == normalized:
            return field
    return None


def defaults() -> Dict[str, Dict[str, Any]]:
    """Nested mapping of every schema default, the base layer of each loaded config."""

    return {
        section: {name: field.default for name, field in fields.items()}
        for section, fields in CONFIG_SCHEMA.items()
    }


def as_dict(section: Optional[str] = None) -> Dict[str, Dict[str, Dict[str, Any]]]:
    return {
        name: {key: field.as_dict() for key, field in fields.items()}
        for name, fields in _select(section).items()
    }


def _rows(section: Optional[str]) -> Iterable[Tuple[str, List[ConfigField]]]:
    for name, fields in _select(section).items():
        yield name, list(fields.values())


def to_markdown(section: Optional[str] = None) -> str:
    """Render the schema as one markdown table per section."""

    heading = "# PhraseEvo Configuration Reference"
    if section:
        heading += f" - {section.title()}"
    lines = [heading, ""]
    for name, fields in _rows(section):
        lines += [f"## {name.title()}", "", "| Key | Type | Default | Description |", "| --- | --- | --- | --- |"]
        for field in fields:
            description = field.description.replace("|", "\\|")
            lines.append(f"| `{field.name}` | `{field.type}` | `{field.default}` | {description} |")
        lines.append("")
    return "\n".join(lines)


def write_markdown(path: Path, section: Optional[str] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_markdown(section=section), encoding="utf-8")
    return path


def to_console(section: Optional[str] = None) -> str:
    """Plain-text variant of :func:`to_markdown` for terminals."""

    blocks = []
    for name, fields in _rows(section):
        body = [f"[{name.upper()}]"]
        body += [
            f"  - {field.name} (type={field.type}, default={field.default!r}): "
            f"{field.description or 'No description available.'}"
            for field in fields
        ]
        blocks.append("\n".join(body))
    return "\n\n".join(blocks)


__all__ = [
    "ConfigField",
    "CONFIG_SCHEMA",
    "SCHEMA_PATH",
    "iter_fields",
    "find_field",
    "defaults",
    "as_dict",
    "to_markdown",
    "write_markdown",
    "to_console",
]
