"""
Layered configuration loading for PhraseEvo.

A configuration is built from up to five layers, later ones winning:

1. schema defaults (``phrasevo/configs/config_default.yaml``)
2. the global configuration, usually ``configs/global.yaml``
3. a named profile
4. the run configuration (mapping, YAML/JSON file or YAML string)
5. overrides, typically CLI flags

The merged result is checked against the schema: unknown sections or keys and
values of the wrong type raise ``ValueError`` naming the offending key.
Values are never interpolated: strings are escaped on the way in, so a target
such as ``"cost ${x}"`` comes back verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .config_reference import CONFIG_SCHEMA, defaults

ConfigLike = Union[str, Path, Mapping[str, Any], DictConfig]

CONFIG_SUFFIXES = {".yaml", ".yml", ".json"}


@dataclass
class LoadedConfig:
    """Merged configuration with OmegaConf and plain-dict views."""

    data: DictConfig

    def to_dict(self) -> Dict[str, Any]:
        return OmegaConf.to_container(self.data, resolve=True)  # type: ignore[return-value]

    def section(self, name: str) -> Dict[str, Any]:
        return dict(self.to_dict().get(name, {}))

    def __getitem__(self, item: str) -> Any:
        return self.to_dict()[item]


def _check_against_schema(conf: Dict[str, Any]) -> None:
    for section, values in conf.items():
        fields = CONFIG_SCHEMA.get(section)
        if fields is None:
            raise ValueError(f"Unknown configuration section '{section}'. Options: {list(CONFIG_SCHEMA)}")
        if not isinstance(values, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping.")
        for key, value in values.items():
            field = fields.get(key)
            if field is None:
                raise ValueError(f"Unknown configuration key '{section}.{key}'. Options: {list(fields)}")
            if not field.accepts(value):
                raise ValueError(f"Configuration key '{section}.{key}' expects {field.type}, got {value!r}.")


_INTERPOLATION_START = re.compile(r"(\\*)\$\{")


def _escape_interpolations(value: Any) -> Any:
    """Escape ``${`` in every string so OmegaConf keeps it literally.

    OmegaConf reads ``\\${`` as a literal ``${`` and halves any run of
    backslashes placed directly before it, so those are doubled first.
    """
    if isinstance(value, str):
        return _INTERPOLATION_START.sub(lambda match: match.group(1) * 2 + "\\${", value)
    if isinstance(value, Mapping):
        return {key: _escape_interpolations(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_escape_interpolations(item) for item in value]
    return value


def _read_file(path: Path) -> DictConfig:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in CONFIG_SUFFIXES:
        raise ValueError(f"Unsupported configuration file format: '{suffix}'. Expected YAML or JSON.")
    # JSON is a subset of YAML.
    return _from_mapping(yaml.safe_load(path.read_text(encoding="utf-8")), origin=str(path))


def _from_mapping(data: Any, origin: str) -> DictConfig:
    if data is None:
        return OmegaConf.create({})
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration from {origin} must be a mapping, got {type(data).__name__}.")
    try:
        return OmegaConf.create(_escape_interpolations(dict(data)))
    except OmegaConfBaseException as exc:
        raise ValueError(f"Invalid configuration from {origin}: {exc}") from exc


def to_omegaconf(source: ConfigLike) -> DictConfig:
    """Normalise any supported configuration source into a ``DictConfig``."""

    if isinstance(source, DictConfig):
        return source
    if isinstance(source, Mapping):
        return _from_mapping(source, origin="mapping")
    if isinstance(source, Path):
        return _read_file(source)
    if isinstance(source, str):
        candidate = Path(source)
        if candidate.suffix.lower() in CONFIG_SUFFIXES or candidate.exists():
            return _read_file(candidate)
        try:
            parsed = yaml.safe_load(source)
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse configuration string: {exc}") from exc
        return _from_mapping(parsed, origin="string")
    raise TypeError(f"Unsupported configuration source: {type(source)!r}")


class ConfigLoader:
    """
    Merge PhraseEvo configuration layers.

    Parameters
    ----------
    global_config : Optional[ConfigLike]
        Layer applied directly above the schema defaults.
    """

    def __init__(self, global_config: Optional[ConfigLike] = None) -> None:
        self._global_conf = to_omegaconf(global_config) if global_config is not None else OmegaConf.create({})

    def load(
        self,
        config: Optional[ConfigLike] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        profile: Optional[Mapping[str, Any]] = None,
    ) -> LoadedConfig:
        layers = [_from_mapping(defaults(), origin="schema defaults"), self._global_conf]
        if profile:
            layers.append(to_omegaconf(profile))
        if config is not None:
            layers.append(to_omegaconf(config))
        if overrides:
            layers.append(to_omegaconf(overrides))

        try:
            merged = OmegaConf.merge(*layers)
            container = OmegaConf.to_container(merged, resolve=True)
        except OmegaConfBaseException as exc:
            raise ValueError(f"Failed to merge configuration: {exc}") from exc
        _check_against_schema(container)  # type: ignore[arg-type]
        return LoadedConfig(merged)
