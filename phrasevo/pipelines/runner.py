"""
SDK entry point exposing the `PhraseEvo` orchestration class.

The runner resolves configuration (schema defaults, global config, profile,
user config and overrides), configures logging, builds an
:class:`~phrasevo.evolution.EvolutionEngine` and runs it to termination.  It
is the backbone of the CLI.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from omegaconf.errors import OmegaConfBaseException

from phrasevo.evolution import EvolutionConfig, EvolutionEngine, EvolutionResult, RandomSource
from phrasevo.exceptions import PhraseEvoConfigError
from phrasevo.utils import ConfigLoader, RunLogger, configure_logging
from phrasevo.utils.config_reference import (
    as_dict as _config_schema_dict,
    find_field,
    to_console as _config_schema_console,
    to_markdown as _config_schema_markdown,
    write_markdown as _config_write_markdown,
)
from phrasevo.utils.profiles import get_profile, list_profiles

ConfigSource = Union[str, Path, Mapping[str, Any]]


def _slugify_name(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "phrase"


@dataclass
class PhraseEvoResult:
    """Return payload exposed by the SDK."""

    run_id: str
    result: EvolutionResult
    config: Dict[str, Any]
    engine: EvolutionEngine
    profile: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.result.completed

    @property
    def best_phrase(self) -> str:
        return self.result.best_phrase

    def summary(self) -> Dict[str, Any]:
        """JSON friendly digest of the run."""
        return {"run_id": self.run_id, "profile": self.profile, **self.result.as_dict()}


class PhraseEvo:
    """Configure and execute a string-matching evolution run."""

    @classmethod
    def describe_config(
        cls,
        section: Optional[str] = None,
        *,
        as_markdown: bool = False,
        to_console: bool = False,
    ) -> Union[str, Dict[str, Dict[str, Dict[str, object]]]]:
        """Return metadata describing PhraseEvo configuration keys.

        Parameters
        ----------
        section : str, optional
            When provided, only return information for a single section
            (for example ``"evolution"``). If omitted, all sections are returned.
        as_markdown : bool, default False
            When True, the result is formatted as Markdown text.
        to_console : bool, default False
            When True, pretty-print the configuration table to stdout.
        """

        if as_markdown:
            markdown = _config_schema_markdown(section=section)
            if to_console:
                print(markdown)
            return markdown

        if to_console:
            print(_config_schema_console(section=section))
        return _config_schema_dict(section)

    @classmethod
    def explain(cls, key: str) -> str:
        """Return a human readable description for a configuration key."""

        field = find_field(key)
        if field is None:
            raise PhraseEvoConfigError(f"Unknown configuration key '{key}'.", context={"key": key})
        description = field.description or "No description available."
        return (
            f"{field.name} (section={field.section}, type={field.type}, "
            f"default={field.default!r}) -> {description}"
        )

    @classmethod
    def generate_config_docs(cls, path: Union[str, Path] = Path("CONFIG.md")) -> Path:
        """Render the configuration reference to a markdown file."""

        return _config_write_markdown(Path(path))

    @classmethod
    def available_profiles(cls) -> Dict[str, Dict[str, object]]:
        """Return a mapping of available configuration profiles."""

        return list_profiles()

    def __init__(
        self,
        config: Optional[ConfigSource] = None,
        profile: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        global_config: Optional[ConfigSource] = "configs/global.yaml",
        run_name: Optional[str] = None,
        rng: Optional[RandomSource] = None,
        configure_logs: bool = True,
    ) -> None:
        """Create a new PhraseEvo orchestrator.

        Parameters
        ----------
        config : str | Path | dict, optional
            Run configuration supplied as a YAML/JSON file, a YAML string or a mapping.
        profile : str, optional
            Configuration profile (``"classic"``, ``"quick"``, ``"bounded"``)
            merged before ``config`` and ``overrides``.
        overrides : dict, optional
            Final layer of configuration values, e.g. from CLI flags.
        global_config : str | Path | dict, optional
            Base configuration merged first. Defaults to ``configs/global.yaml``
            and is skipped when that file does not exist.
        run_name : str, optional
            Slug used in log banners; derived from the target phrase when omitted.
        rng : RandomSource, optional
            Random stream handed to the engine instead of one built from ``evolution.seed``.
        configure_logs : bool, default True
            Install the console/file sinks described by the ``logging`` section.
        """

        self.profile = profile
        self.rng = rng
        profile_overrides: Dict[str, Any] = {}
        if profile:
            try:
                profile_overrides = get_profile(profile)
            except KeyError as exc:
                raise PhraseEvoConfigError(str(exc), context={"profile": profile}) from exc

        if isinstance(global_config, (str, Path)) and not Path(global_config).exists():
            global_config = None
        try:
            self.config_loader = ConfigLoader(global_config)
            loaded = self.config_loader.load(config=config, overrides=overrides, profile=profile_overrides)
        except (ValueError, TypeError, FileNotFoundError, OmegaConfBaseException) as exc:
            raise PhraseEvoConfigError(str(exc)) from exc
        self.config = loaded.to_dict()

        experiment_cfg = self.config.get("experiment", {})
        logging_cfg = self.config.get("logging", {})
        if configure_logs:
            try:
                configure_logging(level=str(logging_cfg.get("level", "INFO")), log_file=logging_cfg.get("log_file"))
            except ValueError as exc:
                raise PhraseEvoConfigError(f"Invalid logging configuration: {exc}", context=logging_cfg) from exc
        self.logger = RunLogger(
            experiment_name=experiment_cfg.get("name", "PhraseEvo"),
            log_every=int(logging_cfg.get("log_every", 1)),
            show_population=bool(logging_cfg.get("show_population", False)),
        )
        self.evolution_config = EvolutionConfig.from_mapping(self.config.get("evolution", {})).validate()
        base_slug = _slugify_name(run_name or self.evolution_config.target)
        self.run_id = f"{base_slug}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    def build_engine(self) -> EvolutionEngine:
        return EvolutionEngine(self.evolution_config, rng=self.rng, logger=self.logger)

    def run(self) -> PhraseEvoResult:
        """Evolve the configured target phrase and return the outcome."""

        engine = self.build_engine()
        params = {
            "target": self.evolution_config.target,
            "population": self.evolution_config.population_size,
            "mutation_rate": self.evolution_config.mutation_rate,
            "seed": engine.rng.seed,
        }
        with self.logger.start_run(run_name=self.run_id, params=params):
            result = engine.run()

        return PhraseEvoResult(
            run_id=self.run_id,
            result=result,
            config=self.config,
            engine=engine,
            profile=self.profile,
        )
