"""
Environment diagnostics for PhraseEvo.

The diagnostics are intentionally lightweight so they can run quickly from the
CLI (`phrasevo doctor`) and during CI checks. Each diagnostic returns a
dictionary with a human-readable description, status, and optional details.
"""

from __future__ import annotations

import importlib
import platform
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from phrasevo.evolution import EvolutionConfig, EvolutionEngine
from phrasevo.exceptions import PhraseEvoConfigError
from phrasevo.utils import ConfigLoader, RunLogger
from phrasevo.utils.config_reference import SCHEMA_PATH

MIN_PYTHON = (3, 9)
CRITICAL_DEPENDENCIES = [
    "loguru",
    "omegaconf",
    "yaml",
]


@dataclass
class CheckResult:
    """Structured diagnostic result."""

    check: str
    status: str
    details: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        payload = asdict(self)
        if payload["details"] is None:
            payload.pop("details")
        return payload


def _status(ok: bool) -> str:
    return "pass" if ok else "fail"


def _check_python_version() -> CheckResult:
    current = sys.version_info
    ok = current >= MIN_PYTHON
    details = f"Detected Python {current.major}.{current.minor}.{current.micro}"
    if not ok:
        details += f" (requires >= {MIN_PYTHON[0]}.{MIN_PYTHON[1]})"
    return CheckResult(check="Python runtime", status=_status(ok), details=details)


def _check_dependency(module_name: str) -> CheckResult:
    label = module_name.replace("_", " ")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:  # pragma: no cover - dependent on external env
        return CheckResult(
            check=f"Python package '{label}' import",
            status="fail",
            details=f"{exc.__class__.__name__}: {exc}",
        )
    return CheckResult(
        check=f"Python package '{label}' import",
        status="pass",
        details=str(getattr(module, "__version__", "unknown")),
    )


def _check_paths(base: Path) -> Iterable[CheckResult]:
    expected = {
        "Global config": base / "configs" / "global.yaml",
        "Default config schema": SCHEMA_PATH,
    }
    for label, path in expected.items():
        if path.exists():
            yield CheckResult(check=label, status="pass", details=str(path.resolve()))
        else:
            yield CheckResult(check=label, status="warn", details=f"Missing at {path.resolve()}")


def _check_default_config(base: Path) -> CheckResult:
    global_path = base / "configs" / "global.yaml"
    try:
        loader = ConfigLoader(global_path) if global_path.exists() else ConfigLoader()
        evolution = loader.load().section("evolution")
        config = EvolutionConfig.from_mapping(evolution).validate()
    except (PhraseEvoConfigError, ValueError) as exc:
        return CheckResult(check="Default configuration", status="fail", details=str(exc))
    return CheckResult(
        check="Default configuration",
        status="pass",
        details=f"target={config.target!r}, population={config.population_size}, "
        f"mutation_rate={config.mutation_rate}",
    )


def _check_smoke_run() -> CheckResult:
    config = EvolutionConfig(target="ok", population_size=20, alphabet="ok", seed=1, max_generations=200)
    result = EvolutionEngine(config, logger=RunLogger(log_every=10**6)).run()
    if result.completed:
        return CheckResult(
            check="Evolution smoke run",
            status="pass",
            details=f"matched {config.target!r} after {result.generations} generations",
        )
    return CheckResult(
        check="Evolution smoke run",
        status="fail",
        details=f"no exact match within {config.max_generations} generations ({result.best_phrase!r})",
    )


def _check_platform() -> CheckResult:
    details = f"{platform.system()} {platform.release()} ({platform.machine()})"
    return CheckResult(check="Platform", status="pass", details=details)


def run_doctor(base: Optional[Path] = None) -> List[Dict[str, Optional[str]]]:
    """
    Execute environment diagnostics and return structured results.

    Returns
    -------
    list of dict
        Each dictionary contains `check`, `status`, and optional `details`.
        Status is one of ``pass``, ``warn``, or ``fail``.
    """

    base = base or Path.cwd()
    results: List[CheckResult] = [
        _check_platform(),
        _check_python_version(),
    ]

    for module in CRITICAL_DEPENDENCIES:
        results.append(_check_dependency(module))

    results.extend(_check_paths(base))
    results.append(_check_default_config(base))
    results.append(_check_smoke_run())

    return [result.as_dict() for result in results]
