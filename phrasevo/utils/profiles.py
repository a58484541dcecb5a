"""
Predefined configuration profiles for PhraseEvo.

Profiles provide convenient shortcuts for common runs such as a quick demo
or a bounded experiment.  They are merged on top of global defaults before
user overrides are applied.
"""

from __future__ import annotations

from typing import Dict

from omegaconf import OmegaConf


PROFILES: Dict[str, Dict[str, object]] = {
    "classic": {
        "evolution": {
            "target": "I think, therefore I am.",
            "population": 250,
            "mutation_rate": 0.01,
        },
    },
    "quick": {
        "evolution": {
            "target": "hello world",
            "population": 200,
            "mutation_rate": 0.01,
            "max_generations": 2000,
        },
        "logging": {
            "log_every": 25,
        },
    },
    "bounded": {
        "evolution": {
            "max_generations": 5000,
            "stagnation_limit": 500,
        },
        "logging": {
            "log_every": 50,
        },
    },
}


def list_profiles() -> Dict[str, Dict[str, object]]:
    """Return a copy of the registered profiles."""

    return {name: OmegaConf.to_container(OmegaConf.create(conf), resolve=True) for name, conf in PROFILES.items()}


def get_profile(name: str) -> Dict[str, object]:
    """Return a profile configuration by name."""

    if name not in PROFILES:
        raise KeyError(f"Unknown profile '{name}'. Available profiles: {list(PROFILES)}")
    return OmegaConf.to_container(OmegaConf.create(PROFILES[name]), resolve=True)
