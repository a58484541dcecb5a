"""Utility exports for PhraseEvo."""

from .config_loader import ConfigLoader, LoadedConfig
from .logger import RunLogger, configure_logging

__all__ = ["ConfigLoader", "LoadedConfig", "RunLogger", "configure_logging"]
