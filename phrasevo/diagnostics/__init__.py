"""Diagnostics exports."""

from .doctor import run_doctor
from .sanity import run_sanity_check

__all__ = ["run_doctor", "run_sanity_check"]
