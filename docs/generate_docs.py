"""
Utility script to regenerate PhraseEvo documentation artifacts.

Usage:
    python docs/generate_docs.py

The script refreshes the configuration reference markdown in ``docs/`` and
``CONFIG.md`` at the repository root.
"""

from __future__ import annotations

from pathlib import Path

from phrasevo.utils.config_reference import write_markdown


def build_config_reference() -> None:
    docs_dir = Path(__file__).resolve().parent
    write_markdown(docs_dir / "config_reference.md")
    write_markdown(docs_dir.parent / "CONFIG.md")


def main() -> None:
    build_config_reference()


if __name__ == "__main__":
    main()
