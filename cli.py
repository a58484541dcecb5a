"""
Command line interface for the PhraseEvo SDK.

Examples
--------
Evolve the default phrase::

    python cli.py run

Evolve a custom phrase with a fixed seed and a generation cap::

    python cli.py run --target "hello world" --seed 7 --max-generations 3000

Explain a configuration key::

    python cli.py describe-config --key mutation_rate
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from phrasevo import PhraseEvo
from phrasevo.diagnostics import run_doctor, run_sanity_check
from phrasevo.evolution import RandomSource
from phrasevo.exceptions import PhraseEvoConfigError
from phrasevo.utils import configure_logging
from phrasevo.utils.profiles import list_profiles

CONFIG_ERROR_EXIT = 2

_EVOLUTION_FLAGS = (
    "target",
    "population",
    "mutation_rate",
    "max_generations",
    "stagnation_limit",
    "seed",
    "alphabet",
)


def _default_config_path(path: str) -> Path:
    candidate = Path(path)
    if candidate.exists():
        return candidate
    raise PhraseEvoConfigError(f"Configuration file not found: {candidate}", context={"path": path})


def _collect_overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    evolution = {
        key: getattr(args, key)
        for key in _EVOLUTION_FLAGS
        if getattr(args, key, None) is not None
    }
    overrides: Dict[str, Dict[str, Any]] = {}
    if evolution:
        overrides["evolution"] = evolution
    logging_overrides = {}
    if args.log_level:
        logging_overrides["level"] = args.log_level
    if args.log_every is not None:
        logging_overrides["log_every"] = args.log_every
    if logging_overrides:
        overrides["logging"] = logging_overrides
    return overrides


def _run_command(args: argparse.Namespace) -> None:
    config_source = _default_config_path(args.config) if args.config else None
    evo = PhraseEvo(
        config=config_source,
        profile=args.profile,
        overrides=_collect_overrides(args),
        run_name=args.run_name,
    )
    result = evo.run()
    print(json.dumps(result.summary(), indent=2, default=str))


def _sanity_command(args: argparse.Namespace) -> None:
    configure_logging(level="WARNING")
    rng = RandomSource(args.seed)
    print(f"Running basic test with seed {rng.seed}. Generating two parents, crossover and mutate.")
    for record in run_sanity_check(args.target, args.mutation_rate, rng=rng):
        print(f"{record.label} Fitness: {record.fitness:.4f} Phrase: {record.phrase}")


def _doctor_command(_: argparse.Namespace) -> None:
    results = run_doctor()
    for item in results:
        status = item.get("status", "unknown").upper()
        check = item.get("check", "")
        details = item.get("details")
        print(f"[{status}] {check}")
        if details:
            print(f"  {details}")


def _profiles_command(_: argparse.Namespace) -> None:
    print(json.dumps(PhraseEvo.available_profiles(), indent=2))


def _describe_config_command(args: argparse.Namespace) -> None:
    if args.key:
        print(PhraseEvo.explain(args.key))
        return
    PhraseEvo.describe_config(section=args.section, as_markdown=args.markdown, to_console=True)


def _generate_config_docs_command(args: argparse.Namespace) -> None:
    output = Path(args.output)
    path = PhraseEvo.generate_config_docs(output)
    print(f"Configuration reference generated at {path.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phrasevo", description="PhraseEvo string-matching genetic algorithm CLI")
    subparsers = parser.add_subparsers(dest="command")

    profile_choices = sorted(list_profiles().keys())

    run_parser = subparsers.add_parser("run", help="Evolve a population until it matches the target phrase.")
    run_parser.add_argument("--config", help="Optional configuration file (YAML/JSON).")
    run_parser.add_argument("--profile", choices=profile_choices, help="Apply a configuration profile before overrides.")
    run_parser.add_argument("--target", help="Phrase to evolve towards.")
    run_parser.add_argument("--population", type=int, help="Number of genomes per generation.")
    run_parser.add_argument("--mutation-rate", type=float, help="Per-gene mutation probability (0 to 1).")
    run_parser.add_argument("--max-generations", type=int, help="Stop after this many generations.")
    run_parser.add_argument("--stagnation-limit", type=int, help="Stop after this many generations without improvement.")
    run_parser.add_argument("--seed", type=int, help="Seed for the random source (defaults to the current time).")
    run_parser.add_argument("--alphabet", help="Restrict genes to these characters.")
    run_parser.add_argument("--log-level", help="Console log level, e.g. DEBUG or WARNING.")
    run_parser.add_argument("--log-every", type=int, help="Log progress every N generations.")
    run_parser.add_argument("--run-name", help="Optional name used in log banners (slugified).")
    run_parser.set_defaults(func=_run_command)

    sanity_parser = subparsers.add_parser("sanity", help="Breed two random parents once and show the scores.")
    sanity_parser.add_argument("--target", default="I think, therefore I am.", help="Phrase used for scoring.")
    sanity_parser.add_argument("--mutation-rate", type=float, default=0.01, help="Per-gene mutation probability.")
    sanity_parser.add_argument("--seed", type=int, help="Seed for the random source.")
    sanity_parser.set_defaults(func=_sanity_command)

    doctor_parser = subparsers.add_parser("doctor", help="Run environment diagnostics.")
    doctor_parser.set_defaults(func=_doctor_command)

    profiles_parser = subparsers.add_parser("profiles", help="List configuration profiles.")
    profiles_parser.set_defaults(func=_profiles_command)

    describe_parser = subparsers.add_parser("describe-config", help="Display PhraseEvo configuration schema.")
    describe_parser.add_argument("--section", help="Optional configuration section to filter.")
    describe_parser.add_argument("--markdown", action="store_true", help="Render the output as markdown.")
    describe_parser.add_argument("--key", help="Explain a single configuration key instead of listing the table.")
    describe_parser.set_defaults(func=_describe_config_command)

    config_doc_parser = subparsers.add_parser("generate-config-docs", help="Write CONFIG.md from the schema.")
    config_doc_parser.add_argument("--output", default="CONFIG.md", help="Destination markdown file (default: CONFIG.md).")
    config_doc_parser.set_defaults(func=_generate_config_docs_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or (argv[0].startswith("--") and argv[0] != "--help"):
        argv = ["run", *argv]
    parsed = parser.parse_args(argv)
    if not hasattr(parsed, "func"):
        parser.print_help()
        return 0
    try:
        parsed.func(parsed)
    except PhraseEvoConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return CONFIG_ERROR_EXIT
    return 0


if __name__ == "__main__":
    sys.exit(main())
