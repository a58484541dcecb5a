import json

import pytest

import cli
from phrasevo import PhraseEvo


def test_run_command_prints_json_summary(capsys) -> None:
    exit_code = cli.main(
        [
            "run",
            "--target", "ok",
            "--alphabet", "ko",
            "--population", "20",
            "--seed", "5",
            "--max-generations", "500",
            "--log-level", "WARNING",
        ]
    )
    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["best_phrase"] == "ok"
    assert summary["completed"] is True
    assert summary["population_size"] == 20


def test_leading_flags_default_to_run(capsys) -> None:
    exit_code = cli.main(["--target", "a", "--alphabet", "a", "--population", "2", "--log-level", "ERROR"])
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["generations"] == 0


def test_configuration_errors_exit_with_status_two(capsys) -> None:
    assert cli.main(["run", "--target", "", "--log-level", "ERROR"]) == cli.CONFIG_ERROR_EXIT
    assert "Configuration error" in capsys.readouterr().err
    assert cli.main(["run", "--population", "0"]) == cli.CONFIG_ERROR_EXIT
    assert cli.main(["run", "--config", "does/not/exist.yaml"]) == cli.CONFIG_ERROR_EXIT


def test_sanity_command_prints_four_genomes(capsys) -> None:
    assert cli.main(["sanity", "--seed", "4", "--target", "hello world"]) == 0
    out = capsys.readouterr().out
    assert out.count("Fitness:") == 4
    assert "Child    (DNA D)" in out


def test_describe_config_key(capsys) -> None:
    assert cli.main(["describe-config", "--key", "population"]) == 0
    assert "Number of genomes" in capsys.readouterr().out


def test_profiles_command_lists_profiles(capsys) -> None:
    assert cli.main(["profiles"]) == 0
    assert "quick" in json.loads(capsys.readouterr().out)


@pytest.mark.parametrize("target", ["${x}", "a${b", "${oc.env:HOME}"])
def test_run_accepts_targets_with_dollar_braces(capsys, target: str) -> None:
    exit_code = cli.main(
        [
            "run",
            "--target", target,
            "--population", "10",
            "--seed", "2",
            "--max-generations", "3",
            "--log-level", "ERROR",
        ]
    )
    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert len(summary["best_phrase"]) == len(target)
    assert summary["termination"] in {"converged", "max_generations"}


def test_zero_log_every_reaches_the_configuration() -> None:
    args = cli.build_parser().parse_args(["run", "--log-every", "0"])
    overrides = cli._collect_overrides(args)
    assert overrides["logging"]["log_every"] == 0
    runner = PhraseEvo(overrides=overrides, configure_logs=False)
    assert runner.logger.log_every == 1
