from pathlib import Path

import pytest

from phrasevo.diagnostics import run_doctor, run_sanity_check
from phrasevo.evolution import RandomSource

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_doctor_reports_dependencies_and_default_config() -> None:
    results = {item["check"]: item for item in run_doctor(REPO_ROOT)}
    assert results["Python runtime"]["status"] == "pass"
    assert results["Python package 'loguru' import"]["status"] == "pass"
    assert results["Default config schema"]["status"] == "pass"
    assert results["Default configuration"]["status"] == "pass"
    assert "I think, therefore I am." in results["Default configuration"]["details"]
    assert results["Evolution smoke run"]["status"] == "pass"


def test_doctor_flags_invalid_global_config(tmp_path: Path) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "global.yaml").write_text("evolution:\n  population: 0\n", encoding="utf-8")
    results = {item["check"]: item for item in run_doctor(tmp_path)}
    assert results["Default configuration"]["status"] == "fail"


def test_sanity_check_forces_leading_genes() -> None:
    target = "I think, therefore I am."
    records = run_sanity_check(target, mutation_rate=0.01, rng=RandomSource(seed=6))
    assert len(records) == 4
    child, manipulated = records[2], records[3]
    assert manipulated.phrase[:3] == target[:3]
    assert manipulated.phrase[3:] == child.phrase[3:]
    assert manipulated.fitness >= child.fitness
    for record in records:
        assert 0.0 <= record.fitness <= 1.0


def test_sanity_check_handles_short_targets() -> None:
    records = run_sanity_check("ab", mutation_rate=0.0, rng=RandomSource(seed=1))
    assert records[3].phrase == "ab"
    assert records[3].fitness == pytest.approx(1.0)
