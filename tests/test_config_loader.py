"""Tests covering the PhraseEvo configuration loader behaviour."""

from pathlib import Path

import pytest

from phrasevo.utils import ConfigLoader

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_config_loader_starts_from_schema_defaults() -> None:
    config = ConfigLoader().load().to_dict()
    assert config["evolution"]["population"] == 250
    assert config["evolution"]["mutation_rate"] == 0.01
    assert config["evolution"]["max_generations"] is None
    assert config["logging"]["level"] == "INFO"


def test_config_loader_merges_file_over_global(tmp_path: Path) -> None:
    """Task specific configuration should override global defaults."""
    run_file = tmp_path / "run.yaml"
    run_file.write_text("evolution:\n  target: hello\n  population: 40\n", encoding="utf-8")
    loader = ConfigLoader(REPO_ROOT / "configs" / "global.yaml")
    config = loader.load(run_file).to_dict()
    assert config["evolution"]["target"] == "hello"
    assert config["evolution"]["population"] == 40
    assert config["evolution"]["mutation_rate"] == 0.01


def test_config_loader_accepts_dict_overrides() -> None:
    loader = ConfigLoader({"evolution": {"population": 2}})
    config = loader.load(overrides={"evolution": {"mutation_rate": 0.5}}).to_dict()
    assert config["evolution"]["population"] == 2
    assert config["evolution"]["mutation_rate"] == 0.5


def test_config_loader_accepts_yaml_strings_and_json_files(tmp_path: Path) -> None:
    json_file = tmp_path / "run.json"
    json_file.write_text('{"evolution": {"seed": 7}}', encoding="utf-8")
    loader = ConfigLoader("evolution:\n  target: abc\n")
    config = loader.load(json_file).to_dict()
    assert config["evolution"]["target"] == "abc"
    assert config["evolution"]["seed"] == 7


def test_profile_sits_between_global_and_overrides() -> None:
    loader = ConfigLoader({"evolution": {"population": 10}})
    loaded = loader.load(
        profile={"evolution": {"population": 20, "mutation_rate": 0.3}},
        overrides={"evolution": {"population": 30}},
    )
    section = loaded.section("evolution")
    assert section["population"] == 30
    assert section["mutation_rate"] == 0.3


def test_config_loader_unknown_section_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(ValueError) as err:
        loader.load(overrides={"unknown_section": {"foo": 1}})
    assert "unknown_section" in str(err.value)


def test_config_loader_unknown_key_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(ValueError) as err:
        loader.load(overrides={"evolution": {"invalid_key": 1}})
    assert "evolution.invalid_key" in str(err.value)


def test_config_loader_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load(tmp_path / "missing.yaml")


def test_config_loader_rejects_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "run.toml"
    path.write_text("x = 1", encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigLoader().load(path)


def test_config_loader_rejects_values_of_the_wrong_type() -> None:
    with pytest.raises(ValueError) as err:
        ConfigLoader().load(overrides={"evolution": {"population": "many"}})
    assert "evolution.population" in str(err.value)


def test_config_loader_allows_null_only_for_optional_keys() -> None:
    config = ConfigLoader().load(overrides={"evolution": {"seed": None}}).to_dict()
    assert config["evolution"]["seed"] is None
    with pytest.raises(ValueError):
        ConfigLoader().load(overrides={"evolution": {"mutation_rate": None}})


def test_integer_mutation_rate_is_accepted() -> None:
    config = ConfigLoader().load(overrides={"evolution": {"mutation_rate": 1}}).to_dict()
    assert config["evolution"]["mutation_rate"] == 1


def test_config_loader_does_not_interpolate_values(tmp_path: Path) -> None:
    run_file = tmp_path / "run.yaml"
    run_file.write_text('evolution:\n  target: "home is ${oc.env:HOME}"\n', encoding="utf-8")
    loaded = ConfigLoader().load(run_file, overrides={"experiment": {"name": "a${b"}})
    assert loaded.section("evolution")["target"] == "home is ${oc.env:HOME}"
    assert loaded["experiment"]["name"] == "a${b"


@pytest.mark.parametrize("text", ["${x}", "a${b", "\\${x}", "C:\\\\${dir}\\tmp", "plain $ and {braces}"])
def test_config_loader_round_trips_dollar_braces(text: str) -> None:
    config = ConfigLoader().load(overrides={"evolution": {"target": text}}).to_dict()
    assert config["evolution"]["target"] == text
