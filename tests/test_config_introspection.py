from pathlib import Path

import pytest

from phrasevo import PhraseEvo
from phrasevo.exceptions import PhraseEvoConfigError
from phrasevo.utils.config_reference import defaults, find_field
from phrasevo.utils.profiles import get_profile, list_profiles


def test_describe_config_dict_output() -> None:
    data = PhraseEvo.describe_config(section="evolution")
    assert "evolution" in data
    assert "population" in data["evolution"]
    assert data["evolution"]["mutation_rate"]["default"] == 0.01


def test_describe_config_markdown_console(capsys) -> None:
    PhraseEvo.describe_config(section="evolution", as_markdown=True, to_console=True)
    captured = capsys.readouterr().out
    assert "PhraseEvo Configuration Reference" in captured
    assert "## Evolution" in captured


def test_explain_config_key() -> None:
    text = PhraseEvo.explain("mutation-rate")
    assert "mutation_rate" in text
    assert "section=evolution" in text


def test_explain_unknown_key_raises() -> None:
    with pytest.raises(PhraseEvoConfigError):
        PhraseEvo.explain("warp_drive")


def test_generate_config_docs(tmp_path: Path) -> None:
    output = tmp_path / "CONFIG.md"
    PhraseEvo.generate_config_docs(output)
    assert output.exists()
    content = output.read_text(encoding="utf-8")
    assert "Configuration Reference" in content
    assert "`target`" in content


def test_schema_defaults_cover_every_section() -> None:
    data = defaults()
    assert set(data) == {"experiment", "evolution", "logging"}
    assert data["evolution"]["target"] == "I think, therefore I am."


def test_profiles_are_listed_and_fetchable() -> None:
    profiles = list_profiles()
    assert {"classic", "quick", "bounded"} <= set(profiles)
    assert get_profile("quick")["evolution"]["target"] == "hello world"
    with pytest.raises(KeyError):
        get_profile("missing")


def test_find_field_normalises_key_names() -> None:
    field = find_field("Stagnation-Limit")
    assert field is not None
    assert field.section == "evolution"
    assert field.optional and field.base_type == "int"
    assert find_field("warp_drive") is None
