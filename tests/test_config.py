"""Tests for configuration loading and provider selection."""

import pytest

from newsdesk.config import Config, ConfigModel, load_config, save_config
from newsdesk.generation import MockContentProvider, OpenAIProvider
from newsdesk.models import Tone
from newsdesk.pipeline import build_provider


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_manager_falls_back_to_defaults(tmp_path):
    config = Config(tmp_path / "absent.yaml")
    assert config.config.generation_defaults.count == 3
    assert config.config.workflow.strict_lookups is False


def test_saved_config_loads_back(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    model = ConfigModel(generation_defaults={"tone": "Serious", "count": 2})
    save_config(model, path)

    loaded = load_config(path)
    assert loaded.generation_defaults.tone == Tone.SERIOUS
    assert loaded.generation_defaults.count == 2
    assert loaded.prospect_defaults.keywords == ["Foz do Iguaçu", "Cataratas", "Itaipu"]


def test_partial_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("workflow:\n  terminal_cancelled: true\n", encoding="utf-8")

    loaded = load_config(path)
    assert loaded.workflow.terminal_cancelled is True
    assert loaded.llm.provider == "openai"


@pytest.mark.parametrize("content", [
    "llm: [unclosed",
    "generation_defaults:\n  count: 9\n",
    "llm:\n  provider: carrier-pigeon\n",
    "workflow:\n  published_url_template: 'https://x/{slug}'\n",
])
def test_invalid_files_raise_value_error(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_api_key_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("NEWSDESK_TEST_KEY", "sk-from-env")
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  api_key_env: NEWSDESK_TEST_KEY\n", encoding="utf-8")

    assert Config(path).get_llm_config()["api_key"] == "sk-from-env"


def test_build_provider_without_key_uses_mock(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert isinstance(build_provider(Config(tmp_path / "absent.yaml")), MockContentProvider)


def test_build_provider_mock_setting(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  provider: mock\n", encoding="utf-8")

    assert isinstance(build_provider(Config(path)), MockContentProvider)


def test_build_provider_openai(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  model: gpt-4o\n", encoding="utf-8")

    provider = build_provider(Config(path))
    assert isinstance(provider, OpenAIProvider)
    assert provider.model == "gpt-4o"
