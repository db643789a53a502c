import json

import pytest

from prompt_executor.config import PROVIDER_MODELS, ClientSettings, load_keys_file


def test_client_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PROMPT_HUB_URL", "https://hub.test/api/")
    monkeypatch.setenv("PROMPT_HUB_API_KEY", "key")
    monkeypatch.setenv("PROMPT_HUB_PROJECT_ID", "proj")
    monkeypatch.delenv("PROMPT_HUB_ENVIRONMENT", raising=False)
    monkeypatch.setenv("PROMPT_HUB_TIMEOUT", "5")

    settings = ClientSettings.from_env()

    assert settings.base_url == "https://hub.test/api"
    assert settings.api_key == "key"
    assert settings.environment == "Production"
    assert settings.timeout == 5.0


def test_client_settings_require_url(monkeypatch) -> None:
    monkeypatch.delenv("PROMPT_HUB_URL", raising=False)
    with pytest.raises(ValueError):
        ClientSettings.from_env()


def test_provider_api_key_checks_envs_in_order(monkeypatch) -> None:
    for name in PROVIDER_MODELS["gemini"].api_key_envs:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "g")

    assert PROVIDER_MODELS["gemini"].api_key() == "g"
    assert PROVIDER_MODELS["gemini"].default_model == "gemini-2.5-pro"


def test_load_keys_file_accepts_both_spellings(tmp_path) -> None:
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"openai_api_key": "o", "ANTHROPIC_API_KEY": "a", "gemini_api_key": ""}))
    environ = {}

    loaded = load_keys_file(str(path), environ=environ)

    assert environ == {"OPENAI_API_KEY": "o", "ANTHROPIC_API_KEY": "a"}
    assert sorted(loaded) == ["ANTHROPIC_API_KEY", "OPENAI_API_KEY"]


@pytest.mark.parametrize("content", ['["openai_api_key"]', '"sk-123"'])
def test_load_keys_file_rejects_non_object_json(tmp_path, content) -> None:
    path = tmp_path / "keys.json"
    path.write_text(content)

    with pytest.raises(ValueError, match="JSON object"):
        load_keys_file(str(path), environ={})
