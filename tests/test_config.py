"""Tests for knowhow.config."""

import pytest

from knowhow.config import DEFAULT_BASE_URL, DEFAULT_MODEL, KnowHowConfig
from knowhow.exceptions import ConfigurationError
from knowhow.prompts import PROMPT_ANALYZE, PROMPT_MATCH


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("OPENAI_API_KEY", "KNOWHOW_MODEL", "OPENAI_API_BASE"):
        # setenv first so teardown also removes values a .env file loaded
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


def test_defaults(tmp_path):
    config = KnowHowConfig(api_key="k", work_dir=tmp_path)
    assert config.model == DEFAULT_MODEL == "gpt-4o-mini"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.analyze_prompt == PROMPT_ANALYZE
    assert config.match_prompt == PROMPT_MATCH
    assert (config.connect_timeout, config.request_timeout) == (30.0, 240.0)
    assert (config.max_attempts, config.initial_delay, config.backoff_factor) == (4, 1.0, 2.0)


def test_default_prompts_carry_placeholders():
    assert "{CRASH_CONTENT}" in PROMPT_ANALYZE and "{PR_CONTENT}" in PROMPT_ANALYZE
    assert "{NEW_CRASH_CONTENT}" in PROMPT_MATCH and "{KNOWN_CASES_CONTENT}" in PROMPT_MATCH


def test_api_key_hidden_from_repr():
    assert "secret" not in repr(KnowHowConfig(api_key="secret"))


def test_from_environment_missing_key(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        KnowHowConfig.from_environment(tmp_path)
    assert "OPENAI_API_KEY" in str(exc_info.value)
    assert "OPENAI_API_KEY" in exc_info.value.hint


def test_from_environment_blank_key(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    with pytest.raises(ConfigurationError):
        KnowHowConfig.from_environment(tmp_path)


def test_from_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("KNOWHOW_MODEL", "gpt-4.1")
    monkeypatch.setenv("OPENAI_API_BASE", "http://proxy/v1")

    config = KnowHowConfig.from_environment(tmp_path)

    assert config.api_key == "sk-env"
    assert config.model == "gpt-4.1"
    assert config.responses_url == "http://proxy/v1/responses"
    assert config.work_dir == tmp_path


def test_from_environment_reads_dotenv(tmp_path):
    (tmp_path / ".env").write_text("OPENAI_API_KEY=sk-dotenv\n")
    config = KnowHowConfig.from_environment(tmp_path)
    assert config.api_key == "sk-dotenv"
