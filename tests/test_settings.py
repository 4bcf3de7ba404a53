"""Tests for environment-driven settings."""

from settings import DEFAULT_BASE_URL, Settings, load_settings, settings_from_env


def test_defaults_without_environment():
    settings = settings_from_env({})

    assert settings == Settings()
    assert settings.dexscreener_base_url == DEFAULT_BASE_URL
    assert settings.max_candidates == 20
    assert not settings.llm_enabled


def test_values_are_parsed_and_normalised():
    settings = settings_from_env(
        {
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_MODEL": "gpt-4o",
            "OPENAI_TEMPERATURE": "0.5",
            "DEXSCREENER_BASE_URL": "https://proxy.local/",
            "DEXSCREENER_TIMEOUT": "2.5",
            "MAX_CANDIDATES": "5",
            "MAX_WORKERS": "3",
            "MAX_JITTER_SECONDS": "0",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.llm_enabled
    assert settings.openai_model == "gpt-4o"
    assert settings.temperature == 0.5
    assert settings.dexscreener_base_url == "https://proxy.local"
    assert (settings.request_timeout, settings.max_candidates, settings.max_workers) == (2.5, 5, 3)
    assert settings.max_jitter_seconds == 0
    assert settings.log_level == "DEBUG"


def test_malformed_numbers_fall_back_to_defaults(caplog):
    settings = settings_from_env({"MAX_CANDIDATES": "twenty", "DEXSCREENER_TIMEOUT": " ", "OPENAI_API_KEY": ""})

    assert settings.max_candidates == 20
    assert settings.request_timeout == 10.0
    assert settings.openai_api_key is None
    assert "Ignoring malformed MAX_CANDIDATES" in caplog.text


def test_load_settings_reads_process_environment(monkeypatch):
    monkeypatch.setattr("settings.load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("MAX_WORKERS", "2")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    settings = load_settings()

    assert settings.max_workers == 2
    assert not settings.llm_enabled


def test_unknown_log_level_falls_back(caplog):
    settings = settings_from_env({"LOG_LEVEL": "verbose"})

    assert settings.log_level == "INFO"
    assert "Ignoring malformed LOG_LEVEL" in caplog.text
    assert settings_from_env({"LOG_LEVEL": "warning"}).log_level == "WARNING"


def test_out_of_range_limits_fall_back(caplog):
    settings = settings_from_env(
        {"MAX_CANDIDATES": "-1", "MAX_WORKERS": "0", "DEXSCREENER_TIMEOUT": "-3", "MAX_JITTER_SECONDS": "-0.5"}
    )

    assert settings.max_candidates == 20
    assert settings.max_workers == 8
    assert settings.request_timeout == 10.0
    assert settings.max_jitter_seconds == 0.2
    assert "Ignoring out-of-range MAX_CANDIDATES" in caplog.text
