import datetime


def test_settings_from_env_reads_values():
    from referee.config import Settings

    settings = Settings.from_env(
        {
            "GROQ_API_KEY": "  secret  ",
            "GROQ_API_URL": "https://proxy.test/v1",
            "GROQ_MODEL": "mixtral",
            "REFEREE_MAX_RETRIES": "5",
            "REFEREE_BASE_DELAY_S": "0.5",
            "REFEREE_TEMPERATURE": "0",
            "DATABASE_URL": "postgresql://db/referee",
            "LOGGING_LEVEL": "debug",
        }
    )

    assert settings.api_key == "secret"
    assert settings.api_url == "https://proxy.test/v1"
    assert settings.model == "mixtral"
    assert settings.max_retries == 5
    assert settings.base_delay_s == 0.5
    assert settings.temperature == 0.0
    assert settings.database_url == "postgresql://db/referee"
    assert settings.logging_level == "DEBUG"


def test_settings_defaults_and_bad_numbers():
    from referee.config import DEFAULT_API_URL, DEFAULT_MODEL, Settings

    settings = Settings.from_env({"REFEREE_MAX_RETRIES": "lots", "GROQ_MODEL": "  "})

    assert settings.api_key == ""
    assert settings.api_url == DEFAULT_API_URL
    assert settings.model == DEFAULT_MODEL
    assert settings.max_retries == 3
    assert settings.base_delay_s == 1.0
    assert settings.max_tokens == 4096
    assert settings.database_url == ""


def test_settings_from_process_env(monkeypatch):
    from referee.config import Settings

    monkeypatch.setenv("GROQ_API_KEY", "from-env")
    monkeypatch.setenv("REFEREE_MAX_TOKENS", "1024")

    settings = Settings.from_env()

    assert settings.api_key == "from-env"
    assert settings.max_tokens == 1024


def test_logger_helpers():
    from referee import logger as logger_mod

    log = logger_mod.get_logger()
    assert log is logger_mod.logger
    assert log.name == "referee"

    # Shortcut aliases exist and are callable
    assert callable(logger_mod.info)
    assert callable(logger_mod.error)

    aware = datetime.datetime(2026, 1, 19, 15, 30, 5, 123456, tzinfo=datetime.timezone.utc)
    assert logger_mod.format_timestamp(aware) == "2026-01-19T15:30:05.123Z"

    naive = datetime.datetime(2026, 1, 19, 15, 30)
    assert logger_mod.format_timestamp(naive) == "2026-01-19T15:30:00.000Z"
