import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

_log = logging.getLogger(__name__)

# Completion API (Groq exposes an OpenAI-compatible surface)
DEFAULT_API_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_PROVIDER = "groq"

# --- CONFIG --- retry / generation
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_S = 1.0
DEFAULT_REQUEST_TIMEOUT_S = 60.0
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper() or "INFO"


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        _log.warning(f"Ignoring non-integer {name}={value!r}; using {default}")
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        _log.warning(f"Ignoring non-numeric {name}={value!r}; using {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once at startup and passed down explicitly."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    provider: str = DEFAULT_PROVIDER
    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay_s: float = DEFAULT_BASE_DELAY_S
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    database_url: str = ""
    logging_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("GROQ_API_KEY", "").strip(),
            api_url=_env_str(env, "GROQ_API_URL", DEFAULT_API_URL),
            model=_env_str(env, "GROQ_MODEL", DEFAULT_MODEL),
            provider=_env_str(env, "REFEREE_PROVIDER", DEFAULT_PROVIDER),
            max_retries=_env_int(env, "REFEREE_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            base_delay_s=_env_float(env, "REFEREE_BASE_DELAY_S", DEFAULT_BASE_DELAY_S),
            request_timeout_s=_env_float(
                env, "REFEREE_REQUEST_TIMEOUT_S", DEFAULT_REQUEST_TIMEOUT_S
            ),
            max_tokens=_env_int(env, "REFEREE_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            temperature=_env_float(env, "REFEREE_TEMPERATURE", DEFAULT_TEMPERATURE),
            database_url=env.get("DATABASE_URL", "").strip(),
            logging_level=_env_str(env, "LOGGING_LEVEL", "INFO").upper(),
        )
