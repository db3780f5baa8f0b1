"""
Settings - environment and .env driven configuration for the hook.
"""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import find_dotenv, load_dotenv

DEFAULT_MODEL = "qwen2.5-coder:7b"
DEFAULT_PORT = 11435
MAX_FILES = 20
MAX_CHARS = 8000


class ConfigurationError(ValueError):
    """Raised when an environment variable or CLI flag has an invalid value."""


@dataclass(frozen=True)
class LanguageProfile:
    """What to review and which style guide to review it against."""
    key: str
    display_name: str
    extension: str
    style_guide: str


LANGUAGE_PROFILES = {
    "go": LanguageProfile(
        key="go",
        display_name="Golang",
        extension=".go",
        style_guide="the official Go style guide and Effective Go",
    ),
    "python": LanguageProfile(
        key="python",
        display_name="Python",
        extension=".py",
        style_guide="PEP 8 and the Zen of Python",
    ),
}


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    port: int = DEFAULT_PORT
    ollama_bin: str = "ollama"
    language: LanguageProfile = LANGUAGE_PROFILES["go"]
    max_files: int = MAX_FILES
    max_chars: int = MAX_CHARS
    log_file: Optional[str] = None

    @property
    def base_url(self) -> str:
        return f"http://127.0.0.1:{self.port}"


def _parse_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid port {value!r}: must be an integer") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"Invalid port {port}: must be between 1 and 65535")
    return port


def _get_language(key: str) -> LanguageProfile:
    profile = LANGUAGE_PROFILES.get(key.lower())
    if profile is None:
        raise ConfigurationError(
            f"Unknown language {key!r}. Available: {', '.join(sorted(LANGUAGE_PROFILES))}"
        )
    return profile


def load_settings(
    model: Optional[str] = None,
    port: Optional[int] = None,
    language: Optional[str] = None,
) -> Settings:
    """
    Build Settings from the environment, letting explicit arguments win.

    A .env file found from the working directory upward fills in
    variables that are not already set.

    Args:
        model: Overrides REVIEW_HOOK_MODEL
        port: Overrides REVIEW_HOOK_PORT
        language: Overrides REVIEW_HOOK_LANGUAGE

    Raises:
        ConfigurationError: if the port or language is invalid
    """
    # The hook runs from the repository being committed, not from its install location
    load_dotenv(find_dotenv(usecwd=True))

    model = model or os.getenv("REVIEW_HOOK_MODEL", DEFAULT_MODEL)
    if port is None:
        port = os.getenv("REVIEW_HOOK_PORT", DEFAULT_PORT)
    language = language or os.getenv("REVIEW_HOOK_LANGUAGE", "go")

    return Settings(
        model=model,
        port=_parse_port(port),
        ollama_bin=os.getenv("REVIEW_HOOK_OLLAMA_BIN", "ollama"),
        language=_get_language(language),
        log_file=os.getenv("REVIEW_HOOK_LOG_FILE") or None,
    )
