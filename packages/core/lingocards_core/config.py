"""Runtime configuration loaded from environment variables and ``.env``."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///lingocards.db"

    # Translation providers
    # Empty string means "no provider configured"; the baseline translator is used.
    translation_api_provider: str = "gemini"
    translation_api_key: str | None = None
    gemini_api_key: str | None = None
    google_api_key: str | None = None
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-1.5-pro"
    translation_timeout: float = 30.0  # seconds, per provider call
    translation_max_retries: int = 2
    strict_translation_errors: bool = False

    # Sessions
    max_cards_per_session: int = 20
    default_source_language: str = "en"
    default_target_language: str = "es"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def resolved_gemini_key(self) -> str | None:
        return self.gemini_api_key or self.google_api_key


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
