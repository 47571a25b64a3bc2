from lingocards_core.config import Settings as CoreSettings


class Settings(CoreSettings):
    """API settings: core settings plus HTTP-only options."""

    # CORS - accepts comma-separated origins or "*" for allow-all
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_all: bool = False


settings = Settings()
