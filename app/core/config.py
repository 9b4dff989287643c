"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
The Supabase endpoint and both credentials are required; a missing value
fails at import time, which aborts startup.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_KEY: str
    TECHNICIAN_TABLE: str = "techniciens"

    # Access control
    ADMIN_EMAILS: str = ""

    # Session
    SESSION_COOKIE_NAME: str = "sb-access-token"
    SESSION_COOKIE_SECURE: bool = True
    LOGIN_PATH: str = "/login"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def admin_emails(self) -> frozenset[str]:
        """Parsed ``ADMIN_EMAILS``: trimmed, lower-cased, blanks dropped."""
        return frozenset(
            email.strip().lower()
            for email in self.ADMIN_EMAILS.split(",")
            if email.strip()
        )


settings = Settings()  # type: ignore[call-arg]
