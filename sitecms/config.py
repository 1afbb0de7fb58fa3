from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Site CMS"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = False

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./sitecms.db"

    # Locale settings (first locale is the default unless overridden)
    supported_locales: list[str] = ["fr", "en"]
    default_locale: str = "fr"

    # Record a redirect whenever a published slug changes
    auto_redirect_on_slug_change: bool = True

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
