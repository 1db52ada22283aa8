"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Show Compliance"
    debug: bool = False
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all
    log_dir: Path = Path.home() / ".logs" / "show-compliance"

    # Database
    database_url: str = "sqlite:///./show_compliance.db"

    # Document uploads
    upload_dir: Path = Path("./uploads")
    upload_base_url: str = "/files"
    max_upload_bytes: int = 10 * 1024 * 1024

    # Checklist urgency windows, in days
    due_soon_days: int = 14
    expiry_warning_days: int = 30


settings = Settings()
