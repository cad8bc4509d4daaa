"""Configuration management using Pydantic settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from SCRIPTHOST_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTHOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "scripthost"
    debug: bool = False

    # Where the host loads scripts from
    scripts_dir: Path = Path("./scripts")

    # Diagnostics
    context_lines_before: int = 2    # source lines shown above the failing line
    context_lines_after: int = 2     # and below it
    show_hints: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 8000


settings = Settings()
