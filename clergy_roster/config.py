"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Record store backend and document locations."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backend: Literal["sqlite", "none"] = "sqlite"
    db_path: str = "data/roster.db"
    collection: str = "clergy"
    settings_collection: str = "settings"
    org_info_id: str = "aos_info"
    read_only: bool = False

    def ensure_dirs(self) -> None:
        """Create the database directory if needed."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)


class AuthSettings(BaseSettings):
    """Static admin credential pair (placeholder gate, not a security boundary)."""

    model_config = SettingsConfigDict(env_prefix="ADMIN_")

    username: str = "AOS221"
    password: str = "JHS221"


class AutosaveSettings(BaseSettings):
    """Debounce settings for edit-mode autosave."""

    model_config = SettingsConfigDict(env_prefix="AUTOSAVE_")

    delay_seconds: float = Field(default=1.5, gt=0)


class UISettings(BaseSettings):
    """NiceGUI server settings."""

    model_config = SettingsConfigDict(env_prefix="UI_")

    title: str = "AoS Clergy Roster"
    port: int = 8080
    reload: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    store: StoreSettings = StoreSettings()
    auth: AuthSettings = AuthSettings()
    autosave: AutosaveSettings = AutosaveSettings()
    ui: UISettings = UISettings()


settings = Settings()
