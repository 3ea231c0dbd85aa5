#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "BuildHub Notifications"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database Settings
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///./buildhub.db")

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Notification Settings
    NOTIFICATION_FALLBACK_EMOJI: str = "📢"
    URGENT_EMOJI: str = "🚨"
    MESSAGE_PREVIEW_LENGTH: int = 80
    CRITICAL_INVENTORY_RATIO: float = 0.3
    BATCH_MAX_RECIPIENTS: int = 500


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings: Settings = get_settings()
