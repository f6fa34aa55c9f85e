from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from corsguard.cors.policy import OriginPolicy

class Settings(BaseSettings):
    # App
    APP_NAME: str = "corsguard"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Allowed origins (JSON list in .env). Unset means any origin ("*").
    CORS_ALLOW_ORIGINS: Optional[List[str]] = None

    # Hosts accepted outside dev
    TRUSTED_HOSTS: List[str] = Field(default_factory=lambda: ["127.0.0.1", "localhost"])

    # Meta
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

def build_policy(s: "Settings") -> OriginPolicy:
    return OriginPolicy.from_origins(s.CORS_ALLOW_ORIGINS)

settings = Settings()
