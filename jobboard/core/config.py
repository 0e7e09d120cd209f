"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Job Board API"
    debug: bool = False
    log_level: str = "INFO"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "job_board"

    # JWT session token (expiry doubles as the session lifetime)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Session cookie
    session_cookie_name: str = "jobboard_session"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    # Frontend origins allowed to send credentialed requests
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Password hashing cost
    bcrypt_rounds: int = 12

    @property
    def session_max_age(self) -> int:
        """Cookie max-age in seconds"""
        return self.jwt_expire_minutes * 60

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
