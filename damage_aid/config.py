"""
Application Configuration — Pydantic Settings

Centralized configuration management using environment variables.
Loads from .env file automatically with sensible defaults.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Priority: Environment variables > .env file > defaults
    """

    # === API Configuration ===
    PROJECT_NAME: str = "Damage Aid Buddy"

    # === CORS Configuration ===
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8080",
    ]

    # === Storage Configuration ===
    STORAGE_BACKEND: str = "memory"  # memory, file
    STORAGE_PATH: str = "damage_aid_store.json"

    # === Analysis Configuration ===
    ANALYSIS_DELAY_SECONDS: float = 3.0
    CLASSIFIER_SEED: Optional[int] = None

    # === Budget Matching ===
    BUDGET_WITHIN_RATIO: float = 0.8
    BUDGET_CLOSE_RATIO: float = 1.2

    # === Environment ===
    ENVIRONMENT: str = "local"  # local, development, staging, production

    # === Settings Configuration ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Singleton instance
settings = Settings()
