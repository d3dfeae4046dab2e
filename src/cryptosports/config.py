"""Application settings via pydantic-settings."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with CSX_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="CSX_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"
    log_format: str = "json"
    host: str = "0.0.0.0"
    port: int = 5000

    # --- Sessions ---
    session_secret: str = "crypto-sports-secret-key"
    session_cookie_name: str = "crypto-sports-session"
    session_max_age_seconds: int = 60 * 60 * 24 * 7  # 1 week

    # --- Password ---
    password_min_length: int = 8
    password_max_length: int = 128

    # --- Seed data ---
    seed_admin: bool = True
    admin_username: str = "admin"
    admin_password: str = "password123"
    admin_email: str = "admin@example.com"
    admin_balance: Decimal = Decimal("200")
    admin_tokens_per_player: int = 60

    # --- Demo account ---
    demo_username: str = "demo"
    demo_password: str = "password"
    demo_email: str = "demo@example.com"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
