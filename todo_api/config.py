"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-env-var"

# Database file used when database_path is not set explicitly
PROFILE_DATABASE_PATHS = {
    "development": "./data/todo_app.db",
    "test": "./data/todo_app_test.db",
    "production": "./data/todo_app.db",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: Literal["development", "test", "production"] = "development"
    host: str = "127.0.0.1"
    port: int = 3000
    database_path: str | None = None
    cors_origins: list[str] = ["http://localhost:3000"]

    # JWT Configuration
    jwt_secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    # None keeps tokens valid until removed from the user's token list
    jwt_expiry_days: int | None = None

    # Bcrypt work factor
    bcrypt_work_factor: int = 10

    # Require x-auth on /todos and scope todos to their creator
    todos_require_auth: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @model_validator(mode="after")
    def apply_profile_defaults(self) -> "Settings":
        """Fill per-environment defaults and refuse unsafe production config."""
        if self.database_path is None:
            self.database_path = PROFILE_DATABASE_PATHS[self.environment]

        if self.environment == "production" and self.jwt_secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("JWT_SECRET_KEY must be set in production")

        return self


settings = Settings()
