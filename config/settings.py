"""
Application settings loaded from environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Token signing ────────────────────────────────────────────────────
    jwt_secret: str = ""                # HMAC secret for auth tokens (empty → random per process)
    jwt_expiry_seconds: int = 3600      # 1 hour

    # ── Password hashing ─────────────────────────────────────────────────
    bcrypt_rounds: int = 12

    # ── User store ───────────────────────────────────────────────────────
    user_store: str = "sql"             # "sql" | "memory"
    database_url: str = "sqlite+aiosqlite:///./database.sqlite"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @field_validator("jwt_expiry_seconds")
    @classmethod
    def _positive_ttl(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("jwt_expiry_seconds must be positive")
        return value

    @field_validator("bcrypt_rounds")
    @classmethod
    def _bcrypt_range(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return value

    @field_validator("user_store")
    @classmethod
    def _known_store(cls, value: str) -> str:
        value = value.lower()
        if value not in ("sql", "memory"):
            raise ValueError("user_store must be 'sql' or 'memory'")
        return value


config = Settings()
