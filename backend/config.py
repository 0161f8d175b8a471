# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    # Tokens stay valid for 24 hours
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    DATABASE_URL: str = "sqlite:///./nexus_store.db"

    BCRYPT_ROUNDS: int = 10

    # Comma separated list, "*" allows every origin
    CORS_ORIGINS: str = "*"

    # Public base URL used to build absolute image links (falls back to the request URL)
    PUBLIC_API_URL: Optional[str] = None
    STATIC_DIR: str = "static"

    SEED_DEMO_DATA: bool = True
    LOG_LEVEL: str = "INFO"

    # Register/login attempts per client IP
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "10 per 15 minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    class Config:
        env_file: ClassVar[str] = str(env_path)

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
