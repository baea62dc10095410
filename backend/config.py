# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./shoe_catalog.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"

    # Notification mail for newly created shoes (off by default)
    MAIL_ENABLED: bool = False
    MAIL_HOST: str = "localhost"
    MAIL_PORT: int = 25
    MAIL_FROM: str = "catalog@acme.example"
    MAIL_TO: str = "admin@acme.example"
    MAIL_TIMEOUT: float = 5.0

    # Upper bound for uploaded shoe files
    MAX_FILE_SIZE: int = 10 * 1024 * 1024

    class Config:
        env_file: ClassVar[str] = str(env_path)

settings = Settings()
