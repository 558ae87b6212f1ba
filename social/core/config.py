import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """
    Main application settings.
    Read from environment variables (.env file)
    """
    APP_NAME: str = "Social Relationships API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "False") == "True"

    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./social.db"
    )

    # Upper bound for waiting on a pooled connection / a locked database.
    DB_TIMEOUT_SECONDS: int = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))

    SECRET_KEY: str = os.getenv(
        "SECRET_KEY",
        "your-secret-key-change-in-production"
    )

    ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[str] = ["*"]

    CORS_HEADERS: List[str] = [
        "authorization",
        "x-client-info",
        "apikey",
        "content-type",
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
