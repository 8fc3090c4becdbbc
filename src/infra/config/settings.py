from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = "FanClub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]
    ALLOWED_METHODS: List[str] = ["GET", "POST", "OPTIONS"]
    ALLOWED_HEADERS: List[str] = ["Content-Type", "Authorization"]

    # Redis Settings
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 10

    # Admin Settings
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_LOG_FETCH_LIMIT: int = 100  # entries read per activity list
    ADMIN_MAX_USERS: int = 50
    ADMIN_MAX_SIGNUPS: int = 20
    ADMIN_MAX_LOGINS: int = 20

    # Activity Log Settings
    ACTIVITY_LOG_MAX_ENTRIES: int = 0  # 0 keeps lists unbounded

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
