from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List, Optional

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./feedbackhub.db"

    # Shared secret for the website listing endpoint (x-admin-key header)
    ADMIN_KEY: Optional[str] = None

    # Admin session cookie
    SESSION_SECRET_KEY: str
    SESSION_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 12
    SESSION_COOKIE_NAME: str = "admin-session"
    COOKIE_SECURE: bool = True  # set False for local http

    # Redis holds active admin sessions
    REDIS_URL: str = "redis://localhost:6379/0"

    PROJECT_NAME: str = "FeedbackHub API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Multi-tenant feedback collection API"

    # Reverse proxies allowed to set X-Forwarded-For / X-Real-IP, e.g. '["10.0.0.2"]'
    TRUSTED_PROXIES: List[str] = []

    LOG_LEVEL: str = "INFO"
    PASSWORD_MIN_LENGTH: int = 8

    # Used by `python -m feedbackhub.core.init_db` to bootstrap the first admin
    INITIAL_ADMIN_EMAIL: Optional[str] = None
    INITIAL_ADMIN_PASSWORD: Optional[str] = None
    INITIAL_ADMIN_NAME: str = "Administrator"

    class Config:
        env_file = ".env"


settings = Settings()
