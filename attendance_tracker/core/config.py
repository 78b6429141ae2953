import logging
from datetime import date
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    # Local wall-clock rules (marking window, "today") are evaluated in this zone
    TIMEZONE: str = "Asia/Kolkata"
    ATTENDANCE_OPEN_HOUR: int = 9
    ATTENDANCE_CLOSE_HOUR: int = 17

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # Default admin account, created by seed.py only
    ADMIN_NAME: Optional[str] = "Administrator"
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_PHONE: Optional[str] = "0000000000"
    ADMIN_POSITION: Optional[str] = "Administrator"
    ADMIN_START_DATE: Optional[date] = None

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
