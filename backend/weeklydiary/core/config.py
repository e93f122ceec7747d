"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Weekly Diary"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./weeklydiary.db"
    DB_ECHO: bool = False
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_DELAY: float = 0.3  # seconds, doubled after each failed attempt

    # Sessions
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    SESSION_TTL_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "auth_session"
    BCRYPT_ROUNDS: int = 12

    # Cookies
    COOKIE_SECURE: bool = True
    COOKIE_DOMAIN: Optional[str] = None
    SESSION_COOKIE_SAMESITE: str = "lax"

    # CSRF
    CSRF_COOKIE_NAME: str = "csrf_token"
    CSRF_HEADER_NAMES: List[str] = ["X-CSRF-Token", "CSRF-Token"]
    CSRF_COOKIE_HTTPONLY: bool = False  # the frontend reads the cookie from script

    # Object storage (Cloudflare R2, S3-compatible)
    R2_ACCOUNT_ID: str = ""
    R2_BUCKET: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_REGION: str = "auto"
    R2_PUBLIC_URL: str = ""
    PRESIGN_EXPIRES: int = 120  # seconds

    # File Upload
    MAX_UPLOAD_SIZE: int = 4 * 1024 * 1024  # 4MB
    MAX_UPLOAD_ITEMS: int = 9
    ALLOWED_IMAGE_TYPES: Union[List[str], str] = [
        "image/jpeg", "image/png", "image/webp", "image/avif", "image/gif"
    ]

    @field_validator("ALLOWED_IMAGE_TYPES", mode="before")
    @classmethod
    def parse_allowed_image_types(cls, v):
        """Parse ALLOWED_IMAGE_TYPES from comma-separated string or list."""
        if isinstance(v, str):
            return [mime.strip() for mime in v.split(",") if mime.strip()]
        return v

    @property
    def SESSION_TTL_SECONDS(self) -> int:
        return self.SESSION_TTL_DAYS * 24 * 60 * 60

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
