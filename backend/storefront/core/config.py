from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pathlib import Path
import logging
import urllib.parse

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    PROJECT_NAME: str = "ChitraVaani Storefront API"
    PROJECT_VERSION: str = "2.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "production"  # "development" exposes error details in 500 responses
    LOG_LEVEL: str = "INFO"

    # Database (MySQL)
    MYSQL_SERVER: Optional[str] = None
    MYSQL_USER: Optional[str] = None
    MYSQL_PASSWORD: Optional[str] = None
    MYSQL_DB: Optional[str] = None
    MYSQL_PORT: int = 3306
    DATABASE_URL: Optional[str] = None  # Constructed from MYSQL_* when not given directly

    # --- SECURITY SETTINGS ---
    SECRET_KEY: Optional[str] = None  # No default, must come from the environment
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Admin account created at boot
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # Google sign-in
    GOOGLE_CLIENT_ID: Optional[str] = None
    ADMIN_EMAILS: str = ""  # Comma separated allow-list for Google login
    # --- END SECURITY SETTINGS ---

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "chitravaani"

    # Gmail SMTP
    EMAIL_USER: Optional[str] = None
    EMAIL_APP_PASSWORD: Optional[str] = None  # Gmail App Password, not the account password
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    ADMIN_NOTIFY_EMAIL: Optional[str] = None
    STORE_CONTACT_URL: str = "https://chitravaani.vercel.app/contact"

    # WhatsApp hand-off
    WHATSAPP_NUMBER: Optional[str] = None

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Rate limiting (per client IP, in-process)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100 per 15 minutes"
    RATE_LIMIT_LOGIN: str = "10 per 15 minutes"
    RATE_LIMIT_ORDERS: str = "10 per hour"
    RATE_LIMIT_FEEDBACK: str = "3 per hour"

    SEED_DEFAULT_CATEGORIES: bool = True

    model_config = SettingsConfigDict(
        # project root: backend/storefront/core -> backend/storefront -> backend -> root
        env_file=Path(__file__).resolve().parent.parent.parent.parent / ".env",
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

    @property
    def admin_email_list(self) -> List[str]:
        return [e.strip().lower() for e in self.ADMIN_EMAILS.split(",") if e.strip()]

    @property
    def allowed_origin_list(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()

# Construct DATABASE_URL after settings are loaded
if not settings.DATABASE_URL:
    if settings.MYSQL_USER and settings.MYSQL_PASSWORD and settings.MYSQL_SERVER and settings.MYSQL_DB:
        encoded_password = urllib.parse.quote_plus(settings.MYSQL_PASSWORD)
        settings.DATABASE_URL = (
            f"mysql+aiomysql://{settings.MYSQL_USER}:{encoded_password}@"
            f"{settings.MYSQL_SERVER}:{settings.MYSQL_PORT}/{settings.MYSQL_DB}?charset=utf8mb4"
        )
    else:
        logger.error("Database URL could not be constructed. Check MYSQL_* environment variables in .env.")

if not settings.SECRET_KEY:
    logger.warning("SECRET_KEY is not set. Admin login and token verification will fail.")
