from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    SERVICE_NAME: str = "Global Tours Invoicing"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3090

    # Database Configuration
    SQLALCHEMY_DATABASE_URL: str = "sqlite:///./invoices.db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Tokens issued by the hosted auth provider
    SECRET_KEY: str = "green-secret-keeps-gamma"
    ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = "authenticated"

    # Redis Configuration (draft slot)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    DRAFT_KEY: str = "invoice_draft"

    # Branding printed on every invoice
    BUSINESS_NAME: str = "Global Tours & Travels"
    BUSINESS_TAGLINE: str = "TOURS & TRAVELS"
    BUSINESS_ADDRESS: str = "Sainath Nagar, Nashik - 422001"
    BUSINESS_PHONE: str = "+91 98815 98109"
    BUSINESS_CONTACT: str = "98815 98109"
    BUSINESS_EMAIL: str = "globaltours@example.com"
    FOOTER_LINES: List[str] = [
        "Thank you for travelling with us!",
        "We wish you a safe and pleasant journey.",
    ]

    # Export Configuration
    EXPORT_SCALE: int = 2
    EXPORT_DPI: int = 150
    EXPORT_JPEG_QUALITY: int = 95
    FILENAME_MAX_LENGTH: int = 30
    DEFAULT_COUNTRY_CODE: str = "91"

    # WhatsApp Cloud API (direct share) and web composer (fallback)
    META_API_KEY: str = ""
    WHATSAPP_PHONE_ID: str = ""
    WHATSAPP_API_URL: str = "https://graph.facebook.com/v24.0"
    WHATSAPP_WEB_URL: str = "https://web.whatsapp.com/send"
    WHATSAPP_TIMEOUT_SECONDS: int = 20

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
