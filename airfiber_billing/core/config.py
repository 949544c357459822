# airfiber_billing/core/config.py
"""
Runtime configuration loaded from the environment and the ``.env`` file.
"""
import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BRAND_NAME, EmailProvider

# Default SQLite file lives in data/db/ next to the project root
DATA_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), "..", "..", "data"))
DEFAULT_DATABASE_FILE = os.path.join(DATA_DIR, "db", "billing.sqlite")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: Optional[str] = None

    email_provider: EmailProvider = EmailProvider.SMTP
    email_from_name: str = BRAND_NAME
    email_from_address: Optional[str] = None
    email_timeout: float = 10.0

    # Gmail SMTP (App Password)
    gmail_user: Optional[str] = None
    gmail_app_password: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465

    # SendGrid REST API
    sendgrid_api_key: Optional[str] = None

    log_level: str = "INFO"
    uvicorn_host: str = "0.0.0.0"
    uvicorn_port: int = 3000

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        os.makedirs(os.path.dirname(DEFAULT_DATABASE_FILE), exist_ok=True)
        return f"sqlite:///{DEFAULT_DATABASE_FILE}"

    @property
    def sender_address(self) -> Optional[str]:
        return self.email_from_address or self.gmail_user


@lru_cache
def get_settings() -> Settings:
    return Settings()
