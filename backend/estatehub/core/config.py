"""
Application configuration
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "EstateHub Marketplace"

    # CORS Settings
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Demo data loaded on startup
    SEED_DEMO_DATA: bool = True

    # Email notifications (Brevo transactional API)
    EMAIL_ENABLED: bool = False  # If False, notifications are only logged
    BREVO_API_URL: str = "https://api.brevo.com/v3/smtp/email"
    BREVO_API_KEY: str = ""
    EMAIL_SENDER_ADDRESS: str = "no-reply@estatehub.local"
    EMAIL_SENDER_NAME: str = "EstateHub"
    EMAIL_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_NOTIFICATION_EMAIL: Optional[str] = None
    EMAIL_DISPATCH_MODE: str = "inline"  # inline or background

    # Marketplace policies
    ACCEPTED_OFFER_PROPERTY_STATUS: str = ""  # empty, PENDING or SOLD
    AUTO_REJECT_COMPETING_OFFERS: bool = False
    ENFORCE_TERMINAL_STATES: bool = False
    DELETE_POLICY: str = "cascade"  # cascade, restrict or orphan

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    class Config:
        env_file = ".env"
        case_sensitive = True

    def get_cors_origins(self) -> List[str]:
        """Return the list of allowed CORS origins"""
        if self.BACKEND_CORS_ORIGINS:
            origins = [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
            return origins if origins else self.CORS_ORIGINS
        return self.CORS_ORIGINS


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance
    """
    return Settings()
