#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Spin Wheel Offers API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True  # Can disable in production

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = os.environ.get("ALLOWED_ORIGINS", "*")
    ALLOWED_METHODS: str = os.environ.get("ALLOWED_METHODS", "GET,POST,OPTIONS")
    ALLOWED_HEADERS: str = os.environ.get("ALLOWED_HEADERS", "*")
    CORS_ALLOW_CREDENTIALS: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Key-value store (in-memory when REDIS_URL is unset)
    REDIS_URL: Optional[str] = os.environ.get("REDIS_URL", None)
    KV_PREFIX: str = ""

    # Admin / maintenance bearer tokens
    ADMIN_API_KEY: str = "admin-secret-key"
    CLEANUP_API_KEY: str = "cleanup-secret-key"

    # OTP flow
    OTP_TTL_SECONDS: int = 600  # 10 minutes
    VERIFIED_TTL_SECONDS: int = 600
    REQUIRE_VERIFIED_CONTACT: bool = True
    ENABLE_EMAIL_OTP: bool = True
    ENABLE_PHONE_OTP: bool = True
    DEFAULT_CONTACT_METHOD: str = "email"

    # Offers
    COOLDOWN_TIMEZONE: str = "UTC"  # IANA name or fixed offset such as +05:30
    WIN_PROBABILITY: float = 0.4
    HISTORY_LIMIT: int = 10
    HISTORY_RETENTION_DAYS: int = 7
    BRAND_NAME: str = "Waffle Forever"

    # Transactional email API
    EMAIL_API_URL: str = "https://api.brevo.com/v3/smtp/email"
    EMAIL_API_KEY: str = os.environ.get("EMAIL_API_KEY", "")
    EMAIL_FROM: str = "offers@example.com"
    EMAIL_FROM_NAME: str = "Waffle Forever"
    EMAIL_TIMEOUT_SECONDS: float = 20.0

    # Twilio Settings
    TWILIO_ACCOUNT_SID: str = os.environ.get("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN: str = os.environ.get("TWILIO_AUTH_TOKEN", "")
    TWILIO_PHONE_NUMBER: str = os.environ.get("TWILIO_PHONE_NUMBER", "")

    # Accept comma-separated strings for list envs in addition to JSON arrays
    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def allowed_methods_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_METHODS)

    @property
    def allowed_headers_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_HEADERS)

    @property
    def otp_config_valid(self) -> bool:
        return self.ENABLE_EMAIL_OTP or self.ENABLE_PHONE_OTP


@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    # Normalize ALLOWED_ORIGINS if provided as comma-separated string env var CORS_ORIGINS
    cors_env = os.environ.get("CORS_ORIGINS")
    if cors_env:
        s.ALLOWED_ORIGINS = cors_env
    return s


settings: Settings = get_settings()
