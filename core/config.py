import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"

    # Civil timezone of the consortium timetables (wall-clock times and weekdays)
    TIMEZONE: str = "Europe/Madrid"

    # CTAN (Red de Consorcios de Transporte de Andalucía) API
    CTAN_API_BASE_URL: str = "https://api.ctan.es"
    CTAN_API_LANGUAGE: str = "ES"
    CTAN_HTTP_TIMEOUT_SECONDS: float = 30.0

    # Holiday calendar (python-holidays country + autonomous community)
    HOLIDAY_COUNTRY_CODE: str = "ES"
    HOLIDAY_SUBDIVISION: str = "AN"

    # Rate limiting storage (memory:// or redis://...)
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def timezone_is_valid(self) -> bool:
        try:
            ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            return False
        return True

    def validate_production_settings(self) -> None:
        """Validate critical settings for production environment.

        Call this during application startup.
        Raises ValueError if production settings are invalid.
        """
        errors = []

        if self.is_production:
            # Check DEBUG is disabled
            if self.DEBUG:
                errors.append("DEBUG must be False in production")

            if not self.timezone_is_valid():
                errors.append(f"TIMEZONE '{self.TIMEZONE}' is not a known IANA timezone")

            if not self.CTAN_API_BASE_URL.startswith("https://"):
                errors.append("CTAN_API_BASE_URL must use https in production")

        if errors:
            raise ValueError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def validate_development_settings(self) -> None:
        """Set sensible defaults for development if not configured."""
        if not self.timezone_is_valid():
            logger.warning(f"TIMEZONE '{self.TIMEZONE}' is not a known IANA timezone, using Europe/Madrid")
            self.TIMEZONE = "Europe/Madrid"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
if settings.is_production:
    settings.validate_production_settings()
else:
    settings.validate_development_settings()
