"""
Core Configuration - Environment variables and app settings
Uses Pydantic BaseSettings for type-safe configuration management
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional


# Values shipped in sample .env files; treated as "not configured"
PLACEHOLDER_KEYS = [
    "",
    "your-api-key",
    "your-rapidapi-key",
    "your-gemini-api-key",
    "changeme",
]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables

    Both external collaborators are optional: a missing AeroDataBox key
    downgrades requests to unverified facts, a missing Gemini key disables
    generated explanations.
    """

    # Application settings
    app_name: str = Field(default="Flight Disruption Helper", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment: development, staging, production")
    debug: bool = Field(default=False, description="Debug mode")

    # AeroDataBox (RapidAPI) flight status provider
    aerodatabox_api_key: Optional[str] = Field(default=None, description="RapidAPI key for AeroDataBox")
    aerodatabox_host: str = Field(
        default="aerodatabox.p.rapidapi.com",
        description="RapidAPI host serving AeroDataBox"
    )

    # Google Gemini Settings (explanation generator)
    google_gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API Key")

    # API Configuration
    api_timeout: int = Field(default=15, ge=1, le=120, description="Provider request timeout in seconds")

    # AI Model Settings
    default_model_name: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used when a prompt config does not name one"
    )
    default_temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Default model temperature"
    )
    max_output_tokens: int = Field(
        default=1024,
        ge=256,
        le=8192,
        description="Maximum output tokens for AI generation"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )

    # CORS Settings (for frontend integration)
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value"""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("aerodatabox_api_key", "google_gemini_api_key")
    @classmethod
    def drop_placeholder_keys(cls, v):
        """Blank or placeholder credentials count as not configured"""
        if v is None:
            return None
        v = v.strip()
        if v.lower() in PLACEHOLDER_KEYS:
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def is_production(self) -> bool:
        """Check if running in production"""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development"""
        return self.environment == "development"

    @property
    def flight_status_configured(self) -> bool:
        return self.aerodatabox_api_key is not None

    @property
    def explanation_configured(self) -> bool:
        return self.google_gemini_api_key is not None

    def get_log_config(self) -> dict:
        """Get logging configuration"""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": self.log_format
                },
                "json": {
                    "()": "pythonjsonlogger.json.JsonFormatter",
                    "fmt": "%(asctime)s %(name)s %(levelname)s %(message)s"
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": self.log_level,
                    "formatter": "json" if self.is_production() else "default",
                    "stream": "ext://sys.stdout"
                }
            },
            "root": {
                "level": self.log_level,
                "handlers": ["console"]
            }
        }


# Singleton settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Raises:
        ValueError: If environment variables hold invalid values
    """
    global _settings

    if _settings is None:
        try:
            _settings = Settings()
        except Exception as e:
            raise ValueError(
                f"Failed to load settings. Please check your .env file. Error: {str(e)}"
            )

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing)

    Returns:
        New Settings instance
    """
    global _settings
    _settings = None
    return get_settings()
