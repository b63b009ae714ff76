"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CORS_ORIGINS = ",".join(
    [
        "https://luxearn.site",
        "https://www.luxearn.site",
        "http://luxearn.site",
        "http://www.luxearn.site",
        "https://luxearnref.onrender.com",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]
)

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = Field(
        default=3000, ge=1, le=65535, description="HTTP server port"
    )

    # Referral links
    referral_link_template: str = Field(
        default="https://luxearn.site/#/login?ref={code}",
        description="Public referral link, {code} is replaced by the referral code",
    )

    # CORS
    cors_origins: str = DEFAULT_CORS_ORIGINS  # Comma-separated list

    # Application
    environment: str = "production"
    log_level: str = "INFO"
    log_file: str = "logs/referral_ledger.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Rewrite plain PostgreSQL URLs to the asyncpg driver."""
        v = v.strip()
        if not v:
            raise ValueError("DATABASE_URL cannot be empty")
        if v.startswith("postgres://"):
            v = "postgresql+asyncpg://" + v[len("postgres://"):]
        elif v.startswith("postgresql://"):
            v = "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @field_validator("referral_link_template")
    @classmethod
    def validate_referral_link_template(cls, v: str) -> str:
        """Referral link template must contain the {code} placeholder."""
        if "{code}" not in v:
            raise ValueError("REFERRAL_LINK_TEMPLATE must contain {code}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level against loguru levels."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level

    def get_cors_origins(self) -> list[str]:
        """Get list of allowed CORS origins."""
        if not self.cors_origins:
            return []
        return [
            origin.strip()
            for origin in self.cors_origins.split(",")
            if origin.strip()
        ]

    def build_referral_link(self, referral_code: str) -> str:
        """Build public referral link for a code."""
        return self.referral_link_template.format(code=referral_code)


# Global settings instance
settings = Settings()
