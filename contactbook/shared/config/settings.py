# 📄 File: contactbook/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# One place that holds every knob of the contact book: where the database lives, which
# secrets sign login and verification links, where pictures go and how often people may log in.
#
# 🧪 Purpose (Technical Summary):
# Single pydantic-settings object (environment + .env) covering server, database, token
# secrets and lifetimes, email delivery, avatar storage and rate limits; built once and injected.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - contactbook.main (application factory, injected into every component)
# - Database connection manager, security manager, file manager, email client

from functools import lru_cache
from typing import List, Literal

from limits import parse
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file. One instance is
    built at process start and handed to each component explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Contact Book API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Multi-tenant contact management backend",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "text"] = Field(default="json", description="Log output format")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=False, description="Auto-reload on changes")
    API_PREFIX: str = Field(default="/api", description="Prefix for all API routes")
    APP_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Public base URL used to build links in outgoing emails"
    )

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./contactbook.db",
        description="SQLAlchemy async database URL"
    )
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_CREATE_TABLES: bool = Field(default=True, description="Create missing tables on startup")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    AUTH_SECRET: str = Field(..., description="Session token signing secret")
    VERIFICATION_SECRET: str = Field(..., description="Verification token signing secret")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    SESSION_TOKEN_EXPIRE_HOURS: int = Field(default=12, description="Session token lifetime")
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = Field(
        default=24,
        description="Verification token lifetime"
    )
    BCRYPT_ROUNDS: int = Field(default=10, description="BCrypt hash rounds")
    ALLOWED_EMAIL_TLDS: str = Field(
        default="com,net",
        description="Comma separated top-level domains accepted for user emails"
    )

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="CORS allowed origins"
    )

    # =========================================================================
    # EMAIL DELIVERY
    # =========================================================================

    EMAIL_BACKEND: Literal["sendgrid", "console"] = Field(
        default="sendgrid",
        description="Outbound email provider"
    )
    SENDGRID_API_KEY: str = Field(default="", description="SendGrid API key")
    SENDGRID_API_URL: str = Field(
        default="https://api.sendgrid.com/v3/mail/send",
        description="SendGrid mail send endpoint"
    )
    EMAIL_FROM_ADDRESS: str = Field(
        default="noreply@contactbook.app",
        description="Sender address for outgoing mail"
    )
    EMAIL_FROM_NAME: str = Field(default="Contact Book", description="Sender display name")
    EMAIL_TIMEOUT_SECONDS: float = Field(default=10.0, description="Email provider timeout")
    EMAIL_MAX_RETRIES: int = Field(default=3, description="Email provider attempts")

    # =========================================================================
    # FILE STORAGE
    # =========================================================================

    TMP_DIR: str = Field(default="tmp", description="Staging directory for uploads")
    AVATARS_DIR: str = Field(default="public/avatars", description="Avatar storage directory")
    AVATARS_URL_PATH: str = Field(default="/avatars", description="Public path for avatars")
    AVATAR_SIZE: int = Field(default=250, description="Avatar edge length in pixels")
    MAX_AVATAR_SIZE: int = Field(default=5242880, description="Max avatar upload size (5MB)")
    STAGING_SWEEP_MIN_AGE_SECONDS: int = Field(
        default=600,
        description="Staged files younger than this are never swept"
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable request rate limiting")
    AUTH_RATE_LIMIT: str = Field(
        default="10/minute",
        description="Signup/login rate limit in '<limit>/<period>' format"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate JWT algorithm."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("AUTH_RATE_LIMIT")
    @classmethod
    def validate_auth_rate_limit(cls, v: str) -> str:
        """Validate rate limit notation (e.g. 10/minute)."""
        try:
            parse(v)
        except ValueError as e:
            raise ValueError(f"Invalid rate limit: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_distinct_secrets(self) -> "Settings":
        """Session and verification tokens must not be interchangeable."""
        if self.AUTH_SECRET == self.VERIFICATION_SECRET:
            raise ValueError("AUTH_SECRET and VERIFICATION_SECRET must differ")
        return self

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_email_tlds(self) -> List[str]:
        return [tld.strip().lower() for tld in self.ALLOWED_EMAIL_TLDS.split(",") if tld.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Only used at process start to build the object that is then injected
    into the application factory.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
