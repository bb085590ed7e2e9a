"""
Centralized Configuration Management

All environment variables are defined here using Pydantic Settings.
This provides validation, type safety, and documentation in one place.
"""

from datetime import datetime

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    To use in your code:
        from config import settings
        db_url = settings.get_db_url()
    """

    # Database Configuration
    DB_URL: str = Field(..., description="MongoDB connection string for dev")
    DB_URL_PROD: str = Field(default="", description="MongoDB connection string for production")
    DB_NAME: str = Field(default="hockey_admin_dev", description="Database name")
    ROSTERS_COLLECTION: str = Field(default="rosters", description="Collection holding divisions")

    # API Configuration
    API_BASE_URL: str = Field(
        default="http://localhost:8080", description="Base URL of the roster admin API"
    )
    API_TIMEOUT_SECONDS: float = Field(default=10.0, description="HTTP client timeout")

    # Application Settings
    DEBUG_LEVEL: int = Field(default=0, description="Debug verbosity level (0-3)")
    ENVIRONMENT: str = Field(
        default="development", description="Environment: development, staging, production"
    )

    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="*", description="Comma-separated list of allowed CORS origins"
    )

    # Roster rules
    DEFAULT_SEASON: str = Field(
        default_factory=lambda: str(datetime.now().year),
        description="Season used when a request does not name one",
    )
    MAX_SELECTORS: int = Field(default=5, description="Selector seats per division")
    DEFAULT_WITHDRAWAL_REASON: str = Field(
        default="Withdrawn", description="Reason stored when a withdrawal names none"
    )
    LAST_UPDATED_FORMAT: str = Field(
        default="%d/%m/%Y", description="strftime format of the lastUpdated stamp"
    )
    SAVE_STATUS_RESET_SECONDS: float = Field(
        default=3.0, description="Seconds before a saved/error status reads idle again"
    )

    @validator("DEBUG_LEVEL")
    def validate_debug_level(cls, v):
        if v not in [0, 1, 2, 3]:
            raise ValueError("DEBUG_LEVEL must be 0, 1, 2, or 3")
        return v

    @validator("MAX_SELECTORS")
    def validate_max_selectors(cls, v):
        if v < 1:
            raise ValueError("MAX_SELECTORS must be at least 1")
        return v

    def get_cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins into a list"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_db_url(self, use_prod: bool = False) -> str:
        """Get database URL based on environment"""
        return self.DB_URL_PROD if use_prod else self.DB_URL

    def get_db_name(self, use_prod: bool = False) -> str:
        """Get database name based on environment"""
        return "hockey_admin" if use_prod else self.DB_NAME

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Singleton instance - import this throughout your application
settings = Settings()
