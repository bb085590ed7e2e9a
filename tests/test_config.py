"""Test configuration settings"""
from pydantic import ConfigDict

from config import Settings


class TestSettings(Settings):
    """Override settings for testing environment"""

    DB_URL: str = "mongodb://localhost:27017"
    DB_NAME: str = "hockey_admin_test"
    DEBUG_LEVEL: int = 0  # Suppress debug output in tests
    ENVIRONMENT: str = "test"
    DEFAULT_SEASON: str = "2025"

    model_config = ConfigDict(
        # conftest.py sets environment variables; no .env file here
        case_sensitive=True
    )
