"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings
    
    print(settings.DATABASE_URL)
    print(settings.PERSONALIZATION_MIN_COUNT)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from functools import lru_cache

from config.constants import DEFAULT_MIN_COUNT


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """
    
    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./dictation.db",
        description="Database connection string (PostgreSQL or SQLite)"
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )
    
    # ==========================================================================
    # Authentication
    # ==========================================================================
    SECRET_KEY: str = Field(
        default="your_super_secret_key_change_this_in_production",
        description="Bearer token signing secret key"
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="Bearer token signing algorithm"
    )
    
    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit structured JSON logs instead of colored console output"
    )
    APP_NAME: str = Field(
        default="Dictation API",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )
    
    # ==========================================================================
    # Personalization
    # ==========================================================================
    PERSONALIZATION_ENABLED: bool = Field(
        default=True,
        description="Learn from transcript edits and apply learned corrections"
    )
    PERSONALIZATION_MIN_COUNT: int = Field(
        default=DEFAULT_MIN_COUNT,
        ge=1,
        description="Times a correction must be observed before it is applied"
    )
    
    # ==========================================================================
    # Transcripts
    # ==========================================================================
    TRANSCRIPT_HISTORY_LIMIT: int = Field(
        default=50,
        ge=1,
        description="Default page size when listing transcripts"
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Uses LRU cache to ensure settings are only loaded once.
    
    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()
