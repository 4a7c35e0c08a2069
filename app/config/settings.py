"""
Environment configuration for the HR access and leave service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional, Union

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application configuration
    APP_NAME: str = Field(
        default="HR Access & Leave Service",
        validation_alias=AliasChoices("APP_NAME", "PROJECT_NAME"),
    )
    API_VERSION: str = Field(default="v1", validation_alias=AliasChoices("API_VERSION", "PROJECT_VERSION"))
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    # NoDecode hands the raw string to parse_cors_origins, which accepts JSON or commas.
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias=AliasChoices("CORS_ORIGINS", "BACKEND_CORS_ORIGINS"),
    )

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hr_leave.db"
    DB_ECHO: bool = False

    # Security configuration. The signing secret has no default: a missing
    # secret must stop the process at startup.
    JWT_SECRET_KEY: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("JWT_SECRET_KEY", "JWT_SECRET"),
    )
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    SESSION_TIMEOUT_SECONDS: int = Field(default=1800, gt=0)
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('JWT_SECRET_KEY')
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("JWT_SECRET_KEY must not be blank")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported LOG_LEVEL: {v}")
        return level

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get cached settings instance"""
    if env_file:
        return Settings(_env_file=env_file)
    return Settings()
