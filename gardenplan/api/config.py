from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Garden Plan API"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"

    # Database
    POSTGRES_USER: str = "gardenplan"
    POSTGRES_PASSWORD: str = "gardenplan"
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "gardenplan"
    DATABASE_URL_OVERRIDE: str | None = None  # e.g. sqlite+aiosqlite:///./gardenplan.db

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS - accepts comma-separated string from env vars
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        return list(self.CORS_ORIGINS)

    # Succession planting
    # Hard stop when creating a new generation and the plant has no own maximum
    SUCCESSION_MAX_COUNT_CAP: int = 20
    # Scheduling horizon when the plant has no own maximum
    SUCCESSION_SCHEDULE_MAX_COUNT: int = 6
    SUCCESSION_CLAIM_RETRIES: int = 3
    VALIDATE_EXPLICIT_POSITIONS: bool = False

    # Fallback bed dimensions (inches)
    DEFAULT_BED_WIDTH_INCHES: int = 48
    DEFAULT_BED_HEIGHT_INCHES: int = 48

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()


settings = get_settings()
