from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Unset or empty selects the in-memory store
    DATABASE_URL: Optional[str] = None
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    SEED_DEMO_SHIPMENT: bool = False
    DB_ECHO: bool = False

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        # SQLAlchemy dropped the "postgres" dialect alias
        if value.startswith("postgres://"):
            value = "postgresql://" + value[len("postgres://"):]
        return value

    @property
    def use_database(self) -> bool:
        return self.DATABASE_URL is not None

@lru_cache
def get_settings() -> Settings:
    return Settings()
