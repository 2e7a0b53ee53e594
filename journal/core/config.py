"""
Runtime settings, read from the environment (or a local .env file).
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://journal:journal@db:5432/journal"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # "*" or a comma-separated list, e.g. "https://app.example.com,https://admin.example.com"
    CORS_ORIGINS: str = "*"

    # Page size of GET /summary/history when no ?limit is given
    SUMMARY_HISTORY_LIMIT: int = Field(default=10, ge=1, le=52)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
