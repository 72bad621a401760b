from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str

    # Comma-separated, e.g. "https://app.bookati.com,https://admin.bookati.com"
    cors_origins: str = ""

    # Default window for generation requests that omit end_date
    slot_horizon_days: int = 30

    log_level: str = "INFO"

    @field_validator("database_url", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v


settings = Settings()
