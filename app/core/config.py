from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Wayfarer Travel API"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    # Comma-separated origins for CORS (e.g. https://wayfarer.travel,https://app.wayfarer.travel). If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""

    # Required: the API refuses to start without a signing key.
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    DATABASE_URL: str

    @field_validator("SECRET_KEY", mode="after")
    @classmethod
    def secret_key_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SECRET_KEY must be set")
        return v

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v

    # Optional admin account created by app.seed
    SEED_ADMIN_EMAIL: str = ""
    SEED_ADMIN_PASSWORD: str = ""

    # Third-party provider keys (catalogs are mocked; kept for deployments that wire real providers)
    FLIGHT_API_KEY: str = ""
    HOTEL_API_KEY: str = ""
    CAR_API_KEY: str = ""
    RESTAURANT_API_KEY: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()
