from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./kelopay.db"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Signing key of the Alchemy webhook. Leaving it unset is allowed outside production.
    ALCHEMY_WEBHOOK_SECRET: str | None = None

    CORS_ORIGINS: list[str] = ["*"]

    PRICE_FEED_ENABLED: bool = False
    PRICE_FEED_URL: str = "https://api.coingecko.com/api/v3/simple/price"
    PRICE_FEED_TIMEOUT: float = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
