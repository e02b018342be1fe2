from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Inventory Management API"
    ENV: str = "dev"
    PORT: int = 3001

    # DATABASE_URL wins; otherwise the DB_* parts are assembled
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "inventory"
    DB_PASSWORD: str = "inventory"
    DB_NAME: str = "inventory"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Server policy: refuse products without a supplier
    REQUIRE_SUPPLIER_ID: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    JWT_SECRET: str = "change_me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AUTH_REQUIRED: bool = False

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() in {"prod", "production"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
