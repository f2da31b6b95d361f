"""Service settings, read from the environment (and an optional ``.env``)."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Credentials
    jwt_secret: SecretStr = Field(default=SecretStr("dev-only-secret-change-me-in-production"), alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    token_ttl_seconds: int = Field(default=3600, gt=0, alias="TOKEN_TTL_SECONDS")
    password_hash_rounds: int = Field(default=12, ge=4, le=31, alias="PASSWORD_HASH_ROUNDS")

    # Collaborator deadlines
    auth_timeout_seconds: float = Field(default=2.0, gt=0, alias="AUTH_TIMEOUT_SECONDS")
    catalog_timeout_seconds: float = Field(default=2.0, gt=0, alias="CATALOG_TIMEOUT_SECONDS")
    store_timeout_seconds: float = Field(default=5.0, gt=0, alias="STORE_TIMEOUT_SECONDS")

    # Cart storage
    cart_store: Literal["memory", "sql"] = Field(default="memory", alias="CART_STORE")
    database_url: str = Field(default="sqlite:///shopcart.db", alias="DATABASE_URL")
    append_max_retries: int = Field(default=3, ge=0, alias="APPEND_MAX_RETRIES")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()
