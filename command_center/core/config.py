from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "GTM Command Center"
    APP_VERSION: str = "0.1.0"
    APP_ENV: str = "production"
    API_V1_PREFIX: str = "/api/v1"

    # Shared secret for machine callers of the agent endpoints
    AGENT_API_KEY: SecretStr | None = None

    DISPATCH_TIMEOUT_MULTIPLIER: float = Field(default=3.0, gt=0)
    DISPATCH_TIMEOUT_CEILING_MS: int = Field(default=30_000, gt=0)
    MAX_FOLLOW_UPS: int = Field(default=4, ge=1)

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DISCOVERY: str = "60/minute"
    RATE_LIMIT_DISPATCH: str = "120/minute"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
