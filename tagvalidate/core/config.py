from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Validation
    TAG_KEY: str = "validate"
    VALIDATION_MODE: Literal["fail_fast", "collect_all"] = "collect_all"
    MAX_ERRORS: int = Field(50, ge=1)
    SEAL_REGISTRY_ON_FIRST_PASS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    class Config:
        env_prefix = "TAGVALIDATE_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
