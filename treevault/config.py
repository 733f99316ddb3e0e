"""Client configuration

Values come from environment variables prefixed with ``TREEVAULT_`` or from
a local ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Connection and logging settings.

    - api_url: base URL of the tree service
    - api_token: sent as X-API-Token when not empty
    - request_timeout / connect_timeout: seconds, passed to httpx
    - log_dir: when set, logs are also written to ``treevault.log`` there
    """

    api_url: str = "http://localhost:8080"
    api_token: str = ""

    request_timeout: float = 60.0
    connect_timeout: float = 10.0

    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    class Config:
        env_prefix = "TREEVAULT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
