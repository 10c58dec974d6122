import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_TMP = Path(tempfile.gettempdir())


class Settings(BaseSettings):
    # Site
    BASE_URL: str = "https://www.wordreference.com"
    USER_AGENT: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    )
    REQUEST_TIMEOUT: float = 10.0

    # Cache
    CACHE_PATH: Path = _TMP / "wordref_cache.db"

    # Interface
    DEFAULT_LANGUAGE: str = "french"
    TICK_RATE_MS: int = 250
    INPUT_QUEUE_SIZE: int = 512
    LOOKUP_QUEUE_SIZE: int = 100
    EXPECTED_LOOKUP_SECONDS: float = 2.0  # Only drives the progress bar estimate

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for structured JSON lines, False for plain console lines
    LOG_SQL: bool = False   # Enable SQLAlchemy query logging
    LOG_FILE: Path = _TMP / "wordref.log"  # The terminal belongs to the UI

    @property
    def tick_rate(self) -> float:
        return self.TICK_RATE_MS / 1000

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
