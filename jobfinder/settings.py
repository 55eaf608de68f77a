from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DB_URL: str = "sqlite:///./jobs.db"
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT: float = 20.0
    USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/125.0 Safari/537.36"
    )
    ACCEPT: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    ACCEPT_LANGUAGE: str = "en-MY,en;q=0.9"
    # Seconds to wait between live keyword requests, per platform
    REQUEST_DELAYS: dict[str, float] = {
    "jobstreet": 0.5, "linkedin": 0.5, "hiredly": 0.6, "indeed": 0.75,
    }
    DESCRIPTION_MAX_LENGTH: int = 2000
    # Without a key the LinkedIn adapter runs in fallback-only mode
    LINKEDIN_RAPIDAPI_KEY: Optional[str] = None
    # Overrides the location of every search when set
    FORCE_LOCATION: Optional[str] = None
    LIST_DEFAULT_LIMIT: int = 20
    LIST_MAX_LIMIT: int = 100


settings = Settings()
