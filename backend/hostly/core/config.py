# backend/hostly/core/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

from hostly import __version__

# 프로젝트 루트 기준으로 .env 로드
BASE_DIR = Path(__file__).resolve().parents[3]
env_path = BASE_DIR / ".env"
load_dotenv(dotenv_path=env_path)


def _get_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        # App
        self.APP_NAME: str = os.getenv("APP_NAME", "Hostly iCal Sync Backend")
        self.APP_VERSION: str = os.getenv("APP_VERSION", __version__)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _get_int("PORT", 3001, minimum=1)
        self.CORS_ORIGINS: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # iCal fetch
        self.ICAL_FETCH_TIMEOUT_SECONDS: float = _get_float("ICAL_FETCH_TIMEOUT_SECONDS", 10.0)
        self.ICAL_FETCH_MAX_ATTEMPTS: int = _get_int("ICAL_FETCH_MAX_ATTEMPTS", 3, minimum=1)
        self.ICAL_FETCH_BACKOFF_SECONDS: float = _get_float("ICAL_FETCH_BACKOFF_SECONDS", 1.0)

        # Scheduler
        self.SCHEDULER_ENABLED: bool = _get_bool("SCHEDULER_ENABLED", True)
        self.SYNC_CRON_MINUTE: int = _get_int("SYNC_CRON_MINUTE", 0)
        if self.SYNC_CRON_MINUTE > 59:
            raise ValueError(f"SYNC_CRON_MINUTE must be 0-59, got {self.SYNC_CRON_MINUTE}")


settings = Settings()
