from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "properties.json"
_DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:5174,http://localhost:3000"

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class ServiceConfig:
    data_path: Path = Path(os.getenv("LISTINGS_DATA_PATH", str(_DEFAULT_DATA_PATH)))
    reload_per_request: bool = os.getenv("LISTINGS_RELOAD_PER_REQUEST", "1") == "1"
    environment: str = os.getenv("APP_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: tuple[str, ...] = _split_origins(os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS))
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


DEFAULT_SERVICE_CONFIG = ServiceConfig()


def configure_logging(level: str = DEFAULT_SERVICE_CONFIG.log_level) -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level.upper(), logging.INFO),
    )
