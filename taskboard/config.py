from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import os

from dotenv import load_dotenv

# Load environment variables from repo root and the package directory (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path(__file__).resolve().parent / ".env")

DEFAULT_DATABASE_URL = "sqlite:///./tasks.db"
DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    static_dir: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Read the service settings from the environment."""
    cors_origins = os.getenv("CORS_ORIGINS")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        cors_origins=_split_origins(cors_origins) if cors_origins is not None else DEFAULT_CORS_ORIGINS,
        static_dir=os.getenv("STATIC_DIR", "").strip() or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", "").strip() or None,
    )
