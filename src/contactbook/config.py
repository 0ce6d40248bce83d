"""Settings from the environment. A .env file in the repo root or cwd is loaded first."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TOKEN_PATH = "~/.contactbook/session.json"


def _repo_root() -> Path:
    """Return repo root (parent of src)."""
    return Path(__file__).resolve().parent.parent.parent


def load_env() -> None:
    """Load .env from repo root or current dir, first one found."""
    for path in (_repo_root() / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


@dataclass(frozen=True)
class Settings:
    api_url: str
    token_path: Path
    log_level: str


def get_settings() -> Settings:
    load_env()
    api_url = os.environ.get("CONTACTBOOK_API_URL", "").strip() or DEFAULT_API_URL
    token_path = os.environ.get("CONTACTBOOK_TOKEN_PATH", "").strip() or DEFAULT_TOKEN_PATH
    log_level = os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO"
    return Settings(
        api_url=api_url.rstrip("/"),
        token_path=Path(token_path).expanduser(),
        log_level=log_level,
    )
