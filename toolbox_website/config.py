"""Project configuration and paths."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project structure
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent
DATA_DIR = PACKAGE_ROOT / "data"
TOOLS_DATA_DIR = DATA_DIR / "tools"
STATIC_DIR = PACKAGE_ROOT / "static"

SITE_NAME = "Toolbox"
DEFAULT_SERVICE_URL = "https://toolbox.example.com"


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def base_path() -> str:
    """Path prefix for subdirectory deployment."""
    return os.getenv("BASE_PATH", "").rstrip("/")


def service_url() -> str:
    return os.getenv("SERVICE_URL_WEB", f"{DEFAULT_SERVICE_URL}{base_path()}").rstrip("/")


def web_port() -> int:
    return int(os.getenv("WEB_PORT", "8000"))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")


def storage_backend() -> str:
    return os.getenv("TOOLBOX_STORAGE_BACKEND", "local").lower()


def favorites_data_dir() -> Path:
    return Path(os.getenv("TOOLBOX_DATA_DIR", "dev_cache")) / "favorites"


def preload_enabled() -> bool:
    return _flag("TOOLBOX_PRELOAD", True)


def strict_catalog() -> bool:
    return _flag("TOOLBOX_STRICT_CATALOG", False)


def session_key() -> str | None:
    return os.getenv("TOOLBOX_SESSION_KEY") or None
