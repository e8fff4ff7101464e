"""
HakooLab Configuration
======================
Environment-driven settings. A `.env` file in the working directory is
loaded first, real environment variables take precedence.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings for the API, persistence and formatting."""
    database_url: str = field(
        default_factory=lambda: os.getenv("HAKOOLAB_DATABASE_URL", "sqlite:///./hakoolab.db")
    )
    log_level: str = field(default_factory=lambda: os.getenv("HAKOOLAB_LOG_LEVEL", "INFO").upper())
    log_to_file: bool = field(default_factory=lambda: _env_bool("HAKOOLAB_LOG_TO_FILE"))
    log_dir: str = field(default_factory=lambda: os.getenv("HAKOOLAB_LOG_DIR", "logs"))
    locale: str = field(default_factory=lambda: os.getenv("HAKOOLAB_LOCALE", "en"))
    history_limit: int = field(default_factory=lambda: int(os.getenv("HAKOOLAB_HISTORY_LIMIT", "200")))
    cors_origins: List[str] = field(
        default_factory=lambda: _env_list(
            "HAKOOLAB_CORS_ORIGINS", "http://localhost:8081,http://localhost:19006"
        )
    )
    host: str = field(default_factory=lambda: os.getenv("HAKOOLAB_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("HAKOOLAB_PORT", "8000")))


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
