"""Centralised settings for the jcrpack packager.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Site / package identity
    # ------------------------------------------------------------------
    site: str = field(default_factory=lambda: os.environ.get("JCR_SITE", ""))
    package_group: str = field(
        default_factory=lambda: os.environ.get("JCR_PACKAGE_GROUP", "my_packages")
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("JCR_OUTPUT_DIR", "jcr-output"))
    )

    # ------------------------------------------------------------------
    # Asset retrieval
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "JCR_USER_AGENT", "Mozilla/5.0 (compatible; jcrpack/0.1)"
        )
    )
    annotate_external: bool = field(
        default_factory=lambda: _env_flag("JCR_ANNOTATE_EXTERNAL", "true")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("JCR_LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from jcrpack.config import settings
settings = Settings()
