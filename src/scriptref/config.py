"""Configuration settings for scriptref."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

CATALOG_ENV_VAR = "SCRIPTREF_CATALOG_PATH"
LOG_LEVEL_ENV_VAR = "SCRIPTREF_LOG_LEVEL"
OUTPUT_FORMAT_ENV_VAR = "SCRIPTREF_OUTPUT_FORMAT"


def _default_catalog_path() -> Path:
    override = os.environ.get(CATALOG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent / "catalog" / "books.yaml"


@dataclass
class Settings:
    """Application settings."""

    # Catalog
    catalog_path: Path = field(default_factory=_default_catalog_path)

    # Logging
    log_level: str = field(
        default_factory=lambda: os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    )

    # CLI output: "table" or "json"
    output_format: str = field(
        default_factory=lambda: os.environ.get(OUTPUT_FORMAT_ENV_VAR, "table").lower()
    )
