"""Runtime settings, read from the environment.

A ``.env`` file in the working directory is loaded first, so local
overrides never need to be exported by hand.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    sql_echo: bool = False


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=os.getenv(
            "BACKOFFICE_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'backoffice.db'}"
        ),
        log_level=os.getenv("BACKOFFICE_LOG_LEVEL", "INFO").upper(),
        sql_echo=os.getenv("BACKOFFICE_SQL_ECHO", "").strip().lower() in _TRUE,
    )
