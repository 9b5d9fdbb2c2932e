from __future__ import annotations

import logging
import os
from pathlib import Path


def project_root() -> Path:
    # minigames/config.py -> minigames/ -> project root
    return Path(__file__).resolve().parents[1]


def load_env(env_path: Path | None = None) -> bool:
    """Load a `.env` file (repo root by default) without overriding real env vars."""

    path = env_path or project_root() / ".env"
    if not path.exists():
        return False

    from dotenv import load_dotenv

    return load_dotenv(dotenv_path=path, override=False)


def get_log_level() -> str:
    return os.environ.get("MINIGAMES_LOG_LEVEL", "INFO").upper()


def get_catalog_dir() -> Path:
    return Path(os.environ.get("MINIGAMES_CATALOG_DIR", str(project_root() / "games")))


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
