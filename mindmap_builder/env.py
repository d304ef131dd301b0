"""Environment loading helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def load_env(env_path: Path | None = None, override: bool = False) -> bool:
    """Load environment variables from a .env file via python-dotenv."""
    env_file_override = os.getenv("MINDMAP_ENV_FILE", "").strip()
    if env_path is not None:
        target_path = env_path
    elif env_file_override:
        target_path = Path(env_file_override)
    else:
        target_path = Path.cwd() / ".env"

    if not target_path.is_file():
        return False
    return bool(load_dotenv(dotenv_path=target_path, override=override))
