"""
config.py – centralised env-var handling
=======================================

• Loads the first `.env` file it finds (cwd or /app) exactly **once**.
• `env(key, default=None, cast=None)` reads one variable with automatic
  type-casting (int, float, bool).
• `env_list(key, default)` splits a comma-separated variable, dropping blanks.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

# ───── locate & load .env (first one wins) ────────────────────────────
for candidate in (Path.cwd() / ".env", Path("/app/.env")):
    if candidate.is_file():
        load_dotenv(dotenv_path=candidate, override=False)
        break


def env(key: str, default: Any = None, cast: Optional[type] = None) -> Any:
    """Return `os.environ[key]` cast to `cast`, or `default` when unset/invalid."""
    val = os.getenv(key)
    if val is None or val == "":
        return default
    if cast is None:
        return val
    try:
        if cast is bool:
            return val.strip().lower() in ("1", "true", "yes", "y")
        return cast(val)
    except (ValueError, TypeError):
        return default


def env_list(key: str, default: str = "") -> List[str]:
    raw = os.getenv(key) or default
    return [s.strip() for s in raw.split(",") if s.strip()]


__all__ = ["env", "env_list"]
