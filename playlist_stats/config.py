from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from playlist_stats.errors import ConfigError

logger = logging.getLogger(__name__)

_ENV_FILENAME = ".env"
_KEY_NAME = "YOUTUBE_API_KEY"
_MAX_PAGES_NAME = "PLAYLIST_STATS_MAX_PAGES"
_APP_DIR = "playlist-stats"

DEFAULT_PLAYLIST_ID = "PLOU2XLYxmsIIuiBfYad6rFYQU_jL2ryal"
TITLE_WIDTH = 70


def get_api_key() -> str:
    """
    Returns the YouTube API key.

    Lookup order:
      1) Real environment variable: YOUTUBE_API_KEY
      2) Repo-local .env (dev convenience)
      3) Per-user config file
    """
    key = os.getenv(_KEY_NAME)
    if key:
        return key

    _load_dotenv_if_present()
    key = os.getenv(_KEY_NAME)
    if key:
        return key

    _load_user_config_if_present()
    key = os.getenv(_KEY_NAME)
    if key:
        return key

    raise ConfigError(
        f"{_KEY_NAME} not set.\n"
        "Set it in your environment, run `playlist-stats set-key KEY`, or create a config file:\n\n"
        f"  {user_config_path()}\n"
        f"  {_KEY_NAME}=YOUR_KEY_HERE\n"
    )


def save_api_key(key: str) -> Path:
    """
    Saves the API key to the per-user config file and returns its path.
    Does NOT modify the process environment.
    """
    key = (key or "").strip()
    if not key:
        raise ConfigError("refusing to save an empty API key")

    path = user_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    # Simple KEY=VALUE format (like .env)
    path.write_text(f"{_KEY_NAME}={key}\n", encoding="utf-8")
    return path


def get_max_pages() -> Optional[int]:
    """Optional page cap from PLAYLIST_STATS_MAX_PAGES; None means no cap."""
    raw = (os.getenv(_MAX_PAGES_NAME) or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{_MAX_PAGES_NAME} must be a positive integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{_MAX_PAGES_NAME} must be a positive integer, got {raw!r}")
    return value


def _load_dotenv_if_present() -> None:
    env_path = _find_repo_root() / _ENV_FILENAME
    if not env_path.exists():
        return
    _load_env_file(env_path)


def _load_user_config_if_present() -> None:
    path = user_config_path()
    if not path.exists():
        return
    _load_env_file(path)


def _load_env_file(path: Path) -> None:
    """
    Loads KEY=VALUE lines into os.environ via setdefault (won't override real env vars).
    """
    logger.debug("loading settings from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("could not read %s: %s", path, exc)
        return

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")  # allow quoted values
        if not k:
            continue

        os.environ.setdefault(k, v)


def user_config_path() -> Path:
    """
    %APPDATA%\\playlist-stats\\config.env on Windows
    ~/.config/playlist-stats/config.env on macOS/Linux
    """
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / _APP_DIR / "config.env"
    return Path.home() / ".config" / _APP_DIR / "config.env"


def _find_repo_root() -> Path:
    """
    Finds the repo root by walking upward until we see main.py or .git.
    Falls back to current working directory.
    """
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "main.py").exists() or (p / ".git").exists():
            return p
    return cwd
