"""Platform-aware user configuration and data directories.

Resolves the user config directory for jobrank:
  - Windows:  %APPDATA%\\jobrank
  - macOS:    ~/Library/Application Support/jobrank
  - Linux:    $XDG_CONFIG_HOME/jobrank  (default ~/.config/jobrank)

Saved progress lives in the data directory, which on Linux follows
$XDG_DATA_HOME (default ~/.local/share/jobrank) and elsewhere is the
config directory itself.
"""

import os
import platform
from pathlib import Path

STATE_FILENAME = "progress.json"


def get_config_dir() -> Path:
    """Return the platform-appropriate user config directory."""
    system = platform.system()
    if system == "Windows":
        base = Path.home() / "AppData" / "Roaming"
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "jobrank"


def get_data_dir() -> Path:
    """Return the directory holding saved comparison progress."""
    if platform.system() in ("Windows", "Darwin"):
        return get_config_dir()
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "jobrank"


def get_state_path() -> Path:
    """Return the default snapshot file path."""
    return get_data_dir() / STATE_FILENAME


def get_env_path() -> Path:
    """Return the user-level .env file path."""
    return get_config_dir() / ".env"


def ensure_dirs() -> Path:
    """Create the config and data directories. Returns config dir."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
    return config_dir


def find_config(explicit_path: Path | None = None) -> Path | None:
    """Find the config file using resolution order.

    1. Explicit path (raises FileNotFoundError if missing)
    2. ./config.yaml (project-local, for development)
    3. User config dir config.yaml
    4. None (caller should use defaults)
    """
    if explicit_path is not None:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path

    local = Path("config.yaml")
    if local.exists():
        return local

    user_cfg = get_config_dir() / "config.yaml"
    if user_cfg.exists():
        return user_cfg

    return None


def find_catalog() -> Path | None:
    """Find a catalog file when none is configured.

    1. ./catalog.json (project-local, for development)
    2. User config dir catalog.json
    3. None
    """
    local = Path("catalog.json")
    if local.exists():
        return local
    user_catalog = get_config_dir() / "catalog.json"
    if user_catalog.exists():
        return user_catalog
    return None
