from __future__ import annotations

import os
import sys
from pathlib import Path


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))


def base_path() -> Path:
    """Return the base path for bundled resources (fonts, logos).

    - In a PyInstaller bundle, resources are extracted to sys._MEIPASS.
    - In dev, use the repository root.
    """
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass)
    return Path(__file__).resolve().parents[2]


def resource_path(rel: str | Path) -> Path:
    """Resolve a resource path (e.g., 'assets/logo.png') for current runtime."""
    return base_path() / Path(rel)


def user_writable_dir() -> Path:
    """Directory for user-writable files (settings.json, invoicer.db).

    INVOICER_HOME wins when set; bundled builds use the executable's folder,
    dev checkouts the repository root.
    """
    override = os.environ.get("INVOICER_HOME")
    if override:
        return Path(override)
    if is_frozen():
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def settings_path() -> Path:
    return user_writable_dir() / "settings.json"


def database_path() -> Path:
    return user_writable_dir() / "invoicer.db"


def default_output_dir() -> Path:
    """Where generated PDFs go when settings name no output_dir."""
    return user_writable_dir() / "invoices"
