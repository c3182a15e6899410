"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "GrandmasAgenda"
APP_AUTHOR = "GrandmasAgenda"


def get_data_dir() -> Path:
    """Return the directory holding the user's schedule.json and agenda.log."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_schedule_path() -> Path:
    return get_data_dir() / "schedule.json"


def get_log_path() -> Path:
    return get_data_dir() / "agenda.log"
