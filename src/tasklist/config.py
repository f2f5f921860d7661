#!/usr/bin/env python3
"""
Settings for the task list: data file location and reference time zone.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomllib

CONFIG_PATH_ENV = "TASKLIST_CONFIG_PATH"
DATA_PATH_ENV = "TASKLIST_PATH"
UTC_OFFSET_ENV = "TASKLIST_UTC_OFFSET"

DEFAULT_DATA_PATH = Path("tasklist.json")
DEFAULT_UTC_OFFSET = "-8"

_HOURS_RE = re.compile(r"^[+-]?\d{1,2}(\.\d+)?$", re.ASCII)
_CLOCK_RE = re.compile(r"^([+-]?)(\d{1,2}):(\d{2})$", re.ASCII)


@dataclass(frozen=True)
class Settings:
    """
    Resolved task list settings.

    Attributes
    ----------
    data_path : Path
        JSON file holding the task list.
    utc_offset : timedelta
        Fixed offset of the zone that defines "today" for due marks.
    """

    data_path: Path
    utc_offset: timedelta


def _expand_path(value: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(value)))


def get_config_path() -> Path:
    """
    Return the settings file path.

    Returns
    -------
    Path
        TOML settings path.

    Examples
    --------
    >>> isinstance(get_config_path(), Path)
    True
    """
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return _expand_path(override)
    return Path.home() / ".config" / "tasklist" / "config.toml"


def parse_utc_offset(value: Union[str, int, float]) -> timedelta:
    """
    Parse a fixed UTC offset.

    Parameters
    ----------
    value : Union[str, int, float]
        Offset in hours (``-8``, ``5.5``) or clock form (``+05:30``),
        optionally prefixed with ``UTC`` or ``GMT``.

    Returns
    -------
    timedelta
        Offset from UTC.

    Raises
    ------
    ValueError
        If the value is malformed or not strictly within 24 hours.

    Examples
    --------
    >>> parse_utc_offset("-8")
    datetime.timedelta(days=-1, seconds=57600)
    >>> parse_utc_offset("UTC+05:30")
    datetime.timedelta(seconds=19800)
    >>> parse_utc_offset("UTC")
    datetime.timedelta(0)
    >>> parse_utc_offset(9)
    datetime.timedelta(seconds=32400)
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid UTC offset: {value!r}")
    if isinstance(value, (int, float)):
        offset = timedelta(hours=value)
    else:
        text = str(value).strip()
        if text[:3].upper() in {"UTC", "GMT"}:
            text = text[3:].strip()
        if not text:
            return timedelta(0)
        clock = _CLOCK_RE.match(text)
        if clock:
            sign, hours, minutes = clock.groups()
            if int(minutes) > 59:
                raise ValueError(f"Invalid UTC offset: {value!r}")
            offset = timedelta(hours=int(hours), minutes=int(minutes))
            if sign == "-":
                offset = -offset
        elif _HOURS_RE.match(text):
            offset = timedelta(hours=float(text))
        else:
            raise ValueError(f"Invalid UTC offset: {value!r}")
    if abs(offset) >= timedelta(hours=24):
        raise ValueError(f"UTC offset out of range: {value!r}")
    return offset


def today_in_zone(offset: timedelta, now: Optional[datetime] = None) -> date:
    """
    Return the calendar date in a fixed-offset zone.

    Parameters
    ----------
    offset : timedelta
        Offset of the reference zone from UTC.
    now : Optional[datetime], optional
        Override for the current instant; naive values are read as UTC.

    Returns
    -------
    date
        Current date in the reference zone.

    Examples
    --------
    >>> instant = datetime(2024, 3, 2, 5, 0, tzinfo=timezone.utc)
    >>> today_in_zone(timedelta(hours=-8), now=instant)
    datetime.date(2024, 3, 1)
    >>> today_in_zone(timedelta(0), now=datetime(2024, 3, 2, 5, 0))
    datetime.date(2024, 3, 2)
    """
    zone = timezone(offset)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone).date()


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read the TOML settings file.

    Parameters
    ----------
    path : Optional[Path], optional
        Settings file path (defaults to the standard path).

    Returns
    -------
    Dict[str, Any]
        Parsed table, or an empty dict when the file is missing or unreadable.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}
    try:
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def load_settings(
    *,
    data_path: Optional[Path] = None,
    utc_offset: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """
    Resolve settings from arguments, environment and the settings file.

    Arguments win over environment variables, which win over the file.

    Parameters
    ----------
    data_path : Optional[Path], optional
        Explicit data file path.
    utc_offset : Optional[str], optional
        Explicit reference offset.
    config_path : Optional[Path], optional
        Settings file override.

    Returns
    -------
    Settings
        Resolved settings.

    Raises
    ------
    ValueError
        If the resolved UTC offset is invalid.
    """
    file_values = load_config_file(config_path)

    if data_path is None:
        env_path = os.environ.get(DATA_PATH_ENV, "").strip()
        if env_path:
            data_path = _expand_path(env_path)
        elif file_values.get("data_path"):
            data_path = _expand_path(str(file_values["data_path"]))
        else:
            data_path = DEFAULT_DATA_PATH

    offset_value: Union[str, int, float]
    if utc_offset is not None:
        offset_value = utc_offset
    elif os.environ.get(UTC_OFFSET_ENV, "").strip():
        offset_value = os.environ[UTC_OFFSET_ENV]
    elif "utc_offset" in file_values:
        offset_value = file_values["utc_offset"]
    else:
        offset_value = DEFAULT_UTC_OFFSET

    return Settings(data_path=Path(data_path), utc_offset=parse_utc_offset(offset_value))
