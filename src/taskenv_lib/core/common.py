# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the taskenv library.

This module provides helpers for YAML I/O, converting durations and timestamps
between their textual and Python representations, and sizing rich panels.
"""

import re
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path

import yaml
from rich.console import Console

from .constants import TIMESTAMP_LAYOUT, UTC_SUFFIX
from .error import SpecError, TaskEnvError
from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


@lru_cache(maxsize=1)
def load_yaml_raw_loader() -> type[yaml.BaseLoader]:
    """
    Return the fastest available YAML loader that performs no type resolution
    (CBaseLoader if possible). Every scalar is loaded as its source text.
    """
    try:
        from yaml import (
            CBaseLoader as BaseLoader,  # ty: ignore[possibly-missing-import]
        )

        logger.debug("Loaded YAML CBaseLoader.")
    except ImportError:
        from yaml import BaseLoader

        logger.debug("Loaded default YAML base loader.")

    return BaseLoader


def format_duration(td: timedelta) -> str:
    """
    Convert a timedelta into a compact string showing only relevant units.

    The output includes weeks, days, hours, minutes, and seconds, but omits
    units that are zero. Negative durations are prefixed with '-'.
    The result can be parsed back using `parse_duration`.

    Args:
        td (timedelta): The duration to format.

    Returns:
        str: A formatted string representing the duration, e.g., '1d2h3m4s' or '-1h'.
    """
    total_seconds = int(td.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)

    days_total, remainder = divmod(total_seconds, 86400)
    weeks, days = divmod(days_total, 7)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if weeks > 0:
        parts.append(f"{weeks}w")
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or total_seconds == 0:
        parts.append(f"{seconds}s")

    return sign + "".join(parts)


def parse_duration(raw: str | int) -> timedelta:
    """
    Convert a duration in the wdhms format into a timedelta.

    The accepted format is an optional sign followed by one or more
    integer + unit tokens, where unit is one of:
      w = weeks, d = days, h = hours, m = minutes, s = seconds

    Tokens may be compact (e.g. "1h30m") or space-separated (e.g. "1h 30m").
    An integer (or a string containing only an integer) is a number of seconds.

    Examples:
      "24h"  -> 1 day
      "-2h"  -> -2 hours
      "0"    -> 0 seconds
      3600   -> 1 hour

    Args:
        raw (str | int): Duration to parse.

    Returns:
        timedelta: The corresponding duration.

    Raises:
        TaskEnvError: If the value does not conform to the format.
    """
    if isinstance(raw, bool):
        raise TaskEnvError(f"Invalid duration '{raw}'.")

    if isinstance(raw, int):
        return timedelta(seconds=raw)

    if not isinstance(raw, str):
        raise TaskEnvError(f"Invalid duration '{raw}'.")

    if re.fullmatch(r"\s*[+-]?\d+\s*", raw):
        return timedelta(seconds=int(raw))

    full_pattern = re.compile(r"^\s*([+-])?\s*((?:\d+\s*[wdhms]\s*)+)$", re.IGNORECASE)
    match = full_pattern.fullmatch(raw)
    if not match:
        raise TaskEnvError(f"Invalid duration '{raw}'.")

    sign, body = match.groups()

    units = {"w": "weeks", "d": "days", "h": "hours", "m": "minutes", "s": "seconds"}
    kwargs = dict.fromkeys(units.values(), 0)
    for value_str, unit in re.findall(r"(\d+)\s*([wdhms])", body, re.IGNORECASE):
        kwargs[units[unit.lower()]] += int(value_str)

    duration = timedelta(**kwargs)
    return -duration if sign == "-" else duration


def format_timestamp(dt: datetime) -> str:
    """
    Format a datetime as an RFC 3339 timestamp with second precision.

    UTC (and naive datetimes, which are taken as UTC) is rendered with
    the 'Z' suffix; other offsets are rendered as '+HH:MM' or '-HH:MM'.

    Examples:
        2020-11-11 00:00:00+00:00 -> "2020-11-11T00:00:00Z"
        2020-11-11 07:00:00+07:00 -> "2020-11-11T07:00:00+07:00"
    """
    base = dt.strftime(TIMESTAMP_LAYOUT)

    offset = dt.utcoffset()
    if offset is None or offset == timedelta(0):
        return base + UTC_SUFFIX

    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{base}{sign}{hours:02}:{minutes:02}"


def parse_timestamp(raw: str) -> datetime:
    """
    Parse an RFC 3339 (ISO 8601) timestamp.

    Timestamps without an offset are taken as UTC.

    Args:
        raw (str): Timestamp to parse, e.g. "2020-11-11T00:00:00Z".

    Returns:
        datetime: Timezone-aware datetime.

    Raises:
        TaskEnvError: If the timestamp cannot be parsed.
    """
    try:
        dt = datetime.fromisoformat(raw.strip())
    except (ValueError, AttributeError) as e:
        raise TaskEnvError(f"Invalid timestamp '{raw}'.") from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
):
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """

    term_width = console.size.width
    panel_width = term_width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width


def read_yaml_mapping(file: Path) -> dict[str, object]:
    """
    Load a YAML file whose top-level node is a mapping.

    No type resolution is performed: every scalar is returned as the text
    written in the file (an empty value becomes an empty string), so
    values such as `12:30`, `0x1F` or `on` reach the caller unchanged.

    Args:
        file (Path): Path to the YAML file.

    Returns:
        dict[str, object]: The loaded mapping.

    Raises:
        SpecError: If the file does not exist, cannot be parsed,
            or does not contain a mapping.
    """
    logger.debug(f"Loading YAML from '{file}'.")
    if not file.is_file():
        raise SpecError(f"File '{file}' does not exist.")

    try:
        with file.open("r") as input:
            data = yaml.load(input, Loader=load_yaml_raw_loader())
    except yaml.YAMLError as e:
        raise SpecError(f"Could not parse the file '{file}': {e}.") from e
    except OSError as e:
        raise SpecError(f"Could not read the file '{file}': {e}.") from e

    if not isinstance(data, dict):
        raise SpecError(f"File '{file}' does not contain a mapping.")

    return data


def scalar_to_str(value: object) -> str:
    """
    Convert a scalar configuration value into its textual form.

    None becomes an empty string and booleans are written in lowercase.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
