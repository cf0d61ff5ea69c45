# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Data windows of job instances.

A window policy describes which interval of data an instance processes,
relative to the instance's scheduled time:

    end   = truncate(scheduled_at, truncate_to) + offset
    start = end - size

Truncation rounds down to the start of the enclosing hour, day, ISO week
(Monday) or month, using wall-clock time in the timezone of `scheduled_at`.
Offset and size are then applied as elapsed time, so a window spanning
a daylight saving transition keeps its length.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Self

from taskenv_lib.core.common import format_duration, parse_duration
from taskenv_lib.core.error import InvalidWindowPolicyError, TaskEnvError
from taskenv_lib.core.logger import get_logger

logger = get_logger(__name__)


class TruncateTo(Enum):
    """
    Granularity to which the scheduled time is truncated.
    """

    NONE = 0
    HOUR = 1
    DAY = 2
    WEEK = 3
    MONTH = 4

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str | None) -> Self:
        """
        Convert a granularity tag to the corresponding TruncateTo variant.

        Supported tags (case-insensitive):
        - "" or "none" - NONE
        - "h" or "hour" - HOUR
        - "d" or "day" - DAY
        - "w" or "week" - WEEK
        - "m" or "month" - MONTH

        Args:
            s (str | None): The tag. None is the same as an empty string.

        Returns:
            TruncateTo: Corresponding enum variant.

        Raises:
            InvalidWindowPolicyError: If the tag is not recognized.
        """
        match (s or "").strip().lower():
            case "" | "none":
                return cls.NONE
            case "h" | "hour":
                return cls.HOUR
            case "d" | "day":
                return cls.DAY
            case "w" | "week":
                return cls.WEEK
            case "m" | "month":
                return cls.MONTH

        raise InvalidWindowPolicyError(f"Unknown window truncation unit '{s}'.")

    def truncate(self, dt: datetime) -> datetime:
        """
        Round a datetime down to the start of the enclosing unit.

        Timezone information of `dt` is kept.
        """
        match self:
            case TruncateTo.NONE:
                return dt
            case TruncateTo.HOUR:
                return dt.replace(minute=0, second=0, microsecond=0)
            case TruncateTo.DAY:
                return dt.replace(hour=0, minute=0, second=0, microsecond=0)
            case TruncateTo.WEEK:
                day = dt.replace(hour=0, minute=0, second=0, microsecond=0)
                return day - timedelta(days=day.weekday())
            case TruncateTo.MONTH:
                return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        raise InvalidWindowPolicyError(
            f"Unknown window truncation unit '{self}'. This is a bug; please report it."
        )


@dataclass(frozen=True)
class Window:
    """
    Window policy of a job task.

    Attributes:
        size (timedelta): Length of the window. Must not be negative.
        offset (timedelta): Shift applied to the truncated scheduled time. May be negative.
        truncate_to (str): Granularity tag, see `TruncateTo.fromStr`.
    """

    size: timedelta = timedelta(0)
    offset: timedelta = timedelta(0)
    truncate_to: str = "d"

    @classmethod
    def fromDict(cls, data: dict[str, object]) -> Self:
        """
        Construct a window policy from a mapping of a job specification file.

        Recognized keys are `size`, `offset` and `truncate_to`; durations use
        the format accepted by `parse_duration`.

        Raises:
            InvalidWindowPolicyError: If a duration cannot be parsed.
        """
        defaults = cls()
        try:
            size = (
                parse_duration(data["size"])  # ty: ignore[invalid-argument-type]
                if data.get("size") not in (None, "")
                else defaults.size
            )
            offset = (
                parse_duration(data["offset"])  # ty: ignore[invalid-argument-type]
                if data.get("offset") not in (None, "")
                else defaults.offset
            )
        except TaskEnvError as e:
            raise InvalidWindowPolicyError(f"Invalid window: {e}") from e

        truncate_to = data.get("truncate_to", defaults.truncate_to)
        return cls(size=size, offset=offset, truncate_to=str(truncate_to or ""))

    def toDict(self) -> dict[str, str]:
        """Return the policy in the format of job specification files."""
        return {
            "size": format_duration(self.size),
            "offset": format_duration(self.offset),
            "truncate_to": self.truncate_to,
        }

    def resolve(self, scheduled_at: datetime) -> tuple[datetime, datetime]:
        """
        Compute the window of an instance scheduled at the given time.

        Args:
            scheduled_at (datetime): Scheduled time of the instance.

        Returns:
            tuple[datetime, datetime]: The start and the end of the window (start <= end).

        Raises:
            InvalidWindowPolicyError: If the truncation unit is unknown or the size is negative.
        """
        if self.size < timedelta(0):
            raise InvalidWindowPolicyError(
                f"Window size ({format_duration(self.size)}) cannot be negative."
            )

        anchor = TruncateTo.fromStr(self.truncate_to).truncate(scheduled_at)

        if anchor.tzinfo is None:
            end = anchor + self.offset
            start = end - self.size
        else:
            # offset and size are elapsed time, not wall-clock time
            anchor_utc = anchor.astimezone(timezone.utc)
            end = (anchor_utc + self.offset).astimezone(anchor.tzinfo)
            start = (anchor_utc + self.offset - self.size).astimezone(anchor.tzinfo)

        logger.debug(f"Resolved window for '{scheduled_at}': [{start}, {end}).")
        return start, end

    def getStart(self, scheduled_at: datetime) -> datetime:
        """Return the start of the window of an instance scheduled at the given time."""
        return self.resolve(scheduled_at)[0]

    def getEnd(self, scheduled_at: datetime) -> datetime:
        """Return the end of the window of an instance scheduled at the given time."""
        return self.resolve(scheduled_at)[1]


def resolve_window(
    scheduled_at: datetime, window: Window
) -> tuple[datetime, datetime]:
    """
    Compute the (start, end) window of an instance scheduled at `scheduled_at`.

    See `Window.resolve`.
    """
    return window.resolve(scheduled_at)
