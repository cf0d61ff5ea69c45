# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from enum import Enum
from typing import Self


class InstanceState(Enum):
    """
    Lifecycle state of a job instance.

    The state is tracked by the component running the instance;
    taskenv only carries it.
    """

    RUNNING = 1
    SUCCESS = 2
    FAILED = 3
    UNKNOWN = 4

    def __str__(self) -> str:
        """
        Return the lowercase string representation of the enum variant.

        Returns:
            str: The name of the state in lowercase.
        """
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding InstanceState enum variant.

        Args:
            s (str): String representation of the state (case-insensitive).

        Returns:
            InstanceState: Corresponding enum variant. Returns UNKNOWN if no match is found.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            return cls.UNKNOWN

    @property
    def isFinished(self) -> bool:
        """Return True if the instance is no longer running."""
        return self in (InstanceState.SUCCESS, InstanceState.FAILED)
