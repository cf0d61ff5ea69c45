# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumerations describing what an instance runs and what data it receives.

`InstanceType` distinguishes the job's main task (transformation) from
one of its hooks. `InstanceDataType` distinguishes instance data passed as
environment variables from data passed as files.
"""

from enum import Enum
from typing import Self

from taskenv_lib.core.error import TaskEnvError


class InstanceType(Enum):
    """
    Type of the execution unit an instance configuration is generated for.
    """

    TRANSFORMATION = 1
    HOOK = 2

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding InstanceType enum variant.

        Args:
            s (str): String representation of the instance type (case-insensitive).

        Returns:
            InstanceType variant.

        Raises:
            TaskEnvError if the string corresponds to no InstanceType.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise TaskEnvError(f"Could not recognize an instance type '{s}'.")


class InstanceDataType(Enum):
    """
    Kind of a precomputed instance data entry.
    """

    ENV = 1
    FILE = 2

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding InstanceDataType enum variant.

        Raises:
            TaskEnvError if the string corresponds to no InstanceDataType.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise TaskEnvError(f"Could not recognize an instance data type '{s}'.")
