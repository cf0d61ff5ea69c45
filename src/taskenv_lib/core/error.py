# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout taskenv.

Every error raised while resolving a window, loading specs or generating
the runtime configuration of an instance derives from `TaskEnvError`.
All of them are fatal for the operation that raised them: no partial
result is ever returned.
"""

from taskenv_lib.core.config import CFG


class TaskEnvError(Exception):
    """Common exception type for all recoverable taskenv errors."""

    exit_code = CFG.exit_codes.default


class SpecError(TaskEnvError):
    """Raised when a project or job specification is malformed or cannot be read."""

    pass


class InvalidWindowPolicyError(TaskEnvError):
    """Raised when a window uses an unknown truncation unit or a negative size."""

    pass


class UnitNotFoundError(TaskEnvError):
    """Raised when the requested hook is not defined by the job exactly once."""

    pass


class UndefinedVariableError(TaskEnvError):
    """
    Raised when a template references a key that is not present in the context.

    Attributes:
        variable (str): Name of the missing key.
        entry (str): Description of the configuration entry or asset owning the template.
    """

    def __init__(self, variable: str, entry: str):
        self.variable = variable
        self.entry = entry
        super().__init__(f"Undefined variable '{variable}' referenced in {entry}.")


class TemplateSyntaxError(TaskEnvError):
    """
    Raised when a template cannot be parsed.

    Attributes:
        text (str): The offending raw template text.
        entry (str): Description of the configuration entry or asset owning the template.
    """

    def __init__(self, text: str, entry: str, reason: str):
        self.text = text
        self.entry = entry
        super().__init__(f"Malformed template in {entry}: {reason} in '{text}'.")
