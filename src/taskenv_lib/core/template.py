# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Field-lookup macro templates.

Configuration values and assets may contain placeholders of the form
`{{.NAME}}` (whitespace inside the braces is allowed, e.g. `{{ .NAME }}`).
Each placeholder is replaced by the value stored under NAME in the
resolution context. Text outside of placeholders is copied verbatim.

Templates are parsed once when a `MacroTemplate` is created, so syntax
errors are reported before any lookup is attempted.
"""

import re
from collections.abc import Mapping

from .error import TemplateSyntaxError, UndefinedVariableError
from .logger import get_logger

logger = get_logger(__name__)

# Opening and closing delimiters of an action.
_OPEN = "{{"
_CLOSE = "}}"

# Body of an action containing a single field lookup.
_FIELD_PATTERN = re.compile(r"\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*")


class MacroTemplate:
    """
    A parsed macro template.

    The template is stored as a sequence of segments: literal strings and
    field names. Rendering concatenates literals with looked-up values.
    """

    def __init__(self, text: str, entry: str = "template"):
        """
        Parse the template text.

        Args:
            text (str): Raw template text.
            entry (str): Human-readable description of the owner of the template
                (e.g. "task config 'BUCKET'"). Used in error messages.

        Raises:
            TemplateSyntaxError: If an action is not closed or its body is not
                a single field lookup.
        """
        self._text = text
        self._entry = entry
        # list of (is_field, value) pairs
        self._segments: list[tuple[bool, str]] = self._parse(text)

    @property
    def text(self) -> str:
        """Raw text of the template."""
        return self._text

    @property
    def fields(self) -> list[str]:
        """Names of the fields referenced by the template, in order of appearance."""
        return [value for is_field, value in self._segments if is_field]

    def isLiteral(self) -> bool:
        """Return True if the template contains no placeholders."""
        return not self.fields

    def render(self, context: Mapping[str, str]) -> str:
        """
        Render the template against a context.

        Args:
            context (Mapping[str, str]): Values available to the template.

        Returns:
            str: The rendered text.

        Raises:
            UndefinedVariableError: If a referenced field is missing from the context.
        """
        parts = []
        for is_field, value in self._segments:
            if not is_field:
                parts.append(value)
                continue

            try:
                parts.append(context[value])
            except KeyError as e:
                raise UndefinedVariableError(value, self._entry) from e

        return "".join(parts)

    def _parse(self, text: str) -> list[tuple[bool, str]]:
        segments: list[tuple[bool, str]] = []
        position = 0

        while (start := text.find(_OPEN, position)) != -1:
            if start > position:
                segments.append((False, text[position:start]))

            end = text.find(_CLOSE, start + len(_OPEN))
            if end == -1:
                raise TemplateSyntaxError(text, self._entry, "unclosed action")

            body = text[start + len(_OPEN) : end]
            match = _FIELD_PATTERN.fullmatch(body)
            if not match:
                raise TemplateSyntaxError(
                    text, self._entry, f"unsupported action '{_OPEN}{body}{_CLOSE}'"
                )

            segments.append((True, match.group(1)))
            position = end + len(_CLOSE)

        if position < len(text):
            segments.append((False, text[position:]))

        return segments


def render(text: str, context: Mapping[str, str], entry: str = "template") -> str:
    """
    Parse and render a template in one step.

    Args:
        text (str): Raw template text.
        context (Mapping[str, str]): Values available to the template.
        entry (str): Description of the owner of the template, used in error messages.

    Returns:
        str: The rendered text.

    Raises:
        TemplateSyntaxError: If the template is malformed.
        UndefinedVariableError: If a referenced field is missing from the context.
    """
    template = MacroTemplate(text, entry)
    if template.isLiteral():
        return text

    rendered = template.render(context)
    logger.debug(f"Rendered {entry}: '{text}' -> '{rendered}'.")
    return rendered
