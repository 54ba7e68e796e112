"""
Exception hierarchy for messagebox.
"""

from __future__ import annotations


class MessageBoxError(Exception):
    """Base error for messagebox failures."""


class MessagesNotFoundError(MessageBoxError, LookupError):
    """Raised when neither the instance nor the defaults hold a language."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f'No messages found for language "{language}"')


class MarkerConfigurationError(MessageBoxError, ValueError):
    """Raised when a marker pattern is invalid."""


class TemplateError(MessageBoxError):
    """Base error for template compilation and rendering."""


class TemplateSyntaxError(TemplateError):
    """
    Raised by the compiler for malformed templates.

    ``position`` is the offset in ``template`` where the offending marker
    starts, when known.
    """

    def __init__(self, message: str, *, template: str | None = None, position: int | None = None) -> None:
        self.template = template
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class TemplateRenderError(TemplateError):
    """Raised when a compiled template cannot be rendered with a context."""
