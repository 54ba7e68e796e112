"""
Marker patterns delimiting the dynamic spans of a template.

Each marker is a regular expression with exactly one capture group holding
the inner text of the span. Interpolation (raw output) uses triple braces and
escaping (HTML-escaped output) uses double braces; evaluation blocks are off
unless configured.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Pattern, Union

from ..errors import MarkerConfigurationError

DEFAULT_INTERPOLATE = re.compile(r"\{\{\{([^{}#][\s\S]+?)\}\}\}")
DEFAULT_ESCAPE = re.compile(r"\{\{([^{}#][\s\S]+?)\}\}")
SUGGESTED_EVALUATE = re.compile(r"\{\{#([^{}].*?)\}\}")

# Consumes a character before asserting start-of-input, so it cannot match.
NO_MATCH = re.compile(r"(.)^")

MarkerLike = Union[str, Pattern[str]]

ESCAPE_GROUP = 1
INTERPOLATE_GROUP = 2
EVALUATE_GROUP = 3


def coerce_marker(value: Optional[MarkerLike], *, role: str) -> Optional[Pattern[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            pattern = re.compile(value)
        except re.error as exc:
            raise MarkerConfigurationError(f"Invalid {role} marker {value!r}: {exc}") from exc
    elif isinstance(value, re.Pattern):
        pattern = value
    else:
        raise MarkerConfigurationError(
            f"{role} marker must be a string or compiled pattern, got {type(value).__name__}"
        )
    if pattern.groups != 1:
        raise MarkerConfigurationError(
            f"{role} marker {pattern.pattern!r} must define exactly one capture group"
        )
    # Only the source text reaches the combined matcher; use scoped groups
    # such as ``(?s:...)`` instead of pattern-wide flags.
    if pattern.flags & ~re.UNICODE:
        raise MarkerConfigurationError(
            f"{role} marker {pattern.pattern!r} must not set pattern-wide flags; "
            "use a scoped group such as (?s:...)"
        )
    return pattern


@dataclass(frozen=True)
class Markers:
    """
    The escape/interpolate/evaluate patterns a template is compiled with.

    Hashable, so it can take part in a template cache key.
    """

    escape: Optional[Pattern[str]] = None
    interpolate: Optional[Pattern[str]] = None
    evaluate: Optional[Pattern[str]] = None
    matcher: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for role in ("escape", "interpolate", "evaluate"):
            object.__setattr__(self, role, coerce_marker(getattr(self, role), role=role))
        sources = [
            (self.escape or NO_MATCH).pattern,
            (self.interpolate or NO_MATCH).pattern,
            (self.evaluate or NO_MATCH).pattern,
        ]
        combined = "|".join(f"(?:{source})" for source in sources) + r"|\Z"
        try:
            matcher = re.compile(combined)
        except re.error as exc:
            raise MarkerConfigurationError(f"Markers cannot be combined: {exc}") from exc
        object.__setattr__(self, "matcher", matcher)
