"""
Process-wide defaults shared by every MessageBox.

The defaults are an immutable snapshot. ``apply_defaults`` builds a new
snapshot under a lock and swaps it in, so readers always see a consistent
language, marker set and global message list.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from threading import RLock
from typing import Any, Mapping, Optional, Pattern

from .errors import MarkerConfigurationError
from .merge import deep_merge
from .template.markers import MarkerLike, coerce_marker
from .types import MessageList
from .utils import get_logger

FALLBACK_LANGUAGE = "en"
ENV_PREFIX = "MESSAGEBOX_"

logger = get_logger("config")


@dataclass(frozen=True)
class Defaults:
    language: Optional[str] = None
    escape: Optional[Pattern[str]] = None
    interpolate: Optional[Pattern[str]] = None
    evaluate: Optional[Pattern[str]] = None
    messages: MessageList = field(default_factory=dict)


_lock = RLock()
_current = Defaults()


def get_defaults() -> Defaults:
    return _current


def apply_defaults(
    *,
    initial_language: Optional[str] = None,
    escape: Optional[MarkerLike] = None,
    interpolate: Optional[MarkerLike] = None,
    evaluate: Optional[MarkerLike] = None,
    messages: Optional[Mapping[str, Any]] = None,
) -> Defaults:
    """
    Replace the process-wide defaults.

    Supplied scalars overwrite the current value, omitted ones are kept.
    ``messages`` are deep-merged into the global message list, accumulating
    across calls.
    """
    global _current

    changes: dict[str, Any] = {}
    if initial_language is not None:
        if not isinstance(initial_language, str):
            raise TypeError("initial_language must be a string")
        changes["language"] = initial_language
    for role, value in (("escape", escape), ("interpolate", interpolate), ("evaluate", evaluate)):
        if value is not None:
            changes[role] = coerce_marker(value, role=role)

    with _lock:
        current = _current
        if messages:
            changes["messages"] = deep_merge({}, current.messages, messages)
        _current = replace(current, **changes)
        snapshot = _current

    if changes:
        logger.info(
            "Updated messagebox defaults: %s",
            ", ".join(sorted(changes)),
            extra={"language": snapshot.language},
        )
    return snapshot


def reset_defaults() -> Defaults:
    global _current
    with _lock:
        _current = Defaults()
        return _current


def defaults_from_env(prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> Defaults:
    """
    Apply defaults from ``<prefix>LANGUAGE``, ``<prefix>ESCAPE``,
    ``<prefix>INTERPOLATE`` and ``<prefix>EVALUATE`` environment variables.

    Unset or empty variables leave the current value in place.
    """
    source = os.environ if environ is None else environ
    options: dict[str, Any] = {}
    language = source.get(f"{prefix}LANGUAGE")
    if language:
        options["initial_language"] = language
    for role in ("escape", "interpolate", "evaluate"):
        value = source.get(f"{prefix}{role.upper()}")
        if value:
            try:
                options[role] = coerce_marker(value, role=role)
            except MarkerConfigurationError as exc:
                raise MarkerConfigurationError(f"{prefix}{role.upper()}: {exc}") from exc
    return apply_defaults(**options)
