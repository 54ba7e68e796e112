"""
Recursive dictionary merging used for message lists.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


def deep_merge(
    target: MutableMapping[str, Any], *sources: Optional[Mapping[str, Any]]
) -> MutableMapping[str, Any]:
    """
    Merge ``sources`` into ``target`` in order, later sources winning.

    Nested mappings merge key by key instead of replacing each other, and are
    copied on the way in so ``target`` never aliases a source. ``None`` values
    in a source are skipped. Returns ``target``.
    """
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if value is None:
                continue
            existing = target.get(key)
            if isinstance(value, Mapping):
                if not isinstance(existing, MutableMapping):
                    existing = {}
                    target[key] = existing
                deep_merge(existing, value)
            else:
                target[key] = value
    return target
