"""
Field-name utilities for messagebox.
"""

import re
from typing import Any, Optional


GENERIC_PLACEHOLDER = ".$"

_NUMERIC_SEGMENT_RE = re.compile(r"\.[0-9]+(?=\.|\Z)")


def make_name_generic(name: Any) -> Optional[str]:
    """
    Replace numeric path segments with ``.$`` so array items share templates.

    ``items.3.value`` becomes ``items.$.value``. Anything that is not a string
    yields ``None``.
    """
    if not isinstance(name, str):
        return None
    return _NUMERIC_SEGMENT_RE.sub(GENERIC_PLACEHOLDER, name)
