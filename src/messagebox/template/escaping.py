"""HTML escaping for escaped template output."""

from __future__ import annotations

import re
from typing import Any

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "`": "&#96;",
}

_HTML_ESCAPE_RE = re.compile("[&<>\"'`]")


def escape_html(value: Any) -> str:
    if value is None:
        return ""
    return _HTML_ESCAPE_RE.sub(lambda match: HTML_ESCAPES[match.group(0)], str(value))
