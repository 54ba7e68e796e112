"""
Message catalog for the signup form example.
"""

from __future__ import annotations

from typing import Any, Dict

from messagebox.types import MessageList


def _min_count(context: Dict[str, Any]) -> str:
    noun = "tag" if context["minCount"] == 1 else "tags"
    return f"Add at least {context['minCount']} {noun}"


GLOBAL_MESSAGES: MessageList = {
    "en": {
        "required": {
            "_default": "{{label}} is required",
            "password": "Choose a password",
        },
        "minString": "{{label}} must be at least {{min}} characters",
        "regEx": "{{label}} is not valid ({{value}})",
        "minCount": _min_count,
    },
    "de": {
        "required": {"_default": "{{label}} ist erforderlich"},
        "minString": "{{label}} muss mindestens {{min}} Zeichen lang sein",
        "regEx": "{{label}} ist ungültig ({{value}})",
    },
}

FORM_MESSAGES: MessageList = {
    "en": {
        "required": {"tags.$": "Tag #{{ int(name.split('.')[-1]) + 1 }} cannot be empty"},
    },
    "de": {
        "required": {"tags.$": "Schlagwort darf nicht leer sein"},
        "minCount": (
            "Mindestens {{minCount}} "
            "{{# if minCount == 1 }}Schlagwort{{# else }}Schlagwörter{{# end }} angeben"
        ),
    },
}
