"""
Signup form example showing validation messages in two languages.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from messagebox import MessageBox, apply_defaults, autorun
from messagebox.reactive import Dependency
from messagebox.template import SUGGESTED_EVALUATE
from messagebox.types import ErrorDescriptor

from .messages import FORM_MESSAGES, GLOBAL_MESSAGES

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[a-z]{2,}$")
LABELS = {"username": "Username", "email": "Email", "password": "Password", "tags": "Tags"}


def build_message_box(language: str = "en") -> MessageBox:
    apply_defaults(messages=GLOBAL_MESSAGES)
    return MessageBox(
        evaluate=SUGGESTED_EVALUATE,
        initial_language=language,
        messages=FORM_MESSAGES,
        tracker=Dependency,
    )


def validate_signup(data: Mapping[str, Any]) -> List[ErrorDescriptor]:
    errors: List[ErrorDescriptor] = []

    for field in ("username", "email", "password"):
        if not data.get(field):
            errors.append(ErrorDescriptor(name=field, type="required", extra={"label": LABELS[field]}))

    username = data.get("username")
    if username and len(username) < 3:
        errors.append(
            ErrorDescriptor(
                name="username",
                type="minString",
                extra={"label": LABELS["username"], "min": 3, "value": username},
            )
        )

    email = data.get("email")
    if email and not EMAIL_RE.match(email):
        errors.append(
            ErrorDescriptor(name="email", type="regEx", extra={"label": LABELS["email"], "value": email})
        )

    tags = list(data.get("tags") or [])
    if len(tags) < 1:
        errors.append(
            ErrorDescriptor(name="tags", type="minCount", extra={"label": LABELS["tags"], "minCount": 1})
        )
    for index, tag in enumerate(tags):
        if not tag:
            errors.append(ErrorDescriptor(name=f"tags.{index}", type="required", extra={"label": "Tag"}))

    return errors


def render_errors(box: MessageBox, errors: List[ErrorDescriptor]) -> Dict[str, List[str]]:
    rendered: Dict[str, List[str]] = {}
    for error in errors:
        rendered.setdefault(error.name or "__all__", []).append(box.message(error))
    return rendered


def run_demo() -> Dict[str, Dict[str, List[str]]]:
    """
    Validate a bad submission and collect its messages in English, then German.

    The German rendering is produced by the autorun re-running after the
    language switch, not by a second explicit call.
    """
    box = build_message_box("en")
    errors = validate_signup({"username": "al", "email": "al@example", "tags": ["python", ""]})
    renderings: Dict[str, Dict[str, List[str]]] = {}

    def collect(_computation) -> None:
        language = box.get_messages().language
        renderings[language] = render_errors(box, errors)

    computation = autorun(collect)
    box.set_language("de")
    computation.stop()
    return renderings
