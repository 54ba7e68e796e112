"""
Shared data shapes for messagebox.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

MessageFactory = Callable[[Dict[str, Any]], str]
MessageEntry = Union[str, MessageFactory]
ErrorTypeMessages = Union[MessageEntry, Dict[str, MessageEntry]]
LanguageMessages = Dict[str, ErrorTypeMessages]
MessageList = Dict[str, LanguageMessages]

DEFAULT_KEY = "_default"


@dataclass
class ErrorDescriptor:
    """
    A single validation failure as reported by a validation framework.

    ``extra`` holds any additional fields (``value``, ``min``, ``label``...)
    that templates may reference.
    """

    name: Optional[str]
    type: str
    message: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_context(self) -> Dict[str, Any]:
        context: Dict[str, Any] = dict(self.extra)
        context["name"] = self.name
        context["type"] = self.type
        if self.message is not None:
            context["message"] = self.message
        return context


@dataclass(frozen=True)
class MessageLookup:
    messages: Mapping[str, ErrorTypeMessages]
    language: str


def descriptor_fields(error: Union[ErrorDescriptor, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(error, ErrorDescriptor):
        return error.as_context()
    return dict(error)
