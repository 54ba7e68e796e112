"""
Per-instance message storage layered over the process-wide defaults.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from . import config
from .errors import MessagesNotFoundError
from .merge import deep_merge
from .types import LanguageMessages, MessageList


class MessageStore:
    """
    Holds a MessageBox's own messages and resolves them against the globals.

    Instance entries win over global entries at every nesting level.
    """

    def __init__(self, messages: Optional[Mapping[str, Any]] = None) -> None:
        self._messages: MessageList = deep_merge({}, messages)

    def add(self, messages: Mapping[str, Any]) -> None:
        deep_merge(self._messages, messages)

    def get_merged(self, language: str) -> LanguageMessages:
        global_messages = config.get_defaults().messages.get(language)
        messages = self._messages.get(language)
        if messages is None and global_messages is None:
            raise MessagesNotFoundError(language)
        # Always a fresh dict, so callers cannot reach the defaults or the store.
        return deep_merge({}, global_messages, messages)

    def copy(self) -> "MessageStore":
        return MessageStore(self._messages)

    def as_dict(self) -> MessageList:
        return deep_merge({}, self._messages)

    def __contains__(self, language: object) -> bool:
        return language in self._messages
