"""
MessageBox: turns validation error descriptors into localized messages.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Union

from . import config
from .reactive import TrackerFactory
from .store import MessageStore
from .template import (
    DEFAULT_ESCAPE,
    DEFAULT_INTERPOLATE,
    Markers,
    NoOpTemplateCache,
    TemplateCache,
    TemplateCompiler,
)
from .template.markers import MarkerLike
from .types import DEFAULT_KEY, ErrorDescriptor, MessageList, MessageLookup, descriptor_fields
from .utils import get_logger, make_name_generic

ErrorInfo = Union[ErrorDescriptor, Mapping]


class MessageBox:
    """
    Resolve and render validation messages for the current language.

    Messages are looked up per language and error type, optionally narrowed
    by the generic field name, with ``_default`` as the per-type fallback.
    Instance messages are layered over the process-wide defaults.
    """

    def __init__(
        self,
        *,
        escape: Optional[MarkerLike] = None,
        interpolate: Optional[MarkerLike] = None,
        evaluate: Optional[MarkerLike] = None,
        initial_language: Optional[str] = None,
        messages: Optional[MessageList] = None,
        tracker: Optional[TrackerFactory] = None,
        cache: Optional[TemplateCache] = None,
    ) -> None:
        defaults = config.get_defaults()
        self.language: str = initial_language or defaults.language or config.FALLBACK_LANGUAGE
        self.markers = Markers(
            escape=escape or defaults.escape or DEFAULT_ESCAPE,
            interpolate=interpolate or defaults.interpolate or DEFAULT_INTERPOLATE,
            evaluate=evaluate or defaults.evaluate,
        )
        self.message_store = MessageStore(messages)
        # Every box owns its dependency; clones notify only their own readers.
        self.tracker_factory = tracker
        self.tracker = tracker() if tracker is not None else None
        self.cache: TemplateCache = cache if cache is not None else NoOpTemplateCache()
        self.compiler = TemplateCompiler(self.markers)
        self.logger = get_logger("box")

    def clone(self) -> "MessageBox":
        copy = MessageBox(initial_language=self.language, tracker=self.tracker_factory, cache=self.cache)
        copy.markers = self.markers
        copy.compiler = self.compiler
        copy.message_store = self.message_store.copy()
        return copy

    def get_messages(self, language: Optional[str] = None) -> MessageLookup:
        if language is None:
            language = self.language
            if self.tracker is not None:
                self.tracker.depend()
        return MessageLookup(messages=self.message_store.get_merged(language), language=language)

    def message(
        self,
        error: ErrorInfo,
        *,
        context: Optional[Mapping] = None,
        language: Optional[str] = None,
    ) -> str:
        fields = descriptor_fields(error)

        # A preformatted message from the validator wins over any template.
        preformatted = fields.get("message")
        if isinstance(preformatted, str) and preformatted:
            return preformatted

        field_name = fields.get("name")
        error_type = fields.get("type")
        generic_name = make_name_generic(field_name)

        messages = self.get_messages(language).messages
        renderer = self._select(messages.get(error_type), generic_name)
        if isinstance(renderer, str):
            renderer = self._compile(renderer)

        if not callable(renderer):
            self.logger.debug(
                "No message for %s/%s; using fallback",
                error_type,
                generic_name,
                extra={"field": field_name, "error_type": error_type},
            )
            return f"{field_name} is invalid"

        render_context: Dict[str, Any] = {"genericName": generic_name}
        render_context.update(context or {})
        render_context.update(fields)
        return renderer(render_context)

    def messages(self, messages: MessageList) -> None:
        self.message_store.add(messages)

    def set_language(self, language: str) -> None:
        self.language = language
        if self.tracker is not None:
            self.tracker.changed()

    @staticmethod
    def make_name_generic(name: Any) -> Optional[str]:
        return make_name_generic(name)

    @classmethod
    def defaults(
        cls,
        *,
        escape: Optional[MarkerLike] = None,
        interpolate: Optional[MarkerLike] = None,
        evaluate: Optional[MarkerLike] = None,
        initial_language: Optional[str] = None,
        messages: Optional[MessageList] = None,
    ) -> config.Defaults:
        return config.apply_defaults(
            escape=escape,
            interpolate=interpolate,
            evaluate=evaluate,
            initial_language=initial_language,
            messages=messages,
        )

    # Helpers -----------------------------------------------------------
    @staticmethod
    def _select(entry: Any, generic_name: Optional[str]) -> Union[str, Callable[..., str], None]:
        if isinstance(entry, str) or callable(entry):
            return entry
        if not isinstance(entry, Mapping):
            return None
        selected = entry.get(generic_name) if generic_name is not None else None
        if selected is None:
            selected = entry.get(DEFAULT_KEY)
        return selected

    def _compile(self, template: str):
        renderer = self.cache.get(template, self.markers)
        if renderer is None:
            renderer = self.compiler.compile(template)
            self.cache.set(template, self.markers, renderer)
        return renderer
