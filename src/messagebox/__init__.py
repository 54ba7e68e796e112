"""
messagebox public package initialization.

Resolves validation error descriptors into localized, rendered messages.
"""

from .box import MessageBox  # noqa: F401
from .config import (  # noqa: F401
    Defaults,
    apply_defaults,
    defaults_from_env,
    get_defaults,
    reset_defaults,
)
from .errors import (  # noqa: F401
    MarkerConfigurationError,
    MessageBoxError,
    MessagesNotFoundError,
    TemplateError,
    TemplateRenderError,
    TemplateSyntaxError,
)
from .merge import deep_merge  # noqa: F401
from .reactive import Computation, Dependency, Tracker, TrackerFactory, autorun  # noqa: F401
from .template import (  # noqa: F401
    DEFAULT_ESCAPE,
    DEFAULT_INTERPOLATE,
    SUGGESTED_EVALUATE,
    InMemoryTemplateCache,
    Markers,
    Renderer,
    compile_template,
    escape_html,
)
from .types import ErrorDescriptor, MessageLookup  # noqa: F401
from .utils import make_name_generic  # noqa: F401

__all__ = [
    "MessageBox",
    "Defaults",
    "apply_defaults",
    "defaults_from_env",
    "get_defaults",
    "reset_defaults",
    "MessageBoxError",
    "MessagesNotFoundError",
    "MarkerConfigurationError",
    "TemplateError",
    "TemplateSyntaxError",
    "TemplateRenderError",
    "deep_merge",
    "Tracker",
    "TrackerFactory",
    "Dependency",
    "Computation",
    "autorun",
    "DEFAULT_ESCAPE",
    "DEFAULT_INTERPOLATE",
    "SUGGESTED_EVALUATE",
    "InMemoryTemplateCache",
    "Markers",
    "Renderer",
    "compile_template",
    "escape_html",
    "ErrorDescriptor",
    "MessageLookup",
    "make_name_generic",
]
