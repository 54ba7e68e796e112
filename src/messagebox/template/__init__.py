"""
Template compilation: markers, escaping, expressions and renderers.
"""

from .cache import InMemoryTemplateCache, NoOpTemplateCache, TemplateCache
from .compiler import Renderer, TemplateCompiler, compile_template
from .escaping import escape_html
from .expressions import Expression, parse_expression
from .markers import (
    DEFAULT_ESCAPE,
    DEFAULT_INTERPOLATE,
    NO_MATCH,
    SUGGESTED_EVALUATE,
    Markers,
)

__all__ = [
    "DEFAULT_ESCAPE",
    "DEFAULT_INTERPOLATE",
    "NO_MATCH",
    "SUGGESTED_EVALUATE",
    "Expression",
    "InMemoryTemplateCache",
    "Markers",
    "NoOpTemplateCache",
    "Renderer",
    "TemplateCache",
    "TemplateCompiler",
    "compile_template",
    "escape_html",
    "parse_expression",
]
