"""
Template compilation into callable renderers.

A template is scanned once with the combined marker pattern. Literal text,
escaped and interpolated expressions, and evaluate-block statements become a
small tree of nodes which the resulting ``Renderer`` walks for each context.
"""

from __future__ import annotations

import re
from collections import ChainMap
from dataclasses import dataclass, field
from typing import Any, List, Mapping, MutableMapping, Optional, Tuple

from ..errors import TemplateSyntaxError
from ..utils import get_logger, time_call
from .escaping import escape_html
from .expressions import Expression, parse_expression
from .markers import ESCAPE_GROUP, EVALUATE_GROUP, INTERPOLATE_GROUP, MarkerLike, Markers

logger = get_logger("template.compiler")

_IDENTIFIER = r"[A-Za-z][A-Za-z0-9_]*"
IF_RE = re.compile(r"if\s+(?P<expr>.+)", re.DOTALL)
ELIF_RE = re.compile(r"elif\s+(?P<expr>.+)", re.DOTALL)
ELSE_RE = re.compile(r"else")
END_RE = re.compile(r"end")
FOR_RE = re.compile(rf"for\s+(?P<name>{_IDENTIFIER})\s+in\s+(?P<expr>.+)", re.DOTALL)
SET_RE = re.compile(rf"set\s+(?P<name>{_IDENTIFIER})\s*=(?!=)\s*(?P<expr>.+)", re.DOTALL)
EMIT_RE = re.compile(r"emit\s+(?P<expr>.+)", re.DOTALL)

Scope = MutableMapping[str, Any]


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


# Nodes ---------------------------------------------------------------
class Node:
    def render(self, scope: Scope, out: List[str]) -> None:
        raise NotImplementedError


@dataclass
class TextNode(Node):
    text: str

    def render(self, scope: Scope, out: List[str]) -> None:
        out.append(self.text)


@dataclass
class EscapeNode(Node):
    expression: Expression

    def render(self, scope: Scope, out: List[str]) -> None:
        out.append(escape_html(self.expression.evaluate(scope)))


@dataclass
class InterpolateNode(Node):
    expression: Expression

    def render(self, scope: Scope, out: List[str]) -> None:
        out.append(_to_text(self.expression.evaluate(scope)))


@dataclass
class EmitNode(Node):
    expression: Expression

    def render(self, scope: Scope, out: List[str]) -> None:
        out.append(_to_text(self.expression.evaluate(scope)))


@dataclass
class SetNode(Node):
    name: str
    expression: Expression

    def render(self, scope: Scope, out: List[str]) -> None:
        scope[self.name] = self.expression.evaluate(scope)


@dataclass
class IfNode(Node):
    branches: List[Tuple[Optional[Expression], List[Node]]] = field(default_factory=list)

    def render(self, scope: Scope, out: List[str]) -> None:
        for condition, body in self.branches:
            if condition is None or condition.evaluate(scope):
                render_nodes(body, scope, out)
                return


@dataclass
class ForNode(Node):
    name: str
    iterable: Expression
    body: List[Node] = field(default_factory=list)

    def render(self, scope: Scope, out: List[str]) -> None:
        items = self.iterable.evaluate(scope)
        if items is None:
            return
        for item in items:
            scope[self.name] = item
            render_nodes(self.body, scope, out)


def render_nodes(nodes: List[Node], scope: Scope, out: List[str]) -> None:
    for node in nodes:
        node.render(scope, out)


# Renderer ------------------------------------------------------------
class Renderer:
    """
    Callable produced by the compiler.

    ``renderer(context)`` returns the rendered string. Names inside the
    template resolve against ``context`` only; statements such as ``set``
    write to a scratch scope that is discarded after the call.
    """

    def __init__(self, template: str, markers: Markers, nodes: List[Node]) -> None:
        self.template = template
        self.markers = markers
        self._nodes = nodes

    def __call__(self, context: Optional[Mapping[str, Any]] = None) -> str:
        scope: Scope = ChainMap({}, context or {})
        out: List[str] = []
        render_nodes(self._nodes, scope, out)
        return "".join(out)

    def __repr__(self) -> str:
        return f"Renderer({self.template!r})"


# Compiler ------------------------------------------------------------
@dataclass
class _Block:
    kind: str
    node: Node
    body: List[Node]
    position: int


class _Parser:
    def __init__(self, text: str, markers: Markers) -> None:
        self.text = text
        self.markers = markers
        self.root: List[Node] = []
        self.stack: List[_Block] = []

    @property
    def body(self) -> List[Node]:
        return self.stack[-1].body if self.stack else self.root

    def parse(self) -> List[Node]:
        index = 0
        for match in self.markers.matcher.finditer(self.text):
            start = match.start()
            if start > index:
                self.body.append(TextNode(self.text[index:start]))
            index = match.end()

            escaped = match.group(ESCAPE_GROUP)
            interpolated = match.group(INTERPOLATE_GROUP)
            evaluated = match.group(EVALUATE_GROUP)
            if escaped is not None:
                self.body.append(EscapeNode(self._expression(escaped, start)))
            elif interpolated is not None:
                self.body.append(InterpolateNode(self._expression(interpolated, start)))
            elif evaluated is not None:
                self._statement(evaluated.strip(), start)

        if self.stack:
            block = self.stack[-1]
            raise TemplateSyntaxError(
                f"Unterminated '{block.kind}' block", template=self.text, position=block.position
            )
        return self.root

    def _expression(self, source: str, position: int) -> Expression:
        return parse_expression(source, template=self.text, position=position)

    def _statement(self, code: str, position: int) -> None:
        match = IF_RE.fullmatch(code)
        if match:
            body: List[Node] = []
            node = IfNode([(self._expression(match["expr"], position), body)])
            self.body.append(node)
            self.stack.append(_Block("if", node, body, position))
            return

        match = ELIF_RE.fullmatch(code)
        if match:
            block = self._current_if("elif", position)
            body = []
            block.node.branches.append((self._expression(match["expr"], position), body))
            block.body = body
            return

        if ELSE_RE.fullmatch(code):
            block = self._current_if("else", position)
            body = []
            block.node.branches.append((None, body))
            block.body = body
            block.kind = "else"
            return

        match = FOR_RE.fullmatch(code)
        if match:
            node = ForNode(match["name"], self._expression(match["expr"], position))
            self.body.append(node)
            self.stack.append(_Block("for", node, node.body, position))
            return

        if END_RE.fullmatch(code):
            if not self.stack:
                raise TemplateSyntaxError(
                    "'end' without an open block", template=self.text, position=position
                )
            self.stack.pop()
            return

        match = SET_RE.fullmatch(code)
        if match:
            self.body.append(SetNode(match["name"], self._expression(match["expr"], position)))
            return

        match = EMIT_RE.fullmatch(code)
        if match:
            self.body.append(EmitNode(self._expression(match["expr"], position)))
            return

        raise TemplateSyntaxError(f"Unknown statement {code!r}", template=self.text, position=position)

    def _current_if(self, keyword: str, position: int) -> _Block:
        if not self.stack or self.stack[-1].kind != "if":
            raise TemplateSyntaxError(
                f"'{keyword}' without a matching 'if'", template=self.text, position=position
            )
        return self.stack[-1]


class TemplateCompiler:
    """
    Compile template strings with a fixed set of markers.
    """

    def __init__(self, markers: Optional[Markers] = None) -> None:
        self.markers = markers or Markers()

    def compile(self, text: str) -> Renderer:
        with time_call("template.compile", logger, template_length=len(text)):
            nodes = _Parser(text, self.markers).parse()
        return Renderer(text, self.markers, nodes)


def compile_template(
    text: str,
    *,
    escape: Optional[MarkerLike] = None,
    interpolate: Optional[MarkerLike] = None,
    evaluate: Optional[MarkerLike] = None,
) -> Renderer:
    """
    Compile ``text`` into a ``Renderer``.

    Markers that are not supplied never match, so text resembling them is
    left literal.
    """
    markers = Markers(escape=escape, interpolate=interpolate, evaluate=evaluate)
    return TemplateCompiler(markers).compile(text)
