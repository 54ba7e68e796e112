"""
Expression parsing and evaluation for template markers.

Expressions use a restricted subset of Python syntax and are evaluated by
walking the parsed tree. Bare names resolve only against the scope handed to
``Expression.evaluate`` and a small table of helpers, never against module or
interpreter globals.
"""

from __future__ import annotations

import ast
import operator
from typing import Any, Callable, Dict, Mapping, Optional

from ..errors import TemplateRenderError, TemplateSyntaxError


BINARY_OPERATORS: Dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

UNARY_OPERATORS: Dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

COMPARISON_OPERATORS: Dict[type, Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda left, right: left in right,
    ast.NotIn: lambda left, right: left not in right,
}


def _join(items: Any, separator: str = ", ") -> str:
    return separator.join("" if item is None else str(item) for item in items)


HELPERS: Dict[str, Any] = {
    "abs": abs,
    "float": float,
    "int": int,
    "join": _join,
    "len": len,
    "lower": lambda value: str(value).lower(),
    "max": max,
    "min": min,
    "round": round,
    "sorted": sorted,
    "str": str,
    "upper": lambda value: str(value).upper(),
}

# str.format can reach arbitrary attributes through its replacement fields.
BLOCKED_ATTRIBUTES = frozenset({"format", "format_map"})

_ALLOWED_NODES = (
    ast.Expression,
    ast.Constant,
    ast.Name,
    ast.Load,
    ast.Attribute,
    ast.Subscript,
    ast.Slice,
    ast.BinOp,
    ast.UnaryOp,
    ast.BoolOp,
    ast.And,
    ast.Or,
    ast.Compare,
    ast.IfExp,
    ast.List,
    ast.Tuple,
    ast.Dict,
    ast.Call,
    ast.keyword,
    *BINARY_OPERATORS,
    *UNARY_OPERATORS,
    *COMPARISON_OPERATORS,
)


class Expression:
    """A parsed, validated template expression."""

    __slots__ = ("source", "_tree")

    def __init__(self, source: str, tree: ast.Expression) -> None:
        self.source = source
        self._tree = tree

    def evaluate(self, scope: Mapping[str, Any]) -> Any:
        try:
            return _Evaluator(scope).visit(self._tree.body)
        except TemplateRenderError:
            raise
        except (ArithmeticError, LookupError, TypeError, ValueError) as exc:
            raise TemplateRenderError(f"Error evaluating {self.source!r}: {exc}") from exc

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"


def parse_expression(
    source: str, *, template: Optional[str] = None, position: Optional[int] = None
) -> Expression:
    text = source.strip()
    if not text:
        raise TemplateSyntaxError("Empty expression", template=template, position=position)
    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as exc:
        raise TemplateSyntaxError(
            f"Invalid expression {text!r}: {exc.msg}", template=template, position=position
        ) from exc
    _validate(tree, text, template=template, position=position)
    return Expression(text, tree)


def _validate(tree: ast.AST, text: str, *, template: Optional[str], position: Optional[int]) -> None:
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise TemplateSyntaxError(
                f"Unsupported syntax {type(node).__name__} in expression {text!r}",
                template=template,
                position=position,
            )
        if isinstance(node, ast.Name) and node.id.startswith("_"):
            raise TemplateSyntaxError(
                f"Private name '{node.id}' is not allowed in expression {text!r}",
                template=template,
                position=position,
            )
        if isinstance(node, ast.Attribute) and (
            node.attr.startswith("_") or node.attr in BLOCKED_ATTRIBUTES
        ):
            raise TemplateSyntaxError(
                f"Attribute '{node.attr}' is not allowed in expression {text!r}",
                template=template,
                position=position,
            )
        if (isinstance(node, ast.keyword) and node.arg is None) or (
            isinstance(node, ast.Dict) and None in node.keys
        ):
            raise TemplateSyntaxError(
                f"Unpacking is not allowed in expression {text!r}",
                template=template,
                position=position,
            )


def lookup_attribute(value: Any, name: str) -> Any:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


class _Evaluator:
    def __init__(self, scope: Mapping[str, Any]) -> None:
        self.scope = scope

    def visit(self, node: ast.AST) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}")
        return method(node)

    def visit_Constant(self, node: ast.Constant) -> Any:
        return node.value

    def visit_Name(self, node: ast.Name) -> Any:
        if node.id in self.scope:
            return self.scope[node.id]
        if node.id in HELPERS:
            return HELPERS[node.id]
        raise TemplateRenderError(f"Name '{node.id}' is not defined in the template context")

    def visit_Attribute(self, node: ast.Attribute) -> Any:
        return lookup_attribute(self.visit(node.value), node.attr)

    def visit_Subscript(self, node: ast.Subscript) -> Any:
        value = self.visit(node.value)
        if value is None:
            return None
        key = self.visit(node.slice)
        try:
            return value[key]
        except (KeyError, IndexError):
            return None

    def visit_Slice(self, node: ast.Slice) -> slice:
        lower = self.visit(node.lower) if node.lower is not None else None
        upper = self.visit(node.upper) if node.upper is not None else None
        step = self.visit(node.step) if node.step is not None else None
        return slice(lower, upper, step)

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        handler = BINARY_OPERATORS[type(node.op)]
        return handler(self.visit(node.left), self.visit(node.right))

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        return UNARY_OPERATORS[type(node.op)](self.visit(node.operand))

    def visit_BoolOp(self, node: ast.BoolOp) -> Any:
        result: Any = None
        for value_node in node.values:
            result = self.visit(value_node)
            if isinstance(node.op, ast.And) and not result:
                return result
            if isinstance(node.op, ast.Or) and result:
                return result
        return result

    def visit_Compare(self, node: ast.Compare) -> bool:
        left = self.visit(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            right = self.visit(comparator)
            if not COMPARISON_OPERATORS[type(op)](left, right):
                return False
            left = right
        return True

    def visit_IfExp(self, node: ast.IfExp) -> Any:
        if self.visit(node.test):
            return self.visit(node.body)
        return self.visit(node.orelse)

    def visit_List(self, node: ast.List) -> list:
        return [self.visit(item) for item in node.elts]

    def visit_Tuple(self, node: ast.Tuple) -> tuple:
        return tuple(self.visit(item) for item in node.elts)

    def visit_Dict(self, node: ast.Dict) -> dict:
        return {self.visit(key): self.visit(value) for key, value in zip(node.keys, node.values)}

    def visit_Call(self, node: ast.Call) -> Any:
        func = self.visit(node.func)
        if not callable(func):
            raise TemplateRenderError(f"'{ast.unparse(node.func)}' is not callable")
        args = [self.visit(arg) for arg in node.args]
        kwargs = {keyword.arg: self.visit(keyword.value) for keyword in node.keywords}
        return func(*args, **kwargs)
