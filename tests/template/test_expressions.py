from types import SimpleNamespace

import pytest

from messagebox.errors import TemplateRenderError, TemplateSyntaxError
from messagebox.template import parse_expression


def evaluate(source, **scope):
    return parse_expression(source).evaluate(scope)


def test_names_resolve_from_scope_before_helpers():
    assert evaluate("len", len="shadowed") == "shadowed"
    assert evaluate("len(items)", items=[1, 2]) == 2


def test_interpreter_builtins_are_not_reachable():
    with pytest.raises(TemplateRenderError):
        evaluate("open")
    with pytest.raises(TemplateRenderError):
        evaluate("print")


def test_attribute_access_on_objects_and_mappings():
    assert evaluate("user.name", user=SimpleNamespace(name="Ada")) == "Ada"
    assert evaluate("user.name", user={"name": "Ada"}) == "Ada"
    assert evaluate("user.missing", user={"name": "Ada"}) is None
    assert evaluate("user.name", user=None) is None


def test_boolean_operators_short_circuit():
    assert evaluate("label or name", label="", name="field") == "field"
    assert evaluate("label and name", label="", name="field") == ""
    assert evaluate("not label", label="") is True


def test_chained_comparisons():
    assert evaluate("1 < value <= 3", value=3) is True
    assert evaluate("1 < value <= 3", value=4) is False
    assert evaluate("value in allowed", value="a", allowed=["a", "b"]) is True
    assert evaluate("value is None", value=None) is True


def test_collection_displays_and_slices():
    assert evaluate("[a, b]", a=1, b=2) == [1, 2]
    assert evaluate("(a,)", a=1) == (1,)
    assert evaluate("{'k': a}", a=1) == {"k": 1}
    assert evaluate("word[1:3]", word="abcd") == "bc"


def test_join_helper():
    assert evaluate("join(values)", values=["a", None, 3]) == "a, , 3"
    assert evaluate("join(values, ' | ')", values=["a", "b"]) == "a | b"


def test_calling_non_callable_fails():
    with pytest.raises(TemplateRenderError):
        evaluate("label()", label="text")


def test_type_errors_are_wrapped():
    with pytest.raises(TemplateRenderError):
        evaluate("label + 1", label="text")


@pytest.mark.parametrize(
    "source",
    ["", "   ", "a = 1", "value ** 2", "{**extra}", "fn(**kwargs)", "fn(*args)", "_private", "f'{value}'"],
)
def test_rejected_expressions(source):
    with pytest.raises(TemplateSyntaxError):
        parse_expression(source)


def test_expression_repr_shows_source():
    assert repr(parse_expression(" value ")) == "Expression('value')"
