import pytest

from messagebox.utils import make_name_generic


@pytest.mark.parametrize(
    "name, expected",
    [
        ("items.3.value", "items.$.value"),
        ("name", "name"),
        ("items.0", "items.$"),
        ("a.1.b.22.c", "a.$.b.$.c"),
        ("matrix.1.2", "matrix.$.$"),
        ("items.3x.value", "items.3x.value"),
        ("7.value", "7.value"),
        ("", ""),
    ],
)
def test_numeric_segments_become_placeholders(name, expected):
    assert make_name_generic(name) == expected


@pytest.mark.parametrize("name", [None, 3, ["items", 0]])
def test_non_string_names_yield_none(name):
    assert make_name_generic(name) is None
