import re

import pytest

from messagebox.errors import MarkerConfigurationError
from messagebox.template import DEFAULT_ESCAPE, DEFAULT_INTERPOLATE, NO_MATCH, SUGGESTED_EVALUATE, Markers


def test_default_patterns_capture_inner_text():
    assert DEFAULT_INTERPOLATE.search("{{{ label }}}").group(1) == " label "
    assert DEFAULT_ESCAPE.search("{{label}}").group(1) == "label"
    assert SUGGESTED_EVALUATE.search("{{# if x }}").group(1) == " if x "


def test_escape_pattern_does_not_start_inside_triple_braces():
    assert DEFAULT_ESCAPE.match("{{{label}}}") is None


def test_no_match_never_matches():
    for text in ["", "a", "{{x}}", "\n\n"]:
        assert NO_MATCH.search(text) is None


def test_markers_accept_strings_and_patterns():
    markers = Markers(escape=r"<%-(.+?)%>", interpolate=re.compile(r"<%=(.+?)%>"))
    assert markers.escape.pattern == r"<%-(.+?)%>"
    assert markers.interpolate.pattern == r"<%=(.+?)%>"
    assert markers.evaluate is None


def test_markers_require_one_capture_group():
    with pytest.raises(MarkerConfigurationError):
        Markers(escape=r"\{\{.+?\}\}")
    with pytest.raises(MarkerConfigurationError):
        Markers(interpolate=r"(a)(b)")


def test_invalid_pattern_string_is_rejected():
    with pytest.raises(MarkerConfigurationError):
        Markers(evaluate="([unclosed")


def test_markers_are_hashable_and_comparable():
    first = Markers(escape=DEFAULT_ESCAPE, interpolate=DEFAULT_INTERPOLATE)
    second = Markers(escape=DEFAULT_ESCAPE, interpolate=DEFAULT_INTERPOLATE)
    assert first == second
    assert hash(first) == hash(second)
    assert first != Markers(escape=DEFAULT_ESCAPE)


def test_combined_matcher_reports_which_marker_matched():
    markers = Markers(escape=DEFAULT_ESCAPE, interpolate=DEFAULT_INTERPOLATE, evaluate=SUGGESTED_EVALUATE)
    matches = [m.groups() for m in markers.matcher.finditer("{{aa}}{{{bb}}}{{# end }}")]
    assert matches == [
        ("aa", None, None),
        (None, "bb", None),
        (None, None, " end "),
        (None, None, None),
    ]


def test_default_markers_need_two_characters_inside():
    assert DEFAULT_ESCAPE.fullmatch("{{a}}") is None
    assert DEFAULT_ESCAPE.fullmatch("{{ab}}") is not None


def test_inline_global_flags_are_rejected():
    with pytest.raises(MarkerConfigurationError):
        Markers(escape=r"(?s)\[\[(.+?)\]\]")


def test_compiled_pattern_flags_are_rejected():
    with pytest.raises(MarkerConfigurationError):
        Markers(escape=re.compile(r"\[\[(.+?)\]\]", re.S))


def test_scoped_flags_are_honoured():
    markers = Markers(escape=r"(?s:\[\[(.+?)\]\])")
    match = markers.matcher.search("[[a\nb]]")
    assert match.group(1) == "a\nb"


def test_markers_that_cannot_be_combined_are_rejected():
    with pytest.raises(MarkerConfigurationError):
        Markers(escape=r"<(?P<inner>.+?)>", interpolate=r"\[(?P<inner>.+?)\]")
