from messagebox.merge import deep_merge


def test_sibling_keys_are_preserved():
    merged = deep_merge({}, {"en": {"a": {"x": 1}}}, {"en": {"a": {"y": 2}}})
    assert merged == {"en": {"a": {"x": 1, "y": 2}}}


def test_later_sources_win_on_conflicts():
    merged = deep_merge({"en": {"required": "old"}}, {"en": {"required": "new"}})
    assert merged == {"en": {"required": "new"}}


def test_mapping_replaces_scalar_and_scalar_replaces_mapping():
    assert deep_merge({"a": "text"}, {"a": {"b": 1}}) == {"a": {"b": 1}}
    assert deep_merge({"a": {"b": 1}}, {"a": "text"}) == {"a": "text"}


def test_none_values_are_skipped():
    assert deep_merge({"a": 1}, {"a": None, "b": 2}) == {"a": 1, "b": 2}


def test_sources_are_not_aliased():
    source = {"en": {"required": {"_default": "Required"}}}
    merged = deep_merge({}, source)
    merged["en"]["required"]["name"] = "Name required"
    assert source == {"en": {"required": {"_default": "Required"}}}


def test_callables_are_kept_by_reference():
    def factory(context):
        return "x"

    merged = deep_merge({}, {"en": {"custom": factory}})
    assert merged["en"]["custom"] is factory


def test_none_sources_are_ignored():
    assert deep_merge({"a": 1}, None, {}) == {"a": 1}
