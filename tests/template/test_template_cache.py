import threading

import pytest

from messagebox.template import (
    DEFAULT_ESCAPE,
    DEFAULT_INTERPOLATE,
    InMemoryTemplateCache,
    Markers,
    NoOpTemplateCache,
    TemplateCompiler,
)


MARKERS = Markers(escape=DEFAULT_ESCAPE, interpolate=DEFAULT_INTERPOLATE)


def test_noop_cache_never_stores():
    cache = NoOpTemplateCache()
    renderer = TemplateCompiler(MARKERS).compile("{{label}}")
    cache.set("{{label}}", MARKERS, renderer)
    assert cache.get("{{label}}", MARKERS) is None


def test_in_memory_cache_keys_on_text_and_markers():
    cache = InMemoryTemplateCache()
    renderer = TemplateCompiler(MARKERS).compile("{{label}}")
    cache.set("{{label}}", MARKERS, renderer)

    assert cache.get("{{label}}", MARKERS) is renderer
    assert cache.get("{{label}}", Markers(escape=DEFAULT_ESCAPE, interpolate=DEFAULT_INTERPOLATE)) is renderer
    assert cache.get("{{label}}", Markers(escape=DEFAULT_ESCAPE)) is None
    assert cache.get("{{other}}", MARKERS) is None


def test_in_memory_cache_evicts_oldest_entry():
    cache = InMemoryTemplateCache(max_entries=2)
    compiler = TemplateCompiler(MARKERS)
    for text in ["one", "two", "three"]:
        cache.set(text, MARKERS, compiler.compile(text))
    assert len(cache) == 2
    assert cache.get("one", MARKERS) is None
    assert cache.get("three", MARKERS) is not None

    cache.clear()
    assert len(cache) == 0


def test_in_memory_cache_thread_safety():
    cache = InMemoryTemplateCache(max_entries=50)
    renderer = TemplateCompiler(MARKERS).compile("{{label}}")
    errors: list[Exception] = []
    barrier = threading.Barrier(4)

    def worker(offset: int) -> None:
        try:
            barrier.wait()
            for idx in range(200):
                key = f"template-{offset}-{idx}"
                cache.set(key, MARKERS, renderer)
                cache.get(key, MARKERS)
        except Exception as exc:  # pragma: no cover - failure path
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(cache) <= 50


def test_in_memory_cache_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        InMemoryTemplateCache(max_entries=0)
    with pytest.raises(ValueError):
        InMemoryTemplateCache(max_entries=-1)
