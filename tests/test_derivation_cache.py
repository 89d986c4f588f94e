from core.services.derivation_cache import DerivationCache


def test_returns_cached_value_for_same_generations():
    cache = DerivationCache()
    calls = []

    def compute():
        calls.append(1)
        return object()

    first = cache.get_or_compute(("view",), (1, 0, 0), compute)
    second = cache.get_or_compute(("view",), (1, 0, 0), compute)

    assert first is second
    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_generation_change_invalidates_everything():
    cache = DerivationCache()
    cache.get_or_compute("a", (1, 0, 0), lambda: "old-a")
    cache.get_or_compute("b", (1, 0, 0), lambda: "old-b")

    assert cache.get_or_compute("a", (1, 1, 0), lambda: "new-a") == "new-a"
    assert len(cache) == 1
    assert cache.generations == (1, 1, 0)


def test_none_results_are_cached():
    cache = DerivationCache()
    calls = []

    def compute():
        calls.append(1)
        return None

    cache.get_or_compute("k", (0, 0, 0), compute)
    cache.get_or_compute("k", (0, 0, 0), compute)

    assert len(calls) == 1


def test_bounded_size_evicts_least_recently_used():
    cache = DerivationCache(max_entries=2)
    cache.get_or_compute("a", (0,), lambda: 1)
    cache.get_or_compute("b", (0,), lambda: 2)
    cache.get_or_compute("a", (0,), lambda: -1)
    cache.get_or_compute("c", (0,), lambda: 3)

    assert len(cache) == 2
    assert cache.get_or_compute("a", (0,), lambda: -1) == 1
    assert cache.get_or_compute("b", (0,), lambda: 20) == 20


def test_different_source_with_equal_generations_is_not_reused():
    cache = DerivationCache()
    first_source, second_source = object(), object()

    first = cache.get_or_compute("view", (0, 0, 0), lambda: "first", source=first_source)
    second = cache.get_or_compute("view", (0, 0, 0), lambda: "second", source=second_source)

    assert (first, second) == ("first", "second")
    assert cache.get_or_compute("view", (0, 0, 0), lambda: "again", source=second_source) == "second"
    assert (cache.hits, cache.misses) == (1, 2)
