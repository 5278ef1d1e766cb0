import pytest

from core.caching.search_cache import SearchCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSearchCache:
    def test_get_returns_stored_items(self, make_items) -> None:
        cache = SearchCache()
        items = make_items(3)

        cache.set("lamp", items)

        assert cache.get("lamp") == items
        assert "lamp" in cache
        assert len(cache) == 1

    def test_miss_returns_none(self) -> None:
        assert SearchCache().get("nothing") is None

    def test_returned_list_is_a_copy(self, make_items) -> None:
        cache = SearchCache()
        cache.set("lamp", make_items(2))

        cache.get("lamp").clear()

        assert len(cache.get("lamp")) == 2

    def test_keys_are_exact(self, make_items) -> None:
        cache = SearchCache()
        cache.set("Lamp", make_items(1))

        assert cache.get("lamp") is None

    def test_entries_expire(self, make_items) -> None:
        clock = FakeClock()
        cache = SearchCache(ttl_seconds=10, clock=clock)
        cache.set("lamp", make_items(1))

        clock.now = 10.0
        assert cache.get("lamp") is not None

        clock.now = 10.5
        assert cache.get("lamp") is None
        assert len(cache) == 0

    def test_least_recently_used_entry_is_evicted(self, make_items) -> None:
        cache = SearchCache(max_entries=2)
        cache.set("a", make_items(1))
        cache.set("b", make_items(1))

        cache.get("a")
        cache.set("c", make_items(1))

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_overwrite_refreshes_entry(self, make_items) -> None:
        cache = SearchCache(max_entries=2)
        cache.set("a", make_items(1))
        cache.set("b", make_items(1))

        cache.set("a", make_items(2))
        cache.set("c", make_items(1))

        assert len(cache.get("a")) == 2
        assert "b" not in cache

    def test_clear_one_key(self, make_items) -> None:
        cache = SearchCache()
        cache.set("a", make_items(1))
        cache.set("b", make_items(1))

        cache.clear("a")

        assert "a" not in cache
        assert "b" in cache

    def test_clear_all(self, make_items) -> None:
        cache = SearchCache()
        cache.set("a", make_items(1))

        cache.clear()

        assert len(cache) == 0

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_entries": 0}, {"ttl_seconds": 0}, {"ttl_seconds": -1}],
    )
    def test_invalid_configuration(self, kwargs) -> None:
        with pytest.raises(ValueError):
            SearchCache(**kwargs)
