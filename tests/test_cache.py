import pytest

from vardump._utils._cache import _VardumpCache, cached


class TestVardumpCache:
    def test_lru_eviction(self):
        cache = _VardumpCache(maxsize=2)
        cache["a"] = 1
        cache["b"] = 2
        assert "a" in cache  # refreshes "a"
        cache["c"] = 3
        assert "b" not in cache
        assert cache["a"] == 1
        assert cache["c"] == 3
        assert len(cache) == 2

    def test_missing_key(self):
        cache = _VardumpCache()
        with pytest.raises(KeyError):
            cache["missing"]

    def test_clear(self):
        cache = _VardumpCache()
        cache[int] = "int"
        cache.clear()
        assert len(cache) == 0


class TestCached:
    def test_caches_by_arguments(self):
        calls = []

        @cached(maxsize=8)
        def name_of(cls):
            calls.append(cls)
            return cls.__name__

        assert name_of(int) == "int"
        assert name_of(int) == "int"
        assert name_of(str) == "str"
        assert calls == [int, str]

    def test_distinct_classes_with_same_name_are_not_confused(self):
        def make():
            class Thing:
                pass

            return Thing

        first, second = make(), make()

        @cached(maxsize=8)
        def identity(cls):
            return cls

        assert identity(first) is first
        assert identity(second) is second

    def test_unhashable_arguments_bypass_the_cache(self):
        calls = []

        @cached
        def total(values):
            calls.append(values)
            return sum(values)

        assert total([1, 2]) == 3
        assert total([1, 2]) == 3
        assert len(calls) == 2


if __name__ == "__main__":
    pytest.main()
