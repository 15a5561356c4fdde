"""
vardump._utils._cache

Contains the small per-type cache used within `vardump` to avoid
recomputing type descriptors and slot layouts for every rendered value.
"""

from collections import OrderedDict
from threading import RLock
from functools import wraps
from typing import (
    Any,
    Callable,
    Hashable,
    Optional,
    TypeVar,
    Union,
    overload,
    ParamSpec,
)

__all__ = [
    "cached",
    "_VARDUMP_CACHE",
    "_VardumpCache",
]


# ------------------------------------------------------------------------------
# TYPE VARIABLES
# ------------------------------------------------------------------------------

P = ParamSpec("P")
R = TypeVar("R")


# ------------------------------------------------------------------------------
# CACHE IMPLEMENTATION
# ------------------------------------------------------------------------------


class _VardumpCache:
    """
    Internal LRU cache keyed by arbitrary hashable keys.

    Entries are evicted least-recently-used first once `maxsize` is
    reached. Keys are usually the inspected types themselves, so the
    cache never confuses two distinct classes sharing a qualified name.
    """

    def __init__(self, maxsize: int = 1024):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of items to store
        """
        self.maxsize = maxsize
        self._cache: OrderedDict[Hashable, Any] = OrderedDict()
        self._lock = RLock()

    def __contains__(self, key: Hashable) -> bool:
        """Check if key exists, refreshing its recency."""
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return True
            return False

    def __getitem__(self, key: Hashable) -> Any:
        with self._lock:
            if key in self:
                return self._cache[key]
            raise KeyError(key)

    def __setitem__(self, key: Hashable, value: Any) -> None:
        with self._lock:
            if key not in self._cache and len(self._cache) >= self.maxsize:
                self._cache.popitem(last=False)
            self._cache[key] = value
            self._cache.move_to_end(key)

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        """Clear all cached items."""
        with self._lock:
            self._cache.clear()

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Get value with default if key doesn't exist."""
        try:
            return self[key]
        except KeyError:
            return default


# ------------------------------------------------------------------------------
# GLOBALS
# ------------------------------------------------------------------------------

_VARDUMP_CACHE = _VardumpCache(maxsize=1024)
"""Global cache instance for the vardump package."""

_MISSING = object()


# ------------------------------------------------------------------------------
# CACHING DECORATORS
# ------------------------------------------------------------------------------


@overload
def cached(function: Callable[P, R]) -> Callable[P, R]:
    """Decorator keyed on the positional arguments."""
    ...


@overload
def cached(
    *,
    key: Optional[Callable[..., Hashable]] = None,
    maxsize: Optional[int] = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator with custom key function and cache settings."""
    ...


def cached(
    function: Optional[Callable[P, R]] = None,
    *,
    key: Optional[Callable[..., Hashable]] = None,
    maxsize: Optional[int] = None,
) -> Union[Callable[P, R], Callable[[Callable[P, R]], Callable[P, R]]]:
    """
    Caching decorator that preserves signatures.

    Can be used with or without arguments:
    - @cached - Keys on the call arguments
    - @cached(key=lambda cls: cls) - Custom key function
    - @cached(maxsize=64) - Private cache of the given size

    Unhashable keys bypass the cache and call straight through.

    Args:
        function: Function to cache (when used without parentheses)
        key: Custom key generation function
        maxsize: Max cache size override

    Returns:
        Decorated function with caching
    """
    cache_instance = _VARDUMP_CACHE
    if maxsize is not None:
        cache_instance = _VardumpCache(maxsize=maxsize)

    def decorator(f: Callable[P, R]) -> Callable[P, R]:
        key_func = key or (
            lambda *args, **kwargs: (args, tuple(sorted(kwargs.items())))
        )

        @wraps(f)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            cache_key = (f.__module__, f.__qualname__, key_func(*args, **kwargs))
            try:
                result = cache_instance.get(cache_key, _MISSING)
            except TypeError:
                return f(*args, **kwargs)
            if result is not _MISSING:
                return result

            result = f(*args, **kwargs)
            cache_instance[cache_key] = result
            return result

        wrapper.__wrapped__ = f  # type: ignore
        return wrapper

    if function is None:
        return decorator
    else:
        return decorator(function)
