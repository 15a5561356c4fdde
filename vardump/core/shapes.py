"""
✼ vardump.core.shapes

Contains the shape registry used by the traversal engine: the closed
`Shape` tag, the `INVALID` placeholder and the plum-dispatched
`classify`, `fields_of` and `deref` functions.

```python
from vardump.core.shapes import classify, deref, Shape

class Box:
    def __init__(self, item):
        self.item = item

@classify.dispatch
def _(value: Box) -> Shape:
    return Shape.INDIRECTION

@deref.dispatch
def _(value: Box):
    return value.item
```
"""

import enum
import inspect
import logging
import os
import weakref
from collections.abc import Mapping, Sequence, Set as AbstractSet
from dataclasses import fields, is_dataclass
from functools import partial
from numbers import Number
from types import CellType, GenericAlias, ModuleType
from typing import Union, get_origin

from beartype.typing import Any, Iterator, Tuple
from plum import Dispatcher
from pydantic import BaseModel

from .._utils._cache import cached
from .._utils._text import safely

logger = logging.getLogger(__name__)

__all__ = [
    "Shape",
    "INVALID",
    "classify",
    "shape_of",
    "is_proxy",
    "target_of",
    "fields_of",
    "deref",
    "children",
]


_dispatch = Dispatcher()
"""Private dispatcher so registrations never collide with other plum users."""


# ------------------------------------------------------------------------------
# TYPES
# ------------------------------------------------------------------------------


class Shape(enum.Enum):
    """The closed set of structural categories a value can fall into."""

    SEQUENCE = "sequence"
    ASSOCIATIVE = "associative"
    INDIRECTION = "indirection"
    COMPOSITE = "composite"
    SCALAR = "scalar"


class _Invalid:
    """Placeholder for a value that exists in name only."""

    _instance = None

    def __new__(cls) -> "_Invalid":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<invalid>"

    def __bool__(self) -> bool:
        return False


INVALID = _Invalid()
"""Stands in for dead references, empty cells and unreadable fields."""


_OPAQUE_TYPES = (
    type,
    ModuleType,
    enum.Enum,
    BaseException,
    Number,
    partial,
    os.PathLike,
    GenericAlias,
)

_PROXY_TYPES = (weakref.ProxyType, weakref.CallableProxyType)


def _is_opaque(value: Any) -> bool:
    """Values that carry attributes but are rendered as plain literals."""
    return (
        isinstance(value, _OPAQUE_TYPES)
        or inspect.isroutine(value)
        or get_origin(value) is not None
    )


def is_proxy(value: Any) -> bool:
    """Checks for a `weakref.proxy` without touching its referent."""
    return type(value) in _PROXY_TYPES


def _read_field(value: Any, name: str) -> Any:
    """Reads an attribute, yielding `INVALID` for any failure."""
    try:
        return getattr(value, name)
    except Exception as e:
        logger.debug(f"Unreadable field {name!r} on {type(value)!r}: {e!r}")
        return INVALID


@cached
def _slot_names(cls: type) -> Tuple[str, ...]:
    """Collects `__slots__` along the MRO, base classes first."""
    names = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            # private slots are stored under their mangled name
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            if slot not in names:
                names.append(slot)
    return tuple(names)


# ============================================================================
# Dispatched shape classification
# ============================================================================


@_dispatch
def classify(value: object) -> Shape:
    """
    Classifies a value by its runtime shape.

    Anything not explicitly registered is a composite when it is a
    dataclass instance or carries instance attributes, and a scalar
    otherwise.

    Args:
        value: The value to classify

    Returns:
        The `Shape` driving how the value is rendered
    """
    if _is_opaque(value):
        return Shape.SCALAR
    if is_dataclass(value):
        return Shape.COMPOSITE
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return Shape.COMPOSITE
    return Shape.SCALAR


@_dispatch
def classify(value: Union[str, bytes, bytearray, memoryview, range]) -> Shape:
    """Text, binary buffers and ranges are sequences rendered as literals."""
    return Shape.SCALAR


@_dispatch
def classify(value: Sequence) -> Shape:
    return Shape.SEQUENCE


@_dispatch
def classify(value: AbstractSet) -> Shape:
    return Shape.SEQUENCE


@_dispatch
def classify(value: tuple) -> Shape:
    """Named tuples are records, every other tuple is a sequence."""
    if hasattr(type(value), "_fields"):
        return Shape.COMPOSITE
    return Shape.SEQUENCE


@_dispatch
def classify(value: Mapping) -> Shape:
    return Shape.ASSOCIATIVE


@_dispatch
def classify(value: BaseModel) -> Shape:
    return Shape.COMPOSITE


@_dispatch
def classify(value: weakref.ref) -> Shape:
    return Shape.INDIRECTION


@_dispatch
def classify(value: CellType) -> Shape:
    return Shape.INDIRECTION


def shape_of(value: Any) -> Shape:
    """
    Classifies a value, falling back to `Shape.SCALAR` when the registry
    cannot decide between overlapping registrations or a type check fails.

    Weak proxies are indirections. They are recognised by their exact type
    before dispatch, since matching a proxy against the registered types
    reaches through to its referent (and raises once the referent is gone).
    """
    if is_proxy(value):
        return Shape.INDIRECTION
    try:
        return classify(value)
    except Exception as e:
        logger.debug(f"Falling back to scalar for {type(value)!r}: {e}")
        return Shape.SCALAR


# ============================================================================
# Dispatched composite fields
# ============================================================================


@_dispatch
def fields_of(value: object):
    """
    Yields the `(name, value)` pairs of a composite in declaration order.

    Fields that cannot be read yield `INVALID` in place of a value.
    """
    if is_dataclass(value) and not isinstance(value, type):
        for field in fields(value):
            yield field.name, _read_field(value, field.name)
        return

    for slot in _slot_names(type(value)):
        yield slot, _read_field(value, slot)
    try:
        attributes = value.__dict__
    except AttributeError:
        return
    except Exception as e:
        logger.debug(f"Unreadable __dict__ on {type(value)!r}: {e!r}")
        return
    yield from attributes.items()


@_dispatch
def fields_of(value: tuple):
    yield from zip(getattr(type(value), "_fields", ()), value)


@_dispatch
def fields_of(value: BaseModel):
    for name in type(value).model_fields:
        yield name, _read_field(value, name)
    yield from (value.__pydantic_extra__ or {}).items()


# ============================================================================
# Dispatched dereferencing
# ============================================================================


@_dispatch
def deref(value: object):
    """
    Returns the single value an indirection points at, or `INVALID` when
    the reference is dead or empty.
    """
    logger.debug(f"No dereference registered for {type(value)!r}")
    return INVALID


@_dispatch
def deref(value: weakref.ref):
    target = value()
    return INVALID if target is None else target


@_dispatch
def deref(value: CellType):
    try:
        return value.cell_contents
    except ValueError:
        return INVALID


def _proxy_target(value: Any) -> Any:
    try:
        if isinstance(value, type):
            return value.__mro__[0]
        # a proxy forwards attribute access, so any bound method carries the referent
        return value.__getattribute__.__self__
    except ReferenceError:
        return INVALID


def target_of(value: Any) -> Any:
    """
    Returns what an indirection points at, or `INVALID` when the reference
    is dead or empty.

    Weak proxies are resolved directly; every other indirection goes
    through the `deref` registry.
    """
    if is_proxy(value):
        return _proxy_target(value)
    return deref(value)


# ------------------------------------------------------------------------------
# CHILDREN
# ------------------------------------------------------------------------------


def children(value: Any, shape: Shape) -> Iterator[Tuple[str, Any]]:
    """
    Yields the named children of a container or composite value.

    Sequence children are named by their zero-based index, mapping children
    by the textual form of their key and composite children by field name.
    Indirections and scalars have no named children.

    Args:
        value: The value to expand
        shape: The shape `value` was classified as

    Returns:
        An iterator of `(name, child)` pairs
    """
    if shape is Shape.SEQUENCE:
        for index, item in enumerate(value):
            yield str(index), item
    elif shape is Shape.ASSOCIATIVE:
        for key, item in value.items():
            yield safely(str, key, "str"), item
    elif shape is Shape.COMPOSITE:
        yield from fields_of(value)
