"""
✼ vardump.core.render

Contains the stateless line builders that turn a `(name, value)` pair at a
given depth into one newline-terminated line of dump output.
"""

from typing import Optional

from beartype.typing import Any
from plum import Dispatcher

from .._utils._text import safely, type_name
from .shapes import is_proxy

__all__ = [
    "INDENT",
    "type_descriptor",
    "describe",
    "literal",
    "render_indent",
    "render_type_line",
    "render_value_line",
]


_dispatch = Dispatcher()

INDENT = "  "
"""One level of indentation."""


def type_descriptor(value: Any) -> str:
    """
    Returns the canonical name of a value's concrete type.

    Builtin types are named by their qualified name alone (`int`, `dict`),
    everything else is prefixed with its defining module
    (`__main__.Person`).
    """
    return type_name(type(value))


@_dispatch
def describe(value: object) -> Optional[str]:
    """
    Returns the self-description of a value, if it has one.

    A value describes itself when its type overrides `__str__`; the
    inherited `object.__str__` (which only defers to `__repr__`) does not
    count.

    Args:
        value: The value to describe

    Returns:
        The text of `str(value)`, or None if the value has no self-description
    """
    if type(value).__str__ is object.__str__:
        return None
    return safely(str, value, "str")


def literal(value: Any) -> str:
    """Returns the debug literal of a value (its `repr`)."""
    return safely(repr, value, "repr")


# ------------------------------------------------------------------------------
# LINES
# ------------------------------------------------------------------------------


def render_indent(depth: int) -> str:
    """Two spaces per level of depth; nothing for depth zero or below."""
    return INDENT * max(depth, 0)


def render_type_line(name: str, value: Any, depth: int) -> str:
    """
    Renders the header line of a container, composite or indirection.

    ```
    <indent><name>(<type>)[ <self-description>]
    ```
    """
    line = f"{render_indent(depth)}{name}({type_descriptor(value)})"
    # a proxy forwards `__str__` to its referent, which is rendered below it
    description = None if is_proxy(value) else describe(value)
    if description is not None:
        line = f"{line} {description}"
    return f"{line}\n"


def render_value_line(name: str, value: Any, depth: int) -> str:
    """
    Renders the single line of a scalar value.

    ```
    <indent><name>(<type>) <literal>
    ```
    """
    return f"{render_indent(depth)}{name}({type_descriptor(value)}) {literal(value)}\n"
