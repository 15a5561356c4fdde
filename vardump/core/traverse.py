"""
✼ vardump.core.traverse

Contains the recursive traversal engine that walks an arbitrary value and
yields its rendered lines.

There is no cycle detection. A self-referential structure (or one nested
deeper than the interpreter's recursion limit) raises `RecursionError`.
"""

from dataclasses import dataclass, field
from typing import List

from beartype.typing import Any, Iterator

from .render import render_type_line, render_value_line
from .shapes import INVALID, Shape, children, shape_of, target_of

__all__ = [
    "DumpState",
    "walk",
]


@dataclass
class DumpState:
    """
    ```markdown
    Mutable state owned by a single traversal.
    ```

    `indent` starts at -1 so the root value, entered at depth 0, is
    rendered without indentation.
    """

    indent: int = -1
    lines: List[str] = field(default_factory=list)

    @property
    def out(self) -> str:
        """The accumulated dump text."""
        return "".join(self.lines)


def walk(value: Any, name: str = "", state: DumpState | None = None) -> Iterator[str]:
    """
    Lazily yields the rendered lines for `value` and everything under it.

    Containers, composites and indirections yield one header line followed
    by the lines of their children, one level deeper. Scalars and invalid
    values yield exactly one line. An indirection hands its own `name` down
    to the value it points at.

    Args:
        value: The value to walk (may be `INVALID`)
        name: The display name of the value (index, key or field name)
        state: The traversal state; a fresh one is created when omitted

    Returns:
        An iterator over newline-terminated lines
    """
    if state is None:
        state = DumpState()

    state.indent += 1
    try:
        if value is INVALID:
            yield render_value_line(name, "", state.indent)
            return

        shape = shape_of(value)
        if shape is Shape.SCALAR:
            yield render_value_line(name, value, state.indent)
            return

        yield render_type_line(name, value, state.indent)
        if shape is Shape.INDIRECTION:
            yield from walk(target_of(value), name, state)
        else:
            for child_name, child in children(value, shape):
                yield from walk(child, child_name, state)
    finally:
        state.indent -= 1
