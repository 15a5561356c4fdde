"""
✼ vardump.core

```markdown
The traversal engine, its renderer and the shape registry.
```
"""

from .shapes import (
    Shape,
    INVALID,
    classify,
    shape_of,
    is_proxy,
    target_of,
    fields_of,
    deref,
    children,
)
from .render import (
    describe,
    literal,
    type_descriptor,
    render_indent,
    render_type_line,
    render_value_line,
)
from .traverse import DumpState, walk


__all__ = [
    # ----------------------------
    # Shapes
    # ----------------------------
    "Shape",
    "INVALID",
    "classify",
    "shape_of",
    "is_proxy",
    "target_of",
    "fields_of",
    "deref",
    "children",
    # ----------------------------
    # Renderer
    # ----------------------------
    "describe",
    "literal",
    "type_descriptor",
    "render_indent",
    "render_type_line",
    "render_value_line",
    # ----------------------------
    # Traversal
    # ----------------------------
    "DumpState",
    "walk",
]
