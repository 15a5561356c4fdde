"""
vardump._utils._text

Contains the text helpers shared by the shape registry and the renderer:
canonical type names and user-code text conversions that never raise.
"""

import logging
from typing import Any, Callable

from ._cache import cached

logger = logging.getLogger(__name__)

__all__ = [
    "type_name",
    "safely",
]


@cached
def type_name(cls: type) -> str:
    """`qualname` for builtins, `module.qualname` for everything else."""
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", cls.__name__)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def safely(render: Callable[[Any], str], value: Any, label: str) -> str:
    """
    Renders `value` with `render` (usually `str` or `repr`).

    A raising `__str__`/`__repr__` is logged and turned into
    `<Type label raised ExcName: message>` instead of propagating.
    """
    try:
        return render(value)
    except Exception as e:
        name = type_name(type(value))
        logger.debug(f"{label} of {name} raised: {e!r}")
        return f"<{name} {label} raised {type(e).__name__}: {e}>"
