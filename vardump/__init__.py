"""
✼ vardump

```markdown
Dump any Python value as an indented, type-annotated description of its
full structure.
```
"""

from importlib import import_module
from typing import Any, Dict, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .api import (
        Dumper,
        DumperConfig,
        create_dumper,
        dump,
        sdump,
        iter_dump,
    )
    from .core import (
        Shape,
        INVALID,
        DumpState,
        classify,
        fields_of,
        deref,
        describe,
        type_descriptor,
    )


IMPORT_MAP: Dict[str, Tuple[str, str]] = {
    # ----------------------------
    # API
    # ----------------------------
    "Dumper": (".api", "Dumper"),
    "DumperConfig": (".api", "DumperConfig"),
    "create_dumper": (".api", "create_dumper"),
    "dump": (".api", "dump"),
    "sdump": (".api", "sdump"),
    "iter_dump": (".api", "iter_dump"),
    # ----------------------------
    # Core
    # ----------------------------
    "Shape": (".core", "Shape"),
    "INVALID": (".core", "INVALID"),
    "DumpState": (".core", "DumpState"),
    "classify": (".core", "classify"),
    "fields_of": (".core", "fields_of"),
    "deref": (".core", "deref"),
    "describe": (".core", "describe"),
    "type_descriptor": (".core", "type_descriptor"),
}


def __getattr__(name: str) -> Any:
    """Handle dynamic imports for module attributes."""
    if name in IMPORT_MAP:
        module_path, attr_name = IMPORT_MAP[name]
        module = import_module(module_path, __name__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> "list[str]":
    """Return list of module attributes for auto-completion."""
    return list(__all__)


__getattr__.__module__ = __name__


__all__ = [
    "Dumper",
    "DumperConfig",
    "create_dumper",
    "dump",
    "sdump",
    "iter_dump",
    "Shape",
    "INVALID",
    "DumpState",
    "classify",
    "fields_of",
    "deref",
    "describe",
    "type_descriptor",
]
