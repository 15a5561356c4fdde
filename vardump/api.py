"""
vardump.api

```markdown
Entry points for dumping a value's full structure as indented,
type-annotated text.
```
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Iterator, Optional, TextIO

from .core.traverse import DumpState, walk

logger = logging.getLogger(__name__)

__all__ = [
    "Dumper",
    "DumperConfig",
    "create_dumper",
    "dump",
    "sdump",
    "iter_dump",
]


@dataclass
class DumperConfig:
    """
    ```markdown
    Configuration for Dumper initialization.
    ```
    """

    stream: Optional[TextIO] = None  # Resolved to sys.stdout at dump time when None
    flush: bool = False


class Dumper:
    """
    ```markdown
    Dumps values to text, writing to a configured stream or returning the
    text directly.
    ```

    Every call walks the value with its own fresh `DumpState`, so a single
    Dumper can be shared freely.

    Example:
        ```python
        dumper = Dumper(config=DumperConfig(stream=sys.stderr))
        dumper.dump({"a": [1, 2]})

        text = dumper.sdump({"a": [1, 2]})
        ```
    """

    def __init__(self, config: Optional[DumperConfig] = None):
        """
        ```markdown
        Initialize the Dumper.
        ```

        Args:
            config: Configuration object for the dumper.
        """
        self.config = config or DumperConfig()
        if self.config.stream is not None and not callable(
            getattr(self.config.stream, "write", None)
        ):
            raise TypeError(
                f"Dumper stream must be writable, got {type(self.config.stream)!r}."
            )
        logger.debug(f"Dumper initialized with stream: {self.config.stream!r}")

    def iter_lines(self, value: Any) -> Iterator[str]:
        """Lazily yields the newline-terminated lines dumped for `value`."""
        return walk(value, "", DumpState())

    def sdump(self, value: Any) -> str:
        """Returns the dump text for `value`."""
        state = DumpState()
        state.lines.extend(walk(value, "", state))
        return state.out

    def dump(self, value: Any) -> None:
        """Writes the dump text for `value` to the configured stream."""
        stream = self.config.stream if self.config.stream is not None else sys.stdout
        stream.write(self.sdump(value))
        if self.config.flush:
            stream.flush()


def create_dumper(
    stream: Optional[TextIO] = None,
    flush: bool = False,
) -> Dumper:
    """
    ```markdown
    Factory function to create a Dumper instance.
    ```

    Args:
        stream: Where `Dumper.dump` writes (standard output when None).
        flush: Whether to flush the stream after every dump.

    Returns:
        An instance of Dumper.
    """
    return Dumper(DumperConfig(stream=stream, flush=flush))


def dump(value: Any, file: Optional[TextIO] = None) -> None:
    """
    Prints the indented, type-annotated structure of `value`.

    Args:
        value: Any value
        file: Stream to write to, standard output by default

    Example:
        >>> dump({"name": "Al", "tags": ["a"]})
        (dict)
          name(str) 'Al'
          tags(list)
            0(str) 'a'
    """
    Dumper(DumperConfig(stream=file)).dump(value)


def sdump(value: Any) -> str:
    """
    Returns the indented, type-annotated structure of `value` as text.

    Args:
        value: Any value

    Returns:
        The dump text, one newline-terminated line per rendered value
    """
    return Dumper().sdump(value)


def iter_dump(value: Any) -> Iterator[str]:
    """Lazily yields the lines `sdump` would join together."""
    return Dumper().iter_lines(value)
