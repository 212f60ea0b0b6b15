"""Per-compilation counters."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass
class CompilerState:
    """Fragment id counter and nesting depth for one compilation run.

    A transformer creates one state per file. Sharing a state between
    compilations continues the numbering instead of restarting it.
    """

    fragment_id: int = 0
    depth: int = 0

    def next_fragment_id(self) -> int:
        self.fragment_id += 1
        return self.fragment_id

    @contextmanager
    def entered(self) -> Iterator[int]:
        """Track one level of entry-point nesting."""
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1
