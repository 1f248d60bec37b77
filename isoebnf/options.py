"""Per-call parser options."""

from __future__  import annotations
import sys
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 64

# Python frames spent per bracket level: primary -> bracket -> definition-list
# -> single-definition -> term -> factor, plus one scanner call.
FRAMES_PER_LEVEL = 7
# frames reserved for the caller and the error path
_FRAME_RESERVE = 100


def depth_ceiling() -> int:
    """Deepest nesting the current recursion limit can hold."""
    return max(1, (sys.getrecursionlimit() - _FRAME_RESERVE) // FRAMES_PER_LEVEL)


@dataclass(frozen=True)
class ParseOptions:
    """
    ParseOptions
    ============
    - max_depth : deepest allowed bracket nesting ((), [], {}, (/ /), (: :));
                  at most depth_ceiling() for the recursion limit in force
    - implicit_concatenation :
                  a term written directly after another one (`"a" [ "b" ]`)
                  continues the single definition as if `,` stood between them;
                  False demands the concatenate symbol as ISO 14977 writes it
    - debug     : trace parsed rules to stderr ("[DEBUG] ..." lines)
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    implicit_concatenation: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        ceiling = depth_ceiling()
        if self.max_depth > ceiling:
            raise ValueError(
                f"max_depth {self.max_depth} exceeds {ceiling}, the deepest nesting "
                f"the recursion limit ({sys.getrecursionlimit()}) can hold"
            )
