"""Structured warnings produced while parsing and generating a level.

Nothing in the layout pipeline is fatal. Problems are recorded as warning
values and returned alongside the primary result so callers (and tests) can
inspect exactly what went wrong and decide how strict to be. Each warning is
also written to the module logger of the component that raised it.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Type


@dataclass(frozen=True)
class LevelWarning:
    """Base class for every recoverable level problem."""
    x: int
    y: int

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def message(self) -> str:
        return f"{self.kind} at ({self.x}, {self.y})"


@dataclass(frozen=True)
class ParseWarning(LevelWarning):
    """A layout token could not be turned into a tile code; EMPTY was used."""
    token: str = ""
    reason: str = "not an integer"

    @property
    def message(self) -> str:
        return f"Int parse failed at ({self.x}, {self.y}) for token {self.token!r}: {self.reason}"


@dataclass(frozen=True)
class GeometryWarning(LevelWarning):
    """No rotation rule matched a wall-like cell; the fallback rotation was used."""
    tile_name: str = ""
    detail: str = ""

    @property
    def message(self) -> str:
        text = f"No rotation rule matched {self.tile_name} at ({self.x}, {self.y})"
        if self.detail:
            text += f": {self.detail}"
        return text


@dataclass(frozen=True)
class InvalidTileIndex(LevelWarning):
    """A tile code has no asset in the configured tile set; placement was skipped."""
    tile_code: int = 0
    tile_set_size: int = 0

    @property
    def message(self) -> str:
        return (f"Invalid tile index ({self.tile_code}) in level csv at ({self.x}, {self.y}); "
                f"tile set has {self.tile_set_size} tiles")


class LevelWarningsError(Exception):
    """Raised on request when a generation pass produced warnings."""

    def __init__(self, warnings: "Diagnostics"):
        self.warnings = warnings
        summary = ", ".join(f"{kind}={count}" for kind, count in warnings.summary().items())
        super().__init__(f"Level generation produced {len(warnings)} warning(s): {summary}")


@dataclass
class Diagnostics:
    """Ordered collection of warnings from one parse or generation pass."""
    items: List[LevelWarning] = field(default_factory=list)

    def add(self, warning: LevelWarning) -> LevelWarning:
        self.items.append(warning)
        return warning

    def extend(self, other) -> None:
        self.items.extend(other)

    def of_kind(self, kind: Type[LevelWarning]) -> List[LevelWarning]:
        """Get all warnings of a given warning class."""
        return [w for w in self.items if isinstance(w, kind)]

    def count(self, kind: Optional[Type[LevelWarning]] = None) -> int:
        if kind is None:
            return len(self.items)
        return len(self.of_kind(kind))

    def at(self, x: int, y: int) -> List[LevelWarning]:
        """Get warnings recorded for one cell."""
        return [w for w in self.items if w.position == (x, y)]

    def summary(self):
        """Count warnings per kind, in first-seen order."""
        counts = {}
        for w in self.items:
            counts[w.kind] = counts.get(w.kind, 0) + 1
        return counts

    def messages(self) -> List[str]:
        return [w.message for w in self.items]

    def __iter__(self) -> Iterator[LevelWarning]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)
