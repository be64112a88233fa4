# src/cryptwalk/mapgen/placement.py
# Bounded rejection sampling with a tagged outcome, so a generator that gives
# up on a slot says so instead of silently returning less.

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from ..rect import Rect

T = TypeVar("T")


class Status(Enum):
    PLACED = "placed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Placement(Generic[T]):
    status: Status
    value: Optional[T]
    attempts: int
    label: str = ""

    @property
    def placed(self) -> bool:
        return self.status is Status.PLACED


def place_with_budget(
    sample: Callable[[], Optional[T]],
    accept: Callable[[T], bool],
    budget: int,
    label: str = "",
) -> Placement[T]:
    """
    Draw up to `budget` candidates. `sample` may return None to burn an
    attempt without a candidate (e.g. the size cannot fit this time).
    """
    for attempt in range(1, budget + 1):
        cand = sample()
        if cand is None:
            continue
        if accept(cand):
            return Placement(Status.PLACED, cand, attempt, label)
    return Placement(Status.SKIPPED, None, budget, label)


def overlaps_any(r: Rect, taken: Iterable[Rect], pad: int = 0) -> bool:
    """True if `r` touches any rect in `taken` grown by `pad` cells."""
    for o in taken:
        if r.intersects(o.expand(pad) if pad else o):
            return True
    return False


@dataclass
class PlacementLog:
    entries: List[Placement] = field(default_factory=list)

    def record(self, p: Placement) -> Placement:
        self.entries.append(p)
        return p

    @property
    def placed(self) -> List[Placement]:
        return [p for p in self.entries if p.placed]

    @property
    def skipped(self) -> List[Placement]:
        return [p for p in self.entries if not p.placed]

    def summary(self) -> str:
        return f"placed={len(self.placed)} skipped={len(self.skipped)}"
