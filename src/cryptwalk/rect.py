from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    w: int
    h: int

    @property
    def x2(self) -> int:
        return self.x + self.w - 1

    @property
    def y2(self) -> int:
        return self.y + self.h - 1

    @property
    def center(self) -> Tuple[int, int]:
        # Floor division on purpose: a 7-wide room centers on x+3.
        return (self.x + self.w // 2, self.y + self.h // 2)

    @property
    def area(self) -> int:
        return self.w * self.h

    def intersects(self, other: "Rect") -> bool:
        return (self.x <= other.x2 and self.x2 >= other.x
                and self.y <= other.y2 and self.y2 >= other.y)

    def expand(self, pad: int) -> "Rect":
        return Rect(self.x - pad, self.y - pad, self.w + pad * 2, self.h + pad * 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x <= self.x2 and self.y <= y <= self.y2

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.h):
            for ix in range(self.x, self.x + self.w):
                yield ix, iy

    def clamp_into(self, width: int, height: int, margin: int = 1) -> "Rect":
        """
        Shift (never resize) so the top-left lands in margin..dim-1-margin-size,
        the same window the dungeon samples room positions from.
        """
        max_x = (width - 1 - margin) - self.w
        max_y = (height - 1 - margin) - self.h
        nx = max(margin, min(self.x, max(margin, max_x)))
        ny = max(margin, min(self.y, max(margin, max_y)))
        return Rect(nx, ny, self.w, self.h)
