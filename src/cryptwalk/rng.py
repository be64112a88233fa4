from dataclasses import dataclass
from typing import Sequence, TypeVar

A = 16807
M = 0x7FFFFFFF  # 2^31-1
INV_A = 1407677000  # because (A * INV_A) % M == 1

T = TypeVar("T")


def pm_next(state: int) -> int:
    return (state * A) % M


def pm_prev(state: int) -> int:
    return (state * INV_A) % M


def normalize_seed(seed: int) -> int:
    """Map any int onto a valid Park–Miller state (1..M-1)."""
    s = seed % M
    return s if s != 0 else 1


@dataclass
class PMRandom:
    """
    Park–Miller minimal-standard generator.

    One instance is owned by a run and handed to every generator explicitly;
    nothing in the package reads a shared module-level stream. The same seed
    replays the same sequence on any interpreter.
    """
    state: int

    @classmethod
    def from_seed(cls, seed: int) -> "PMRandom":
        return cls(normalize_seed(seed))

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def next_int(self, n: int) -> int:
        """Uniform-ish int in 0..n-1."""
        if n <= 0:
            raise ValueError("n must be positive")
        return self.next32() % n

    def range(self, lo: int, hi: int) -> int:
        """Inclusive on both ends."""
        if hi < lo:
            raise ValueError(f"bad range {lo}..{hi}")
        return lo + self.next_int(hi - lo + 1)

    def chance(self, p: float) -> bool:
        return (self.next32() - 1) / (M - 1) < p

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("choice from empty sequence")
        return seq[self.next_int(len(seq))]

    def fork(self) -> "PMRandom":
        # One parent draw seeds the child; the parent stays reproducible.
        return PMRandom.from_seed(self.next32() ^ 0x5DEECE6)
