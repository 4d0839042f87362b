"""
Labels for clarity.
"""

from typing import Literal, Protocol, Sequence, Tuple, TypeVar

Digit = int  # 0 -> 9
Digits = Tuple[Digit, Digit, Digit, Digit]
GameStatus = Literal["in_progress", "solved"]

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with `choice` and `shuffle`, e.g. random.Random(seed)."""

    def choice(self, seq: Sequence[T]) -> T: ...

    def shuffle(self, x: list) -> None: ...
