"""
Value types shared by every part of the game.

- Code: 4 pairwise-distinct digits (0..9), order matters. "0123" is the text form.
- Feedback: (bulls, cows) for one guess.
- UNIVERSE: every valid Code (5040 of them), built once at import.

Bad input fails loudly at construction time, so a malformed Code or Feedback
never travels further than the line that tried to build it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import permutations
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from .types import Digit, Digits, RandomSource

CODE_LENGTH = 4
DIGITS: Tuple[Digit, ...] = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9)


class InvalidCodeError(ValueError):
    """Digits out of range, repeated, or the wrong number of them."""


class InvalidFeedbackError(ValueError):
    """Bulls/cows out of range or adding up to more than 4."""


@dataclass(frozen=True)
class Code:
    digits: Digits
    # Set view of digits, used for counting cows
    digit_set: FrozenSet[Digit] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        digits = tuple(self.digits)
        if len(digits) != CODE_LENGTH:
            raise InvalidCodeError(f"A code needs exactly {CODE_LENGTH} digits, got {len(digits)}.")
        for digit in digits:
            if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= 9:
                raise InvalidCodeError(f"Each digit must be between 0 and 9 inclusive, got {digit!r}.")
        if len(set(digits)) != CODE_LENGTH:
            raise InvalidCodeError(f"Digits must all be different, got {digits}.")
        object.__setattr__(self, "digits", digits)
        object.__setattr__(self, "digit_set", frozenset(digits))

    @classmethod
    def of(cls, *digits: Digit) -> "Code":
        return cls(tuple(digits))

    @classmethod
    def parse(cls, text: str) -> "Code":
        """
        Parse the canonical form: four digits, no separators.
          Code.parse("0123") -> Code(digits=(0, 1, 2, 3))
        Surrounding whitespace is ignored; anything else raises InvalidCodeError.
        """
        text = text.strip()
        if len(text) != CODE_LENGTH or any(ch not in "0123456789" for ch in text):
            raise InvalidCodeError(f"Expected {CODE_LENGTH} digits like '0123', got {text!r}.")
        return cls(tuple(int(ch) for ch in text))

    def __str__(self) -> str:
        return "".join(str(d) for d in self.digits)


@dataclass(frozen=True)
class Feedback:
    bulls: int
    cows: int

    def __post_init__(self) -> None:
        for name, value in (("Bulls", self.bulls), ("Cows", self.cows)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidFeedbackError(f"{name} must be a whole number, got {value!r}.")
        if not 0 <= self.bulls <= CODE_LENGTH:
            raise InvalidFeedbackError(f"Bulls must be between 0 and {CODE_LENGTH}, got {self.bulls}.")
        if not 0 <= self.cows <= CODE_LENGTH:
            raise InvalidFeedbackError(f"Cows must be between 0 and {CODE_LENGTH}, got {self.cows}.")
        if self.bulls + self.cows > CODE_LENGTH:
            raise InvalidFeedbackError(
                f"Bulls and cows add up to {self.bulls + self.cows}, more than {CODE_LENGTH}."
            )

    @property
    def is_win(self) -> bool:
        return self.bulls == CODE_LENGTH

    def message(self) -> str:
        if self.bulls == 0 and self.cows == 0:
            return "no bulls, no cows"
        return f"{self.bulls} bull(s) and {self.cows} cow(s)"


WIN = Feedback(CODE_LENGTH, 0)


def build_universe() -> Tuple[Code, ...]:
    """All 10*9*8*7 = 5040 codes, in lexicographic order of their digits."""
    return tuple(Code(p) for p in permutations(DIGITS, CODE_LENGTH))


UNIVERSE: Tuple[Code, ...] = build_universe()


def exclude(items: Sequence, to_remove: Iterable) -> list:
    """
    Remove one occurrence of each element of `to_remove` from a copy of `items`.
      exclude([0, 1, 2, 3, 4], [0, 3]) -> [1, 2, 4]
    Asking to remove something that is not there raises ValueError.
    """
    remaining = list(items)
    for item in to_remove:
        try:
            index = remaining.index(item)
        except ValueError:
            raise ValueError(f"Cannot exclude {item!r}: not present.") from None
        del remaining[index]
    return remaining


def random_code(rng: RandomSource, avoid: Iterable[Digit] = ()) -> Code:
    """
    Build a random Code, preferring digits not in `avoid`.
    When fewer than 4 fresh digits remain, the rest is drawn from `avoid`.
    """
    avoid = list(dict.fromkeys(avoid))
    fresh: List[Digit] = exclude(DIGITS, avoid)
    rng.shuffle(fresh)
    chosen = fresh[:CODE_LENGTH]
    if len(chosen) < CODE_LENGTH:
        rng.shuffle(avoid)
        chosen += avoid[:CODE_LENGTH - len(chosen)]
    return Code(tuple(chosen))
