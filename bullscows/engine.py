"""
Pure game logic (no HTTP, no storage).

We compute two feedback numbers for each guess:
- bulls: how many positions hold the same digit in both codes
- cows: how many digits appear in both codes, but at different positions

Codebreaking keeps every code that would have produced all the feedback seen
so far and guesses one of them at random. Round 1 always uses a fixed opener.
The true secret can never be filtered out, so a game against an honest
codemaker always ends; an empty candidate set means the answers contradict
each other and is reported as NoConsistentSecret.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from .codes import CODE_LENGTH, UNIVERSE, Code, Feedback, random_code
from .history import Guess, History
from .types import RandomSource

logger = logging.getLogger(__name__)

OPENING_GUESS = Code.of(0, 1, 2, 3)

# Every legal (bulls, cows) pair, built once; evaluate_feedback hands these out
_FEEDBACK: Dict[Tuple[int, int], Feedback] = {
    (bulls, cows): Feedback(bulls, cows)
    for bulls in range(CODE_LENGTH + 1)
    for cows in range(CODE_LENGTH + 1 - bulls)
}


class NoConsistentSecret(Exception):
    """No code in the universe fits every answer recorded in the history."""

    def __init__(self, history: Iterable[Guess]):
        self.history = list(history)
        super().__init__(
            f"No secret is consistent with the {len(self.history)} answer(s) given so far."
        )


def evaluate_feedback(secret: Code, guess: Code) -> Feedback:
    """
    Example:
      secret = 0135
      guess  = 0523
      bulls = 1  (the 0 is in the same place)
      cows  = 2  (3 and 5 are in both codes, elsewhere)
    Swapping the two codes gives the same answer.
    """
    s, g = secret.digits, guess.digits
    bulls = (s[0] == g[0]) + (s[1] == g[1]) + (s[2] == g[2]) + (s[3] == g[3])
    # Digits are distinct within a code, so shared digits = bulls + cows
    shared = len(secret.digit_set & guess.digit_set)
    return _FEEDBACK[(bulls, shared - bulls)]


def narrow(candidates: Iterable[Code], guess: Code, feedback: Feedback) -> Tuple[Code, ...]:
    """Keep the candidates that would have answered `guess` with `feedback`."""
    return tuple(c for c in candidates if evaluate_feedback(c, guess) == feedback)


def consistent_candidates(history: Iterable[Guess], pool: Iterable[Code] = UNIVERSE) -> Tuple[Code, ...]:
    candidates = tuple(pool)
    for entry in history:
        candidates = narrow(candidates, entry.code, entry.feedback)
        if not candidates:
            break
    return candidates


def partition(pool: Iterable[Code], guess: Code) -> Dict[Feedback, Tuple[Code, ...]]:
    """Group `pool` by the feedback each member would give to `guess`."""
    groups: Dict[Feedback, List[Code]] = {}
    for code in pool:
        groups.setdefault(evaluate_feedback(code, guess), []).append(code)
    return {feedback: tuple(codes) for feedback, codes in groups.items()}


@lru_cache(maxsize=64)
def split_universe(guess: Code) -> Dict[Feedback, Tuple[Code, ...]]:
    # Universe and opener are both constant, so the first split never changes
    return partition(UNIVERSE, guess)


def _pick(candidates: Tuple[Code, ...], rng: RandomSource, history: Iterable[Guess]) -> Code:
    if not candidates:
        raise NoConsistentSecret(history)
    return rng.choice(candidates)


def next_guess(history: History, rng: RandomSource, opener: Optional[Code] = OPENING_GUESS) -> Code:
    """
    Round 1: the opener (a random code when opener is None).
    Later rounds: a uniformly random code among those consistent with the
    whole history. Raises NoConsistentSecret when there are none.
    """
    if len(history) == 0:
        return opener if opener is not None else random_code(rng)
    return _pick(consistent_candidates(history), rng, history)


class Codebreaker:
    """
    One game's worth of solver state: its history, the candidates still in
    play, the random source used to break ties, and the opener.

    Candidates are narrowed one answer at a time, which gives the same set as
    re-filtering the whole universe with the whole history.
    """

    def __init__(self, rng: RandomSource, opener: Optional[Code] = OPENING_GUESS):
        self.rng = rng
        self.opener = opener if opener is not None else random_code(rng)
        self.history = History()
        self._candidates: Tuple[Code, ...] = UNIVERSE

    @property
    def candidates(self) -> Tuple[Code, ...]:
        return self._candidates

    def next_guess(self) -> Code:
        if len(self.history) == 0:
            return self.opener
        return _pick(self._candidates, self.rng, self.history)

    def would_remain(self, guess: Code, feedback: Feedback) -> int:
        """How many candidates would survive this answer, without recording it."""
        return len(self._narrowed(guess, feedback))

    def record(self, guess: Code, feedback: Feedback) -> Guess:
        self._candidates = self._narrowed(guess, feedback)
        entry = self.history.append(guess, feedback)
        logger.debug(
            "round %d: %s -> %s, %d candidate(s) left",
            len(self.history), guess, feedback.message(), len(self._candidates),
        )
        return entry

    def _narrowed(self, guess: Code, feedback: Feedback) -> Tuple[Code, ...]:
        if self._candidates is UNIVERSE:
            return split_universe(guess).get(feedback, ())
        return narrow(self._candidates, guess, feedback)
