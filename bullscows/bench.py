"""
Batch mode: play the solver against every possible secret and measure it.

Each game gets its own Codebreaker and its own random source; the universe is
the only thing they share and nobody writes to it, so games run side by side
in a process pool and only their round counts come back.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from .codes import UNIVERSE, Code
from .engine import OPENING_GUESS, Codebreaker, evaluate_feedback
from .types import RandomSource

logger = logging.getLogger(__name__)


def solve(secret: Code, rng: RandomSource, opener: Optional[Code] = OPENING_GUESS) -> int:
    """Play one game against a known secret; returns the rounds used, winning guess included."""
    breaker = Codebreaker(rng, opener)
    while True:
        guess = breaker.next_guess()
        feedback = evaluate_feedback(secret, guess)
        breaker.record(guess, feedback)
        if feedback.is_win:
            return len(breaker.history)


@dataclass
class BenchResult:
    rounds: Dict[Code, int] = field(default_factory=dict)

    @property
    def games(self) -> int:
        return len(self.rounds)

    @property
    def average(self) -> float:
        if not self.rounds:
            return 0.0
        return sum(self.rounds.values()) / len(self.rounds)

    @property
    def worst(self) -> int:
        return max(self.rounds.values(), default=0)

    @property
    def histogram(self) -> Dict[int, int]:
        return dict(sorted(Counter(self.rounds.values()).items()))


def _game_rng(seed: Optional[int], index: int) -> random.Random:
    # Same seed -> same guesses for every secret, whatever the worker order
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}-{index}")


def _play(job: Tuple[int, Code, Optional[int], Optional[Code]]) -> Tuple[int, int]:
    # Module level so worker processes can unpickle it
    index, secret, seed, opener = job
    return index, solve(secret, _game_rng(seed, index), opener)


def run_benchmark(
    workers: int = 4,
    seed: Optional[int] = None,
    opener: Optional[Code] = OPENING_GUESS,
    secrets: Sequence[Code] = UNIVERSE,
) -> BenchResult:
    workers = max(1, workers)
    jobs = [(index, secret, seed, opener) for index, secret in enumerate(secrets)]
    chunksize = max(1, len(jobs) // (workers * 4))

    logger.info("benchmark: %d secret(s), %d worker(s), seed=%s", len(secrets), workers, seed)
    result = BenchResult()
    with ProcessPoolExecutor(max_workers=workers) as executor:
        for index, rounds in executor.map(_play, jobs, chunksize=chunksize):
            result.rounds[secrets[index]] = rounds

    logger.info(
        "benchmark done: avg=%.4f worst=%d histogram=%s",
        result.average, result.worst, result.histogram,
    )
    return result
