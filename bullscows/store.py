"""
In-memory store
Holds solver sessions in memory. The human thinks of the secret; the session
keeps the solver's state, the guess waiting for an answer, and a scoreboard.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from uuid import uuid4
from time import time
from threading import RLock

from .codes import Code, Feedback
from .engine import OPENING_GUESS, Codebreaker, NoConsistentSecret
from .history import Guess
from .types import GameStatus

logger = logging.getLogger(__name__)


@dataclass
class Game:
    id: str
    breaker: Codebreaker
    # The guess the human still has to answer; None once solved
    current_guess: Optional[Code] = None
    status: GameStatus = "in_progress"
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)

    @property
    def rounds(self) -> int:
        return len(self.breaker.history)


# Scoreboard structure
@dataclass
class Stats:
    games_started: int = 0
    games_solved: int = 0
    # Reports rejected because no secret fits them any more
    contradictions: int = 0

    total_rounds_in_solves: int = 0
    fastest_solve_rounds: Optional[int] = None

    @property
    def average_rounds_to_solve(self) -> Optional[float]:
        if self.games_solved == 0:
            return None
        return self.total_rounds_in_solves / self.games_solved


class GameStore:
    def __init__(self, opener: Optional[Code] = OPENING_GUESS) -> None:
        self._games: Dict[str, Game] = {}
        self._lock = RLock()
        self._stats = Stats()
        self._opener = opener

    def create(self, seed: int) -> Game:
        new_id = str(uuid4())
        breaker = Codebreaker(random.Random(seed), self._opener)
        game = Game(id=new_id, breaker=breaker, current_guess=breaker.next_guess())
        with self._lock:
            self._games[new_id] = game
            self._stats.games_started += 1
        logger.info("game %s started (seed=%d), first guess %s", new_id, seed, game.current_guess)
        return game

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def report(self, game_id: str, feedback: Feedback) -> Optional[Game]:
        """
        Record the human's answer to the current guess and line up the next one.

        Returns None for an unknown game and the unchanged game once it is solved.
        Raises NoConsistentSecret, without recording anything, when the answer
        contradicts the earlier ones; the human can then resend a corrected answer.
        """
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None

            if game.status != "in_progress":
                # Already solved: ignore extra answers
                return game

            guess = game.current_guess
            breaker = game.breaker

            if breaker.would_remain(guess, feedback) == 0:
                self._stats.contradictions += 1
                logger.warning("game %s: %s for %s contradicts earlier answers", game_id, feedback, guess)
                raise NoConsistentSecret(list(breaker.history) + [Guess(code=guess, feedback=feedback)])

            breaker.record(guess, feedback)
            game.updated_at = time()

            if feedback.is_win:
                game.status = "solved"
                game.current_guess = None
                self._update_stats_on_solve(game)
                logger.info("game %s solved: %s in %d round(s)", game_id, guess, game.rounds)
            else:
                game.current_guess = breaker.next_guess()

            return game

    def candidates(self, game_id: str) -> Optional[Tuple[Code, ...]]:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            return game.breaker.candidates

    def _update_stats_on_solve(self, game: Game) -> None:
        self._stats.games_solved += 1
        self._stats.total_rounds_in_solves += game.rounds
        if self._stats.fastest_solve_rounds is None or game.rounds < self._stats.fastest_solve_rounds:
            self._stats.fastest_solve_rounds = game.rounds

    def get_stats(self) -> Stats:
        return self._stats

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
