"""
Testing in-memory store
- Start a session, answer guesses, and check status/rounds/history/stats.
"""

import pytest

from bullscows.codes import WIN, Code, Feedback
from bullscows.engine import NoConsistentSecret, evaluate_feedback
from bullscows.store import GameStore


def play_out(store: GameStore, game_id: str, secret: Code):
    """Answer honestly until the session is solved."""
    game = store.get(game_id)
    while game.status == "in_progress":
        game = store.report(game_id, evaluate_feedback(secret, game.current_guess))
    return game

def test_store_create_and_win_on_opener():
    store = GameStore()
    game = store.create(seed=1)

    assert game.status == "in_progress"
    assert game.current_guess == Code.parse("0123")
    assert game.rounds == 0

    solved = store.report(game.id, WIN)
    assert solved.status == "solved"
    assert solved.rounds == 1
    assert solved.current_guess is None

def test_store_solves_a_known_secret():
    store = GameStore()
    game = store.create(seed=7)
    secret = Code.parse("5913")

    solved = play_out(store, game.id, secret)
    assert solved.status == "solved"
    assert solved.breaker.history.latest.code == secret
    assert solved.breaker.candidates == (secret,)

def test_contradictory_answer_is_rejected_and_not_recorded():
    store = GameStore()
    game = store.create(seed=3)

    with pytest.raises(NoConsistentSecret):
        store.report(game.id, Feedback(3, 1))

    same = store.get(game.id)
    assert same.rounds == 0
    assert same.current_guess == Code.parse("0123")
    assert store.get_stats().contradictions == 1

    # The human can resend a corrected answer
    after = store.report(game.id, Feedback(0, 0))
    assert after.rounds == 1
    assert set(after.current_guess.digits).isdisjoint({0, 1, 2, 3})

def test_answers_after_solve_are_ignored():
    store = GameStore()
    game = store.create(seed=1)
    store.report(game.id, WIN)
    again = store.report(game.id, Feedback(0, 0))
    assert again.status == "solved"
    assert again.rounds == 1

def test_unknown_game():
    store = GameStore()
    assert store.get("nope") is None
    assert store.report("nope", WIN) is None
    assert store.candidates("nope") is None

def test_store_uses_configured_opener():
    store = GameStore(opener=Code.parse("9876"))
    assert store.create(seed=1).current_guess == Code.parse("9876")

def test_same_seed_same_guesses():
    store = GameStore()
    secret = Code.parse("2048")
    one = play_out(store, store.create(seed=99).id, secret)
    two = play_out(store, store.create(seed=99).id, secret)
    assert [g.code for g in one.breaker.history] == [g.code for g in two.breaker.history]

def test_store_stats_update_on_solve():
    store = GameStore()

    store.report(store.create(seed=1).id, WIN)  # 1 round
    longer = play_out(store, store.create(seed=5).id, Code.parse("8765"))

    stats = store.get_stats()
    assert stats.games_started == 2
    assert stats.games_solved == 2
    assert stats.fastest_solve_rounds == 1
    assert stats.total_rounds_in_solves == 1 + longer.rounds
    assert stats.average_rounds_to_solve == (1 + longer.rounds) / 2

    store.reset_stats()
    assert store.get_stats().games_started == 0
    assert store.get_stats().average_rounds_to_solve is None

def test_seed_lives_in_the_solver_rng_only():
    store = GameStore()
    one = store.create(seed=42)
    two = store.create(seed=42)
    assert not hasattr(one, "seed")

    answer = Feedback(1, 1)
    assert store.report(one.id, answer).current_guess == store.report(two.id, answer).current_guess
