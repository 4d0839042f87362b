"""
Console drivers.

  bullscows play    -> you think of a secret, the program guesses
  bullscows bench   -> solve every possible secret and report the rounds used
  bullscows score   -> bulls/cows of a guess against a secret
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from .bench import run_benchmark
from .codes import CODE_LENGTH, Code, Feedback, InvalidCodeError, InvalidFeedbackError
from .config import Settings, configure_logging, load_settings
from .engine import Codebreaker, NoConsistentSecret, evaluate_feedback


def prompt_count(label: str, read: Callable[[str], str], write: Callable[[str], None]) -> int:
    """Ask until we get a whole number between 0 and 4."""
    while True:
        text = read(label).strip()
        try:
            value = int(text)
        except ValueError:
            write(f"Please enter a whole number, got {text!r}.")
            continue
        if not 0 <= value <= CODE_LENGTH:
            write(f"Please enter a number between 0 and {CODE_LENGTH}.")
            continue
        return value


def play(
    rng: random.Random,
    opener: Optional[Code],
    show_candidates: bool = False,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """
    Human holds the secret, we guess. Returns the process exit status:
    0 once we hit 4 bulls, 1 if the answers contradict each other.
    """
    breaker = Codebreaker(rng, opener)
    while True:
        try:
            guess = breaker.next_guess()
        except NoConsistentSecret:
            write("No secret fits all your answers; something was entered wrong. Exiting...")
            return 1

        if show_candidates and len(breaker.history) > 0:
            write(" ".join(str(c) for c in breaker.candidates))
        write(f"My guess: {guess}")

        while True:
            bulls = prompt_count("Bulls: ", read, write)
            cows = prompt_count("Cows : ", read, write)
            try:
                feedback = Feedback(bulls, cows)
                break
            except InvalidFeedbackError as exc:
                write(str(exc))

        breaker.record(guess, feedback)
        if feedback.is_win:
            write(f"Answer is {guess}, guessed in {len(breaker.history)}.")
            return 0


def bench(settings: Settings, workers: int, seed: Optional[int], write: Callable[[str], None] = print) -> int:
    result = run_benchmark(workers=workers, seed=seed, opener=settings.opening_guess)
    write(f"games = {result.games}")
    write(f"avg = {result.average:.4f}")
    write(f"worst = {result.worst}")
    for rounds, count in result.histogram.items():
        write(f"  {rounds:2d} round(s): {count}")
    return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bullscows",
        description="Bulls and Cows codebreaker (4 distinct digits, 0-9).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    play_p = sub.add_parser("play", help="Think of a secret; the program guesses it.")
    play_p.add_argument("--seed", type=int, default=None, help="Seed for reproducible guesses.")
    play_p.add_argument(
        "--show-candidates", action="store_true",
        help="Print every secret still possible before each guess.",
    )

    bench_p = sub.add_parser("bench", help="Solve all 5040 secrets and report the rounds used.")
    bench_p.add_argument("--workers", type=int, default=settings.bench_workers)
    bench_p.add_argument("--seed", type=int, default=settings.bench_seed)

    score_p = sub.add_parser("score", help="Bulls and cows of GUESS against SECRET.")
    score_p.add_argument("secret")
    score_p.add_argument("guess")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if args.command == "play":
        try:
            return play(random.Random(args.seed), settings.opening_guess, args.show_candidates)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            return 1

    if args.command == "bench":
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        return bench(settings, args.workers, args.seed)

    try:
        secret, guess = Code.parse(args.secret), Code.parse(args.guess)
    except InvalidCodeError as exc:
        parser.error(str(exc))
    feedback = evaluate_feedback(secret, guess)
    print(f"Bulls = {feedback.bulls}\tCows = {feedback.cows}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
