"""
Testing the console drivers with scripted input instead of a keyboard.
"""

import random

import pytest

import bullscows.cli as cli
from bullscows.bench import run_benchmark
from bullscows.codes import UNIVERSE, Code
from bullscows.engine import OPENING_GUESS, evaluate_feedback


class HonestPlayer:
    """Answers each 'My guess: ...' for a secret only it knows."""

    def __init__(self, secret: str):
        self.secret = Code.parse(secret)
        self.lines = []

    def write(self, line: str) -> None:
        self.lines.append(line)

    def read(self, label: str) -> str:
        last_guess = [l for l in self.lines if l.startswith("My guess: ")][-1]
        feedback = evaluate_feedback(self.secret, Code.parse(last_guess[len("My guess: "):]))
        return str(feedback.bulls if label.startswith("Bulls") else feedback.cows)


class Scripted:
    def __init__(self, answers):
        self.answers = list(answers)
        self.lines = []

    def write(self, line: str) -> None:
        self.lines.append(line)

    def read(self, label: str) -> str:
        return self.answers.pop(0)


def test_play_finds_the_secret():
    player = HonestPlayer("5913")
    status = cli.play(random.Random(4), OPENING_GUESS, read=player.read, write=player.write)
    assert status == 0
    assert player.lines[0] == "My guess: 0123"
    assert player.lines[-1].startswith("Answer is 5913, guessed in ")

def test_play_wins_on_opener_in_one_round():
    script = Scripted(["4", "0"])
    assert cli.play(random.Random(0), OPENING_GUESS, read=script.read, write=script.write) == 0
    assert script.lines[-1] == "Answer is 0123, guessed in 1."

def test_play_reprompts_bad_numbers():
    script = Scripted(["x", "7", "4", "0"])
    assert cli.play(random.Random(0), OPENING_GUESS, read=script.read, write=script.write) == 0
    assert any("whole number" in line for line in script.lines)
    assert any("between 0 and 4" in line for line in script.lines)

def test_play_reprompts_when_total_is_too_big():
    script = Scripted(["3", "2", "4", "0"])
    assert cli.play(random.Random(0), OPENING_GUESS, read=script.read, write=script.write) == 0
    assert any("more than 4" in line for line in script.lines)

def test_play_exits_on_contradictory_answers():
    # Nothing from 0123, then nothing from a code built of the other six digits
    script = Scripted(["0", "0", "0", "0"])
    status = cli.play(random.Random(0), OPENING_GUESS, read=script.read, write=script.write)
    assert status == 1
    assert "Exiting" in script.lines[-1]

def test_play_can_show_candidates():
    script = Scripted(["0", "0", "4", "0"])
    cli.play(random.Random(0), OPENING_GUESS, show_candidates=True, read=script.read, write=script.write)
    # Before guess 2: the 360 codes without 0, 1, 2 or 3
    assert len(script.lines[1].split()) == 360

def test_score_command(capsys):
    assert cli.main(["score", "0123", "3210"]) == 0
    assert capsys.readouterr().out.strip() == "Bulls = 0\tCows = 4"

def test_score_command_rejects_bad_code():
    with pytest.raises(SystemExit) as info:
        cli.main(["score", "0012", "0123"])
    assert info.value.code == 2

def test_bench_command(monkeypatch, capsys):
    # The real run covers all 5040 secrets; a slice keeps this test quick
    monkeypatch.setattr(cli, "run_benchmark", lambda **kw: run_benchmark(secrets=UNIVERSE[:25], **kw))
    assert cli.main(["bench", "--workers", "2", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "games = 25" in out
    assert "avg = " in out
    assert "worst = " in out

def test_bench_rejects_zero_workers():
    with pytest.raises(SystemExit):
        cli.main(["bench", "--workers", "0"])
