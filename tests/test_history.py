from bullscows.codes import Code, Feedback
from bullscows.history import Guess, History


def test_history_appends_in_order():
    history = History()
    assert len(history) == 0
    assert history.latest is None

    first = history.append(Code.parse("0123"), Feedback(0, 2))
    second = history.append(Code.parse("4512"), Feedback(1, 1))

    assert len(history) == 2
    assert list(history) == [first, second]
    assert history[0] == Guess(Code.parse("0123"), Feedback(0, 2))
    assert history.latest == second

def test_iterating_is_a_snapshot():
    history = History()
    history.append(Code.parse("0123"), Feedback(0, 0))
    entries = iter(history)
    history.append(Code.parse("4567"), Feedback(1, 0))
    assert len(list(entries)) == 1

def test_history_repr_is_readable():
    history = History()
    history.append(Code.parse("0123"), Feedback(1, 2))
    assert repr(history) == "History([0123:1B2C])"
