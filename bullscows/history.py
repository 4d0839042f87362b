"""
Per-game record of what was guessed and what the codemaker answered.
Entries are only ever appended; nothing is edited, removed or reordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .codes import Code, Feedback


@dataclass(frozen=True)
class Guess:
    code: Code
    feedback: Feedback


class History:
    def __init__(self) -> None:
        self._entries: List[Guess] = []

    def append(self, code: Code, feedback: Feedback) -> Guess:
        entry = Guess(code=code, feedback=feedback)
        self._entries.append(entry)
        return entry

    @property
    def latest(self) -> Optional[Guess]:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Guess]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> Guess:
        return self._entries[index]

    def __repr__(self) -> str:
        body = ", ".join(f"{g.code}:{g.feedback.bulls}B{g.feedback.cows}C" for g in self._entries)
        return f"History([{body}])"
