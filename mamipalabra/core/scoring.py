"""Guess scoring, keyboard letter-state aggregation and the letter hint."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional


class LetterState(str, Enum):
    EMPTY = "empty"
    FILLED = "filled"
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


@dataclass
class Letter:
    char: str
    state: LetterState


@dataclass
class Guess:
    """One row of the board. ``letters`` holds the scored result once submitted."""

    letters: List[Letter] = field(default_factory=list)
    submitted: bool = False


def score(guess: str, target: str) -> List[Letter]:
    """Score ``guess`` against ``target`` letter by letter.

    Exact matches are taken first and consume their target position. Every
    other letter then consumes the first unused matching target position,
    scanning left to right, or is absent. A letter guessed twice but present
    once in the target therefore scores once.
    """
    guess_chars = list(guess.upper())
    target_chars = list(target.upper())
    if len(guess_chars) != len(target_chars):
        raise ValueError(
            f"Guess length {len(guess_chars)} does not match target length {len(target_chars)}"
        )

    result = [Letter(char=ch, state=LetterState.ABSENT) for ch in guess_chars]
    used = [False] * len(target_chars)

    for i, ch in enumerate(guess_chars):
        if ch == target_chars[i]:
            result[i].state = LetterState.CORRECT
            used[i] = True

    for i, ch in enumerate(guess_chars):
        if result[i].state is LetterState.CORRECT:
            continue
        for j, target_ch in enumerate(target_chars):
            if not used[j] and target_ch == ch:
                result[i].state = LetterState.PRESENT
                used[j] = True
                break

    return result


def check_win(result: Iterable[Letter]) -> bool:
    return all(letter.state is LetterState.CORRECT for letter in result)


def merge_letter_states(
    current: Mapping[str, LetterState],
    result: Iterable[Letter],
) -> Dict[str, LetterState]:
    """Fold a scored guess into the keyboard map: correct > present > absent, never downgraded."""
    updated = dict(current)
    for letter in result:
        known = updated.get(letter.char)
        if letter.state is LetterState.CORRECT:
            updated[letter.char] = LetterState.CORRECT
        elif letter.state is LetterState.PRESENT and known is not LetterState.CORRECT:
            updated[letter.char] = LetterState.PRESENT
        elif letter.state is LetterState.ABSENT and known is None:
            updated[letter.char] = LetterState.ABSENT
    return updated


def reveal_letter(
    target: str,
    discovered: Iterable[str],
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    """Pick one target letter the player has not found yet, or None when all are known."""
    rng = rng or random
    known = {ch.upper() for ch in discovered}
    undiscovered: List[str] = []
    for ch in target.upper():
        if ch not in known and ch not in undiscovered:
            undiscovered.append(ch)
    if not undiscovered:
        return None
    return rng.choice(undiscovered)
