"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping

from mamipalabra.core.scoring import LetterState
from mamipalabra.core.session import GameRound
from mamipalabra.ui.messages import MONTHS_SHORT


@dataclass(frozen=True)
class TileView:
    """What a single grid tile shows: its character and state."""

    char: str
    state: LetterState


def build_grid(round_: GameRound) -> List[List[TileView]]:
    """Rows of tiles for the board: submitted rows, the row being typed, then empty rows."""
    width = round_.word_length
    rows: List[List[TileView]] = []
    for index, guess in enumerate(round_.guesses):
        if guess.submitted:
            rows.append([TileView(letter.char, letter.state) for letter in guess.letters])
        elif index == round_.current_row and not round_.is_over():
            typed = round_.current_guess
            rows.append(
                [TileView(typed[i], LetterState.FILLED) if i < len(typed) else TileView("", LetterState.EMPTY)
                 for i in range(width)]
            )
        else:
            rows.append([TileView("", LetterState.EMPTY) for _ in range(width)])
    return rows


def key_states(letter_states: Mapping[str, LetterState], keys: List[str]) -> Dict[str, LetterState]:
    """Keyboard coloring: every key gets its best known state, EMPTY when unknown."""
    return {key: letter_states.get(key, LetterState.EMPTY) for key in keys}


def format_date_short(day: date) -> str:
    return f"{day.day} {MONTHS_SHORT[day.month - 1]}"
