from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from mamipalabra.core.config import DEFAULT_WORD_LENGTH, HINTS_PER_GAME, MAX_ATTEMPTS
from mamipalabra.core.scoring import (
    Guess,
    Letter,
    LetterState,
    check_win,
    merge_letter_states,
    reveal_letter,
    score,
)
from mamipalabra.core.word_of_day import word_of_day
from mamipalabra.core.words import DictionaryType, WordEntry, WordRepository

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    DAILY = "daily"
    UNLIMITED = "unlimited"


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class SubmitOutcome(str, Enum):
    ACCEPTED = "accepted"
    NOT_ENOUGH_LETTERS = "not_enough_letters"
    NOT_IN_WORD_LIST = "not_in_word_list"
    GAME_OVER = "game_over"


class HintOutcome(str, Enum):
    REVEALED = "revealed"
    NO_HINTS_LEFT = "no_hints_left"
    NOTHING_TO_REVEAL = "nothing_to_reveal"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameConfig:
    word_length: int = DEFAULT_WORD_LENGTH
    dictionary: DictionaryType = DictionaryType.GENERAL


@dataclass
class HintsRemaining:
    letter: int = HINTS_PER_GAME["letter"]
    definition: int = HINTS_PER_GAME["definition"]


@dataclass
class HintResult:
    outcome: HintOutcome
    content: Optional[str] = None


@dataclass
class GameResult:
    """Summary of a finished round, handed to the stats store."""

    mode: GameMode
    won: bool
    attempts: int
    word: str
    hint: str
    config: GameConfig
    duration: int
    hints_used: Dict[str, int] = field(default_factory=dict)
    date: Optional[date] = None


class GameRound:
    """One round of guessing against a single target word.

    Rows fill left to right as letters are typed and are submitted in order.
    Rejected submissions (too short, unknown word) leave the round untouched.
    """

    def __init__(
        self,
        entry: WordEntry,
        mode: GameMode = GameMode.UNLIMITED,
        config: Optional[GameConfig] = None,
        is_valid_word: Optional[Callable[[str], bool]] = None,
        max_attempts: int = MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._entry = entry
        self._target = entry.word.upper()
        self._mode = GameMode(mode)
        self._config = config or GameConfig(word_length=len(self._target))
        self._is_valid_word = is_valid_word or (lambda word: True)
        self._max_attempts = max_attempts
        self._rng = rng
        self._guesses: List[Guess] = [Guess() for _ in range(max_attempts)]
        self._current_guess = ""
        self._current_row = 0
        self._letter_states: Dict[str, LetterState] = {}
        self._hints = HintsRemaining()
        self._revealed: List[str] = []
        self._status = GameStatus.PLAYING
        self._start_time = time.time()
        self._end_time: Optional[float] = None

    @property
    def target(self) -> str:
        return self._target

    @property
    def hint(self) -> str:
        return self._entry.hint

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def word_length(self) -> int:
        return len(self._target)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def guesses(self) -> List[Guess]:
        return list(self._guesses)

    @property
    def current_guess(self) -> str:
        return self._current_guess

    @property
    def current_row(self) -> int:
        return self._current_row

    @property
    def letter_states(self) -> Dict[str, LetterState]:
        return dict(self._letter_states)

    @property
    def hints_remaining(self) -> HintsRemaining:
        return HintsRemaining(self._hints.letter, self._hints.definition)

    @property
    def revealed_letters(self) -> List[str]:
        return list(self._revealed)

    @property
    def status(self) -> GameStatus:
        return self._status

    def is_over(self) -> bool:
        return self._status is not GameStatus.PLAYING

    @property
    def attempts(self) -> int:
        """Attempts counted for stats: the winning row, or every row on a loss."""
        if self._status is GameStatus.WON:
            return self._current_row + 1
        if self._status is GameStatus.LOST:
            return self._max_attempts
        return self._current_row

    def type_letter(self, char: str) -> bool:
        """Append a letter to the current row. Returns False when ignored."""
        if self.is_over() or len(char) != 1 or not char.isalpha():
            return False
        if len(self._current_guess) >= self.word_length:
            return False
        self._current_guess += char.upper()
        return True

    def backspace(self) -> bool:
        if self.is_over() or not self._current_guess:
            return False
        self._current_guess = self._current_guess[:-1]
        return True

    def submit(self) -> SubmitOutcome:
        if self.is_over():
            return SubmitOutcome.GAME_OVER
        if len(self._current_guess) != self.word_length:
            return SubmitOutcome.NOT_ENOUGH_LETTERS
        if not self._is_valid_word(self._current_guess):
            return SubmitOutcome.NOT_IN_WORD_LIST

        result = score(self._current_guess, self._target)
        self._guesses[self._current_row] = Guess(letters=result, submitted=True)
        self._letter_states = merge_letter_states(self._letter_states, result)
        self._note_revealed(result)

        if check_win(result):
            self._finish(GameStatus.WON)
        elif self._current_row >= self._max_attempts - 1:
            self._finish(GameStatus.LOST)
        else:
            self._current_row += 1
            self._current_guess = ""
        return SubmitOutcome.ACCEPTED

    def use_letter_hint(self) -> HintResult:
        if self.is_over():
            return HintResult(HintOutcome.GAME_OVER)
        if self._hints.letter <= 0:
            return HintResult(HintOutcome.NO_HINTS_LEFT)
        letter = reveal_letter(self._target, self._revealed, self._rng)
        if letter is None:
            return HintResult(HintOutcome.NOTHING_TO_REVEAL)
        self._revealed.append(letter)
        self._hints.letter -= 1
        return HintResult(HintOutcome.REVEALED, letter)

    def use_definition_hint(self) -> HintResult:
        if self.is_over():
            return HintResult(HintOutcome.GAME_OVER)
        if self._hints.definition <= 0:
            return HintResult(HintOutcome.NO_HINTS_LEFT)
        self._hints.definition -= 1
        return HintResult(HintOutcome.REVEALED, self._entry.hint)

    def result(self, today: Optional[date] = None) -> GameResult:
        if not self.is_over():
            raise RuntimeError("Round is still in progress")
        end = self._end_time or time.time()
        return GameResult(
            mode=self._mode,
            won=self._status is GameStatus.WON,
            attempts=self.attempts,
            word=self._target,
            hint=self._entry.hint,
            config=self._config,
            duration=int(end - self._start_time),
            hints_used={
                "letter": HINTS_PER_GAME["letter"] - self._hints.letter,
                "definition": HINTS_PER_GAME["definition"] - self._hints.definition,
            },
            date=today or date.today(),
        )

    def _note_revealed(self, result: List[Letter]) -> None:
        for letter in result:
            if letter.state in (LetterState.CORRECT, LetterState.PRESENT) and letter.char not in self._revealed:
                self._revealed.append(letter.char)

    def _finish(self, status: GameStatus) -> None:
        self._status = status
        self._end_time = time.time()
        logger.info("Round over: %s after %d attempt(s)", status.value, self.attempts)


def start_round(
    repository: WordRepository,
    mode: GameMode,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> GameRound:
    """Start a round: the word of the day for daily mode, a random word otherwise."""
    mode = GameMode(mode)
    config = config or GameConfig()
    if mode is GameMode.DAILY:
        entry = word_of_day(repository, today)
        config = GameConfig(word_length=len(entry.word), dictionary=DictionaryType.GENERAL)
    else:
        entry = repository.get_random_word(config.dictionary, config.word_length, rng)
    return GameRound(
        entry,
        mode=mode,
        config=config,
        is_valid_word=repository.is_valid_word,
        rng=rng,
    )
