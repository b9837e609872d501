from __future__ import annotations

import random
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Tuple

import yaml

from mamipalabra.core.config import DEFAULT_WORD_LENGTH, WORD_LENGTHS


class EmptyWordPoolError(LookupError):
    """Raised when a word has to be drawn from a pool that has no words."""


class WordCategory(str, Enum):
    GENERAL = "general"
    NATURE = "nature"
    FOOD = "food"
    TRAVEL = "travel"
    HOME = "home"


class DictionaryType(str, Enum):
    GENERAL = "general"
    EASY = "easy"
    HARD = "hard"
    NATURE = "nature"
    FOOD = "food"
    TRAVEL = "travel"
    HOME = "home"


@dataclass(frozen=True)
class WordEntry:
    word: str
    hint: str
    category: WordCategory


@dataclass(frozen=True)
class DictionaryInfo:
    type: DictionaryType
    name: str
    description: str
    word_lengths: Tuple[int, ...] = WORD_LENGTHS


DICTIONARIES: List[DictionaryInfo] = [
    DictionaryInfo(DictionaryType.GENERAL, "General", "Mezcla balanceada de palabras"),
    DictionaryInfo(DictionaryType.EASY, "Fácil", "Palabras muy comunes"),
    DictionaryInfo(DictionaryType.HARD, "Difícil", "Para expertos en vocabulario"),
    DictionaryInfo(DictionaryType.NATURE, "Naturaleza", "Animales, plantas y más"),
    DictionaryInfo(DictionaryType.FOOD, "Comida", "Ingredientes y platos"),
    DictionaryInfo(DictionaryType.TRAVEL, "Viajes", "Lugares y aventuras"),
    DictionaryInfo(DictionaryType.HOME, "Hogar", "Cosas del día a día"),
]

EASY_CATEGORIES = frozenset({WordCategory.HOME, WordCategory.FOOD, WordCategory.GENERAL})
HARD_CATEGORIES = frozenset({WordCategory.NATURE, WordCategory.TRAVEL})

NO_HINT = "Sin pista disponible"


def get_dictionary_info(dictionary: DictionaryType) -> Optional[DictionaryInfo]:
    for info in DICTIONARIES:
        if info.type == dictionary:
            return info
    return None


def get_dictionary_label(dictionary: DictionaryType) -> str:
    info = get_dictionary_info(dictionary)
    return info.name if info else DictionaryType(dictionary).value


def category_filter(dictionary: DictionaryType) -> Callable[[WordCategory], bool]:
    """Return the predicate selecting the word categories a dictionary draws from."""
    dictionary = DictionaryType(dictionary)
    if dictionary is DictionaryType.GENERAL:
        return lambda category: True
    if dictionary is DictionaryType.EASY:
        return lambda category: WordCategory(category) in EASY_CATEGORIES
    if dictionary is DictionaryType.HARD:
        return lambda category: WordCategory(category) in HARD_CATEGORIES
    own = WordCategory(dictionary.value)
    return lambda category: WordCategory(category) is own


class WordRepository:
    """Word lists keyed by length, loaded from ``data/words/words-<N>.yaml``.

    Entries keep the order they have in their file. The 5-letter order feeds
    the word of the day, so reordering that file changes every daily word.
    """

    def __init__(self, words_dir: Optional[Path] = None) -> None:
        self._words_dir = words_dir or Path(__file__).resolve().parent.parent / "data" / "words"
        self._by_length = self._load_words()
        self._valid_words: Set[str] = {
            entry.word.upper() for entries in self._by_length.values() for entry in entries
        }

    def available_lengths(self) -> List[int]:
        return sorted(self._by_length)

    def get_word_list(self, dictionary: DictionaryType, length: int) -> List[WordEntry]:
        entries = self._by_length.get(length)
        if not entries:
            # Unsupported lengths fall back to the full 5-letter list.
            return list(self._by_length.get(DEFAULT_WORD_LENGTH, []))
        accepts = category_filter(dictionary)
        return [entry for entry in entries if accepts(entry.category)]

    def get_random_word(
        self,
        dictionary: DictionaryType,
        length: int,
        rng: Optional[random.Random] = None,
    ) -> WordEntry:
        rng = rng or random
        words = self.get_word_list(dictionary, length)
        if not words:
            words = self.get_word_list(DictionaryType.GENERAL, DEFAULT_WORD_LENGTH)
        if not words:
            raise EmptyWordPoolError(
                f"No words for {DictionaryType(dictionary).value}/{length} and no 5-letter fallback"
            )
        return rng.choice(words)

    def is_valid_word(self, word: str) -> bool:
        return word.upper() in self._valid_words

    def get_word_hint(self, word: str, dictionary: DictionaryType, length: int) -> str:
        wanted = word.upper()
        for entry in self.get_word_list(dictionary, length):
            if entry.word.upper() == wanted:
                return entry.hint or NO_HINT
        return NO_HINT

    def get_word_count(self, dictionary: DictionaryType, length: int) -> int:
        return len(self.get_word_list(dictionary, length))

    def _load_words(self) -> Dict[int, List[WordEntry]]:
        if not self._words_dir.exists():
            raise FileNotFoundError(f"Words directory not found: {self._words_dir}")

        by_length: Dict[int, List[WordEntry]] = {}
        for words_path in sorted(self._words_dir.glob("words-*.yaml")):
            m = re.match(r"^words-(\d+)$", words_path.stem)
            if not m:
                continue
            length = int(m.group(1))
            raw = yaml.safe_load(words_path.read_text(encoding="utf-8"))
            if raw is None:
                raw = []
            if not isinstance(raw, list):
                raise ValueError(f"{words_path.name}: expected a YAML list of words")
            entries: List[WordEntry] = []
            for index, item in enumerate(raw):
                if not isinstance(item, dict):
                    raise ValueError(f"{words_path.name}[{index}]: expected a mapping")
                word = str(item.get("word") or "").strip()
                if len(word) != length:
                    raise ValueError(
                        f"{words_path.name}[{index}]: '{word}' is not {length} letters long"
                    )
                try:
                    category = WordCategory(item.get("category", WordCategory.GENERAL.value))
                except ValueError:
                    raise ValueError(
                        f"{words_path.name}[{index}]: unknown category {item.get('category')!r}"
                    ) from None
                entries.append(
                    WordEntry(word=word, hint=str(item.get("hint") or "").strip(), category=category)
                )
            by_length[length] = entries
        return by_length
