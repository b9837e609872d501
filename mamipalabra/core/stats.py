from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from mamipalabra.core.config import (
    DAILY_DATE_KEY,
    HISTORY_LIMIT,
    MAX_ATTEMPTS,
    PREFERENCES_KEY,
    STATS_KEY,
)
from mamipalabra.core.session import GameConfig, GameMode, GameResult
from mamipalabra.core.storage import LocalStorage
from mamipalabra.core.words import DictionaryType

logger = logging.getLogger(__name__)


def _default_distribution() -> List[int]:
    return [0] * MAX_ATTEMPTS


@dataclass
class GameStats:
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    guess_distribution: List[int] = field(default_factory=_default_distribution)
    last_played_date: Optional[str] = None
    average_guesses: float = 0.0

    @property
    def win_percentage(self) -> int:
        if not self.games_played:
            return 0
        return round(self.games_won / self.games_played * 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gamesPlayed": self.games_played,
            "gamesWon": self.games_won,
            "currentStreak": self.current_streak,
            "maxStreak": self.max_streak,
            "guessDistribution": list(self.guess_distribution),
            "lastPlayedDate": self.last_played_date,
            "averageGuesses": self.average_guesses,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "GameStats":
        """Rebuild stats from stored data, keeping every field that still makes sense."""
        stats = cls()
        if not isinstance(payload, dict):
            return stats
        stats.games_played = _non_negative_int(payload.get("gamesPlayed"))
        stats.games_won = _non_negative_int(payload.get("gamesWon"))
        stats.current_streak = _non_negative_int(payload.get("currentStreak"))
        stats.max_streak = _non_negative_int(payload.get("maxStreak"))
        distribution = payload.get("guessDistribution")
        if isinstance(distribution, list):
            values = [_non_negative_int(v) for v in distribution[:MAX_ATTEMPTS]]
            stats.guess_distribution = values + [0] * (MAX_ATTEMPTS - len(values))
        last = payload.get("lastPlayedDate")
        stats.last_played_date = last if isinstance(last, str) and last else None
        average = payload.get("averageGuesses")
        if isinstance(average, (int, float)) and not isinstance(average, bool) and math.isfinite(average):
            stats.average_guesses = float(average)
        return stats


@dataclass(frozen=True)
class GameHistoryEntry:
    word: str
    hint: str
    date: str
    won: bool
    attempts: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "hint": self.hint,
            "date": self.date,
            "won": self.won,
            "attempts": self.attempts,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> Optional["GameHistoryEntry"]:
        if not isinstance(payload, dict):
            return None
        word, day = payload.get("word"), payload.get("date")
        if not isinstance(word, str) or not isinstance(day, str):
            return None
        return cls(
            word=word,
            hint=str(payload.get("hint") or ""),
            date=day,
            won=bool(payload.get("won", False)),
            attempts=_non_negative_int(payload.get("attempts")),
        )


@dataclass
class AllStats:
    daily: GameStats = field(default_factory=GameStats)
    unlimited: GameStats = field(default_factory=GameStats)
    history: List[GameHistoryEntry] = field(default_factory=list)

    def for_mode(self, mode: GameMode) -> GameStats:
        return self.daily if GameMode(mode) is GameMode.DAILY else self.unlimited


@dataclass(frozen=True)
class CombinedStats:
    total_games: int
    total_wins: int
    win_percentage: int
    current_streak: int
    max_streak: int


def _non_negative_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return 0


class StatsStore:
    """Per-mode statistics, streaks and the daily history, persisted as one JSON blob.

    Every mutation is a read-modify-write of the whole blob, which is only
    safe with a single writer.
    """

    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage

    def load(self) -> AllStats:
        raw = self._storage.get_item(STATS_KEY)
        if not raw:
            return AllStats()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored stats are corrupt, starting from defaults: %s", e)
            return AllStats()
        if not isinstance(payload, dict):
            logger.warning("Stored stats have unexpected type %s, starting from defaults", type(payload).__name__)
            return AllStats()

        history_raw = payload.get("history")
        history: List[GameHistoryEntry] = []
        if isinstance(history_raw, list):
            for item in history_raw:
                entry = GameHistoryEntry.from_dict(item)
                if entry is not None:
                    history.append(entry)
        return AllStats(
            daily=GameStats.from_dict(payload.get("daily")),
            unlimited=GameStats.from_dict(payload.get("unlimited")),
            history=history,
        )

    def get_stats(self, mode: GameMode) -> GameStats:
        return self.load().for_mode(mode)

    def get_history(self) -> List[GameHistoryEntry]:
        return self.load().history

    def record_result(
        self,
        mode: GameMode,
        won: bool,
        attempts: int,
        today: Optional[date] = None,
    ) -> GameStats:
        """Count a finished game and advance or reset the streak for ``mode``."""
        today = today or date.today()
        today_str = today.isoformat()
        all_stats = self.load()
        stats = all_stats.for_mode(mode)

        stats.games_played += 1
        if won:
            stats.games_won += 1
            # Out-of-range attempts still count as a win but stay out of the histogram.
            if 1 <= attempts <= MAX_ATTEMPTS:
                stats.guess_distribution[attempts - 1] += 1

            if stats.last_played_date != today_str:
                yesterday = (today - timedelta(days=1)).isoformat()
                if stats.last_played_date is None or stats.last_played_date == yesterday:
                    stats.current_streak += 1
                else:
                    stats.current_streak = 1
                stats.max_streak = max(stats.max_streak, stats.current_streak)

            total_guesses = sum(count * (i + 1) for i, count in enumerate(stats.guess_distribution))
            stats.average_guesses = total_guesses / stats.games_won
        else:
            stats.current_streak = 0

        stats.last_played_date = today_str
        self._save(all_stats)
        logger.info(
            "Recorded %s %s: played=%d won=%d streak=%d",
            GameMode(mode).value,
            "win" if won else "loss",
            stats.games_played,
            stats.games_won,
            stats.current_streak,
        )
        return stats

    def add_to_history(
        self,
        word: str,
        hint: str,
        won: bool,
        attempts: int,
        today: Optional[date] = None,
    ) -> bool:
        """Prepend a daily entry. Returns False when today already has one."""
        today_str = (today or date.today()).isoformat()
        all_stats = self.load()
        if any(entry.date == today_str for entry in all_stats.history):
            return False
        entry = GameHistoryEntry(word=word, hint=hint, date=today_str, won=won, attempts=attempts)
        all_stats.history = [entry, *all_stats.history][:HISTORY_LIMIT]
        self._save(all_stats)
        return True

    def record_game(self, result: GameResult) -> GameStats:
        """Record a finished round; daily rounds also go to history and mark the day as played."""
        today = result.date or date.today()
        stats = self.record_result(result.mode, result.won, result.attempts, today=today)
        if GameMode(result.mode) is GameMode.DAILY:
            self.add_to_history(result.word, result.hint, result.won, result.attempts, today=today)
            self.mark_daily_played(today)
        return stats

    def mark_daily_played(self, today: Optional[date] = None) -> None:
        self._storage.set_item(DAILY_DATE_KEY, (today or date.today()).isoformat())

    def has_played_daily(self, today: Optional[date] = None) -> bool:
        stored = self._storage.get_item(DAILY_DATE_KEY)
        return stored is not None and stored.strip() == (today or date.today()).isoformat()

    def get_combined_stats(self) -> CombinedStats:
        all_stats = self.load()
        total_games = all_stats.daily.games_played + all_stats.unlimited.games_played
        total_wins = all_stats.daily.games_won + all_stats.unlimited.games_won
        return CombinedStats(
            total_games=total_games,
            total_wins=total_wins,
            win_percentage=round(total_wins / total_games * 100) if total_games else 0,
            current_streak=max(all_stats.daily.current_streak, all_stats.unlimited.current_streak),
            max_streak=max(all_stats.daily.max_streak, all_stats.unlimited.max_streak),
        )

    def reset(self) -> None:
        """Clear all stats and history. Only called on an explicit player reset."""
        self._save(AllStats())
        self._storage.remove_item(DAILY_DATE_KEY)

    def _save(self, all_stats: AllStats) -> None:
        payload = {
            "daily": all_stats.daily.to_dict(),
            "unlimited": all_stats.unlimited.to_dict(),
            "history": [entry.to_dict() for entry in all_stats.history],
        }
        self._storage.set_item(STATS_KEY, json.dumps(payload, indent=2, ensure_ascii=False))


class PreferencesStore:
    """Remembers the last unlimited-mode configuration between sessions."""

    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage

    def load_last_config(self) -> GameConfig:
        raw = self._storage.get_item(PREFERENCES_KEY)
        if not raw:
            return GameConfig()
        try:
            payload = json.loads(raw)
            last = payload["lastConfig"]
            return GameConfig(
                word_length=int(last["wordLength"]),
                dictionary=DictionaryType(last["dictionary"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Stored preferences are unusable, using defaults: %s", e)
            return GameConfig()

    def save_last_config(self, config: GameConfig) -> None:
        payload = {
            "lastConfig": {
                "wordLength": config.word_length,
                "dictionary": DictionaryType(config.dictionary).value,
            }
        }
        self._storage.set_item(PREFERENCES_KEY, json.dumps(payload))
