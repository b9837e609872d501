"""Tests for mamipalabra.core.stats – statistics, streaks and daily history."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from mamipalabra.core.config import DAILY_DATE_KEY, PREFERENCES_KEY, STATS_KEY
from mamipalabra.core.session import GameConfig, GameMode, GameResult
from mamipalabra.core.stats import (
    AllStats,
    GameHistoryEntry,
    GameStats,
    PreferencesStore,
    StatsStore,
)
from mamipalabra.core.storage import LocalStorage
from mamipalabra.core.words import DictionaryType

DAY = date(2025, 3, 10)


@pytest.fixture()
def store(storage: LocalStorage) -> StatsStore:
    return StatsStore(storage)


def stored_payload(storage: LocalStorage) -> dict:
    return json.loads(storage.get_item(STATS_KEY))


# ---------------------------------------------------------------------------
# GameStats dataclass
# ---------------------------------------------------------------------------

class TestGameStats:
    def test_defaults(self):
        s = GameStats()
        assert s.games_played == 0
        assert s.guess_distribution == [0, 0, 0, 0, 0, 0]
        assert s.last_played_date is None
        assert s.average_guesses == 0.0

    def test_distribution_not_shared(self):
        a, b = GameStats(), GameStats()
        a.guess_distribution[0] = 3
        assert b.guess_distribution[0] == 0

    def test_round_trip_uses_camel_case(self):
        s = GameStats(games_played=3, games_won=2, last_played_date="2025-03-10")
        d = s.to_dict()
        assert d["gamesPlayed"] == 3
        assert d["lastPlayedDate"] == "2025-03-10"
        assert GameStats.from_dict(d) == s

    def test_from_dict_recovers_partial_data(self):
        s = GameStats.from_dict({"gamesPlayed": 4, "gamesWon": "oops", "guessDistribution": [1, 2]})
        assert s.games_played == 4
        assert s.games_won == 0
        assert s.guess_distribution == [1, 2, 0, 0, 0, 0]

    def test_from_dict_non_dict(self):
        assert GameStats.from_dict("nope") == GameStats()

    def test_win_percentage(self):
        assert GameStats().win_percentage == 0
        assert GameStats(games_played=3, games_won=2).win_percentage == 67


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoad:
    def test_no_data_returns_defaults(self, store: StatsStore):
        assert store.load() == AllStats()

    def test_corrupt_json_returns_defaults(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, "{not json")
        assert store.load() == AllStats()

    def test_wrong_type_returns_defaults(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, "[1, 2, 3]")
        assert store.load() == AllStats()

    def test_invalid_utf8_returns_defaults(self, store: StatsStore, storage: LocalStorage):
        storage.directory.mkdir(parents=True)
        (storage.directory / STATS_KEY).write_bytes(b"\xff\xfe{garbage")
        assert store.load() == AllStats()
        assert not store.has_played_daily(DAY)

    def test_huge_numbers_fall_back_to_zero(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, '{"daily": {"gamesPlayed": 1e999, "gamesWon": 2}}')
        loaded = store.load()
        assert loaded.daily.games_played == 0
        assert loaded.daily.games_won == 2

    def test_infinite_streak_does_not_break_recording(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, '{"daily": {"currentStreak": Infinity, "maxStreak": -Infinity}}')
        s = store.record_result(GameMode.DAILY, True, 2, today=DAY)
        assert s.current_streak == 1
        assert s.max_streak == 1

    def test_non_finite_average_ignored(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, '{"unlimited": {"averageGuesses": NaN}, "daily": {"averageGuesses": Infinity}}')
        loaded = store.load()
        assert loaded.unlimited.average_guesses == 0.0
        assert loaded.daily.average_guesses == 0.0

    def test_merges_recoverable_fields(self, store: StatsStore, storage: LocalStorage):
        storage.set_item(STATS_KEY, json.dumps({
            "daily": {"gamesPlayed": 5, "maxStreak": 3},
            "history": [
                {"word": "GATOS", "hint": "h", "date": "2025-03-09", "won": True, "attempts": 3},
                {"broken": True},
                "junk",
            ],
        }))
        loaded = store.load()
        assert loaded.daily.games_played == 5
        assert loaded.daily.max_streak == 3
        assert loaded.daily.guess_distribution == [0] * 6
        assert loaded.unlimited == GameStats()
        assert [h.word for h in loaded.history] == ["GATOS"]


# ---------------------------------------------------------------------------
# record_result
# ---------------------------------------------------------------------------

class TestRecordResult:
    def test_first_win(self, store: StatsStore):
        s = store.record_result(GameMode.DAILY, won=True, attempts=3, today=DAY)
        assert s.games_played == 1
        assert s.games_won == 1
        assert s.guess_distribution == [0, 0, 1, 0, 0, 0]
        assert s.current_streak == 1
        assert s.max_streak == 1
        assert s.average_guesses == 3.0
        assert s.last_played_date == "2025-03-10"

    def test_consecutive_days_increment_streak(self, store: StatsStore):
        for offset in range(4):
            s = store.record_result(GameMode.DAILY, True, 2, today=DAY + timedelta(days=offset))
        assert s.current_streak == 4
        assert s.max_streak == 4

    def test_gap_resets_streak_to_one(self, store: StatsStore):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        store.record_result(GameMode.DAILY, True, 2, today=DAY + timedelta(days=1))
        s = store.record_result(GameMode.DAILY, True, 2, today=DAY + timedelta(days=3))
        assert s.current_streak == 1
        assert s.max_streak == 2

    def test_same_day_win_keeps_streak(self, store: StatsStore):
        store.record_result(GameMode.UNLIMITED, True, 2, today=DAY)
        s = store.record_result(GameMode.UNLIMITED, True, 4, today=DAY)
        assert s.current_streak == 1
        assert s.games_won == 2
        assert s.average_guesses == 3.0

    def test_loss_resets_streak(self, store: StatsStore):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        s = store.record_result(GameMode.DAILY, False, 6, today=DAY + timedelta(days=1))
        assert s.current_streak == 0
        assert s.max_streak == 1
        assert s.games_played == 2
        assert s.guess_distribution == [0, 1, 0, 0, 0, 0]
        assert s.last_played_date == "2025-03-11"

    def test_win_after_loss_yesterday_continues_from_zero(self, store: StatsStore):
        store.record_result(GameMode.DAILY, False, 6, today=DAY)
        s = store.record_result(GameMode.DAILY, True, 1, today=DAY + timedelta(days=1))
        assert s.current_streak == 1

    def test_out_of_range_attempts_still_counts_win(self, store: StatsStore):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        s = store.record_result(GameMode.DAILY, True, 9, today=DAY + timedelta(days=1))
        assert s.games_won == 2
        assert sum(s.guess_distribution) == 1
        # average is computed over every win, including the one outside the histogram
        assert s.average_guesses == 1.0

    def test_modes_are_independent(self, store: StatsStore):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        assert store.get_stats(GameMode.UNLIMITED) == GameStats()

    def test_persisted(self, store: StatsStore, storage: LocalStorage):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        data = stored_payload(storage)
        assert data["daily"]["gamesWon"] == 1
        assert data["unlimited"]["gamesPlayed"] == 0
        assert StatsStore(storage).get_stats(GameMode.DAILY).games_won == 1


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

class TestHistory:
    def test_add_entry(self, store: StatsStore):
        assert store.add_to_history("GATOS", "Felinos", True, 3, today=DAY) is True
        assert store.get_history() == [
            GameHistoryEntry(word="GATOS", hint="Felinos", date="2025-03-10", won=True, attempts=3)
        ]

    def test_one_entry_per_day(self, store: StatsStore):
        store.add_to_history("GATOS", "h", True, 3, today=DAY)
        assert store.add_to_history("PERRO", "h", True, 1, today=DAY) is False
        assert [h.word for h in store.get_history()] == ["GATOS"]

    def test_newest_first(self, store: StatsStore):
        store.add_to_history("GATOS", "h", True, 3, today=DAY)
        store.add_to_history("PERRO", "h", False, 6, today=DAY + timedelta(days=1))
        assert [h.word for h in store.get_history()] == ["PERRO", "GATOS"]

    def test_capped_at_thirty(self, store: StatsStore):
        for offset in range(35):
            store.add_to_history(f"W{offset}", "h", True, 2, today=DAY + timedelta(days=offset))
        history = store.get_history()
        assert len(history) == 30
        assert history[0].word == "W34"
        assert history[-1].word == "W5"


# ---------------------------------------------------------------------------
# record_game / daily flag
# ---------------------------------------------------------------------------

def make_result(mode: GameMode, won: bool = True, attempts: int = 3, day: date = DAY) -> GameResult:
    return GameResult(
        mode=mode,
        won=won,
        attempts=attempts,
        word="GATOS",
        hint="Felinos",
        config=GameConfig(),
        duration=42,
        hints_used={"letter": 0, "definition": 0},
        date=day,
    )


class TestRecordGame:
    def test_daily_records_history_and_flag(self, store: StatsStore):
        store.record_game(make_result(GameMode.DAILY))
        assert store.get_stats(GameMode.DAILY).games_won == 1
        assert len(store.get_history()) == 1
        assert store.has_played_daily(DAY)
        assert not store.has_played_daily(DAY + timedelta(days=1))

    def test_unlimited_skips_history(self, store: StatsStore):
        store.record_game(make_result(GameMode.UNLIMITED))
        assert store.get_stats(GameMode.UNLIMITED).games_played == 1
        assert store.get_history() == []
        assert not store.has_played_daily(DAY)

    def test_two_daily_wins_same_day_one_history_entry(self, store: StatsStore):
        store.record_game(make_result(GameMode.DAILY))
        store.record_game(make_result(GameMode.DAILY))
        assert len(store.get_history()) == 1

    def test_flag_stored_under_own_key(self, store: StatsStore, storage: LocalStorage):
        store.mark_daily_played(DAY)
        assert storage.get_item(DAILY_DATE_KEY) == "2025-03-10"


# ---------------------------------------------------------------------------
# Combined stats / reset
# ---------------------------------------------------------------------------

class TestCombinedAndReset:
    def test_combined(self, store: StatsStore):
        store.record_result(GameMode.DAILY, True, 2, today=DAY)
        store.record_result(GameMode.DAILY, True, 2, today=DAY + timedelta(days=1))
        store.record_result(GameMode.UNLIMITED, False, 6, today=DAY)
        combined = store.get_combined_stats()
        assert combined.total_games == 3
        assert combined.total_wins == 2
        assert combined.win_percentage == 67
        assert combined.current_streak == 2
        assert combined.max_streak == 2

    def test_combined_empty(self, store: StatsStore):
        assert store.get_combined_stats().win_percentage == 0

    def test_reset(self, store: StatsStore):
        store.record_game(make_result(GameMode.DAILY))
        store.reset()
        assert store.load() == AllStats()
        assert not store.has_played_daily(DAY)


# ---------------------------------------------------------------------------
# PreferencesStore
# ---------------------------------------------------------------------------

class TestPreferences:
    def test_default(self, storage: LocalStorage):
        assert PreferencesStore(storage).load_last_config() == GameConfig()

    def test_round_trip(self, storage: LocalStorage):
        prefs = PreferencesStore(storage)
        prefs.save_last_config(GameConfig(word_length=7, dictionary=DictionaryType.FOOD))
        assert prefs.load_last_config() == GameConfig(word_length=7, dictionary=DictionaryType.FOOD)

    def test_corrupt_falls_back(self, storage: LocalStorage):
        storage.set_item(PREFERENCES_KEY, json.dumps({"lastConfig": {"wordLength": 5, "dictionary": "sports"}}))
        assert PreferencesStore(storage).load_last_config() == GameConfig()
