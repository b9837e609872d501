from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from mamipalabra.core.config import DEFAULT_WORD_LENGTH, MAX_ATTEMPTS
from mamipalabra.core.session import (
    GameConfig,
    GameMode,
    GameRound,
    HintOutcome,
    SubmitOutcome,
    start_round,
)
from mamipalabra.core.stats import PreferencesStore, StatsStore
from mamipalabra.core.word_of_day import time_until_next_word
from mamipalabra.core.words import DICTIONARIES, DictionaryType, WordRepository
from mamipalabra.ui import messages
from mamipalabra.ui.colors import HomeColors
from mamipalabra.ui.game_widgets import KeyboardWidget, LetterGridWidget
from mamipalabra.ui.models import build_grid, format_date_short, key_states

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window: a home screen to pick a mode and a game screen to play a round."""

    def __init__(
        self,
        words: WordRepository,
        stats_store: StatsStore,
        preferences: PreferencesStore,
    ) -> None:
        super().__init__()
        self._words = words
        self._stats_store = stats_store
        self._preferences = preferences
        self._round: Optional[GameRound] = None
        self._rng = random.Random()

        self._stack = QStackedWidget()
        self._home_screen = self._build_home_screen()
        self._game_screen = self._build_game_screen()
        self._stack.addWidget(self._home_screen)
        self._stack.addWidget(self._game_screen)
        self.setCentralWidget(self._stack)
        self.setWindowTitle("MamiPalabra")
        self.setStyleSheet(
            f"""
            QMainWindow {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {HomeColors.BG_TOP}, stop:0.5 {HomeColors.BG_MIDDLE}, stop:1 {HomeColors.BG_BOTTOM});
            }}
            QLabel {{ color: {HomeColors.TEXT_PRIMARY}; }}
            QFrame#card {{
                background: {HomeColors.CARD_BG};
                border: 1px solid {HomeColors.CARD_BORDER};
                border-radius: 16px;
            }}
            QPushButton#primary {{
                background: {HomeColors.PRIMARY};
                color: white;
                border: none;
                border-radius: 12px;
                padding: 10px 18px;
                font-weight: 700;
            }}
            QPushButton#primary:disabled {{ background: {HomeColors.TEXT_MUTED}; }}
            """
        )

        self._toast_timer = QTimer(self)
        self._toast_timer.setSingleShot(True)
        self._toast_timer.timeout.connect(self._clear_toast)

        self._show_home_screen()

    # ------------------------------------------------------------------
    # Home screen
    # ------------------------------------------------------------------

    def _build_home_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        self._greeting_label = QLabel("")
        self._greeting_label.setStyleSheet("font-size: 28px; font-weight: 800;")
        self._greeting_sub_label = QLabel("")
        self._greeting_sub_label.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 15px;")
        layout.addWidget(self._greeting_label)
        layout.addWidget(self._greeting_sub_label)

        daily_card = self._card()
        daily_layout = QVBoxLayout(daily_card)
        daily_title = QLabel("Palabra del Día")
        daily_title.setStyleSheet("font-size: 20px; font-weight: 700;")
        self._daily_status_label = QLabel("")
        self._daily_button = QPushButton("Jugar")
        self._daily_button.setObjectName("primary")
        self._daily_button.clicked.connect(lambda: self._start_round(GameMode.DAILY))
        daily_layout.addWidget(daily_title)
        daily_layout.addWidget(self._daily_status_label)
        daily_layout.addWidget(self._daily_button)
        layout.addWidget(daily_card)

        unlimited_card = self._card()
        unlimited_layout = QGridLayout(unlimited_card)
        unlimited_title = QLabel("Modo Libre")
        unlimited_title.setStyleSheet("font-size: 20px; font-weight: 700;")
        self._length_combo = QComboBox()
        for length in self._words.available_lengths():
            self._length_combo.addItem(f"{length} letras", length)
        self._dictionary_combo = QComboBox()
        for info in DICTIONARIES:
            self._dictionary_combo.addItem(f"{info.name} – {info.description}", info.type.value)
        unlimited_button = QPushButton("Jugar")
        unlimited_button.setObjectName("primary")
        unlimited_button.clicked.connect(lambda: self._start_round(GameMode.UNLIMITED))
        unlimited_layout.addWidget(unlimited_title, 0, 0, 1, 2)
        unlimited_layout.addWidget(self._length_combo, 1, 0)
        unlimited_layout.addWidget(self._dictionary_combo, 1, 1)
        unlimited_layout.addWidget(unlimited_button, 2, 0, 1, 2)
        layout.addWidget(unlimited_card)

        stats_card = self._card()
        stats_layout = QGridLayout(stats_card)
        self._stat_labels: dict[str, QLabel] = {}
        for column, (key, caption) in enumerate(
            (("games", "Jugadas"), ("wins", "% Victorias"), ("streak", "Racha"), ("best", "Mejor"))
        ):
            value = QLabel("0")
            value.setAlignment(Qt.AlignCenter)
            value.setStyleSheet(f"font-size: 26px; font-weight: 800; color: {HomeColors.PRIMARY};")
            label = QLabel(caption)
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet(f"color: {HomeColors.TEXT_MUTED};")
            stats_layout.addWidget(value, 0, column)
            stats_layout.addWidget(label, 1, column)
            self._stat_labels[key] = value
        layout.addWidget(stats_card)

        history_title = QLabel("Historial")
        history_title.setStyleSheet("font-size: 18px; font-weight: 700;")
        self._history_list = QListWidget()
        layout.addWidget(history_title)
        layout.addWidget(self._history_list, 1)

        reset_button = QPushButton("Reiniciar estadísticas")
        reset_button.clicked.connect(self._reset_stats)
        layout.addWidget(reset_button, 0, Qt.AlignRight)
        return screen

    def _card(self) -> QFrame:
        card = QFrame()
        card.setObjectName("card")
        return card

    def _refresh_home(self) -> None:
        text, subtext = messages.greeting(datetime.now().hour)
        self._greeting_label.setText(text)
        self._greeting_sub_label.setText(subtext)

        if self._stats_store.has_played_daily():
            hours, minutes, _ = time_until_next_word()
            self._daily_status_label.setText(
                f"{messages.ALREADY_PLAYED}. Nueva palabra en {hours}h {minutes}m"
            )
            self._daily_button.setEnabled(False)
        else:
            self._daily_status_label.setText(format_date_short(date.today()))
            self._daily_button.setEnabled(True)

        last = self._preferences.load_last_config()
        length_index = self._length_combo.findData(last.word_length)
        if length_index < 0:
            length_index = self._length_combo.findData(DEFAULT_WORD_LENGTH)
        self._length_combo.setCurrentIndex(max(length_index, 0))
        dictionary_index = self._dictionary_combo.findData(last.dictionary.value)
        self._dictionary_combo.setCurrentIndex(max(dictionary_index, 0))

        combined = self._stats_store.get_combined_stats()
        self._stat_labels["games"].setText(str(combined.total_games))
        self._stat_labels["wins"].setText(str(combined.win_percentage))
        self._stat_labels["streak"].setText(str(combined.current_streak))
        self._stat_labels["best"].setText(str(combined.max_streak))

        self._history_list.clear()
        for entry in self._stats_store.get_history():
            result = f"{entry.attempts}/{MAX_ATTEMPTS}" if entry.won else "X"
            self._history_list.addItem(f"{entry.date}  {entry.word.upper()}  {result}  · {entry.hint}")

    def _reset_stats(self) -> None:
        answer = QMessageBox.question(
            self,
            "Reiniciar",
            "¿Seguro que quieres borrar todas tus estadísticas?",
        )
        if answer == QMessageBox.StandardButton.Yes:
            self._stats_store.reset()
            self._refresh_home()

    def _show_home_screen(self) -> None:
        self._round = None
        self._refresh_home()
        self._stack.setCurrentWidget(self._home_screen)

    # ------------------------------------------------------------------
    # Game screen
    # ------------------------------------------------------------------

    def _build_game_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(24, 16, 24, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        back_button = QPushButton("←")
        back_button.setFixedWidth(44)
        back_button.clicked.connect(self._show_home_screen)
        self._game_title_label = QLabel("")
        self._game_title_label.setStyleSheet("font-size: 20px; font-weight: 800;")
        self._letter_hint_button = QPushButton("Revelar letra")
        self._letter_hint_button.clicked.connect(self._on_letter_hint)
        self._definition_hint_button = QPushButton("Ver pista")
        self._definition_hint_button.clicked.connect(self._on_definition_hint)
        for button in (back_button, self._letter_hint_button, self._definition_hint_button):
            button.setFocusPolicy(Qt.NoFocus)
        header.addWidget(back_button)
        header.addWidget(self._game_title_label, 1)
        header.addWidget(self._letter_hint_button)
        header.addWidget(self._definition_hint_button)
        layout.addLayout(header)

        self._toast_label = QLabel("")
        self._toast_label.setAlignment(Qt.AlignCenter)
        self._toast_label.setWordWrap(True)
        self._toast_label.setStyleSheet(f"font-size: 15px; font-weight: 600; color: {HomeColors.PRIMARY_DARK};")
        layout.addWidget(self._toast_label)

        self._grid = LetterGridWidget()
        layout.addWidget(self._grid, 1)

        self._end_panel = self._card()
        end_layout = QVBoxLayout(self._end_panel)
        self._end_title_label = QLabel("")
        self._end_title_label.setAlignment(Qt.AlignCenter)
        self._end_title_label.setStyleSheet("font-size: 20px; font-weight: 800;")
        self._end_word_label = QLabel("")
        self._end_word_label.setAlignment(Qt.AlignCenter)
        self._end_word_label.setStyleSheet(f"font-size: 26px; font-weight: 900; color: {HomeColors.PRIMARY};")
        self._end_stats_label = QLabel("")
        self._end_stats_label.setAlignment(Qt.AlignCenter)
        self._end_cta_label = QLabel("")
        self._end_cta_label.setAlignment(Qt.AlignCenter)
        end_buttons = QHBoxLayout()
        self._play_again_button = QPushButton("Jugar otra vez")
        self._play_again_button.setObjectName("primary")
        self._play_again_button.clicked.connect(lambda: self._start_round(GameMode.UNLIMITED))
        home_button = QPushButton("Inicio")
        home_button.clicked.connect(self._show_home_screen)
        end_buttons.addWidget(self._play_again_button)
        end_buttons.addWidget(home_button)
        for widget in (self._end_title_label, self._end_word_label, self._end_stats_label, self._end_cta_label):
            end_layout.addWidget(widget)
        end_layout.addLayout(end_buttons)
        layout.addWidget(self._end_panel)

        self._keyboard = KeyboardWidget()
        self._keyboard.key_pressed.connect(self._on_key)
        layout.addWidget(self._keyboard)
        return screen

    def _start_round(self, mode: GameMode) -> None:
        if mode is GameMode.DAILY:
            if self._stats_store.has_played_daily():
                self._refresh_home()
                return
            self._round = start_round(self._words, GameMode.DAILY, rng=self._rng)
            self._game_title_label.setText(f"Palabra del Día · {format_date_short(date.today())}")
        else:
            config = GameConfig(
                word_length=int(self._length_combo.currentData()),
                dictionary=DictionaryType(self._dictionary_combo.currentData()),
            )
            self._preferences.save_last_config(config)
            self._round = start_round(self._words, GameMode.UNLIMITED, config, rng=self._rng)
            self._game_title_label.setText(f"Modo Libre · {self._round.word_length} letras")

        logger.info("Started %s round (%d letters)", mode.value, self._round.word_length)
        self._clear_toast()
        self._end_panel.setVisible(False)
        self._grid.set_shake_row(-1)
        self._render_round()
        self._stack.setCurrentWidget(self._game_screen)
        self.setFocus()

    def _render_round(self) -> None:
        if self._round is None:
            return
        self._grid.set_rows(build_grid(self._round))
        self._keyboard.set_letter_states(key_states(self._round.letter_states, self._keyboard.letter_keys()))
        playing = not self._round.is_over()
        hints = self._round.hints_remaining
        self._letter_hint_button.setEnabled(playing and hints.letter > 0)
        self._definition_hint_button.setEnabled(playing and hints.definition > 0)
        self._keyboard.setEnabled(playing)

    def _on_key(self, key: str) -> None:
        if self._round is None or self._round.is_over():
            return
        if key == messages.ENTER_KEY:
            self._submit()
        elif key == messages.BACK_KEY:
            self._round.backspace()
        else:
            self._round.type_letter(key)
        self._grid.set_shake_row(-1)
        self._render_round()

    def _submit(self) -> None:
        outcome = self._round.submit()
        if outcome is SubmitOutcome.NOT_ENOUGH_LETTERS:
            self._reject(messages.NOT_ENOUGH_LETTERS)
        elif outcome is SubmitOutcome.NOT_IN_WORD_LIST:
            self._reject(messages.NOT_IN_WORD_LIST)
        elif outcome is SubmitOutcome.ACCEPTED and self._round.is_over():
            self._finish_round()

    def _reject(self, message: str) -> None:
        self._show_toast(message)
        row = self._round.current_row
        QTimer.singleShot(0, lambda: self._grid.set_shake_row(row))
        QTimer.singleShot(600, lambda: self._grid.set_shake_row(-1))

    def _finish_round(self) -> None:
        result = self._round.result()
        stats = self._stats_store.record_game(result)

        if result.won:
            self._end_title_label.setText(messages.win_message(result.attempts))
            attempts_text = str(result.attempts)
        else:
            self._end_title_label.setText(messages.LOSE)
            attempts_text = "X"
        self._end_word_label.setText(result.word)
        self._end_stats_label.setText(
            f"Intentos: {attempts_text}   Racha: {stats.current_streak}   Mejor: {stats.max_streak}"
        )
        self._end_cta_label.setText(self._rng.choice(messages.CTA_PHRASES))
        self._play_again_button.setVisible(result.mode is GameMode.UNLIMITED)
        self._end_panel.setVisible(True)
        self._render_round()

    def _on_letter_hint(self) -> None:
        if self._round is None:
            return
        hint = self._round.use_letter_hint()
        if hint.outcome is HintOutcome.REVEALED:
            self._show_toast(f"{messages.HINT_LETTER} {hint.content}", 2000)
        elif hint.outcome is HintOutcome.NO_HINTS_LEFT:
            self._show_toast(messages.NO_HINTS_LEFT)
        self._render_round()

    def _on_definition_hint(self) -> None:
        if self._round is None:
            return
        hint = self._round.use_definition_hint()
        if hint.outcome is HintOutcome.REVEALED:
            self._show_toast(f"{messages.HINT_DEFINITION} {hint.content}", 3000)
        elif hint.outcome is HintOutcome.NO_HINTS_LEFT:
            self._show_toast(messages.NO_HINTS_LEFT)
        self._render_round()

    def _show_toast(self, message: str, duration_ms: int = 2000) -> None:
        self._toast_label.setText(message)
        self._toast_timer.start(duration_ms)

    def _clear_toast(self) -> None:
        self._toast_label.setText("")

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self._stack.currentWidget() is not self._game_screen:
            super().keyPressEvent(event)
            return
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            self._on_key(messages.ENTER_KEY)
        elif event.key() == Qt.Key_Backspace:
            self._on_key(messages.BACK_KEY)
        elif event.text() and event.text().isalpha():
            self._on_key(event.text().upper())
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info("Closing MamiPalabra")
        super().closeEvent(event)
