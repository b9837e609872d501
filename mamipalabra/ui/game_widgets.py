"""Game screen widgets: the letter grid and the on-screen keyboard."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QHBoxLayout, QPushButton, QSizePolicy, QVBoxLayout, QWidget

from mamipalabra.core.scoring import LetterState
from mamipalabra.ui.colors import HomeColors, TileColors, blend_hex, state_fill, state_text_color
from mamipalabra.ui.messages import BACK_KEY, ENTER_KEY, KEYBOARD_ROWS
from mamipalabra.ui.models import TileView


class LetterGridWidget(QWidget):
    """Board of tiles, one row per guess slot."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._rows: List[List[TileView]] = []
        self._shake_row: int = -1
        self.setMinimumSize(260, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_rows(self, rows: List[List[TileView]]) -> None:
        self._rows = [list(row) for row in rows]
        self.update()

    def set_shake_row(self, row: int) -> None:
        """Outline a rejected row; -1 clears it."""
        self._shake_row = row
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._rows:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        columns = max(len(row) for row in self._rows)
        spacing = 6
        box = min(
            (self.width() - spacing * (columns - 1)) // max(columns, 1),
            (self.height() - spacing * (len(self._rows) - 1)) // len(self._rows),
            64,
        )
        box = max(box, 24)
        total_w = columns * (box + spacing) - spacing
        total_h = len(self._rows) * (box + spacing) - spacing
        start_x = max(0, (self.width() - total_w) // 2)
        start_y = max(0, (self.height() - total_h) // 2)

        font = painter.font()
        font.setPointSize(max(10, int(box * 0.42)))
        font.setBold(True)
        painter.setFont(font)

        for r, row in enumerate(self._rows):
            for c, tile in enumerate(row):
                x = start_x + c * (box + spacing)
                y = start_y + r * (box + spacing)
                fill = state_fill(tile.state)
                if tile.state is LetterState.FILLED:
                    border = TileColors.BORDER_FILLED
                elif tile.state is LetterState.EMPTY:
                    border = TileColors.BORDER_EMPTY
                else:
                    border = blend_hex(fill, "#000000", 0.15)
                if r == self._shake_row:
                    border = HomeColors.CORAL
                painter.setBrush(QColor(fill))
                painter.setPen(QPen(QColor(border), 2))
                painter.drawRoundedRect(x, y, box, box, 6, 6)
                if tile.char:
                    painter.setPen(QColor(state_text_color(tile.state)))
                    painter.drawText(x, y, box, box, Qt.AlignCenter, tile.char)


class KeyboardWidget(QWidget):
    """On-screen Spanish keyboard colored with the best known state of each letter."""

    key_pressed = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._buttons: Dict[str, QPushButton] = {}
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)
        for keys in KEYBOARD_ROWS:
            row = QHBoxLayout()
            row.setSpacing(5)
            row.addStretch(1)
            for key in keys:
                button = QPushButton("⌫" if key == BACK_KEY else key)
                button.setCursor(Qt.PointingHandCursor)
                button.setFocusPolicy(Qt.NoFocus)
                button.setMinimumHeight(46)
                button.setMinimumWidth(64 if key in (ENTER_KEY, BACK_KEY) else 36)
                button.clicked.connect(lambda _checked=False, k=key: self.key_pressed.emit(k))
                self._buttons[key] = button
                row.addWidget(button)
            row.addStretch(1)
            layout.addLayout(row)
        self.set_letter_states({})

    def letter_keys(self) -> List[str]:
        return [key for key in self._buttons if key not in (ENTER_KEY, BACK_KEY)]

    def set_letter_states(self, states: Mapping[str, LetterState]) -> None:
        for key, button in self._buttons.items():
            state = states.get(key, LetterState.EMPTY)
            if state in (LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT):
                fill = state_fill(state)
            else:
                fill = TileColors.KEY_DEFAULT
            button.setStyleSheet(
                f"""
                QPushButton {{
                    background: {fill};
                    color: {state_text_color(state)};
                    border: none;
                    border-radius: 6px;
                    font-weight: 700;
                    font-size: 15px;
                }}
                QPushButton:hover {{
                    background: {blend_hex(fill, "#000000", 0.08)};
                }}
                QPushButton:disabled {{
                    background: {blend_hex(fill, "#ffffff", 0.4)};
                }}
                """
            )

    def setEnabled(self, enabled: bool) -> None:
        for button in self._buttons.values():
            button.setEnabled(enabled)
        super().setEnabled(enabled)
