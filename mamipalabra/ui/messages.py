"""Player-facing Spanish texts and the on-screen keyboard layout."""

from __future__ import annotations

from typing import Final, Tuple

KEYBOARD_ROWS: Final[Tuple[Tuple[str, ...], ...]] = (
    ("Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P"),
    ("A", "S", "D", "F", "G", "H", "J", "K", "L", "Ñ"),
    ("ENTER", "Z", "X", "C", "V", "B", "N", "M", "BACK"),
)

ENTER_KEY: Final[str] = "ENTER"
BACK_KEY: Final[str] = "BACK"

WIN: Final[Tuple[str, ...]] = (
    "¡Eres increíble, mami! 💖",
    "¡Qué lista eres, mami! ✨",
    "¡Muy bien, mami! 🌟",
    "¡Lo lograste, mami! 💪",
    "¡Casi no, pero sí! 😅",
    "¡Por los pelos, mami! 🎉",
)
LOSE: Final[str] = "¡No pasa nada, mami! Mañana lo consigues 💕"
NOT_ENOUGH_LETTERS: Final[str] = "Faltan letras, mami"
NOT_IN_WORD_LIST: Final[str] = "Esa palabra no vale, mami"
HINT_LETTER: Final[str] = "Te doy una ayudita, la palabra tiene:"
HINT_DEFINITION: Final[str] = "Pista para ti, mami:"
NO_HINTS_LEFT: Final[str] = "Ya no quedan pistas, mami"
ALREADY_PLAYED: Final[str] = "Ya jugaste la palabra de hoy, mami"

CTA_PHRASES: Final[Tuple[str, ...]] = (
    "¿Quieres jugar más, mami?",
    "¿Una partidita más?",
    "La diversión no tiene que parar...",
    "¡Hay más palabras esperándote!",
    "¿Te quedaste con ganas?",
    "¡El modo ilimitado te espera!",
    "¿Probamos otra palabra?",
    "¡No pares ahora!",
    "¿Quieres seguir entrenando?",
    "¡Mami, enséñales cómo se hace!",
)

MONTHS_SHORT: Final[Tuple[str, ...]] = (
    "Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic",
)


def win_message(attempts: int) -> str:
    """Celebration text: the earlier the win, the warmer the message."""
    index = max(0, min(attempts - 1, len(WIN) - 1))
    return WIN[index]


def greeting(hour: int) -> Tuple[str, str]:
    if 5 <= hour < 12:
        return "¡Buenos días!", "¿Lista para jugar?"
    if 12 <= hour < 19:
        return "¡Buenas tardes!", "¿Un juego rápido?"
    return "¡Buenas noches!", "Relájate y juega"
