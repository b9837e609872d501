"""Theme colors and color utilities for the UI."""

from mamipalabra.core.scoring import LetterState


class HomeColors:
    """Warm light palette."""

    BG_TOP = "#fff1f2"
    BG_MIDDLE = "#ffe4e6"
    BG_BOTTOM = "#fecdd3"

    PRIMARY = "#db2777"
    PRIMARY_DARK = "#9d174d"

    CORAL = "#ff8a65"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#3b1d2a"
    TEXT_SECONDARY = "#6b4a57"
    TEXT_MUTED = "#9c8390"


class TileColors:
    """Tile and key fill per letter state."""

    CORRECT = "#6aaa64"
    PRESENT = "#c9b458"
    ABSENT = "#787c7e"
    FILLED = "#ffffff"
    EMPTY = "#ffffff"
    KEY_DEFAULT = "#e5dfe2"

    BORDER_EMPTY = "#e2d5db"
    BORDER_FILLED = "#8a7480"


_STATE_FILL = {
    LetterState.CORRECT: TileColors.CORRECT,
    LetterState.PRESENT: TileColors.PRESENT,
    LetterState.ABSENT: TileColors.ABSENT,
    LetterState.FILLED: TileColors.FILLED,
    LetterState.EMPTY: TileColors.EMPTY,
}


def state_fill(state: LetterState) -> str:
    return _STATE_FILL.get(state, TileColors.EMPTY)


def state_text_color(state: LetterState) -> str:
    """White text on scored tiles, dark text on unscored ones."""
    if state in (LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT):
        return "#ffffff"
    return HomeColors.TEXT_PRIMARY


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
