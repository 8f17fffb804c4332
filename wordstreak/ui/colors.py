"""Theme palettes and color utilities for the UI."""

from wordstreak.core.words import Correctness


class DarkColors:
    BG = "#171717"
    PANEL = "#262626"
    BORDER = "#404040"

    TEXT_PRIMARY = "#fafafa"
    TEXT_MUTED = "#525252"
    TEXT_SECONDARY = "#a3a3a3"

    SUCCESS = "#16a34a"
    ERROR = "#dc2626"
    WPM_ACCENT = "#22c55e"
    STREAK_ACCENT = "#3b82f6"


class LightColors:
    BG = "#f5f5f5"
    PANEL = "#ffffff"
    BORDER = "#d4d4d4"

    TEXT_PRIMARY = "#171717"
    TEXT_MUTED = "#a3a3a3"
    TEXT_SECONDARY = "#525252"

    SUCCESS = "#15803d"
    ERROR = "#b91c1c"
    WPM_ACCENT = "#16a34a"
    STREAK_ACCENT = "#2563eb"


def palette(dark_mode: bool) -> type:
    return DarkColors if dark_mode else LightColors


def character_color(correct: Correctness, dark_mode: bool) -> str:
    colors = palette(dark_mode)
    if correct is Correctness.CORRECT:
        return colors.TEXT_PRIMARY
    if correct is Correctness.INCORRECT:
        return colors.ERROR
    return colors.TEXT_MUTED


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
