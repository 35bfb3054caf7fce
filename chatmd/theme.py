"""chatmd theme: canonical color system for markdown blocks.

All hex values live here. Widgets never hardcode colors.
"""

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Palette:
    """Surface / text / functional color palette."""

    # Surfaces
    bg: str = "#0d1117"
    surface: str = "#121218"
    code_bg: str = "#161b22"
    border: str = "#30363d"
    border_subtle: str = "#1a1a28"

    # Text hierarchy
    text_bright: str = "#e8e8f0"
    text_primary: str = "#c9d1d9"
    text_dim: str = "#6e7681"
    text_muted: str = "#363648"

    # Functional
    cyan: str = "#00d4e5"
    green: str = "#34d399"
    red: str = "#e55a6e"

    # Semantic aliases
    language_label: str = "#6e7681"
    copied: str = "#34d399"
    error: str = "#e55a6e"

    # Syntax theme passed to Rich/Pygments
    syntax_theme: str = "monokai"


PALETTE = Palette()


# ---------------------------------------------------------------------------
# Fade cue
# ---------------------------------------------------------------------------

# Alpha of the page background over the code surface, top row to bottom row.
FADE_STOPS = (0.06, 0.19, 0.25)


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def blend(base: str, over: str, alpha: float) -> str:
    """Blend ``over`` onto ``base`` at ``alpha`` and return the hex result."""
    if alpha <= 0:
        return base
    if alpha >= 1:
        return over

    b = _hex_to_rgb(base)
    o = _hex_to_rgb(over)
    mixed = (
        int(b[0] + (o[0] - b[0]) * alpha),
        int(b[1] + (o[1] - b[1]) * alpha),
        int(b[2] + (o[2] - b[2]) * alpha),
    )
    return "#{:02x}{:02x}{:02x}".format(*mixed)


def fade_colors(rows: int = len(FADE_STOPS)) -> list[str]:
    """Background colors for each row of the fade cover, top to bottom."""
    if rows <= 0:
        return []
    colors = []
    for i in range(rows):
        fraction = (i + 1) / rows
        idx = min(int(fraction * len(FADE_STOPS)) - 1, len(FADE_STOPS) - 1)
        alpha = FADE_STOPS[max(idx, 0)]
        colors.append(blend(PALETTE.code_bg, PALETTE.text_dim, alpha))
    return colors
