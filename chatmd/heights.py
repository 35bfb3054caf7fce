"""Codeblock height preferences and bound computation.

Heights are terminal rows.
"""

from dataclasses import dataclass

from . import prefs

collapsed_height = prefs.IntPref(10, prefs.IntMeta(
    name="Collapsed Codeblock Height",
    section="Text",
    description="The height of a collapsed codeblock."
    " Long snippets of code will appear cropped.",
    min=3,
    max=500,
))

expanded_height = prefs.IntPref(20, prefs.IntMeta(
    name="Expanded Codeblock Height",
    section="Text",
    description="The height of an expanded codeblock."
    " Codeblocks are either shorter than this or as tall."
    " Ignored if this is lower than the collapsed height.",
    min=3,
    max=500,
))

prefs.order(collapsed_height, expanded_height)


@dataclass(frozen=True)
class HeightBounds:
    """Scroll heights for the two states of a codeblock."""

    minimum: int
    maximum: int
    overflow: bool


def compute_bounds(natural: int, lower: int, upper: int) -> HeightBounds:
    """Clamp a block's natural height to the collapsed/expanded bounds.

    ``upper`` is raised to ``lower`` when it is the smaller of the two, so
    the expanded height is never below the collapsed one.
    """
    natural = max(natural, 0)
    upper = max(upper, lower)
    return HeightBounds(
        minimum=min(natural, lower),
        maximum=min(natural, upper),
        overflow=natural > lower,
    )


def current_bounds(natural: int) -> HeightBounds:
    """:func:`compute_bounds` against the live preference values."""
    return compute_bounds(natural, collapsed_height.value(), expanded_height.value())
