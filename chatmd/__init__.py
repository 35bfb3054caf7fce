"""chatmd - Markdown block widgets for Textual chat clients."""

__version__ = "0.1.0"

from .config import PrefsConfig
from .heights import HeightBounds, compute_bounds, collapsed_height, expanded_height
from .prefs import IntMeta, IntPref, PrefError
from .state import ContainerState

__all__ = [
    "PrefsConfig",
    "HeightBounds",
    "compute_bounds",
    "collapsed_height",
    "expanded_height",
    "IntMeta",
    "IntPref",
    "PrefError",
    "ContainerState",
]
