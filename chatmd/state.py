"""State shared by every block rendered in one markdown view."""

from typing import Optional

from .text.tags import TagTable
from .theme import PALETTE


class ContainerState:
    """Tag table and highlight theme for a group of blocks."""

    def __init__(self, table: Optional[TagTable] = None, theme: str = PALETTE.syntax_theme):
        self._table = table if table is not None else TagTable()
        self.theme = theme

    def tag_table(self) -> TagTable:
        return self._table
