"""Textual App that previews code blocks the way a chat view shows them."""

from typing import Iterable, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll

from .state import ContainerState
from .theme import PALETTE
from .widgets import CodeBlock


class PreviewApp(App):
    """Scrollable column of CodeBlocks."""

    CSS = f"""
    Screen {{
        background: {PALETTE.bg};
    }}
    #blocks {{
        height: 1fr;
        width: 100%;
        padding: 1 2;
    }}
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, blocks: Iterable[Tuple[str, str]] = (), **kwargs) -> None:
        super().__init__(**kwargs)
        self.blocks = list(blocks)
        self.container_state = ContainerState()

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="blocks"):
            for code, language in self.blocks:
                yield CodeBlock(self.container_state, code=code, language=language)
