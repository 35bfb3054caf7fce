"""Static text widget backed by a tagged TextBuffer."""

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

from ..state import ContainerState
from ..text.buffer import TextBuffer
from ..theme import PALETTE


class TextBlock(Static):
    """Renders a TextBuffer; reports its laid-out height to the parent."""

    DEFAULT_CSS = f"""
    TextBlock {{
        width: auto;
        height: auto;
        padding: 0 1 1 1;
        color: {PALETTE.text_primary};
    }}
    TextBlock.-wrap {{
        width: 100%;
    }}
    """

    class NaturalHeightChanged(Message):
        """Posted when the block's laid-out height changes."""

        def __init__(self, text_block: "TextBlock", height: int) -> None:
            super().__init__()
            self.text_block = text_block
            self.height = height

        @property
        def control(self) -> "TextBlock":
            return self.text_block

    def __init__(self, state: ContainerState, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.container_state = state
        self.buffer = TextBuffer(state.tag_table())
        self._wrap = False
        self._natural_height = -1

    @property
    def wrap(self) -> bool:
        return self._wrap

    @property
    def natural_height(self) -> int:
        """Last reported height, or -1 before the first layout."""
        return self._natural_height

    def set_wrap(self, wrap: bool) -> None:
        """Wrap words at the viewport edge, or keep lines whole and scroll."""
        self._wrap = wrap
        self.set_class(wrap, "-wrap")
        self.refresh_text()

    def insert(self, text: str) -> None:
        self.buffer.insert(text)
        self.refresh_text()

    def refresh_text(self) -> None:
        """Re-render after the buffer changed."""
        if self.is_mounted:
            self.refresh(layout=True)

    def render(self) -> Text:
        return self.buffer.to_rich(wrap=self._wrap)

    def on_resize(self, event: events.Resize) -> None:
        height = self.outer_size.height
        if height != self._natural_height:
            self._natural_height = height
            self.post_message(self.NaturalHeightChanged(self, height))
