"""Collapsible, syntax-highlighted code block.

The code scrolls on the base layer. An actions bar (language label, wrap,
copy, expand) and a fade cover sit on the overlay layer. Collapsed blocks
are cropped to the collapsed-height preference; clicking anywhere on one
expands it to (at most) the expanded-height preference.
"""

import logging
from typing import Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, ScrollableContainer
from textual.reactive import reactive
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Button, Label

from .. import heights
from ..heights import HeightBounds
from ..state import ContainerState
from ..text.highlight import HL_PREFIX, highlight as highlight_buffer
from ..text.tags import from_table
from ..theme import PALETTE, fade_colors
from .text_block import TextBlock

_log = logging.getLogger(__name__)

COPY_FEEDBACK_SECONDS = 3.0

ICON_EXPAND = "▼"
ICON_RESTORE = "▲"
ICON_WRAP = "↵"
ICON_COPY = "⧉"

PRIMARY_BUTTON = 1


def _is_block_tag(tag) -> bool:
    # Tags owned by highlight(); replaced on every call.
    return tag.name == "_nohyphens" or tag.name.startswith(HL_PREFIX)


class FadeCover(Widget):
    """Shaded strip along the bottom edge of a cropped block."""

    DEFAULT_CSS = """
    FadeCover {
        height: 1;
        width: 100%;
    }
    """

    def render(self) -> Text:
        width = self.size.width
        text = Text(end="")
        for i, color in enumerate(fade_colors(self.size.height)):
            if i:
                text.append("\n")
            text.append(" " * width, style=f"on {color}")
        return text


class CodeBlock(Widget):
    """A block of code with language label, copy, wrap and expand controls."""

    DEFAULT_CSS = f"""
    CodeBlock {{
        layers: base overlay;
        height: auto;
        width: 100%;
        margin: 1 0;
        border: round {PALETTE.border};
        background: {PALETTE.code_bg};
    }}
    CodeBlock > .codeblock-scroll {{
        layer: base;
        height: auto;
        width: 100%;
        overflow-x: auto;
        overflow-y: hidden;
        scrollbar-size-vertical: 1;
        scrollbar-size-horizontal: 1;
        scrollbar-background: {PALETTE.code_bg};
    }}
    CodeBlock.-expanded > .codeblock-scroll {{
        overflow-y: auto;
    }}
    CodeBlock > .codeblock-actions {{
        layer: overlay;
        dock: right;
        height: 1;
        width: auto;
    }}
    CodeBlock.-expanded > .codeblock-actions {{
        dock: top;
        width: 100%;
    }}
    CodeBlock .codeblock-language {{
        display: none;
        width: 1fr;
        height: 1;
        margin: 0 1;
        color: {PALETTE.language_label};
        text-style: italic;
    }}
    CodeBlock.-expanded .codeblock-language {{
        display: block;
    }}
    CodeBlock .codeblock-copied {{
        display: none;
        width: auto;
        height: 1;
        margin: 0 1;
        color: {PALETTE.copied};
    }}
    CodeBlock .codeblock-actions Button {{
        width: auto;
        min-width: 3;
        height: 1;
        border: none;
        margin: 0 0 0 1;
        background: {PALETTE.surface};
        color: {PALETTE.text_dim};
    }}
    CodeBlock .codeblock-actions Button.-on {{
        color: {PALETTE.cyan};
        text-style: bold;
    }}
    CodeBlock > .codeblock-cover {{
        layer: overlay;
        dock: bottom;
    }}
    """

    expanded = reactive(False, init=False)
    wrap = reactive(False, init=False)

    def __init__(
        self,
        state: Optional[ContainerState] = None,
        code: str = "",
        language: str = "",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.add_class("codeblock")
        self.container_state = state or ContainerState()

        self._text_block = TextBlock(self.container_state, classes="codeblock-text")
        self._scroller = ScrollableContainer(self._text_block, classes="codeblock-scroll")

        self._language_name = ""
        self._language_label = Label("", classes="codeblock-language")
        self._copied = Label("Copied!", classes="codeblock-copied")
        self._wrap_button = Button(
            ICON_WRAP, classes="codeblock-wrap", tooltip="Toggle Word Wrapping", compact=True,
        )
        self._copy_button = Button(
            ICON_COPY, classes="codeblock-copy", tooltip="Copy All", compact=True,
        )
        self._expand_button = Button(
            ICON_EXPAND, classes="codeblock-expand", tooltip="Toggle Reveal Code", compact=True,
        )
        self._actions_bar = Horizontal(
            self._language_label,
            self._copied,
            self._wrap_button,
            self._copy_button,
            self._expand_button,
            classes="codeblock-actions",
        )

        # Created on first overflow.
        self._fade_cover: Optional[FadeCover] = None
        self._copy_timer: Optional[Timer] = None
        self._unsubscribers = []

        self._natural_height = -1
        self._height_bounds = HeightBounds(minimum=0, maximum=0, overflow=False)
        self._applied_height: Optional[int] = None

        if code:
            self.insert(code)
            self.highlight(language)

    def compose(self) -> ComposeResult:
        yield self._scroller
        yield self._actions_bar

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def text_block(self) -> TextBlock:
        """The inner TextBlock holding all the code."""
        return self._text_block

    @property
    def code(self) -> str:
        start, end = self._text_block.buffer.bounds()
        return self._text_block.buffer.get_text(start, end)

    @property
    def language(self) -> str:
        return self._language_name

    @property
    def bounds(self) -> HeightBounds:
        return self._height_bounds

    @property
    def natural_height(self) -> int:
        return self._natural_height

    @property
    def scroll_height(self) -> Optional[int]:
        """Height applied to the scroll area; None until measured."""
        return self._applied_height

    @property
    def overflow_cue_visible(self) -> bool:
        return self._fade_cover is not None and self._fade_cover.display

    @property
    def copied_visible(self) -> bool:
        return self._copied.display

    def insert(self, code: str) -> None:
        """Append code to the end of the block."""
        self._text_block.insert(code)

    def highlight(self, language: str) -> None:
        """Highlight the whole block as ``language``.

        The block is always tagged ``_nohyphens``. An empty language does no
        highlighting.
        """
        buffer = self._text_block.buffer
        start, end = 0, buffer.end

        buffer.clear_tags(start, end, _is_block_tag)
        no_hyphens = from_table(self.container_state.tag_table(), "_nohyphens")
        buffer.apply_tag(no_hyphens, start, end)
        self._language_name = language
        if self.is_mounted:
            self._language_label.update(language)

        if language:
            highlight_buffer(buffer, start, end, language, self.container_state.theme)

        self._text_block.refresh_text()

    def toggle_expanded(self) -> None:
        self.expanded = not self.expanded

    def toggle_wrap(self) -> None:
        self.wrap = not self.wrap

    def copy(self) -> str:
        """Copy the whole block to the clipboard and flash "Copied!"."""
        code = self.code
        self.app.copy_to_clipboard(code)

        self._copied.display = True
        if self._copy_timer is not None:
            self._copy_timer.stop()
        self._copy_timer = self.set_timer(COPY_FEEDBACK_SECONDS, self._hide_copied)
        return code

    # ------------------------------------------------------------------
    # State application
    # ------------------------------------------------------------------

    def _hide_copied(self) -> None:
        self._copied.display = False
        self._copy_timer = None

    def _set_cover_visible(self, visible: bool) -> None:
        if self._fade_cover is not None:
            self._fade_cover.display = visible

    def _apply_expanded(self) -> None:
        expanded = self.expanded
        self.set_class(expanded, "-expanded")
        self._expand_button.label = ICON_RESTORE if expanded else ICON_EXPAND
        self._expand_button.set_class(expanded, "-on")

        if self._natural_height >= 0:
            height = self._height_bounds.maximum if expanded else self._height_bounds.minimum
            self._scroller.styles.height = height
            self._applied_height = height

        if expanded:
            self._scroller.styles.margin = (self._actions_bar.outer_size.height or 1, 0, 0, 0)
            self._set_cover_visible(False)
        else:
            self._scroller.styles.margin = (0, 0, 0, 0)
            self._set_cover_visible(self._height_bounds.overflow)
            if self.is_mounted:
                self._scroller.scroll_to(y=0, animate=False)

    def _update_bounds(self) -> None:
        self._height_bounds = heights.current_bounds(self._natural_height)
        _log.debug(
            "codeblock natural=%d bounds=%s", self._natural_height, self._height_bounds,
        )

        self.set_class(self._height_bounds.overflow, "-voverflow")
        if self._height_bounds.overflow and self._fade_cover is None:
            self._fade_cover = FadeCover(classes="codeblock-cover")
            self.mount(self._fade_cover)

        self._apply_expanded()

    def _on_pref_changed(self, _value: int) -> None:
        if self._natural_height >= 0:
            self._update_bounds()

    # ------------------------------------------------------------------
    # Watchers and events
    # ------------------------------------------------------------------

    def watch_expanded(self, expanded: bool) -> None:
        self._apply_expanded()

    def watch_wrap(self, wrap: bool) -> None:
        self._text_block.set_wrap(wrap)
        self._wrap_button.set_class(wrap, "-on")

    def on_mount(self) -> None:
        self._unsubscribers = [
            heights.collapsed_height.subscribe(self._on_pref_changed),
            heights.expanded_height.subscribe(self._on_pref_changed),
        ]
        self._language_label.update(self._language_name)
        self._apply_expanded()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._copy_timer is not None:
            self._copy_timer.stop()

    def on_text_block_natural_height_changed(
        self, event: TextBlock.NaturalHeightChanged,
    ) -> None:
        if event.text_block is not self._text_block:
            return
        event.stop()
        self._natural_height = event.height
        self._update_bounds()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if button is self._expand_button:
            event.stop()
            self.toggle_expanded()
        elif button is self._wrap_button:
            event.stop()
            self.toggle_wrap()
        elif button is self._copy_button:
            event.stop()
            self.copy()

    def on_click(self, event: events.Click) -> None:
        # Only a collapsed block expands on click.
        if event.button != PRIMARY_BUTTON or self.expanded:
            return
        event.stop()
        self._expand_button.press()
