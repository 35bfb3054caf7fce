"""Plain-text buffer with tag spans, rendered to Rich Text."""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from rich.text import Text

from .tags import TagTable, TextTag


@dataclass(frozen=True)
class TagSpan:
    tag: TextTag
    start: int
    end: int


class TextBuffer:
    """Append-only text plus the tags applied over it."""

    def __init__(self, table: TagTable) -> None:
        self.table = table
        self._text = ""
        self._spans: List[TagSpan] = []

    @property
    def text(self) -> str:
        return self._text

    @property
    def end(self) -> int:
        """The insert position (end of the buffer)."""
        return len(self._text)

    @property
    def spans(self) -> List[TagSpan]:
        return list(self._spans)

    def bounds(self) -> Tuple[int, int]:
        return 0, len(self._text)

    def insert(self, text: str) -> None:
        """Append ``text`` at the end of the buffer."""
        self._text += text

    def get_text(self, start: int, end: int) -> str:
        return self._text[start:end]

    def apply_tag(self, tag: TextTag, start: int, end: int) -> None:
        """Apply ``tag`` over ``[start, end)``; offsets are clamped."""
        start = max(0, min(start, len(self._text)))
        end = max(0, min(end, len(self._text)))
        if start >= end:
            return
        self._spans.append(TagSpan(tag, start, end))

    def clear_tags(
        self, start: int, end: int, predicate: Callable[[TextTag], bool],
    ) -> int:
        """Drop spans inside [start, end) whose tag matches ``predicate``.

        Returns the number of spans removed.
        """
        kept = [
            span for span in self._spans
            if not (start <= span.start and span.end <= end and predicate(span.tag))
        ]
        removed = len(self._spans) - len(kept)
        self._spans = kept
        return removed

    def tags_at(self, offset: int) -> List[TextTag]:
        return [span.tag for span in self._spans if span.start <= offset < span.end]

    def to_rich(self, wrap: bool = False) -> Text:
        """Render the buffer; later tags win over earlier ones."""
        text = Text(self._text, no_wrap=not wrap, overflow="fold", end="")
        for span in self._spans:
            if span.tag.style:
                text.stylize(span.tag.style, span.start, span.end)
        return text
