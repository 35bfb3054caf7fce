"""Text model: tag table, buffer, highlighting, fence splitting."""

from .tags import TagTable, TextTag, from_table
from .buffer import TextBuffer, TagSpan
from .highlight import highlight, has_lexer, guess_language
from .fence import Segment, split_message, code_segments

__all__ = [
    "TagTable",
    "TextTag",
    "from_table",
    "TextBuffer",
    "TagSpan",
    "highlight",
    "has_lexer",
    "guess_language",
    "Segment",
    "split_message",
    "code_segments",
]
