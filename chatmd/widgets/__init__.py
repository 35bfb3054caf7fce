"""chatmd widgets -- Textual components."""

from .text_block import TextBlock
from .code_block import CodeBlock, FadeCover, COPY_FEEDBACK_SECONDS

__all__ = [
    "TextBlock",
    "CodeBlock",
    "FadeCover",
    "COPY_FEEDBACK_SECONDS",
]
