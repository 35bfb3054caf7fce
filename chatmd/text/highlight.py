"""Syntax highlighting into a TextBuffer.

Pygments tokenizes; the Rich syntax theme supplies the style of each token
type. Every token type gets one ``hl:<TokenType>`` tag in the buffer's
tag table.
"""

import logging

from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound
from rich.syntax import Syntax

from .buffer import TextBuffer
from .tags import TextTag

_log = logging.getLogger(__name__)

HL_PREFIX = "hl:"


def _lexer(language: str):
    try:
        return get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None


def has_lexer(language: str) -> bool:
    """Whether Pygments knows ``language``."""
    return bool(language) and _lexer(language) is not None


def guess_language(filename: str) -> str:
    """The primary lexer alias for ``filename``, or "" if unknown."""
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return ""
    return lexer.aliases[0] if lexer.aliases else ""


def highlight(
    buffer: TextBuffer,
    start: int,
    end: int,
    language: str,
    theme: str = "monokai",
) -> None:
    """Highlight ``buffer[start:end]`` as ``language``.

    Unknown languages leave the buffer untouched.
    """
    lexer = _lexer(language)
    if lexer is None:
        _log.debug("no lexer for %r, skipping highlight", language)
        return

    syntax_theme = Syntax.get_theme(theme)
    table = buffer.table
    code = buffer.get_text(start, end)

    for index, token_type, value in lexer.get_tokens_unprocessed(code):
        if not value:
            continue
        name = f"{HL_PREFIX}{token_type}"
        tag = table.lookup(name)
        if tag is None:
            tag = table.add(TextTag(name, style=syntax_theme.get_style_for_token(token_type)))
        buffer.apply_tag(tag, start + index, start + index + len(value))
