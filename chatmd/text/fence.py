"""Split chat markdown into prose and fenced code segments."""

import re
from typing import List, NamedTuple, Optional

_FENCE_RE = re.compile(
    r"^```(?P<lang>[^\n`]*)\n(?P<code>.*?)^```[ \t]*$",
    re.DOTALL | re.MULTILINE,
)


class Segment(NamedTuple):
    content: str
    language: Optional[str]  # None for prose

    @property
    def is_code(self) -> bool:
        return self.language is not None


def split_message(text: str) -> List[Segment]:
    """Split ``text`` into alternating prose and code segments.

    Code segments carry the fence info string (possibly empty); prose that
    is only whitespace is dropped.
    """
    segments: List[Segment] = []
    cursor = 0
    for match in _FENCE_RE.finditer(text):
        start, end = match.span()
        if start > cursor:
            prose = text[cursor:start]
            if prose.strip():
                segments.append(Segment(prose, None))
        info = match.group("lang").strip()
        lang = info.split()[0] if info else ""
        segments.append(Segment(match.group("code"), lang))
        cursor = end
    tail = text[cursor:]
    if tail.strip():
        segments.append(Segment(tail, None))
    return segments


def code_segments(text: str) -> List[Segment]:
    return [segment for segment in split_message(text) if segment.is_code]
