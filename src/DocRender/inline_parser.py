from __future__ import annotations

import re
from typing import Iterable, List

from .model import (
    InlineBold,
    InlineBoldLink,
    InlineCode,
    InlineElement,
    InlineLink,
    InlineText,
)

# Alternatives are tried in order at each position: bold link, link, bold, code.
INLINE_PATTERN = re.compile(
    r"(?P<bold_link>\*\*\[(?P<bl_text>[^\]]+)\]\((?P<bl_url>[^)]+)\)\*\*)"
    r"|(?P<link>\[(?P<link_text>[^\]]+)\]\((?P<link_url>[^)]+)\))"
    r"|(?P<bold>\*\*(?P<bold_text>[^*]+)\*\*)"
    r"|(?P<code>`(?P<code_text>[^`]+)`)"
)


def parse_inline(line: str) -> List[InlineElement]:
    """Split one line of text into inline nodes.

    Captured text is never re-scanned, so ``**see [a](b)**`` yields a single
    bold node holding the raw link marker.
    """
    result: List[InlineElement] = []
    pos = 0
    for match in INLINE_PATTERN.finditer(line):
        if match.start() > pos:
            result.append(InlineText(line[pos : match.start()]))
        result.append(_element_from_match(match))
        pos = match.end()
    if pos < len(line):
        result.append(InlineText(line[pos:]))
    return result


def _element_from_match(match: re.Match) -> InlineElement:
    if match.group("bold_link") is not None:
        return InlineBoldLink(text=match.group("bl_text"), url=match.group("bl_url"))
    if match.group("link") is not None:
        return InlineLink(text=match.group("link_text"), url=match.group("link_url"))
    if match.group("bold") is not None:
        return InlineBold(match.group("bold_text"))
    return InlineCode(match.group("code_text"))


def inline_to_text(inlines: Iterable[InlineElement]) -> str:
    parts: list[str] = []
    for inline in inlines:
        if isinstance(inline, (InlineText, InlineBold, InlineCode, InlineLink, InlineBoldLink)):
            parts.append(inline.text)
    return "".join(parts)
