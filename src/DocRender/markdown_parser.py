from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .highlighter import highlight
from .inline_parser import parse_inline
from .model import (
    Block,
    CodeBlock,
    Document,
    Heading,
    ListItem,
    Paragraph,
    TableCell,
    TableRow,
)

logger = logging.getLogger(__name__)

FENCE = "```"
TABLE_SEPARATOR = "---"
HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3), ("#### ", 4))
LIST_PREFIX = "- "


@dataclass(frozen=True)
class ScanOptions:
    """Opt-in deviations from the plain line scanner.

    ``persistent_table_header`` keeps rows after a separator body-styled for
    the rest of the table instead of looking back one line only.
    ``flush_unterminated_fence`` emits a fence left open at end of input as a
    truncated code block instead of dropping it.
    """

    persistent_table_header: bool = False
    flush_unterminated_fence: bool = False


@dataclass
class _ScanState:
    in_fence: bool = False
    fence_lines: list[str] = field(default_factory=list)
    fence_language: str | None = None
    separator_seen: bool = False


def parse_markdown(text: str, options: ScanOptions | None = None) -> Document:
    options = options or ScanOptions()
    lines = text.replace("\r\n", "\n").split("\n")
    blocks: List[Block] = []
    state = _ScanState()

    for index, line in enumerate(lines):
        stripped = line.strip()

        if stripped.startswith(FENCE):
            if state.in_fence:
                blocks.append(_close_fence(state))
            else:
                state.in_fence = True
                state.fence_language = stripped[len(FENCE) :] or None
                state.fence_lines = []
            state.separator_seen = False
            continue
        if state.in_fence:
            state.fence_lines.append(line)
            continue

        is_table_line = "|" in line and stripped.startswith("|")
        if not is_table_line:
            state.separator_seen = False

        heading = _match_heading(stripped)
        if heading is not None:
            level, content = heading
            blocks.append(Heading(level=level, inline=tuple(parse_inline(content))))
        elif stripped.startswith(LIST_PREFIX):
            blocks.append(ListItem(inline=tuple(parse_inline(stripped[len(LIST_PREFIX) :]))))
        elif is_table_line:
            if TABLE_SEPARATOR in line:
                state.separator_seen = True
                continue
            previous = lines[index - 1] if index > 0 else ""
            if options.persistent_table_header:
                header = not state.separator_seen
            else:
                header = TABLE_SEPARATOR not in previous
            blocks.append(_table_row(stripped, header))
        elif stripped:
            blocks.append(Paragraph(inline=tuple(parse_inline(line))))

    if state.in_fence:
        if options.flush_unterminated_fence:
            blocks.append(_close_fence(state, truncated=True))
        else:
            logger.warning(
                "Unterminated code fence dropped (%d line(s) discarded)", len(state.fence_lines)
            )

    return Document(blocks=tuple(blocks))


scan = parse_markdown


def _close_fence(state: _ScanState, truncated: bool = False) -> CodeBlock:
    tokens = highlight("\n".join(state.fence_lines))
    block = CodeBlock(language=state.fence_language, tokens=tuple(tokens), truncated=truncated)
    state.in_fence = False
    state.fence_lines = []
    state.fence_language = None
    return block


def _match_heading(stripped: str) -> tuple[int, str] | None:
    for prefix, level in HEADING_PREFIXES:
        if stripped.startswith(prefix):
            return level, stripped[len(prefix) :]
    return None


def _table_row(stripped: str, header: bool) -> TableRow:
    parts = stripped.split("|")
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    cells = tuple(TableCell(inline=tuple(parse_inline(part.strip())), header=header) for part in parts)
    return TableRow(cells=cells)
