from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from .escaping import tokens_to_text, unescape_code


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...] = ()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)


@dataclass(frozen=True)
class Heading(Block):
    level: int
    inline: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class Paragraph(Block):
    inline: Tuple[InlineElement, ...]


@dataclass(frozen=True)
class ListItem(Block):
    """A single bullet; items are never grouped into a parent list."""

    inline: Tuple[InlineElement, ...]


class TokenKind(Enum):
    COMMENT = "comment"
    STRING = "string"
    KEYWORD = "keyword"
    FUNCTION = "function"
    NUMBER = "number"
    PLAIN = "plain"


@dataclass(frozen=True)
class CodeToken:
    """A classified slice of an HTML-escaped code body."""

    kind: TokenKind
    text: str


@dataclass(frozen=True)
class CodeBlock(Block):
    language: str | None
    tokens: Tuple[CodeToken, ...]
    truncated: bool = False

    @property
    def code(self) -> str:
        return unescape_code(tokens_to_text(self.tokens))


@dataclass(frozen=True)
class TableCell:
    inline: Tuple[InlineElement, ...]
    header: bool


@dataclass(frozen=True)
class TableRow(Block):
    cells: Tuple[TableCell, ...]

    @property
    def is_header(self) -> bool:
        return any(cell.header for cell in self.cells)


@dataclass(frozen=True)
class InlineText(InlineElement):
    text: str


@dataclass(frozen=True)
class InlineBold(InlineElement):
    text: str


@dataclass(frozen=True)
class InlineLink(InlineElement):
    text: str
    url: str


@dataclass(frozen=True)
class InlineBoldLink(InlineElement):
    text: str
    url: str


@dataclass(frozen=True)
class InlineCode(InlineElement):
    text: str
