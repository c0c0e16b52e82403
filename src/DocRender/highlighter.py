from __future__ import annotations

import re
from typing import List

from .escaping import escape_code
from .model import CodeToken, TokenKind

KEYWORDS = (
    "import",
    "from",
    "const",
    "let",
    "var",
    "async",
    "await",
    "function",
    "return",
    "class",
    "interface",
    "type",
    "export",
    "default",
    "new",
    "try",
    "catch",
    "finally",
    "if",
    "else",
    "for",
    "while",
    "switch",
    "case",
    "break",
    "continue",
)

TOKEN_PATTERN = re.compile(
    r"(?P<comment>//[^\n]*)"
    r"|(?P<string>\"[^\"\n]*?\"|'[^'\n]*?'|`[^`\n]*?`)"
    r"|(?P<keyword>\b(?:" + "|".join(KEYWORDS) + r")\b)"
    r"|(?P<function>\b[A-Za-z_]\w*(?=\())"
    r"|(?P<number>\b\d+\b)",
    re.ASCII,
)

_GROUP_KINDS = {
    "comment": TokenKind.COMMENT,
    "string": TokenKind.STRING,
    "keyword": TokenKind.KEYWORD,
    "function": TokenKind.FUNCTION,
    "number": TokenKind.NUMBER,
}


def highlight(code: str) -> List[CodeToken]:
    """Tokenize a fenced code body for syntax highlighting.

    The body is HTML-escaped before matching, so token text holds entities
    such as ``&lt;``. Tokens cover the escaped body with no gaps; joining
    their text and unescaping it gives back ``code`` unchanged.
    """
    escaped = escape_code(code)
    tokens: List[CodeToken] = []
    pos = 0
    for match in TOKEN_PATTERN.finditer(escaped):
        if match.start() > pos:
            tokens.append(CodeToken(TokenKind.PLAIN, escaped[pos : match.start()]))
        tokens.append(CodeToken(_GROUP_KINDS[match.lastgroup], match.group()))
        pos = match.end()
    if pos < len(escaped):
        tokens.append(CodeToken(TokenKind.PLAIN, escaped[pos:]))
    return tokens
