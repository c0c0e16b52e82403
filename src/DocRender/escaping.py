from __future__ import annotations

from typing import Iterable

# Ampersand goes first so the entities produced by the other two stay intact.
_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


def escape_code(code: str) -> str:
    for char, entity in _ESCAPES:
        code = code.replace(char, entity)
    return code


def unescape_code(text: str) -> str:
    """Exact inverse of :func:`escape_code`."""
    for char, entity in reversed(_ESCAPES):
        text = text.replace(entity, char)
    return text


def tokens_to_text(tokens: Iterable) -> str:
    return "".join(token.text for token in tokens)
