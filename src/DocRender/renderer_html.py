"""HTML rendering of a parsed :class:`~DocRender.model.Document`.

Consecutive list items and table rows are wrapped in ``<ul>`` and ``<table>``
elements at render time only; the document itself stays flat.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from markdown_it.common.normalize_url import normalizeLink, validateLink
from markdown_it.common.utils import escapeHtml

from .errors import RenderError
from .model import (
    Block,
    CodeBlock,
    Document,
    Heading,
    InlineBold,
    InlineBoldLink,
    InlineCode,
    InlineElement,
    InlineLink,
    InlineText,
    ListItem,
    Paragraph,
    TableRow,
    TokenKind,
)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: system-ui, sans-serif; max-width: 56rem; margin: 2rem auto; color: #18181b; }}
pre {{ background: #18181b; color: #e4e4e7; padding: 1rem; border-radius: 0.5rem; overflow-x: auto; }}
table {{ border-collapse: collapse; }}
th, td {{ border: 1px solid #e4e4e7; padding: 0.4rem 0.8rem; text-align: left; }}
.token-comment {{ color: #71717a; font-style: italic; }}
.token-string {{ color: #4ade80; }}
.token-keyword {{ color: #c084fc; }}
.token-function {{ color: #60a5fa; }}
.token-number {{ color: #fb923c; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def render_html(doc: Document, *, standalone: bool = False, title: str = "Documentation") -> str:
    parts: List[str] = []
    blocks = list(doc.blocks)
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if isinstance(block, ListItem):
            j = _run_end(blocks, i, ListItem)
            parts.append("<ul>\n" + "\n".join(_render_block(item) for item in blocks[i:j]) + "\n</ul>")
            i = j
        elif isinstance(block, TableRow):
            j = _run_end(blocks, i, TableRow)
            parts.append("<table>\n" + "\n".join(_render_block(row) for row in blocks[i:j]) + "\n</table>")
            i = j
        else:
            parts.append(_render_block(block))
            i += 1
    body = "\n".join(parts)
    if standalone:
        return PAGE_TEMPLATE.format(title=escapeHtml(title), body=body)
    return body + "\n" if body else ""


def _run_end(blocks: Sequence[Block], start: int, kind: type) -> int:
    end = start
    while end < len(blocks) and isinstance(blocks[end], kind):
        end += 1
    return end


def _render_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"<h{block.level}>{render_inline(block.inline)}</h{block.level}>"
    if isinstance(block, Paragraph):
        return f"<p>{render_inline(block.inline)}</p>"
    if isinstance(block, ListItem):
        return f"<li>{render_inline(block.inline)}</li>"
    if isinstance(block, CodeBlock):
        return render_code_block(block)
    if isinstance(block, TableRow):
        cells = []
        for cell in block.cells:
            tag = "th" if cell.header else "td"
            cells.append(f"<{tag}>{render_inline(cell.inline)}</{tag}>")
        return "<tr>" + "".join(cells) + "</tr>"
    raise RenderError(f"No HTML rendering for {type(block).__name__}")


def render_code_block(block: CodeBlock) -> str:
    # Token text is already entity-escaped by the highlighter.
    spans = []
    for token in block.tokens:
        if token.kind is TokenKind.PLAIN:
            spans.append(token.text)
        else:
            spans.append(f'<span class="token-{token.kind.value}">{token.text}</span>')
    attrs = ""
    if block.language:
        attrs += f' data-language="{escapeHtml(block.language)}"'
    if block.truncated:
        attrs += ' data-truncated="true"'
    return f"<pre{attrs}><code>{''.join(spans)}</code></pre>"


def render_inline(inline_elements: Iterable[InlineElement]) -> str:
    out: List[str] = []
    for inline in inline_elements:
        if isinstance(inline, InlineText):
            out.append(escapeHtml(inline.text))
        elif isinstance(inline, InlineBold):
            out.append(f"<strong>{escapeHtml(inline.text)}</strong>")
        elif isinstance(inline, InlineCode):
            out.append(f"<code>{escapeHtml(inline.text)}</code>")
        elif isinstance(inline, InlineLink):
            out.append(_link(inline.text, inline.url))
        elif isinstance(inline, InlineBoldLink):
            out.append(f"<strong>{_link(inline.text, inline.url)}</strong>")
        else:
            raise RenderError(f"No HTML rendering for {type(inline).__name__}")
    return "".join(out)


def _link(text: str, url: str) -> str:
    href = normalizeLink(url.strip())
    if not validateLink(href):
        return escapeHtml(text)
    return f'<a href="{escapeHtml(href)}" target="_blank" rel="noopener noreferrer">{escapeHtml(text)}</a>'
