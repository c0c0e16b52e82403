from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Sequence

from docx import Document as DocxDocument
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm

from . import docx_style
from .errors import RenderError
from .escaping import unescape_code
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
)

# Characters XML 1.0 does not allow; lxml refuses them in run text.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def render_document(doc: Document, output_path: str | Path) -> None:
    output_path = Path(output_path)
    docx = DocxDocument()
    docx_style.apply_page_layout(docx)

    pending_rows: List[TableRow] = []
    for block in doc.blocks:
        if isinstance(block, TableRow):
            pending_rows.append(block)
            continue
        if pending_rows:
            _render_table(docx, pending_rows)
            pending_rows = []
        _dispatch_block(docx, block)
    if pending_rows:
        _render_table(docx, pending_rows)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)


def _dispatch_block(docx: DocxDocument, block: Block) -> None:
    if isinstance(block, Heading):
        _render_heading(docx, block)
    elif isinstance(block, Paragraph):
        paragraph = docx.add_paragraph()
        _add_inline_runs(paragraph, block.inline)
        docx_style.apply_body_paragraph_format(paragraph)
    elif isinstance(block, ListItem):
        paragraph = docx.add_paragraph()
        marker = paragraph.add_run(docx_style.LIST_MARKER)
        docx_style.set_run_font(marker)
        _add_inline_runs(paragraph, block.inline)
        docx_style.apply_list_item_format(paragraph)
    elif isinstance(block, CodeBlock):
        _render_code_block(docx, block)
    else:
        raise RenderError(f"No DOCX rendering for {type(block).__name__}")


def _render_heading(docx: DocxDocument, heading: Heading) -> None:
    paragraph = docx.add_paragraph()
    _add_inline_runs(paragraph, heading.inline, size_pt=docx_style.HEADING_SIZES_PT[heading.level], bold=True)
    docx_style.apply_heading_format(paragraph, heading.level)


def _render_code_block(docx: DocxDocument, block: CodeBlock) -> None:
    paragraph = docx.add_paragraph()
    for token in block.tokens:
        # Each entity lies inside one token, so tokens unescape independently.
        run = _add_run(paragraph, unescape_code(token.text))
        docx_style.set_run_font(run, code=True)
        docx_style.set_token_color(run, token.kind)
    if block.truncated:
        note = paragraph.add_run("\n[unterminated code block]")
        docx_style.set_run_font(note, code=True)
        note.italic = True
    docx_style.apply_code_paragraph_format(paragraph)


def _render_table(docx: DocxDocument, rows: Sequence[TableRow]) -> None:
    col_count = max((len(row.cells) for row in rows), default=0) or 1
    table = docx.add_table(rows=len(rows), cols=col_count)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.LEFT
    for r_idx, row in enumerate(rows):
        for c_idx, cell in enumerate(row.cells):
            paragraph = table.cell(r_idx, c_idx).paragraphs[0]
            _add_inline_runs(paragraph, cell.inline, bold=cell.header)
            paragraph.paragraph_format.first_line_indent = Cm(0)

    spacer = docx.add_paragraph("")
    docx_style.apply_body_paragraph_format(spacer)


def _add_inline_runs(
    paragraph,
    inline_elements: Iterable[InlineElement],
    size_pt: float | None = None,
    bold: bool = False,
) -> None:
    for inline in inline_elements:
        if isinstance(inline, InlineText):
            run = _add_run(paragraph, inline.text)
            docx_style.set_run_font(run, bold=bold, size_pt=size_pt)
        elif isinstance(inline, InlineBold):
            run = _add_run(paragraph, inline.text)
            docx_style.set_run_font(run, bold=True, size_pt=size_pt)
        elif isinstance(inline, InlineCode):
            run = _add_run(paragraph, inline.text)
            docx_style.set_run_font(run, bold=bold, code=True, size_pt=size_pt)
        elif isinstance(inline, (InlineLink, InlineBoldLink)):
            link_bold = bold or isinstance(inline, InlineBoldLink)
            _add_hyperlink(paragraph, inline.text, inline.url, bold=link_bold, size_pt=size_pt)
        else:
            raise RenderError(f"No DOCX rendering for {type(inline).__name__}")


def _add_hyperlink(paragraph, text: str, url: str, bold: bool, size_pt: float | None) -> None:
    """Append an external hyperlink holding a single styled run."""
    r_id = paragraph.part.relate_to(_xml_safe(url), RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
    run = _add_run(paragraph, text)
    docx_style.set_run_font(run, bold=bold, size_pt=size_pt)
    run.font.underline = True
    run.font.color.rgb = docx_style.LINK_COLOR

    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)
    hyperlink.append(run._r)
    paragraph._p.append(hyperlink)


def _add_run(paragraph, text: str):
    return paragraph.add_run(_xml_safe(text))


def _xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("\ufffd", text)
