from __future__ import annotations

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Cm, Pt, RGBColor

from .model import TokenKind

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
MARGIN_CM = 2.0

FONT_NAME = "Calibri"
CODE_FONT_NAME = "Consolas"
FONT_SIZE_PT = 11
CODE_FONT_SIZE_PT = 9.5
LINE_SPACING_PT = 15

HEADING_SIZES_PT = {1: 24, 2: 18, 3: 14, 4: 12}
LIST_INDENT_CM = 0.75
LIST_MARKER = "– "

LINK_COLOR = RGBColor(0x18, 0x18, 0x1B)
TOKEN_COLORS = {
    TokenKind.COMMENT: RGBColor(0x71, 0x71, 0x7A),
    TokenKind.STRING: RGBColor(0x16, 0xA3, 0x4A),
    TokenKind.KEYWORD: RGBColor(0x93, 0x33, 0xEA),
    TokenKind.FUNCTION: RGBColor(0x25, 0x63, 0xEB),
    TokenKind.NUMBER: RGBColor(0xEA, 0x58, 0x0C),
}


def apply_page_layout(doc) -> None:
    """Apply A4 page setup with even margins."""
    section = doc.sections[0]
    section.page_height = Cm(A4_HEIGHT_MM / 10)
    section.page_width = Cm(A4_WIDTH_MM / 10)
    section.left_margin = Cm(MARGIN_CM)
    section.right_margin = Cm(MARGIN_CM)
    section.top_margin = Cm(MARGIN_CM)
    section.bottom_margin = Cm(MARGIN_CM)


def set_run_font(run, bold: bool = False, code: bool = False, size_pt: float | None = None) -> None:
    run.font.name = CODE_FONT_NAME if code else FONT_NAME
    run.font.size = Pt(size_pt or (CODE_FONT_SIZE_PT if code else FONT_SIZE_PT))
    run.bold = bold


def set_token_color(run, kind: TokenKind) -> None:
    color = TOKEN_COLORS.get(kind)
    if color is not None:
        run.font.color.rgb = color
    if kind is TokenKind.COMMENT:
        run.italic = True


def apply_body_paragraph_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(6)
    paragraph.paragraph_format.line_spacing = Pt(LINE_SPACING_PT)


def apply_heading_format(paragraph, level: int) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(HEADING_SIZES_PT[level] // 2)
    paragraph.paragraph_format.space_after = Pt(6)
    paragraph.paragraph_format.keep_with_next = True


def apply_list_item_format(paragraph) -> None:
    apply_body_paragraph_format(paragraph)
    paragraph.paragraph_format.left_indent = Cm(LIST_INDENT_CM)
    paragraph.paragraph_format.first_line_indent = Cm(-LIST_INDENT_CM / 2)
    paragraph.paragraph_format.space_after = Pt(2)


def apply_code_paragraph_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(4)
    paragraph.paragraph_format.space_after = Pt(10)
    paragraph.paragraph_format.line_spacing = 1.0
    paragraph.paragraph_format.left_indent = Cm(0.5)
