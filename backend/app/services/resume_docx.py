"""
DOCX renderer - build a flow document (paragraphs of styled runs) from a
segmented resume and serialize it with python-docx.

Word handles pagination itself, so this renderer only decides paragraph order
and styling. Classification and heading decoration come from the same sources
the PDF renderer uses.
"""
import logging
import re
from io import BytesIO
from typing import List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from app.models.enums import ExportFormat, HeaderRule, HeadingDecoration, LayoutKind
from app.models.resume import (
    Block,
    BulletItem,
    ContactInfo,
    RenderedDocument,
    Run,
    SegmentedResume,
    Spacer,
    SubHeading,
)
from app.services.line_classifier import BULLET_GLYPH, classify
from app.services.resume_pdf import (
    BAND_NAME_SIZE,
    BODY_SIZE,
    BULLET_INDENT,
    CONTACT_SIZE,
    HEADING_SHADE,
    HEADING_SIZE,
    NAME_SIZE,
)
from app.services.resume_templates import Customization, Template, resolve_customization, visible_sections
from app.utils.filenames import derive_filename

logger = logging.getLogger(__name__)

PAGE_MARGIN = Inches(0.75)
WHITE = "#ffffff"

# Characters XML 1.0 cannot carry
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# Border thickness in eighths of a point
UNDERLINE_SIZE = 6
ACCENT_RULE_SIZE = 12


def build_blocks(
    segmented: SegmentedResume,
    contact: ContactInfo,
    template: Template,
    customization: Customization,
) -> List[Block]:
    """Lay the resume out as an ordered list of paragraph blocks."""
    colors = customization.palette(template)
    banded = template.layout is LayoutKind.HEADER_BAND
    alignment = "center" if template.layout is LayoutKind.SINGLE_COLUMN else "left"
    header_fill = colors.primary if banded else None
    header_ink = WHITE if banded else None

    blocks: List[Block] = [
        Block(
            role="title",
            runs=(Run(contact.name or "", bold=True, color=header_ink or colors.primary,
                      size=BAND_NAME_SIZE if banded else NAME_SIZE),),
            alignment=alignment,
            fill=header_fill,
        ),
        Block(
            role="contact",
            runs=(Run(" | ".join(contact.contact_parts()), color=header_ink or colors.muted, size=CONTACT_SIZE),),
            alignment=alignment,
            decoration=None if template.header_rule is HeaderRule.NONE else template.header_rule.value,
            fill=header_fill,
        ),
    ]

    heading_color = template.heading_color(colors)
    decoration = template.heading_decoration
    for name, lines in visible_sections(segmented, customization):
        blocks.append(Block(
            role="heading",
            runs=(Run(name.heading_text, bold=True, color=heading_color, size=HEADING_SIZE),),
            decoration=decoration.value,
            fill=HEADING_SHADE if decoration is HeadingDecoration.SHADED else None,
        ))
        for line in lines:
            kind = classify(line, name)
            if isinstance(kind, Spacer):
                blocks.append(Block(role=kind.kind))
            elif isinstance(kind, BulletItem):
                blocks.append(Block(role=kind.kind, runs=(Run(kind.text, color=colors.text, size=BODY_SIZE),),
                                    indent=BULLET_INDENT))
            else:
                bold = isinstance(kind, SubHeading)
                blocks.append(Block(role=kind.kind, runs=(Run(kind.text, bold=bold, color=colors.text, size=BODY_SIZE),)))
    return blocks


# ========================================
# python-docx serialization
# ========================================

def _xml_text(text: str) -> str:
    return _XML_INVALID.sub("", text)


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color.lstrip("#").upper())


def _set_bottom_border(paragraph, hex_color: str, size: int) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    pBdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(size))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), hex_color.lstrip("#").upper())
    pBdr.append(bottom)
    pPr.append(pBdr)


def _set_shading(paragraph, hex_color: str) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), hex_color.lstrip("#").upper())
    pPr.append(shading)


def _decorate(paragraph, block: Block, template: Template, customization: Customization) -> None:
    """Apply borders then shading; both must precede spacing/indent in pPr."""
    colors = customization.palette(template)
    if block.decoration in (HeadingDecoration.UNDERLINE.value, HeaderRule.FULL.value):
        color = template.heading_color(colors) if block.role == "heading" else colors.primary
        _set_bottom_border(paragraph, color, UNDERLINE_SIZE)
    elif block.decoration in (HeadingDecoration.ACCENT_RULE.value, HeaderRule.SHORT.value):
        _set_bottom_border(paragraph, colors.accent, ACCENT_RULE_SIZE)
    if block.fill:
        _set_shading(paragraph, block.fill)


def write_docx(blocks: List[Block], template: Template, customization: Customization, author: Optional[str] = None) -> bytes:
    """Serialize blocks to a .docx byte stream."""
    doc = Document()
    for section in doc.sections:
        section.left_margin = section.right_margin = PAGE_MARGIN
        section.top_margin = section.bottom_margin = PAGE_MARGIN

    normal = doc.styles["Normal"]
    normal.font.name = customization.font_name
    normal.font.size = Pt(BODY_SIZE)

    if author:
        doc.core_properties.author = _xml_text(author)
        doc.core_properties.title = _xml_text(f"{author} - Resume")

    half_line = customization.line_height / 2
    pending_space = 0.0
    for block in blocks:
        if block.role == Spacer.kind:
            pending_space += half_line
            continue

        paragraph = doc.add_paragraph()
        _decorate(paragraph, block, template, customization)

        fmt = paragraph.paragraph_format
        fmt.space_after = Pt(2)
        if block.role == "heading":
            fmt.space_before = Pt(8 + pending_space)
        elif pending_space:
            fmt.space_before = Pt(pending_space)
        pending_space = 0.0
        if block.indent:
            fmt.left_indent = Pt(block.indent)
        fmt.alignment = WD_ALIGN_PARAGRAPH.CENTER if block.alignment == "center" else WD_ALIGN_PARAGRAPH.LEFT

        if block.role == BulletItem.kind:
            glyph = paragraph.add_run(f"{BULLET_GLYPH} ")
            glyph.font.size = Pt(BODY_SIZE)
        for run in block.runs:
            r = paragraph.add_run(_xml_text(run.text))
            r.bold = run.bold
            if run.size:
                r.font.size = Pt(run.size)
            if run.color:
                r.font.color.rgb = _rgb(run.color)

    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def render_docx(
    segmented: SegmentedResume,
    contact: ContactInfo,
    template: Template,
    customization: Optional[Customization] = None,
) -> RenderedDocument:
    """Render the resume as a Word document in *template*'s styling."""
    customization = customization or resolve_customization(template=template)
    blocks = build_blocks(segmented, contact, template, customization)
    content = write_docx(blocks, template, customization, author=contact.name)
    logger.debug("Built DOCX blocks", extra={'blocks': len(blocks)})
    return RenderedDocument(
        content=content,
        filename=derive_filename(contact.name, ExportFormat.DOCX.value),
        mimetype=ExportFormat.DOCX.mimetype,
        blocks=tuple(blocks),
    )
