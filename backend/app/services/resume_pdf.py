"""
PDF renderer - lay segmented resume content out on fixed-size pages.

One generic layout engine handles every template; the template's ``LayoutKind``
picks the header strategy (centered block, colored band or first-page sidebar)
and its decoration fields pick how section headings are dressed.
"""
import logging
import re
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from app.models.enums import ExportFormat, HeaderRule, HeadingDecoration, LayoutKind
from app.models.resume import (
    BulletItem,
    ContactInfo,
    LayoutLine,
    RenderedDocument,
    SectionName,
    SegmentedResume,
    Spacer,
    SubHeading,
)
from app.services.line_classifier import bullet_display, classify
from app.services.resume_templates import (
    ColorScheme,
    Customization,
    Template,
    resolve_customization,
    visible_sections,
)
from app.utils.filenames import derive_filename

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = letter
MARGIN = 54  # 0.75in
BAND_HEIGHT = 70
BAND_NAME_Y = 30
BAND_CONTACT_Y = 50
BAND_CONTENT_Y = 90
SIDEBAR_PADDING = 18
COLUMN_GUTTER = 24
BULLET_INDENT = 12
ACCENT_RULE_LENGTH = 60
SHORT_RULE_LENGTH = 100
HEADING_SHADE = "#f3f4f6"

# Minimum room left on the page before drawing a heading / a content line
HEADING_BREAK_THRESHOLD = 60
LINE_BREAK_THRESHOLD = 40

NAME_SIZE = 20
BAND_NAME_SIZE = 22
SIDEBAR_NAME_SIZE = 16
CONTACT_SIZE = 10
SIDEBAR_TEXT_SIZE = 9
HEADING_SIZE = 12
SIDEBAR_HEADING_SIZE = 11
BODY_SIZE = 10

# font family id -> (regular, bold) PDF base fonts
PDF_FONTS = {
    'arial': ("Helvetica", "Helvetica-Bold"),
    'calibri': ("Helvetica", "Helvetica-Bold"),
    'georgia': ("Times-Roman", "Times-Bold"),
    'times': ("Times-Roman", "Times-Bold"),
}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def _pdf_text(text: str) -> str:
    """Restrict text to what the built-in PDF fonts can encode."""
    text = _CONTROL_CHARS.sub(" ", text.replace("\t", "    "))
    return text.encode("cp1252", "replace").decode("cp1252")


def _is_dark(hex_color: str) -> bool:
    c = HexColor(hex_color)
    return (0.299 * c.red + 0.587 * c.green + 0.114 * c.blue) < 0.5


@dataclass(frozen=True)
class Column:
    x: float
    width: float

    @property
    def center(self) -> float:
        return self.x + self.width / 2


def main_column(layout: LayoutKind) -> Column:
    """Geometry of the main content flow for a layout."""
    if layout is LayoutKind.SIDEBAR_LEFT:
        x = PAGE_WIDTH / 3 + COLUMN_GUTTER
        return Column(x, PAGE_WIDTH - MARGIN - x)
    if layout is LayoutKind.SIDEBAR_RIGHT:
        return Column(MARGIN, PAGE_WIDTH * 2 / 3 - COLUMN_GUTTER - MARGIN)
    return Column(MARGIN, PAGE_WIDTH - 2 * MARGIN)


def sidebar_column(layout: LayoutKind) -> Column:
    """Outer geometry of the sidebar strip (full third of the page)."""
    x = 0 if layout is LayoutKind.SIDEBAR_LEFT else PAGE_WIDTH * 2 / 3
    return Column(x, PAGE_WIDTH / 3)


class _PdfLayout:
    """Drawing state for a single render call.

    ``y`` is the main-flow cursor measured from the top of the page; it only
    ever moves down, and wraps to the top margin of a fresh page.
    """

    def __init__(self, template: Template, customization: Customization, title: str):
        self.template = template
        self.customization = customization
        self.colors: ColorScheme = customization.palette(template)
        self.regular_font, self.bold_font = PDF_FONTS[customization.font_family]
        self.line_height = customization.line_height
        self.column = main_column(template.layout)

        self.buffer = BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=letter)
        self.canvas.setTitle(title)
        self.page = 1
        self.y = MARGIN
        self.trace: List[LayoutLine] = []

    # ------------------------------------------------------------------
    # primitives
    # ------------------------------------------------------------------

    def _record(self, region: str, kind: str, text: str, x: float, y: float, decoration: str = None) -> None:
        self.trace.append(LayoutLine(self.page, region, kind, text, x, y, decoration))

    def _draw_string(self, text: str, x: float, y: float, size: float, color: str,
                     bold: bool = False, align: str = "left", width: float = 0) -> None:
        c = self.canvas
        c.setFont(self.bold_font if bold else self.regular_font, size)
        c.setFillColor(HexColor(color))
        pdf_y = PAGE_HEIGHT - y
        if align == "center":
            c.drawCentredString(x + width / 2, pdf_y, text)
        else:
            c.drawString(x, pdf_y, text)

    def _draw_line(self, x1: float, x2: float, y: float, color: str, width: float) -> None:
        c = self.canvas
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(width)
        c.line(x1, PAGE_HEIGHT - y, x2, PAGE_HEIGHT - y)

    def _fill_rect(self, x: float, top: float, width: float, height: float, color: str) -> None:
        c = self.canvas
        c.setFillColor(HexColor(color))
        c.rect(x, PAGE_HEIGHT - top - height, width, height, stroke=0, fill=1)

    def _wrap(self, text: str, width: float, size: float, bold: bool = False) -> List[str]:
        font = self.bold_font if bold else self.regular_font
        return simpleSplit(_pdf_text(text), font, size, width) or [""]

    def remaining(self) -> float:
        return PAGE_HEIGHT - MARGIN - self.y

    def new_page(self) -> None:
        self.canvas.showPage()
        self.page += 1
        self.y = MARGIN

    def ensure_space(self, threshold: float) -> None:
        if self.remaining() < threshold:
            self.new_page()

    def write(self, text: str, x: float, width: float, size: float, color: str,
              bold: bool = False, align: str = "left", paginate: bool = True) -> None:
        """Draw wrapped text in the main flow, advancing the cursor per row."""
        for row in self._wrap(text, width, size, bold):
            if paginate:
                self.ensure_space(LINE_BREAK_THRESHOLD)
            self._draw_string(row, x, self.y, size, color, bold, align, width)
            self.y += self.line_height

    # ------------------------------------------------------------------
    # header strategies
    # ------------------------------------------------------------------

    def draw_centered_header(self, contact: ContactInfo) -> None:
        col = self.column
        if contact.name:
            self._record("header", "name", contact.name, col.x, self.y)
            self.write(contact.name, col.x, col.width, NAME_SIZE, self.colors.primary,
                       bold=True, align="center", paginate=False)
            self.y += 4
        parts = contact.contact_parts()
        if parts:
            line = " | ".join(parts)
            self._record("header", "contact", line, col.x, self.y)
            self.write(line, col.x, col.width, CONTACT_SIZE, self.colors.muted,
                       align="center", paginate=False)
        self.y += 12

        rule = self.template.header_rule
        if rule is HeaderRule.FULL:
            self._draw_line(col.x, col.x + col.width, self.y, self.colors.primary, 1)
            self._record("header", "rule", "", col.x, self.y, rule.value)
        elif rule is HeaderRule.SHORT:
            half = SHORT_RULE_LENGTH / 2
            self._draw_line(col.center - half, col.center + half, self.y, self.colors.accent, 2)
            self._record("header", "rule", "", col.center - half, self.y, rule.value)
        self.y += 16

    def draw_band_header(self, contact: ContactInfo) -> None:
        self._fill_rect(0, 0, PAGE_WIDTH, BAND_HEIGHT, self.colors.primary)
        self._record("header", "band", "", 0, 0)
        if contact.name:
            name = self._wrap(contact.name, self.column.width, BAND_NAME_SIZE, bold=True)[0]
            self._draw_string(name, MARGIN, BAND_NAME_Y, BAND_NAME_SIZE, "#ffffff", bold=True)
            self._record("header", "name", contact.name, MARGIN, BAND_NAME_Y)
        parts = contact.contact_parts()
        if parts:
            line = " | ".join(parts)
            row = self._wrap(line, self.column.width, CONTACT_SIZE)[0]
            self._draw_string(row, MARGIN, BAND_CONTACT_Y, CONTACT_SIZE, "#ffffff")
            self._record("header", "contact", line, MARGIN, BAND_CONTACT_Y)
        self.y = BAND_CONTENT_Y

    def draw_sidebar(self, contact: ContactInfo, skills: Sequence[str]) -> Tuple[str, ...]:
        """Paint the first-page sidebar with its own cursor.

        Returns the skills lines that did not fit, so the main flow can carry them.
        """
        strip = sidebar_column(self.template.layout)
        fill = self.colors.primary if self.template.layout is LayoutKind.SIDEBAR_LEFT else self.colors.accent
        ink = "#ffffff" if _is_dark(fill) else self.colors.text
        self._fill_rect(strip.x, 0, strip.width, PAGE_HEIGHT, fill)
        self._record("sidebar", "panel", "", strip.x, 0)

        inner = Column(strip.x + SIDEBAR_PADDING, strip.width - 2 * SIDEBAR_PADDING)
        y = MARGIN
        bottom = PAGE_HEIGHT - MARGIN

        def put(text: str, size: float, bold: bool = False) -> None:
            nonlocal y
            for row in self._wrap(text, inner.width, size, bold):
                self._draw_string(row, inner.x, y, size, ink, bold)
                y += self.line_height

        if contact.name:
            self._record("sidebar", "name", contact.name, inner.x, y)
            put(contact.name, SIDEBAR_NAME_SIZE, bold=True)
            y += 6
        for part in contact.contact_parts():
            self._record("sidebar", "contact", part, inner.x, y)
            put(part, SIDEBAR_TEXT_SIZE)
        y += 12

        if not skills:
            return ()

        self._record("sidebar", "heading", SectionName.SKILLS.heading_text, inner.x, y)
        put(SectionName.SKILLS.heading_text, SIDEBAR_HEADING_SIZE, bold=True)
        y += 4
        for index, line in enumerate(skills):
            kind = classify(line, SectionName.SKILLS)
            if isinstance(kind, Spacer):
                y += self.line_height / 2
                continue
            rows = self._wrap(bullet_display(kind), inner.width, SIDEBAR_TEXT_SIZE)
            if y + len(rows) * self.line_height > bottom:
                return tuple(skills[index:])
            self._record("sidebar", kind.kind, kind.text, inner.x, y)
            put(bullet_display(kind), SIDEBAR_TEXT_SIZE)
        return ()

    # ------------------------------------------------------------------
    # main flow
    # ------------------------------------------------------------------

    def draw_section_heading(self, name: SectionName) -> None:
        self.ensure_space(HEADING_BREAK_THRESHOLD)
        self.y += 8
        col = self.column
        decoration = self.template.heading_decoration
        color = self.template.heading_color(self.colors)

        if decoration is HeadingDecoration.SHADED:
            self._fill_rect(col.x - 4, self.y - 12, col.width + 8, 18, HEADING_SHADE)

        baseline = self.y
        self._record("main", "heading", name.heading_text, col.x, baseline, decoration.value)
        self.write(name.heading_text, col.x, col.width, HEADING_SIZE, color, bold=True, paginate=False)

        if decoration is HeadingDecoration.UNDERLINE:
            self._draw_line(col.x, col.x + col.width, baseline + 4, color, 0.75)
        elif decoration is HeadingDecoration.ACCENT_RULE:
            self._draw_line(col.x, col.x + ACCENT_RULE_LENGTH, baseline + 4, self.colors.accent, 1)
            self.y += 4
        self.y += 4

    def draw_section_lines(self, name: SectionName, lines: Sequence[str]) -> None:
        col = self.column
        for line in lines:
            kind = classify(line, name)
            if isinstance(kind, Spacer):
                self._record("main", kind.kind, "", col.x, self.y)
                self.y += self.line_height / 2
                continue

            self.ensure_space(LINE_BREAK_THRESHOLD)
            if isinstance(kind, BulletItem):
                x = col.x + BULLET_INDENT
                self._record("main", kind.kind, kind.text, x, self.y)
                self.write(bullet_display(kind), x, col.width - BULLET_INDENT, BODY_SIZE, self.colors.text)
            else:
                bold = isinstance(kind, SubHeading)
                self._record("main", kind.kind, kind.text, col.x, self.y)
                self.write(kind.text, col.x, col.width, BODY_SIZE, self.colors.text, bold=bold)

    def finish(self) -> bytes:
        self.canvas.save()
        return self.buffer.getvalue()


def render_pdf(
    segmented: SegmentedResume,
    contact: ContactInfo,
    template: Template,
    customization: Optional[Customization] = None,
) -> RenderedDocument:
    """Render a paginated PDF of the resume in *template*'s layout."""
    customization = customization or resolve_customization(template=template)
    author = " ".join(_pdf_text(contact.name or "").split())
    layout = _PdfLayout(template, customization, f"{author} - Resume" if author else "Resume")
    if author:
        layout.canvas.setAuthor(author)

    sections = list(visible_sections(segmented, customization))

    if template.layout.has_sidebar:
        skills = dict(sections).pop(SectionName.SKILLS, ())
        sections = [(n, l) for n, l in sections if n is not SectionName.SKILLS]
        overflow = layout.draw_sidebar(contact, skills)
        if overflow:
            logger.info("Sidebar skills overflowed to main column", extra={'lines': len(overflow)})
            sections.append((SectionName.SKILLS, overflow))
    elif template.layout is LayoutKind.HEADER_BAND:
        layout.draw_band_header(contact)
    else:
        layout.draw_centered_header(contact)

    for name, lines in sections:
        layout.draw_section_heading(name)
        layout.draw_section_lines(name, lines)

    content = layout.finish()
    return RenderedDocument(
        content=content,
        filename=derive_filename(contact.name, ExportFormat.PDF.value),
        mimetype=ExportFormat.PDF.mimetype,
        blocks=tuple(layout.trace),
    )
