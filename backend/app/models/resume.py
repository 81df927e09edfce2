"""
Resume value objects shared by the segmenter, classifier and renderers
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple


class SectionName(Enum):
    """Canonical resume sections, declared in display order"""
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    SKILLS = "skills"

    @property
    def heading_text(self) -> str:
        return self.value.upper()


CANONICAL_ORDER: Tuple[SectionName, ...] = tuple(SectionName)


@dataclass(frozen=True)
class ContactInfo:
    """Contact details pulled from raw resume text. Missing fields stay None."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_handle: Optional[str] = None
    location: Optional[str] = None

    def contact_parts(self) -> list:
        """Non-empty contact fields in display order (name excluded)."""
        return [p for p in (self.email, self.phone, self.profile_handle, self.location) if p]

    def is_empty(self) -> bool:
        return not (self.name or self.contact_parts())

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'profileHandle': self.profile_handle,
            'location': self.location,
        }


@dataclass(frozen=True)
class SegmentedResume:
    """Header block plus the raw content lines of each canonical section."""
    header: Tuple[str, ...] = ()
    sections: Dict[SectionName, Tuple[str, ...]] = field(
        default_factory=lambda: {name: () for name in CANONICAL_ORDER}
    )

    def lines(self, name: SectionName) -> Tuple[str, ...]:
        return self.sections.get(name, ())

    def has_content(self, name: SectionName) -> bool:
        return any(line.strip() for line in self.lines(name))

    def non_empty_sections(self):
        """Yield (name, lines) for sections with content, in canonical order."""
        for name in CANONICAL_ORDER:
            if self.has_content(name):
                yield name, self.lines(name)

    def is_empty(self) -> bool:
        return not self.header and not any(self.has_content(n) for n in CANONICAL_ORDER)

    def to_dict(self) -> dict:
        return {
            'header': list(self.header),
            'sections': {name.value: list(self.lines(name)) for name in CANONICAL_ORDER},
        }


# ---------------------------------------------------------------------------
# Line classification results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BulletItem:
    text: str
    kind: ClassVar[str] = "bullet"


@dataclass(frozen=True)
class SubHeading:
    text: str
    kind: ClassVar[str] = "subheading"


@dataclass(frozen=True)
class Prose:
    text: str
    kind: ClassVar[str] = "prose"


@dataclass(frozen=True)
class Spacer:
    text: str = ""
    kind: ClassVar[str] = "spacer"


# ---------------------------------------------------------------------------
# Render output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LayoutLine:
    """One positioned piece of text or decoration recorded by the PDF renderer.

    ``region`` is ``"header"``, ``"sidebar"`` or ``"main"``. ``y`` is measured
    from the top edge of the page.
    """
    page: int
    region: str
    kind: str
    text: str
    x: float
    y: float
    decoration: Optional[str] = None


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False
    color: Optional[str] = None
    size: Optional[float] = None


@dataclass(frozen=True)
class Block:
    """One paragraph of the structured document model."""
    role: str
    runs: Tuple[Run, ...] = ()
    alignment: str = "left"
    indent: float = 0.0
    decoration: Optional[str] = None
    fill: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


@dataclass(frozen=True)
class RenderedDocument:
    """Bytes of an exported resume plus its download filename and MIME type.

    ``blocks`` exposes the structure the bytes were produced from: positioned
    ``LayoutLine`` records for PDF, ``Block`` paragraphs for DOCX and nothing
    for plain text.
    """
    content: bytes
    filename: str
    mimetype: str
    blocks: tuple = ()
