"""
Enums and constants for resume layout models
"""
from enum import Enum


class LayoutKind(Enum):
    """Structural layout of a resume template"""
    SINGLE_COLUMN = "single-column"
    HEADER_BAND = "header-band"
    SIDEBAR_LEFT = "sidebar-left"
    SIDEBAR_RIGHT = "sidebar-right"

    @property
    def has_sidebar(self) -> bool:
        return self in (LayoutKind.SIDEBAR_LEFT, LayoutKind.SIDEBAR_RIGHT)


class HeadingDecoration(Enum):
    """How a section heading is decorated"""
    UNDERLINE = "underline"
    ACCENT_RULE = "accent-rule"
    SHADED = "shaded"
    PLAIN = "plain"


class HeaderRule(Enum):
    """Rule drawn beneath the name/contact block of single-column layouts"""
    FULL = "full"
    SHORT = "short"
    NONE = "none"


class ExportFormat(Enum):
    """Downloadable output formats"""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"

    @property
    def mimetype(self) -> str:
        return _MIMETYPES[self]


_MIMETYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.TXT: "text/plain",
}
