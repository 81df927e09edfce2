"""
Line classifier - decide how a single section line is rendered.

Both the PDF and DOCX renderers call ``classify`` for every content line so the
two formats always agree on what is a bullet, a sub-heading or plain prose.
"""
import re
from typing import Union

from app.models.resume import BulletItem, Prose, SectionName, Spacer, SubHeading

LineKind = Union[BulletItem, SubHeading, Prose, Spacer]

BULLET_GLYPH = "•"
BULLET_MARKERS = ("-", "*", "•", "·", "▪", "◦", "‣")

_LEADING_MARKER = re.compile(r"^[-*•·▪◦‣]+\s*")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_ONGOING = re.compile(r"\b(?:present|current)\b", re.IGNORECASE)
# One or two words, then a pipe, en/em dash, spaced hyphen or a wide gap
_TOKEN_SEPARATOR = re.compile(r"^\S+(?: \S+)?(?:\s*[|–—]|\s+-\s|\s{2,}\S)")


def strip_leading_marker(line: str) -> str:
    return _LEADING_MARKER.sub("", line.strip()).strip()


def looks_like_subheading(line: str) -> bool:
    """Company / title / date lines: capitalised and carrying a date or a separator."""
    stripped = line.strip()
    if not stripped or not stripped[0].isupper():
        return False
    if _YEAR.search(stripped) or _ONGOING.search(stripped):
        return True
    return bool(_TOKEN_SEPARATOR.match(stripped))


def classify(line: str, section: SectionName) -> LineKind:
    """Classify one content line of *section*. Pure and deterministic."""
    stripped = (line or "").strip()
    if not stripped:
        return Spacer()

    if section is SectionName.SKILLS:
        return BulletItem(strip_leading_marker(stripped))

    if stripped.startswith(BULLET_MARKERS):
        return BulletItem(strip_leading_marker(stripped))

    if looks_like_subheading(stripped):
        return SubHeading(stripped)

    return Prose(stripped)


def bullet_display(item: BulletItem) -> str:
    return f"{BULLET_GLYPH} {item.text}"
