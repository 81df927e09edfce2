"""
Resume segmenter - split free resume text into a header block and canonical sections,
and pull contact details out of it
"""
import re
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.resume import CANONICAL_ORDER, ContactInfo, SectionName, SegmentedResume

# Lines at or above these lengths are body text, not names or headings
NAME_MAX_LENGTH = 50
HEADING_MAX_LENGTH = 40
# Fuzzy headings are short phrases ("Relevant Work Experience"), never sentences
FUZZY_HEADING_MAX_WORDS = 5

MAX_SKILLS = 20
MAX_SKILL_LENGTH = 50
SUMMARY_EXCERPT_LINES = 4
SUMMARY_EXCERPT_CHARS = 500

# ========================================
# Contact patterns
# ========================================
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
PHONE_RE = re.compile(
    r"(?<![\w])(?:\+?\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"
)
PROFILE_RE = re.compile(r"(?:[\w-]+\.)*[\w-]+\.com/in/[\w-]+", re.IGNORECASE)
# "Austin, TX" / "San Francisco, CA 94105" / "Toronto, Canada"
LOCATION_RE = re.compile(
    r"^[A-Z][A-Za-z.'-]+(?: [A-Z][A-Za-z.'-]+){0,3}, (?:[A-Z]{2}(?: \d{5})?|[A-Z][a-z]+(?: [A-Z][a-z]+)?)$"
)
_CONTACT_SEPARATORS = re.compile(r"\s*(?:\||•|·|\s{3,})\s*")

# ========================================
# Heading patterns
# ========================================
_TRAILING_COLON = r"\s*:?\s*$"

HEADING_PATTERNS: Tuple[Tuple[SectionName, "re.Pattern"], ...] = (
    (SectionName.SUMMARY, re.compile(
        r"^(?:professional\s+|career\s+|executive\s+)?"
        r"(?:summary|profile|objective|about(?:\s+me)?)" + _TRAILING_COLON,
        re.IGNORECASE,
    )),
    (SectionName.EXPERIENCE, re.compile(
        r"^(?:professional\s+|work\s+|relevant\s+)?"
        r"(?:experience|employment(?:\s+history)?|work\s+history)" + _TRAILING_COLON,
        re.IGNORECASE,
    )),
    (SectionName.EDUCATION, re.compile(
        r"^(?:education(?:al\s+background)?|academic\s+background|academics)" + _TRAILING_COLON,
        re.IGNORECASE,
    )),
    (SectionName.CERTIFICATIONS, re.compile(
        r"^(?:certifications?|certificates|licenses?(?:\s*(?:and|&)\s*certifications?)?)" + _TRAILING_COLON,
        re.IGNORECASE,
    )),
    (SectionName.SKILLS, re.compile(
        r"^(?:(?:technical|core|key|professional)\s+)?(?:skills|competencies|technologies)" + _TRAILING_COLON,
        re.IGNORECASE,
    )),
)

FUZZY_KEYWORDS: Tuple[Tuple[SectionName, Tuple[str, ...]], ...] = (
    (SectionName.SUMMARY, ("summary", "objective", "profile")),
    (SectionName.EXPERIENCE, ("experience", "work history", "employment")),
    (SectionName.EDUCATION, ("education",)),
    (SectionName.CERTIFICATIONS, ("certifications", "certification", "certificates", "licenses")),
    (SectionName.SKILLS, ("skills", "competencies")),
)
_FUZZY_RES = tuple(
    (name, re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b", re.IGNORECASE))
    for name, keywords in FUZZY_KEYWORDS
)
_BULLET_START = re.compile(r"^[-*•·▪◦‣]")


def match_heading_pattern(line: str) -> Optional[SectionName]:
    """Return the section whose anchored pattern matches *line* exactly."""
    stripped = line.strip()
    for name, pattern in HEADING_PATTERNS:
        if pattern.match(stripped):
            return name
    return None


def match_heading_fuzzy(line: str) -> Optional[SectionName]:
    """Return the section whose keyword appears in a short heading-shaped line.

    Rejects lines that read like body text: bullets, digits, terminal periods or
    more than a handful of words.
    """
    stripped = line.strip()
    if not stripped or _BULLET_START.match(stripped):
        return None
    if stripped.endswith(".") or any(ch.isdigit() for ch in stripped):
        return None
    if len(stripped.split()) > FUZZY_HEADING_MAX_WORDS:
        return None
    for name, pattern in _FUZZY_RES:
        if pattern.search(stripped):
            return name
    return None


def detect_heading(line: str) -> Optional[SectionName]:
    """Classify *line* as a canonical section heading, or None for content."""
    stripped = line.strip()
    if not stripped or len(stripped) >= HEADING_MAX_LENGTH:
        return None
    return match_heading_pattern(stripped) or match_heading_fuzzy(stripped)


def _physical_lines(text: str) -> List[str]:
    if not text:
        return []
    lines = [line.rstrip("\r") for line in text.split("\n")]
    # A terminating newline does not start another line
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def segment(text: str) -> SegmentedResume:
    """Split raw resume text into header lines and canonical section content.

    Heading lines are consumed, blank lines inside sections become ``""`` and
    blank lines before the first heading are dropped. Kept lines are stored
    verbatim. Total over any string.
    """
    header: List[str] = []
    sections: Dict[SectionName, List[str]] = {name: [] for name in CANONICAL_ORDER}
    current: Optional[SectionName] = None

    for line in _physical_lines(text or ""):
        heading = detect_heading(line)
        if heading is not None:
            current = heading
            continue

        if current is None:
            if line.strip():
                header.append(line)
            continue

        sections[current].append(line if line.strip() else "")

    return SegmentedResume(
        header=tuple(header),
        sections={name: tuple(lines) for name, lines in sections.items()},
    )


# ========================================
# Contact extraction
# ========================================

def _first_match(pattern: "re.Pattern", text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(0).strip() if match else None


def extract_name(text: str) -> Optional[str]:
    """First non-empty line, when it is short and not a contact, label or heading line."""
    for line in (text or "").split("\n"):
        candidate = line.strip()
        if not candidate:
            continue
        if detect_heading(candidate) is not None:
            return None
        if len(candidate) < NAME_MAX_LENGTH and "@" not in candidate and ":" not in candidate:
            return candidate
        return None
    return None


def extract_location(lines: Iterable[str]) -> Optional[str]:
    """Find a ``City, ST`` style segment among header lines."""
    for line in lines:
        for part in _CONTACT_SEPARATORS.split(line.strip()):
            part = part.strip()
            if part and LOCATION_RE.match(part):
                return part
    return None


def extract_contact(text: str) -> ContactInfo:
    """Pull name, email, phone, profile handle and location from raw text.

    Never raises; anything not found stays None.
    """
    text = text or ""
    header_lines = segment(text).header
    return ContactInfo(
        name=extract_name(text),
        email=_first_match(EMAIL_RE, text),
        phone=_first_match(PHONE_RE, text),
        profile_handle=_first_match(PROFILE_RE, text),
        location=extract_location(header_lines),
    )


# ========================================
# Section helpers
# ========================================
_SKILL_SPLIT = re.compile(r"[,|;\n•·]")
_SKILL_MARKER = re.compile(r"^[-*▪◦‣]\s*")


def split_skills(lines: Iterable[str]) -> List[str]:
    """Split skills content into individual skill tokens."""
    skills: List[str] = []
    seen = set()
    for line in lines:
        for token in _SKILL_SPLIT.split(line):
            token = _SKILL_MARKER.sub("", token.strip()).strip()
            if not token or len(token) >= MAX_SKILL_LENGTH:
                continue
            key = token.lower()
            if key in seen:
                continue
            seen.add(key)
            skills.append(token)
            if len(skills) >= MAX_SKILLS:
                return skills
    return skills


def summary_excerpt(segmented: SegmentedResume) -> str:
    """First few summary lines joined into one string."""
    lines = [line.strip() for line in segmented.lines(SectionName.SUMMARY) if line.strip()]
    return " ".join(lines[:SUMMARY_EXCERPT_LINES])[:SUMMARY_EXCERPT_CHARS]
