"""
Download filename derivation shared by every export format
"""
import re
from typing import Optional

FALLBACK_NAME = "Resume"

_NON_ALPHA = re.compile(r"[^a-zA-Z\s]")


def derive_filename(name: Optional[str], extension: str) -> str:
    """Build ``First_Last_Resume.ext`` (or ``First_Resume.ext``) from a display name.

    Everything except ASCII letters and whitespace is stripped first, so
    ``"John 3000 Public!!"`` becomes ``John_Public_Resume.pdf``.
    """
    cleaned = _NON_ALPHA.sub("", name or FALLBACK_NAME).strip()
    parts = cleaned.split()
    first = parts[0] if parts else FALLBACK_NAME
    last = "_".join(parts[1:])
    extension = extension.lstrip(".")
    if last:
        return f"{first}_{last}_Resume.{extension}"
    return f"{first}_Resume.{extension}"
