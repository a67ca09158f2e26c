import re
from typing import Optional

FULL_POSTAL_RE = re.compile(r"^[A-Za-z]\d[A-Za-z][ -]?\d[A-Za-z]\d$")
PARTIAL_POSTAL_RE = re.compile(r"^[A-Za-z]\d[A-Za-z][ -]?$")
ZIP_CODE_RE = re.compile(r"^\d{5}(?:[-\s]\d{4})?$")


def region_hint_for(text: Optional[str]) -> Optional[str]:
    """Guess the geocoding region from a Canadian postal code or US ZIP code."""
    if not text:
        return None
    text = text.strip()
    if FULL_POSTAL_RE.match(text) or PARTIAL_POSTAL_RE.match(text):
        return "ca"
    if ZIP_CODE_RE.match(text):
        return "us"
    return None
