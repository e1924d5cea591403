"""Free-text safety checks shared by the user and task validators.

Only markup and script injection are screened here. SQL keywords are not:
all persistence goes through bound parameters, and a keyword blacklist
rejects ordinary words such as "update" or "select".
"""

import logging
import re

logger = logging.getLogger(__name__)

XSS_PATTERNS = (
    "<script",
    "</script>",
    "javascript:",
    "onload=",
    "onclick=",
    "onerror=",
    "onmouseover=",
    "<iframe",
    "eval(",
    "alert(",
    "document.cookie",
    "window.location",
    "<object",
    "<embed",
    "<link",
    "<meta",
)

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")

# Entity and URL encodings commonly used to smuggle markup past filters
_ENCODINGS = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&amp;", "&"),
    ("%3C", "<"),
    ("%3E", ">"),
    ("%22", '"'),
    ("%27", "'"),
    ("%2F", "/"),
    ("%3D", "="),
)


def _decode_common_encodings(value: str) -> str:
    decoded = value
    for encoded, plain in _ENCODINGS:
        decoded = decoded.replace(encoded, plain)
        decoded = decoded.replace(encoded.lower(), plain)
    return decoded


def find_unsafe_markup(value: str | None, field_name: str) -> str | None:
    """Return an error message if the value carries script or HTML, else None."""
    if not value:
        return None

    for candidate in (value, _decode_common_encodings(value)):
        lowered = candidate.lower()
        for pattern in XSS_PATTERNS:
            if pattern in lowered:
                logger.warning("XSS pattern detected in %s: %s", field_name, pattern)
                return f"Field '{field_name}' contains potentially dangerous content"

        if HTML_TAG_PATTERN.search(candidate):
            logger.warning("HTML tags detected in %s", field_name)
            return f"Field '{field_name}' cannot contain HTML tags"

    return None


def special_character_count(value: str) -> int:
    """Count characters that are neither alphanumeric nor whitespace."""
    return sum(1 for ch in value if not ch.isalnum() and not ch.isspace())
