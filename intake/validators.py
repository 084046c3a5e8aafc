"""
Input parsers for flow steps.

Every parser takes the raw (already trimmed) message text and returns the
parsed value, or None when the input does not have the expected shape.
"""

import re
from datetime import date, datetime
from typing import Optional

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NATIONAL_ID_RE = re.compile(r"^\d{5,}$")
NUMERIC_ID_RE = re.compile(r"^\d+$")

# Safaricom/Airtel/Telkom style mobiles: 7XXXXXXXX or 1XXXXXXXX after the prefix
KENYAN_MOBILE_RE = re.compile(r"^(?:\+?254|0)?([17]\d{8})$")
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-().]")

GENDERS = {
    "m": "M",
    "male": "M",
    "f": "F",
    "female": "F",
}


def parse_date(text: str) -> Optional[date]:
    """YYYY-MM-DD that is also a real calendar date (rejects 2024-02-30)."""
    if not DATE_RE.match(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_national_id(text: str) -> Optional[str]:
    """Digits only, at least five of them. Kept as a string (leading zeros matter)."""
    return text if NATIONAL_ID_RE.match(text) else None


def parse_numeric_id(text: str) -> Optional[int]:
    """Positive integer identifier such as a baby id."""
    if not NUMERIC_ID_RE.match(text):
        return None
    value = int(text)
    return value if value > 0 else None


def parse_gender(text: str) -> Optional[str]:
    return GENDERS.get(text.strip().lower())


def normalize_kenyan_mobile(text: str) -> Optional[str]:
    """
    Normalize a Kenyan mobile number to 254XXXXXXXXX.

    Accepts 07.., 01.., +2547.., 2547.. and the bare 9-digit form;
    spaces, dashes, dots and parentheses are ignored.
    """
    compact = _PHONE_SEPARATORS_RE.sub("", text)
    match = KENYAN_MOBILE_RE.match(compact)
    if not match:
        return None
    return f"254{match.group(1)}"


def normalize_sender_id(sender_id: str) -> str:
    """WhatsApp sender ids as bare digits (drops '+', spaces, 'whatsapp:' prefixes)."""
    return re.sub(r"\D", "", sender_id or "")


def excerpt(text: Optional[str], limit: int = 200) -> str:
    """Bounded-length excerpt of a backend error body for display."""
    if not text:
        return "no details returned"
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"
