"""Transcript sanitization."""

import re

FILTERED = "[FILTERED]"

SENSITIVE_ELEMENTS = ("merchantKey", "number", "cvvNumber")

_PATTERNS = [
    re.compile(rf"(<{name}>)[^<]*(</{name}>)", re.IGNORECASE)
    for name in SENSITIVE_ELEMENTS
]


def scrub(transcript: str) -> str:
    """Replace the merchant key, card number and CVV in ``transcript``."""
    for pattern in _PATTERNS:
        transcript = pattern.sub(rf"\g<1>{FILTERED}\g<2>", transcript)
    return transcript
