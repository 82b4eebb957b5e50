"""
Input sanitization applied to free text before it reaches the core.
"""

import re


HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")


def sanitize_input(text: str) -> str:
    """Strip HTML tags and fold the text onto one line."""
    stripped = HTML_TAG_PATTERN.sub("", text or "")
    return WHITESPACE_PATTERN.sub(" ", stripped).strip()


def sanitize_multiline(text: str) -> str:
    """Strip HTML tags and surrounding whitespace; inner newlines are kept."""
    return HTML_TAG_PATTERN.sub("", text or "").strip()
