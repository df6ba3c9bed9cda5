"""
Placeholder Analyzer - extracts and checks {{n}} tokens in template text.

Checks (each reported at most once per field):
1. {1}, {name}, {{1} malformed braces     -> INVALID_PLACEHOLDER_FORMAT
2. {{}} empty placeholders               -> EMPTY_PLACEHOLDER
3. {{name}} named placeholders           -> NAMED_PLACEHOLDER
4. %s / %d format specifiers             -> FORMAT_SPECIFIER
5. {{1}}{{2}} with nothing between them  -> STACKED_PLACEHOLDERS
6. Placeholder as first token            -> LEADING_PLACEHOLDER
7. Placeholder as last token             -> TRAILING_PLACEHOLDER
8. Indices not exactly 1..k              -> NON_SEQUENTIAL_PLACEHOLDERS

Header text is only checked when the header type is TEXT.
"""

import re
from typing import List

from template_qa.engine import constants as c
from template_qa.engine.models import ValidationError

PLACEHOLDER_RE = re.compile(r"\{\{(\d+)\}\}")

SINGLE_BRACE_RE = re.compile(r"(?<!\{)\{[^{}]*\}(?!\})")
# {{1} or {1}}: one side double-braced, the other single
HALF_CLOSED_RE = re.compile(r"\{\{[^{}]*\}(?!\})|(?<!\{)\{[^{}]*\}\}")
EMPTY_PLACEHOLDER_RE = re.compile(r"\{\{\s*\}\}")
NAMED_PLACEHOLDER_RE = re.compile(r"\{\{\s*[A-Za-z_][A-Za-z0-9_]*\s*\}\}")
FORMAT_SPECIFIER_RE = re.compile(r"%(?:\d+\$)?[sd](?![A-Za-z0-9])")
STACKED_RE = re.compile(r"\{\{\d+\}\}\{\{\d+\}\}")
LEADING_RE = re.compile(r"^\{\{\d+\}\}")
TRAILING_RE = re.compile(r"\{\{\d+\}\}$")

_FIELD_LABELS = {
    c.FIELD_BODY_TEXT: "body text",
    c.FIELD_HEADER_TEXT: "header text",
}


def extract_placeholders(text: str) -> List[int]:
    """Every {{n}} number in order of appearance, duplicates kept."""
    if not text:
        return []
    return [int(m.group(1)) for m in PLACEHOLDER_RE.finditer(text)]


def unique_placeholders(text: str) -> List[int]:
    """Sorted, de-duplicated placeholder numbers."""
    return sorted(set(extract_placeholders(text)))


def first_sequence_gap(numbers: List[int]) -> int:
    """Return the first expected index missing from sorted unique numbers, or 0 if they are 1..k."""
    for expected, actual in enumerate(numbers, start=1):
        if actual != expected:
            return expected
    return 0


def validate_text_placeholders(text: str, field: str) -> List[ValidationError]:
    """Run every placeholder check over one text field."""
    errors = []
    if not text:
        return errors
    label = _FIELD_LABELS.get(field, "text")

    def add(code, message):
        errors.append(ValidationError(field=field, code=code, message=message))

    if SINGLE_BRACE_RE.search(text) or HALF_CLOSED_RE.search(text):
        add(c.INVALID_PLACEHOLDER_FORMAT,
            "Invalid placeholder format. Use {{1}}, {{2}}, etc. (double braces)")

    if EMPTY_PLACEHOLDER_RE.search(text):
        add(c.EMPTY_PLACEHOLDER, "Empty placeholders {{}} are not allowed")

    if NAMED_PLACEHOLDER_RE.search(text):
        add(c.NAMED_PLACEHOLDER,
            "Named placeholders like {{name}} are not allowed. Use {{1}}, {{2}}, etc.")

    if FORMAT_SPECIFIER_RE.search(text):
        add(c.FORMAT_SPECIFIER,
            "Format specifiers like %s are not allowed. Use {{1}}, {{2}}, etc.")

    if STACKED_RE.search(text):
        add(c.STACKED_PLACEHOLDERS,
            "Placeholders cannot be stacked without separators (e.g., {{1}}{{2}}). "
            "Add space or text between them")

    stripped = text.strip()
    if LEADING_RE.search(stripped):
        add(c.LEADING_PLACEHOLDER, f"Placeholders should not be at the start of the {label}")

    if TRAILING_RE.search(stripped):
        add(c.TRAILING_PLACEHOLDER, f"Placeholders should not be at the end of the {label}")

    gap = first_sequence_gap(unique_placeholders(text))
    if gap:
        add(c.NON_SEQUENTIAL_PLACEHOLDERS,
            f"Placeholders must be sequential starting from {{{{1}}}}. "
            f"Found gap or wrong start at {{{{{gap}}}}}")

    return errors


def validate_placeholders(components: dict) -> List[ValidationError]:
    """Check placeholders in the TEXT header and the body of a components dict."""
    errors = []
    if not components:
        return errors

    header = components.get("header") or {}
    if header.get("type") == c.HEADER_TEXT and header.get("text"):
        errors.extend(validate_text_placeholders(header["text"], c.FIELD_HEADER_TEXT))

    body = components.get("body") or {}
    if body.get("text"):
        errors.extend(validate_text_placeholders(body["text"], c.FIELD_BODY_TEXT))

    return errors
