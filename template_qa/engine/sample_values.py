"""
Sample Value Validator - every placeholder needs a usable example value.

Body placeholder {{n}} uses key "n"; TEXT header placeholder {{n}} uses key
"header_n". A body placeholder's `example` in components.body.placeholders
also counts as its sample value.
"""

import re
from typing import Dict, List

from template_qa.engine import constants as c
from template_qa.engine.models import ValidationError
from template_qa.engine.placeholders import unique_placeholders

# Characters that break URLs unless encoded
URL_BREAKING_CHARS_RE = re.compile(r"[<>{}|\\^`\[\]]")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f]")


def collect_sample_values(components: dict, sample_values: dict = None) -> Dict[str, object]:
    """Merge body placeholder examples under explicit sampleValues (explicit wins)."""
    merged = {}
    body = (components or {}).get("body") or {}
    for placeholder in body.get("placeholders") or []:
        if isinstance(placeholder, dict) and placeholder.get("index") is not None \
                and placeholder.get("example") is not None:
            merged[str(placeholder["index"])] = placeholder["example"]
    if isinstance(sample_values, dict):
        merged.update({str(k): v for k, v in sample_values.items()})
    return merged


def _check_value_format(key: str, value: str) -> List[ValidationError]:
    field = f"sampleValues.{key}"
    errors = []
    if URL_BREAKING_CHARS_RE.search(value):
        errors.append(ValidationError(
            field, c.INVALID_SAMPLE_VALUE_FORMAT,
            "Sample value contains special characters that may break URLs (<>{}|\\^`[])",
        ))
    if CONTROL_CHARS_RE.search(value):
        errors.append(ValidationError(
            field, c.CONTROL_CHARACTERS_IN_SAMPLE,
            "Sample value contains control characters which are not allowed",
        ))
    if len(value) > c.SAMPLE_VALUE_MAX_LENGTH:
        errors.append(ValidationError(
            field, c.SAMPLE_VALUE_TOO_LONG,
            f"Sample value exceeds maximum length of {c.SAMPLE_VALUE_MAX_LENGTH} characters",
        ))
    return errors


def _check_placeholder_value(values: dict, key: str, number: int, where: str,
                             missing_code: str, empty_code: str) -> List[ValidationError]:
    field = f"sampleValues.{key}"
    if key not in values:
        return [ValidationError(field, missing_code,
                                f"Sample value is required for {where}placeholder {{{{{number}}}}}")]
    value = values[key]
    if value is None or (isinstance(value, str) and not value.strip()):
        return [ValidationError(field, empty_code,
                                f"Sample value for {where}placeholder {{{{{number}}}}} cannot be empty")]
    if isinstance(value, str):
        return _check_value_format(key, value)
    return []


def validate_sample_values(components: dict, sample_values: dict = None) -> List[ValidationError]:
    errors = []
    components = components or {}
    body_numbers = unique_placeholders(((components.get("body") or {}).get("text")) or "")
    header = components.get("header") or {}
    header_numbers = []
    if header.get("type") == c.HEADER_TEXT and header.get("text"):
        header_numbers = unique_placeholders(header["text"])
    values = collect_sample_values(components, sample_values)

    if not values:
        if body_numbers or header_numbers:
            errors.append(ValidationError(
                "sampleValues", c.SAMPLE_VALUES_REQUIRED,
                "Sample values are required for all placeholders",
            ))
        return errors

    for number in body_numbers:
        errors.extend(_check_placeholder_value(
            values, str(number), number, "", c.MISSING_SAMPLE_VALUE, c.EMPTY_SAMPLE_VALUE))

    for key in values:
        if key.isdigit() and int(key) not in body_numbers:
            errors.append(ValidationError(
                f"sampleValues.{key}", c.EXTRA_SAMPLE_VALUE,
                f"Sample value provided for non-existent placeholder {{{{{int(key)}}}}}",
            ))

    for number in header_numbers:
        errors.extend(_check_placeholder_value(
            values, f"header_{number}", number, "header ",
            c.MISSING_HEADER_SAMPLE_VALUE, c.EMPTY_HEADER_SAMPLE_VALUE))

    return errors
