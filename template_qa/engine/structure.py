"""
Structure Validator - required fields, name/category format, component lengths.
"""

import re
from typing import List

from template_qa.engine import constants as c
from template_qa.engine.models import ValidationError
from template_qa.engine.placeholders import PLACEHOLDER_RE

NAME_FORMAT_RE = re.compile(r"[a-z0-9_]+")


def validate_template_name(name) -> List[ValidationError]:
    if not name:
        return [ValidationError("name", c.NAME_REQUIRED, "Template name is required")]

    errors = []
    if not isinstance(name, str) or not NAME_FORMAT_RE.fullmatch(name):
        errors.append(ValidationError(
            "name", c.INVALID_NAME_FORMAT,
            "Template name must be lowercase with underscores only (no spaces or special characters)",
        ))
    if len(str(name)) > c.TEMPLATE_NAME_MAX_LENGTH:
        errors.append(ValidationError(
            "name", c.NAME_TOO_LONG,
            f"Template name must not exceed {c.TEMPLATE_NAME_MAX_LENGTH} characters",
        ))
    return errors


def validate_category(category) -> List[ValidationError]:
    if not category:
        return [ValidationError("category", c.CATEGORY_REQUIRED, "Template category is required")]
    if category not in c.VALID_CATEGORIES:
        return [ValidationError(
            "category", c.INVALID_CATEGORY,
            f"Invalid category. Must be one of: {', '.join(c.VALID_CATEGORIES)}",
        )]
    return []


def has_body_text(components: dict) -> bool:
    body = (components or {}).get("body") or {}
    return bool(body.get("text"))


def validate_components(components: dict) -> List[ValidationError]:
    """Body presence and length, TEXT header length, footer length and placeholders.

    A missing body yields BODY_REQUIRED only; header and footer are still checked.
    """
    errors = []
    components = components or {}

    if not has_body_text(components):
        errors.append(ValidationError(c.FIELD_BODY, c.BODY_REQUIRED, "Body text is required"))
    elif len(components["body"]["text"]) > c.BODY_MAX_LENGTH:
        errors.append(ValidationError(
            c.FIELD_BODY_TEXT, c.BODY_TOO_LONG,
            f"Body text must not exceed {c.BODY_MAX_LENGTH} characters",
        ))

    header = components.get("header") or {}
    if header.get("type") == c.HEADER_TEXT and header.get("text"):
        if len(header["text"]) > c.HEADER_TEXT_MAX_LENGTH:
            errors.append(ValidationError(
                c.FIELD_HEADER_TEXT, c.HEADER_TEXT_TOO_LONG,
                f"Header text must not exceed {c.HEADER_TEXT_MAX_LENGTH} characters",
            ))

    footer = components.get("footer") or {}
    footer_text = footer.get("text")
    if footer_text:
        if len(footer_text) > c.FOOTER_MAX_LENGTH:
            errors.append(ValidationError(
                c.FIELD_FOOTER_TEXT, c.FOOTER_TOO_LONG,
                f"Footer text must not exceed {c.FOOTER_MAX_LENGTH} characters",
            ))
        if PLACEHOLDER_RE.search(footer_text):
            errors.append(ValidationError(
                c.FIELD_FOOTER_TEXT, c.FOOTER_HAS_PLACEHOLDERS,
                "Footer text cannot contain placeholders",
            ))

    return errors
