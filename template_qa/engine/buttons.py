"""
Button Validator - taxonomy, count limits, and per-button format checks.

QUICK_REPLY buttons form one class; URL and PHONE_NUMBER buttons together form
the Call-To-Action (CTA) class. A collection may not mix the two classes.
Every button is checked independently so one button can carry several errors.
"""

import re
from typing import List, Optional
from urllib.parse import urlsplit

from template_qa.engine import constants as c
from template_qa.engine.models import ValidationError

# E.164: leading +, country code digit 1-9, 7-15 digits total, no separators
E164_RE = re.compile(r"\+[1-9]\d{6,14}")

URL_PLACEHOLDER_RE = re.compile(r"\{\{\d+\}\}")
HOSTNAME_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*")
_URL_FORBIDDEN_CHARS = set(" \t\r\n<>\"{}|\\^`")


def is_valid_e164(phone_number: str) -> bool:
    return isinstance(phone_number, str) and bool(E164_RE.fullmatch(phone_number))


def is_valid_button_url(url: str) -> bool:
    """http(s) URL with a real host; {{n}} is allowed in the path and query only."""
    if not url or not url.lower().startswith(("http://", "https://")):
        return False
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if parts.scheme.lower() not in ("http", "https") or not hostname:
        return False
    if "{" in parts.netloc or not HOSTNAME_RE.fullmatch(hostname):
        return False
    rest = URL_PLACEHOLDER_RE.sub("", url[len(parts.scheme) + 3 + len(parts.netloc):])
    return not any(ch in _URL_FORBIDDEN_CHARS for ch in rest)


def _button_class(button: dict) -> Optional[str]:
    button_type = button.get("type")
    if button_type == c.BUTTON_QUICK_REPLY:
        return "quick_reply"
    if button_type in c.CTA_BUTTON_TYPES:
        return "cta"
    return None


def _check_button(button: dict, index: int) -> List[ValidationError]:
    errors = []
    text = button.get("text") or ""
    button_type = button.get("type")

    if _button_class(button) is None:
        errors.append(ValidationError(
            field=c.button_field(index, "type"),
            code=c.INVALID_BUTTON_TYPE,
            message=f"Unknown button type '{button_type}'. Use QUICK_REPLY, URL or PHONE_NUMBER",
        ))

    if not text.strip():
        errors.append(ValidationError(
            field=c.button_field(index, "text"),
            code=c.BUTTON_TEXT_REQUIRED,
            message="Button text is required",
        ))
    elif len(text) > c.BUTTON_TEXT_MAX_LENGTH:
        errors.append(ValidationError(
            field=c.button_field(index, "text"),
            code=c.BUTTON_TEXT_TOO_LONG,
            message=f"Button text must not exceed {c.BUTTON_TEXT_MAX_LENGTH} characters",
        ))

    if button_type == c.BUTTON_URL:
        url = button.get("url") or ""
        if not url:
            errors.append(ValidationError(
                field=c.button_field(index, "url"),
                code=c.BUTTON_URL_REQUIRED,
                message="URL is required for URL buttons",
            ))
        elif not is_valid_button_url(url):
            errors.append(ValidationError(
                field=c.button_field(index, "url"),
                code=c.INVALID_BUTTON_URL,
                message="Invalid URL format. URLs must start with http:// or https://",
            ))

    if button_type == c.BUTTON_PHONE_NUMBER:
        phone_number = button.get("phoneNumber") or ""
        if not phone_number:
            errors.append(ValidationError(
                field=c.button_field(index, "phoneNumber"),
                code=c.BUTTON_PHONE_REQUIRED,
                message="Phone number is required for phone buttons",
            ))
        elif not is_valid_e164(phone_number):
            errors.append(ValidationError(
                field=c.button_field(index, "phoneNumber"),
                code=c.INVALID_PHONE_FORMAT,
                message="Phone number must be in E.164 format (e.g., +1234567890)",
            ))

    return errors


def validate_buttons(buttons: Optional[list]) -> List[ValidationError]:
    """Validate a button collection. None or an empty list is valid."""
    errors = []
    if not buttons:
        return errors

    classes = [_button_class(b) for b in buttons]
    quick_reply_count = classes.count("quick_reply")
    cta_count = classes.count("cta")

    if quick_reply_count > 0 and cta_count > 0:
        errors.append(ValidationError(
            field=c.FIELD_BUTTONS,
            code=c.MIXED_BUTTON_TYPES,
            message="Cannot mix Quick Reply buttons with Call-To-Action buttons",
        ))

    if quick_reply_count > c.MAX_QUICK_REPLY_BUTTONS:
        errors.append(ValidationError(
            field=c.FIELD_BUTTONS,
            code=c.TOO_MANY_QUICK_REPLY_BUTTONS,
            message=f"Maximum {c.MAX_QUICK_REPLY_BUTTONS} Quick Reply buttons allowed",
        ))

    if cta_count > c.MAX_CTA_BUTTONS:
        errors.append(ValidationError(
            field=c.FIELD_BUTTONS,
            code=c.TOO_MANY_CTA_BUTTONS,
            message=f"Maximum {c.MAX_CTA_BUTTONS} Call-To-Action buttons allowed",
        ))

    seen_texts = {}
    for index, button in enumerate(buttons):
        errors.extend(_check_button(button, index))

        text = (button.get("text") or "").strip().lower()
        if not text:
            continue
        if text in seen_texts:
            errors.append(ValidationError(
                field=c.button_field(index, "text"),
                code=c.DUPLICATE_BUTTON_TEXT,
                message=f"Button text must be unique within the template "
                        f"(same as button {seen_texts[text] + 1})",
            ))
        else:
            seen_texts[text] = index

    return errors
