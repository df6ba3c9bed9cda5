"""
Preview Renderer - fills {{n}} placeholders with sample values for display.

Placeholders without a sample value stay visible as {{n}} so the gap is obvious.
"""

from typing import Optional

from template_qa.engine import constants as c
from template_qa.engine.placeholders import PLACEHOLDER_RE
from template_qa.engine.sample_values import collect_sample_values


def replace_placeholders(text: str, sample_values: dict, key_prefix: str = "") -> str:
    if not text:
        return ""

    def substitute(match):
        number = match.group(1)
        for key in (f"{key_prefix}{number}", number) if key_prefix else (number,):
            value = sample_values.get(key)
            if value is not None:
                return str(value)
        return match.group(0)

    return PLACEHOLDER_RE.sub(substitute, text)


def _render_header(header: dict, sample_values: dict) -> Optional[dict]:
    header_type = header.get("type")
    if not header or header_type == c.HEADER_NONE:
        return None
    if header_type == c.HEADER_TEXT:
        return {"type": c.HEADER_TEXT,
                "content": replace_placeholders(header.get("text") or "", sample_values, "header_")}
    if header_type in c.MEDIA_HEADER_TYPES:
        return {"type": header_type, "mediaHandle": header.get("mediaHandle")}
    return {"type": header_type}


def _render_button(button: dict) -> dict:
    rendered = {"type": button.get("type"), "text": button.get("text") or ""}
    if button.get("type") == c.BUTTON_URL:
        rendered["url"] = button.get("url")
    elif button.get("type") == c.BUTTON_PHONE_NUMBER:
        rendered["phoneNumber"] = button.get("phoneNumber")
    return rendered


def render_preview(template: dict, sample_values: dict = None) -> dict:
    """Render header/body/footer/buttons with placeholders substituted.

    Sample values come from `sample_values`, falling back to the template's
    own sampleValues and then to body placeholder examples.
    """
    template = template or {}
    components = template.get("components") or {}
    values = collect_sample_values(components, template.get("sampleValues"))
    if sample_values:
        values.update({str(k): v for k, v in sample_values.items()})

    footer = components.get("footer") or {}
    return {
        "header": _render_header(components.get("header") or {}, values),
        "body": replace_placeholders(((components.get("body") or {}).get("text")) or "", values),
        "footer": footer.get("text") or None,
        "buttons": [_render_button(b) for b in components.get("buttons") or []],
        "metadata": {
            "templateName": template.get("displayName") or template.get("name"),
            "category": template.get("category"),
            "language": template.get("language"),
        },
    }
