"""
Validation limits, template taxonomy, and the closed set of error codes.
"""

# ─── LIMITS ──────────────────────────────────────────────────

BODY_MAX_LENGTH = 1024
HEADER_TEXT_MAX_LENGTH = 60
FOOTER_MAX_LENGTH = 60
BUTTON_TEXT_MAX_LENGTH = 25
MAX_QUICK_REPLY_BUTTONS = 3
MAX_CTA_BUTTONS = 2
TEMPLATE_NAME_MAX_LENGTH = 512
SAMPLE_VALUE_MAX_LENGTH = 200

BODY_SHORT_WARNING_LENGTH = 20
BODY_LONG_WARNING_LENGTH = 800

# ─── TAXONOMY ────────────────────────────────────────────────

VALID_CATEGORIES = (
    "TRANSACTIONAL",
    "UTILITY",
    "MARKETING",
    "ACCOUNT_UPDATE",
    "OTP",
    # Legacy
    "marketing",
    "utility",
    "authentication",
)

HEADER_NONE = "NONE"
HEADER_TEXT = "TEXT"
MEDIA_HEADER_TYPES = ("IMAGE", "VIDEO", "DOCUMENT")
HEADER_LOCATION = "LOCATION"

BUTTON_QUICK_REPLY = "QUICK_REPLY"
BUTTON_URL = "URL"
BUTTON_PHONE_NUMBER = "PHONE_NUMBER"
CTA_BUTTON_TYPES = (BUTTON_URL, BUTTON_PHONE_NUMBER)

# ─── ERROR CODES ─────────────────────────────────────────────

# Structure
NAME_REQUIRED = "NAME_REQUIRED"
INVALID_NAME_FORMAT = "INVALID_NAME_FORMAT"
NAME_TOO_LONG = "NAME_TOO_LONG"
CATEGORY_REQUIRED = "CATEGORY_REQUIRED"
INVALID_CATEGORY = "INVALID_CATEGORY"
BODY_REQUIRED = "BODY_REQUIRED"
BODY_TOO_LONG = "BODY_TOO_LONG"
HEADER_TEXT_TOO_LONG = "HEADER_TEXT_TOO_LONG"
FOOTER_TOO_LONG = "FOOTER_TOO_LONG"
FOOTER_HAS_PLACEHOLDERS = "FOOTER_HAS_PLACEHOLDERS"

# Placeholders
INVALID_PLACEHOLDER_FORMAT = "INVALID_PLACEHOLDER_FORMAT"
EMPTY_PLACEHOLDER = "EMPTY_PLACEHOLDER"
NAMED_PLACEHOLDER = "NAMED_PLACEHOLDER"
FORMAT_SPECIFIER = "FORMAT_SPECIFIER"
STACKED_PLACEHOLDERS = "STACKED_PLACEHOLDERS"
LEADING_PLACEHOLDER = "LEADING_PLACEHOLDER"
TRAILING_PLACEHOLDER = "TRAILING_PLACEHOLDER"
NON_SEQUENTIAL_PLACEHOLDERS = "NON_SEQUENTIAL_PLACEHOLDERS"

# Buttons
MIXED_BUTTON_TYPES = "MIXED_BUTTON_TYPES"
TOO_MANY_QUICK_REPLY_BUTTONS = "TOO_MANY_QUICK_REPLY_BUTTONS"
TOO_MANY_CTA_BUTTONS = "TOO_MANY_CTA_BUTTONS"
INVALID_BUTTON_TYPE = "INVALID_BUTTON_TYPE"
BUTTON_TEXT_REQUIRED = "BUTTON_TEXT_REQUIRED"
BUTTON_TEXT_TOO_LONG = "BUTTON_TEXT_TOO_LONG"
DUPLICATE_BUTTON_TEXT = "DUPLICATE_BUTTON_TEXT"
BUTTON_URL_REQUIRED = "BUTTON_URL_REQUIRED"
INVALID_BUTTON_URL = "INVALID_BUTTON_URL"
BUTTON_PHONE_REQUIRED = "BUTTON_PHONE_REQUIRED"
INVALID_PHONE_FORMAT = "INVALID_PHONE_FORMAT"

# Sample values
SAMPLE_VALUES_REQUIRED = "SAMPLE_VALUES_REQUIRED"
MISSING_SAMPLE_VALUE = "MISSING_SAMPLE_VALUE"
EMPTY_SAMPLE_VALUE = "EMPTY_SAMPLE_VALUE"
EXTRA_SAMPLE_VALUE = "EXTRA_SAMPLE_VALUE"
MISSING_HEADER_SAMPLE_VALUE = "MISSING_HEADER_SAMPLE_VALUE"
EMPTY_HEADER_SAMPLE_VALUE = "EMPTY_HEADER_SAMPLE_VALUE"
INVALID_SAMPLE_VALUE_FORMAT = "INVALID_SAMPLE_VALUE_FORMAT"
CONTROL_CHARACTERS_IN_SAMPLE = "CONTROL_CHARACTERS_IN_SAMPLE"
SAMPLE_VALUE_TOO_LONG = "SAMPLE_VALUE_TOO_LONG"

# Policy
POLICY_VIOLATION_SENSITIVE_DATA = "POLICY_VIOLATION_SENSITIVE_DATA"
POLICY_VIOLATION_SPAM_LANGUAGE = "POLICY_VIOLATION_SPAM_LANGUAGE"

ERROR_CODES = frozenset({
    NAME_REQUIRED, INVALID_NAME_FORMAT, NAME_TOO_LONG, CATEGORY_REQUIRED,
    INVALID_CATEGORY, BODY_REQUIRED, BODY_TOO_LONG, HEADER_TEXT_TOO_LONG,
    FOOTER_TOO_LONG, FOOTER_HAS_PLACEHOLDERS,
    INVALID_PLACEHOLDER_FORMAT, EMPTY_PLACEHOLDER, NAMED_PLACEHOLDER,
    FORMAT_SPECIFIER, STACKED_PLACEHOLDERS, LEADING_PLACEHOLDER,
    TRAILING_PLACEHOLDER, NON_SEQUENTIAL_PLACEHOLDERS,
    MIXED_BUTTON_TYPES, TOO_MANY_QUICK_REPLY_BUTTONS, TOO_MANY_CTA_BUTTONS,
    INVALID_BUTTON_TYPE, BUTTON_TEXT_REQUIRED, BUTTON_TEXT_TOO_LONG,
    DUPLICATE_BUTTON_TEXT, BUTTON_URL_REQUIRED, INVALID_BUTTON_URL,
    BUTTON_PHONE_REQUIRED, INVALID_PHONE_FORMAT,
    SAMPLE_VALUES_REQUIRED, MISSING_SAMPLE_VALUE, EMPTY_SAMPLE_VALUE,
    EXTRA_SAMPLE_VALUE, MISSING_HEADER_SAMPLE_VALUE, EMPTY_HEADER_SAMPLE_VALUE,
    INVALID_SAMPLE_VALUE_FORMAT, CONTROL_CHARACTERS_IN_SAMPLE,
    SAMPLE_VALUE_TOO_LONG,
    POLICY_VIOLATION_SENSITIVE_DATA, POLICY_VIOLATION_SPAM_LANGUAGE,
})

# Warning codes (advisory, never affect isValid)
MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
BODY_TOO_SHORT = "BODY_TOO_SHORT"
BODY_VERY_LONG = "BODY_VERY_LONG"

# ─── FIELD PATHS ─────────────────────────────────────────────

FIELD_BODY = "components.body"
FIELD_BODY_TEXT = "components.body.text"
FIELD_HEADER_TEXT = "components.header.text"
FIELD_FOOTER_TEXT = "components.footer.text"
FIELD_BUTTONS = "components.buttons"


def button_field(index: int, attr: str) -> str:
    """Dotted path to one attribute of one button, e.g. components.buttons[2].text"""
    return f"{FIELD_BUTTONS}[{index}].{attr}"
