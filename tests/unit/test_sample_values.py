"""
Unit tests for sample value validation.
"""

from template_qa.engine import constants as c
from template_qa.engine.sample_values import collect_sample_values, validate_sample_values

BODY = {"body": {"text": "Hello {{1}}, your order {{2}} is ready"}}


def _pairs(errors):
    return [(e.field, e.code) for e in errors]


def test_no_placeholders_needs_no_values():
    """A template with no placeholders needs no sample values."""
    assert validate_sample_values({"body": {"text": "Hello there"}}, None) == []


def test_values_required_when_placeholders_exist():
    """Placeholders with no sampleValues at all is an error."""
    assert _pairs(validate_sample_values(BODY, None)) == [("sampleValues", c.SAMPLE_VALUES_REQUIRED)]


def test_header_only_placeholders_need_values():
    """Header placeholders alone still need values."""
    components = {"header": {"type": "TEXT", "text": "Order {{1}} update"}, "body": {"text": "Hello there"}}
    assert _pairs(validate_sample_values(components, {})) == [("sampleValues", c.SAMPLE_VALUES_REQUIRED)]


def test_complete_values_pass():
    """One value per placeholder passes."""
    assert validate_sample_values(BODY, {"1": "Alex", "2": "A-1001"}) == []


def test_missing_and_empty_values():
    """Missing and blank values are reported per index."""
    errors = validate_sample_values(BODY, {"1": "  "})
    assert _pairs(errors) == [
        ("sampleValues.1", c.EMPTY_SAMPLE_VALUE),
        ("sampleValues.2", c.MISSING_SAMPLE_VALUE),
    ]


def test_extra_value_for_unknown_placeholder():
    """A value for an index the text does not use is an error."""
    errors = validate_sample_values(BODY, {"1": "Alex", "2": "A-1001", "3": "spare"})
    assert _pairs(errors) == [("sampleValues.3", c.EXTRA_SAMPLE_VALUE)]


def test_header_values_use_prefixed_keys():
    """Header values are looked up under header_n."""
    components = dict(BODY, header={"type": "TEXT", "text": "Order {{1}} update"})
    errors = validate_sample_values(components, {"1": "Alex", "2": "A-1001"})
    assert _pairs(errors) == [("sampleValues.header_1", c.MISSING_HEADER_SAMPLE_VALUE)]

    errors = validate_sample_values(components, {"1": "Alex", "2": "A-1001", "header_1": ""})
    assert _pairs(errors) == [("sampleValues.header_1", c.EMPTY_HEADER_SAMPLE_VALUE)]


def test_value_format_checks():
    """HTML and control characters in values are rejected."""
    errors = validate_sample_values(BODY, {"1": "<b>Alex</b>", "2": "line\x07break"})
    assert _pairs(errors) == [
        ("sampleValues.1", c.INVALID_SAMPLE_VALUE_FORMAT),
        ("sampleValues.2", c.CONTROL_CHARACTERS_IN_SAMPLE),
    ]


def test_value_too_long():
    """Values over 200 characters are rejected."""
    errors = validate_sample_values(BODY, {"1": "x" * 201, "2": "ok"})
    assert _pairs(errors) == [("sampleValues.1", c.SAMPLE_VALUE_TOO_LONG)]


def test_body_placeholder_examples_count_as_values():
    """Body placeholder examples stand in for sample values."""
    components = {"body": {
        "text": "Hello {{1}}, your order {{2}} is ready",
        "placeholders": [{"index": 1, "example": "Alex"}, {"index": 2, "example": "A-1001"}],
    }}
    assert validate_sample_values(components, None) == []


def test_explicit_values_win_over_examples():
    """sampleValues take priority over placeholder examples."""
    components = {"body": {"text": "Hi {{1}} there", "placeholders": [{"index": 1, "example": "Alex"}]}}
    assert collect_sample_values(components, {"1": "Sam"}) == {"1": "Sam"}


def test_numeric_values_are_accepted():
    """Numbers are valid sample values."""
    assert validate_sample_values(BODY, {"1": "Alex", "2": 1001}) == []
