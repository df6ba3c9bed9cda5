"""
Unit tests for the validation orchestrator: full-template validation,
ordering, warnings, snapshots, caching and the async entry point.
"""

import asyncio

from template_qa.engine import constants as c
from template_qa.engine.cache import ValidationCache
from template_qa.engine.policy import SPAM_LANGUAGE_LIST
from template_qa.engine.validation_engine import TemplateValidationEngine


def _template(body, **extra):
    template = {
        "name": "promo_message",
        "category": "MARKETING",
        "description": "Seasonal promotion",
        "components": {"body": {"text": body}},
    }
    template.update(extra)
    return template


def test_valid_template(engine, valid_template):
    """The shared valid template has no errors or warnings."""
    result = engine.validate_sync(valid_template)
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_spam_and_sensitive_body_is_invalid(engine):
    """Spam and sensitive data in the body make the template invalid."""
    result = engine.validate_sync(_template("Buy now! Enter your credit card to get started."))
    assert not result.is_valid
    assert c.POLICY_VIOLATION_SPAM_LANGUAGE in result.codes()
    assert c.POLICY_VIOLATION_SENSITIVE_DATA in result.codes()


def test_engine_delegates_match_scenarios(engine):
    """The engine's single-check methods behave like the validators."""
    assert engine.validate_placeholders({"body": {"text": "Hello {{1}}, your order {{2}} is ready"}}) == []

    errors = engine.validate_placeholders({"body": {"text": "Hello {{1}}, your order {{3}} is ready"}})
    assert [(e.field, e.code) for e in errors] == [("components.body.text", c.NON_SEQUENTIAL_PLACEHOLDERS)]

    errors = engine.validate_buttons([
        {"type": "QUICK_REPLY", "text": "Yes"},
        {"type": "URL", "text": "Visit", "url": "https://example.com"},
    ])
    assert c.MIXED_BUTTON_TYPES in [e.code for e in errors]

    assert engine.extract_placeholders("{{1}} and {{2}}") == [1, 2]


def test_phone_format_through_full_validation(engine, valid_template):
    """A bad phone number is reported by full validation."""
    valid_template["components"]["buttons"] = [{"type": "PHONE_NUMBER", "text": "Call us", "phoneNumber": "+1"}]
    assert c.INVALID_PHONE_FORMAT in engine.validate_sync(valid_template).codes()

    valid_template["components"]["buttons"][0]["phoneNumber"] = "+1234567890"
    assert c.INVALID_PHONE_FORMAT not in engine.validate_sync(valid_template).codes()


def test_all_checks_run_and_errors_are_ordered(engine):
    """Every check runs and errors come out in check order."""
    template = {
        "name": "",
        "components": {
            "body": {"text": "Hello {{1}}, your order {{3}} is ready. Act fast!"},
            "footer": {"text": "Reply STOP {{1}} to opt out"},
            "buttons": [
                {"type": "QUICK_REPLY", "text": "Yes"},
                {"type": "URL", "text": "Visit", "url": "https://example.com"},
            ],
        },
        "sampleValues": {"1": "Alex", "3": "A-1001"},
    }
    codes = engine.validate_sync(template).codes()
    assert codes == [
        c.NAME_REQUIRED,
        c.CATEGORY_REQUIRED,
        c.FOOTER_HAS_PLACEHOLDERS,
        c.NON_SEQUENTIAL_PLACEHOLDERS,
        c.MIXED_BUTTON_TYPES,
        c.POLICY_VIOLATION_SPAM_LANGUAGE,
    ]


def test_missing_body_yields_single_structural_error(engine):
    """No body gives a single BODY_REQUIRED."""
    result = engine.validate_sync({"name": "empty_one", "category": "UTILITY", "components": {}})
    assert [(e.field, e.code) for e in result.errors] == [("components.body", c.BODY_REQUIRED)]


def test_policy_scan_covers_every_text_field(engine, valid_template):
    """Policy violations are found in every text field."""
    components = valid_template["components"]
    components["header"]["text"] = "Urgent: order {{1}} update"
    components["footer"]["text"] = "Never share your password"
    components["buttons"][0]["text"] = "Click here"
    fields = [(e.field, e.code) for e in engine.validate_sync(valid_template).errors]
    assert fields == [
        ("components.header.text", c.POLICY_VIOLATION_SPAM_LANGUAGE),
        ("components.footer.text", c.POLICY_VIOLATION_SENSITIVE_DATA),
        ("components.buttons[0].text", c.POLICY_VIOLATION_SPAM_LANGUAGE),
    ]


def test_warnings_do_not_affect_validity(engine):
    """Warnings never make a template invalid."""
    template = _template("Hi there friend")
    del template["description"]
    result = engine.validate_sync(template)
    assert result.is_valid
    assert [w.code for w in result.warnings] == [c.MISSING_DESCRIPTION, c.BODY_TOO_SHORT]


def test_very_long_body_warning(engine):
    """A body past the warning threshold gets BODY_VERY_LONG."""
    result = engine.validate_sync(_template("Thanks for your order. " * 40))
    assert c.BODY_VERY_LONG in [w.code for w in result.warnings]


def test_validate_is_idempotent(engine, valid_template):
    """Validating twice gives the same result."""
    valid_template["components"]["body"]["text"] = "{{2}} buy now {{2}}"
    first = engine.validate_sync(valid_template)
    second = engine.validate_sync(valid_template)
    assert first.errors == second.errors
    assert first.to_dict() == second.to_dict()


def test_every_reported_code_is_known(engine):
    template = {
        "name": "Bad Name",
        "category": "PROMO",
        "components": {
            "header": {"type": "TEXT", "text": "{name} " + "h" * 70},
            "body": {"text": "{{}} %s {{1}}{{2}} act now"},
            "footer": {"text": "f" * 70},
            "buttons": [{"type": "COPY", "text": ""}, {"type": "URL", "text": "Go", "url": "nope"}],
        },
        "sampleValues": {"1": "<x>", "9": "extra"},
    }
    for code in engine.validate_sync(template).codes():
        assert code in c.ERROR_CODES


def test_async_validate_matches_sync(engine, valid_template):
    """validate() and validate_sync() agree."""
    result = asyncio.run(engine.validate(valid_template))
    assert result.to_dict() == engine.validate_sync(valid_template).to_dict()


def test_rule_update_applies_to_next_validation(engine):
    """A rule update applies to the next validation."""
    template = _template("Come to our store and win big this weekend")
    assert engine.validate_sync(template).is_valid

    engine.set_policy_rules({SPAM_LANGUAGE_LIST: [{"pattern": r"win\s*big", "name": "win big"}]})
    result = engine.validate_sync(template)
    assert result.codes() == [c.POLICY_VIOLATION_SPAM_LANGUAGE]

    engine.reset_policy_rules()
    assert engine.validate_sync(template).is_valid


def test_cache_is_invalidated_by_rule_changes():
    """A cached result is not reused after the rules change."""
    cache = ValidationCache(ttl_seconds=60, max_entries=10)
    engine = TemplateValidationEngine(cache=cache)
    template = _template("Come to our store and win big this weekend")

    assert engine.validate_sync(template).is_valid
    assert engine.validate_sync(template).is_valid
    assert cache.stats()["hits"] == 1

    engine.set_policy_rules({SPAM_LANGUAGE_LIST: [{"pattern": "win big", "name": "win big"}]})
    assert not engine.validate_sync(template).is_valid


def test_engines_do_not_share_rules():
    """Each engine has its own rules."""
    first, second = TemplateValidationEngine(), TemplateValidationEngine()
    first.set_policy_rules({SPAM_LANGUAGE_LIST: []})
    template = _template("Buy now while stocks last at our store")
    assert first.validate_sync(template).is_valid
    assert not second.validate_sync(template).is_valid


def test_to_dict_wire_shape(engine):
    """to_dict uses the isValid/errors/warnings wire keys."""
    data = engine.validate_sync({}).to_dict()
    assert set(data) == {"isValid", "errors", "warnings"}
    assert data["isValid"] is False
    assert set(data["errors"][0]) == {"field", "code", "message"}


def test_none_template_is_reported_not_raised(engine):
    """None is reported as missing content rather than raising."""
    result = engine.validate_sync(None)
    assert result.codes() == [c.NAME_REQUIRED, c.CATEGORY_REQUIRED, c.BODY_REQUIRED]
