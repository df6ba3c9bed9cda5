"""
Policy Scanner - flags sensitive-data requests and spam language in template text.

Rules are plain data: (name, compiled pattern) pairs grouped in two lists.
The effective PolicyRuleSet is immutable. set_policy_rules() builds a new set
and swaps it in with one reference assignment, so a reader holding the old
set keeps a consistent view of both lists.

Usage:
    scanner = PolicyScanner()
    scanner.set_policy_rules({"spamLanguagePatterns": [{"pattern": r"win big", "name": "win big"}]})
    errors = scanner.scan("Win big today", "components.body.text")
"""

import itertools
import json
import re
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from template_qa import config
from template_qa.engine import constants as c
from template_qa.engine.models import ValidationError
from template_qa.errors import PolicyRuleError
from template_qa.logging_config import get_engine_logger

logger = get_engine_logger("policy")

SENSITIVE_DATA_LIST = "sensitiveDataPatterns"
SPAM_LANGUAGE_LIST = "spamLanguagePatterns"
RULE_LISTS = (SENSITIVE_DATA_LIST, SPAM_LANGUAGE_LIST)

DEFAULT_SENSITIVE_DATA_PATTERNS = [
    (r"credit\s*card", "credit card"),
    (r"\bcvv\b", "CVV"),
    (r"\bcvc\b", "CVC"),
    (r"social\s*security", "social security number"),
    (r"\bssn\b", "SSN"),
    (r"\bpassword\b", "password"),
    (r"\bpin\s*code\b", "PIN code"),
    (r"\bpin\b(?!\s*code)", "PIN"),
    (r"bank\s*account", "bank account"),
    (r"routing\s*number", "routing number"),
    (r"debit\s*card", "debit card"),
]

DEFAULT_SPAM_LANGUAGE_PATTERNS = [
    (r"buy\s*now", "buy now"),
    (r"limited\s*time", "limited time"),
    (r"act\s*fast", "act fast"),
    (r"act\s*now", "act now"),
    (r"click\s*here", "click here"),
    (r"urgent", "urgent"),
    (r"hurry", "hurry"),
    (r"don't\s*miss", "don't miss"),
    (r"once\s*in\s*a\s*lifetime", "once in a lifetime"),
    (r"exclusive\s*offer", "exclusive offer"),
    (r"free\s*money", "free money"),
    (r"guaranteed", "guaranteed"),
    (r"risk\s*free", "risk free"),
    (r"no\s*obligation", "no obligation"),
]

_versions = itertools.count(1)


@dataclass(frozen=True)
class PolicyRule:
    name: str
    pattern: "re.Pattern"

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))

    def to_dict(self) -> dict:
        return {"pattern": self.pattern.pattern, "name": self.name}


@dataclass(frozen=True)
class PolicyRuleSet:
    sensitive_data_patterns: Tuple[PolicyRule, ...]
    spam_language_patterns: Tuple[PolicyRule, ...]
    version: int = 0

    def to_dict(self) -> dict:
        return {
            SENSITIVE_DATA_LIST: [r.to_dict() for r in self.sensitive_data_patterns],
            SPAM_LANGUAGE_LIST: [r.to_dict() for r in self.spam_language_patterns],
            "version": self.version,
        }


def compile_rule(entry, list_name: str) -> PolicyRule:
    """Build a PolicyRule from {"pattern": str | re.Pattern, "name": str} or a (pattern, name) pair."""
    if isinstance(entry, PolicyRule):
        return entry
    if isinstance(entry, dict):
        pattern, name = entry.get("pattern"), entry.get("name")
    elif isinstance(entry, (tuple, list)) and len(entry) == 2:
        pattern, name = entry
    else:
        raise PolicyRuleError(f"Rule in {list_name} must be a {{pattern, name}} mapping",
                              list_name=list_name)

    if not name or not isinstance(name, str):
        raise PolicyRuleError(f"Rule in {list_name} is missing a name", list_name=list_name)

    if isinstance(pattern, re.Pattern):
        pattern = pattern.pattern
    if not pattern or not isinstance(pattern, str):
        raise PolicyRuleError(f"Rule '{name}' in {list_name} is missing a pattern",
                              list_name=list_name, rule_name=name)
    try:
        compiled = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PolicyRuleError(f"Rule '{name}' in {list_name} has an invalid pattern: {e}",
                              list_name=list_name, rule_name=name) from e
    return PolicyRule(name=name, pattern=compiled)


def compile_rules(entries, list_name: str) -> Tuple[PolicyRule, ...]:
    if entries is None or isinstance(entries, (str, bytes, dict)):
        raise PolicyRuleError(f"{list_name} must be a list of rules", list_name=list_name)
    return tuple(compile_rule(e, list_name) for e in entries)


def build_default_rules() -> PolicyRuleSet:
    return PolicyRuleSet(
        sensitive_data_patterns=compile_rules(DEFAULT_SENSITIVE_DATA_PATTERNS, SENSITIVE_DATA_LIST),
        spam_language_patterns=compile_rules(DEFAULT_SPAM_LANGUAGE_PATTERNS, SPAM_LANGUAGE_LIST),
        version=next(_versions),
    )


def load_policy_rules(path: str) -> dict:
    """Read a JSON rule file into a partial rule mapping for set_policy_rules()."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PolicyRuleError(f"Cannot read policy rules from {path}: {e}") from e
    if not isinstance(data, dict):
        raise PolicyRuleError(f"Policy rule file {path} must contain a JSON object")
    return {k: v for k, v in data.items() if k in RULE_LISTS}


class PolicyScanner:
    """Holds the effective rule set and scans text against it."""

    def __init__(self, rules: Optional[dict] = None, max_scan_chars: int = None):
        self._rules = build_default_rules()
        self._write_lock = threading.Lock()
        self.max_scan_chars = max_scan_chars or config.MAX_SCAN_CHARS
        if rules:
            self.set_policy_rules(rules)

    # ─── CONFIGURATION ───────────────────────────────────────

    def get_policy_rules(self) -> PolicyRuleSet:
        return self._rules

    def set_policy_rules(self, partial: dict) -> PolicyRuleSet:
        """Replace exactly the rule lists present in `partial`; the other list is kept.

        Raises PolicyRuleError if any entry is malformed. The current rules are
        untouched in that case.
        """
        if not isinstance(partial, dict):
            raise PolicyRuleError("Policy rules must be a mapping of rule lists")
        unknown = set(partial) - set(RULE_LISTS)
        if unknown:
            raise PolicyRuleError(f"Unknown policy rule lists: {', '.join(sorted(unknown))}")

        # Compile outside the lock; only the swap is serialized
        compiled = {name: compile_rules(partial[name], name) for name in RULE_LISTS if name in partial}

        with self._write_lock:
            current = self._rules
            new_rules = PolicyRuleSet(
                sensitive_data_patterns=compiled.get(SENSITIVE_DATA_LIST, current.sensitive_data_patterns),
                spam_language_patterns=compiled.get(SPAM_LANGUAGE_LIST, current.spam_language_patterns),
                version=next(_versions),
            )
            self._rules = new_rules

        logger.info("Policy rules updated: %s (sensitive=%d, spam=%d)",
                    ", ".join(sorted(compiled)) or "no lists",
                    len(new_rules.sensitive_data_patterns), len(new_rules.spam_language_patterns),
                    extra={"rules_version": new_rules.version})
        return new_rules

    def reset_policy_rules(self) -> PolicyRuleSet:
        with self._write_lock:
            self._rules = build_default_rules()
        logger.info("Policy rules reset to defaults", extra={"rules_version": self._rules.version})
        return self._rules

    # ─── DETECTION ───────────────────────────────────────────

    def _bounded(self, text: str) -> str:
        if len(text) > self.max_scan_chars:
            logger.debug("Truncating %d chars to %d for policy scan", len(text), self.max_scan_chars)
            return text[:self.max_scan_chars]
        return text

    def detect_sensitive_data(self, text: str, rules: PolicyRuleSet = None) -> List[str]:
        """Names of sensitive-data rules matching anywhere in text."""
        rules = rules or self._rules
        if not text:
            return []
        text = self._bounded(text)
        return [r.name for r in rules.sensitive_data_patterns if r.matches(text)]

    def detect_spam_language(self, text: str, rules: PolicyRuleSet = None) -> List[str]:
        """Names of spam-language rules matching anywhere in text."""
        rules = rules or self._rules
        if not text:
            return []
        text = self._bounded(text)
        return [r.name for r in rules.spam_language_patterns if r.matches(text)]

    def scan(self, text: str, field: str, rules: PolicyRuleSet = None) -> List[ValidationError]:
        """One error per matching rule, sensitive-data rules first."""
        rules = rules or self._rules
        errors = []

        for name in self.detect_sensitive_data(text, rules):
            errors.append(ValidationError(
                field=field,
                code=c.POLICY_VIOLATION_SENSITIVE_DATA,
                message=f"Template requests sensitive information ({name}), which violates "
                        f"WhatsApp messaging policies. Remove requests for credit card numbers, "
                        f"CVV, SSN, passwords, PINs, or other sensitive data.",
            ))

        for name in self.detect_spam_language(text, rules):
            errors.append(ValidationError(
                field=field,
                code=c.POLICY_VIOLATION_SPAM_LANGUAGE,
                message=f'Template contains spam language ("{name}") that may lead to rejection. '
                        f"Avoid urgency tactics, pressure language, and clickbait phrases.",
            ))

        return errors

    def scan_fields(self, fields: List[Tuple[str, str]], rules: PolicyRuleSet = None) -> List[ValidationError]:
        """Scan (field, text) pairs against one rule-set snapshot."""
        rules = rules or self._rules
        errors = []
        for field, text in fields:
            errors.extend(self.scan(text, field, rules))
        return errors


def text_fields(template: dict) -> List[Tuple[str, str]]:
    """(field path, text) for every text-bearing component: header, body, footer, buttons."""
    components = (template or {}).get("components") or {}
    fields = []

    header = components.get("header") or {}
    if header.get("type") == c.HEADER_TEXT and header.get("text"):
        fields.append((c.FIELD_HEADER_TEXT, header["text"]))

    body = components.get("body") or {}
    if body.get("text"):
        fields.append((c.FIELD_BODY_TEXT, body["text"]))

    footer = components.get("footer") or {}
    if footer.get("text"):
        fields.append((c.FIELD_FOOTER_TEXT, footer["text"]))

    for index, button in enumerate(components.get("buttons") or []):
        if button.get("text"):
            fields.append((c.button_field(index, "text"), button["text"]))

    return fields

