"""
Template Validation Engine - runs every rule over a template document in one pass.

Stages (all run, nothing short-circuits):
1. Structure: name, category, body presence, component lengths, footer rules
2. Placeholders in the TEXT header and body
3. Buttons
4. Sample values
5. Policy scan of header, body, footer and button texts
6. Best-practice warnings (advisory)

Rule violations come back as ValidationError entries; only misuse of the
engine's own API (for example a bad policy pattern) raises.

Usage:
    engine = TemplateValidationEngine()
    result = engine.validate_sync(template)
    result = await engine.validate(template)
    score = engine.calculate_quality_score(template)
"""

import time
from typing import List, Optional

from template_qa.engine import constants as c
from template_qa.engine.buttons import validate_buttons
from template_qa.engine.cache import ValidationCache
from template_qa.engine.models import (
    QualityScoreResult, ValidationError, ValidationResult, ValidationWarning,
)
from template_qa.engine.placeholders import (
    extract_placeholders, validate_placeholders,
)
from template_qa.engine.policy import PolicyRuleSet, PolicyScanner, text_fields
from template_qa.engine.preview import render_preview
from template_qa.engine.quality_scorer import calculate_quality_score
from template_qa.engine.sample_values import validate_sample_values
from template_qa.engine.structure import (
    validate_category, validate_components, validate_template_name,
)
from template_qa.logging_config import get_engine_logger

logger = get_engine_logger("validation")


def generate_warnings(template: dict) -> List[ValidationWarning]:
    warnings = []
    if not (template.get("description") or "").strip():
        warnings.append(ValidationWarning(
            "description", c.MISSING_DESCRIPTION,
            "Adding a description helps organize your templates",
        ))

    body_text = (((template.get("components") or {}).get("body") or {}).get("text")) or ""
    if body_text and len(body_text) < c.BODY_SHORT_WARNING_LENGTH:
        warnings.append(ValidationWarning(
            c.FIELD_BODY_TEXT, c.BODY_TOO_SHORT,
            "Body text is very short. Consider adding more context",
        ))
    if len(body_text) > c.BODY_LONG_WARNING_LENGTH:
        warnings.append(ValidationWarning(
            c.FIELD_BODY_TEXT, c.BODY_VERY_LONG,
            "Body text is quite long. Consider making it more concise",
        ))
    return warnings


class TemplateValidationEngine:
    """Validation and scoring for one rule-set scope (a process or a tenant)."""

    def __init__(self, scanner: PolicyScanner = None, cache: ValidationCache = None,
                 tenant_id: str = None):
        self.scanner = scanner or PolicyScanner()
        self.cache = cache
        self.tenant_id = tenant_id

    # ─── POLICY RULES ────────────────────────────────────────

    def get_policy_rules(self) -> PolicyRuleSet:
        return self.scanner.get_policy_rules()

    def set_policy_rules(self, partial: dict) -> PolicyRuleSet:
        return self.scanner.set_policy_rules(partial)

    def reset_policy_rules(self) -> PolicyRuleSet:
        return self.scanner.reset_policy_rules()

    # ─── INDIVIDUAL CHECKS ───────────────────────────────────

    def extract_placeholders(self, text: str) -> List[int]:
        return extract_placeholders(text)

    def validate_placeholders(self, components: dict) -> List[ValidationError]:
        return validate_placeholders(components)

    def validate_buttons(self, buttons: Optional[list]) -> List[ValidationError]:
        return validate_buttons(buttons)

    def validate_sample_values(self, components: dict, sample_values: dict = None) -> List[ValidationError]:
        return validate_sample_values(components, sample_values)

    def check_policy_violations(self, template: dict,
                                rules: PolicyRuleSet = None) -> List[ValidationError]:
        return self.scanner.scan_fields(text_fields(template), rules or self.get_policy_rules())

    # ─── ORCHESTRATION ───────────────────────────────────────

    def _run_checks(self, template: dict, rules: PolicyRuleSet) -> ValidationResult:
        template = template or {}
        components = template.get("components") or {}
        errors = []

        errors.extend(validate_template_name(template.get("name")))
        errors.extend(validate_category(template.get("category")))
        errors.extend(validate_components(components))
        errors.extend(validate_placeholders(components))

        errors.extend(validate_buttons(components.get("buttons")))
        errors.extend(validate_sample_values(components, template.get("sampleValues")))
        errors.extend(self.check_policy_violations(template, rules))

        return ValidationResult.from_errors(errors, generate_warnings(template))

    def validate_sync(self, template: dict) -> ValidationResult:
        """Validate a template document and return every violation found."""
        started = time.perf_counter()
        rules = self.get_policy_rules()  # one snapshot for the whole call

        if self.cache is not None:
            cached = self.cache.get(template, rules.version)
            if cached is not None:
                return cached

        result = self._run_checks(template, rules)

        if self.cache is not None:
            self.cache.set(template, rules.version, result)

        logger.debug(
            "Validated template '%s': %s (%d errors, %d warnings)",
            (template or {}).get("name"), "valid" if result.is_valid else "invalid",
            len(result.errors), len(result.warnings),
            extra={
                "template_name": (template or {}).get("name"),
                "tenant_id": self.tenant_id,
                "error_count": len(result.errors),
                "rules_version": rules.version,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return result

    async def validate(self, template: dict) -> ValidationResult:
        """Coroutine form of validate_sync(); the checks themselves never wait."""
        return self.validate_sync(template)

    # ─── ADVISORY ────────────────────────────────────────────

    def calculate_quality_score(self, template: dict) -> QualityScoreResult:
        return calculate_quality_score(template, self.scanner)

    def render_preview(self, template: dict, sample_values: dict = None) -> dict:
        return render_preview(template, sample_values)
