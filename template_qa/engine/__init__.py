"""Template validation and quality scoring engine."""

from template_qa.engine.models import (
    CategoryScore, QualityScoreResult, ValidationError, ValidationResult, ValidationWarning,
)
from template_qa.engine.policy import PolicyRule, PolicyRuleSet, PolicyScanner
from template_qa.engine.validation_engine import TemplateValidationEngine
from template_qa.engine.tenants import TenantEngineRegistry
