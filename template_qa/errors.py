"""
Exceptions for programmer-contract violations.

Template rule violations are never raised: they come back as ValidationError
entries in a ValidationResult. These exceptions cover misuse of the engine's
own API, such as handing set_policy_rules() a pattern that does not compile.
"""


class TemplateQAError(Exception):
    """Base class for all template_qa exceptions."""


class PolicyRuleError(TemplateQAError, ValueError):
    """A policy rule list or pattern could not be used.

    The offending list and rule name are kept so API callers can point at them.
    """

    def __init__(self, message: str, list_name: str = None, rule_name: str = None):
        super().__init__(message)
        self.list_name = list_name
        self.rule_name = rule_name


class ConfigurationError(TemplateQAError, ValueError):
    """Raised by config.validate(strict=True) when settings are invalid."""
