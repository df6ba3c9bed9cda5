"""
Shared pytest fixtures for the Template QA test suite.
"""

import copy

import pytest

from template_qa.engine.policy import PolicyScanner
from template_qa.engine.tenants import registry
from template_qa.engine.validation_engine import TemplateValidationEngine

VALID_TEMPLATE = {
    "name": "order_update",
    "category": "UTILITY",
    "language": "en_US",
    "description": "Order status notification",
    "components": {
        "header": {"type": "TEXT", "text": "Order {{1}} update"},
        "body": {"text": "Hello {{1}}, your order {{2}} is ready for pickup today."},
        "footer": {"text": "Thanks for shopping with us"},
        "buttons": [
            {"type": "QUICK_REPLY", "text": "Track order"},
            {"type": "QUICK_REPLY", "text": "Contact us"},
        ],
    },
    "sampleValues": {"1": "Alex", "2": "A-1001", "header_1": "A-1001"},
}


@pytest.fixture
def valid_template():
    """A template that passes every check, copied so tests can mutate it."""
    return copy.deepcopy(VALID_TEMPLATE)


@pytest.fixture
def scanner():
    return PolicyScanner()


@pytest.fixture
def engine():
    return TemplateValidationEngine()


@pytest.fixture(autouse=True)
def reset_tenants():
    """Each test starts with no tenant engines."""
    registry.reset()
    yield
    registry.reset()
