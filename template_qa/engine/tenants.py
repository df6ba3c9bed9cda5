"""
Tenant Engine Registry - one TemplateValidationEngine (own rules, own cache) per tenant.

Engines are created lazily on first use. New engines start from the default
rules, overlaid with TQA_POLICY_RULES_PATH when that is set.
"""

import threading
from typing import Dict, Optional

from template_qa import config
from template_qa.engine.cache import ValidationCache
from template_qa.engine.policy import PolicyScanner, load_policy_rules
from template_qa.engine.validation_engine import TemplateValidationEngine
from template_qa.logging_config import get_engine_logger

logger = get_engine_logger("tenants")

DEFAULT_TENANT = "default"


class TenantEngineRegistry:

    def __init__(self, rules_path: str = None, enable_cache: bool = None):
        self.rules_path = config.POLICY_RULES_PATH if rules_path is None else rules_path
        self.enable_cache = config.ENABLE_VALIDATION_CACHE if enable_cache is None else enable_cache
        self._engines: Dict[str, TemplateValidationEngine] = {}
        self._lock = threading.Lock()

    def _create_engine(self, tenant_id: str) -> TemplateValidationEngine:
        initial_rules = load_policy_rules(self.rules_path) if self.rules_path else None
        cache = ValidationCache() if self.enable_cache else None
        engine = TemplateValidationEngine(
            scanner=PolicyScanner(rules=initial_rules), cache=cache, tenant_id=tenant_id,
        )
        logger.info("Created validation engine for tenant %s", tenant_id,
                    extra={"tenant_id": tenant_id, "rules_version": engine.get_policy_rules().version})
        return engine

    def get_engine(self, tenant_id: Optional[str] = None) -> TemplateValidationEngine:
        tenant_id = tenant_id or DEFAULT_TENANT
        with self._lock:
            engine = self._engines.get(tenant_id)
            if engine is None:
                engine = self._create_engine(tenant_id)
                self._engines[tenant_id] = engine
            return engine

    def reset(self, tenant_id: Optional[str] = None):
        """Drop one tenant's engine, or every engine when tenant_id is None."""
        with self._lock:
            if tenant_id is None:
                self._engines.clear()
            else:
                self._engines.pop(tenant_id, None)

    def tenants(self):
        with self._lock:
            return sorted(self._engines)


registry = TenantEngineRegistry()
