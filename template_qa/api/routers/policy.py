"""Policy rule routes, scoped to the tenant in X-Tenant-ID."""

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException

from template_qa.api.schemas import PolicyRulesUpdate
from template_qa.engine.tenants import registry
from template_qa.errors import PolicyRuleError

logger = logging.getLogger("template_qa.api.policy")

router = APIRouter(prefix="/api/policy-rules", tags=["policy"])


@router.get("")
def get_policy_rules(x_tenant_id: Optional[str] = Header(default=None)):
    return registry.get_engine(x_tenant_id).get_policy_rules().to_dict()


@router.put("")
def update_policy_rules(update: PolicyRulesUpdate,
                        x_tenant_id: Optional[str] = Header(default=None)):
    engine = registry.get_engine(x_tenant_id)
    try:
        rules = engine.set_policy_rules(update.to_partial())
    except PolicyRuleError as e:
        logger.warning("Rejected policy rule update: %s", e, extra={"tenant_id": engine.tenant_id})
        raise HTTPException(status_code=400, detail=str(e))
    return rules.to_dict()


@router.delete("")
def reset_policy_rules(x_tenant_id: Optional[str] = Header(default=None)):
    return registry.get_engine(x_tenant_id).reset_policy_rules().to_dict()
