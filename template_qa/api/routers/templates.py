"""Template validation, scoring and preview routes."""

from typing import Optional

from fastapi import APIRouter, Header

from template_qa.api.schemas import TemplateDocument
from template_qa.engine.tenants import registry

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.post("/validate")
async def validate_template(template: TemplateDocument,
                            x_tenant_id: Optional[str] = Header(default=None)):
    engine = registry.get_engine(x_tenant_id)
    result = await engine.validate(template.to_template())
    return result.to_dict()


@router.post("/quality-score")
def score_template(template: TemplateDocument,
                   x_tenant_id: Optional[str] = Header(default=None)):
    engine = registry.get_engine(x_tenant_id)
    return engine.calculate_quality_score(template.to_template()).to_dict()


@router.post("/preview")
def preview_template(template: TemplateDocument,
                     x_tenant_id: Optional[str] = Header(default=None)):
    engine = registry.get_engine(x_tenant_id)
    return engine.render_preview(template.to_template())
