"""Request models.

Every field is optional: a missing name or body is a validation error the
engine reports, not a 422 from the schema. Shapes are typed, though, so a
button that is a bare string or a header that is not an object is rejected
before it reaches the engine.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel

SampleValue = Union[str, int, float]


class HeaderComponent(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None
    mediaHandle: Optional[str] = None


class PlaceholderExample(BaseModel):
    index: Optional[int] = None
    example: Optional[SampleValue] = None


class BodyComponent(BaseModel):
    text: Optional[str] = None
    placeholders: Optional[List[PlaceholderExample]] = None


class FooterComponent(BaseModel):
    text: Optional[str] = None


class Button(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None
    url: Optional[str] = None
    phoneNumber: Optional[str] = None


class Components(BaseModel):
    header: Optional[HeaderComponent] = None
    body: Optional[BodyComponent] = None
    footer: Optional[FooterComponent] = None
    buttons: Optional[List[Button]] = None


class TemplateDocument(BaseModel):
    name: Optional[str] = None
    displayName: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None
    components: Optional[Components] = None
    sampleValues: Optional[Dict[str, Optional[SampleValue]]] = None

    def to_template(self) -> dict:
        return self.model_dump(exclude_none=True)


class PolicyRuleEntry(BaseModel):
    pattern: Optional[str] = None
    name: Optional[str] = None


class PolicyRulesUpdate(BaseModel):
    sensitiveDataPatterns: Optional[List[PolicyRuleEntry]] = None
    spamLanguagePatterns: Optional[List[PolicyRuleEntry]] = None

    def to_partial(self) -> dict:
        return self.model_dump(exclude_none=True)
