"""
Result types returned by the validation engine and quality scorer.

Inputs are plain template dicts with wire key names (sampleValues,
phoneNumber, mediaHandle). Results are dataclasses; to_dict() gives the
wire shape for JSON responses.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional


@dataclass(frozen=True)
class ValidationError:
    field: str  # dotted path, e.g. components.buttons[2].text
    code: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ValidationWarning:
    field: str
    code: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[ValidationError],
                    warnings: List[ValidationWarning] = None) -> "ValidationResult":
        return cls(is_valid=len(errors) == 0, errors=list(errors),
                   warnings=list(warnings or []))

    def codes(self) -> List[str]:
        return [e.code for e in self.errors]

    def copy(self) -> "ValidationResult":
        return ValidationResult(self.is_valid, list(self.errors), list(self.warnings))

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class CategoryScore:
    category: str
    points: int
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class QualityScoreResult:
    score: int  # 0-100
    breakdown: List[CategoryScore]
    rating: str  # Excellent, Good, Fair, Poor, Very Poor

    def category(self, name: str) -> Optional[CategoryScore]:
        return next((c for c in self.breakdown if c.category == name), None)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "breakdown": [c.to_dict() for c in self.breakdown],
            "rating": self.rating,
        }
