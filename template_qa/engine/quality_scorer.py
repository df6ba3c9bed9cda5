"""
Template Quality Scorer - advisory 0-100 score with a four-category breakdown.

Score = 100 + sum of category points, clamped to 0-100. Categories, in order:
1. Body Length             (+5 .. -15)
2. Component Completeness  (0 .. +13)
3. Placeholder Usage       (0 .. -10)
4. Policy Compliance       (spam -15 each, max -30; sensitive -20 each, max -40)

Independent of validation: an invalid template still gets a score.
Each category is a pure function over its slice of the template.
"""

from typing import List, Optional

from template_qa.engine import constants as c
from template_qa.engine.models import CategoryScore, QualityScoreResult
from template_qa.engine.placeholders import unique_placeholders
from template_qa.engine.policy import PolicyScanner, text_fields

BASE_SCORE = 100

# (max length inclusive, points, message, suggestion); None = no upper bound
BODY_LENGTH_BANDS = [
    (49, -10, "Body text is too short",
     "Add more context to make your message clearer (aim for 50-500 characters)"),
    (500, 5, "Body text length is optimal", None),
    (800, 0, "Body text length is acceptable", None),
    (1000, -10, "Body text is quite long",
     "Consider making your message more concise (aim for 50-500 characters)"),
    (None, -15, "Body text is excessively long",
     "Significantly reduce text length for better readability (aim for 50-500 characters)"),
]

# (component, points)
COMPLETENESS_POINTS = [
    ("footer", 5),
    ("description", 5),
    ("header", 3),
]

# (max count inclusive, points, message template, suggestion)
PLACEHOLDER_BANDS = [
    (0, 0, "Template has no placeholders", None),
    (3, 0, "Template has {count} placeholder{plural} (optimal range)", None),
    (5, -5, "Template has many placeholders ({count})",
     "Consider reducing placeholders to 3 or fewer for better readability"),
    (None, -10, "Template has excessive placeholders ({count})",
     "Reduce the number of placeholders to 5 or fewer. Too many variables make templates "
     "harder to manage and may confuse recipients"),
]

SPAM_POINTS_PER_MATCH = -15
SPAM_PENALTY_CAP = -30
SENSITIVE_POINTS_PER_MATCH = -20
SENSITIVE_PENALTY_CAP = -40

# (minimum score, rating), highest first
RATING_BANDS = [
    (90, "Excellent"),
    (75, "Good"),
    (60, "Fair"),
    (40, "Poor"),
    (0, "Very Poor"),
]

_default_scanner = None


def _scanner() -> PolicyScanner:
    global _default_scanner
    if _default_scanner is None:
        _default_scanner = PolicyScanner()
    return _default_scanner


def _body_text(template: dict) -> str:
    components = (template or {}).get("components") or {}
    return ((components.get("body") or {}).get("text")) or ""


def score_body_length(length: int) -> CategoryScore:
    for upper, points, message, suggestion in BODY_LENGTH_BANDS:
        if upper is None or length <= upper:
            return CategoryScore("Body Length", points, message, suggestion)


def present_components(template: dict) -> List[str]:
    """Which of footer, description, header the template carries."""
    template = template or {}
    components = template.get("components") or {}
    present = []
    if (components.get("footer") or {}).get("text"):
        present.append("footer")
    if (template.get("description") or "").strip():
        present.append("description")
    header = components.get("header") or {}
    if header and header.get("type", c.HEADER_TEXT) != c.HEADER_NONE:
        present.append("header")
    return present


def score_component_completeness(present: List[str]) -> CategoryScore:
    points = sum(p for name, p in COMPLETENESS_POINTS if name in present)
    missing = [name for name, _ in COMPLETENESS_POINTS if name not in present]

    if not missing:
        return CategoryScore("Component Completeness", points,
                             "Template has all recommended components")
    if not present:
        return CategoryScore("Component Completeness", 0,
                             f"Template is missing all recommended components ({', '.join(missing)})",
                             f"Add {', '.join(missing)} to improve template quality and user experience")
    return CategoryScore("Component Completeness", points,
                         f"Template has {', '.join(present)} but is missing {', '.join(missing)}",
                         f"Consider adding: {', '.join(missing)} for better completeness")


def score_placeholder_usage(count: int) -> CategoryScore:
    for upper, points, message, suggestion in PLACEHOLDER_BANDS:
        if upper is None or count <= upper:
            return CategoryScore("Placeholder Usage", points,
                                 message.format(count=count, plural="s" if count > 1 else ""),
                                 suggestion)


def score_policy_compliance(spam_matches: List[str], sensitive_matches: List[str]) -> CategoryScore:
    points = 0
    issues = []
    suggestions = []

    if spam_matches:
        points += max(SPAM_POINTS_PER_MATCH * len(spam_matches), SPAM_PENALTY_CAP)
        shown = ", ".join(spam_matches[:3]) + ("..." if len(spam_matches) > 3 else "")
        issues.append(f"spam language detected ({shown})")
        suggestions.append('Remove urgency tactics and pressure language like "buy now", '
                           '"limited time", "act fast"')

    if sensitive_matches:
        points += max(SENSITIVE_POINTS_PER_MATCH * len(sensitive_matches), SENSITIVE_PENALTY_CAP)
        issues.append(f"sensitive data requests ({', '.join(sensitive_matches)})")
        suggestions.append("Never request sensitive information like credit cards, passwords, "
                           "or SSN in templates")

    if not issues:
        return CategoryScore("Policy Compliance", 0,
                             "No spam indicators or policy violations detected")
    return CategoryScore("Policy Compliance", points,
                         f"Quality issues found: {'; '.join(issues)}",
                         ". ".join(suggestions))


def get_quality_rating(score: int) -> str:
    for minimum, rating in RATING_BANDS:
        if score >= minimum:
            return rating
    return RATING_BANDS[-1][1]


def calculate_quality_score(template: dict, scanner: Optional[PolicyScanner] = None) -> QualityScoreResult:
    """Score a template document. Uses the given scanner's rules, or the defaults."""
    scanner = scanner or _scanner()
    rules = scanner.get_policy_rules()
    body_text = _body_text(template)

    # Distinct rule names across header, body, footer and buttons
    spam, sensitive = [], []
    for _, text in text_fields(template):
        for name in scanner.detect_spam_language(text, rules):
            if name not in spam:
                spam.append(name)
        for name in scanner.detect_sensitive_data(text, rules):
            if name not in sensitive:
                sensitive.append(name)

    breakdown = [
        score_body_length(len(body_text)),
        score_component_completeness(present_components(template)),
        score_placeholder_usage(len(unique_placeholders(body_text))),
        score_policy_compliance(spam, sensitive),
    ]

    score = BASE_SCORE + sum(b.points for b in breakdown)
    score = max(0, min(100, score))
    return QualityScoreResult(score=score, breakdown=breakdown, rating=get_quality_rating(score))
