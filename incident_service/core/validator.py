"""
Field validation for candidate incidents.

Constraints are kept in an explicit rule table mapping each field to an
ordered list of rules. The first failing rule for a field produces that
field's message; rules marked optional are skipped for empty values.
"""

from typing import Callable, Dict, List, Iterable, NamedTuple, Optional

from ..models.incidents import (
    AICategory,
    AISeverity,
    IncidentPriority,
    IncidentStatus,
    NewIncidentRequest,
)


class ValidationRule(NamedTuple):
    check: Callable[[str], bool]
    message: str
    optional: bool = False

    def violation(self, field: str, value: str) -> Optional[str]:
        if self.optional and value == "":
            return None
        if self.check(value):
            return None
        return self.message.format(field=field)


def required() -> ValidationRule:
    return ValidationRule(lambda value: value != "", "{field} is required")


def min_length(n: int) -> ValidationRule:
    return ValidationRule(
        lambda value: len(value) >= n, f"{{field}} must be at least {n} characters"
    )


def max_length(n: int) -> ValidationRule:
    return ValidationRule(
        lambda value: len(value) <= n, f"{{field}} must be at most {n} characters"
    )


def one_of(values: Iterable[str]) -> ValidationRule:
    allowed = [str(v) for v in values]
    return ValidationRule(
        lambda value: value in allowed,
        f"{{field}} must be one of: {' '.join(allowed)}",
        optional=True,
    )


def _values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


INCIDENT_RULES: Dict[str, List[ValidationRule]] = {
    "title": [required(), min_length(1), max_length(200)],
    "description": [required(), min_length(1), max_length(1000)],
    "status": [one_of(_values(IncidentStatus))],
    "priority": [one_of(_values(IncidentPriority))],
    "ai_severity": [one_of(_values(AISeverity))],
    "ai_category": [one_of(_values(AICategory))],
}


class IncidentValidator:
    """Evaluates a rule table against candidate incidents."""

    def __init__(self, rules: Optional[Dict[str, List[ValidationRule]]] = None):
        self.rules = rules if rules is not None else INCIDENT_RULES

    def validate(self, candidate: NewIncidentRequest) -> Dict[str, str]:
        """
        Check a candidate incident against the rule table.

        Args:
            candidate: The incident submitted by a caller

        Returns:
            Mapping of lower-cased field name to message; empty when valid
        """
        errors: Dict[str, str] = {}
        for field, rules in self.rules.items():
            value = getattr(candidate, field, None) or ""
            name = field.lower()
            for rule in rules:
                message = rule.violation(name, value)
                if message:
                    errors[name] = message
                    break
        return errors
