"""
Condition Evaluator
===================

Evaluates a rule's applicability clause against a business profile.

A clause maps profile fields to constraints:
- numeric bounds ({"greaterThanOrEqual": 10}) which fail closed when the
  profile value is missing
- literal arrays (["retail", "office"]) tested for membership; business
  type is matched case-insensitively as a substring, every other field
  exactly

All keys must hold for the rule to apply. A missing clause always applies.

Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from shared.models import NumericBound


# Fields matched by keyword containment instead of equality
SUBSTRING_FIELDS = frozenset({"business_type"})


def evaluate(constraint: Mapping[str, Any] | None, profile: Any) -> bool:
    """
    Check whether a profile satisfies an applicability clause.

    Args:
        constraint: Field name -> bound or literal array, or None
        profile: BusinessProfile, object with snake_case attributes, or a
            mapping keyed by camelCase or snake_case field names

    Returns:
        True if every constraint holds (or there is no clause)
    """
    if constraint is None:
        return True

    for field, rule in constraint.items():
        value = _field_value(profile, field)
        if not _satisfies(to_snake(field), rule, value):
            return False

    return True


def _field_value(profile: Any, field: str) -> Any:
    """Read a field by its wire name or its snake_case name."""
    snake = to_snake(field)
    if profile is None:
        return None
    if isinstance(profile, Mapping):
        if field in profile:
            return profile[field]
        return profile.get(snake)
    value = getattr(profile, snake, None)
    if value is None:
        value = getattr(profile, field, None)
    return value


def _satisfies(field: str, rule: Any, value: Any) -> bool:
    if isinstance(rule, NumericBound):
        return _within_bound(rule, value)
    if isinstance(rule, Mapping):
        try:
            bound = NumericBound.model_validate(rule)
        except ValidationError:
            return False
        return _within_bound(bound, value)
    if isinstance(rule, (list, tuple, set, frozenset)):
        return _is_member(field, rule, value)
    return value == rule


def _within_bound(bound: NumericBound, value: Any) -> bool:
    # Missing or non-numeric values never satisfy a bound
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return False

    if bound.greater_than is not None and not value > bound.greater_than:
        return False
    if bound.greater_than_or_equal is not None and not value >= bound.greater_than_or_equal:
        return False
    if bound.less_than is not None and not value < bound.less_than:
        return False
    if bound.less_than_or_equal is not None and not value <= bound.less_than_or_equal:
        return False
    return True


def _is_member(field: str, allowed: Any, value: Any) -> bool:
    if value is None:
        return False

    if field in SUBSTRING_FIELDS:
        if not isinstance(value, str):
            return False
        text = value.lower()
        return any(isinstance(item, str) and item.lower() in text for item in allowed)

    return value in allowed
