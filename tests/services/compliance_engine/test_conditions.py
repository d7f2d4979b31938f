"""
Condition Evaluator Tests
=========================

Tests for rule applicability clause evaluation.

Version: 0.1.0
"""

import pytest
from pydantic import ValidationError

from services.compliance_engine.conditions import evaluate
from shared.models import BusinessProfile, NumericBound


# =============================================================================
# Numeric Bounds
# =============================================================================


class TestNumericBounds:
    """Tests for numeric bound constraints."""

    def test_greater_than_or_equal_boundary(self) -> None:
        """Bound is inclusive at the threshold."""
        clause = {"employees": {"greaterThanOrEqual": 10}}

        assert evaluate(clause, {"employees": 10}) is True
        assert evaluate(clause, {"employees": 9}) is False

    def test_greater_than_is_strict(self) -> None:
        """greaterThan excludes the threshold."""
        clause = {"employees": {"greaterThan": 0}}

        assert evaluate(clause, {"employees": 1}) is True
        assert evaluate(clause, {"employees": 0}) is False

    def test_less_than_bounds(self) -> None:
        """lessThan and lessThanOrEqual bound from above."""
        assert evaluate({"employees": {"lessThan": 10}}, {"employees": 9}) is True
        assert evaluate({"employees": {"lessThan": 10}}, {"employees": 10}) is False
        assert evaluate({"employees": {"lessThanOrEqual": 10}}, {"employees": 10}) is True

    def test_all_limits_in_one_bound_must_hold(self) -> None:
        """A bound with two limits is a range."""
        clause = {"employees": {"greaterThanOrEqual": 10, "lessThan": 20}}

        assert evaluate(clause, {"employees": 15}) is True
        assert evaluate(clause, {"employees": 20}) is False
        assert evaluate(clause, {"employees": 5}) is False

    def test_missing_value_fails_closed(self) -> None:
        """Absent numeric field never satisfies a bound."""
        clause = {"annualTurnover": {"greaterThanOrEqual": 4_000_000}}

        assert evaluate(clause, {}) is False
        assert evaluate(clause, {"annualTurnover": None}) is False

    def test_non_numeric_value_fails_closed(self) -> None:
        """Strings and booleans are not numbers."""
        clause = {"employees": {"greaterThan": 0}}

        assert evaluate(clause, {"employees": "25"}) is False
        assert evaluate(clause, {"employees": True}) is False

    def test_numeric_bound_model_accepted(self) -> None:
        """Validated NumericBound instances work like raw mappings."""
        clause = {"employees": NumericBound(greater_than_or_equal=20)}

        assert evaluate(clause, {"employees": 20}) is True
        assert evaluate(clause, {"employees": 19}) is False

    @pytest.mark.parametrize(
        "bound",
        [
            {"greaterThanOrEqaul": 10},
            {},
            {"greaterThan": 0, "between": [1, 5]},
        ],
    )
    def test_bound_without_known_limit_does_not_apply(self, bound: dict) -> None:
        """Misspelled, empty, or unknown limit keys never match."""
        assert evaluate({"employees": bound}, {"employees": 1}) is False

    def test_numeric_bound_rejects_unknown_keys(self) -> None:
        """NumericBound forbids keys other than its four limits."""
        with pytest.raises(ValidationError):
            NumericBound.model_validate({"greaterThanOrEqaul": 10})

    def test_numeric_bound_requires_a_limit(self) -> None:
        """A bound with no limit set is invalid."""
        with pytest.raises(ValidationError):
            NumericBound()


# =============================================================================
# Literal Arrays
# =============================================================================


class TestLiteralArrays:
    """Tests for membership constraints."""

    def test_business_type_substring_match(self) -> None:
        """Business type matches when a listed keyword occurs in it."""
        clause = {"businessType": ["restaurant", "cafe", "food"]}

        assert evaluate(clause, {"businessType": "Fine Dining Restaurant"}) is True
        assert evaluate(clause, {"businessType": "food processing"}) is True
        assert evaluate(clause, {"businessType": "software consulting"}) is False

    def test_business_type_case_insensitive(self) -> None:
        """Keyword matching ignores case on both sides."""
        clause = {"businessType": ["Retail"]}

        assert evaluate(clause, {"businessType": "RETAIL store"}) is True

    def test_other_fields_match_exactly(self) -> None:
        """Non business-type fields use exact membership."""
        clause = {"state": ["KA", "MH"]}

        assert evaluate(clause, {"state": "KA"}) is True
        assert evaluate(clause, {"state": "KAR"}) is False
        assert evaluate(clause, {"state": "ka"}) is False

    def test_missing_value_not_a_member(self) -> None:
        """Absent field is not in any array."""
        assert evaluate({"businessType": ["retail"]}, {}) is False


# =============================================================================
# Clauses
# =============================================================================


class TestClauses:
    """Tests for whole-clause evaluation."""

    def test_missing_clause_always_applies(self) -> None:
        """None clause is satisfied by any profile."""
        assert evaluate(None, {}) is True
        assert evaluate(None, None) is True

    def test_empty_clause_applies(self) -> None:
        """A clause with no keys has nothing to fail."""
        assert evaluate({}, {"employees": 3}) is True

    def test_conjunction_of_keys(self) -> None:
        """Every key must hold."""
        clause = {
            "businessType": ["manufacturing"],
            "employees": {"greaterThanOrEqual": 10},
        }

        assert evaluate(clause, {"businessType": "manufacturing", "employees": 12}) is True
        assert evaluate(clause, {"businessType": "manufacturing", "employees": 8}) is False
        assert evaluate(clause, {"businessType": "retail", "employees": 12}) is False

    def test_reads_business_profile_attributes(self) -> None:
        """camelCase clause keys resolve against snake_case model fields."""
        profile = BusinessProfile(business_type="restaurant", annual_turnover=5_000_000)
        clause = {
            "businessType": ["restaurant"],
            "annualTurnover": {"greaterThanOrEqual": 4_000_000},
        }

        assert evaluate(clause, profile) is True

    def test_reads_snake_case_mapping_keys(self) -> None:
        """Mappings keyed by snake_case names are also accepted."""
        clause = {"annualTurnover": {"greaterThanOrEqual": 4_000_000}}

        assert evaluate(clause, {"annual_turnover": 4_000_000}) is True

    def test_malformed_bound_does_not_apply(self) -> None:
        """A bound that fails validation never matches."""
        clause = {"employees": {"greaterThan": "many"}}

        assert evaluate(clause, {"employees": 5}) is False

    def test_does_not_mutate_inputs(self) -> None:
        """Clause and profile mappings are read only."""
        clause = {"employees": {"greaterThanOrEqual": 10}}
        profile = {"employees": 12}

        evaluate(clause, profile)

        assert clause == {"employees": {"greaterThanOrEqual": 10}}
        assert profile == {"employees": 12}
