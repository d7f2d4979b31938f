"""
Classification Service Tests
============================

Tests for profile classification, inference, and regulatory triggers.

Version: 0.1.0
"""

from typing import Any

import pytest

from services.compliance_engine.classifier import (
    ClassificationCriteria,
    ClassificationService,
    classify,
    coerce_profile,
    parse_amount,
    parse_investment,
)
from services.compliance_engine.errors import InvalidInputError
from shared.models import (
    UNKNOWN_STATE,
    BusinessProfile,
    EmployeeBand,
    IndustryCode,
    TurnoverBand,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def classifier() -> ClassificationService:
    """Get a classification service with default criteria."""
    return ClassificationService()


# =============================================================================
# Band Tests
# =============================================================================


class TestEmployeeBands:
    """Tests for employee band boundaries."""

    @pytest.mark.parametrize(
        "count,band",
        [
            (0, EmployeeBand.NONE),
            (1, EmployeeBand.MICRO),
            (9, EmployeeBand.MICRO),
            (10, EmployeeBand.SMALL),
            (19, EmployeeBand.SMALL),
            (20, EmployeeBand.MEDIUM),
            (49, EmployeeBand.MEDIUM),
            (50, EmployeeBand.LARGE),
            (5000, EmployeeBand.LARGE),
        ],
    )
    def test_boundaries(self, classifier: ClassificationService, count: int, band: EmployeeBand) -> None:
        """Upper bounds are inclusive."""
        assert classifier.classify_employee_band(count) == band

    def test_monotonic(self, classifier: ClassificationService) -> None:
        """More employees never yields a smaller band."""
        ranks = [classifier.classify_employee_band(n).rank for n in range(0, 120)]

        assert ranks == sorted(ranks)


class TestTurnoverBands:
    """Tests for turnover band boundaries."""

    @pytest.mark.parametrize(
        "turnover,band",
        [
            (0, TurnoverBand.EXEMPT),
            (3_999_999, TurnoverBand.EXEMPT),
            (4_000_000, TurnoverBand.MICRO),
            (5_000_000, TurnoverBand.MICRO),
            (5_000_001, TurnoverBand.SMALL),
            (6_000_000, TurnoverBand.SMALL),
            (75_000_000, TurnoverBand.SMALL),
            (75_000_001, TurnoverBand.MEDIUM),
            (2_500_000_000, TurnoverBand.MEDIUM),
            (2_500_000_001, TurnoverBand.LARGE),
        ],
    )
    def test_boundaries(
        self,
        classifier: ClassificationService,
        turnover: float,
        band: TurnoverBand,
    ) -> None:
        """EXEMPT below the GST threshold, inclusive caps above it."""
        assert classifier.classify_turnover_band(turnover) == band

    def test_monotonic(self, classifier: ClassificationService) -> None:
        """Higher turnover never yields a smaller band."""
        values = [0, 1e6, 4e6, 1e7, 5e7, 6e7, 7.5e7, 1e8, 2.5e9, 3e9]
        ranks = [classifier.classify_turnover_band(v).rank for v in values]

        assert ranks == sorted(ranks)


# =============================================================================
# Industry & State Tests
# =============================================================================


class TestIndustry:
    """Tests for industry code assignment."""

    @pytest.mark.parametrize(
        "business_type,code",
        [
            ("restaurant", IndustryCode.FOOD_BEVERAGE),
            ("Cloud Kitchen Catering", IndustryCode.FOOD_BEVERAGE),
            ("textile factory", IndustryCode.MANUFACTURING),
            ("retail", IndustryCode.RETAIL_TRADE),
            ("trading company", IndustryCode.RETAIL_TRADE),
            ("software consulting", IndustryCode.SERVICES),
            ("road construction", IndustryCode.CONSTRUCTION),
            ("astrology", IndustryCode.GENERAL),
        ],
    )
    def test_keyword_families(
        self,
        classifier: ClassificationService,
        business_type: str,
        code: IndustryCode,
    ) -> None:
        """Business types map to their keyword family."""
        assert classifier.classify_industry(business_type) == code

    def test_first_family_wins(self, classifier: ClassificationService) -> None:
        """Food keywords are checked before retail keywords."""
        assert classifier.classify_industry("retail food store") == IndustryCode.FOOD_BEVERAGE

    def test_missing_business_type_is_general(self, classifier: ClassificationService) -> None:
        """No business type falls back to GENERAL."""
        assert classifier.classify_industry(None) == IndustryCode.GENERAL
        assert classifier.classify_industry("") == IndustryCode.GENERAL


class TestState:
    """Tests for state code resolution."""

    def test_state_name_lookup(self, classifier: ClassificationService) -> None:
        """State names map to their code regardless of case."""
        assert classifier.classify_state("Karnataka") == "KA"
        assert classifier.classify_state("  TAMIL NADU ") == "TN"

    def test_city_lookup(self, classifier: ClassificationService) -> None:
        """Major cities map to their state."""
        assert classifier.classify_state("Mumbai") == "MH"
        assert classifier.classify_state("bangalore") == "KA"

    def test_unknown_name_passes_through_uppercased(self, classifier: ClassificationService) -> None:
        """Unlisted names and codes are uppercased."""
        assert classifier.classify_state("ka") == "KA"
        assert classifier.classify_state("Atlantis") == "ATLANTIS"

    def test_missing_state_is_unknown(self, classifier: ClassificationService) -> None:
        """Absent or blank state yields the UNKNOWN sentinel."""
        assert classifier.classify_state(None) == UNKNOWN_STATE
        assert classifier.classify_state("   ") == UNKNOWN_STATE


# =============================================================================
# Trigger Tests
# =============================================================================


class TestTriggers:
    """Tests for regulatory trigger derivation."""

    def test_gst_threshold(self, classifier: ClassificationService) -> None:
        """GST applies from 40 lakh turnover."""
        below = classifier.classify({"annualTurnover": 3_999_999, "employees": 1})
        at = classifier.classify({"annualTurnover": 4_000_000, "employees": 1})

        assert below.triggers.gst_required is False
        assert at.triggers.gst_required is True

    def test_labour_thresholds(self, classifier: ClassificationService) -> None:
        """ESI from 10 employees, EPF from 20."""
        nine = classifier.classify({"employees": 9, "annualTurnover": 0})
        ten = classifier.classify({"employees": 10, "annualTurnover": 0})
        twenty = classifier.classify({"employees": 20, "annualTurnover": 0})

        assert (nine.triggers.esi_required, nine.triggers.epf_required) == (False, False)
        assert (ten.triggers.esi_required, ten.triggers.epf_required) == (True, False)
        assert (twenty.triggers.esi_required, twenty.triggers.epf_required) == (True, True)

    def test_factories_act_needs_manufacturing_and_headcount(
        self, classifier: ClassificationService
    ) -> None:
        """Factories Act applies to manufacturing with 10 or more employees."""
        small_factory = classifier.classify({"businessType": "manufacturing", "employees": 9})
        factory = classifier.classify({"businessType": "manufacturing", "employees": 10})
        office = classifier.classify({"businessType": "software", "employees": 40})

        assert small_factory.triggers.factories_act_required is False
        assert small_factory.triggers.pollution_clearance_required is True
        assert factory.triggers.factories_act_required is True
        assert office.triggers.factories_act_required is False
        assert office.triggers.pollution_clearance_required is False

    def test_shops_act_industries(self, classifier: ClassificationService) -> None:
        """Shops Act covers retail, services, and general businesses."""
        for business_type in ("retail", "IT services", "astrology"):
            assert classifier.classify({"businessType": business_type}).triggers.shops_act_required

        for business_type in ("restaurant", "manufacturing", "construction"):
            assert not classifier.classify({"businessType": business_type}).triggers.shops_act_required

    def test_fssai_for_food(self, classifier: ClassificationService) -> None:
        """FSSAI applies to food and beverage businesses only."""
        assert classifier.classify({"businessType": "cafe"}).triggers.fssai_required is True
        assert classifier.classify({"businessType": "retail"}).triggers.fssai_required is False


# =============================================================================
# Inference Tests
# =============================================================================


class TestInference:
    """Tests for employee and turnover inference."""

    @pytest.mark.parametrize(
        "scale,employees",
        [("small", 5), ("Medium", 25), ("LARGE", 75)],
    )
    def test_employees_from_scale(
        self,
        classifier: ClassificationService,
        scale: str,
        employees: int,
    ) -> None:
        """Scale sets the inferred headcount."""
        classification = classifier.classify({"scale": scale})

        assert classification.employee_count == employees
        assert "employees" in classification.inferred_fields

    @pytest.mark.parametrize(
        "investment,employees",
        [
            ("5 lakh", 2),
            ("10 lakh", 10),
            ("49 lakh", 10),
            ("50 lakh", 30),
            ("1.5 crore", 30),
            ("2 crore", 50),
        ],
    )
    def test_employees_from_investment(
        self,
        classifier: ClassificationService,
        investment: str,
        employees: int,
    ) -> None:
        """Investment bands set the inferred headcount."""
        assert classifier.classify({"investment": investment}).employee_count == employees

    def test_scale_wins_over_investment(self, classifier: ClassificationService) -> None:
        """Scale is consulted before investment."""
        classification = classifier.classify({"scale": "large", "investment": "1 lakh"})

        assert classification.employee_count == 75

    def test_unknown_investment_defaults_to_micro(self, classifier: ClassificationService) -> None:
        """No scale and no parsable investment infers a micro headcount."""
        assert classifier.classify({}).employee_count == 2
        assert classifier.classify({"investment": "some savings"}).employee_count == 2

    def test_explicit_zero_employees_not_inferred(self, classifier: ClassificationService) -> None:
        """Zero is a real headcount."""
        classification = classifier.classify({"employees": 0, "scale": "large"})

        assert classification.employee_band == EmployeeBand.NONE
        assert classification.employee_count == 0
        assert "employees" not in classification.inferred_fields

    @pytest.mark.parametrize(
        "business_type,turnover",
        [
            ("retail", 6_000_000),
            ("restaurant", 5_000_000),
            ("consulting", 4_000_000),
            ("manufacturing", 3_000_000),
            ("construction", 2_400_000),
            ("astrology", 4_000_000),
        ],
    )
    def test_turnover_from_investment_and_industry(
        self,
        classifier: ClassificationService,
        business_type: str,
        turnover: float,
    ) -> None:
        """Turnover is investment times the industry multiplier."""
        classification = classifier.classify(
            {"businessType": business_type, "investment": "20 lakh", "employees": 3}
        )

        assert classification.annual_turnover == pytest.approx(turnover)
        assert classification.inferred_fields == ("annualTurnover",)

    def test_turnover_uses_default_investment(self, classifier: ClassificationService) -> None:
        """Without investment, 10 lakh is assumed."""
        classification = classifier.classify({"businessType": "manufacturing", "employees": 25})

        assert classification.annual_turnover == pytest.approx(1_500_000)
        assert classification.turnover_band == TurnoverBand.EXEMPT

    def test_explicit_values_not_inferred(
        self,
        classifier: ClassificationService,
        restaurant_profile: dict[str, Any],
    ) -> None:
        """Given fields are used as is."""
        classification = classifier.classify(restaurant_profile)

        assert classification.inferred_fields == ()
        assert classification.employee_count == 5
        assert classification.annual_turnover == 6_000_000


class TestParseInvestment:
    """Tests for free-text investment parsing."""

    @pytest.mark.parametrize(
        "text,amount",
        [
            ("5 lakh", 500_000),
            ("2.5 crore", 25_000_000),
            ("₹10,00,000", 1_000_000),
            ("50k", 50_000),
            ("750000", 750_000),
            ("Rs 3 Lakh", 300_000),
            ("5 lakhs", 500_000),
            ("1.5 crores", 15_000_000),
            ("500000 bank loan", 500_000),
            ("20k from savings", 20_000),
            ("3 kg of gold", 3),
        ],
    )
    def test_units(self, text: str, amount: float) -> None:
        """Unit suffixes scale the first number."""
        assert parse_investment(text) == pytest.approx(amount)

    def test_default_when_missing(self) -> None:
        """Missing or number-free text yields the default."""
        assert parse_investment(None) == 1_000_000
        assert parse_investment("") == 1_000_000
        assert parse_investment("not sure") == 1_000_000
        assert parse_investment("unknown", default=42) == 42

    def test_parse_amount_returns_none_without_number(self) -> None:
        """parse_amount distinguishes absent amounts."""
        assert parse_amount("lots") is None
        assert parse_amount(None) is None

    def test_unit_must_follow_number(self) -> None:
        """Unit words elsewhere in the text do not scale the amount."""
        assert parse_amount("500000 bank loan") == 500_000
        assert parse_amount("about 2 lakh, maybe 3 crore later") == 200_000


# =============================================================================
# Scenario Tests
# =============================================================================


class TestScenarios:
    """End-to-end classification scenarios."""

    def test_small_restaurant(
        self,
        classifier: ClassificationService,
        restaurant_profile: dict[str, Any],
    ) -> None:
        """Restaurant with 5 employees and 60 lakh turnover in Karnataka."""
        classification = classifier.classify(restaurant_profile)

        assert classification.industry_code == IndustryCode.FOOD_BEVERAGE
        assert classification.employee_band == EmployeeBand.MICRO
        # 60 lakh is above the 50 lakh micro cap
        assert classification.turnover_band == TurnoverBand.SMALL
        assert classification.state_code == "KA"
        assert classification.triggers.gst_required is True
        assert classification.triggers.fssai_required is True
        assert classification.triggers.epf_required is False
        assert classification.triggers.esi_required is False

    def test_manufacturing_unit(
        self,
        classifier: ClassificationService,
        manufacturing_profile: dict[str, Any],
    ) -> None:
        """Manufacturing with 25 employees and inferred turnover."""
        classification = classifier.classify(manufacturing_profile)

        assert classification.industry_code == IndustryCode.MANUFACTURING
        assert classification.employee_band == EmployeeBand.MEDIUM
        assert classification.turnover_band == TurnoverBand.EXEMPT
        assert classification.triggers.factories_act_required is True
        assert classification.triggers.pollution_clearance_required is True
        assert classification.triggers.epf_required is True
        assert classification.triggers.esi_required is True
        assert classification.triggers.gst_required is False

    def test_empty_profile(
        self,
        classifier: ClassificationService,
        empty_profile: dict[str, Any],
    ) -> None:
        """An empty profile classifies without error."""
        classification = classifier.classify(empty_profile)

        assert classification.industry_code == IndustryCode.GENERAL
        assert classification.state_code == UNKNOWN_STATE
        assert classification.employee_band == EmployeeBand.MICRO
        assert classification.turnover_band == TurnoverBand.EXEMPT
        assert classification.triggers.shops_act_required is True
        assert set(classification.inferred_fields) == {"employees", "annualTurnover"}


# =============================================================================
# Validation & Determinism Tests
# =============================================================================


class TestValidation:
    """Tests for input validation."""

    def test_none_profile_rejected(self, classifier: ClassificationService) -> None:
        """None is not a profile."""
        with pytest.raises(InvalidInputError):
            classifier.classify(None)

    def test_negative_employees_rejected(self, classifier: ClassificationService) -> None:
        """Negative headcount fails validation."""
        with pytest.raises(InvalidInputError):
            classifier.classify({"employees": -1})

    def test_unsupported_type_rejected(self) -> None:
        """Only mappings and BusinessProfile instances are accepted."""
        with pytest.raises(InvalidInputError):
            coerce_profile(["restaurant"])  # type: ignore[arg-type]

    def test_profile_model_accepted(self, classifier: ClassificationService) -> None:
        """BusinessProfile instances are used directly."""
        profile = BusinessProfile(business_type="retail", state="Delhi", employees=3)

        assert classifier.classify(profile).state_code == "DL"


class TestDeterminism:
    """Tests for classification determinism."""

    def test_same_profile_same_classification(self, restaurant_profile: dict[str, Any]) -> None:
        """Repeated classification is identical."""
        assert classify(restaurant_profile) == classify(restaurant_profile)

    def test_metadata_does_not_affect_classification(
        self,
        classifier: ClassificationService,
        restaurant_profile: dict[str, Any],
    ) -> None:
        """Metadata carries provenance beside the classification."""
        first = classifier.classify_with_metadata(restaurant_profile)
        second = classifier.classify_with_metadata(restaurant_profile)

        assert first.classification == second.classification
        assert first.metadata.classifier == "ClassificationService"

    def test_profile_not_mutated(
        self,
        classifier: ClassificationService,
        empty_profile: dict[str, Any],
    ) -> None:
        """Inference does not write back into the input."""
        classifier.classify(empty_profile)

        assert empty_profile == {}


class TestCustomCriteria:
    """Tests for custom classification criteria."""

    def test_custom_gst_threshold(self) -> None:
        """Thresholds come from the criteria object."""
        service = ClassificationService(ClassificationCriteria(gst_turnover_threshold=2_000_000))

        classification = service.classify({"annualTurnover": 2_500_000, "employees": 1})

        assert classification.triggers.gst_required is True
        assert classification.turnover_band == TurnoverBand.MICRO
