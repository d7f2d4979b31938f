"""
Classification Service
======================

Deterministic classification of a business profile into regulatory bands,
an industry code, a state code, and boolean regulatory triggers.

Missing employee counts and turnover are inferred from the business
scale, the stated investment, and the industry, so a profile with no
fields at all still classifies.

Band Thresholds:
- Employees: 0 NONE, 1-9 MICRO, 10-19 SMALL, 20-49 MEDIUM, 50+ LARGE
- Turnover (INR): below 40 lakh EXEMPT, then upper-inclusive MICRO,
  SMALL, MEDIUM caps, LARGE above

Version: 0.1.0
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from services.compliance_engine.errors import InvalidInputError
from services.compliance_engine.reference import ReferenceDataset, load_reference_dataset
from shared.config import EngineSettings, get_settings
from shared.logging import get_logger
from shared.models import (
    UNKNOWN_STATE,
    BusinessProfile,
    BusinessScale,
    Classification,
    ClassificationMetadata,
    ClassificationResult,
    EmployeeBand,
    IndustryCode,
    RegulatoryTriggers,
    TurnoverBand,
)


logger = get_logger(__name__)

CLASSIFIER_VERSION = "0.1.0"


# =============================================================================
# Classification Criteria
# =============================================================================


@dataclass
class ClassificationCriteria:
    """Thresholds and multipliers used for classification."""

    # Employee bands (inclusive upper bounds)
    micro_employee_max: int = 9
    small_employee_max: int = 19
    medium_employee_max: int = 49

    # Turnover bands (INR). Below the GST threshold is EXEMPT.
    gst_turnover_threshold: float = 4_000_000  # 40 lakh
    micro_turnover_max: float = 5_000_000  # 50 lakh
    small_turnover_max: float = 75_000_000
    medium_turnover_max: float = 2_500_000_000  # 250 crore

    # Labour law triggers
    epf_employee_threshold: int = 20
    esi_employee_threshold: int = 10
    factories_employee_threshold: int = 10

    # Employee inference from self-reported scale
    scale_employees: dict[BusinessScale, int] = field(
        default_factory=lambda: {
            BusinessScale.SMALL: 5,
            BusinessScale.MEDIUM: 25,
            BusinessScale.LARGE: 75,
        }
    )

    # Employee inference from investment: (exclusive upper bound, employees)
    investment_employee_bands: tuple[tuple[float, int], ...] = (
        (1_000_000, 2),  # < 10 lakh
        (5_000_000, 10),  # < 50 lakh
        (20_000_000, 30),  # < 2 crore
    )
    large_investment_employees: int = 50
    unknown_investment_employees: int = 2

    # Annual turnover as a multiple of investment
    turnover_multipliers: dict[IndustryCode, float] = field(
        default_factory=lambda: {
            IndustryCode.RETAIL_TRADE: 3.0,
            IndustryCode.FOOD_BEVERAGE: 2.5,
            IndustryCode.SERVICES: 2.0,
            IndustryCode.MANUFACTURING: 1.5,
            IndustryCode.CONSTRUCTION: 1.2,
        }
    )
    default_turnover_multiplier: float = 2.0

    # Industries registered under state Shops and Establishments Acts
    shops_act_industries: frozenset[IndustryCode] = frozenset(
        {
            IndustryCode.RETAIL_TRADE,
            IndustryCode.SERVICES,
            IndustryCode.GENERAL,
        }
    )


@dataclass(frozen=True)
class IndustryRule:
    """Keyword family for one industry code."""

    code: IndustryCode
    keywords: tuple[str, ...]

    def matches(self, business_type: str) -> bool:
        text = business_type.lower()
        return any(keyword in text for keyword in self.keywords)


# Evaluated in order; the first matching family wins ("retail food store"
# is FOOD_BEVERAGE).
INDUSTRY_RULES: tuple[IndustryRule, ...] = (
    IndustryRule(IndustryCode.FOOD_BEVERAGE, ("restaurant", "cafe", "food", "catering")),
    IndustryRule(IndustryCode.MANUFACTURING, ("manufacturing", "factory", "production", "textile")),
    IndustryRule(IndustryCode.RETAIL_TRADE, ("retail", "shop", "store", "trading")),
    IndustryRule(IndustryCode.SERVICES, ("service", "consulting", "software", "it")),
    IndustryRule(IndustryCode.CONSTRUCTION, ("construction", "building", "infrastructure")),
)


# =============================================================================
# Investment Parsing
# =============================================================================

_CURRENCY_NOISE = re.compile(r"[₹$,]")
# A number, optionally followed by a unit word ("5 lakh", "2.5crore", "50k")
_AMOUNT = re.compile(r"(\d+(?:\.\d+)?|\.\d+)(?:\s*(crores?|lakhs?|k)\b)?")

_UNIT_MULTIPLIERS: dict[str, float] = {
    "crore": 10_000_000,
    "lakh": 100_000,
    "k": 1_000,
}


def parse_amount(text: str | None) -> float | None:
    """
    Parse a free-text rupee amount.

    Args:
        text: Amount with optional unit suffix ("5 lakh", "₹2.5 crore", "50k")

    Returns:
        Amount in INR, or None when absent or no number is present
    """
    if not text:
        return None

    cleaned = _CURRENCY_NOISE.sub("", text.lower())
    match = _AMOUNT.search(cleaned)
    if match is None:
        return None

    amount = float(match.group(1))
    unit = match.group(2)
    if unit:
        return amount * _UNIT_MULTIPLIERS[unit.rstrip("s")]
    return amount


def parse_investment(text: str | None, default: float = 1_000_000) -> float:
    """Parse an investment string, falling back to `default` (10 lakh)."""
    amount = parse_amount(text)
    return default if amount is None else amount


# =============================================================================
# Profile Validation
# =============================================================================


def coerce_profile(profile: BusinessProfile | Mapping[str, Any] | None) -> BusinessProfile:
    """
    Validate caller input into a BusinessProfile.

    Raises:
        InvalidInputError: If the profile is absent or fails validation
    """
    if profile is None:
        raise InvalidInputError("Business profile is required for classification")
    if isinstance(profile, BusinessProfile):
        return profile
    if isinstance(profile, Mapping):
        try:
            return BusinessProfile.model_validate(profile)
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid business profile ({e.error_count()} field errors)"
            ) from e
    raise InvalidInputError(f"Unsupported business profile type: {type(profile).__name__}")


# =============================================================================
# Classification Service
# =============================================================================


class ClassificationService:
    """
    Service for classifying business profiles.

    Produces, as a pure function of the profile:
    - Employee band and turnover band
    - Industry code (ordered keyword families)
    - State code (directory lookup)
    - Regulatory triggers (GST, FSSAI, EPF, ESI, Factories Act,
      pollution clearance, Shops Act)
    """

    def __init__(
        self,
        criteria: ClassificationCriteria | None = None,
        dataset: ReferenceDataset | None = None,
        engine_settings: EngineSettings | None = None,
    ) -> None:
        """
        Initialize the classification service.

        Args:
            criteria: Custom thresholds (uses defaults if not provided)
            dataset: Reference dataset for the state directory
            engine_settings: Engine tunables (uses application settings)
        """
        self.criteria = criteria or ClassificationCriteria()
        self.dataset = dataset or load_reference_dataset()
        self.engine_settings = engine_settings or get_settings().engine

    def classify(self, profile: BusinessProfile | Mapping[str, Any] | None) -> Classification:
        """
        Classify a business profile.

        Args:
            profile: BusinessProfile or a mapping in its wire shape

        Returns:
            Classification with bands, codes, and triggers

        Raises:
            InvalidInputError: If the profile is absent or invalid
        """
        profile = coerce_profile(profile)

        industry_code = self.classify_industry(profile.business_type)
        inferred: list[str] = []

        employees = profile.employees
        if employees is None:
            employees = self._infer_employee_count(profile)
            inferred.append("employees")

        turnover = profile.annual_turnover
        if turnover is None:
            turnover = self._infer_turnover(profile, industry_code)
            inferred.append("annualTurnover")

        classification = Classification(
            employee_band=self.classify_employee_band(employees),
            turnover_band=self.classify_turnover_band(turnover),
            industry_code=industry_code,
            state_code=self.classify_state(profile.state),
            triggers=self._identify_triggers(employees, turnover, industry_code),
            employee_count=employees,
            annual_turnover=turnover,
            inferred_fields=tuple(inferred),
        )

        logger.info(
            "profile_classified",
            industry_code=classification.industry_code.value,
            state_code=classification.state_code,
            employee_band=classification.employee_band.value,
            turnover_band=classification.turnover_band.value,
            inferred_fields=list(classification.inferred_fields),
        )

        return classification

    def classify_with_metadata(
        self,
        profile: BusinessProfile | Mapping[str, Any] | None,
    ) -> ClassificationResult:
        """Classify and attach classifier provenance and a timestamp."""
        return ClassificationResult(
            classification=self.classify(profile),
            metadata=ClassificationMetadata(
                classifier=type(self).__name__,
                version=CLASSIFIER_VERSION,
            ),
        )

    # =========================================================================
    # Bands and Codes
    # =========================================================================

    def classify_employee_band(self, employee_count: int) -> EmployeeBand:
        """Band an employee count."""
        if employee_count <= 0:
            return EmployeeBand.NONE
        if employee_count <= self.criteria.micro_employee_max:
            return EmployeeBand.MICRO
        if employee_count <= self.criteria.small_employee_max:
            return EmployeeBand.SMALL
        if employee_count <= self.criteria.medium_employee_max:
            return EmployeeBand.MEDIUM
        return EmployeeBand.LARGE

    def classify_turnover_band(self, turnover: float) -> TurnoverBand:
        """Band an annual turnover in INR."""
        if turnover < self.criteria.gst_turnover_threshold:
            return TurnoverBand.EXEMPT
        if turnover <= self.criteria.micro_turnover_max:
            return TurnoverBand.MICRO
        if turnover <= self.criteria.small_turnover_max:
            return TurnoverBand.SMALL
        if turnover <= self.criteria.medium_turnover_max:
            return TurnoverBand.MEDIUM
        return TurnoverBand.LARGE

    def classify_industry(self, business_type: str | None) -> IndustryCode:
        """Map a free-text business type to an industry code."""
        if not business_type:
            return IndustryCode.GENERAL
        for rule in INDUSTRY_RULES:
            if rule.matches(business_type):
                return rule.code
        return IndustryCode.GENERAL

    def classify_state(self, state: str | None) -> str:
        """Map a state or city name to its code; unknown names pass through uppercased."""
        if state is None or not state.strip():
            return UNKNOWN_STATE
        code = self.dataset.lookup_state_code(state)
        return code or state.strip().upper()

    # =========================================================================
    # Inference
    # =========================================================================

    def _infer_employee_count(self, profile: BusinessProfile) -> int:
        """Infer headcount from scale, then from investment."""
        if profile.scale is not None:
            return self.criteria.scale_employees[profile.scale]

        investment = parse_amount(profile.investment)
        if investment is None:
            return self.criteria.unknown_investment_employees

        for upper_bound, employees in self.criteria.investment_employee_bands:
            if investment < upper_bound:
                return employees
        return self.criteria.large_investment_employees

    def _infer_turnover(self, profile: BusinessProfile, industry_code: IndustryCode) -> float:
        """Infer annual turnover as investment times an industry multiplier."""
        investment = parse_investment(
            profile.investment,
            default=self.engine_settings.default_investment,
        )
        multiplier = self.criteria.turnover_multipliers.get(
            industry_code,
            self.criteria.default_turnover_multiplier,
        )
        return investment * multiplier

    # =========================================================================
    # Triggers
    # =========================================================================

    def _identify_triggers(
        self,
        employees: int,
        turnover: float,
        industry_code: IndustryCode,
    ) -> RegulatoryTriggers:
        """Derive regulatory triggers from effective headcount, turnover and industry."""
        is_manufacturing = industry_code == IndustryCode.MANUFACTURING

        return RegulatoryTriggers(
            gst_required=turnover >= self.criteria.gst_turnover_threshold,
            fssai_required=industry_code == IndustryCode.FOOD_BEVERAGE,
            epf_required=employees >= self.criteria.epf_employee_threshold,
            esi_required=employees >= self.criteria.esi_employee_threshold,
            factories_act_required=(
                is_manufacturing and employees >= self.criteria.factories_employee_threshold
            ),
            pollution_clearance_required=is_manufacturing,
            shops_act_required=industry_code in self.criteria.shops_act_industries,
        )


@lru_cache
def get_classification_service() -> ClassificationService:
    """Get the shared default classification service."""
    return ClassificationService()


def classify(profile: BusinessProfile | Mapping[str, Any] | None) -> Classification:
    """Classify a profile with the default service."""
    return get_classification_service().classify(profile)
