"""
Compliance Assessment Service
=============================

Runs the full engine pipeline for one business profile:
classification, obligation mapping, weekly timeline, duration estimate,
cost breakdown and the consolidated document checklist.

On top of the plan it scores how far along the business is:
- Penalty risks of pending obligations, most severe first
- Readiness score over mandatory obligations
- Profile review (missing fields, suggestions)
- Recommended selling platforms

Version: 0.1.0
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from services.compliance_engine.classifier import ClassificationService, coerce_profile
from services.compliance_engine.obligations import ObligationMapper
from services.compliance_engine.reference import ReferenceDataset, load_reference_dataset
from services.compliance_engine.timeline import (
    build_cost_breakdown,
    build_document_checklist,
    build_timeline,
    estimate_total_duration,
)
from shared.config import EngineSettings, get_settings
from shared.logging import get_logger
from shared.models import (
    BusinessProfile,
    Classification,
    ComplianceAssessment,
    Obligation,
    ObligationSource,
    PenaltyRisk,
    Priority,
    ProfileReview,
    ReadinessScore,
    RiskLevel,
)


logger = get_logger(__name__)


# =============================================================================
# Risk & Recommendation Tables
# =============================================================================

# Monthly revenue above which missing GST is a high risk (INR)
GST_HIGH_RISK_MONTHLY_REVENUE = 300_000

# Headcount above which missing labour registrations are a high risk
LABOUR_HIGH_RISK_EMPLOYEES = 10

RISK_RECOMMENDATIONS: dict[str, str] = {
    "FSSAI": "Apply immediately - food businesses cannot operate without FSSAI license",
    "GST": "Register before crossing ₹40L turnover to avoid penalties",
    "EPF": "Register within 30 days of hiring 20th employee",
    "ESI": "Register within 15 days of hiring 10th employee",
}
DEFAULT_RISK_RECOMMENDATION = "Complete this compliance to avoid legal issues"

# Profile fields an assessment cannot do without (wire names)
REQUIRED_PROFILE_FIELDS: tuple[str, ...] = ("businessType", "state")

# Evaluated in order; the first matching keyword family wins
PLATFORM_RECOMMENDATIONS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("cafe", "restaurant", "food"), ("swiggy", "zomato")),
    (("retail", "manufacturing", "textile"), ("amazon", "flipkart")),
)
DEFAULT_PLATFORMS: tuple[str, ...] = ("amazon",)


# =============================================================================
# Penalty Risk
# =============================================================================


def assess_risk_level(obligation: Obligation, classification: Classification) -> RiskLevel:
    """
    Rate the penalty exposure of leaving an obligation pending.

    - FSSAI for a food business is CRITICAL
    - GST with monthly revenue above ₹3 lakh is HIGH
    - EPF or ESI with more than 10 employees is HIGH
    - Any other state obligation is MEDIUM
    - Everything else is LOW
    """
    if obligation.rule_id == "FSSAI" and classification.triggers.fssai_required:
        return RiskLevel.CRITICAL
    if (
        obligation.rule_id == "GST"
        and classification.annual_turnover / 12 > GST_HIGH_RISK_MONTHLY_REVENUE
    ):
        return RiskLevel.HIGH
    if (
        obligation.rule_id in ("EPF", "ESI")
        and classification.employee_count > LABOUR_HIGH_RISK_EMPLOYEES
    ):
        return RiskLevel.HIGH
    if obligation.source == ObligationSource.STATE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def assess_penalty_risks(
    obligations: Iterable[Obligation],
    classification: Classification,
    completed: Iterable[str] = (),
) -> list[PenaltyRisk]:
    """
    List the penalty risks of pending obligations that carry penalties.

    Args:
        obligations: Mapped obligations
        classification: Classification the obligations were mapped from
        completed: Obligation or rule ids already done

    Returns:
        Risks ordered CRITICAL to LOW, ties keeping obligation order
    """
    done = set(completed)
    risks = [
        PenaltyRisk(
            obligation_id=obligation.id,
            obligation_name=obligation.name,
            risk_level=assess_risk_level(obligation, classification),
            penalties=obligation.penalties,
            recommendation=RISK_RECOMMENDATIONS.get(
                obligation.rule_id, DEFAULT_RISK_RECOMMENDATION
            ),
        )
        for obligation in obligations
        if obligation.penalties and not _is_completed(obligation, done)
    ]
    return sorted(risks, key=lambda risk: risk.risk_level.rank)


# =============================================================================
# Readiness
# =============================================================================


def readiness_score(
    obligations: Iterable[Obligation],
    completed: Iterable[str] = (),
) -> ReadinessScore:
    """
    Score completion of mandatory obligations from 0 to 100.

    A business with no mandatory obligations scores 100. Pending HIGH
    priority obligations count as critical.

    Args:
        obligations: Mapped obligations
        completed: Obligation or rule ids already done
    """
    done = set(completed)
    mandatory = [o for o in obligations if o.mandatory]
    finished = [o for o in mandatory if _is_completed(o, done)]
    pending = [o for o in mandatory if not _is_completed(o, done)]

    total = len(mandatory)
    # Half-up, so 2 of 3 scores 67 and 1 of 8 scores 13
    score = math.floor(len(finished) / total * 100 + 0.5) if total else 100

    return ReadinessScore(
        score=score,
        total_required=total,
        completed=len(finished),
        pending=len(pending),
        critical_missing=sum(1 for o in pending if o.priority == Priority.HIGH),
    )


def _is_completed(obligation: Obligation, done: set[str]) -> bool:
    return obligation.id in done or obligation.rule_id in done


# =============================================================================
# Profile Review & Platforms
# =============================================================================


def review_profile(profile: BusinessProfile | Mapping[str, Any] | None) -> ProfileReview:
    """
    Check a profile for missing fields and suggest what to add.

    Raises:
        InvalidInputError: If the profile is absent or invalid
    """
    profile = coerce_profile(profile)
    data = profile.model_dump(by_alias=True)

    missing = [field for field in REQUIRED_PROFILE_FIELDS if not data.get(field)]

    suggestions = []
    if profile.annual_turnover is None:
        suggestions.append("Add expected annual turnover for better compliance recommendations")
    if profile.employees is None:
        suggestions.append("Specify number of employees for labor law compliance")
    if profile.scale is None and profile.investment is None:
        suggestions.append("Specify business scale or investment to size the business")

    return ProfileReview(is_valid=not missing, missing=missing, suggestions=suggestions)


def recommend_platforms(profile: BusinessProfile | Mapping[str, Any] | None) -> list[str]:
    """
    Recommend selling platforms for a business.

    Platforms named in the profile win; otherwise the business type picks
    a keyword family (food delivery or marketplaces), defaulting to Amazon.

    Raises:
        InvalidInputError: If the profile is absent or invalid
    """
    profile = coerce_profile(profile)
    if profile.platforms:
        return [platform.strip().lower() for platform in profile.platforms]

    business_type = (profile.business_type or "").lower()
    for keywords, platforms in PLATFORM_RECOMMENDATIONS:
        if any(keyword in business_type for keyword in keywords):
            return list(platforms)
    return list(DEFAULT_PLATFORMS)


# =============================================================================
# Assessment Service
# =============================================================================


class ComplianceAssessmentService:
    """
    Service composing the classifier, the mapper and the timeline builder.

    Holds no per-request state; one instance can serve concurrent callers.
    """

    def __init__(
        self,
        dataset: ReferenceDataset | None = None,
        engine_settings: EngineSettings | None = None,
        classifier: ClassificationService | None = None,
        mapper: ObligationMapper | None = None,
    ) -> None:
        self.dataset = dataset or load_reference_dataset()
        self.engine_settings = engine_settings or get_settings().engine
        self.classifier = classifier or ClassificationService(
            dataset=self.dataset,
            engine_settings=self.engine_settings,
        )
        self.mapper = mapper or ObligationMapper(
            dataset=self.dataset,
            engine_settings=self.engine_settings,
        )

    def assess(
        self,
        profile: BusinessProfile | Mapping[str, Any] | None,
        completed: Iterable[str] = (),
    ) -> ComplianceAssessment:
        """
        Assess a business profile end to end.

        Args:
            profile: BusinessProfile or a mapping in its wire shape
            completed: Obligation or rule ids the business has already done

        Returns:
            ComplianceAssessment with classification, obligations, plan,
            costs, readiness and penalty risks

        Raises:
            InvalidInputError: If the profile is absent or invalid
        """
        profile = coerce_profile(profile)
        completed = tuple(completed)

        result = self.classifier.classify_with_metadata(profile)
        classification = result.classification
        obligations = self.mapper.map_obligations(classification, profile)
        plan = build_timeline(obligations, per_week=self.engine_settings.obligations_per_week)

        assessment = ComplianceAssessment(
            profile=profile,
            result=result,
            obligations=obligations,
            future_obligations=self.mapper.map_future_obligations(classification),
            plan=plan,
            duration=estimate_total_duration(obligations),
            documents=build_document_checklist(obligations),
            costs=build_cost_breakdown(obligations),
            readiness=readiness_score(obligations, completed),
            penalty_risks=assess_penalty_risks(obligations, classification, completed),
            profile_review=review_profile(profile),
            recommended_platforms=recommend_platforms(profile),
        )

        logger.info(
            "assessment_completed",
            state_code=classification.state_code,
            obligations=len(obligations),
            mandatory=assessment.mandatory_count,
            total_cost=plan.total_cost,
            total_weeks=plan.total_weeks,
            readiness=assessment.readiness.score,
            penalty_risks=len(assessment.penalty_risks),
        )

        return assessment


def assess(
    profile: BusinessProfile | Mapping[str, Any] | None,
    completed: Iterable[str] = (),
) -> ComplianceAssessment:
    """Assess a profile with a default service."""
    return ComplianceAssessmentService().assess(profile, completed)
