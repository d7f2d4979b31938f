"""
Shared Models
=============

Pydantic models shared across the compliance engine.

Models:
- Profile models (BusinessProfile, BusinessScale)
- Classification models (Classification, bands, triggers)
- Rule and obligation models (ComplianceRule, Obligation)
- Timeline models (TimelineEntry, TimelinePlan, CostBreakdown)
- Assessment models (ComplianceAssessment, PenaltyRisk, ReadinessScore)
"""

from shared.models.assessment import (
    ComplianceAssessment,
    PenaltyRisk,
    ProfileReview,
    ReadinessScore,
    RiskLevel,
)
from shared.models.classification import (
    UNKNOWN_STATE,
    Classification,
    ClassificationMetadata,
    ClassificationResult,
    EmployeeBand,
    IndustryCode,
    RegulatoryTriggers,
    TurnoverBand,
)
from shared.models.common import EngineModel, FrozenDict, ReadOnlyDict
from shared.models.obligation import (
    ComplianceRule,
    Constraint,
    Cost,
    NumericBound,
    Obligation,
    ObligationSource,
    Priority,
)
from shared.models.profile import BusinessProfile, BusinessScale
from shared.models.timeline import (
    CostBreakdown,
    CostItem,
    CostSummary,
    CostType,
    DocumentChecklist,
    DurationEstimate,
    TimelineEntry,
    TimelinePlan,
)

__all__ = [
    # Common
    "EngineModel",
    "FrozenDict",
    "ReadOnlyDict",
    # Profile
    "BusinessProfile",
    "BusinessScale",
    # Classification
    "UNKNOWN_STATE",
    "Classification",
    "ClassificationMetadata",
    "ClassificationResult",
    "EmployeeBand",
    "IndustryCode",
    "RegulatoryTriggers",
    "TurnoverBand",
    # Rules & obligations
    "ComplianceRule",
    "Constraint",
    "Cost",
    "NumericBound",
    "Obligation",
    "ObligationSource",
    "Priority",
    # Timeline
    "CostBreakdown",
    "CostItem",
    "CostSummary",
    "CostType",
    "DocumentChecklist",
    "DurationEstimate",
    "TimelineEntry",
    "TimelinePlan",
    # Assessment
    "ComplianceAssessment",
    "PenaltyRisk",
    "ProfileReview",
    "ReadinessScore",
    "RiskLevel",
]
