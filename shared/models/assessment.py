"""
Assessment Models
=================

End-to-end compliance assessment of one business profile, with penalty
risks, readiness and profile review.

Version: 0.1.0
"""

from enum import Enum

from pydantic import Field

from shared.models.classification import ClassificationResult
from shared.models.common import EngineModel, ReadOnlyDict
from shared.models.obligation import Obligation
from shared.models.profile import BusinessProfile
from shared.models.timeline import (
    CostBreakdown,
    DocumentChecklist,
    DurationEstimate,
    TimelinePlan,
)


class RiskLevel(str, Enum):
    """Penalty exposure of a pending obligation, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """0 for CRITICAL through 3 for LOW."""
        return list(RiskLevel).index(self)


class PenaltyRisk(EngineModel):
    """Penalties a business faces for a pending obligation."""

    obligation_id: str
    obligation_name: str
    risk_level: RiskLevel
    penalties: ReadOnlyDict[str, str]
    recommendation: str


class ReadinessScore(EngineModel):
    """Share of mandatory obligations already completed."""

    score: int = Field(default=100, ge=0, le=100)
    total_required: int = 0
    completed: int = 0
    pending: int = 0
    critical_missing: int = 0


class ProfileReview(EngineModel):
    """Missing profile fields and suggestions for a sharper assessment."""

    is_valid: bool
    missing: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ComplianceAssessment(EngineModel):
    """Everything the engine derives for a profile."""

    profile: BusinessProfile
    result: ClassificationResult
    obligations: list[Obligation] = Field(default_factory=list)
    future_obligations: list[Obligation] = Field(default_factory=list)
    plan: TimelinePlan = Field(default_factory=TimelinePlan)
    duration: DurationEstimate = Field(default_factory=DurationEstimate)
    documents: DocumentChecklist = Field(default_factory=DocumentChecklist)
    costs: CostBreakdown = Field(default_factory=CostBreakdown)
    readiness: ReadinessScore = Field(default_factory=ReadinessScore)
    penalty_risks: list[PenaltyRisk] = Field(default_factory=list)
    profile_review: ProfileReview | None = None
    recommended_platforms: list[str] = Field(default_factory=list)

    @property
    def mandatory_count(self) -> int:
        return sum(1 for o in self.obligations if o.mandatory)

    @property
    def optional_count(self) -> int:
        return len(self.obligations) - self.mandatory_count
