"""
Timeline Models
===============

Week-by-week implementation plan, cost totals and breakdowns, and
document checklists.

Version: 0.1.0
"""

from enum import Enum

from pydantic import Field

from shared.models.common import EngineModel
from shared.models.obligation import Priority


class TimelineEntry(EngineModel):
    """One obligation scheduled into a week."""

    week: int = Field(..., ge=1)
    obligation_id: str
    cost: float = 0.0
    name: str | None = None
    timeline: str | None = None
    priority: Priority | None = None


class TimelinePlan(EngineModel):
    """Scheduled obligations and their summed cost."""

    timeline: list[TimelineEntry] = Field(default_factory=list)
    total_cost: float = 0.0

    @property
    def total_weeks(self) -> int:
        return self.timeline[-1].week if self.timeline else 0


class DurationEstimate(EngineModel):
    """Longest approval window across a set of obligations."""

    days: int = 0
    label: str = "0 weeks"


class DocumentChecklist(EngineModel):
    """Documents to gather, deduplicated and ordered by priority."""

    unique_documents: list[str] = Field(default_factory=list)
    by_obligation: dict[str, list[str]] = Field(default_factory=dict)


class CostType(str, Enum):
    """Who a compliance cost is paid to."""

    GOVERNMENT = "government"
    PROFESSIONAL = "professional"
    PLATFORM = "platform"


class CostItem(EngineModel):
    """One line of a cost breakdown."""

    name: str
    cost: float = 0.0
    type: CostType
    frequency: str = "one-time"


class CostSummary(EngineModel):
    """Costs by when they fall due."""

    immediate: float = 0.0
    annual: float = 0.0
    monthly: float = 0.0


class CostBreakdown(EngineModel):
    """Government fees plus estimated professional help for mandatory obligations."""

    government: float = 0.0
    professional: float = 0.0
    platform: float = 0.0
    recurring: float = 0.0
    one_time: float = 0.0
    details: list[CostItem] = Field(default_factory=list)
    total: float = 0.0
    summary: CostSummary = Field(default_factory=CostSummary)
