"""
Timeline & Cost Aggregation
===========================

Orders obligations, schedules them into weekly windows, and totals
their cost across flat-fee and fee-breakdown representations.

Also provides a government-vs-professional cost breakdown, the
longest-approval duration estimate and a consolidated document
checklist for a set of obligations.

Version: 0.1.0
"""

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from shared.config import get_settings
from shared.logging import get_logger
from shared.models import (
    CostBreakdown,
    CostItem,
    CostSummary,
    CostType,
    DocumentChecklist,
    DurationEstimate,
    Obligation,
    TimelineEntry,
    TimelinePlan,
)


logger = get_logger(__name__)

UNKNOWN_TIMELINE_DAYS = 999

_FIRST_NUMBER = re.compile(r"\d+")
_DAY_RANGE = re.compile(r"(\d+)(?:\s*-\s*(\d+))?\s*days?")

# Lower ranks are gathered first; unlisted documents rank last
DOCUMENT_PRIORITY: dict[str, int] = {
    "PAN Card": 1,
    "Aadhaar Card": 1,
    "Bank Statement": 2,
    "Address Proof": 2,
    "ID Proof": 2,
    "Business Registration": 3,
    "NOC from Municipality": 4,
    "NOC from Fire Department": 4,
    "Fire NOC": 4,
    "Pollution Clearance": 5,
}
_UNRANKED_DOCUMENT = 10

# Estimated one-time fees for professional help with registrations (INR)
PROFESSIONAL_SERVICE_COSTS: dict[str, float] = {
    "CA for GST": 5000,
    "Legal for registration": 3000,
    "Documentation help": 2000,
}


# =============================================================================
# Parsing & Normalization
# =============================================================================


def parse_timeline_days(timeline: str | None, default: int = UNKNOWN_TIMELINE_DAYS) -> int:
    """
    Extract a sort key in days from a free-text timeline.

    Uses the first integer in the text, so "7-15 days" sorts as 7. This
    can understate ranged timelines; `estimate_total_duration` uses the
    upper bound instead.

    Args:
        timeline: Timeline text (e.g., "30 days", "15-30 days")
        default: Value for absent or number-free text

    Returns:
        Days used for ordering
    """
    if not timeline:
        return default
    match = _FIRST_NUMBER.search(timeline)
    return int(match.group()) if match else default


def normalize_cost(cost: Any) -> float:
    """
    Reduce a rule cost to a single rupee amount.

    A number is used as is. A breakdown mapping uses its `basic` fee when
    present, else its first defined value. Anything else (free text such
    as "Varies by state", None) counts as zero.
    """
    if _is_number(cost):
        return float(cost)
    if isinstance(cost, Mapping):
        basic = cost.get("basic")
        if _is_number(basic):
            return float(basic)
        for value in cost.values():
            if _is_number(value):
                return float(value)
    return 0.0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def obligation_sort_key(
    obligation: Obligation,
    unknown_days: int = UNKNOWN_TIMELINE_DAYS,
) -> tuple[bool, int]:
    """Mandatory first, then shortest timeline."""
    return (not obligation.mandatory, parse_timeline_days(obligation.timeline, unknown_days))


def sort_obligations(
    obligations: Iterable[Obligation],
    unknown_days: int = UNKNOWN_TIMELINE_DAYS,
) -> list[Obligation]:
    """Stable sort; equal keys keep their input order."""
    return sorted(obligations, key=lambda o: obligation_sort_key(o, unknown_days))


# =============================================================================
# Timeline
# =============================================================================


def build_timeline(
    obligations: Sequence[Obligation],
    per_week: int | None = None,
) -> TimelinePlan:
    """
    Schedule obligations into weekly windows and total their cost.

    Args:
        obligations: Obligations to schedule (not modified)
        per_week: Obligations per week (defaults to engine settings, 2)

    Returns:
        TimelinePlan with 1-indexed weeks and the summed normalized cost
    """
    engine = get_settings().engine
    per_week = per_week or engine.obligations_per_week

    ordered = sort_obligations(obligations, engine.unknown_timeline_days)

    entries = [
        TimelineEntry(
            week=index // per_week + 1,
            obligation_id=obligation.id,
            cost=normalize_cost(obligation.cost),
            name=obligation.name,
            timeline=obligation.timeline,
            priority=obligation.priority,
        )
        for index, obligation in enumerate(ordered)
    ]
    total_cost = sum(entry.cost for entry in entries)

    logger.info(
        "timeline_built",
        entries=len(entries),
        weeks=entries[-1].week if entries else 0,
        total_cost=total_cost,
    )

    return TimelinePlan(timeline=entries, total_cost=total_cost)


def estimate_total_duration(obligations: Iterable[Obligation]) -> DurationEstimate:
    """
    Estimate how long the slowest approval takes.

    Takes the upper bound of each "N days" or "N-M days" timeline and
    reports the maximum as weeks (up to 30 days) or months.
    """
    max_days = 0
    for obligation in obligations:
        if not obligation.timeline:
            continue
        match = _DAY_RANGE.search(obligation.timeline.lower())
        if match:
            days = int(match.group(2) or match.group(1))
            max_days = max(max_days, days)

    if max_days <= 30:
        label = f"{math.ceil(max_days / 7)} weeks"
    else:
        label = f"{math.ceil(max_days / 30)} months"

    return DurationEstimate(days=max_days, label=label)


# =============================================================================
# Cost Breakdown
# =============================================================================


def build_cost_breakdown(
    obligations: Iterable[Obligation],
    professional_costs: Mapping[str, float] = PROFESSIONAL_SERVICE_COSTS,
) -> CostBreakdown:
    """
    Split the cost of mandatory obligations by who is paid.

    Government fees are the normalized cost of each mandatory obligation;
    professional fees are fixed estimates added once per breakdown. All
    fees are one-time, so nothing recurs monthly.

    Args:
        obligations: Obligations to cost (optional ones are skipped)
        professional_costs: Professional service name -> one-time fee

    Returns:
        CostBreakdown with per-item details and immediate/annual/monthly summary
    """
    details = [
        CostItem(name=o.name, cost=normalize_cost(o.cost), type=CostType.GOVERNMENT)
        for o in obligations
        if o.mandatory
    ]
    details.extend(
        CostItem(name=service, cost=cost, type=CostType.PROFESSIONAL)
        for service, cost in professional_costs.items()
    )

    government = sum(item.cost for item in details if item.type == CostType.GOVERNMENT)
    professional = sum(item.cost for item in details if item.type == CostType.PROFESSIONAL)
    one_time = government + professional
    recurring = 0.0

    return CostBreakdown(
        government=government,
        professional=professional,
        recurring=recurring,
        one_time=one_time,
        details=details,
        total=one_time + recurring * 12,
        summary=CostSummary(immediate=one_time, annual=recurring * 12, monthly=recurring),
    )


# =============================================================================
# Documents
# =============================================================================


def build_document_checklist(obligations: Iterable[Obligation]) -> DocumentChecklist:
    """
    Consolidate the documents needed across obligations.

    Unique documents are ordered by DOCUMENT_PRIORITY, ties keeping the
    order in which they first appear.
    """
    seen: dict[str, int] = {}
    by_obligation: dict[str, list[str]] = {}

    for obligation in obligations:
        if not obligation.documents:
            continue
        by_obligation[obligation.id] = list(obligation.documents)
        for document in obligation.documents:
            seen.setdefault(document, len(seen))

    unique = sorted(
        seen,
        key=lambda doc: (DOCUMENT_PRIORITY.get(doc, _UNRANKED_DOCUMENT), seen[doc]),
    )

    return DocumentChecklist(unique_documents=unique, by_obligation=by_obligation)
