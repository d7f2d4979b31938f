"""
Compliance Rule & Obligation Models
===================================

Reference rules (read-only templates) and the obligations resolved from them.

Version: 0.1.0
"""

from enum import Enum
from typing import Self

from pydantic import ConfigDict, Field, model_validator

from shared.models.common import EngineModel, ReadOnlyDict


# A rule cost is a flat fee, a named fee breakdown (e.g. basic/state/central),
# or free text such as "Varies by state".
Cost = float | ReadOnlyDict[str, float | None] | str | None


class Priority(str, Enum):
    """Obligation priority."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class ObligationSource(str, Enum):
    """Rule table an obligation was resolved from."""

    CENTRAL = "central"
    STATE = "state"
    BUSINESS_TYPE = "business_type"
    PLATFORM = "platform"
    GENERIC = "generic"


class NumericBound(EngineModel):
    """Numeric applicability bound; every set limit must hold."""

    model_config = ConfigDict(extra="forbid")

    greater_than: float | None = None
    greater_than_or_equal: float | None = None
    less_than: float | None = None
    less_than_or_equal: float | None = None

    @model_validator(mode="after")
    def require_limit(self) -> Self:
        """An empty bound would match every number."""
        if all(
            limit is None
            for limit in (
                self.greater_than,
                self.greater_than_or_equal,
                self.less_than,
                self.less_than_or_equal,
            )
        ):
            raise ValueError("numeric bound needs at least one limit")
        return self


Constraint = NumericBound | tuple[str, ...]


class ComplianceRule(EngineModel):
    """A regulatory rule from the reference dataset."""

    id: str
    name: str
    category: str
    mandatory: bool = True
    applicable_if: ReadOnlyDict[str, Constraint] | None = None
    documents: tuple[str, ...] = ()
    authority: str | None = None
    validity: str | None = None
    cost: Cost = None
    timeline: str | None = None
    penalties: ReadOnlyDict[str, str] | None = None
    benefits: tuple[str, ...] = ()


class Obligation(EngineModel):
    """A compliance obligation resolved for one business."""

    id: str = Field(..., description="Obligation ID (e.g., GST_REGISTRATION, KA_SHOPS_ACT)")
    rule_id: str = Field(..., description="ID of the reference rule it was built from")
    name: str
    category: str
    mandatory: bool
    priority: Priority
    description: str | None = None
    obligations: tuple[str, ...] = Field(default=(), description="Concrete checklist")
    documents: tuple[str, ...] = ()
    authority: str | None = None
    timeline: str | None = None
    cost: Cost = None
    penalties: ReadOnlyDict[str, str] | None = None
    benefits: tuple[str, ...] = ()
    applicable_when: str = ""
    source: ObligationSource = ObligationSource.CENTRAL
