"""
Classification Models
=====================

Regulatory bands, industry codes, and triggers derived from a profile.

Version: 0.1.0
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field

from shared.models.common import EngineModel


UNKNOWN_STATE = "UNKNOWN"


class EmployeeBand(str, Enum):
    """Employee count bands, smallest first."""

    NONE = "NONE"
    MICRO = "MICRO"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"

    @property
    def rank(self) -> int:
        """Ordinal position of the band."""
        return list(EmployeeBand).index(self)


class TurnoverBand(str, Enum):
    """Annual turnover bands, smallest first."""

    EXEMPT = "EXEMPT"
    MICRO = "MICRO"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"

    @property
    def rank(self) -> int:
        """Ordinal position of the band."""
        return list(TurnoverBand).index(self)


class IndustryCode(str, Enum):
    """Standardized industry codes."""

    FOOD_BEVERAGE = "FOOD_BEVERAGE"
    MANUFACTURING = "MANUFACTURING"
    RETAIL_TRADE = "RETAIL_TRADE"
    SERVICES = "SERVICES"
    CONSTRUCTION = "CONSTRUCTION"
    GENERAL = "GENERAL"


class RegulatoryTriggers(EngineModel):
    """Boolean regulatory triggers."""

    gst_required: bool = False
    fssai_required: bool = False
    epf_required: bool = False
    esi_required: bool = False
    factories_act_required: bool = False
    pollution_clearance_required: bool = False
    shops_act_required: bool = False


class Classification(EngineModel):
    """Standardized classification of a business profile."""

    employee_band: EmployeeBand
    turnover_band: TurnoverBand
    industry_code: IndustryCode
    state_code: str = UNKNOWN_STATE
    triggers: RegulatoryTriggers = Field(default_factory=RegulatoryTriggers)

    # Effective values the bands were computed from
    employee_count: int = Field(default=0, ge=0)
    annual_turnover: float = Field(default=0.0, ge=0)
    inferred_fields: tuple[str, ...] = Field(
        default=(),
        description="Which of employees/annualTurnover were inferred",
    )

    @property
    def has_known_state(self) -> bool:
        return self.state_code != UNKNOWN_STATE


class ClassificationMetadata(EngineModel):
    """Provenance of a classification."""

    classifier: str = "ClassificationService"
    version: str = "0.1.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ClassificationResult(EngineModel):
    """Classification plus metadata; compare `classification` for equality."""

    classification: Classification
    metadata: ClassificationMetadata = Field(default_factory=ClassificationMetadata)
