"""
Business Profile Models
=======================

The loosely specified business description the engine classifies.

Version: 0.1.0
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from shared.models.common import EngineModel


class BusinessScale(str, Enum):
    """Self-reported business scale."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BusinessProfile(EngineModel):
    """
    Business profile supplied by the caller.

    Every field is optional; missing numeric fields are inferred during
    classification.
    """

    business_type: str | None = Field(
        default=None,
        description="Free-text business type (e.g., 'restaurant', 'textile factory')",
    )
    state: str | None = Field(default=None, description="State name, city, or state code")
    employees: int | None = Field(default=None, ge=0)
    annual_turnover: float | None = Field(default=None, ge=0, description="Annual turnover in INR")
    scale: BusinessScale | None = None
    investment: str | None = Field(
        default=None,
        description="Investment with unit suffix (e.g., '5 lakh', '2 crore')",
    )
    platforms: tuple[str, ...] = Field(
        default=(),
        description="Marketplaces the business sells through (e.g., 'swiggy')",
    )

    @field_validator("scale", mode="before")
    @classmethod
    def lowercase_scale(cls, v: Any) -> Any:
        """Accept scale in any case; blank means unknown."""
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("investment", mode="before")
    @classmethod
    def stringify_investment(cls, v: Any) -> Any:
        """Bare numbers are treated as rupee amounts."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("platforms", mode="before")
    @classmethod
    def split_platforms(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        return tuple(p.strip() for p in v if isinstance(p, str) and p.strip())
