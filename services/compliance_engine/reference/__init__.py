"""
Reference Data
==============

Central, state, business-type, and platform rule tables plus the
state directory, exposed as an immutable ReferenceDataset.
"""

from services.compliance_engine.reference.dataset import (
    BusinessTypeRuleSet,
    PlatformRuleSet,
    ReferenceDataset,
    build_reference_dataset,
    load_reference_dataset,
)

__all__ = [
    "ReferenceDataset",
    "BusinessTypeRuleSet",
    "PlatformRuleSet",
    "build_reference_dataset",
    "load_reference_dataset",
]
