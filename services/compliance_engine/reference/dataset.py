"""
Reference Dataset
=================

Immutable, validated view over the regulatory reference tables.

The dataset is loaded once per process and shared by every request.
Accessors hand out frozen rule models and read-only mapping views;
nothing in the engine mutates it after load.

Version: 0.1.0
"""

from collections.abc import Mapping
from functools import lru_cache
from pydantic import Field

from services.compliance_engine.reference import tables
from shared.config import get_settings
from shared.logging import get_logger
from shared.models import ComplianceRule, EngineModel, FrozenDict, ReadOnlyDict


logger = get_logger(__name__)


class BusinessTypeRuleSet(EngineModel):
    """Rules referenced for one business type."""

    required: tuple[str, ...] = ()
    conditional: tuple[str, ...] = ()


class PlatformRuleSet(EngineModel):
    """Onboarding requirements of one selling platform."""

    name: str
    type: str | None = None
    mandatory: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    documents: tuple[str, ...] = ()
    commission: str | None = None
    timeline: str | None = None


class ReferenceDataset(EngineModel):
    """
    Versioned regulatory reference data.

    Tables are keyed the same way as the published data: central rules by
    rule key, state rules by state code then rule key, business-type and
    platform rule sets by lowercase name.
    """

    version: str = tables.DATASET_VERSION
    central: ReadOnlyDict[str, ComplianceRule] = Field(default_factory=FrozenDict)
    state_specific: ReadOnlyDict[str, ReadOnlyDict[str, ComplianceRule]] = Field(
        default_factory=FrozenDict
    )
    business_type_specific: ReadOnlyDict[str, BusinessTypeRuleSet] = Field(
        default_factory=FrozenDict
    )
    platform_specific: ReadOnlyDict[str, PlatformRuleSet] = Field(default_factory=FrozenDict)
    state_directory: ReadOnlyDict[str, str] = Field(default_factory=FrozenDict)

    # =========================================================================
    # Lookups
    # =========================================================================

    def central_rule(self, key: str) -> ComplianceRule | None:
        """Get a central rule by key (e.g., 'GST')."""
        return self.central.get(key)

    def state_bundle(self, state_code: str | None) -> Mapping[str, ComplianceRule] | None:
        """Get a state's read-only rule bundle, or None if unmapped."""
        if not state_code:
            return None
        return self.state_specific.get(state_code)

    def business_type_rules(self, business_type: str | None) -> BusinessTypeRuleSet | None:
        """Get the rule set for a business type ('IT services' -> 'it_services')."""
        if not business_type:
            return None
        key = "_".join(business_type.strip().lower().replace("-", " ").split())
        return self.business_type_specific.get(key)

    def platform_rules(self, platform: str) -> PlatformRuleSet | None:
        """Get onboarding rules for a platform by name."""
        return self.platform_specific.get(platform.strip().lower())

    def lookup_state_code(self, name: str) -> str | None:
        """Map a state or city name to its code, None if not in the directory."""
        return self.state_directory.get(name.strip().lower())

    def find_rule(self, rule_id: str) -> ComplianceRule | None:
        """Find a rule by its `id`, searching central then state tables."""
        for rule in self.central.values():
            if rule.id == rule_id:
                return rule
        for bundle in self.state_specific.values():
            for rule in bundle.values():
                if rule.id == rule_id:
                    return rule
        return None

    def resolve_rule(self, key: str, state_code: str | None = None) -> ComplianceRule | None:
        """
        Resolve a rule reference as used by business-type rule sets.

        Central keys win, then the given state's bundle ('SHOPS_ACT' in KA
        resolves to KA_SHOPS_ACT), then a global search by rule id.
        """
        rule = self.central_rule(key)
        if rule is not None:
            return rule
        bundle = self.state_bundle(state_code)
        if bundle is not None and key in bundle:
            return bundle[key]
        return self.find_rule(key)


def build_reference_dataset(
    central: Mapping[str, object] = tables.CENTRAL_RULES,
    state_specific: Mapping[str, object] = tables.STATE_RULES,
    business_type_specific: Mapping[str, object] = tables.BUSINESS_TYPE_RULES,
    platform_specific: Mapping[str, object] = tables.PLATFORM_RULES,
    state_directory: Mapping[str, str] = tables.STATE_DIRECTORY,
    version: str = tables.DATASET_VERSION,
) -> ReferenceDataset:
    """
    Validate raw tables into a ReferenceDataset.

    Args:
        central: Central rules keyed by rule key
        state_specific: State rule bundles keyed by state code
        business_type_specific: Business-type rule sets
        platform_specific: Platform rule sets
        state_directory: Lowercase state/city name to state code
        version: Dataset version label

    Returns:
        ReferenceDataset built from deep copies of the inputs
    """
    dataset = ReferenceDataset.model_validate(
        {
            "version": version,
            "central": central,
            "stateSpecific": state_specific,
            "businessTypeSpecific": business_type_specific,
            "platformSpecific": platform_specific,
            "stateDirectory": {k.strip().lower(): v for k, v in state_directory.items()},
        }
    )

    logger.debug(
        "reference_dataset_loaded",
        version=dataset.version,
        central_rules=len(dataset.central),
        states=len(dataset.state_specific),
        business_types=len(dataset.business_type_specific),
        platforms=len(dataset.platform_specific),
    )

    return dataset


@lru_cache
def load_reference_dataset() -> ReferenceDataset:
    """
    Get the cached default dataset.

    Returns:
        ReferenceDataset: Process-wide read-only dataset, labelled with the
        configured dataset version.
    """
    return build_reference_dataset(version=get_settings().engine.dataset_version)
