"""
Obligation Mapping Service
==========================

Maps a classification to concrete compliance obligations.

Mapping Order:
1. Central obligations for active triggers (GST, FSSAI, EPF, ESI)
2. MSME Udyam registration (always, optional)
3. State obligations (Shops Act, Factories Act, Trade License), or a
   generic Shops Act obligation when the state has no rule bundle
4. Business-type and platform obligations when a profile is supplied

Future obligations are mapped separately: central registrations the
business will need once it crosses a threshold (GST below ₹40 lakhs).

Obligations are de-duplicated by source rule, then stably sorted
mandatory first and by shortest timeline. Every obligation is a fresh
record; reference rules are never modified.

Version: 0.1.0
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from services.compliance_engine.classifier import coerce_profile
from services.compliance_engine.conditions import evaluate
from services.compliance_engine.errors import MissingClassificationError
from services.compliance_engine.reference import ReferenceDataset, load_reference_dataset
from services.compliance_engine.timeline import sort_obligations
from shared.config import EngineSettings, get_settings
from shared.logging import get_logger
from shared.models import (
    BusinessProfile,
    Classification,
    ComplianceRule,
    IndustryCode,
    Obligation,
    ObligationSource,
    Priority,
)


logger = get_logger(__name__)


# =============================================================================
# Obligation Templates
# =============================================================================


@dataclass(frozen=True)
class ObligationTemplate:
    """How a reference rule is presented as an obligation."""

    description: str
    checklist: tuple[str, ...]
    applicable_when: str
    priority: Priority = Priority.HIGH
    obligation_id: str | None = None  # defaults to the rule id
    name: str | None = None  # defaults to the rule name


@dataclass(frozen=True)
class CentralObligation:
    """A central rule gated by one classification trigger."""

    trigger: str
    rule_key: str
    template: ObligationTemplate


CENTRAL_OBLIGATIONS: tuple[CentralObligation, ...] = (
    CentralObligation(
        trigger="gst_required",
        rule_key="GST",
        template=ObligationTemplate(
            obligation_id="GST_REGISTRATION",
            name="GST Registration",
            description="Register for Goods and Services Tax",
            checklist=(
                "Register on GST portal within 30 days of liability",
                "File monthly/quarterly returns as applicable",
                "Maintain GST-compliant invoicing",
                "Pay GST on time to avoid penalties",
            ),
            applicable_when="Annual turnover of ₹40 lakhs or more",
        ),
    ),
    CentralObligation(
        trigger="fssai_required",
        rule_key="FSSAI",
        template=ObligationTemplate(
            obligation_id="FSSAI_LICENSE",
            name="FSSAI Food License",
            description="Obtain Food Safety and Standards Authority License",
            checklist=(
                "Apply for appropriate FSSAI license category",
                "Display FSSAI license number prominently",
                "Maintain food safety standards and hygiene",
                "Renew license before expiry",
                "Keep food safety records",
            ),
            applicable_when="Food business operations",
        ),
    ),
    CentralObligation(
        trigger="epf_required",
        rule_key="EPF",
        template=ObligationTemplate(
            obligation_id="EPF_REGISTRATION",
            name="Employee Provident Fund",
            description="Register for Employee Provident Fund",
            checklist=(
                "Register establishment with EPFO",
                "Deduct 12% employee contribution from salary",
                "Contribute 12% employer share",
                "File monthly ECR returns",
                "Provide EPF facility to all eligible employees",
            ),
            applicable_when="20 or more employees",
        ),
    ),
    CentralObligation(
        trigger="esi_required",
        rule_key="ESI",
        template=ObligationTemplate(
            obligation_id="ESI_REGISTRATION",
            name="Employee State Insurance",
            description="Register for Employee State Insurance",
            checklist=(
                "Register establishment with ESIC",
                "Deduct 0.75% employee contribution",
                "Contribute 3.25% employer share",
                "Provide medical benefits to employees",
                "File half-yearly returns",
            ),
            applicable_when="10 or more employees",
        ),
    ),
)

# Presented when GST is not yet triggered
FUTURE_GST_TEMPLATE = ObligationTemplate(
    obligation_id="GST_REGISTRATION",
    name="GST Registration",
    description="Register for Goods and Services Tax once turnover reaches the threshold",
    checklist=(
        "Track annual turnover against the ₹40 lakh threshold",
        "Register on GST portal within 30 days of crossing it",
    ),
    applicable_when="When annual turnover reaches ₹40 lakhs",
    priority=Priority.MEDIUM,
)

MSME_RULE_KEY = "MSME_UDYAM"
MSME_TEMPLATE = ObligationTemplate(
    obligation_id="MSME_UDYAM",
    name="MSME Udyam Registration",
    description="Register as Micro, Small, or Medium Enterprise",
    checklist=(
        "Complete online Udyam registration",
        "Update details annually if required",
        "Maintain MSME certificate for benefits",
    ),
    applicable_when="All businesses (recommended)",
    priority=Priority.MEDIUM,
)

SHOPS_ACT_TEMPLATE = ObligationTemplate(
    description="Register under state Shops and Establishments Act",
    checklist=(
        "Submit application with required documents",
        "Pay applicable fees",
        "Display license at premises",
        "Renew before expiry",
    ),
    applicable_when="Commercial establishments",
)

FACTORIES_ACT_TEMPLATE = ObligationTemplate(
    description="Register under state Factories Act",
    checklist=(
        "Submit factory plans and layouts",
        "Obtain fire and pollution clearances",
        "Register with Factory Inspector",
        "Maintain safety compliance",
    ),
    applicable_when="Manufacturing with 10+ employees",
)

TRADE_LICENSE_TEMPLATE = ObligationTemplate(
    description="Obtain local trade license",
    checklist=(
        "Apply to local municipal authority",
        "Submit NOC from relevant departments",
        "Pay license fees",
        "Renew annually",
    ),
    applicable_when="Local business operations",
    priority=Priority.MEDIUM,
)

# Used when the state has no rule bundle
GENERIC_SHOPS_ACT_RULE = ComplianceRule(
    id="SHOPS_ACT",
    name="Shops and Establishments Act",
    category="business_registration",
    mandatory=True,
    timeline="15-30 days",
    cost=500,
)
GENERIC_SHOPS_ACT_TEMPLATE = ObligationTemplate(
    description="Register under state Shops Act",
    checklist=(
        "Apply for Shops Act license",
        "Display license at business premises",
        "Renew license annually",
        "Maintain employee records",
    ),
    applicable_when="Commercial establishments",
)

# Prerequisite labels for platform onboarding checklists
PLATFORM_PREREQUISITES: dict[str, str] = {
    "FSSAI": "FSSAI food license",
    "GST": "GST registration",
    "BANK_ACCOUNT": "business bank account",
    "PAN": "business PAN",
}


# =============================================================================
# Obligation Mapper
# =============================================================================


class ObligationMapper:
    """
    Service for mapping classifications to obligations.

    Stateless apart from the read-only reference dataset; safe to share
    across threads.
    """

    def __init__(
        self,
        dataset: ReferenceDataset | None = None,
        engine_settings: EngineSettings | None = None,
    ) -> None:
        """
        Initialize the obligation mapper.

        Args:
            dataset: Reference dataset (uses the default dataset if not provided)
            engine_settings: Engine tunables (uses application settings)
        """
        self.dataset = dataset or load_reference_dataset()
        self.engine_settings = engine_settings or get_settings().engine

    def map_obligations(
        self,
        classification: Classification | None,
        profile: BusinessProfile | None = None,
    ) -> list[Obligation]:
        """
        Map a classification to a sorted list of obligations.

        Args:
            classification: Output of the classifier
            profile: Optional profile; enables business-type and platform
                obligations

        Returns:
            De-duplicated obligations, mandatory first then by timeline

        Raises:
            MissingClassificationError: If classification is None
        """
        if classification is None:
            raise MissingClassificationError("Classification is required for obligation mapping")

        obligations: list[Obligation] = []
        obligations.extend(self._map_central(classification))
        obligations.extend(self._map_msme())
        obligations.extend(self._map_state(classification))

        if profile is not None:
            obligations.extend(self._map_business_type(classification, profile))
            obligations.extend(self._map_platforms(profile))

        result = sort_obligations(
            _deduplicate(obligations),
            self.engine_settings.unknown_timeline_days,
        )

        logger.info(
            "obligations_mapped",
            state_code=classification.state_code,
            industry_code=classification.industry_code.value,
            total=len(result),
            mandatory=sum(1 for o in result if o.mandatory),
        )

        return result

    def map_future_obligations(self, classification: Classification | None) -> list[Obligation]:
        """
        Map registrations the business does not need yet but will at scale.

        Future obligations are never mandatory and never part of the
        timeline.

        Raises:
            MissingClassificationError: If classification is None
        """
        if classification is None:
            raise MissingClassificationError("Classification is required for obligation mapping")

        if classification.triggers.gst_required:
            return []
        rule = self.dataset.central_rule("GST")
        if rule is None:
            logger.debug("rule_reference_unresolved", rule_key="GST")
            return []
        return [
            _build_obligation(rule, FUTURE_GST_TEMPLATE, ObligationSource.CENTRAL, mandatory=False)
        ]

    # =========================================================================
    # Central
    # =========================================================================

    def _map_central(self, classification: Classification) -> list[Obligation]:
        obligations = []
        for entry in CENTRAL_OBLIGATIONS:
            if not getattr(classification.triggers, entry.trigger):
                continue
            rule = self.dataset.central_rule(entry.rule_key)
            if rule is None:
                logger.debug("rule_reference_unresolved", rule_key=entry.rule_key)
                continue
            obligations.append(_build_obligation(rule, entry.template, ObligationSource.CENTRAL))
        return obligations

    def _map_msme(self) -> list[Obligation]:
        rule = self.dataset.central_rule(MSME_RULE_KEY)
        if rule is None:
            logger.debug("rule_reference_unresolved", rule_key=MSME_RULE_KEY)
            return []
        return [
            _build_obligation(rule, MSME_TEMPLATE, ObligationSource.CENTRAL, mandatory=False)
        ]

    # =========================================================================
    # State
    # =========================================================================

    def _map_state(self, classification: Classification) -> list[Obligation]:
        bundle = self.dataset.state_bundle(classification.state_code)
        needs_shop_registration = _needs_shop_registration(classification)

        if bundle is None:
            logger.debug(
                "state_bundle_missing",
                state_code=classification.state_code,
                known_state=classification.has_known_state,
            )
            if not classification.triggers.shops_act_required:
                return []
            return [
                _build_obligation(
                    GENERIC_SHOPS_ACT_RULE,
                    GENERIC_SHOPS_ACT_TEMPLATE,
                    ObligationSource.GENERIC,
                )
            ]

        obligations = []
        if needs_shop_registration and "SHOPS_ACT" in bundle:
            obligations.append(
                _build_obligation(bundle["SHOPS_ACT"], SHOPS_ACT_TEMPLATE, ObligationSource.STATE)
            )
        if classification.triggers.factories_act_required and "FACTORIES_ACT" in bundle:
            obligations.append(
                _build_obligation(
                    bundle["FACTORIES_ACT"], FACTORIES_ACT_TEMPLATE, ObligationSource.STATE
                )
            )
        if "TRADE_LICENSE" in bundle:
            obligations.append(
                _build_obligation(
                    bundle["TRADE_LICENSE"], TRADE_LICENSE_TEMPLATE, ObligationSource.STATE
                )
            )
        return obligations

    # =========================================================================
    # Business Type & Platforms
    # =========================================================================

    def _map_business_type(
        self,
        classification: Classification,
        profile: BusinessProfile,
    ) -> list[Obligation]:
        rule_set = self.dataset.business_type_rules(profile.business_type)
        if rule_set is None:
            return []

        label = profile.business_type.strip().lower()
        context: dict[str, Any] = {
            "businessType": profile.business_type,
            "employees": classification.employee_count,
            "annualTurnover": classification.annual_turnover,
            "state": classification.state_code,
        }

        required = ObligationTemplate(
            description=f"Required registration for {label} businesses",
            checklist=("Submit application with required documents", "Keep certificate current"),
            applicable_when=f"Required for {label} business",
        )
        conditional = ObligationTemplate(
            description=f"Registration some {label} businesses need",
            checklist=("Check whether your operations need this registration",),
            applicable_when="May be required based on specific operations",
            priority=Priority.MEDIUM,
        )

        obligations = []
        for keys, template, mandatory in (
            (rule_set.required, required, True),
            (rule_set.conditional, conditional, False),
        ):
            for key in keys:
                rule = self.dataset.resolve_rule(key, classification.state_code)
                if rule is None:
                    logger.debug("rule_reference_unresolved", rule_key=key, business_type=label)
                    continue
                if not evaluate(rule.applicable_if, context):
                    continue
                obligations.append(
                    _build_obligation(
                        rule,
                        template,
                        ObligationSource.BUSINESS_TYPE,
                        mandatory=mandatory,
                    )
                )
        return obligations

    def _map_platforms(self, profile: BusinessProfile) -> list[Obligation]:
        obligations = []
        for platform in profile.platforms:
            rules = self.dataset.platform_rules(platform)
            if rules is None:
                logger.debug("platform_unknown", platform=platform)
                continue

            obligation_id = f"{platform.strip().upper()}_ONBOARDING"
            checklist = tuple(
                f"Complete {PLATFORM_PREREQUISITES.get(key, key.replace('_', ' ').lower())}"
                for key in rules.mandatory
            ) + (f"Submit onboarding documents to {rules.name}",)

            obligations.append(
                Obligation(
                    id=obligation_id,
                    rule_id=obligation_id,
                    name=f"{rules.name} Platform Onboarding",
                    category="platform",
                    mandatory=False,
                    priority=Priority.MEDIUM,
                    description=f"List the business on {rules.name} (commission {rules.commission})",
                    obligations=checklist,
                    documents=rules.documents,
                    timeline=rules.timeline,
                    cost=0,
                    applicable_when=f"Selling through {rules.name}",
                    source=ObligationSource.PLATFORM,
                )
            )
        return obligations


# =============================================================================
# Helpers
# =============================================================================


def _needs_shop_registration(classification: Classification) -> bool:
    """Shops Act applies to commercial establishments, restaurants and cafes included."""
    return (
        classification.triggers.shops_act_required
        or classification.industry_code == IndustryCode.FOOD_BEVERAGE
    )


def _build_obligation(
    rule: ComplianceRule,
    template: ObligationTemplate,
    source: ObligationSource,
    mandatory: bool | None = None,
) -> Obligation:
    """Build a fresh obligation from a rule; nested rule data stays read-only."""
    return Obligation(
        id=template.obligation_id or rule.id,
        rule_id=rule.id,
        name=template.name or rule.name,
        category=rule.category,
        mandatory=rule.mandatory if mandatory is None else mandatory,
        priority=template.priority,
        description=template.description,
        obligations=template.checklist,
        documents=rule.documents,
        authority=rule.authority,
        timeline=rule.timeline,
        cost=rule.cost,
        penalties=rule.penalties,
        benefits=rule.benefits,
        applicable_when=template.applicable_when,
        source=source,
    )


def _deduplicate(obligations: list[Obligation]) -> list[Obligation]:
    """Keep the first obligation per source rule."""
    seen: set[str] = set()
    unique = []
    for obligation in obligations:
        if obligation.rule_id in seen:
            continue
        seen.add(obligation.rule_id)
        unique.append(obligation)
    return unique


@lru_cache
def get_obligation_mapper() -> ObligationMapper:
    """Get the shared default obligation mapper."""
    return ObligationMapper()


def map_obligations(
    classification: Classification | None,
    profile: BusinessProfile | Mapping[str, Any] | None = None,
) -> list[Obligation]:
    """Map a classification to obligations with the default mapper."""
    if profile is not None:
        profile = coerce_profile(profile)
    return get_obligation_mapper().map_obligations(classification, profile)


def map_future_obligations(classification: Classification | None) -> list[Obligation]:
    """Map threshold-gated future obligations with the default mapper."""
    return get_obligation_mapper().map_future_obligations(classification)
