"""
Compliance Engine
=================

Deterministic compliance engine for Indian MSMEs.

Features:
- Reference dataset of central, state, business-type and platform rules
- Condition evaluation of rule applicability clauses
- Profile classification into bands, industry, state and triggers
- Obligation mapping with state fallbacks
- Weekly timelines, cost totals and breakdowns, document checklists
- Penalty risks, readiness score, profile review and platform picks
"""

from services.compliance_engine.assessment import (
    ComplianceAssessmentService,
    assess,
    assess_penalty_risks,
    assess_risk_level,
    readiness_score,
    recommend_platforms,
    review_profile,
)
from services.compliance_engine.classifier import (
    ClassificationCriteria,
    ClassificationService,
    classify,
    parse_investment,
)
from services.compliance_engine.conditions import evaluate
from services.compliance_engine.errors import (
    ComplianceEngineError,
    InvalidInputError,
    MissingClassificationError,
)
from services.compliance_engine.obligations import (
    ObligationMapper,
    map_future_obligations,
    map_obligations,
)
from services.compliance_engine.timeline import (
    build_cost_breakdown,
    build_document_checklist,
    build_timeline,
    estimate_total_duration,
    normalize_cost,
)

__version__ = "0.1.0"

__all__ = [
    # Services
    "ClassificationService",
    "ClassificationCriteria",
    "ObligationMapper",
    "ComplianceAssessmentService",
    # Operations
    "evaluate",
    "classify",
    "parse_investment",
    "map_obligations",
    "map_future_obligations",
    "build_timeline",
    "normalize_cost",
    "estimate_total_duration",
    "build_document_checklist",
    "build_cost_breakdown",
    "assess",
    "assess_risk_level",
    "assess_penalty_risks",
    "readiness_score",
    "review_profile",
    "recommend_platforms",
    # Errors
    "ComplianceEngineError",
    "InvalidInputError",
    "MissingClassificationError",
]
