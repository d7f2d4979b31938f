#!/usr/bin/env python3
"""
Profile Assessment Script
=========================

Run the compliance engine on a business profile and print the result.

Usage:
    python scripts/assess_profile.py profile.json
    python scripts/assess_profile.py --profile '{"businessType": "restaurant", "state": "Karnataka"}'
    python scripts/assess_profile.py profile.json --summary
    python scripts/assess_profile.py profile.json --summary --completed GST,MSME_UDYAM

Version: 0.1.0
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.compliance_engine import ComplianceAssessmentService, ComplianceEngineError
from shared.logging import get_logger, setup_logging
from shared.models import ComplianceAssessment

setup_logging(log_level="WARNING", json_logs=False, service_name="assess-profile")
logger = get_logger(__name__)


def load_profile(args: argparse.Namespace) -> dict[str, Any]:
    """Read the profile from --profile or a JSON file."""
    if args.profile:
        return json.loads(args.profile)
    return json.loads(Path(args.file).read_text(encoding="utf-8"))


def print_summary(assessment: ComplianceAssessment) -> None:
    """Print a human-readable summary."""
    classification = assessment.result.classification

    print(f"\n{'=' * 60}")
    print("COMPLIANCE ASSESSMENT")
    print(f"{'=' * 60}")
    print(f"  Industry:      {classification.industry_code.value}")
    print(f"  State:         {classification.state_code}")
    print(f"  Employees:     {classification.employee_count} ({classification.employee_band.value})")
    print(
        f"  Turnover:      ₹{classification.annual_turnover:,.0f} "
        f"({classification.turnover_band.value})"
    )

    print(f"\n{'-' * 60}")
    print(f"Obligations ({assessment.mandatory_count} mandatory, {assessment.optional_count} optional)")
    print(f"{'-' * 60}")
    for entry in assessment.plan.timeline:
        print(f"  Week {entry.week}: {entry.name} [{entry.priority.value}] ₹{entry.cost:,.0f}")

    print(f"\n  Total cost:    ₹{assessment.plan.total_cost:,.0f}")
    print(f"  Duration:      {assessment.duration.label}")
    print(f"  Documents:     {len(assessment.documents.unique_documents)}")
    print(f"  Readiness:     {assessment.readiness.score}%")
    print(f"  With help:     ₹{assessment.costs.total:,.0f}")

    if assessment.penalty_risks:
        print(f"\n{'-' * 60}")
        print("Penalty Risks")
        print(f"{'-' * 60}")
        for risk in assessment.penalty_risks:
            print(f"  [{risk.risk_level.value.upper()}] {risk.obligation_name}: {risk.recommendation}")

    for obligation in assessment.future_obligations:
        print(f"\n  Later: {obligation.name} ({obligation.applicable_when})")
    if assessment.profile_review and assessment.profile_review.suggestions:
        print()
        for suggestion in assessment.profile_review.suggestions:
            print(f"  Tip: {suggestion}")


def main(args: argparse.Namespace) -> int:
    """Assess the profile and print it."""
    try:
        profile = load_profile(args)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("profile_load_failed", error=str(e))
        return 1

    try:
        completed = [item.strip() for item in args.completed.split(",") if item.strip()]
        assessment = ComplianceAssessmentService().assess(profile, completed)
    except ComplianceEngineError as e:
        logger.error("assessment_failed", error=str(e))
        return 1

    if args.summary:
        print_summary(assessment)
    else:
        print(json.dumps(assessment.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False))

    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Assess an MSME business profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Path to a JSON business profile",
    )
    parser.add_argument(
        "--profile",
        help="Inline JSON business profile",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a readable summary instead of JSON",
    )
    parser.add_argument(
        "--completed",
        default="",
        help="Comma-separated obligation or rule ids already completed",
    )

    args = parser.parse_args()

    if not args.file and not args.profile:
        parser.error("a profile file or --profile is required")

    return args


if __name__ == "__main__":
    args = parse_args()
    sys.exit(main(args))
