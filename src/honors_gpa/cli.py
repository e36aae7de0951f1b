#!/usr/bin/env python3
"""
Command-line GPA calculator

Usage:
    honors-gpa courses.csv
    honors-gpa grades.csv --output results.csv      # one row per student_id
    honors-gpa --sample "STEM Focus with Honors" --log
    honors-gpa courses.csv --unweighted
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from tqdm import tqdm

from honors_gpa.config import DEFAULT_AGGREGATE_CAP, DEFAULT_CAPPED_TIER, DEFAULT_TIER_SUB_CAP
from honors_gpa.course_ledger import CourseLedger, LedgerFormatError, load_ledger_csv, parse_grade_level
from honors_gpa.data_models import AllocationResult, HonorsPolicy
from honors_gpa.gpa_calculator import GPACalculator
from honors_gpa.report import format_result, results_frame
from honors_gpa.samples import sample_ledger, sample_names

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="honors-gpa",
        description="Weighted GPA with capped honors points (CSU a-g rules by default)",
    )
    parser.add_argument("ledger", nargs="?", type=Path, help="CSV of courses (name, grade, credits, honors, counts, grade_level)")
    parser.add_argument("--sample", metavar="NAME", help="Use a built-in example ledger instead of a CSV")
    parser.add_argument("--list-samples", action="store_true", help="List built-in example ledgers and exit")
    parser.add_argument("--unweighted", action="store_true", help="Ignore honors bonus points")
    parser.add_argument("--tier-sub-cap", type=int, default=DEFAULT_TIER_SUB_CAP, help="Max honors semesters from the capped grade level")
    parser.add_argument("--aggregate-cap", type=int, default=DEFAULT_AGGREGATE_CAP, help="Max honors semesters overall")
    parser.add_argument("--capped-tier", default=DEFAULT_CAPPED_TIER, help="Grade level with its own sub-cap")
    parser.add_argument("--output", "-o", type=Path, help="Write a summary CSV (one row per student)")
    parser.add_argument("--log", action="store_true", help="Print the calculation log")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def load_ledgers(args: argparse.Namespace) -> Dict[str, CourseLedger]:
    if args.sample:
        return {args.sample: sample_ledger(args.sample)}
    return load_ledger_csv(args.ledger)


def calculate_all(
    calculator: GPACalculator,
    ledgers: Dict[str, CourseLedger],
    weighted: bool,
    progress: bool = True,
) -> Dict[str, AllocationResult]:
    """Score every ledger; a progress bar is shown for multi-student files"""
    results: Dict[str, AllocationResult] = {}
    items = ledgers.items()
    if progress and len(ledgers) > 1:
        items = tqdm(items, total=len(ledgers), desc="Calculating", unit="student")

    for student_id, ledger in items:
        results[student_id] = calculator.calculate(ledger, weighted=weighted)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_samples:
        for name in sample_names():
            print(name)
        return 0

    if not args.sample and args.ledger is None:
        parser.error("a ledger CSV or --sample is required")

    try:
        policy = HonorsPolicy(
            capped_tier=parse_grade_level(args.capped_tier) or args.capped_tier,
            tier_sub_cap=args.tier_sub_cap,
            aggregate_cap=args.aggregate_cap,
        )
    except ValidationError as e:
        logger.error(f"❌ Invalid honors policy: {e}")
        return 2

    try:
        ledgers = load_ledgers(args)
    except (LedgerFormatError, KeyError) as e:
        logger.error(f"❌ {e}")
        return 1

    calculator = GPACalculator(policy)
    weighted = not args.unweighted
    results = calculate_all(calculator, ledgers, weighted)

    if len(results) == 1:
        (name, result), = results.items()
        title = "GPA RESULTS" if name == "default" else f"GPA RESULTS - {name}"
        print(format_result(result, policy, title=title))
        if args.log:
            print("\n📝 Calculation Log:")
            for entry in calculator.get_calculation_log():
                print(f"  {entry}")
    else:
        print(results_frame(results).to_string(index=False))

    if args.output:
        results_frame(results).to_csv(args.output, index=False)
        print(f"\n📁 Summary written to: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
