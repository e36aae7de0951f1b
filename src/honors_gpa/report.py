"""
Plain-text and tabular summaries of an AllocationResult.
"""

from typing import Dict, List, Optional

import pandas as pd

from honors_gpa.data_models import AllocationResult, HonorsPolicy

RESULT_COLUMNS = [
    "student_id",
    "gpa",
    "unweighted_gpa",
    "total_credits",
    "total_points",
    "courses_counted",
    "honors_admitted",
    "honors_eligible",
    "honors_cap_applied",
    "rejected_rows",
]


def _line(label: str, value) -> str:
    return f"  {label + ':':<22}{value}"


def format_result(
    result: AllocationResult,
    policy: Optional[HonorsPolicy] = None,
    title: str = "GPA RESULTS",
) -> str:
    """Multi-line summary suitable for a terminal or a copied report"""
    policy = policy or HonorsPolicy()
    lines: List[str] = [
        f"📋 {title}",
        "=" * 60,
        _line("Weighted GPA" if result.weighted else "GPA", f"{result.gpa:.3f}"),
        _line("Unweighted GPA", f"{result.unweighted_gpa:.3f}"),
        _line("Total Credits", f"{result.total_credits_counted:g}"),
        _line("Total Points", f"{result.total_points:.2f}"),
        _line("Courses Counted", result.courses_counted),
    ]

    if result.weighted:
        lines.extend([
            "",
            "🎓 Honors Semesters:",
            _line("Used", f"{result.admitted_honors_count} of {policy.aggregate_cap}"),
            _line(f"From {policy.capped_tier.label}", f"{result.capped_tier_admitted_count} of {policy.tier_sub_cap}"),
            _line("Remaining", result.honors_slots_remaining),
        ])
        if result.honors_cap_applied:
            lines.append(
                f"  ⚠️ Honors cap applied: max {policy.aggregate_cap} semesters, "
                f"only {policy.tier_sub_cap} from {policy.capped_tier.label}"
            )

    if result.rejected:
        lines.extend(["", "⚠️ Not Counted:"])
        for rejection in result.rejected:
            label = rejection.name or f"row {rejection.id}"
            lines.append(f"  - {label}: {rejection.reason}")

    return "\n".join(lines)


def results_frame(results: Dict[str, AllocationResult]) -> pd.DataFrame:
    """Summary table, one row per ledger"""
    rows = []
    for student_id, result in results.items():
        rows.append({
            "student_id": student_id,
            "gpa": result.gpa,
            "unweighted_gpa": result.unweighted_gpa,
            "total_credits": result.total_credits_counted,
            "total_points": result.total_points,
            "courses_counted": result.courses_counted,
            "honors_admitted": result.admitted_honors_count,
            "honors_eligible": result.eligible_honors_count,
            "honors_cap_applied": result.honors_cap_applied,
            "rejected_rows": len(result.rejected),
        })
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
