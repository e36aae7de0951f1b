"""
GPA CALCULATOR - Honors-capped weighted GPA for one course ledger
Combines base grade points with the bonus points the honors allocator admits

CALCULATION:
✅ Base points: grade points x credits for every counted course
✅ Bonus points: +1.0 x credits for admitted honors courses only
✅ Weighted GPA: (base + bonus) / credits, rounded to 3 places
✅ Unweighted GPA: base / credits, rounded to 3 places

EDGE CASES HANDLED:
- No counted courses: GPA is 0.0, not an error
- Weighting disabled: allocator is skipped, bonus is 0
- Invalid rows: excluded by the ledger and listed on the result
- Negative caps: clamped to zero by HonorsPolicy

Dependencies: data_models.py, course_ledger.py, honors_allocator.py
"""

import logging
from typing import Iterable, List, Optional, Union

from honors_gpa.config import GPA_DECIMALS, TOTAL_POINTS_DECIMALS
from honors_gpa.course_ledger import CourseLedger, normalize_entries
from honors_gpa.data_models import (
    AllocationResult,
    CourseInput,
    HonorsAllocation,
    HonorsPolicy,
)
from honors_gpa.grade_points import resolve_base_points
from honors_gpa.honors_allocator import HonorsAllocator

logger = logging.getLogger(__name__)


def aggregate(base_sum: float, bonus_sum: float, total_credits: float) -> float:
    """
    Cumulative GPA from point totals

    Returns 0.0 when there are no counted credits.
    """
    if total_credits <= 0:
        return 0.0
    return round((base_sum + bonus_sum) / total_credits, GPA_DECIMALS)


class GPACalculator:
    """Calculate honors-capped weighted GPAs from a course ledger"""

    def __init__(self, policy: Optional[HonorsPolicy] = None):
        """
        Initialize calculator with an honors policy

        Args:
            policy: Cap settings; defaults to the CSU policy (2 from 10th grade, 8 total)
        """
        self.policy = policy or HonorsPolicy()
        self.allocator = HonorsAllocator(self.policy)
        self.calculation_log: List[str] = []

    def calculate(
        self,
        courses: Union[CourseLedger, Iterable[CourseInput]],
        weighted: bool = True,
    ) -> AllocationResult:
        """
        Calculate GPA for a ledger snapshot

        Args:
            courses: CourseLedger, or CourseRecord / CourseEntry / dict rows
            weighted: When False, honors bonus points are not applied

        Returns:
            AllocationResult with GPA, totals, and honors cap flags
        """
        self.calculation_log = []

        if isinstance(courses, CourseLedger):
            records, rejected = courses.snapshot()
        else:
            records, rejected = normalize_entries(courses)

        self.calculation_log.append(
            f"📊 Calculating GPA for {len(records)} counted courses "
            f"({len(rejected)} rejected)"
        )
        for rejection in rejected:
            self.calculation_log.append(f"⚠️ Skipped {rejection.id}: {rejection.reason}")

        total_credits = 0.0
        total_base_points = 0.0
        for record in records:
            total_credits += record.credit_weight
            total_base_points += resolve_base_points(record.grade) * record.credit_weight

        if weighted:
            allocation = self.allocator.allocate(records)
        else:
            allocation = HonorsAllocation()
            self.calculation_log.append("ℹ️ Weighting disabled - honors bonus not applied")

        gpa = aggregate(total_base_points, allocation.total_bonus_points, total_credits)
        unweighted_gpa = aggregate(total_base_points, 0.0, total_credits)

        result = AllocationResult(
            gpa=gpa,
            unweighted_gpa=unweighted_gpa,
            weighted=weighted,
            total_credits_counted=total_credits,
            total_base_points=total_base_points,
            total_bonus_points=allocation.total_bonus_points,
            total_points=round(total_base_points + allocation.total_bonus_points, TOTAL_POINTS_DECIMALS),
            courses_counted=len(records),
            admitted_honors_count=allocation.admitted_count,
            capped_tier_admitted_count=allocation.capped_tier_admitted,
            eligible_honors_count=allocation.eligible_count,
            honors_slots_remaining=max(0, self.policy.aggregate_cap - allocation.admitted_count),
            admitted_course_ids=list(allocation.admitted_course_ids),
            tier_sub_cap_reached=allocation.tier_sub_cap_reached,
            aggregate_cap_reached=allocation.aggregate_cap_reached,
            rejected=rejected,
        )

        self.calculation_log.append("✅ Calculation complete:")
        self.calculation_log.append(f"   Weighted GPA: {result.gpa:.3f}")
        self.calculation_log.append(f"   Unweighted GPA: {result.unweighted_gpa:.3f}")
        self.calculation_log.append(
            f"   Honors admitted: {result.admitted_honors_count} of {result.eligible_honors_count} eligible"
        )
        self.calculation_log.append(f"   Total Credits: {result.total_credits_counted:.1f}")
        if result.honors_cap_applied:
            self.calculation_log.append("🚧 Honors cap applied")

        logger.info(
            f"📈 GPA {result.gpa:.3f} over {result.total_credits_counted:.1f} credits "
            f"({result.admitted_honors_count} honors admitted)"
        )
        return result

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log


def calculate_gpa(
    courses: Union[CourseLedger, Iterable[CourseInput]],
    policy: Optional[HonorsPolicy] = None,
    weighted: bool = True,
) -> AllocationResult:
    """One-shot calculation with a fresh GPACalculator"""
    return GPACalculator(policy).calculate(courses, weighted=weighted)
