"""
HONORS ALLOCATOR - Decide which honors courses earn bonus points
Admits honors/AP/IB courses under a two-level cap so the bonus total is maximal

ALLOCATION STEPS:
✅ Filter: honors flag, counted, positive finite credits, grade at/above bonus floor
✅ Partition: capped tier (10th grade) vs. every other tier
✅ Rank: each partition by marginal contribution (bonus x credits), descending
✅ Admit: highest contribution first, subject to
   - capped-tier admissions <= tier_sub_cap
   - total admissions <= aggregate_cap (capped tier included)

When the aggregate cap does not bind, this admits the top tier_sub_cap capped-tier
courses and then fills from the other tiers, exactly like a tier-by-tier walk.
When it does bind, a high-contribution 11th/12th grade course is never pushed out
by a lower-contribution 10th grade one.

Ties on contribution keep ledger order; across tiers the capped tier goes first.
"""

import heapq
import logging
import math
from typing import Iterable, List, Optional, Tuple

from honors_gpa.data_models import CourseRecord, HonorsAllocation, HonorsPolicy
from honors_gpa.grade_points import parse_letter_grade, resolve_bonus_points

logger = logging.getLogger(__name__)


def marginal_contribution(course: CourseRecord) -> float:
    """Bonus points x credit weight for one course"""
    return resolve_bonus_points(course.grade) * course.credit_weight


class HonorsAllocator:
    """Admit honors courses for bonus points under an HonorsPolicy"""

    def __init__(self, policy: Optional[HonorsPolicy] = None):
        self.policy = policy or HonorsPolicy()

    def allocate(self, courses: Iterable[CourseRecord]) -> HonorsAllocation:
        """
        Select the honors courses that receive bonus points

        Args:
            courses: Counted course records, in ledger order

        Returns:
            HonorsAllocation with admitted ids, bonus total, and cap flags
        """
        policy = self.policy
        candidates = [course for course in courses if self._is_eligible(course)]

        capped, others = self._partition(candidates)
        capped_ranked = self._rank(capped)
        others_ranked = self._rank(others)

        admitted_ids: List[str] = []
        total_bonus = 0.0
        capped_admitted = 0

        # Both lists are already descending; merge keeps capped tier first on ties
        merged = heapq.merge(capped_ranked, others_ranked, key=lambda item: -item[1])
        for course, contribution in merged:
            if len(admitted_ids) >= policy.aggregate_cap:
                break
            if course.tier == policy.capped_tier:
                if capped_admitted >= policy.tier_sub_cap:
                    continue
                capped_admitted += 1
            admitted_ids.append(course.id)
            total_bonus += contribution

        allocation = HonorsAllocation(
            admitted_course_ids=admitted_ids,
            total_bonus_points=total_bonus,
            admitted_count=len(admitted_ids),
            capped_tier_admitted=capped_admitted,
            eligible_count=len(candidates),
            capped_tier_eligible=len(capped),
            tier_sub_cap_reached=len(capped) > policy.tier_sub_cap,
            aggregate_cap_reached=len(candidates) > policy.aggregate_cap,
        )

        logger.debug(
            f"🎓 Admitted {allocation.admitted_count}/{allocation.eligible_count} honors courses "
            f"({capped_admitted} from {policy.capped_tier.label}), bonus {total_bonus:.2f}"
        )
        return allocation

    def _is_eligible(self, course: CourseRecord) -> bool:
        """Honors-flagged, counted, sane credits, and a grade that earns bonus"""
        if not (course.is_honors_eligible and course.counts_toward_gpa):
            return False

        weight = course.credit_weight
        if not isinstance(weight, (int, float)) or not math.isfinite(weight) or weight <= 0:
            logger.warning(f"⚠️ Skipping honors course {course.id} with invalid credits: {weight}")
            return False

        grade = parse_letter_grade(course.grade)
        if grade is None:
            return False
        return resolve_bonus_points(grade) > 0.0

    def _partition(
        self, candidates: List[CourseRecord]
    ) -> Tuple[List[CourseRecord], List[CourseRecord]]:
        """Split candidates into (capped tier, other tiers)"""
        capped = [c for c in candidates if c.tier == self.policy.capped_tier]
        others = [c for c in candidates if c.tier != self.policy.capped_tier]
        return capped, others

    @staticmethod
    def _rank(courses: List[CourseRecord]) -> List[Tuple[CourseRecord, float]]:
        """Sort by contribution, descending; sorted() is stable so ties keep ledger order"""
        scored = [(course, marginal_contribution(course)) for course in courses]
        return sorted(scored, key=lambda item: item[1], reverse=True)


def allocate_honors(
    courses: Iterable[CourseRecord], policy: Optional[HonorsPolicy] = None
) -> HonorsAllocation:
    """Convenience wrapper around HonorsAllocator.allocate"""
    return HonorsAllocator(policy).allocate(courses)
