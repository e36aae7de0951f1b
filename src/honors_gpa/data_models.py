"""
DATA MODELS - Pydantic schemas for course ledgers and GPA results
Type-safe data structures for course entries, honors policy, and allocation output

MODELS:
✅ CourseEntry: Raw, mutable course row as entered by the caller
✅ CourseRecord: Validated, immutable course ready for computation
✅ HonorsPolicy: Capped tier, tier sub-cap, aggregate cap
✅ HonorsAllocation: Which honors courses received bonus points
✅ AllocationResult: Final GPA and totals for one ledger snapshot

VALIDATION RULES:
- Grades must be one of the 13 letter grades (A+ through F)
- Credit weights must be 0 < credits <= 6
- Caps are clamped to zero when negative
- Records and results are frozen once built

Dependencies: Pydantic for validation
"""

import math
from enum import Enum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from honors_gpa.config import (
    DEFAULT_AGGREGATE_CAP,
    DEFAULT_CAPPED_TIER,
    DEFAULT_TIER_SUB_CAP,
    MAX_CREDIT_WEIGHT,
)


class LetterGrade(str, Enum):
    """Valid letter grades with plus/minus modifiers"""
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D_PLUS = "D+"
    D = "D"
    D_MINUS = "D-"
    F = "F"


class GradeLevel(str, Enum):
    """Grade levels counted toward the a-g GPA, in order"""
    GRADE_10 = "10"
    GRADE_11 = "11"
    GRADE_12 = "12"

    @property
    def label(self) -> str:
        return f"{self.value}th Grade"


class CourseEntry(BaseModel):
    """
    Raw course row as the caller edits it.

    Fields are kept loose (strings, numbers) because this mirrors form state.
    Nothing downstream reads a CourseEntry directly; the ledger turns it into
    a CourseRecord or rejects it.
    """

    id: str = Field(..., description="Row identifier, unique within a ledger")
    name: str = Field("", description="Display label")
    grade: str = Field("", description="Letter grade as typed")
    credits: Union[str, float, int, None] = Field("", description="Credit hours as typed")
    is_honors: bool = Field(False, description="Honors/AP/IB designation")
    counts_toward_gpa: bool = Field(True, description="Course is on the approved a-g list")
    grade_level: Union[str, int] = Field(DEFAULT_CAPPED_TIER, description="Grade level the course was taken in")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric ids from CSV rows"""
        return str(v)


class CourseRecord(BaseModel):
    """Validated course, immutable for the duration of a computation"""

    id: str = Field(..., description="Row identifier")
    name: str = Field("", description="Display label, not used in computation")
    grade: LetterGrade = Field(..., description="Letter grade")
    credit_weight: float = Field(..., gt=0.0, le=MAX_CREDIT_WEIGHT, description="Semester credit hours")
    is_honors_eligible: bool = Field(False, description="Honors/AP/IB designation")
    counts_toward_gpa: bool = Field(True, description="Course counts toward the GPA")
    tier: GradeLevel = Field(..., description="Grade level tier")

    model_config = ConfigDict(frozen=True)

    @field_validator("credit_weight")
    @classmethod
    def validate_finite(cls, v):
        """Reject NaN and infinity"""
        if not math.isfinite(v):
            raise ValueError(f"Credit weight must be finite, got: {v}")
        return v


class HonorsPolicy(BaseModel):
    """Honors admission limits. Defaults follow the CSU a-g policy."""

    capped_tier: GradeLevel = Field(GradeLevel(DEFAULT_CAPPED_TIER), description="Tier with its own sub-cap")
    tier_sub_cap: int = Field(DEFAULT_TIER_SUB_CAP, description="Max honors admissions from the capped tier")
    aggregate_cap: int = Field(DEFAULT_AGGREGATE_CAP, description="Max honors admissions across all tiers")

    model_config = ConfigDict(frozen=True)

    @field_validator("tier_sub_cap", "aggregate_cap", mode="before")
    @classmethod
    def clamp_negative_caps(cls, v):
        """Negative caps behave as zero caps"""
        try:
            return max(0, int(v))
        except (TypeError, OverflowError) as e:
            raise ValueError(f"Cap must be a whole number, got: {v!r}") from e


class RejectedEntry(BaseModel):
    """A ledger row that was left out of the computation"""

    id: str
    name: str = ""
    reason: str

    model_config = ConfigDict(frozen=True)


class HonorsAllocation(BaseModel):
    """Outcome of admitting honors courses under the policy caps"""

    admitted_course_ids: List[str] = Field(default_factory=list, description="Admitted ids in admission order")
    total_bonus_points: float = Field(0.0, ge=0.0, description="Sum of bonus x credits for admitted courses")
    admitted_count: int = Field(0, ge=0)
    capped_tier_admitted: int = Field(0, ge=0)
    eligible_count: int = Field(0, ge=0)
    capped_tier_eligible: int = Field(0, ge=0)
    tier_sub_cap_reached: bool = False
    aggregate_cap_reached: bool = False

    model_config = ConfigDict(frozen=True)


class AllocationResult(BaseModel):
    """GPA calculation result for one ledger snapshot"""

    gpa: float = Field(..., ge=0.0, description="Weighted GPA, rounded to 3 places")
    unweighted_gpa: float = Field(..., ge=0.0, le=4.0, description="Base-points GPA, rounded to 3 places")
    weighted: bool = Field(True, description="Whether honors weighting was applied")

    total_credits_counted: float = Field(..., ge=0.0)
    total_base_points: float = Field(..., ge=0.0)
    total_bonus_points: float = Field(..., ge=0.0)
    total_points: float = Field(..., ge=0.0, description="Base + bonus, rounded to 2 places")
    courses_counted: int = Field(..., ge=0)

    admitted_honors_count: int = Field(..., ge=0)
    capped_tier_admitted_count: int = Field(0, ge=0)
    eligible_honors_count: int = Field(0, ge=0)
    honors_slots_remaining: int = Field(0, ge=0)
    admitted_course_ids: List[str] = Field(default_factory=list)
    tier_sub_cap_reached: bool = False
    aggregate_cap_reached: bool = False

    rejected: List[RejectedEntry] = Field(default_factory=list, description="Rows excluded for invalid input")

    model_config = ConfigDict(frozen=True)

    @property
    def honors_cap_applied(self) -> bool:
        """True when either cap kept an eligible course from its bonus"""
        return self.tier_sub_cap_reached or self.aggregate_cap_reached


CourseInput = Union[CourseRecord, CourseEntry, dict]


__all__ = [
    "LetterGrade",
    "GradeLevel",
    "CourseEntry",
    "CourseRecord",
    "HonorsPolicy",
    "RejectedEntry",
    "HonorsAllocation",
    "AllocationResult",
    "CourseInput",
]
