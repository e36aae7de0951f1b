"""Honors-capped weighted GPA calculator."""

from honors_gpa.course_ledger import (
    CourseLedger,
    LedgerFormatError,
    load_ledger_csv,
    normalize_entries,
    parse_credit_weight,
    parse_grade_level,
)
from honors_gpa.data_models import (
    AllocationResult,
    CourseEntry,
    CourseRecord,
    GradeLevel,
    HonorsAllocation,
    HonorsPolicy,
    LetterGrade,
    RejectedEntry,
)
from honors_gpa.gpa_calculator import GPACalculator, aggregate, calculate_gpa
from honors_gpa.grade_points import parse_letter_grade, resolve_base_points, resolve_bonus_points
from honors_gpa.honors_allocator import HonorsAllocator, allocate_honors, marginal_contribution
from honors_gpa.samples import sample_ledger

__version__ = "0.1.0"

__all__ = [
    "AllocationResult",
    "CourseEntry",
    "CourseLedger",
    "CourseRecord",
    "GPACalculator",
    "GradeLevel",
    "HonorsAllocation",
    "HonorsAllocator",
    "HonorsPolicy",
    "LedgerFormatError",
    "LetterGrade",
    "RejectedEntry",
    "aggregate",
    "allocate_honors",
    "calculate_gpa",
    "load_ledger_csv",
    "marginal_contribution",
    "normalize_entries",
    "parse_credit_weight",
    "parse_grade_level",
    "parse_letter_grade",
    "resolve_base_points",
    "resolve_bonus_points",
    "sample_ledger",
]
