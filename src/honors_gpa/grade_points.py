"""
GRADE POINTS - Letter grade to grade point lookup

GRADE MAPPING:
A+ = 4.0, A = 4.0, A- = 3.7
B+ = 3.3, B = 3.0, B- = 2.7
C+ = 2.3, C = 2.0, C- = 1.7
D+ = 1.3, D = 1.0, D- = 0.7
F = 0.0

HONORS BONUS:
+1.0 for A+ through C, nothing for C- and below
"""

from typing import Dict, Optional

from honors_gpa.data_models import LetterGrade


GRADE_POINTS: Dict[LetterGrade, float] = {
    LetterGrade.A_PLUS: 4.0,
    LetterGrade.A: 4.0,
    LetterGrade.A_MINUS: 3.7,
    LetterGrade.B_PLUS: 3.3,
    LetterGrade.B: 3.0,
    LetterGrade.B_MINUS: 2.7,
    LetterGrade.C_PLUS: 2.3,
    LetterGrade.C: 2.0,
    LetterGrade.C_MINUS: 1.7,
    LetterGrade.D_PLUS: 1.3,
    LetterGrade.D: 1.0,
    LetterGrade.D_MINUS: 0.7,
    LetterGrade.F: 0.0,
}

# Lowest grade that still earns the honors bonus
HONORS_BONUS_FLOOR = LetterGrade.C
HONORS_BONUS = 1.0

HONORS_BONUS_POINTS: Dict[LetterGrade, float] = {
    grade: (HONORS_BONUS if GRADE_POINTS[grade] >= GRADE_POINTS[HONORS_BONUS_FLOOR] else 0.0)
    for grade in LetterGrade
}


def resolve_base_points(grade: LetterGrade) -> float:
    """Unweighted grade points (0.0-4.0) for a letter grade"""
    return GRADE_POINTS[LetterGrade(grade)]


def resolve_bonus_points(grade: LetterGrade) -> float:
    """Honors bonus for a letter grade, zero below the floor"""
    return HONORS_BONUS_POINTS[LetterGrade(grade)]


def parse_letter_grade(raw) -> Optional[LetterGrade]:
    """
    Parse a typed grade into a LetterGrade

    Args:
        raw: Grade as entered ("a-", " B+ ", LetterGrade.C)

    Returns:
        LetterGrade, or None if the value is not a recognized grade
    """
    if isinstance(raw, LetterGrade):
        return raw
    if raw is None:
        return None

    grade_str = str(raw).strip().upper()
    try:
        return LetterGrade(grade_str)
    except ValueError:
        return None
