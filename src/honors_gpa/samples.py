"""
Worked example ledgers for the CSU honors cap.

Each example mixes 10th, 11th, and 12th grade courses so the 10th grade
sub-cap and the 8-semester aggregate cap both come into play.
"""

from typing import Dict, List

from honors_gpa.course_ledger import CourseLedger


SAMPLE_LEDGERS: Dict[str, List[dict]] = {
    "STEM Focus with Honors": [
        {"name": "English 10", "grade": "A-", "credits": "4", "is_honors": False, "grade_level": "10"},
        {"name": "World History", "grade": "B+", "credits": "3", "is_honors": True, "grade_level": "10"},
        {"name": "Algebra 2", "grade": "A", "credits": "3", "is_honors": False, "grade_level": "10"},
        {"name": "Biology", "grade": "A-", "credits": "4", "is_honors": True, "grade_level": "10"},
        {"name": "Chemistry", "grade": "B", "credits": "4", "is_honors": False, "grade_level": "11"},
        {"name": "Pre-Calculus", "grade": "A", "credits": "3", "is_honors": True, "grade_level": "11"},
        {"name": "US History", "grade": "A-", "credits": "3", "is_honors": False, "grade_level": "11"},
        {"name": "English 11", "grade": "B+", "credits": "4", "is_honors": True, "grade_level": "11"},
        {"name": "AP Calculus BC", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "12"},
        {"name": "AP Physics", "grade": "B+", "credits": "4", "is_honors": True, "grade_level": "12"},
    ],
    "Humanities & Arts": [
        {"name": "English 10", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "10"},
        {"name": "World History", "grade": "A-", "credits": "3", "is_honors": False, "grade_level": "10"},
        {"name": "Spanish 2", "grade": "B+", "credits": "3", "is_honors": False, "grade_level": "10"},
        {"name": "Art", "grade": "A", "credits": "3", "is_honors": True, "grade_level": "10"},
        {"name": "English 11", "grade": "A-", "credits": "4", "is_honors": True, "grade_level": "11"},
        {"name": "US History", "grade": "B", "credits": "3", "is_honors": False, "grade_level": "11"},
        {"name": "Spanish 3", "grade": "A", "credits": "3", "is_honors": True, "grade_level": "11"},
        {"name": "Drama", "grade": "A-", "credits": "3", "is_honors": False, "grade_level": "11"},
        {"name": "English 12", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "12"},
        {"name": "Government", "grade": "B+", "credits": "3", "is_honors": False, "grade_level": "12"},
    ],
    "Mixed AP & CP Classes": [
        {"name": "English 10", "grade": "B+", "credits": "4", "is_honors": False, "grade_level": "10"},
        {"name": "World History", "grade": "A", "credits": "3", "is_honors": True, "grade_level": "10"},
        {"name": "Algebra 2", "grade": "B", "credits": "3", "is_honors": False, "grade_level": "10"},
        {"name": "Biology", "grade": "A-", "credits": "4", "is_honors": False, "grade_level": "10"},
        {"name": "Chemistry", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "11"},
        {"name": "Pre-Calculus", "grade": "B+", "credits": "3", "is_honors": False, "grade_level": "11"},
        {"name": "US History", "grade": "A", "credits": "3", "is_honors": True, "grade_level": "11"},
        {"name": "English 11", "grade": "A-", "credits": "4", "is_honors": False, "grade_level": "11"},
        {"name": "Calculus", "grade": "B", "credits": "4", "is_honors": True, "grade_level": "12"},
        {"name": "Economics", "grade": "A-", "credits": "3", "is_honors": False, "grade_level": "12"},
    ],
}


def sample_names() -> List[str]:
    return list(SAMPLE_LEDGERS)


def sample_ledger(name: str) -> CourseLedger:
    """Fresh ledger for a named example; raises KeyError for unknown names"""
    if name not in SAMPLE_LEDGERS:
        raise KeyError(f"Unknown sample ledger {name!r}; choose from: {', '.join(SAMPLE_LEDGERS)}")
    ledger = CourseLedger()
    for row in SAMPLE_LEDGERS[name]:
        ledger.add_course(counts_toward_gpa=True, **row)
    return ledger
