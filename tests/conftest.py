"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Honors policies
- Course record factories
- Sample ledgers and CSV files
"""

import itertools

import pytest

from honors_gpa.course_ledger import CourseLedger
from honors_gpa.data_models import CourseRecord, GradeLevel, HonorsPolicy, LetterGrade


@pytest.fixture
def csu_policy():
    """Default CSU policy: 2 honors semesters from 10th grade, 8 total"""
    return HonorsPolicy()


@pytest.fixture
def make_course():
    """Factory for validated CourseRecords with sequential ids"""
    ids = itertools.count(1)

    def _make(grade="A", credits=4.0, honors=False, tier="11", counts=True, name="", course_id=None):
        return CourseRecord(
            id=str(course_id if course_id is not None else next(ids)),
            name=name,
            grade=LetterGrade(grade),
            credit_weight=credits,
            is_honors_eligible=honors,
            counts_toward_gpa=counts,
            tier=GradeLevel(tier),
        )

    return _make


@pytest.fixture
def sample_entries():
    """Raw rows as a form would submit them"""
    return [
        {"id": "1", "name": "English 10", "grade": "A-", "credits": "4", "is_honors": False, "grade_level": "10"},
        {"id": "2", "name": "Biology H", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "10"},
        {"id": "3", "name": "Chemistry H", "grade": "B+", "credits": "4", "is_honors": True, "grade_level": "11"},
        {"id": "4", "name": "US History", "grade": "B", "credits": "3", "is_honors": False, "grade_level": "11"},
        {"id": "5", "name": "AP Calculus", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "12"},
    ]


@pytest.fixture
def sample_ledger_obj(sample_entries):
    return CourseLedger(sample_entries)


@pytest.fixture
def ledger_csv(tmp_path):
    """CSV file with two students"""
    path = tmp_path / "grades.csv"
    path.write_text(
        "student_id,id,name,grade,credits,honors,counts,grade_level\n"
        "1001,a,English 10,A,4,No,Yes,10\n"
        "1001,b,Biology H,A,4,Yes,Yes,10\n"
        "1001,c,Chemistry H,B,4,Yes,Yes,11\n"
        "1001,d,Yoga,A,2,No,No,11\n"
        "1002,a,English 11,B+,4,No,Yes,11\n"
        "1002,b,AP Physics,A-,4,Yes,Yes,12\n"
        "1002,c,Spanish 3,Z,3,No,Yes,12\n",
        encoding="utf-8",
    )
    return path
