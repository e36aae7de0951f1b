"""
COURSE LEDGER - Course entry management and validation boundary
Holds the caller's editable course rows and turns them into clean CourseRecords

VALIDATION STRATEGY:
1. Exclusion: rows not counted toward the GPA never reach computation
2. Grade Check: grade must be one of the 13 recognized letter grades
3. Credit Check: digits with at most one decimal place, 0 < credits <= 6
4. Tier Check: grade level must be 10th, 11th, or 12th

Malformed rows are left out and reported as RejectedEntry objects; one bad row
never aborts the whole calculation.

DATA SOURCES:
✅ In-memory ledger edited through add/update/remove
✅ Plain dicts or CourseEntry objects
✅ CSV files (one ledger, or one ledger per student_id)

Dependencies: pydantic for row validation, pandas for CSV loading
"""

import copy
import itertools
import logging
import numbers
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError

from honors_gpa.config import (
    CREDIT_STRING_PATTERN,
    MAX_CREDIT_WEIGHT,
    OPTIONAL_CSV_COLUMNS,
    REQUIRED_CSV_COLUMNS,
    TRUTHY_VALUES,
)
from honors_gpa.data_models import (
    CourseEntry,
    CourseInput,
    CourseRecord,
    GradeLevel,
    RejectedEntry,
)
from honors_gpa.grade_points import parse_letter_grade

logger = logging.getLogger(__name__)

_CREDIT_RE = re.compile(CREDIT_STRING_PATTERN)

# Field names callers may use in dicts, mapped onto CourseEntry fields
_ENTRY_ALIASES = {
    "credit_weight": "credits",
    "is_honors_eligible": "is_honors",
    "honors": "is_honors",
    "counts": "counts_toward_gpa",
    "is_ag_course": "counts_toward_gpa",
    "tier": "grade_level",
}

# Keys that can mark a dict row as not counted, and the values that mean "no"
_COUNTS_KEYS = ("counts_toward_gpa", "counts", "is_ag_course")
_FALSE_STRINGS = {"0", "off", "f", "false", "n", "no"}


class LedgerFormatError(ValueError):
    """Raised when a ledger file is structurally unusable (missing columns, unreadable)"""


def parse_credit_weight(raw) -> Optional[float]:
    """
    Parse credit hours as entered

    Args:
        raw: "3", "4.5", 3, 4.5

    Returns:
        Credits as float, or None if missing, malformed, or outside (0, 6]
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, numbers.Real):
        value = float(raw)
    else:
        credit_str = str(raw).strip()
        if not _CREDIT_RE.match(credit_str):
            return None
        value = float(credit_str)

    if not np.isfinite(value) or value <= 0 or value > MAX_CREDIT_WEIGHT:
        return None
    return value


def parse_grade_level(raw) -> Optional[GradeLevel]:
    """Parse 10, "10", "10th", "10th Grade", "Grade 10" into a GradeLevel"""
    if isinstance(raw, GradeLevel):
        return raw
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, numbers.Real):
        if not np.isfinite(raw) or float(raw) != int(raw):
            return None
        level_str = str(int(raw))
    else:
        digits = re.findall(r"\d+", str(raw))
        if len(digits) != 1:
            return None
        level_str = str(int(digits[0]))

    try:
        return GradeLevel(level_str)
    except ValueError:
        return None


def _coerce_entry(item: CourseInput, position: int) -> CourseEntry:
    """Build a CourseEntry from a dict or copy an existing one"""
    if isinstance(item, CourseEntry):
        return item.model_copy()

    fields = {}
    for key, value in dict(item).items():
        fields[_ENTRY_ALIASES.get(key, key)] = value
    fields.setdefault("id", str(position))
    return CourseEntry(**fields)


def _is_marked_uncounted(item) -> bool:
    """True when a dict row says it does not count, before any coercion"""
    if not isinstance(item, dict):
        return False
    for key in _COUNTS_KEYS:
        if key not in item:
            continue
        value = item[key]
        if isinstance(value, str):
            return value.strip().lower() in _FALSE_STRINGS
        return value is not None and not value
    return False


def normalize_entry(entry: CourseEntry) -> Tuple[Optional[CourseRecord], Optional[str]]:
    """
    Validate one course row

    Returns:
        (CourseRecord, None) when the row counts,
        (None, None) when the row is deliberately not counted,
        (None, reason) when the row is invalid
    """
    if not entry.counts_toward_gpa:
        return None, None

    grade = parse_letter_grade(entry.grade)
    if grade is None:
        if not str(entry.grade or "").strip():
            return None, "missing grade"
        return None, f"unrecognized grade: {entry.grade!r}"

    credits = parse_credit_weight(entry.credits)
    if credits is None:
        return None, f"invalid credits: {entry.credits!r}"

    tier = parse_grade_level(entry.grade_level)
    if tier is None:
        return None, f"invalid grade level: {entry.grade_level!r}"

    record = CourseRecord(
        id=entry.id,
        name=entry.name,
        grade=grade,
        credit_weight=credits,
        is_honors_eligible=entry.is_honors,
        counts_toward_gpa=True,
        tier=tier,
    )
    return record, None


def normalize_entries(
    items: Iterable[CourseInput],
) -> Tuple[List[CourseRecord], List[RejectedEntry]]:
    """
    Turn raw course rows into the records that flow into computation

    Args:
        items: CourseRecord, CourseEntry, or dict rows, in ledger order

    Returns:
        Tuple of (counted records, rejected rows)

    Ids must be unique among counted rows; a repeated id keeps the first row
    and rejects the later ones.
    """
    records: List[CourseRecord] = []
    rejected: List[RejectedEntry] = []
    seen_ids = set()

    def _accept(record: CourseRecord) -> None:
        if record.id in seen_ids:
            logger.warning(f"⚠️ Rejected course {record.id} ({record.name or 'unnamed'}): duplicate id")
            rejected.append(RejectedEntry(id=record.id, name=record.name, reason="duplicate id"))
            return
        seen_ids.add(record.id)
        records.append(record)

    for position, item in enumerate(items, start=1):
        if isinstance(item, CourseRecord):
            # Already validated; records are frozen so sharing them is safe
            if item.counts_toward_gpa:
                _accept(item)
            continue

        if _is_marked_uncounted(item):
            continue

        try:
            entry = _coerce_entry(item, position)
        except (ValidationError, TypeError, ValueError) as e:
            row_id = str(item.get("id", position)) if isinstance(item, dict) else str(position)
            logger.warning(f"⚠️ Rejected course row {row_id}: {e}")
            rejected.append(RejectedEntry(id=row_id, reason=f"invalid row: {e}"))
            continue

        record, reason = normalize_entry(entry)
        if record is not None:
            _accept(record)
        elif reason is not None:
            logger.warning(f"⚠️ Rejected course {entry.id} ({entry.name or 'unnamed'}): {reason}")
            rejected.append(RejectedEntry(id=entry.id, name=entry.name, reason=reason))

    return records, rejected


class CourseLedger:
    """
    Caller-owned, editable list of course rows

    The ledger is free to change between calculations. snapshot() hands the
    calculator validated copies, so edits made afterwards never leak into a
    result.
    """

    def __init__(self, entries: Optional[Iterable[CourseInput]] = None):
        self._entries: List[CourseEntry] = []
        self._load_rejections: List[RejectedEntry] = []
        self._ids = itertools.count(1)
        for item in entries or []:
            self.add_entry(item)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, course_id) -> bool:
        return any(entry.id == str(course_id) for entry in self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def entries(self) -> List[CourseEntry]:
        """Copies of the current rows"""
        return [entry.model_copy() for entry in self._entries]

    def _next_id(self) -> str:
        existing = {entry.id for entry in self._entries}
        while True:
            candidate = str(next(self._ids))
            if candidate not in existing:
                return candidate

    def add_course(self, **fields) -> CourseEntry:
        """Append a new row and return it; an id is assigned if none is given"""
        fields = {_ENTRY_ALIASES.get(key, key): value for key, value in fields.items()}
        if "id" not in fields or fields["id"] in (None, ""):
            fields["id"] = self._next_id()
        entry = CourseEntry(**fields)
        if any(existing.id == entry.id for existing in self._entries):
            raise ValueError(f"Duplicate course id: {entry.id}")
        self._entries.append(entry)
        return entry

    def add_entry(self, item: CourseInput) -> CourseEntry:
        """Append a CourseEntry, CourseRecord, or dict row"""
        if isinstance(item, CourseRecord):
            return self.add_course(
                id=item.id,
                name=item.name,
                grade=item.grade.value,
                credits=item.credit_weight,
                is_honors=item.is_honors_eligible,
                counts_toward_gpa=item.counts_toward_gpa,
                grade_level=item.tier.value,
            )
        if isinstance(item, CourseEntry):
            return self.add_course(**item.model_dump())
        return self.add_course(**dict(item))

    def update_course(self, course_id: str, **changes) -> CourseEntry:
        """Change fields on an existing row"""
        entry = self._find(course_id)
        new_id = changes.get("id")
        if new_id is not None and str(new_id) != entry.id and str(new_id) in self:
            raise ValueError(f"Duplicate course id: {new_id}")
        for key, value in changes.items():
            setattr(entry, _ENTRY_ALIASES.get(key, key), value)
        return entry

    def remove_course(self, course_id: str) -> None:
        """Drop a row by id"""
        entry = self._find(course_id)
        self._entries.remove(entry)

    def clear(self) -> None:
        self._entries = []
        self._load_rejections = []

    def record_rejection(self, rejection: RejectedEntry) -> None:
        """Keep a row that could not be added so snapshots still report it"""
        self._load_rejections.append(rejection)

    def _find(self, course_id: str) -> CourseEntry:
        for entry in self._entries:
            if entry.id == str(course_id):
                return entry
        raise KeyError(f"No course with id {course_id}")

    def snapshot(self) -> Tuple[List[CourseRecord], List[RejectedEntry]]:
        """Validated, immutable view of the ledger as it is right now"""
        records, rejected = normalize_entries(copy.deepcopy(self._entries))
        return records, list(self._load_rejections) + rejected


# =============================================================================
# CSV LOADING
# =============================================================================


def _clean_value(val):
    """Helper to handle NaN and blank cells"""
    if val is None or (isinstance(val, float) and np.isnan(val)):
        return None
    val_str = str(val).strip()
    return val_str if val_str else None


def _parse_flag(val) -> bool:
    """Parse Yes/No style cells"""
    cleaned = _clean_value(val)
    return cleaned is not None and cleaned.lower() in TRUTHY_VALUES


def load_ledger_csv(file_path: Union[str, Path]) -> Dict[str, CourseLedger]:
    """
    Load course ledgers from a CSV file

    Args:
        file_path: CSV with columns name, grade, credits, honors, counts,
            grade_level, and optionally id and student_id

    Returns:
        Dict of student_id to CourseLedger ("default" when there is no
        student_id column), in file order
    """
    file_path = Path(file_path)
    logger.info(f"📊 Loading course ledger from: {file_path}")

    try:
        df = pd.read_csv(file_path, encoding="utf-8-sig", dtype=str)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise LedgerFormatError(f"Could not read {file_path}: {e}") from e

    df.columns = [str(col).strip().lower().replace(" ", "_") for col in df.columns]
    missing = [col for col in REQUIRED_CSV_COLUMNS if col not in df.columns]
    if missing:
        raise LedgerFormatError(f"{file_path.name} is missing required columns: {', '.join(missing)}")

    extra = set(df.columns) - set(REQUIRED_CSV_COLUMNS) - set(OPTIONAL_CSV_COLUMNS)
    if extra:
        logger.info(f"  ℹ️ Ignoring columns: {', '.join(sorted(extra))}")

    ledgers: Dict[str, CourseLedger] = {}
    for row_number, (_, row) in enumerate(df.iterrows(), start=1):
        student_id = _clean_value(row.get("student_id")) or "default"
        ledger = ledgers.setdefault(student_id, CourseLedger())

        row_id = _clean_value(row.get("id")) or str(row_number)
        name = _clean_value(row["name"]) or ""
        if row_id in ledger:
            logger.warning(f"⚠️ {file_path.name} row {row_number}: duplicate course id {row_id}")
            ledger.record_rejection(RejectedEntry(id=row_id, name=name, reason="duplicate id"))
            continue

        try:
            ledger.add_course(
                id=row_id,
                name=name,
                grade=_clean_value(row["grade"]) or "",
                credits=_clean_value(row["credits"]) or "",
                is_honors=_parse_flag(row["honors"]),
                counts_toward_gpa=_parse_flag(row["counts"]),
                grade_level=_clean_value(row["grade_level"]) or "",
            )
        except ValueError as e:
            logger.warning(f"⚠️ {file_path.name} row {row_number}: {e}")
            ledger.record_rejection(RejectedEntry(id=row_id, name=name, reason=f"invalid row: {e}"))

    logger.info(f"  ✅ Loaded {len(df)} course rows for {len(ledgers)} ledger(s)")
    return ledgers
