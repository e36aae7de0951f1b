"""
Unit Tests for the course ledger

Tests for:
- Credit and grade level parsing
- Row validation and rejection reasons
- Ledger editing (add, update, remove)
- Snapshot isolation
- CSV loading
"""

import pytest

from honors_gpa.course_ledger import (
    CourseLedger,
    LedgerFormatError,
    load_ledger_csv,
    normalize_entries,
    parse_credit_weight,
    parse_grade_level,
)
from honors_gpa.data_models import CourseEntry, GradeLevel, LetterGrade


class TestParseCreditWeight:
    """Tests for parse_credit_weight"""

    @pytest.mark.parametrize(
        "raw,expected",
        [("3", 3.0), ("4.5", 4.5), (" 2 ", 2.0), ("6", 6.0), (4, 4.0), (0.5, 0.5), ("6.0", 6.0)],
    )
    def test_valid_credits(self, raw, expected):
        assert parse_credit_weight(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "0", "0.0", "6.5", "7", "-1", "4.25", ".5", "abc", "3 credits", None, True, float("nan"), float("inf"), -2, 0],
    )
    def test_invalid_credits(self, raw):
        assert parse_credit_weight(raw) is None


class TestParseGradeLevel:
    """Tests for parse_grade_level"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (10, GradeLevel.GRADE_10),
            ("11", GradeLevel.GRADE_11),
            ("12th", GradeLevel.GRADE_12),
            ("10th Grade", GradeLevel.GRADE_10),
            ("Grade 11", GradeLevel.GRADE_11),
            (12.0, GradeLevel.GRADE_12),
            (GradeLevel.GRADE_10, GradeLevel.GRADE_10),
        ],
    )
    def test_valid_levels(self, raw, expected):
        assert parse_grade_level(raw) == expected

    @pytest.mark.parametrize("raw", ["9", 13, "", "senior", "10-11", 10.5, None])
    def test_invalid_levels(self, raw):
        assert parse_grade_level(raw) is None


class TestNormalizeEntries:
    """Tests for the validation boundary"""

    def test_clean_rows_become_records(self, sample_entries):
        records, rejected = normalize_entries(sample_entries)

        assert len(records) == 5
        assert rejected == []
        assert records[1].grade == LetterGrade.A
        assert records[1].credit_weight == 4.0
        assert records[1].is_honors_eligible
        assert records[1].tier == GradeLevel.GRADE_10

    def test_ledger_order_preserved(self, sample_entries):
        records, _ = normalize_entries(sample_entries)
        assert [r.id for r in records] == ["1", "2", "3", "4", "5"]

    def test_uncounted_rows_dropped_silently(self):
        records, rejected = normalize_entries([
            {"id": "pe", "name": "PE", "grade": "A", "credits": "2", "counts_toward_gpa": False},
        ])
        assert records == []
        assert rejected == []

    @pytest.mark.parametrize(
        "row,reason",
        [
            ({"grade": "", "credits": "3"}, "missing grade"),
            ({"grade": "E", "credits": "3"}, "unrecognized grade"),
            ({"grade": "A", "credits": "abc"}, "invalid credits"),
            ({"grade": "A", "credits": "9"}, "invalid credits"),
            ({"grade": "A", "credits": "3", "grade_level": "9"}, "invalid grade level"),
        ],
    )
    def test_invalid_rows_rejected(self, row, reason):
        records, rejected = normalize_entries([dict(id="bad", name="Bad Row", **row)])

        assert records == []
        assert len(rejected) == 1
        assert rejected[0].id == "bad"
        assert rejected[0].name == "Bad Row"
        assert reason in rejected[0].reason

    def test_one_bad_row_does_not_abort(self, sample_entries):
        rows = sample_entries + [{"id": "6", "grade": "Q", "credits": "3"}]
        records, rejected = normalize_entries(rows)

        assert len(records) == 5
        assert [r.id for r in rejected] == ["6"]

    def test_untypeable_row_rejected(self):
        records, rejected = normalize_entries([{"id": "7", "grade": "A", "credits": "3", "is_honors": "maybe"}])

        assert records == []
        assert rejected[0].id == "7"
        assert "invalid row" in rejected[0].reason

    def test_record_field_aliases(self):
        records, _ = normalize_entries([
            {"id": "x", "grade": "B", "credit_weight": 3, "is_honors_eligible": True, "tier": "12"},
        ])

        assert records[0].credit_weight == 3.0
        assert records[0].is_honors_eligible
        assert records[0].tier == GradeLevel.GRADE_12

    def test_repeated_id_keeps_first_row(self):
        records, rejected = normalize_entries([
            {"id": "x", "name": "Chemistry H", "grade": "A", "credits": "4", "is_honors": True, "grade_level": "11"},
            {"id": "x", "name": "Physics H", "grade": "B", "credits": "3", "is_honors": True, "grade_level": "11"},
        ])

        assert [r.name for r in records] == ["Chemistry H"]
        assert len(rejected) == 1
        assert rejected[0].id == "x"
        assert rejected[0].name == "Physics H"
        assert rejected[0].reason == "duplicate id"

    def test_repeated_record_id_rejected(self, make_course):
        first = make_course("A", course_id="r")
        second = make_course("B", course_id="r")
        records, rejected = normalize_entries([first, second])

        assert records == [first]
        assert [r.reason for r in rejected] == ["duplicate id"]

    @pytest.mark.parametrize("flag", [False, 0, "no", "False"])
    def test_uncounted_malformed_row_not_rejected(self, flag):
        """A row marked as not counted is dropped even if its other fields are unusable"""
        records, rejected = normalize_entries([
            {"id": "1", "grade": "A", "credits": "4"},
            {"id": "2", "grade": None, "credits": None, "grade_level": None, "counts_toward_gpa": flag},
        ])

        assert [r.id for r in records] == ["1"]
        assert rejected == []

    def test_missing_ids_use_position(self):
        records, _ = normalize_entries([{"grade": "A", "credits": "3"}, {"grade": "B", "credits": "3"}])
        assert [r.id for r in records] == ["1", "2"]


class TestCourseLedger:
    """Tests for ledger editing and snapshots"""

    def test_add_assigns_ids(self):
        ledger = CourseLedger()
        first = ledger.add_course(name="English", grade="A", credits="4")
        second = ledger.add_course(name="Math", grade="B", credits="4")

        assert first.id != second.id
        assert len(ledger) == 2

    def test_duplicate_id_rejected(self):
        ledger = CourseLedger()
        ledger.add_course(id="1", grade="A", credits="4")
        with pytest.raises(ValueError):
            ledger.add_course(id="1", grade="B", credits="4")

    def test_update_to_existing_id_rejected(self, sample_ledger_obj):
        with pytest.raises(ValueError):
            sample_ledger_obj.update_course("2", id="1", grade="F")

        assert [e.id for e in sample_ledger_obj] == ["1", "2", "3", "4", "5"]
        assert sample_ledger_obj.entries[1].grade == "A"

    def test_update_to_new_id(self, sample_ledger_obj):
        sample_ledger_obj.update_course("2", id="bio")

        assert "bio" in sample_ledger_obj
        assert "2" not in sample_ledger_obj

    def test_update_and_remove(self, sample_ledger_obj):
        sample_ledger_obj.update_course("4", grade="A", is_honors_eligible=True)
        sample_ledger_obj.remove_course("1")

        records, _ = sample_ledger_obj.snapshot()
        by_id = {r.id: r for r in records}

        assert "1" not in by_id
        assert by_id["4"].grade == LetterGrade.A
        assert by_id["4"].is_honors_eligible

    def test_unknown_id_raises(self, sample_ledger_obj):
        with pytest.raises(KeyError):
            sample_ledger_obj.remove_course("missing")
        with pytest.raises(KeyError):
            sample_ledger_obj.update_course("missing", grade="A")

    def test_snapshot_unaffected_by_later_edits(self, sample_ledger_obj):
        records, _ = sample_ledger_obj.snapshot()
        sample_ledger_obj.update_course("2", grade="F", credits="1")
        sample_ledger_obj.clear()

        assert len(records) == 5
        assert records[1].grade == LetterGrade.A
        assert records[1].credit_weight == 4.0

    def test_entries_are_copies(self, sample_ledger_obj):
        entries = sample_ledger_obj.entries
        entries[0].grade = "F"

        records, _ = sample_ledger_obj.snapshot()
        assert records[0].grade == LetterGrade.A_MINUS

    def test_accepts_course_entries(self):
        ledger = CourseLedger([CourseEntry(id="z", grade="B+", credits="3", grade_level=11)])
        records, _ = ledger.snapshot()
        assert records[0].id == "z"
        assert records[0].tier == GradeLevel.GRADE_11


class TestLoadLedgerCsv:
    """Tests for CSV loading"""

    def test_groups_by_student(self, ledger_csv):
        ledgers = load_ledger_csv(ledger_csv)

        assert list(ledgers) == ["1001", "1002"]
        assert len(ledgers["1001"]) == 4
        assert len(ledgers["1002"]) == 3

    def test_flags_parsed(self, ledger_csv):
        records, _ = load_ledger_csv(ledger_csv)["1001"].snapshot()
        by_id = {r.id: r for r in records}

        assert by_id["b"].is_honors_eligible
        assert not by_id["a"].is_honors_eligible
        assert "d" not in by_id  # counts = No

    def test_single_ledger_without_student_column(self, tmp_path):
        path = tmp_path / "one.csv"
        path.write_text(
            "Name,Grade,Credits,Honors,Counts,Grade Level\n"
            "English 10,A,4,yes,yes,10th\n"
            "Art,,3,no,yes,10\n",
            encoding="utf-8",
        )
        ledgers = load_ledger_csv(path)

        assert list(ledgers) == ["default"]
        records, rejected = ledgers["default"].snapshot()
        assert len(records) == 1
        assert rejected[0].reason == "missing grade"

    def test_duplicate_id_rows_rejected_not_fatal(self, tmp_path):
        path = tmp_path / "dupes.csv"
        path.write_text(
            "student_id,id,name,grade,credits,honors,counts,grade_level\n"
            "1001,1,English 11,A,4,yes,yes,11\n"
            "1001,1,Physics,B,3,no,yes,11\n"
            "1001,2,History,B,3,no,yes,11\n"
            "1002,1,English 12,A,4,no,yes,12\n",
            encoding="utf-8",
        )
        ledgers = load_ledger_csv(path)

        assert list(ledgers) == ["1001", "1002"]
        assert len(ledgers["1001"]) == 2
        records, rejected = ledgers["1001"].snapshot()
        assert [r.name for r in records] == ["English 11", "History"]
        assert [(r.id, r.name, r.reason) for r in rejected] == [("1", "Physics", "duplicate id")]

        _, other_rejected = ledgers["1002"].snapshot()
        assert other_rejected == []

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("name,grade\nEnglish,A\n", encoding="utf-8")

        with pytest.raises(LedgerFormatError, match="credits"):
            load_ledger_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LedgerFormatError):
            load_ledger_csv(tmp_path / "nope.csv")
