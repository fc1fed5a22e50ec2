"""
Tests for the pure validation helpers (no database).
"""

import unittest

from screens.subject_assignment.constants import MSG_INVALID_ACADEMIC_YEAR
from screens.subject_assignment.models import Assignment, Selection, ValidationError, normalize_days
from screens.subject_assignment.validator import (
    check_completeness,
    ensure_complete,
    is_valid_academic_year,
    validate,
)


def _assignment(course_id, section="A", is_active=True):
    return Assignment(
        instructor_id=1, course_id=course_id, section=section,
        academic_year="2025-2026", year_level="1st Year", semester="First Semester",
        days=("M",), time="08:00", is_active=is_active,
    )


class TestCompleteness(unittest.TestCase):
    def setUp(self) -> None:
        self.selection = Selection(
            instructor_id=1, section="A", year_level="1st Year", semester="First Semester",
            academic_year="2025-2026", days=["Monday"], time="08:00",
        )

    def test_complete_selection_has_no_errors(self) -> None:
        self.assertEqual(check_completeness(self.selection, [10]), {})
        ensure_complete(self.selection, [10])

    def test_blank_strings_count_as_missing(self) -> None:
        self.selection.section = "   "
        self.assertEqual(list(check_completeness(self.selection, [10])), ["section"])

    def test_no_courses(self) -> None:
        self.assertIn("course_ids", check_completeness(self.selection, []))
        self.assertIn("course_ids", check_completeness(self.selection, None))

    def test_bad_academic_year(self) -> None:
        self.selection.academic_year = "2025-2027"
        errors = check_completeness(self.selection, [10])
        self.assertEqual(errors, {"academic_year": MSG_INVALID_ACADEMIC_YEAR})

    def test_year_level_outside_fixed_set(self) -> None:
        self.selection.year_level = "9th Year"
        errors = check_completeness(self.selection, [10])
        self.assertEqual(list(errors), ["year_level"])
        self.assertIn("1st Year", errors["year_level"])

    def test_semester_outside_fixed_set(self) -> None:
        self.selection.semester = "Winter"
        self.assertEqual(list(check_completeness(self.selection, [10])), ["semester"])

    def test_unknown_day_is_rejected(self) -> None:
        self.selection.days = ["Monday", "Funday"]
        errors = check_completeness(self.selection, [10])
        self.assertEqual(list(errors), ["days"])
        self.assertIn("Funday", errors["days"])

    def test_day_abbreviations_are_accepted(self) -> None:
        self.selection.days = ["M", "Th", "Su"]
        self.assertEqual(check_completeness(self.selection, [10]), {})

    def test_ensure_complete_raises_with_field_errors(self) -> None:
        self.selection.days = []
        with self.assertRaises(ValidationError) as ctx:
            ensure_complete(self.selection, [10])
        self.assertEqual(list(ctx.exception.field_errors), ["days"])


class TestAcademicYear(unittest.TestCase):
    def test_formats(self) -> None:
        self.assertTrue(is_valid_academic_year("2025-2026"))
        self.assertTrue(is_valid_academic_year(" 2030-2031 "))
        self.assertFalse(is_valid_academic_year("2025/2026"))
        self.assertFalse(is_valid_academic_year("2026-2025"))
        self.assertFalse(is_valid_academic_year(""))


class TestDuplicates(unittest.TestCase):
    def test_split_against_existing(self) -> None:
        outcome = validate([_assignment(10), _assignment(11)], [_assignment(10)])
        self.assertEqual([a.course_id for a in outcome.acceptable], [11])
        self.assertEqual([a.course_id for a in outcome.rejected_as_duplicate], [10])
        self.assertFalse(outcome.all_duplicate)

    def test_inactive_existing_is_ignored(self) -> None:
        outcome = validate([_assignment(10)], [_assignment(10, is_active=False)])
        self.assertEqual(len(outcome.acceptable), 1)

    def test_repeat_within_batch(self) -> None:
        outcome = validate([_assignment(10), _assignment(10)], [])
        self.assertEqual(len(outcome.acceptable), 1)
        self.assertEqual(len(outcome.rejected_as_duplicate), 1)

    def test_all_duplicate(self) -> None:
        outcome = validate([_assignment(10)], [_assignment(10)])
        self.assertTrue(outcome.all_duplicate)
        self.assertFalse(validate([], []).all_duplicate)


class TestNormalizeDays(unittest.TestCase):
    def test_names_and_abbreviations(self) -> None:
        self.assertEqual(normalize_days(["Sunday", "M", "tuesday"]), ("M", "T", "Su"))
        self.assertEqual(normalize_days("W, F,M"), ("M", "W", "F"))
        self.assertEqual(normalize_days(None), ())


if __name__ == "__main__":
    unittest.main()
