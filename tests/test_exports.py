"""
Tests for the assignment DataFrame and CSV export.
"""

import io
import tempfile
import unittest

import pandas as pd

from screens.subject_assignment import coordinator
from screens.subject_assignment.constants import ASSIGNMENT_EXPORT_COLUMNS
from screens.subject_assignment.exports import assignments_frame, export_assignments
from screens.subject_assignment.models import Selection

from db_fixtures import make_engine, seed_catalog


class TestExports(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.engine = make_engine(self._tmp.name)
        seed_catalog(self.engine)
        base = dict(instructor_id=2, section="B", semester="First Semester",
                    academic_year="2025-2026", days=["Tuesday", "Thursday"], time="13:00-14:30")
        coordinator.submit(self.engine, Selection(year_level="2nd Year", **base), [20])
        coordinator.submit(self.engine, Selection(year_level="1st Year", **base), [11, 10])

    def tearDown(self) -> None:
        self.engine.dispose()
        self._tmp.cleanup()

    def test_empty_frame_has_export_columns(self) -> None:
        df = assignments_frame([])
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), ASSIGNMENT_EXPORT_COLUMNS)

    def test_frame_is_sorted_by_year_level_then_code(self) -> None:
        rows = [
            {"year_level": "2nd Year", "course_code": "CS201", "section": "A", "is_active": 1},
            {"year_level": "1st Year", "course_code": "CS102", "section": "A", "is_active": 0},
            {"year_level": "1st Year", "course_code": "CS101", "section": "A", "is_active": 1},
        ]
        df = assignments_frame(rows)
        self.assertEqual(list(df["course_code"]), ["CS101", "CS102", "CS201"])
        self.assertEqual(list(df["is_active"]), [True, False, True])

    def test_export_all(self) -> None:
        name, data = export_assignments(self.engine)
        self.assertEqual(name, "subject_assignments.csv")
        df = pd.read_csv(io.BytesIO(data))
        self.assertEqual(list(df["course_code"]), ["CS101", "CS102", "CS201"])
        self.assertEqual(list(df.columns[:3]), ["id", "instructor_name", "course_code"])
        self.assertEqual(set(df["days"]), {"T,Th"})

    def test_export_one_year_level(self) -> None:
        name, data = export_assignments(self.engine, "2nd Year")
        self.assertEqual(name, "subject_assignments_2nd.csv")
        df = pd.read_csv(io.BytesIO(data))
        self.assertEqual(list(df["course_code"]), ["CS201"])


if __name__ == "__main__":
    unittest.main()
