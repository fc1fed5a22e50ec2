"""
Tests for the assignments table access layer.
"""

import tempfile
import unittest

from screens.subject_assignment.models import Assignment, PersistenceError
from screens.subject_assignment.store import AssignmentStore

from db_fixtures import make_engine, seed_catalog


def _assignment(course_id, section="A"):
    return Assignment(
        instructor_id=1, course_id=course_id, section=section,
        academic_year="2025-2026", year_level="1st Year", semester="First Semester",
        days=("M", "W"), time="08:00-09:30",
    )


class TestAssignmentStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.engine = make_engine(self._tmp.name)
        seed_catalog(self.engine)
        self.store = AssignmentStore(self.engine)

    def tearDown(self) -> None:
        self.engine.dispose()
        self._tmp.cleanup()

    def test_insert_many_is_all_or_nothing(self) -> None:
        with self.assertRaises(PersistenceError):
            self.store.insert_many([_assignment(10), _assignment(11, section=None)])
        self.assertEqual(self.store.count(), 0)

    def test_insert_many_and_find_existing(self) -> None:
        self.assertEqual(self.store.insert_many([_assignment(10), _assignment(11), _assignment(12, "B")]), 3)
        found = self.store.find_existing(
            instructor_id=1, section="A", academic_year="2025-2026",
            semester="First Semester", year_level="1st Year", course_ids=[10, 11, 12],
        )
        self.assertEqual(sorted(a.course_id for a in found), [10, 11])
        self.assertEqual(found[0].days, ("M", "W"))

    def test_update_rejects_unknown_columns(self) -> None:
        with self.assertRaises(ValueError):
            self.store.update(1, {"created_at": "2020-01-01"})

    def test_delete_counts_rows(self) -> None:
        self.store.insert_many([_assignment(10)])
        assignment_id = self.store.select()[0].id
        self.assertEqual(self.store.delete(assignment_id), 1)
        self.assertEqual(self.store.delete(assignment_id), 0)


if __name__ == "__main__":
    unittest.main()
