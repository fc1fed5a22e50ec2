# screens/subject_assignment/catalog_store.py
"""
Read side of the assignment workflow: instructors, courses, the joined
assignment list and class rosters.

Nothing here caches. Every call goes to the database; CatalogStore keeps a
snapshot only until the caller refreshes it.
"""

from __future__ import annotations
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import bindparam, text as sa_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .constants import INSTRUCTOR_ROLES, UNKNOWN_YEAR_LEVEL, year_level_rank
from .models import Course, EnrolledStudent, Instructor, StoreError

logger = logging.getLogger(__name__)


def _rows(engine: Engine, query, params: Optional[Dict[str, Any]] = None, what: str = "rows") -> List[Dict[str, Any]]:
    try:
        with engine.begin() as conn:
            stmt = sa_text(query) if isinstance(query, str) else query
            result = conn.execute(stmt, params or {})
            return [dict(r._mapping) for r in result]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {what}: {e}")
        orig = getattr(e, "orig", None)
        raise StoreError(str(orig) if orig is not None else str(e)) from e


# ============================================================================
# LOADERS
# ============================================================================

def load_instructors(engine: Engine) -> List[Instructor]:
    """All teachers and instructors, active or not, ordered by name."""
    rows = _rows(engine, """
        SELECT id, first_name, middle_name, last_name, role, department, is_active
        FROM instructors
        ORDER BY first_name, last_name, id
    """, what="instructors")
    return [Instructor.from_row(r) for r in rows if r["role"] in INSTRUCTOR_ROLES]


def load_courses(engine: Engine) -> List[Course]:
    """Courses that carry a year level, ordered by code."""
    rows = _rows(engine, """
        SELECT id, code, name, units, year_level, semester
        FROM courses
        ORDER BY code
    """, what="courses")
    return [Course.from_row(r) for r in rows if r.get("year_level")]


def load_assignment_views(engine: Engine, year_level: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Assignments with instructor and course details, newest first.
    Rows whose instructor or course has disappeared are left out.
    """
    query = """
        SELECT a.id, a.instructor_id, a.course_id, a.section, a.academic_year,
               a.semester, a.year_level, a.days, a.time, a.is_active, a.created_at,
               i.first_name || ' ' || i.last_name AS instructor_name,
               c.code AS course_code, c.name AS course_name, c.units AS units
        FROM assignments a
        JOIN instructors i ON i.id = a.instructor_id
        JOIN courses c ON c.id = a.course_id
    """
    params: Dict[str, Any] = {}
    if year_level and year_level != "all":
        query += " WHERE a.year_level = :yl"
        params["yl"] = year_level
    query += " ORDER BY a.created_at DESC, a.id DESC"
    return _rows(engine, query, params, what="assignments")


def fetch_enrolled_students(engine: Engine, course_id: int, section: str) -> List[EnrolledStudent]:
    """Students enrolled in one course section, ordered by name."""
    enrollments = _rows(engine, """
        SELECT student_id FROM enrollments
        WHERE course_id = :cid AND section = :sec
    """, {"cid": course_id, "sec": section}, what="enrollments")
    if not enrollments:
        return []

    ids = sorted({r["student_id"] for r in enrollments})
    students = _rows(engine, sa_text("""
        SELECT id, first_name, last_name, email
        FROM students WHERE id IN :ids
        ORDER BY last_name, first_name
    """).bindparams(bindparam("ids", expanding=True)), {"ids": ids}, what="students")

    return [
        EnrolledStudent(id=s["id"], name=f"{s['first_name']} {s['last_name']}", email=s.get("email"))
        for s in students
    ]


# ============================================================================
# CLIENT-SIDE FILTERS
# ============================================================================

def filter_instructors(
    instructors: Iterable[Instructor],
    role: Optional[str] = None,
    department: Optional[str] = None,
    active_only: bool = True,
) -> List[Instructor]:
    out = []
    for i in instructors:
        if active_only and not i.is_active:
            continue
        if role and i.role != role:
            continue
        if department and (i.department or "").lower() != department.lower():
            continue
        out.append(i)
    return out


def filter_courses(
    courses: Iterable[Course],
    year_level: Optional[str] = None,
    semester: Optional[str] = None,
) -> List[Course]:
    return [
        c for c in courses
        if (not year_level or c.year_level == year_level)
        and (not semester or c.semester == semester)
    ]


def group_by_year_level(rows: Iterable[Dict[str, Any]]) -> "OrderedDict[str, List[Dict[str, Any]]]":
    """
    Group assignment rows by year level: 1st..4th Year first, then any other
    label, with blank labels under 'Unknown'. Groups with no rows are omitted.
    """
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for row in rows:
        level = row.get("year_level") or UNKNOWN_YEAR_LEVEL
        groups.setdefault(level, []).append(row)
    ordered = sorted(groups, key=lambda lvl: (year_level_rank(lvl), lvl))
    return OrderedDict((lvl, groups[lvl]) for lvl in ordered)


# ============================================================================
# SNAPSHOT
# ============================================================================

class CatalogStore:
    """
    In-memory snapshot of instructors and courses.
    Empty until refresh() is called; refresh again after any mutation.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._instructors: Dict[int, Instructor] = {}
        self._courses: Dict[int, Course] = {}
        self.loaded = False

    @classmethod
    def from_records(cls, engine: Engine, instructors: Iterable[Instructor], courses: Iterable[Course]) -> "CatalogStore":
        """Snapshot built from records the caller already loaded."""
        store = cls(engine)
        store._instructors = {i.id: i for i in instructors}
        store._courses = {c.id: c for c in courses}
        store.loaded = True
        return store

    def refresh(self) -> "CatalogStore":
        instructors = load_instructors(self.engine)
        courses = load_courses(self.engine)
        self._instructors = {i.id: i for i in instructors}
        self._courses = {c.id: c for c in courses}
        self.loaded = True
        logger.debug(f"Catalog refreshed: {len(instructors)} instructors, {len(courses)} courses")
        return self

    @property
    def instructors(self) -> List[Instructor]:
        return list(self._instructors.values())

    @property
    def courses(self) -> List[Course]:
        return list(self._courses.values())

    def instructor(self, instructor_id: Optional[int]) -> Optional[Instructor]:
        if instructor_id is None:
            return None
        return self._instructors.get(int(instructor_id))

    def course(self, course_id: Optional[int]) -> Optional[Course]:
        if course_id is None:
            return None
        return self._courses.get(int(course_id))

    def courses_for(self, year_level: Optional[str] = None, semester: Optional[str] = None) -> List[Course]:
        return filter_courses(self.courses, year_level=year_level, semester=semester)
