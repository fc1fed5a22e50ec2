# screens/subject_assignment/store.py
"""
Database access for the assignments table.

Every SQLAlchemy error is wrapped once here: reads raise StoreError, writes
raise PersistenceError. The message is the driver's own text.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import bindparam, text as sa_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .models import Assignment, PersistenceError, StoreError

log = logging.getLogger(__name__)

_COLUMNS = """
    id, instructor_id, course_id, section, academic_year, semester,
    year_level, days, time, is_active, created_at, updated_at
"""

# Columns a filter or an update may name.
FILTERABLE = frozenset({
    "id", "instructor_id", "course_id", "section", "academic_year",
    "semester", "year_level", "days", "time", "is_active",
})


def _db_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _where(filters: Dict[str, Any]) -> str:
    unknown = set(filters) - FILTERABLE
    if unknown:
        raise ValueError(f"Unknown assignment column(s): {sorted(unknown)}")
    if not filters:
        return ""
    return " WHERE " + " AND ".join(f"{k} = :{k}" for k in sorted(filters))


class AssignmentStore:
    """Select / insert / update / delete / count on ``assignments``."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def select(self, **filters: Any) -> List[Assignment]:
        query = f"SELECT {_COLUMNS} FROM assignments{_where(filters)} ORDER BY created_at DESC, id DESC"
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(sa_text(query), filters).fetchall()
        except SQLAlchemyError as e:
            log.error(f"Failed to read assignments: {e}")
            raise StoreError(_db_message(e)) from e
        return [Assignment.from_row(dict(r._mapping)) for r in rows]

    def get(self, assignment_id: int) -> Optional[Assignment]:
        found = self.select(id=assignment_id)
        return found[0] if found else None

    def find_existing(
        self,
        instructor_id: int,
        section: str,
        academic_year: str,
        semester: str,
        year_level: str,
        course_ids: Iterable[int],
    ) -> List[Assignment]:
        """
        Active assignments of one instructor scope for any of ``course_ids``,
        fetched in a single query.
        """
        ids = sorted({int(c) for c in course_ids})
        if not ids:
            return []
        stmt = sa_text(f"""
            SELECT {_COLUMNS}
            FROM assignments
            WHERE instructor_id = :iid
              AND section = :sec
              AND academic_year = :ay
              AND semester = :sem
              AND year_level = :yl
              AND is_active = 1
              AND course_id IN :cids
        """).bindparams(bindparam("cids", expanding=True))
        params = {
            "iid": instructor_id,
            "sec": section,
            "ay": academic_year,
            "sem": semester,
            "yl": year_level,
            "cids": ids,
        }
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt, params).fetchall()
        except SQLAlchemyError as e:
            log.error(f"Duplicate lookup failed: {e}")
            raise StoreError(_db_message(e)) from e
        return [Assignment.from_row(dict(r._mapping)) for r in rows]

    def count(self, **filters: Any) -> int:
        try:
            with self.engine.begin() as conn:
                return int(conn.execute(
                    sa_text(f"SELECT COUNT(*) FROM assignments{_where(filters)}"), filters
                ).scalar() or 0)
        except SQLAlchemyError as e:
            raise StoreError(_db_message(e)) from e

    def insert_many(self, assignments: List[Assignment]) -> int:
        """Insert all rows in one transaction; either all land or none."""
        if not assignments:
            return 0
        try:
            with self.engine.begin() as conn:
                conn.execute(sa_text("""
                    INSERT INTO assignments (
                        instructor_id, course_id, section, academic_year,
                        semester, year_level, days, time, is_active, created_at
                    ) VALUES (
                        :instructor_id, :course_id, :section, :academic_year,
                        :semester, :year_level, :days, :time, :is_active, CURRENT_TIMESTAMP
                    )
                """), [a.to_row() for a in assignments])
        except SQLAlchemyError as e:
            log.error(f"Batch insert of {len(assignments)} assignments failed: {e}")
            raise PersistenceError(_db_message(e)) from e
        return len(assignments)

    def update(self, assignment_id: int, values: Dict[str, Any]) -> int:
        """Update one row by id. Returns the number of rows touched."""
        unknown = set(values) - (FILTERABLE - {"id"})
        if unknown:
            raise ValueError(f"Cannot update column(s): {sorted(unknown)}")
        if not values:
            return 0
        sets = ", ".join(f"{k} = :{k}" for k in sorted(values))
        params = dict(values, id=assignment_id)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(sa_text(f"""
                    UPDATE assignments
                    SET {sets}, updated_at = CURRENT_TIMESTAMP
                    WHERE id = :id
                """), params)
                return result.rowcount
        except SQLAlchemyError as e:
            log.error(f"Failed to update assignment {assignment_id}: {e}")
            raise PersistenceError(_db_message(e)) from e

    def delete(self, assignment_id: int) -> int:
        """Hard delete by id. Returns the number of rows removed."""
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sa_text("DELETE FROM assignments WHERE id = :id"), {"id": assignment_id}
                )
                return result.rowcount
        except SQLAlchemyError as e:
            log.error(f"Failed to delete assignment {assignment_id}: {e}")
            raise PersistenceError(_db_message(e)) from e
