# schemas/assignments_schema.py
"""
Subject assignments: one instructor bound to one course/section/schedule
slot for an academic year and semester.

The composite key (instructor, course, section, academic year, semester,
year level) is checked by the assignment coordinator, not by a UNIQUE index:
single-row edits are allowed to land on an existing key.
"""

from __future__ import annotations
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from core.schema_registry import register
import logging

log = logging.getLogger(__name__)


@register
def install_assignments_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS assignments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                instructor_id INTEGER NOT NULL,
                course_id INTEGER NOT NULL,
                section TEXT NOT NULL,
                academic_year TEXT NOT NULL,
                semester TEXT NOT NULL,
                year_level TEXT NOT NULL,
                days TEXT NOT NULL,          -- comma-joined abbreviations, e.g. 'M,W,F'
                time TEXT NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME
            )
        """))
        # lookup path of the duplicate check
        conn.execute(sa_text("""
            CREATE INDEX IF NOT EXISTS ix_assignments_scope
            ON assignments(instructor_id, section, academic_year, semester, year_level)
        """))
        conn.execute(sa_text("""
            CREATE INDEX IF NOT EXISTS ix_assignments_course_section
            ON assignments(course_id, section)
        """))
    log.info("assignments table ready")
