# schemas/instructors_schema.py
"""
Instructor directory. Owned by the user-management side of the dashboard;
the subject assignment workflow only reads it.
"""

from __future__ import annotations
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from core.schema_registry import register
import logging

log = logging.getLogger(__name__)


@register
def install_instructors_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS instructors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                middle_name TEXT,
                last_name TEXT NOT NULL,
                email TEXT UNIQUE COLLATE NOCASE,
                role TEXT NOT NULL DEFAULT 'instructor'
                    CHECK(role IN ('teacher', 'instructor')),
                department TEXT,
                is_active INTEGER NOT NULL DEFAULT 1,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME
            )
        """))
        conn.execute(sa_text("""
            CREATE INDEX IF NOT EXISTS ix_instructors_role_active
            ON instructors(role, is_active)
        """))
    log.info("instructors table ready")
