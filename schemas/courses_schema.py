# schemas/courses_schema.py
"""
Course catalog (code, name, units, year level, semester).
"""

from __future__ import annotations
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from core.schema_registry import register
import logging

log = logging.getLogger(__name__)


@register
def install_courses_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS courses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                code TEXT NOT NULL UNIQUE,
                name TEXT NOT NULL,
                units INTEGER NOT NULL CHECK(units > 0),
                year_level TEXT,
                semester TEXT,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME
            )
        """))
        conn.execute(sa_text("""
            CREATE INDEX IF NOT EXISTS ix_courses_year_level
            ON courses(year_level, semester)
        """))
    log.info("courses table ready")
