"""
Shared database setup for the tests.

Every test gets its own SQLite file inside a temporary directory, so the
real data/school_admin.db is never touched.
"""

from pathlib import Path

from sqlalchemy import text as sa_text

from core.db import get_engine, init_db

INSTRUCTORS = [
    # id, first, last, role, department, is_active
    (1, "Ada", "Reyes", "instructor", "Computing", 1),
    (2, "Ben", "Santos", "teacher", "Mathematics", 1),
    (3, "Cora", "Lim", "instructor", "Computing", 0),
]

COURSES = [
    # id, code, name, units, year_level, semester
    (10, "CS101", "Intro to Programming", 3, "1st Year", "First Semester"),
    (11, "CS102", "Discrete Structures", 3, "1st Year", "First Semester"),
    (12, "CS103", "Computer Fundamentals", 2, "1st Year", "Second Semester"),
    (20, "CS201", "Data Structures", 3, "2nd Year", "First Semester"),
    (30, "CS301", "Operating Systems", 3, "3rd Year", "First Semester"),
    (99, "GE000", "Orientation", 1, None, None),
]

STUDENTS = [
    (100, "Dan", "Cruz", "dan@example.edu"),
    (101, "Eve", "Bautista", "eve@example.edu"),
    (102, "Fay", "Aquino", "fay@example.edu"),
]

ENROLLMENTS = [
    # student_id, course_id, section
    (100, 10, "A"),
    (101, 10, "A"),
    (102, 10, "B"),
]


def make_engine(directory):
    engine = get_engine(f"sqlite:///{Path(directory) / 'test.db'}")
    failed = init_db(engine)
    assert not failed, failed
    return engine


def seed_catalog(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("""
            INSERT INTO instructors (id, first_name, last_name, role, department, is_active)
            VALUES (:id, :fn, :ln, :role, :dept, :active)
        """), [
            {"id": i, "fn": fn, "ln": ln, "role": role, "dept": dept, "active": active}
            for i, fn, ln, role, dept, active in INSTRUCTORS
        ])
        conn.execute(sa_text("""
            INSERT INTO courses (id, code, name, units, year_level, semester)
            VALUES (:id, :code, :name, :units, :yl, :sem)
        """), [
            {"id": i, "code": code, "name": name, "units": units, "yl": yl, "sem": sem}
            for i, code, name, units, yl, sem in COURSES
        ])
        conn.execute(sa_text("""
            INSERT INTO students (id, first_name, last_name, email)
            VALUES (:id, :fn, :ln, :email)
        """), [
            {"id": i, "fn": fn, "ln": ln, "email": email}
            for i, fn, ln, email in STUDENTS
        ])
        conn.execute(sa_text("""
            INSERT INTO enrollments (student_id, course_id, section)
            VALUES (:sid, :cid, :sec)
        """), [
            {"sid": sid, "cid": cid, "sec": sec}
            for sid, cid, sec in ENROLLMENTS
        ])
