# screens/catalog.py
"""
Course Catalog (read-only)

Instructors and courses as the assignment form sees them, with the same
filters. Edits to the catalog happen outside this app.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from core.settings import load_settings
from core.db import get_engine
from core.forms import tagline

from screens.subject_assignment import catalog_store
from screens.subject_assignment.constants import INSTRUCTOR_ROLES, SEMESTERS, YEAR_LEVELS
from screens.subject_assignment.models import StoreError

PAGE_TITLE = "Course Catalog"


def _instructors_tab(engine):
    instructors = catalog_store.load_instructors(engine)
    departments = sorted({i.department for i in instructors if i.department})

    c1, c2, c3 = st.columns(3)
    role = c1.selectbox("Role", ["All"] + list(INSTRUCTOR_ROLES), key="cat_role")
    dept = c2.selectbox("Department", ["All"] + departments, key="cat_dept")
    active_only = c3.checkbox("Active only", value=True, key="cat_active")

    rows = catalog_store.filter_instructors(
        instructors,
        role=None if role == "All" else role,
        department=None if dept == "All" else dept,
        active_only=active_only,
    )
    st.caption(f"{len(rows)} of {len(instructors)} instructors")
    if not rows:
        st.info("No instructors match these filters.")
        return
    df = pd.DataFrame([{
        "id": i.id,
        "name": i.full_name,
        "role": i.role,
        "department": i.department or "",
        "active": i.is_active,
    } for i in rows])
    st.dataframe(df, use_container_width=True, hide_index=True)


def _courses_tab(engine):
    courses = catalog_store.load_courses(engine)

    c1, c2 = st.columns(2)
    year_level = c1.selectbox("Year Level", ["All"] + list(YEAR_LEVELS), key="cat_yl")
    semester = c2.selectbox("Semester", ["All"] + list(SEMESTERS), key="cat_sem")

    rows = catalog_store.filter_courses(
        courses,
        year_level=None if year_level == "All" else year_level,
        semester=None if semester == "All" else semester,
    )
    st.caption(f"{len(rows)} of {len(courses)} courses")
    if not rows:
        st.info("No courses match these filters.")
        return
    df = pd.DataFrame([{
        "code": c.code,
        "name": c.name,
        "units": c.units,
        "year_level": c.year_level,
        "semester": c.semester,
    } for c in rows])
    st.dataframe(df, use_container_width=True, hide_index=True)


def render():
    settings = load_settings()
    engine = get_engine(settings.db.url)
    st.title("📘 " + PAGE_TITLE)
    tagline()

    tabs = st.tabs(["👨‍🏫 Instructors", "📚 Courses"])
    try:
        with tabs[0]:
            _instructors_tab(engine)
        with tabs[1]:
            _courses_tab(engine)
    except StoreError as e:
        st.error(f"Could not load the catalog: {e}")


if __name__ == "__main__":
    render()
