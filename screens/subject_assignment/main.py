# screens/subject_assignment/main.py
"""
Subject Assignments - Main Screen

One ScreenFlow object in session state decides what is shown: the grouped
list, the create form, the edit form, a delete confirmation or a roster.
Cached reads are cleared explicitly after every successful change.
"""

from dataclasses import asdict
from typing import List

import pandas as pd
import streamlit as st

from core.settings import load_settings
from core.db import get_engine
from core.forms import tagline, field_error, success, warn, info

from screens.subject_assignment import catalog_store, coordinator
from screens.subject_assignment.catalog_store import CatalogStore
from screens.subject_assignment.constants import (
    DAY_ABBR,
    MSG_ASSIGNMENT_NOT_FOUND,
    SEMESTER_SHORT,
    SEMESTERS,
    WEEKDAYS,
    YEAR_LEVELS,
    academic_year_options,
)
from screens.subject_assignment.exports import assignments_frame, export_assignments
from screens.subject_assignment.models import Selection, StoreError
from screens.subject_assignment.store import AssignmentStore
from screens.subject_assignment.workflow import ScreenFlow, ScreenMode, SubmissionState

PAGE_TITLE = "Subject Assignments"
FLOW_KEY = "subject_assignment_flow"

_FULL_DAY = {abbr: day for day, abbr in DAY_ABBR.items()}

# ============================================================================
# CACHED READS
# ============================================================================

@st.cache_data(ttl=300)
def _cached_catalog(_engine):
    return catalog_store.load_instructors(_engine), catalog_store.load_courses(_engine)


@st.cache_data(ttl=60)
def _cached_views(_engine, year_level: str):
    return catalog_store.load_assignment_views(_engine, year_level=year_level)


def _invalidate():
    _cached_catalog.clear()
    _cached_views.clear()


def _flow() -> ScreenFlow:
    if FLOW_KEY not in st.session_state:
        st.session_state[FLOW_KEY] = ScreenFlow()
    return st.session_state[FLOW_KEY]


def _show_notice(flow: ScreenFlow):
    notice = flow.pop_notice()
    if not notice:
        return
    kind, msg = notice
    {"success": success, "warning": warn, "error": st.error}.get(kind, info)(msg)


# ============================================================================
# UI COMPONENTS
# ============================================================================

def render_assignment_form(engine, flow: ScreenFlow, catalog: CatalogStore, sections: List[str], ay_span: int):
    """
    Create (many courses) or edit (one row) form.

    Instructor and year level sit outside st.form so the course list reacts
    to them immediately.
    """
    edit_mode = flow.mode is ScreenMode.EDITING
    st.subheader("✏️ Edit Assignment" if edit_mode else "➕ Assign Subjects")

    existing = None
    if edit_mode:
        existing = AssignmentStore(engine).get(flow.assignment_id)
        if existing is None:
            flow.close(("error", MSG_ASSIGNMENT_NOT_FOUND)); st.rerun()
    prefill, prefill_course = coordinator.selection_for(existing) if existing else (Selection(), None)
    errors = flow.field_errors

    # an edit keeps its instructor selectable even after deactivation
    ids = [i.id for i in catalog_store.filter_instructors(catalog.instructors)]
    if prefill.instructor_id is not None and prefill.instructor_id not in ids and catalog.instructor(prefill.instructor_id):
        ids.append(prefill.instructor_id)
    col1, col2 = st.columns(2)
    with col1:
        instructor_id = st.selectbox(
            "Instructor*",
            options=[None] + ids,
            index=(ids.index(prefill.instructor_id) + 1) if prefill.instructor_id in ids else 0,
            format_func=lambda x: "— select —" if x is None else f"{catalog.instructor(x).full_name} ({catalog.instructor(x).department or 'no dept'})",
        )
        field_error(errors, "instructor_id")
    with col2:
        levels = [""] + list(YEAR_LEVELS)
        year_level = st.selectbox(
            "Year Level*", options=levels,
            index=levels.index(prefill.year_level) if prefill.year_level in levels else 0,
        )
        field_error(errors, "year_level")

    form_key = f"assign_form_edit_{flow.assignment_id}" if edit_mode else "assign_form_create"
    with st.form(form_key):
        courses = catalog.courses_for(year_level=year_level or None)
        course_ids = [c.id for c in courses]
        if edit_mode:
            picked = st.selectbox(
                "Subject*", options=course_ids,
                index=course_ids.index(prefill_course) if prefill_course in course_ids else 0,
                format_func=lambda x: catalog.course(x).display_name,
            ) if course_ids else None
            selected_courses = [picked] if picked is not None else []
        else:
            selected_courses = st.multiselect(
                "Subjects*", options=course_ids,
                format_func=lambda x: f"{catalog.course(x).display_name} · {SEMESTER_SHORT.get(catalog.course(x).semester, catalog.course(x).semester)}",
                help="Pick a year level first to narrow the list.",
            )
        field_error(errors, "course_ids")

        c1, c2, c3 = st.columns(3)
        ay_opts = [""] + academic_year_options(ay_span)
        if prefill.academic_year and prefill.academic_year not in ay_opts:
            ay_opts.append(prefill.academic_year)
        academic_year = c1.selectbox("Academic Year*", ay_opts, index=ay_opts.index(prefill.academic_year))
        with c1: field_error(errors, "academic_year")
        sec_opts = [""] + list(sections)
        if prefill.section and prefill.section not in sec_opts:
            sec_opts.append(prefill.section)
        section = c2.selectbox("Section*", sec_opts, index=sec_opts.index(prefill.section))
        with c2: field_error(errors, "section")
        sem_opts = [""] + list(SEMESTERS)
        semester = c3.selectbox("Semester*", sem_opts, index=sem_opts.index(prefill.semester) if prefill.semester in sem_opts else 0)
        with c3: field_error(errors, "semester")

        d1, d2 = st.columns([2, 1])
        days = d1.multiselect("Day(s)*", list(WEEKDAYS), default=[_FULL_DAY[d] for d in prefill.days if d in _FULL_DAY])
        with d1: field_error(errors, "days")
        time = d2.text_input("Time*", value=prefill.time, placeholder="08:00-09:30")
        with d2: field_error(errors, "time")

        is_active = st.checkbox("Active", value=existing.is_active) if edit_mode else True

        col_sub, col_can = st.columns([3, 1])
        submitted = col_sub.form_submit_button("💾 Save", type="primary", use_container_width=True)
        cancelled = col_can.form_submit_button("❌ Cancel", use_container_width=True)

    if cancelled:
        flow.close(); st.rerun()
    if not submitted:
        return

    selection = Selection(
        instructor_id=instructor_id, section=section, year_level=year_level,
        semester=semester, academic_year=academic_year, days=days, time=time,
    )
    if edit_mode:
        result = coordinator.update_assignment(
            engine, flow.assignment_id, selection,
            selected_courses[0] if selected_courses else None, is_active=is_active, catalog=catalog,
        )
    else:
        result = coordinator.submit(engine, selection, selected_courses, catalog=catalog)

    if result.success:
        _invalidate()
        flow.close(("success", result.message))
    elif result.state is SubmissionState.ALL_DUPLICATE:
        flow.reject({}, ("warning", result.message))
    else:
        flow.reject(result.field_errors, ("error", result.message))
    st.rerun()


def _render_row(row: dict, flow: ScreenFlow):
    c_info, c_edit, c_del, c_roster = st.columns([6, 1, 1, 1])
    status = "" if row["is_active"] else " · _inactive_"
    c_info.markdown(
        f"**{row['course_code']}** {row['course_name']} ({row['units']} u) · Sec {row['section']}  \n"
        f"{row['instructor_name']} · {row['academic_year']} · {row['semester']} · "
        f"{row['days']} {row['time']}{status}"
    )
    if c_edit.button("✏️", key=f"edit_{row['id']}", help="Edit"):
        flow.go(ScreenMode.EDITING, row["id"]); st.rerun()
    if c_del.button("🗑️", key=f"del_{row['id']}", help="Delete"):
        flow.go(ScreenMode.CONFIRMING_DELETE, row["id"]); st.rerun()
    if c_roster.button("👥", key=f"roster_{row['id']}", help="View enrolled students"):
        flow.go(ScreenMode.VIEWING_ROSTER, row["id"]); st.rerun()


def render_assignments_list(engine, flow: ScreenFlow):
    top_l, top_r = st.columns([3, 1])
    with top_l:
        options = ["all"] + list(YEAR_LEVELS)
        flow.year_level_filter = st.selectbox(
            "Filter by Year Level", options,
            index=options.index(flow.year_level_filter) if flow.year_level_filter in options else 0,
            format_func=lambda x: "All Year Levels" if x == "all" else x,
        )
    with top_r:
        st.markdown("###")
        if st.button("➕ Assign Multiple Subjects", type="primary", use_container_width=True):
            flow.go(ScreenMode.CREATING); st.rerun()

    rows = _cached_views(engine, flow.year_level_filter)
    if flow.year_level_filter == "all":
        st.caption(f"{len(rows)} total assignments")
    else:
        st.caption(f"{len(rows)} assignments in {flow.year_level_filter}")

    if not rows:
        st.info("No subject assignments yet. Get started by assigning subjects to instructors.")
        return

    if flow.year_level_filter == "all":
        for level, group in catalog_store.group_by_year_level(rows).items():
            label = f"{level} · {len(group)} {'Assignment' if len(group) == 1 else 'Assignments'}"
            with st.expander(label, expanded=False):
                for row in group:
                    _render_row(row, flow)
    else:
        for row in rows:
            _render_row(row, flow)

    with st.expander("📤 Export"):
        st.dataframe(assignments_frame(rows), use_container_width=True, hide_index=True)
        fname, data = export_assignments(engine, flow.year_level_filter)
        st.download_button("Download CSV", data=data, file_name=fname, mime="text/csv")


def render_delete_confirmation(engine, flow: ScreenFlow, catalog: CatalogStore):
    assignment = AssignmentStore(engine).get(flow.assignment_id)
    if assignment is None:
        flow.close(("error", MSG_ASSIGNMENT_NOT_FOUND)); st.rerun()
    course = catalog.course(assignment.course_id)
    instructor = catalog.instructor(assignment.instructor_id)
    st.subheader("🗑️ Delete Assignment")
    st.warning(
        f"Are you sure you want to delete {course.code if course else assignment.course_id} "
        f"section {assignment.section} for {instructor.full_name if instructor else assignment.instructor_id}? "
        "This cannot be undone."
    )
    c1, c2 = st.columns(2)
    if c1.button("Yes, delete", type="primary", use_container_width=True):
        result = coordinator.delete_assignment(engine, flow.assignment_id, confirmed=True)
        if result.success:
            _invalidate()
        flow.close(("success" if result.success else "error", result.message)); st.rerun()
    if c2.button("Cancel", use_container_width=True):
        flow.close(); st.rerun()


def render_roster(engine, flow: ScreenFlow, catalog: CatalogStore):
    assignment = AssignmentStore(engine).get(flow.assignment_id)
    if assignment is None:
        flow.close(("error", MSG_ASSIGNMENT_NOT_FOUND)); st.rerun()
    course = catalog.course(assignment.course_id)
    st.subheader(f"👥 {course.display_name if course else 'Subject'} · Section {assignment.section}")
    students = catalog_store.fetch_enrolled_students(engine, assignment.course_id, assignment.section)
    if students:
        st.dataframe(pd.DataFrame([asdict(s) for s in students]), use_container_width=True, hide_index=True)
    else:
        st.info("No students enrolled in this subject and section.")
    if st.button("⬅️ Back"):
        flow.close(); st.rerun()


def render():
    settings = load_settings()
    engine = get_engine(settings.db.url)
    st.title("📚 " + PAGE_TITLE)
    tagline()

    flow = _flow()
    _show_notice(flow)

    try:
        instructors, courses = _cached_catalog(engine)
        catalog = CatalogStore.from_records(engine, instructors, courses)

        if flow.mode in (ScreenMode.CREATING, ScreenMode.EDITING):
            render_assignment_form(
                engine, flow, catalog,
                sections=settings.assignments.sections,
                ay_span=settings.assignments.academic_year_span,
            )
        elif flow.mode is ScreenMode.CONFIRMING_DELETE:
            render_delete_confirmation(engine, flow, catalog)
        elif flow.mode is ScreenMode.VIEWING_ROSTER:
            render_roster(engine, flow, catalog)
        else:
            render_assignments_list(engine, flow)
    except StoreError as e:
        st.error(f"Could not reach the database: {e}")
        if st.button("Retry"):
            _invalidate(); st.rerun()


if __name__ == "__main__":
    render()
