# screens/subject_assignment/coordinator.py
"""
Service layer for subject assignments.

submit() turns one selection plus a set of courses into new assignment rows,
skipping the ones that already exist. update_assignment() and
delete_assignment() act on a single row.

Errors never leave this module as exceptions: every path returns a
SubmitResult with a specific message.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy.engine import Engine

from .catalog_store import CatalogStore
from .constants import (
    MSG_ALL_EXIST,
    MSG_ASSIGNMENT_NOT_FOUND,
    MSG_COURSE_NOT_FOUND,
    MSG_COURSE_WRONG_YEAR_LEVEL,
    MSG_DELETE_NOT_CONFIRMED,
    MSG_DELETED,
    MSG_INCOMPLETE,
    MSG_INSTRUCTOR_INACTIVE,
    MSG_INSTRUCTOR_NOT_FOUND,
    MSG_UPDATED,
)
from .models import (
    Assignment,
    DuplicateError,
    NotFoundError,
    Selection,
    StoreError,
    SubmitResult,
    ValidationError,
    normalize_days,
)
from .store import AssignmentStore
from .validator import ensure_complete, validate
from .workflow import SubmissionFlow, SubmissionState

log = logging.getLogger(__name__)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def success_message(created: int, skipped: int) -> str:
    if skipped:
        return (
            f"{_plural(created, 'new assignment')} created. "
            f"{_plural(skipped, 'assignment')} already existed."
        )
    return f"{_plural(created, 'subject')} assigned successfully"


def _as_id(value, field: str, message: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise NotFoundError(message, field=field)


# ============================================================================
# EXPANSION
# ============================================================================

def expand_selection(selection: Selection, course_ids: Iterable) -> List[Assignment]:
    """
    One proposed assignment per distinct course id, all sharing the
    selection's instructor, section, year level, semester, academic year,
    days and time. First occurrence order is kept.
    """
    instructor_id = _as_id(selection.instructor_id, "instructor_id", MSG_INSTRUCTOR_NOT_FOUND)
    days = normalize_days(selection.days)
    seen = set()
    proposed: List[Assignment] = []
    for raw in course_ids:
        cid = _as_id(raw, "course_ids", MSG_COURSE_NOT_FOUND.format(codes=raw))
        if cid in seen:
            continue
        seen.add(cid)
        proposed.append(Assignment(
            instructor_id=instructor_id,
            course_id=cid,
            section=selection.section.strip(),
            academic_year=selection.academic_year.strip(),
            year_level=selection.year_level,
            semester=selection.semester,
            days=days,
            time=selection.time.strip(),
            is_active=True,
        ))
    return proposed


def _resolve_references(catalog: CatalogStore, proposed: List[Assignment], require_active: bool = True) -> None:
    """
    Every instructor and course id must be in the catalog snapshot, and each
    course must belong to the assignment's year level. New assignments also
    need an active instructor; edits keep the one they already have.
    """
    if not proposed:
        return
    if not catalog.loaded:
        catalog.refresh()

    instructor = catalog.instructor(proposed[0].instructor_id)
    if instructor is None:
        raise NotFoundError(MSG_INSTRUCTOR_NOT_FOUND, field="instructor_id")
    if require_active and not instructor.is_active:
        raise NotFoundError(MSG_INSTRUCTOR_INACTIVE, field="instructor_id")

    missing = [str(a.course_id) for a in proposed if catalog.course(a.course_id) is None]
    if missing:
        raise NotFoundError(MSG_COURSE_NOT_FOUND.format(codes=", ".join(missing)), field="course_ids")

    year_level = proposed[0].year_level
    off_level = [catalog.course(a.course_id).code for a in proposed
                 if catalog.course(a.course_id).year_level != year_level]
    if off_level:
        raise NotFoundError(
            MSG_COURSE_WRONG_YEAR_LEVEL.format(year_level=year_level, codes=", ".join(off_level)),
            field="course_ids",
        )


# ============================================================================
# BATCH SUBMISSION
# ============================================================================

def submit(
    engine: Engine,
    selection: Selection,
    course_ids: Iterable,
    catalog: Optional[CatalogStore] = None,
) -> SubmitResult:
    """
    Create assignments for every course in ``course_ids``.

    Steps: completeness check (no database access) -> expansion and catalog
    lookup -> one batched duplicate query -> single-transaction insert of the
    non-duplicates.
    """
    course_ids = list(course_ids or [])
    flow = SubmissionFlow()
    store = AssignmentStore(engine)

    try:
        flow.advance(SubmissionState.VALIDATING)
        ensure_complete(selection, course_ids)
        proposed = expand_selection(selection, course_ids)
        _resolve_references(catalog or CatalogStore(engine), proposed)

        flow.advance(SubmissionState.DUPLICATE_CHECK)
        first = proposed[0]
        existing = store.find_existing(
            instructor_id=first.instructor_id,
            section=first.section,
            academic_year=first.academic_year,
            semester=first.semester,
            year_level=first.year_level,
            course_ids=[a.course_id for a in proposed],
        )
        outcome = validate(proposed, existing)
        if outcome.all_duplicate:
            raise DuplicateError(MSG_ALL_EXIST, outcome.rejected_as_duplicate)

        flow.advance(SubmissionState.PERSISTING)
        created = store.insert_many(outcome.acceptable)

    except ValidationError as e:
        flow.advance(SubmissionState.REJECTED)
        return SubmitResult(False, MSG_INCOMPLETE, field_errors=e.field_errors, state=flow.state)
    except NotFoundError as e:
        flow.advance(SubmissionState.REJECTED)
        return SubmitResult(False, str(e), field_errors={e.field or "course_ids": str(e)}, state=flow.state)
    except DuplicateError as e:
        flow.advance(SubmissionState.ALL_DUPLICATE)
        log.info(f"Submission skipped: {len(e.duplicates)} assignment(s) already exist")
        return SubmitResult(False, str(e), skipped=len(e.duplicates), state=flow.state)
    except StoreError as e:
        flow.advance(SubmissionState.PERSIST_ERROR)
        log.error(f"Submission failed in the database: {e}")
        return SubmitResult(False, str(e), state=flow.state)

    skipped = len(outcome.rejected_as_duplicate)
    flow.advance(SubmissionState.SUCCESS)
    log.info(f"Created {created} assignment(s) for instructor {first.instructor_id}, skipped {skipped}")
    return SubmitResult(
        True,
        success_message(created, skipped),
        created=created,
        skipped=skipped,
        state=flow.state,
    )


# ============================================================================
# SINGLE-ROW EDIT / DELETE
# ============================================================================

def selection_for(assignment: Assignment) -> Tuple[Selection, int]:
    """Selection and course id that reproduce ``assignment`` (edit form prefill)."""
    return (
        Selection(
            instructor_id=assignment.instructor_id,
            section=assignment.section,
            year_level=assignment.year_level,
            semester=assignment.semester,
            academic_year=assignment.academic_year,
            days=list(assignment.days),
            time=assignment.time,
        ),
        assignment.course_id,
    )


def update_assignment(
    engine: Engine,
    assignment_id: int,
    selection: Selection,
    course_id,
    is_active: bool = True,
    catalog: Optional[CatalogStore] = None,
) -> SubmitResult:
    """
    Overwrite one assignment. The completeness check and the catalog lookup
    apply; the duplicate check is not run, an edit is taken as intended.
    """
    try:
        ensure_complete(selection, [course_id])
        edited = expand_selection(selection, [course_id])[0]
        _resolve_references(catalog or CatalogStore(engine), [edited], require_active=False)
        values = edited.to_row()
        values["is_active"] = 1 if is_active else 0
        touched = AssignmentStore(engine).update(assignment_id, values)
        if not touched:
            raise NotFoundError(MSG_ASSIGNMENT_NOT_FOUND, field="id")
    except ValidationError as e:
        return SubmitResult(False, MSG_INCOMPLETE, field_errors=e.field_errors)
    except NotFoundError as e:
        return SubmitResult(False, str(e), field_errors={e.field: str(e)} if e.field != "id" else {})
    except StoreError as e:
        log.error(f"Failed to update assignment {assignment_id}: {e}")
        return SubmitResult(False, str(e))

    log.info(f"Updated assignment {assignment_id}")
    return SubmitResult(True, MSG_UPDATED)


def delete_assignment(engine: Engine, assignment_id: int, confirmed: bool = False) -> SubmitResult:
    """
    Hard delete one assignment. Nothing happens unless the caller confirmed.
    Deleting an id that is not there reports "Assignment not found.".
    """
    if not confirmed:
        return SubmitResult(False, MSG_DELETE_NOT_CONFIRMED)
    try:
        removed = AssignmentStore(engine).delete(assignment_id)
        if not removed:
            raise NotFoundError(MSG_ASSIGNMENT_NOT_FOUND, field="id")
    except NotFoundError as e:
        log.warning(f"Delete of missing assignment {assignment_id}")
        return SubmitResult(False, str(e))
    except StoreError as e:
        log.error(f"Failed to delete assignment {assignment_id}: {e}")
        return SubmitResult(False, str(e))

    log.info(f"Deleted assignment {assignment_id}")
    return SubmitResult(True, MSG_DELETED)
