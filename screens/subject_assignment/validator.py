# screens/subject_assignment/validator.py
"""
Pure checks on proposed assignments. No database access here.
"""

from __future__ import annotations
from typing import Dict, Iterable, Optional
import re

from .constants import (
    DAY_ORDER,
    MSG_INVALID_ACADEMIC_YEAR,
    MSG_INVALID_DAYS,
    MSG_INVALID_SEMESTER,
    MSG_INVALID_YEAR_LEVEL,
    REQUIRED_FIELD_MESSAGES,
    SEMESTERS,
    YEAR_LEVELS,
)
from .models import Assignment, Selection, ValidationError, ValidationOutcome, normalize_days

_ACADEMIC_YEAR = re.compile(r"^(\d{4})-(\d{4})$")


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_academic_year(value: str) -> bool:
    """'2025-2026' style: two consecutive calendar years."""
    m = _ACADEMIC_YEAR.match((value or "").strip())
    return bool(m) and int(m.group(2)) == int(m.group(1)) + 1


def check_completeness(selection: Selection, course_ids: Optional[Iterable] = None) -> Dict[str, str]:
    """
    Per-field errors for a selection plus its course ids: missing values,
    and year level, semester or days outside the fixed sets.

    Returns an empty dict when the selection is complete and well-formed.
    """
    errors: Dict[str, str] = {}

    if _blank(selection.instructor_id):
        errors["instructor_id"] = REQUIRED_FIELD_MESSAGES["instructor_id"]
    if not [c for c in (course_ids or []) if not _blank(c)]:
        errors["course_ids"] = REQUIRED_FIELD_MESSAGES["course_ids"]
    if _blank(selection.section):
        errors["section"] = REQUIRED_FIELD_MESSAGES["section"]
    if _blank(selection.academic_year):
        errors["academic_year"] = REQUIRED_FIELD_MESSAGES["academic_year"]
    elif not is_valid_academic_year(selection.academic_year):
        errors["academic_year"] = MSG_INVALID_ACADEMIC_YEAR
    if _blank(selection.year_level):
        errors["year_level"] = REQUIRED_FIELD_MESSAGES["year_level"]
    elif selection.year_level not in YEAR_LEVELS:
        errors["year_level"] = MSG_INVALID_YEAR_LEVEL.format(choices=", ".join(YEAR_LEVELS))
    if _blank(selection.semester):
        errors["semester"] = REQUIRED_FIELD_MESSAGES["semester"]
    elif selection.semester not in SEMESTERS:
        errors["semester"] = MSG_INVALID_SEMESTER.format(choices=", ".join(SEMESTERS))
    days = normalize_days(selection.days)
    unknown_days = [d for d in days if d not in DAY_ORDER]
    if not days:
        errors["days"] = REQUIRED_FIELD_MESSAGES["days"]
    elif unknown_days:
        errors["days"] = MSG_INVALID_DAYS.format(days=", ".join(unknown_days))
    if _blank(selection.time):
        errors["time"] = REQUIRED_FIELD_MESSAGES["time"]

    return errors


def ensure_complete(selection: Selection, course_ids: Optional[Iterable] = None) -> None:
    """Raise ValidationError carrying the field errors, if any."""
    errors = check_completeness(selection, course_ids)
    if errors:
        raise ValidationError(errors)


def validate(proposed: Iterable[Assignment], existing: Iterable[Assignment]) -> ValidationOutcome:
    """
    Split proposed assignments into acceptable and duplicate.

    A proposal is a duplicate when an active existing assignment has the
    same composite key, or when an earlier proposal in the same batch
    already claimed that key. Order of ``proposed`` is kept in both lists.
    """
    taken = {a.key for a in existing if a.is_active}
    outcome = ValidationOutcome()
    for a in proposed:
        if a.key in taken:
            outcome.rejected_as_duplicate.append(a)
        else:
            outcome.acceptable.append(a)
            taken.add(a.key)
    return outcome
