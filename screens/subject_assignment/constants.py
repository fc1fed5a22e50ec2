# screens/subject_assignment/constants.py
"""
Fixed value sets and user-facing messages for subject assignments.
"""

from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional, Tuple

# Ordered cohorts; the order drives grouping and sorting.
YEAR_LEVELS: Tuple[str, ...] = ("1st Year", "2nd Year", "3rd Year", "4th Year")

SEMESTERS: Tuple[str, ...] = ("First Semester", "Second Semester", "Summer")

SEMESTER_SHORT: Dict[str, str] = {
    "First Semester": "1st Sem",
    "Second Semester": "2nd Sem",
    "Summer": "Summer",
}

INSTRUCTOR_ROLES: Tuple[str, ...] = ("teacher", "instructor")

WEEKDAYS: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

DAY_ABBR: Dict[str, str] = {
    "Monday": "M",
    "Tuesday": "T",
    "Wednesday": "W",
    "Thursday": "Th",
    "Friday": "F",
    "Saturday": "S",
    "Sunday": "Su",
}

# Week order of the stored abbreviations.
DAY_ORDER: Tuple[str, ...] = tuple(DAY_ABBR[d] for d in WEEKDAYS)

DEFAULT_SECTIONS: Tuple[str, ...] = ("A", "B", "C", "D")

UNKNOWN_YEAR_LEVEL = "Unknown"

# ============================================================================
# MESSAGES
# ============================================================================

# Keyed by the Selection field the message belongs to.
REQUIRED_FIELD_MESSAGES: Dict[str, str] = {
    "instructor_id": "Please select an instructor",
    "course_ids": "Please select at least one subject",
    "section": "Please enter a section",
    "academic_year": "Please select an academic year",
    "year_level": "Please select a year level",
    "semester": "Please select a semester",
    "days": "Please select at least one day",
    "time": "Please select a time",
}

MSG_INVALID_ACADEMIC_YEAR = "Academic year must look like 2025-2026"
MSG_INVALID_YEAR_LEVEL = "Year level must be one of: {choices}"
MSG_INVALID_SEMESTER = "Semester must be one of: {choices}"
MSG_INVALID_DAYS = "Unknown day(s): {days}"
MSG_INCOMPLETE = "Please fill in all required fields"
MSG_ALL_EXIST = "All assignments already exist for this combination."
MSG_INSTRUCTOR_NOT_FOUND = "Selected instructor no longer exists"
MSG_INSTRUCTOR_INACTIVE = "Selected instructor is inactive"
MSG_COURSE_NOT_FOUND = "Subject(s) no longer in the catalog: {codes}"
MSG_COURSE_WRONG_YEAR_LEVEL = "Subject(s) not offered for {year_level}: {codes}"
MSG_ASSIGNMENT_NOT_FOUND = "Assignment not found."
MSG_UPDATED = "Assignment updated successfully"
MSG_DELETED = "Subject assignment deleted successfully"
MSG_DELETE_NOT_CONFIRMED = "Deletion was not confirmed; nothing was deleted."

# ============================================================================
# EXPORT
# ============================================================================

ASSIGNMENT_EXPORT_COLUMNS: List[str] = [
    "id",
    "instructor_name",
    "course_code",
    "course_name",
    "units",
    "section",
    "academic_year",
    "semester",
    "year_level",
    "days",
    "time",
    "is_active",
    "created_at",
]


def academic_year_options(span: int = 3, today: Optional[date] = None) -> List[str]:
    """Academic years offered by the form, starting with the current one."""
    start = (today or date.today()).year
    return [f"{y}-{y + 1}" for y in range(start, start + span)]


def year_level_rank(level: str) -> int:
    """Sort key; unknown labels go after the fixed levels."""
    try:
        return YEAR_LEVELS.index(level)
    except ValueError:
        return len(YEAR_LEVELS)
