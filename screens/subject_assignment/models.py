# screens/subject_assignment/models.py
"""
Data models for subject assignments.
Contains the catalog records, the assignment entity, result types and the
error taxonomy used inside the workflow.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import DAY_ABBR, DAY_ORDER
from .workflow import SubmissionState

# (instructor_id, course_id, section, academic_year, semester, year_level)
AssignmentKey = Tuple[int, int, str, str, str, str]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class AssignmentError(Exception):
    """Base class for errors raised inside the assignment workflow."""


class ValidationError(AssignmentError):
    """One or more required selection fields are missing or malformed."""

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in field_errors.items()))
        self.field_errors = dict(field_errors)


class NotFoundError(AssignmentError):
    """A referenced instructor, course or assignment does not exist."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateError(AssignmentError):
    """Every proposed assignment already exists."""

    def __init__(self, message: str, duplicates: List["Assignment"]):
        super().__init__(message)
        self.duplicates = list(duplicates)


class StoreError(AssignmentError):
    """The database could not be read (transport, missing table, ...)."""


class PersistenceError(StoreError):
    """The database rejected a write."""


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True)
class Instructor:
    id: int
    first_name: str
    last_name: str
    role: str
    middle_name: Optional[str] = None
    department: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Instructor":
        return cls(
            id=int(row["id"]),
            first_name=row["first_name"] or "",
            middle_name=row.get("middle_name"),
            last_name=row["last_name"] or "",
            role=row["role"],
            department=row.get("department"),
            is_active=bool(row["is_active"]),
        )


@dataclass(frozen=True)
class Course:
    id: int
    code: str
    name: str
    units: int
    year_level: str
    semester: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.code} - {self.name} ({self.units} units)"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Course":
        return cls(
            id=int(row["id"]),
            code=row["code"],
            name=row["name"],
            units=int(row["units"]),
            year_level=row["year_level"],
            semester=row.get("semester") or "",
        )


def normalize_days(days) -> Tuple[str, ...]:
    """
    Accept full weekday names or abbreviations, as a list or a comma-joined
    string, and return unique abbreviations in week order.
    """
    if days is None:
        return ()
    if isinstance(days, str):
        days = days.split(",")
    abbrs = set()
    for d in days:
        d = str(d).strip()
        if not d:
            continue
        d = d.title()
        abbrs.add(DAY_ABBR.get(d, d))
    return tuple(sorted(abbrs, key=lambda a: DAY_ORDER.index(a) if a in DAY_ORDER else len(DAY_ORDER)))


@dataclass
class Selection:
    """The criteria shared by every assignment of one batch submission."""
    instructor_id: Optional[int] = None
    section: str = ""
    year_level: str = ""
    semester: str = ""
    academic_year: str = ""
    days: List[str] = field(default_factory=list)
    time: str = ""


@dataclass(frozen=True)
class Assignment:
    instructor_id: int
    course_id: int
    section: str
    academic_year: str
    year_level: str
    semester: str
    days: Tuple[str, ...] = ()
    time: str = ""
    is_active: bool = True
    id: Optional[int] = None

    @property
    def key(self) -> AssignmentKey:
        return (
            self.instructor_id,
            self.course_id,
            self.section,
            self.academic_year,
            self.semester,
            self.year_level,
        )

    @property
    def days_text(self) -> str:
        return ",".join(self.days)

    def to_row(self) -> Dict[str, Any]:
        """Column values for INSERT/UPDATE (id excluded)."""
        return {
            "instructor_id": self.instructor_id,
            "course_id": self.course_id,
            "section": self.section,
            "academic_year": self.academic_year,
            "semester": self.semester,
            "year_level": self.year_level,
            "days": self.days_text,
            "time": self.time,
            "is_active": 1 if self.is_active else 0,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Assignment":
        return cls(
            id=row.get("id"),
            instructor_id=int(row["instructor_id"]),
            course_id=int(row["course_id"]),
            section=row["section"],
            academic_year=row["academic_year"],
            year_level=row["year_level"],
            semester=row["semester"],
            days=normalize_days(row.get("days")),
            time=row.get("time") or "",
            is_active=bool(row.get("is_active", 1)),
        )


@dataclass
class ValidationOutcome:
    acceptable: List[Assignment] = field(default_factory=list)
    rejected_as_duplicate: List[Assignment] = field(default_factory=list)

    @property
    def all_duplicate(self) -> bool:
        return bool(self.rejected_as_duplicate) and not self.acceptable


@dataclass
class SubmitResult:
    """What the coordinator hands back to the screen. Never raised."""
    success: bool
    message: str
    created: int = 0
    skipped: int = 0
    field_errors: Dict[str, str] = field(default_factory=dict)
    state: Optional[SubmissionState] = None


@dataclass(frozen=True)
class EnrolledStudent:
    id: int
    name: str
    email: Optional[str] = None
