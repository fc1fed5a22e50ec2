# screens/subject_assignment/__init__.py
"""
Subject Assignment Module

Assigns one or more catalog subjects to an instructor for a section,
year level, semester and academic year, with meeting days and time.

Features:
- Batch assignment of many subjects in one submission
- Existing assignments are skipped, not duplicated
- Per-field validation messages
- Year-level grouped list with edit, delete and roster views
- CSV export

Usage:
    from screens.subject_assignment import render

    render()
"""

from .main import render

__all__ = ['render']
__version__ = '1.0.0'
