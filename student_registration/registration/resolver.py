"""
Grade -> Center Resolver

Static lookup over the canonical table in core/constants.py (or the
GRADE_CENTERS override from the app config).
"""

from typing import List, Mapping, Optional, Sequence, Tuple

from flask import current_app, has_app_context

from student_registration.core.constants import GRADE_CENTERS, GRADE_LEVELS

GradeTable = Mapping[str, Sequence[str]]


def active_table() -> GradeTable:
    """The table configured on the running app, or the canonical one outside a request."""
    if has_app_context():
        return current_app.config.get('GRADE_CENTERS') or GRADE_CENTERS
    return GRADE_CENTERS


def allowed_centers(grade: Optional[str], table: Optional[GradeTable] = None) -> Tuple[str, ...]:
    """Ordered center keys for `grade`; empty tuple for an unknown grade."""
    table = active_table() if table is None else table
    if not grade:
        return ()
    return tuple(table.get(grade, ()))


def is_known_grade(grade: Optional[str], table: Optional[GradeTable] = None) -> bool:
    table = active_table() if table is None else table
    return bool(grade) and grade in table


def is_center_allowed(grade: Optional[str], center: Optional[str], table: Optional[GradeTable] = None) -> bool:
    return bool(center) and center in allowed_centers(grade, table)


def reconcile_center(grade: Optional[str], center: Optional[str], table: Optional[GradeTable] = None) -> str:
    """
    Drops a stale center after the grade changes.
    Returns the center when the new grade still allows it, otherwise ''.
    """
    return center if is_center_allowed(grade, center, table) else ''


def center_label(center: str) -> str:
    return center[:1].upper() + center[1:]


def center_choices(grade: Optional[str], table: Optional[GradeTable] = None) -> List[Tuple[str, str]]:
    return [(c, center_label(c)) for c in allowed_centers(grade, table)]


def grade_choices(table: Optional[GradeTable] = None) -> List[Tuple[str, str]]:
    table = active_table() if table is None else table
    return [(g, GRADE_LEVELS.get(g, g)) for g in table]
