"""
Registration Data Model

Immutable snapshot of the form taken at submit time, plus the declarative
per-field validation state rendered by the page.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from student_registration.core.constants import (
    CENTER,
    GRADE_LEVEL,
    PARENT_PHONE,
    STUDENT_NAME,
    STUDENT_NUMBER,
)


class FieldState(str, Enum):
    UNTOUCHED = 'untouched'
    VALID = 'valid'
    INVALID = 'invalid'


@dataclass(frozen=True)
class FieldResult:
    """Outcome of validating one field: the trimmed value or an error message."""

    field: str
    state: FieldState
    value: str = ''
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state is FieldState.VALID

    def as_dict(self) -> dict:
        return {'field': self.field, 'state': self.state.value, 'message': self.message}


@dataclass(frozen=True)
class RegistrationRecord:
    student_name: str
    student_number: str
    parent_phone: str
    grade_level: str
    center: str
    timestamp: Optional[str] = None

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> 'RegistrationRecord':
        def _get(key):
            return (values.get(key) or '').strip()

        return cls(
            student_name=_get(STUDENT_NAME),
            student_number=_get(STUDENT_NUMBER),
            parent_phone=_get(PARENT_PHONE),
            grade_level=_get(GRADE_LEVEL),
            center=_get(CENTER),
        )

    def stamped(self, timestamp: str) -> 'RegistrationRecord':
        return replace(self, timestamp=timestamp)

    def to_payload(self) -> dict:
        """JSON body for the webhook, keys exactly as the spreadsheet expects."""
        if self.timestamp is None:
            raise ValueError("Record must be stamped before it is serialized.")

        return {
            STUDENT_NAME: self.student_name,
            STUDENT_NUMBER: self.student_number,
            PARENT_PHONE: self.parent_phone,
            GRADE_LEVEL: self.grade_level,
            CENTER: self.center,
            'timestamp': self.timestamp,
        }
