"""
Validation Engine

Pure functions: every check receives the raw values and returns a
FieldResult. Nothing here raises for bad input and nothing touches the page;
rendering the result (highlight, message) is the caller's job.

Empty values (after trimming) come back UNTOUCHED so live validation stays
silent until the user types something. Only `validate_for_submit` turns
them into "required" errors.
"""

import re
from typing import Dict, Mapping, NamedTuple, Optional

from flask import current_app, has_app_context

from student_registration.core.constants import (
    CENTER,
    ERROR_MESSAGES,
    FIELDS,
    GRADE_LEVEL,
    PARENT_PHONE,
    STUDENT_NAME,
    STUDENT_NUMBER,
    VALIDATION_RULES,
)
from .models import FieldResult, FieldState, RegistrationRecord
from .resolver import GradeTable, is_center_allowed, is_known_grade

MESSAGES = ERROR_MESSAGES['validation']


class SubmitValidation(NamedTuple):
    record: Optional[RegistrationRecord]
    results: Dict[str, FieldResult]

    @property
    def ok(self) -> bool:
        return self.record is not None


def active_rules() -> Mapping[str, dict]:
    """Field rules with the app's VALIDATION_RULES overrides merged in."""
    overrides = current_app.config.get('VALIDATION_RULES') if has_app_context() else None
    if not overrides:
        return VALIDATION_RULES
    return {
        field: {**rule, **overrides.get(field, {})}
        for field, rule in VALIDATION_RULES.items()
    }


def _clean(value) -> str:
    # JSON bodies can carry numbers or lists where a string is expected
    if value is None:
        return ''
    return (value if isinstance(value, str) else str(value)).strip()


def _invalid(field: str, value: str, message: str) -> FieldResult:
    return FieldResult(field, FieldState.INVALID, value, message)


def _check_text(field: str, raw: Optional[str], rules: Optional[Mapping[str, dict]]) -> FieldResult:
    value = _clean(raw)
    if not value:
        return FieldResult(field, FieldState.UNTOUCHED)
    if not isinstance(raw, str):
        return _invalid(field, value, MESSAGES[field]['invalid'])

    rule = (rules or active_rules())[field]

    if not re.match(rule['pattern'], value):
        return _invalid(field, value, MESSAGES[field]['invalid'])

    if not rule['min_length'] <= len(value) <= rule['max_length']:
        message = MESSAGES[field]['length'].format(**rule)
        return _invalid(field, value, message)

    return FieldResult(field, FieldState.VALID, value)


def _check_distinct(result: FieldResult, other: Optional[str]) -> FieldResult:
    # Student number and parent phone must differ once both are filled in
    other = _clean(other)
    if result.ok and other and result.value == other:
        return _invalid(result.field, result.value, MESSAGES['duplicate_numbers'])
    return result


def validate_student_name(value: Optional[str], rules=None) -> FieldResult:
    return _check_text(STUDENT_NAME, value, rules)


def validate_student_number(value: Optional[str], parent_phone: Optional[str] = None,
                            rules=None) -> FieldResult:
    return _check_distinct(_check_text(STUDENT_NUMBER, value, rules), parent_phone)


def validate_parent_phone(value: Optional[str], student_number: Optional[str] = None,
                          rules=None) -> FieldResult:
    return _check_distinct(_check_text(PARENT_PHONE, value, rules), student_number)


def validate_grade_level(value: Optional[str], table: Optional[GradeTable] = None) -> FieldResult:
    grade = _clean(value)
    if not grade:
        return FieldResult(GRADE_LEVEL, FieldState.UNTOUCHED)
    if not is_known_grade(grade, table):
        return _invalid(GRADE_LEVEL, grade, MESSAGES[GRADE_LEVEL]['invalid'])
    return FieldResult(GRADE_LEVEL, FieldState.VALID, grade)


def validate_center(grade: Optional[str], value: Optional[str],
                    table: Optional[GradeTable] = None) -> FieldResult:
    """The center can only be judged once the grade itself is valid."""
    grade, center = _clean(grade), _clean(value)
    if not is_known_grade(grade, table) or not center:
        return FieldResult(CENTER, FieldState.UNTOUCHED, center)
    if not is_center_allowed(grade, center, table):
        return _invalid(CENTER, center, MESSAGES[CENTER]['invalid'])
    return FieldResult(CENTER, FieldState.VALID, center)


def validate_field(field: str, values: Mapping[str, str], rules=None,
                   table: Optional[GradeTable] = None) -> FieldResult:
    """
    Validates a single field against the full set of current values
    (the cross-field rules need the neighbours).

    Raises:
        KeyError: `field` is not one of the form fields.
    """
    if field == STUDENT_NAME:
        return validate_student_name(values.get(STUDENT_NAME), rules)
    if field == STUDENT_NUMBER:
        return validate_student_number(values.get(STUDENT_NUMBER), values.get(PARENT_PHONE), rules)
    if field == PARENT_PHONE:
        return validate_parent_phone(values.get(PARENT_PHONE), values.get(STUDENT_NUMBER), rules)
    if field == GRADE_LEVEL:
        return validate_grade_level(values.get(GRADE_LEVEL), table)
    if field == CENTER:
        return validate_center(values.get(GRADE_LEVEL), values.get(CENTER), table)
    raise KeyError(f"Unknown field: {field}")


def validate_form(values: Mapping[str, str], rules=None,
                  table: Optional[GradeTable] = None) -> Dict[str, FieldResult]:
    """Every field checked independently; one failure never hides another."""
    return {field: validate_field(field, values, rules, table) for field in FIELDS}


def validate_for_submit(values: Mapping[str, str], rules=None,
                        table: Optional[GradeTable] = None) -> SubmitValidation:
    """
    Submit-time validation: untouched fields become "required" errors.
    Returns the record only when all five fields and both cross rules hold.
    """
    results = {}
    for field, result in validate_form(values, rules, table).items():
        if result.state is FieldState.UNTOUCHED:
            # A center picked under an invalid grade is wrong, not missing
            key = 'invalid' if result.value else 'required'
            result = _invalid(field, result.value, MESSAGES[field][key])
        results[field] = result

    if all(r.ok for r in results.values()):
        return SubmitValidation(RegistrationRecord.from_values(values), results)
    return SubmitValidation(None, results)
