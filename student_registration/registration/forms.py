from flask_wtf import FlaskForm
from wtforms import SelectField, StringField
from wtforms.validators import ValidationError

from student_registration.core.constants import (
    CENTER,
    ERROR_MESSAGES,
    GRADE_LEVEL,
    PARENT_PHONE,
    STUDENT_NAME,
    STUDENT_NUMBER,
)
from .models import FieldState
from .resolver import center_choices, grade_choices
from .validation import validate_field, validate_for_submit

class RegistrationForm(FlaskForm):
    # The HTML/JSON names are the payload keys (camelCase); the attributes stay snake_case.
    # Rules live in validation.py: the inline validators below only translate its results.

    student_name = StringField('Student Name', name=STUDENT_NAME)
    student_number = StringField('Student Number', name=STUDENT_NUMBER)
    parent_phone = StringField('Parent Phone', name=PARENT_PHONE)

    grade_level = SelectField('Grade Level', name=GRADE_LEVEL, validate_choice=False)

    # Dependent on the grade: choices are filled by refresh_choices()
    center = SelectField('Center', name=CENTER, validate_choice=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.refresh_choices()

    def refresh_choices(self):
        self.grade_level.choices = [('', 'Select grade level')] + grade_choices()
        centers = center_choices(self.grade_level.data)
        if centers:
            self.center.choices = [('', 'Select center')] + centers
        else:
            self.center.choices = [('', 'Please select grade level first')]

    def values(self) -> dict:
        return {
            STUDENT_NAME: self.student_name.data or '',
            STUDENT_NUMBER: self.student_number.data or '',
            PARENT_PHONE: self.parent_phone.data or '',
            GRADE_LEVEL: self.grade_level.data or '',
            CENTER: self.center.data or '',
        }

    def field_states(self) -> dict:
        """Declarative map field key -> {state, message} for the template."""
        return {key: result.as_dict() for key, result in validate_for_submit(self.values()).results.items()}

    def _check(self, key):
        result = validate_field(key, self.values())
        if result.state is FieldState.UNTOUCHED:
            messages = ERROR_MESSAGES['validation'][key]
            raise ValidationError(messages['invalid'] if result.value else messages['required'])
        if not result.ok:
            raise ValidationError(result.message)

    def validate_student_name(self, field):
        self._check(STUDENT_NAME)

    def validate_student_number(self, field):
        self._check(STUDENT_NUMBER)

    def validate_parent_phone(self, field):
        self._check(PARENT_PHONE)

    def validate_grade_level(self, field):
        self._check(GRADE_LEVEL)

    def validate_center(self, field):
        self._check(CENTER)
