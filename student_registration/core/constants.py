"""
Global System Constants.
Single Source of Truth for the registration data: grade levels, the
grade -> center table, field rules and every user-facing message.
"""

# Placeholder left in the webhook setting until an administrator replaces it
WEBHOOK_URL_PLACEHOLDER = 'YOUR_POWER_AUTOMATE_WEBHOOK_URL_HERE'

# Ordered grade keys with their display labels
GRADE_LEVELS = {
    '1st prep': '1st Preparatory',
    '2nd prep': '2nd Preparatory',
    '3rd prep': '3rd Preparatory',
    '1st sec': '1st Secondary',
    '2nd sec': '2nd Secondary',
}

# Canonical grade -> study centers table
GRADE_CENTERS = {
    '1st prep': ('cambridge',),
    '2nd prep': ('cambridge', 'heights'),
    '3rd prep': ('heights', '60'),
    '1st sec': ('heights', '60', 'top academy'),
    '2nd sec': ('heights', '60'),
}

# Field keys, in form order (they are also the JSON payload keys)
STUDENT_NAME = 'studentName'
STUDENT_NUMBER = 'studentNumber'
PARENT_PHONE = 'parentPhone'
GRADE_LEVEL = 'gradeLevel'
CENTER = 'center'

FIELDS = (STUDENT_NAME, STUDENT_NUMBER, PARENT_PHONE, GRADE_LEVEL, CENTER)

VALIDATION_RULES = {
    STUDENT_NAME: {
        'min_length': 2,
        'max_length': 50,
        'pattern': r'^[A-Za-z\s]+$',
    },
    STUDENT_NUMBER: {
        'min_length': 3,
        'max_length': 20,
        'pattern': r'^[A-Za-z0-9]+$',
    },
    PARENT_PHONE: {
        'min_length': 10,
        'max_length': 12,
        'pattern': r'^[0-9]+$',
    },
}

ERROR_MESSAGES = {
    'validation': {
        STUDENT_NAME: {
            'required': 'Student name is required.',
            'invalid': 'Student name should contain only letters and spaces.',
            'length': 'Student name should be between {min_length} and {max_length} characters.',
        },
        STUDENT_NUMBER: {
            'required': 'Student number is required.',
            'invalid': 'Student number should contain only letters and numbers.',
            'length': 'Student number should be between {min_length} and {max_length} characters.',
        },
        PARENT_PHONE: {
            'required': 'Parent phone number is required.',
            'invalid': 'Phone number should contain only numbers.',
            'length': 'Phone number should be between {min_length} and {max_length} digits.',
        },
        GRADE_LEVEL: {
            'required': 'Please select a grade level.',
            'invalid': 'Please select a valid grade level.',
        },
        CENTER: {
            'required': 'Please select a study center.',
            'invalid': 'Please select a valid study center for the chosen grade level.',
        },
        'duplicate_numbers': 'Student number and parent phone number cannot be the same.',
    },
    'system': {
        'webhook_not_configured': 'System configuration error. Please contact administrator.',
        'submission_failed': 'Failed to submit registration. Please try again.',
        'network_error': 'Network error. Please check your connection and try again.',
        'server_error': 'Server error. Please try again later.',
        'in_progress': 'Your registration is already being submitted. Please wait.',
    },
}

SUCCESS_MESSAGES = {
    'title': 'Registration Successful!',
    'message': "Welcome to our Mathematics Academy. We'll contact you soon!",
    'details': 'Your registration has been submitted and will be processed shortly.',
}
