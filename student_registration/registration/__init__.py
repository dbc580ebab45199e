"""
Registration Module (Blueprint)

Defines the Flask Blueprint for the registration page, the live
validation/resolver endpoints and the submit route.
"""

from flask import Blueprint

registration_bp = Blueprint(
    'registration_bp',
    __name__,
    template_folder='templates'  # Tells the Blueprint where its templates live
)

# Routes are imported at the end to avoid a circular import
from . import routes
