"""
Registration Module Routes

Serves the form page, the JSON endpoints the page uses for live feedback
(center resolver, single-field validation) and the submit action.
"""

import uuid
from flask import (
    current_app,
    jsonify,
    render_template,
    request,
    session
)

from . import registration_bp
from . import services as registration_services
from .forms import RegistrationForm
from .resolver import center_choices, is_known_grade, reconcile_center
from .validation import validate_field
from student_registration.core.constants import ERROR_MESSAGES, FIELDS
from student_registration.core.extensions import limiter
from student_registration.core.logger import get_logger

logger = get_logger(__name__)


def _form_id() -> str:
    """Identifies this browser's form instance for the in-flight guard."""
    form_id = session.get('form_id')
    if not form_id:
        form_id = str(uuid.uuid4())
        session['form_id'] = form_id
    return form_id


def _config_error():
    if current_app.config.get('WEBHOOK_CONFIG_ERROR'):
        return ERROR_MESSAGES['system']['webhook_not_configured']
    return None


def _render_page(form, status=200, **context):
    context.setdefault('field_states', {})
    return render_template(
        'register.html',
        form=form,
        config_error=_config_error(),
        dismiss_seconds=current_app.config['MESSAGE_DISMISS_SECONDS'],
        **context
    ), status


# === PAGE ===

@registration_bp.route('/')
def index():
    """ Shows the empty registration form. """
    _form_id()
    return _render_page(RegistrationForm(formdata=None))


# === LIVE FEEDBACK (JSON) ===
# Called on every keystroke, so kept out of the default rate limits

@registration_bp.route('/api/centers')
@limiter.exempt
def centers():
    """
    Resolver: centers allowed for ?grade=<key> (empty list if unknown).
    With ?center=<key> it also says which selection survives the grade change.
    """
    grade = request.args.get('grade', '').strip()
    center = request.args.get('center', '').strip()
    return jsonify({
        'grade': grade,
        'known': is_known_grade(grade),
        'centers': [{'value': value, 'label': label} for value, label in center_choices(grade)],
        'center': reconcile_center(grade, center)
    })


@registration_bp.route('/api/validate', methods=['POST'])
@limiter.exempt
def validate():
    """ Live validation of one field: {field, values} -> {field, state, message}. """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object with "field" and "values".'}), 400

    field = data.get('field')
    values = data.get('values') or {}

    if field not in FIELDS or not isinstance(values, dict):
        return jsonify({'error': f"Unknown field: {field}"}), 400

    return jsonify(validate_field(field, values).as_dict())


# === SUBMIT ===

STATUS_BY_KIND = {
    'success': 200,
    'validation_error': 400,
    'in_progress': 409,
    'server_error': 502,
    'network_error': 502,
    'configuration_error': 503,
    'submission_error': 502,
}


@registration_bp.route('/register', methods=['POST'])
@limiter.limit(lambda: current_app.config['RATE_LIMIT_SUBMIT'])
def register():
    """
    Validates and forwards the registration to the webhook.
    On success the form comes back empty; on any failure the values stay.
    """
    form_id = _form_id()
    form = RegistrationForm()

    if not form.validate_on_submit():
        message = ''
        # CSRF failure has no field of its own
        if 'csrf_token' in form.errors:
            logger.warning("Registration rejected: invalid CSRF token")
            message = ERROR_MESSAGES['system']['submission_failed']
        outcome = registration_services.SubmissionOutcome(ok=False, message=message)
        field_states = form.field_states()
    else:
        outcome = registration_services.submit_registration(
            form.values(),
            current_app.extensions['registration_webhook'],
            current_app.extensions['submission_guard'],
            form_id
        )
        field_states = {k: r.as_dict() for k, r in outcome.field_results.items()}

    status = STATUS_BY_KIND[outcome.kind]

    if request.is_json:
        body = {'success': outcome.ok, 'kind': outcome.kind, 'message': outcome.message}
        if not outcome.ok:
            body['fields'] = field_states
        return jsonify(body), status

    if outcome.ok:
        # Cleared form after a successful registration
        return _render_page(RegistrationForm(formdata=None), status,
                            success=outcome)

    return _render_page(form, status, error_message=outcome.message or None,
                        field_states=field_states)
