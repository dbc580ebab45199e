import httpx
import pytest

from student_registration.core.constants import WEBHOOK_URL_PLACEHOLDER
from student_registration.core.errors import NetworkError, ServerError, SubmissionInProgress
from student_registration.core.webhook import WebhookClient
from student_registration.registration import services

URL = 'https://hooks.example.test/workflows/registrations'


@pytest.fixture
def guard():
    return services.SubmissionGuard()


def _client(sheet, url=URL):
    return WebhookClient(url, transport=httpx.MockTransport(sheet))


def test_guard_is_single_slot(guard):
    guard.acquire('form-1')

    with pytest.raises(SubmissionInProgress):
        guard.acquire('form-1')

    # Another form instance is not affected
    guard.acquire('form-2')

    guard.release('form-1')
    guard.acquire('form-1')


def test_successful_submission_appends_row(sheet, guard, valid_values):
    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert outcome.ok
    assert outcome.kind == 'success'
    assert outcome.title == 'Registration Successful!'
    assert outcome.confirmation.status == 200
    assert sheet.rows[0][0] == 'Student Name'
    assert sheet.rows[1][:5] == ['John Smith', 'ABC123', '0123456789', '1st prep', 'cambridge']
    guard.acquire('form-1')


def test_equal_number_and_phone_never_reach_the_network(sheet, guard, valid_values):
    valid_values['studentNumber'] = '123456789'
    valid_values['parentPhone'] = '123456789'

    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert not outcome.ok
    assert outcome.kind == 'validation_error'
    assert not outcome.field_results['studentNumber'].ok
    assert not outcome.field_results['parentPhone'].ok
    assert sheet.requests == []


def test_server_error_is_mapped_to_message(make_sheet, guard, valid_values):
    sheet = make_sheet(status=500)

    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert not outcome.ok
    assert outcome.kind == 'server_error'
    assert isinstance(outcome.error, ServerError)
    assert outcome.error.status == 500
    assert outcome.message == 'Server error. Please try again later. (HTTP 500)'
    assert len(sheet.requests) == 1
    # The slot is free again so the user can retry
    guard.acquire('form-1')


def test_client_side_rejection_by_sheet(make_sheet, guard, valid_values):
    sheet = make_sheet(status=400)

    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert outcome.kind == 'server_error'
    assert outcome.message == 'Failed to submit registration. Please try again. (HTTP 400)'


def test_network_error_is_mapped_to_message(make_sheet, guard, valid_values):
    sheet = make_sheet(error=httpx.ConnectError)

    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert outcome.kind == 'network_error'
    assert isinstance(outcome.error, NetworkError)
    assert outcome.message == 'Network error. Please check your connection and try again.'
    guard.acquire('form-1')


def test_placeholder_url_blocks_submission(sheet, guard, valid_values):
    outcome = services.submit_registration(
        valid_values, _client(sheet, url=WEBHOOK_URL_PLACEHOLDER), guard, 'form-1'
    )

    assert outcome.kind == 'configuration_error'
    assert outcome.message == 'System configuration error. Please contact administrator.'
    assert sheet.requests == []


def test_reentrant_submit_is_rejected(sheet, guard, valid_values):
    guard.acquire('form-1')

    outcome = services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert outcome.kind == 'in_progress'
    assert sheet.requests == []
    # The slot still belongs to the submission already in flight
    with pytest.raises(SubmissionInProgress):
        guard.acquire('form-1')


def test_no_automatic_retry(make_sheet, guard, valid_values):
    sheet = make_sheet(status=503)

    services.submit_registration(valid_values, _client(sheet), guard, 'form-1')

    assert len(sheet.requests) == 1
