import json
import os
import re

import httpx
import pytest

# Config fails fast without a secret, so it has to exist before the import
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

from config import Config
from student_registration import create_app
from student_registration.core.constants import WEBHOOK_URL_PLACEHOLDER

WEBHOOK_URL = 'https://hooks.example.test/workflows/registrations'

SHEET_HEADERS = ['Student Name', 'Student Number', 'Parent Phone', 'Grade Level', 'Center', 'Timestamp']


class TestConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    REGISTRATION_WEBHOOK_URL = WEBHOOK_URL


class FakeSheetWebhook:
    """
    Stand-in for the flow + spreadsheet script: checks the record the same
    way the sheet side does and appends it as a row (header row first).
    """

    def __init__(self, status=None, error=None):
        self.status = status
        self.error = error
        self.requests = []
        self.rows = []

    def _valid(self, data):
        for key in ('studentName', 'studentNumber', 'parentPhone', 'gradeLevel', 'center'):
            value = data.get(key)
            if not isinstance(value, str) or not value.strip():
                return False
        return bool(
            re.match(r'^[0-9]{10,12}$', data['parentPhone'])
            and re.match(r'^[A-Za-z0-9]{3,20}$', data['studentNumber'])
            and re.match(r'^[A-Za-z\s]{2,50}$', data['studentName'])
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated failure", request=request)
        if self.status is not None:
            return httpx.Response(self.status, text='Internal server error: workbook locked')

        data = json.loads(request.content)
        if not self._valid(data):
            return httpx.Response(400, json={'success': False, 'message': 'Missing or invalid required fields'})

        if not self.rows:
            self.rows.append(SHEET_HEADERS)
        self.rows.append([
            data['studentName'], data['studentNumber'], data['parentPhone'],
            data['gradeLevel'], data['center'], data['timestamp'],
        ])
        row = len(self.rows)
        return httpx.Response(200, json={
            'success': True,
            'message': f'Student registration added successfully to row {row}',
            'rowNumber': row,
        })

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def sheet():
    return FakeSheetWebhook()


@pytest.fixture
def app(sheet):
    app = create_app(TestConfig)
    app.extensions['registration_webhook'].transport = httpx.MockTransport(sheet)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def unconfigured_app(sheet):
    class PlaceholderConfig(TestConfig):
        REGISTRATION_WEBHOOK_URL = WEBHOOK_URL_PLACEHOLDER

    app = create_app(PlaceholderConfig)
    app.extensions['registration_webhook'].transport = httpx.MockTransport(sheet)
    return app


@pytest.fixture
def blank_app(sheet):
    class BlankConfig(TestConfig):
        REGISTRATION_WEBHOOK_URL = ''

    app = create_app(BlankConfig)
    app.extensions['registration_webhook'].transport = httpx.MockTransport(sheet)
    return app


@pytest.fixture
def valid_values():
    return {
        'studentName': 'John Smith',
        'studentNumber': 'ABC123',
        'parentPhone': '0123456789',
        'gradeLevel': '1st prep',
        'center': 'cambridge',
    }


@pytest.fixture
def make_sheet():
    """Factory for webhooks that fail: make_sheet(status=500) or make_sheet(error=httpx.ConnectError)."""
    return FakeSheetWebhook
