"""
Submission Service Layer

Orchestrates one submit: validate all -> build record -> check the endpoint
-> take the in-flight slot -> POST -> map the result to a single
user-visible message. Every SubmissionError stops here; none reaches the
page as a raw exception.
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from student_registration.core.constants import ERROR_MESSAGES, SUCCESS_MESSAGES
from student_registration.core.errors import (
    ConfigurationError,
    NetworkError,
    ServerError,
    SubmissionError,
    SubmissionInProgress,
)
from student_registration.core.logger import get_logger
from student_registration.core.webhook import Confirmation, WebhookClient
from .models import FieldResult
from .validation import validate_for_submit

logger = get_logger(__name__)

SYSTEM_MESSAGES = ERROR_MESSAGES['system']


class SubmissionGuard:
    """
    Single-slot "submission in progress" flag per form instance.
    A second submit for the same form id is rejected, not queued.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._in_flight = set()

    def acquire(self, form_id: str) -> None:
        with self._lock:
            if form_id in self._in_flight:
                raise SubmissionInProgress(f"Submission already in progress for form {form_id}")
            self._in_flight.add(form_id)

    def release(self, form_id: str) -> None:
        with self._lock:
            self._in_flight.discard(form_id)


@dataclass
class SubmissionOutcome:
    ok: bool
    message: str
    title: Optional[str] = None
    field_results: Dict[str, FieldResult] = field(default_factory=dict)
    error: Optional[Exception] = None
    confirmation: Optional[Confirmation] = None

    @property
    def kind(self) -> str:
        if self.ok:
            return 'success'
        if self.error is None:
            return 'validation_error'
        if isinstance(self.error, ConfigurationError):
            return 'configuration_error'
        return getattr(self.error, 'kind', 'submission_error')


def _message_for(error: Exception) -> str:
    if isinstance(error, ConfigurationError):
        return SYSTEM_MESSAGES['webhook_not_configured']
    if isinstance(error, SubmissionInProgress):
        return SYSTEM_MESSAGES['in_progress']
    if isinstance(error, NetworkError):
        return SYSTEM_MESSAGES['network_error']
    if isinstance(error, ServerError):
        # 4xx means the sheet refused the data, 5xx means the sheet side broke
        if error.status >= 500:
            return f"{SYSTEM_MESSAGES['server_error']} (HTTP {error.status})"
        return f"{SYSTEM_MESSAGES['submission_failed']} (HTTP {error.status})"
    return SYSTEM_MESSAGES['submission_failed']


def submit_registration(values: Mapping[str, str], client: WebhookClient,
                        guard: SubmissionGuard, form_id: str) -> SubmissionOutcome:
    """
    Runs a complete submission attempt for the current form values.

    Args:
        values: raw field values keyed by the payload field names.
        client: webhook client bound to the configured endpoint.
        guard: in-flight registry shared by the application.
        form_id: identifies the form instance (kept in the session).

    Returns:
        SubmissionOutcome: success, or the failure with its user message.
    """
    checked = validate_for_submit(values)
    if not checked.ok:
        logger.info("Submission blocked by validation errors: "
                    f"{[f for f, r in checked.results.items() if not r.ok]}")
        return SubmissionOutcome(ok=False, message='', field_results=checked.results)

    try:
        client.check_configuration()
    except ConfigurationError as e:
        logger.critical(f"Webhook misconfigured, submission refused: {e}")
        return SubmissionOutcome(ok=False, message=_message_for(e),
                                 field_results=checked.results, error=e)

    try:
        guard.acquire(form_id)
    except SubmissionInProgress as e:
        logger.warning(str(e))
        return SubmissionOutcome(ok=False, message=_message_for(e),
                                 field_results=checked.results, error=e)

    try:
        confirmation = client.post_record(checked.record)
    except (SubmissionError, ConfigurationError) as e:
        logger.error(f"Submission failed ({type(e).__name__}): {e}")
        return SubmissionOutcome(ok=False, message=_message_for(e),
                                 field_results=checked.results, error=e)
    finally:
        guard.release(form_id)

    return SubmissionOutcome(
        ok=True,
        title=SUCCESS_MESSAGES['title'],
        message=SUCCESS_MESSAGES['message'],
        field_results=checked.results,
        confirmation=confirmation,
    )
