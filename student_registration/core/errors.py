"""
Registration Error Taxonomy.

Validation problems are never raised: they come back as field results.
Only configuration and submission problems travel as exceptions, and they
are caught at the submission boundary (registration/services.py).
"""


class ConfigurationError(Exception):
    """The webhook endpoint is missing or still holds the placeholder."""


class SubmissionError(Exception):
    """Base class for a failed submission attempt."""

    kind = 'submission_error'


class ServerError(SubmissionError):
    """The webhook answered with a non-2xx status."""

    kind = 'server_error'

    def __init__(self, status: int, body: str = ''):
        super().__init__(f"Server error: {status} - {body}")
        self.status = status
        self.body = body


class NetworkError(SubmissionError):
    """No response reached us (connection refused, DNS, timeout...)."""

    kind = 'network_error'


class SubmissionInProgress(SubmissionError):
    """A submission for the same form instance is already in flight."""

    kind = 'in_progress'
