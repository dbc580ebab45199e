"""
Webhook Integration Module (Service Layer)

Sends one registration record as JSON to the workflow-automation webhook
that appends it to the spreadsheet. Exactly one POST per call: no retry,
no backoff and no idempotency key.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import urlparse

import httpx

from .constants import WEBHOOK_URL_PLACEHOLDER
from .errors import ConfigurationError, NetworkError, ServerError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Confirmation:
    status: int
    message: str = ''


def utc_timestamp() -> str:
    """ISO-8601 instant in UTC with millisecond precision, e.g. 2025-01-31T09:15:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def check_webhook_url(url: Optional[str]) -> str:
    """
    Validates the configured endpoint before any submission is attempted.

    Raises:
        ConfigurationError: blank URL, placeholder still in place or a
            value that is not an http(s) URL.
    """
    if not url or not url.strip():
        raise ConfigurationError("Webhook URL is not configured.")

    url = url.strip()
    if WEBHOOK_URL_PLACEHOLDER in url:
        raise ConfigurationError("Webhook URL still contains the placeholder value.")

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigurationError(f"Webhook URL is not a valid http(s) URL: {url!r}")

    return url


class WebhookClient:
    """
    Thin wrapper around httpx.Client for the registration webhook.

    `transport` lets tests plug an httpx.MockTransport in place of the network.
    """

    def __init__(self, url: Optional[str], timeout: float = DEFAULT_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None,
                 clock: Optional[Callable[[], str]] = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self.clock = clock

    def check_configuration(self) -> str:
        return check_webhook_url(self.url)

    def post_record(self, record) -> Confirmation:
        """
        Serializes `record` (stamped with the current instant) and POSTs it.

        Returns:
            Confirmation: on any 2xx status (the body is ignored).

        Raises:
            ConfigurationError: the endpoint is not usable; nothing was sent.
            ServerError: the webhook answered with a non-2xx status.
            NetworkError: no response was received.
        """
        url = self.check_configuration()
        timestamp = self.clock() if self.clock else utc_timestamp()
        payload = record.stamped(timestamp).to_payload()

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                logger.info(f"Posting registration for student {payload['studentNumber']} to webhook")
                response = client.post(
                    url,
                    json=payload,
                    headers={'Content-Type': 'application/json'},
                )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout posting registration to webhook: {e}", exc_info=True)
            raise NetworkError(str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"Request error posting registration: {type(e).__name__}: {e}", exc_info=True)
            raise NetworkError(str(e)) from e

        if not response.is_success:
            logger.error(f"Webhook answered HTTP {response.status_code}: {response.text}")
            raise ServerError(response.status_code, response.text)

        logger.info(f"Webhook accepted registration (HTTP {response.status_code})")
        return Confirmation(status=response.status_code)
