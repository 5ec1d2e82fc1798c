"""
Email adapter - Resend HTTP API client.

Provides:
- Single-message sends over httpx
- A result object instead of exceptions

Sending never raises. Callers get EmailResult(success=False, error=...)
and decide whether to log and move on (always, so far).
"""

from dataclasses import dataclass
import functools
import logging
from typing import List, Optional, Union

import httpx

from ...config.settings import settings

logger = logging.getLogger(__name__)


NOT_CONFIGURED = "Email service not configured. Please set RESEND_API_KEY environment variable."


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    error: Optional[str] = None
    message_id: Optional[str] = None


class EmailAdapter:
    """
    Adapter for the Resend API.

    Handles:
    - Authenticated POSTs to /emails
    - Default sender selection
    - Mapping API and transport errors to EmailResult
    """

    TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        default_from: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.api_url = api_url or settings.RESEND_API_URL
        self.default_from = default_from or settings.EMAIL_FROM

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(
        self,
        to: Union[str, List[str]],
        subject: str,
        html: str,
        from_address: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> EmailResult:
        """
        Send one email.

        Args:
            to: Recipient or recipients
            subject: Subject line
            html: HTML body
            from_address: Sender, defaults to EMAIL_FROM
            reply_to: Optional Reply-To

        Returns:
            EmailResult
        """
        if not self.is_configured:
            return EmailResult(success=False, error=NOT_CONFIGURED)

        payload = {
            "from": from_address or self.default_from,
            "to": to if isinstance(to, list) else [to],
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            async with httpx.AsyncClient(timeout=self.TIMEOUT_SECONDS) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error("Email send error for %s: %s", subject, e)
            return EmailResult(success=False, error=str(e) or "Unknown error occurred")

        if response.status_code >= 400:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            logger.error("Resend email error %s: %s", response.status_code, response.text)
            return EmailResult(success=False, error=message or "Failed to send email")

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        return EmailResult(success=True, message_id=message_id)


@functools.lru_cache(maxsize=1)
def get_email_adapter() -> EmailAdapter:
    """Get or create email adapter singleton."""
    return EmailAdapter()
