"""
Editorial Notifications

Thin wrapper over the email adapter for workflow and assignment mail.
Sending never raises: a failed notification is logged and reported as
False so the parent action can carry on.
"""

from typing import Optional

from src.config.settings import settings
from src.shared.adapters.email_adapter import EmailAdapter, get_email_adapter
from src.shared.core.logging import get_logger
from src.shared.utils.email_templates import RenderedEmail

logger = get_logger(__name__)


class NotificationService:
    def __init__(self, email: Optional[EmailAdapter] = None) -> None:
        self.email = email or get_email_adapter()

    @property
    def is_configured(self) -> bool:
        return self.email.is_configured

    async def notify(self, to: Optional[str], message: RenderedEmail) -> bool:
        if not to:
            return False

        result = await self.email.send(
            to=to,
            subject=message.subject,
            html=message.html,
            from_address=settings.EMAIL_NOTIFICATIONS_FROM,
        )
        if not result.success:
            logger.warning("Notification not sent", to=to, subject=message.subject, error=result.error)
        return result.success
