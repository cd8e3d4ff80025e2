from __future__ import annotations

from dataclasses import dataclass

from rota_auth.domain.email import Email
from rota_auth.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SentEmail:
    recipient: Email
    subject: str
    content: str


class MockEmailClient:
    """
    Keeps messages in memory instead of delivering them (dev/test). The
    outbox lets tests read a dispatched 2FA code.
    """

    def __init__(self) -> None:
        self.outbox: list[SentEmail] = []

    async def send_email(self, recipient: Email, subject: str, content: str) -> None:
        self.outbox.append(SentEmail(recipient=recipient, subject=subject, content=content))
        log.debug("email_captured", recipient=recipient.masked(), subject=subject)
