"""
rota_auth.email_clients.postmark

Postmark HTTP client boundary for transactional email.

Responsibilities:
- Send single messages through the Postmark email API.
- Convert any transport or provider failure into `DeliveryError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from rota_auth.domain.data_stores import DeliveryError
from rota_auth.domain.email import Email
from rota_auth.observability.logging import get_logger
from rota_auth.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PostmarkConfig:
    base_url: str
    sender: str
    auth_token: str = field(repr=False)
    timeout_seconds: float = 10.0
    message_stream: str = "outbound"

    @classmethod
    def from_settings(cls, settings: Settings) -> PostmarkConfig:
        return cls(
            base_url=settings.postmark_base_url,
            sender=settings.email_sender,
            auth_token=settings.postmark_auth_token,
            timeout_seconds=settings.email_timeout_seconds,
        )


class PostmarkEmailClient:
    def __init__(self, *, cfg: PostmarkConfig, http: httpx.AsyncClient) -> None:
        self._cfg = cfg
        self._http = http

    async def send_email(self, recipient: Email, subject: str, content: str) -> None:
        body: dict[str, Any] = {
            "From": self._cfg.sender,
            "To": recipient.expose_secret(),
            "Subject": subject,
            "HtmlBody": content,
            "TextBody": content,
            "MessageStream": self._cfg.message_stream,
        }
        headers = {
            "Accept": "application/json",
            "X-Postmark-Server-Token": self._cfg.auth_token,
        }
        try:
            r = await self._http.post(
                self._cfg.base_url,
                json=body,
                headers=headers,
                timeout=self._cfg.timeout_seconds,
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise DeliveryError("failed to send email via Postmark") from e
        log.info("email_sent", recipient=recipient.masked(), provider="postmark")


# --- Module Notes -----------------------------------------------------------
# The `httpx.AsyncClient` is owned by the app lifespan so connections are pooled
# across requests and closed on shutdown.
