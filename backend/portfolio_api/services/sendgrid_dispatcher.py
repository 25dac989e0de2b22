"""
Portfolio Backend: SendGrid Notification Dispatcher
====================================================

What:  Relays a contact message to the site owner through SendGrid.
Why:   The owner wants contact messages in their inbox, with "Reply" going
       straight to the visitor.
How:   One POST to the SendGrid v3 Mail Send endpoint via httpx. A 2xx
       response (SendGrid answers 202 Accepted) is success; anything else,
       including transport errors and timeouts, becomes DispatchError.
Who:   Called by SubmissionWorkflow after the submission has been stored.

Single attempt:
    There is no retry or backoff. The stored submission is the record of
    truth; a lost email is logged and the owner can read the table instead.

Message layout:
    To:        NotificationConfig.recipient (operator address)
    From:      NotificationConfig.sender
    Reply-To:  the visitor's address
    Subject:   "Contact Form: <name>"
    Body:      message as text/plain, plus an HTML part with name and message
"""

import html
import logging
from typing import Any, Dict, Optional

import httpx

from portfolio_api.config import NotificationConfig
from portfolio_api.exceptions import DispatchError
from portfolio_api.services.notifier_base import NotificationDispatcher

logger = logging.getLogger(__name__)


class SendGridDispatcher(NotificationDispatcher):
    """
    NotificationDispatcher backed by the SendGrid HTTP API.

    Args:
        config:     Provider credentials and addresses.
        transport:  Optional httpx transport; tests pass an httpx.MockTransport.
    """

    def __init__(
        self,
        config: NotificationConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    def build_payload(self, name: str, email: str, message: str) -> Dict[str, Any]:
        """Compose the Mail Send request body for one contact message."""
        html_body = (
            f"<strong>Name:</strong> {html.escape(name)}<br>"
            f"<strong>Message:</strong> {html.escape(message)}"
        )
        return {
            "personalizations": [{"to": [{"email": self.config.recipient}]}],
            "from": {"email": self.config.sender},
            "reply_to": {"email": email},
            "subject": f"Contact Form: {name}",
            "content": [
                {"type": "text/plain", "value": message},
                {"type": "text/html", "value": html_body},
            ],
        }

    async def notify(self, name: str, email: str, message: str) -> None:
        if not self.config.api_key:
            raise DispatchError(
                message="Email provider is not configured",
                context={"reason": "missing_api_key"},
            )

        url = f"{self.config.api_url.rstrip('/')}/mail/send"
        headers = {"Authorization": f"Bearer {self.config.api_key}"}
        payload = self.build_payload(name, email, message)

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise DispatchError(
                message="Email provider timed out",
                context={"error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            raise DispatchError(
                message="Could not reach the email provider",
                context={"error_type": type(e).__name__, "cause": str(e)},
            ) from e

        if not response.is_success:
            # SendGrid explains rejections in {"errors": [{"message": ...}]}
            raise DispatchError(
                message=f"Email provider rejected the message (HTTP {response.status_code})",
                status_code=response.status_code,
                context={"provider_errors": _provider_errors(response)},
            )

        logger.info("Email sent successfully from %s", email)


def _provider_errors(response: httpx.Response) -> list:
    try:
        body = response.json()
    except ValueError:
        return []
    if not isinstance(body, dict):
        return []
    return [
        err.get("message", "")
        for err in body.get("errors", [])
        if isinstance(err, dict)
    ]
