"""Email sender that logs instead of sending."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from bookflow.infrastructure.external.email.renderer import EmailTemplateRenderer
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUBJECT = "Message from the studio"
RECENT_LIMIT = 100


class LogOnlyEmailSender:
    """IEmailSender implementation that logs instead of sending email.

    A known template id is rendered to subject/body with EmailTemplateRenderer;
    anything else is treated as a literal body. Use when no mail transport is
    configured.
    """

    def __init__(self, renderer: EmailTemplateRenderer | None = None) -> None:
        self._renderer = renderer or EmailTemplateRenderer()
        self.sent: deque[dict[str, str]] = deque(maxlen=RECENT_LIMIT)

    async def send(
        self,
        to: str,
        subject: str | None,
        template_id_or_body: str,
        variables: dict[str, Any],
    ) -> bool:
        """Render and log the email; always accepted."""
        if self._renderer.has_template(template_id_or_body):
            rendered_subject, body = self._renderer.render(
                template_id_or_body, variables
            )
            subject = subject or rendered_subject
        else:
            body = template_id_or_body
        subject = subject or DEFAULT_SUBJECT
        self.sent.append({"to": to, "subject": subject, "body": body})
        logger.info("Workflow email: would send to %s (subject=%r)", to, subject[:80])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Workflow email body (first 500 chars): %s", body[:500])
        return True
