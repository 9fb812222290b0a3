"""Email: Jinja template rendering and the log-only sender."""

from bookflow.infrastructure.external.email.renderer import EmailTemplateRenderer
from bookflow.infrastructure.external.email.sender import LogOnlyEmailSender

__all__ = ["EmailTemplateRenderer", "LogOnlyEmailSender"]
