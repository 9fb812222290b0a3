"""Email templates: template id -> subject/body (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import ChainableUndefined, Environment, Template

# In-repo template definitions: id -> (subject_template, body_template)
# Context: the action's variables merged over the event context.
_DEFAULT_TEMPLATES: dict[str, tuple[str, str]] = {
    "appointment_confirmation": (
        "Your appointment is confirmed",
        "Hi {{ customerName or customer.name }},\n\n"
        "Your appointment on {{ appointmentDate or appointment.startTime }} is confirmed."
        "{% if artistName %}\nArtist: {{ artistName }}{% endif %}",
    ),
    "appointment_reminder": (
        "Reminder: upcoming appointment",
        "Hi {{ customerName or customer.name }},\n\n"
        "This is a reminder of your appointment on "
        "{{ appointmentDate or appointment.startTime }}.",
    ),
    "appointment_cancelled": (
        "Your appointment was cancelled",
        "Hi {{ customerName or customer.name }},\n\n"
        "Your appointment has been cancelled. Reply to this email to rebook.",
    ),
    "payment_receipt": (
        "Payment receipt",
        "Hi {{ customerName or customer.name }},\n\n"
        "We received your payment of ${{ amount or payment.amount }}. Thank you!",
    ),
    "vip_payment_receipt": (
        "Thank you for your payment",
        "Hi {{ customerName or customer.name }},\n\n"
        "We received your payment of ${{ amount or payment.amount }}"
        "{% if paymentDate %} on {{ paymentDate }}{% endif %}. "
        "As a VIP customer you have priority booking for your next session.",
    ),
    "customer_welcome": (
        "Welcome to the studio",
        "Hi {{ customerName or customer.name }},\n\nThanks for signing up!",
    ),
}


class EmailTemplateRenderer:
    """Renders subject and body for a send_email action from a template id."""

    def __init__(
        self,
        templates: dict[str, tuple[str, str]] | None = None,
    ) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        self._env = Environment(autoescape=False, undefined=ChainableUndefined)
        self._compiled: dict[str, tuple[Template, Template]] = {}
        for key, (sub_str, body_str) in self._templates.items():
            self._compiled[key] = (
                self._env.from_string(sub_str),
                self._env.from_string(body_str),
            )

    def has_template(self, template_id: str) -> bool:
        return template_id in self._compiled

    def render(self, template_id: str, variables: dict[str, Any]) -> tuple[str, str]:
        """Render subject and body for the template id. Raises KeyError if id unknown."""
        if template_id not in self._compiled:
            raise KeyError(f"Unknown email template: {template_id}")
        subject_tpl, body_tpl = self._compiled[template_id]
        return subject_tpl.render(variables), body_tpl.render(variables)
