"""Action dispatcher: run one workflow action against its collaborator.

Placeholders in the action config are substituted first, then the action is
routed through an ActionType-keyed handler table. execute() never raises:
handler errors, collaborator errors and timeouts all come back as a failed
ActionResult.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from bookflow.application.dtos.collaborators import NotificationCreate
from bookflow.application.interfaces.services import (
    ICustomerRecordStore,
    IEmailSender,
    IHttpClient,
    INotificationStore,
)
from bookflow.application.services.template_renderer import render_config
from bookflow.domain.entities.execution import ActionResult
from bookflow.domain.entities.workflow import Action
from bookflow.domain.exceptions import ActionExecutionException, BookflowException
from bookflow.shared.enums import ActionType
from bookflow.shared.telemetry.logging import get_logger
from bookflow.shared.telemetry.tracing import add_span_attributes, traced
from bookflow.shared.utils.datetime import elapsed_ms

logger = get_logger(__name__)

UNSUPPORTED_ACTION_TYPE = "unsupported action type"

_WEBHOOK_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

ActionHandler = Callable[[dict[str, Any], Mapping[str, Any]], Awaitable[dict[str, Any]]]


def _require_str(action_type: ActionType, config: dict[str, Any], key: str) -> str:
    value = config.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ActionExecutionException(
            action_type.value, f"{action_type.value} requires config.{key}"
        )
    return value.strip()


def _optional_mapping(
    action_type: ActionType, config: dict[str, Any], key: str
) -> dict[str, Any]:
    value = config.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ActionExecutionException(
            action_type.value, f"config.{key} must be an object"
        )
    return dict(value)


class ActionDispatcher:
    """Executes actions by type: send_email, create_notification, update_customer, webhook."""

    def __init__(
        self,
        email_sender: IEmailSender,
        notification_store: INotificationStore,
        customer_store: ICustomerRecordStore,
        http_client: IHttpClient,
        *,
        action_timeout_seconds: float = 15.0,
        webhook_timeout_seconds: float = 10.0,
    ) -> None:
        self._email_sender = email_sender
        self._notification_store = notification_store
        self._customer_store = customer_store
        self._http_client = http_client
        self._action_timeout = action_timeout_seconds
        self._webhook_timeout = webhook_timeout_seconds
        self._handlers = self._build_handlers()
        missing = [t.value for t in ActionType if t not in self._handlers]
        if missing:
            raise ValueError(f"No handler registered for action types: {missing}")

    def _build_handlers(self) -> dict[ActionType, ActionHandler]:
        return {
            ActionType.SEND_EMAIL: self._send_email,
            ActionType.CREATE_NOTIFICATION: self._create_notification,
            ActionType.UPDATE_CUSTOMER: self._update_customer,
            ActionType.WEBHOOK: self._webhook,
        }

    @traced("action_dispatcher.execute")
    async def execute(self, action: Action, context: Mapping[str, Any]) -> ActionResult:
        """Run one action and report its outcome. Never raises."""
        start = time.perf_counter()
        raw_type = str(getattr(action.type, "value", action.type))
        add_span_attributes(action_type=raw_type)
        try:
            action_type = ActionType(action.type)
        except ValueError:
            logger.warning("Unsupported action type %r", raw_type)
            return ActionResult(
                action_type=raw_type,
                success=False,
                duration_ms=elapsed_ms(start, time.perf_counter()),
                error=UNSUPPORTED_ACTION_TYPE,
            )

        error: str | None = None
        output: dict[str, Any] = {}
        deadline: asyncio.Timeout | None = None
        try:
            config = render_config(action.config, context)
            async with asyncio.timeout(self._action_timeout) as deadline:
                output = await self._handlers[action_type](config, context)
        except TimeoutError as e:
            # A handler may raise TimeoutError itself, e.g. from a socket read.
            if deadline is not None and deadline.expired():
                error = f"timed out after {self._action_timeout:g}s"
            else:
                error = str(e) or e.__class__.__name__
        except BookflowException as e:
            error = e.message
        except Exception as e:
            logger.warning(
                "Action %s raised unexpectedly", action_type.value, exc_info=True
            )
            error = str(e) or e.__class__.__name__

        duration = elapsed_ms(start, time.perf_counter())
        if error is not None:
            logger.warning(
                "Action %s failed after %.2f ms: %s", action_type.value, duration, error
            )
            return ActionResult(
                action_type=action_type.value,
                success=False,
                duration_ms=duration,
                error=error,
            )
        return ActionResult(
            action_type=action_type.value,
            success=True,
            duration_ms=duration,
            output=output or {},
        )

    async def _send_email(
        self, config: dict[str, Any], context: Mapping[str, Any]
    ) -> dict[str, Any]:
        kind = ActionType.SEND_EMAIL
        to = _require_str(kind, config, "to")
        template = config.get("templateId") or config.get("body")
        if not isinstance(template, str) or not template.strip():
            raise ActionExecutionException(
                kind.value, "send_email requires config.templateId or config.body"
            )
        subject = config.get("subject")
        if subject is not None and not isinstance(subject, str):
            raise ActionExecutionException(kind.value, "config.subject must be a string")
        # Event facts are visible to the template; explicit variables win.
        variables = {**context, **_optional_mapping(kind, config, "variables")}
        sent = await self._email_sender.send(to, subject or None, template, variables)
        if not sent:
            raise ActionExecutionException(kind.value, f"email to {to} was rejected")
        return {"to": to}

    async def _create_notification(
        self, config: dict[str, Any], context: Mapping[str, Any]
    ) -> dict[str, Any]:
        user_id = config.get("userId")
        notification = NotificationCreate(
            title=str(config.get("title") or "Workflow Notification"),
            message=str(config.get("message") or "Workflow action executed"),
            type=str(config.get("type") or "system_alert"),
            priority=str(config.get("priority") or "medium"),
            user_id=str(user_id) if user_id else None,
        )
        notification_id = await self._notification_store.create(notification)
        return {"notification_id": notification_id}

    async def _update_customer(
        self, config: dict[str, Any], context: Mapping[str, Any]
    ) -> dict[str, Any]:
        kind = ActionType.UPDATE_CUSTOMER
        customer_id = _require_str(kind, config, "customerId")
        updates = _optional_mapping(kind, config, "updates")
        if not updates:
            raise ActionExecutionException(
                kind.value, "update_customer requires a non-empty config.updates"
            )
        updated = await self._customer_store.update(customer_id, updates)
        if not updated:
            raise ActionExecutionException(
                kind.value, f"customer not found: {customer_id}"
            )
        return {"customer_id": customer_id}

    async def _webhook(
        self, config: dict[str, Any], context: Mapping[str, Any]
    ) -> dict[str, Any]:
        kind = ActionType.WEBHOOK
        url = _require_str(kind, config, "url")
        if not url.startswith(("http://", "https://")):
            raise ActionExecutionException(kind.value, f"invalid webhook url: {url}")
        method = str(config.get("method") or "POST").upper()
        if method not in _WEBHOOK_METHODS:
            raise ActionExecutionException(
                kind.value, f"unsupported webhook method: {method}"
            )
        headers = {
            str(k): str(v)
            for k, v in _optional_mapping(kind, config, "headers").items()
        }
        response = await self._http_client.request(
            url, method, headers, config.get("payload"), self._webhook_timeout
        )
        if not response.ok:
            raise ActionExecutionException(
                kind.value, f"webhook returned HTTP {response.status_code}"
            )
        return {"status_code": response.status_code}
