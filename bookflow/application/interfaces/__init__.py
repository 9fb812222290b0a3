"""Application ports: repository and collaborator protocols."""

from bookflow.application.interfaces.repositories import (
    IExecutionRecordRepository,
    IWorkflowRepository,
)
from bookflow.application.interfaces.services import (
    ICustomerRecordStore,
    IEmailSender,
    IHttpClient,
    INotificationStore,
)

__all__ = [
    "ICustomerRecordStore",
    "IEmailSender",
    "IExecutionRecordRepository",
    "IHttpClient",
    "INotificationStore",
    "IWorkflowRepository",
]
