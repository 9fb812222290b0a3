"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions.
Infrastructure implements the interfaces (repositories, email, HTTP, customers).
"""

from bookflow.application.interfaces import (
    ICustomerRecordStore,
    IEmailSender,
    IExecutionRecordRepository,
    IHttpClient,
    INotificationStore,
    IWorkflowRepository,
)
from bookflow.application.services import (
    ActionDispatcher,
    ExecutionRecorder,
    MetricsAggregator,
    TriggerPipeline,
    WorkflowStore,
    WorkflowTemplateService,
)

__all__ = [
    "ActionDispatcher",
    "ExecutionRecorder",
    "ICustomerRecordStore",
    "IEmailSender",
    "IExecutionRecordRepository",
    "IHttpClient",
    "INotificationStore",
    "IWorkflowRepository",
    "MetricsAggregator",
    "TriggerPipeline",
    "WorkflowStore",
    "WorkflowTemplateService",
]
