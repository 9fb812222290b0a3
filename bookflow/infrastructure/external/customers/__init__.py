"""Booking service customer API."""

from bookflow.infrastructure.external.customers.client import HttpCustomerRecordStore

__all__ = ["HttpCustomerRecordStore"]
