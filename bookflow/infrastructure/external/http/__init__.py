"""Outbound HTTP."""

from bookflow.infrastructure.external.http.client import HttpxClient

__all__ = ["HttpxClient"]
