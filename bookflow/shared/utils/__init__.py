"""Shared utilities: datetime and ID generation."""

from bookflow.shared.utils.datetime import elapsed_ms, ensure_utc, utc_now
from bookflow.shared.utils.generators import generate_cuid

__all__ = [
    "elapsed_ms",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
