"""Placeholder substitution for action configs.

render_config walks any JSON-like tree and replaces "{{dot.path}}" in every
string leaf with the value found in the event context. It is pure: the input
tree is never modified and a new tree is returned. A placeholder that does not
resolve (or resolves to null) becomes an empty string.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from bookflow.application.services.context_path import MISSING, resolve_path

PLACEHOLDER_RE = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")


def _to_text(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str, sort_keys=True)
    return str(value)


def render_string(template: str, context: Mapping[str, Any]) -> str:
    """Substitute every placeholder in a single string."""
    return PLACEHOLDER_RE.sub(
        lambda m: _to_text(resolve_path(context, m.group(1))), template
    )


def render_config(value: Any, context: Mapping[str, Any]) -> Any:
    """Recursively substitute placeholders in string leaves; keys are left alone."""
    if isinstance(value, str):
        return render_string(value, context)
    if isinstance(value, Mapping):
        return {k: render_config(v, context) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [render_config(v, context) for v in value]
    return value


def placeholders(value: Any) -> set[str]:
    """Collect every dot-path referenced by placeholders anywhere in the tree."""
    found: set[str] = set()
    if isinstance(value, str):
        found.update(m.group(1) for m in PLACEHOLDER_RE.finditer(value))
    elif isinstance(value, Mapping):
        for v in value.values():
            found |= placeholders(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            found |= placeholders(v)
    return found
