from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .diagnostics import Diagnostic
from .placeholders import PLACEHOLDER_IMAGE_URL, placeholder_for, utc_timestamp
from .registry import DEFAULT_REGISTRY, SchemaRegistry
from .schema_validator import SCHEMA_CONTEXT
from .type_matcher import DATE_TIME_FORMAT

logger = logging.getLogger(__name__)

MISSING_REQUIRED = "Missing required property"
INVALID_TYPE = "Invalid type"

_GRAPH_PATH_RE = re.compile(r"^@graph\[(\d+)\]$")
_NESTED_TYPE_RE = re.compile(r'Expected @type to be "([^"]+)"')

_FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

DiagnosticLike = Union[Diagnostic, Dict[str, Any]]


def parse_date(text: str) -> Optional[datetime]:
    """Best-effort parse of ``text`` into an aware UTC datetime, or None."""
    raw = (text or "").strip()
    if not raw:
        return None
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass
    if parsed is None:
        try:
            parsed = parsedate_to_datetime(raw)
        except (TypeError, ValueError, IndexError, OverflowError):
            parsed = None
    if parsed is None:
        for fmt in _FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # Offset pushes the instant outside year 1..9999.
        logger.debug("Date out of range after UTC conversion: %s", raw)
        return None


def _is_missing(doc: Dict[str, Any], key: str) -> bool:
    return doc.get(key) is None


def _fix_graph_item(
    fixed: Dict[str, Any],
    diagnostic: Diagnostic,
    *,
    registry: SchemaRegistry,
    now: Optional[datetime],
) -> bool:
    match = _GRAPH_PATH_RE.match(diagnostic.path)
    graph = fixed.get("@graph")
    if not match or not diagnostic.details or not isinstance(graph, list):
        return False
    index = int(match.group(1))
    if index >= len(graph) or not isinstance(graph[index], dict):
        return False
    repaired_item = attempt_to_fix_schema(graph[index], diagnostic.details, registry=registry, now=now)
    if repaired_item is None:
        return False
    new_graph = list(graph)
    new_graph[index] = repaired_item
    fixed["@graph"] = new_graph
    return True


def attempt_to_fix_schema(
    doc: Dict[str, Any],
    diagnostics: Iterable[DiagnosticLike],
    *,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
    now: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """Return a shallow copy of ``doc`` with common issues patched, or None.

    Each diagnostic triggers at most one fix. Placeholders are meant for manual
    review before publishing; the input document is never mutated.
    """
    if not isinstance(doc, dict):
        return None

    fixed: Dict[str, Any] = dict(doc)
    spec = registry.lookup(doc.get("@type"))
    modified = False

    for raw in diagnostics:
        diagnostic = Diagnostic.coerce(raw)
        path = diagnostic.path
        message = diagnostic.message

        if path == "@context":
            if _is_missing(fixed, "@context"):
                fixed["@context"] = SCHEMA_CONTEXT
                modified = True
            continue

        if MISSING_REQUIRED in message:
            if _is_missing(fixed, path) and spec is not None:
                placeholder = placeholder_for(path, spec.expected_type_for(path), now=now)
                if placeholder is not None:
                    fixed[path] = placeholder.value
                    modified = True
            continue

        if INVALID_TYPE in message and f"string:{DATE_TIME_FORMAT}" in message:
            current = fixed.get(path)
            if isinstance(current, str):
                parsed = parse_date(current)
                if parsed is not None:
                    fixed[path] = utc_timestamp(parsed)
                    modified = True
            continue

        if path == "image" and INVALID_TYPE in message:
            if isinstance(fixed.get("image"), bool):
                fixed["image"] = PLACEHOLDER_IMAGE_URL
                modified = True
            continue

        if _fix_graph_item(fixed, diagnostic, registry=registry, now=now):
            modified = True

    if modified:
        logger.debug("Repaired schema document of type %s", doc.get("@type"))
    return fixed if modified else None


def suggest_fix(
    doc: Dict[str, Any],
    diagnostic: DiagnosticLike,
    *,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> Optional[str]:
    """Return a human-readable fix instruction for one diagnostic, or None."""
    diagnostic = Diagnostic.coerce(diagnostic)
    path = diagnostic.path
    message = diagnostic.message
    schema_type = doc.get("@type") if isinstance(doc, dict) else None

    if path == "@context":
        return f'Add "@context": "{SCHEMA_CONTEXT}"'

    if path == "@type" and "Missing @type" in message:
        return 'Add "@type" with a schema.org type such as "Article"'

    if MISSING_REQUIRED in message:
        spec = registry.lookup(schema_type)
        if spec is None:
            return None
        placeholder = placeholder_for(path, spec.expected_type_for(path))
        if placeholder is None:
            return None
        return f'Add "{path}": {placeholder.display}'

    if INVALID_TYPE in message:
        _, _, expected = message.partition("expected ")
        return f"Fix type for {path} to match {expected or 'the expected type'}"

    nested_type = _NESTED_TYPE_RE.search(message)
    if nested_type and path.endswith(".@type"):
        return f'Set "@type": "{nested_type.group(1)}"'

    if _GRAPH_PATH_RE.match(path) and diagnostic.details:
        count = len(diagnostic.details)
        return f"Fix the {count} issue{'s' if count != 1 else ''} reported for this @graph item"

    return None


def suggest_fixes(
    doc: Dict[str, Any],
    diagnostics: Iterable[DiagnosticLike],
    *,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> List[Optional[str]]:
    return [suggest_fix(doc, diagnostic, registry=registry) for diagnostic in diagnostics]
