"""Canned placeholder values shared by schema repair and fix suggestions."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .type_matcher import DATE_TIME_FORMAT, BaseType, TypeExpression

PLACEHOLDER_TEXT = "[PLACEHOLDER] - Replace with real value"
PLACEHOLDER_IMAGE_URL = "https://example.com/placeholder-image.jpg"
ISO_FORMAT_HINT = '"YYYY-MM-DDThh:mm:ss+00:00" (ISO format)'

CANNED_OBJECTS: Dict[str, Dict[str, Any]] = {
    "author": {"@type": "Person", "name": "Author Name"},
    "publisher": {
        "@type": "Organization",
        "name": "Publisher Name",
        "logo": {"@type": "ImageObject", "url": "https://example.com/logo.png"},
    },
    "location": {
        "@type": "Place",
        "name": "Location Name",
        "address": {"@type": "PostalAddress", "streetAddress": "Street", "addressLocality": "City"},
    },
}

CANNED_ARRAYS: Dict[str, list] = {
    "mainEntity": [
        {
            "@type": "Question",
            "name": "Question text",
            "acceptedAnswer": {"@type": "Answer", "text": "Answer text"},
        }
    ],
    "itemListElement": [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": "https://example.com"},
    ],
}


def format_inline(value: Any) -> str:
    """Render a JSON value on one line: ``{ "k": "v" }``, ``[{ ... }]``."""
    if isinstance(value, dict):
        if not value:
            return "{ }"
        body = ", ".join(f"{json.dumps(key)}: {format_inline(item)}" for key, item in value.items())
        return "{ " + body + " }"
    if isinstance(value, list):
        return "[" + ", ".join(format_inline(item) for item in value) + "]"
    return json.dumps(value)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Placeholder:
    value: Any
    display: str


def placeholder_for(
    prop: str,
    expression: Optional[TypeExpression],
    *,
    now: Optional[datetime] = None,
) -> Optional[Placeholder]:
    """Return the placeholder for ``prop`` given its expected type.

    Unions use their first arm; object and array values are canned per
    property name.
    """
    if expression is None:
        return None
    arm = expression.primary

    if arm.base is BaseType.STRING:
        if arm.format == DATE_TIME_FORMAT:
            return Placeholder(value=utc_timestamp(now), display=ISO_FORMAT_HINT)
        return Placeholder(value=PLACEHOLDER_TEXT, display=json.dumps(PLACEHOLDER_TEXT))
    if arm.base is BaseType.NUMBER:
        return Placeholder(value=0, display="0")
    if arm.base is BaseType.BOOLEAN:
        return Placeholder(value=False, display="false")
    if arm.base is BaseType.OBJECT:
        value = copy.deepcopy(CANNED_OBJECTS.get(prop, {}))
        return Placeholder(value=value, display=format_inline(value))
    if arm.base is BaseType.ARRAY:
        value = copy.deepcopy(CANNED_ARRAYS.get(prop, []))
        return Placeholder(value=value, display=format_inline(value))
    return None
