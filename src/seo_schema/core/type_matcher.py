from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Tuple, Union

DATE_TIME_FORMAT = "date-time"

_DATE_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


class BaseType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


@dataclass(frozen=True)
class TypeArm:
    base: BaseType
    format: Optional[str] = None

    def __str__(self) -> str:
        if self.format:
            return f"{self.base.value}:{self.format}"
        return self.base.value


@dataclass(frozen=True)
class TypeExpression:
    """Union of base types, evaluated left to right."""

    arms: Tuple[TypeArm, ...]

    def __str__(self) -> str:
        return "|".join(str(arm) for arm in self.arms)

    @property
    def primary(self) -> TypeArm:
        return self.arms[0]

    def mentions(self, base: BaseType, fmt: Optional[str] = None) -> bool:
        return any(arm.base is base and arm.format == fmt for arm in self.arms)


@lru_cache(maxsize=128)
def parse_type_expression(text: str) -> TypeExpression:
    """Parse ``"string|object"`` / ``"string:date-time"`` into a TypeExpression.

    Raises ``ValueError`` for empty expressions or unknown base types.
    """
    arms = []
    for raw in (text or "").split("|"):
        token = raw.strip()
        if not token:
            continue
        base_text, _, fmt = token.partition(":")
        try:
            base = BaseType(base_text.strip())
        except ValueError:
            raise ValueError(f"Unknown base type '{base_text}' in type expression '{text}'") from None
        arms.append(TypeArm(base=base, format=fmt.strip() or None))
    if not arms:
        raise ValueError(f"Empty type expression: '{text}'")
    return TypeExpression(arms=tuple(arms))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_date_time(value: Any) -> bool:
    return isinstance(value, str) and bool(_DATE_TIME_RE.match(value))


def _arm_matches(value: Any, arm: TypeArm) -> bool:
    if arm.base is BaseType.STRING:
        if not isinstance(value, str):
            return False
        if arm.format == DATE_TIME_FORMAT:
            return is_date_time(value)
        return True
    if arm.base is BaseType.NUMBER:
        return _is_number(value)
    if arm.base is BaseType.BOOLEAN:
        return isinstance(value, bool)
    if arm.base is BaseType.OBJECT:
        return isinstance(value, dict)
    if arm.base is BaseType.ARRAY:
        return isinstance(value, (list, tuple))
    return False


def matches(value: Any, expression: Union[TypeExpression, str]) -> bool:
    """Return True when ``value`` satisfies any arm of ``expression``."""
    if isinstance(expression, str):
        expression = parse_type_expression(expression)
    if value is None:
        return False
    for arm in expression.arms:
        if _arm_matches(value, arm):
            return True
    return False
