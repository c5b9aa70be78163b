from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


class IssueCode(str, Enum):
    MISSING_CONTEXT = "missing_context"
    INVALID_CONTEXT = "invalid_context"
    MISSING_TYPE = "missing_type"
    INVALID_PAYLOAD = "invalid_payload"
    INVALID_GRAPH_ITEM = "invalid_graph_item"
    GRAPH_DEPTH_EXCEEDED = "graph_depth_exceeded"
    MISSING_REQUIRED_PROPERTY = "missing_required_property"
    INVALID_REQUIRED_TYPE = "invalid_required_type"
    MISSING_RECOMMENDED_PROPERTY = "missing_recommended_property"
    INVALID_RECOMMENDED_TYPE = "invalid_recommended_type"
    UNKNOWN_TYPE = "unknown_type"
    FAQ_NOT_A_LIST = "faq_main_entity_not_a_list"
    FAQ_INVALID_QUESTION_TYPE = "faq_invalid_question_type"
    FAQ_MISSING_QUESTION_NAME = "faq_missing_question_name"
    FAQ_MISSING_ANSWER = "faq_missing_accepted_answer"
    FAQ_INVALID_ANSWER_TYPE = "faq_invalid_answer_type"
    FAQ_MISSING_ANSWER_TEXT = "faq_missing_answer_text"
    BREADCRUMB_NOT_A_LIST = "breadcrumb_items_not_a_list"
    BREADCRUMB_INVALID_ITEM_TYPE = "breadcrumb_invalid_item_type"
    BREADCRUMB_INVALID_POSITION = "breadcrumb_invalid_position"
    BREADCRUMB_MISSING_NAME_OR_ITEM = "breadcrumb_missing_name_or_item"
    BREADCRUMB_ITEM_MISSING_ID = "breadcrumb_item_missing_id_or_name"


@dataclass(frozen=True)
class Diagnostic:
    """One validation finding.

    ``severity`` is optional; a diagnostic without one counts as an error.
    """

    path: str
    message: str
    severity: Optional[str] = None
    details: Tuple["Diagnostic", ...] = ()
    code: Optional[str] = None

    @property
    def level(self) -> str:
        return self.severity or SEVERITY_ERROR

    @property
    def is_error(self) -> bool:
        return self.level == SEVERITY_ERROR

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "message": self.message}
        if self.severity:
            data["severity"] = self.severity
        if self.details:
            data["details"] = [detail.to_dict() for detail in self.details]
        if self.code:
            data["code"] = self.code
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Diagnostic":
        return cls(
            path=str(data.get("path") or ""),
            message=str(data.get("message") or ""),
            severity=data.get("severity") or None,
            details=tuple(cls.coerce(item) for item in data.get("details") or ()),
            code=data.get("code") or None,
        )

    @classmethod
    def coerce(cls, value: Any) -> "Diagnostic":
        if isinstance(value, Diagnostic):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise TypeError(f"Cannot build a Diagnostic from {type(value).__name__}")


def structural(path: str, message: str, code: IssueCode) -> Diagnostic:
    # @context/@type findings carry no explicit severity.
    return Diagnostic(path=path, message=message, code=code.value)


def error(path: str, message: str, code: IssueCode, details: Iterable[Diagnostic] = ()) -> Diagnostic:
    return Diagnostic(path=path, message=message, severity=SEVERITY_ERROR, details=tuple(details), code=code.value)


def warning(path: str, message: str, code: IssueCode) -> Diagnostic:
    return Diagnostic(path=path, message=message, severity=SEVERITY_WARNING, code=code.value)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_error)

    @property
    def warnings(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.level == SEVERITY_WARNING)

    @property
    def severity(self) -> str:
        if self.errors:
            return "error"
        if self.warnings:
            return "warning"
        return "ok"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
