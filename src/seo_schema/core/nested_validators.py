from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .diagnostics import Diagnostic, IssueCode, error
from .type_matcher import BaseType, TypeArm, TypeExpression, matches

_NUMBER = TypeExpression(arms=(TypeArm(BaseType.NUMBER),))


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _missing(obj: Dict[str, Any], key: str) -> bool:
    return obj.get(key) is None


def _quote(value: Any) -> str:
    return "undefined" if value is None else str(value)


def validate_faq(main_entity: Any) -> Tuple[Diagnostic, ...]:
    """Check that every FAQPage ``mainEntity`` entry is a Question with an Answer."""
    if not isinstance(main_entity, list):
        return (
            error(
                "mainEntity",
                "mainEntity should be an array of Question items",
                IssueCode.FAQ_NOT_A_LIST,
            ),
        )

    issues: List[Diagnostic] = []
    for index, raw in enumerate(main_entity):
        item = _as_object(raw)
        prefix = f"mainEntity[{index}]"
        if item.get("@type") != "Question":
            issues.append(
                error(
                    f"{prefix}.@type",
                    f'Expected @type to be "Question", found "{_quote(item.get("@type"))}"',
                    IssueCode.FAQ_INVALID_QUESTION_TYPE,
                )
            )
        if _missing(item, "name"):
            issues.append(
                error(f"{prefix}.name", "Missing question text (name property)", IssueCode.FAQ_MISSING_QUESTION_NAME)
            )
        if _missing(item, "acceptedAnswer"):
            issues.append(
                error(f"{prefix}.acceptedAnswer", "Missing acceptedAnswer property", IssueCode.FAQ_MISSING_ANSWER)
            )
            continue

        answer = _as_object(item["acceptedAnswer"])
        if answer.get("@type") != "Answer":
            issues.append(
                error(
                    f"{prefix}.acceptedAnswer.@type",
                    f'Expected @type to be "Answer", found "{_quote(answer.get("@type"))}"',
                    IssueCode.FAQ_INVALID_ANSWER_TYPE,
                )
            )
        if _missing(answer, "text"):
            issues.append(
                error(f"{prefix}.acceptedAnswer.text", "Missing answer text", IssueCode.FAQ_MISSING_ANSWER_TEXT)
            )
    return tuple(issues)


def validate_breadcrumb(item_list_element: Any) -> Tuple[Diagnostic, ...]:
    """Check that every BreadcrumbList entry is a positioned ListItem."""
    if not isinstance(item_list_element, list):
        return (
            error(
                "itemListElement",
                "itemListElement should be an array of ListItem objects",
                IssueCode.BREADCRUMB_NOT_A_LIST,
            ),
        )

    issues: List[Diagnostic] = []
    for index, raw in enumerate(item_list_element):
        item = _as_object(raw)
        prefix = f"itemListElement[{index}]"
        if item.get("@type") != "ListItem":
            issues.append(
                error(
                    f"{prefix}.@type",
                    f'Expected @type to be "ListItem", found "{_quote(item.get("@type"))}"',
                    IssueCode.BREADCRUMB_INVALID_ITEM_TYPE,
                )
            )
        if not matches(item.get("position"), _NUMBER):
            issues.append(
                error(f"{prefix}.position", "position should be a number", IssueCode.BREADCRUMB_INVALID_POSITION)
            )
        if _missing(item, "name") and _missing(item, "item"):
            issues.append(
                error(prefix, "Either name or item property is required", IssueCode.BREADCRUMB_MISSING_NAME_OR_ITEM)
            )
        target = item.get("item")
        if isinstance(target, dict) and _missing(target, "@id") and _missing(target, "name"):
            issues.append(
                error(
                    f"{prefix}.item",
                    "Item object should have either @id or name property",
                    IssueCode.BREADCRUMB_ITEM_MISSING_ID,
                )
            )
    return tuple(issues)
