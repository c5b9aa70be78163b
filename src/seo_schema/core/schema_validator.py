from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .diagnostics import Diagnostic, IssueCode, ValidationResult, error, structural, warning
from .nested_validators import validate_breadcrumb, validate_faq
from .registry import DEFAULT_REGISTRY, SchemaRegistry, SchemaSpec
from .type_matcher import matches

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"
DEFAULT_MAX_GRAPH_DEPTH = 32

# Types whose list-valued property is checked item by item.
NESTED_VALIDATORS: Dict[str, Tuple[str, Callable[[Any], Tuple[Diagnostic, ...]]]] = {
    "FAQPage": ("mainEntity", validate_faq),
    "BreadcrumbList": ("itemListElement", validate_breadcrumb),
}


def _describe(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _context_mentions_schema_org(context: Any) -> bool:
    if isinstance(context, str):
        return "schema.org" in context
    if isinstance(context, list):
        return any(_context_mentions_schema_org(entry) for entry in context if isinstance(entry, (str, dict)))
    if isinstance(context, dict):
        vocab = context.get("@vocab")
        return isinstance(vocab, str) and "schema.org" in vocab
    return False


def _check_context(doc: Dict[str, Any]) -> Optional[Diagnostic]:
    context = doc.get("@context")
    if context is None:
        return structural(
            "@context",
            f'Missing @context property, should be "{SCHEMA_CONTEXT}"',
            IssueCode.MISSING_CONTEXT,
        )
    if not _context_mentions_schema_org(context):
        return structural(
            "@context",
            f'@context should include "schema.org", found "{_describe(context)}"',
            IssueCode.INVALID_CONTEXT,
        )
    return None


def _check_properties(doc: Dict[str, Any], spec: SchemaSpec) -> List[Diagnostic]:
    issues: List[Diagnostic] = []
    nested = NESTED_VALIDATORS.get(spec.name)
    nested_prop = nested[0] if nested else None

    for prop in spec.required:
        value = doc.get(prop)
        expected = spec.expected_type_for(prop)
        if value is None:
            issues.append(
                error(prop, f"Missing required property: {prop}", IssueCode.MISSING_REQUIRED_PROPERTY)
            )
        elif prop == nested_prop:
            # Shape errors for this property come from the nested validator.
            continue
        elif expected is not None and not matches(value, expected):
            issues.append(
                error(
                    prop,
                    f"Invalid type for {prop}, expected {expected}",
                    IssueCode.INVALID_REQUIRED_TYPE,
                )
            )

    for prop in spec.recommended:
        value = doc.get(prop)
        expected = spec.expected_type_for(prop)
        if value is None:
            issues.append(
                warning(prop, f"Missing recommended property: {prop}", IssueCode.MISSING_RECOMMENDED_PROPERTY)
            )
        elif prop == nested_prop:
            continue
        elif expected is not None and not matches(value, expected):
            issues.append(
                warning(
                    prop,
                    f"Invalid type for {prop}, expected {expected}",
                    IssueCode.INVALID_RECOMMENDED_TYPE,
                )
            )

    if nested and doc.get(nested_prop) is not None:
        issues.extend(nested[1](doc[nested_prop]))
    return issues


def _validate_graph(
    graph: List[Any],
    *,
    registry: SchemaRegistry,
    depth: int,
    max_depth: int,
    report_unknown_types: bool,
) -> Tuple[bool, List[Diagnostic]]:
    if depth >= max_depth:
        logger.debug("@graph nesting exceeds max_depth=%s", max_depth)
        return False, [
            error(
                "@graph",
                f"Maximum @graph nesting depth of {max_depth} exceeded",
                IssueCode.GRAPH_DEPTH_EXCEEDED,
            )
        ]

    graph_valid = True
    issues: List[Diagnostic] = []
    for index, item in enumerate(graph):
        item_result = _validate(
            item,
            registry=registry,
            depth=depth + 1,
            max_depth=max_depth,
            report_unknown_types=report_unknown_types,
        )
        if not item_result.is_valid:
            graph_valid = False
            issues.append(
                error(
                    f"@graph[{index}]",
                    "Invalid item in @graph array",
                    IssueCode.INVALID_GRAPH_ITEM,
                    details=item_result.diagnostics,
                )
            )
    return graph_valid, issues


def _validate(
    doc: Any,
    *,
    registry: SchemaRegistry,
    depth: int,
    max_depth: int,
    report_unknown_types: bool,
) -> ValidationResult:
    if not isinstance(doc, dict):
        return ValidationResult(
            is_valid=False,
            diagnostics=(error("$", "Schema payload must be an object.", IssueCode.INVALID_PAYLOAD),),
        )

    issues: List[Diagnostic] = []
    context_issue = _check_context(doc)
    if context_issue is not None:
        issues.append(context_issue)

    schema_type = doc.get("@type")
    if schema_type is None or schema_type == "" or schema_type == []:
        # Nothing else can be checked without a type; earlier findings are dropped.
        return ValidationResult(
            is_valid=False,
            diagnostics=(structural("@type", "Missing @type property", IssueCode.MISSING_TYPE),),
        )

    graph = doc.get("@graph")
    if isinstance(graph, list):
        graph_valid, graph_issues = _validate_graph(
            graph,
            registry=registry,
            depth=depth,
            max_depth=max_depth,
            report_unknown_types=report_unknown_types,
        )
        issues.extend(graph_issues)
        return ValidationResult(is_valid=graph_valid and context_issue is None, diagnostics=tuple(issues))

    spec = registry.lookup(schema_type)
    if spec is not None:
        issues.extend(_check_properties(doc, spec))
    else:
        logger.debug("No specific validation rules for schema type: %s", _describe(schema_type))
        if report_unknown_types:
            issues.append(
                warning(
                    "@type",
                    f"No specific validation rules for schema type: {_describe(schema_type)}",
                    IssueCode.UNKNOWN_TYPE,
                )
            )

    is_valid = not any(issue.is_error for issue in issues)
    return ValidationResult(is_valid=is_valid, diagnostics=tuple(issues))


def validate_schema(
    doc: Any,
    *,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
    max_depth: int = DEFAULT_MAX_GRAPH_DEPTH,
    report_unknown_types: bool = False,
) -> ValidationResult:
    """Validate a parsed JSON-LD document against the schema.org rule registry.

    - Checks ``@context`` and ``@type`` first; a missing ``@type`` ends validation.
    - ``@graph`` containers are validated item by item, failing items wrapped
      under ``@graph[i]``.
    - Never raises for rule violations; every finding is a ``Diagnostic``.
    """
    return _validate(
        doc,
        registry=registry,
        depth=0,
        max_depth=max(1, int(max_depth)),
        report_unknown_types=report_unknown_types,
    )
