"""
Structured-data (JSON-LD) validation endpoints used by the admin dashboard
before a page is published.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from seo_schema.core.diagnostics import Diagnostic, ValidationResult
from seo_schema.core.registry import DEFAULT_REGISTRY
from seo_schema.core.schema_repair import attempt_to_fix_schema, suggest_fixes
from seo_schema.core.schema_validator import validate_schema

from .app_logging import get_logger, validation_context
from .config import Settings, get_settings
from .exceptions import APIValidationError, SchemaTypeNotFoundError
from .models import (
    BatchValidateRequest,
    BatchValidateResponse,
    FixRequest,
    FixResponse,
    FixSuggestion,
    SchemaTypeList,
    SchemaTypeSpec,
    SchemaValidationResult,
    SuggestRequest,
    SuggestResponse,
    ValidateRequest,
)

router = APIRouter(prefix="/api/v1/structured-data", tags=["structured-data"])

logger = get_logger(__name__)


def _validate(document: Dict[str, Any], active_settings: Settings) -> ValidationResult:
    return validate_schema(
        document,
        registry=DEFAULT_REGISTRY,
        max_depth=active_settings.max_graph_depth,
        report_unknown_types=active_settings.report_unknown_types,
    )


def _require_content(document: Dict[str, Any]) -> None:
    if not document:
        raise APIValidationError("document must be a non-empty JSON-LD object")


def _resolve_diagnostics(
    document: Dict[str, Any],
    supplied: Any,
    active_settings: Settings,
) -> List[Diagnostic]:
    if supplied is None:
        return list(_validate(document, active_settings).diagnostics)
    return [item.to_diagnostic() for item in supplied]


@router.get("/types", response_model=SchemaTypeList)
async def list_schema_types():
    """List schema.org types that have dedicated validation rules."""
    return SchemaTypeList(types=DEFAULT_REGISTRY.type_names())


@router.get("/types/{type_name}", response_model=SchemaTypeSpec)
async def get_schema_type(type_name: str):
    spec = DEFAULT_REGISTRY.lookup(type_name)
    if spec is None:
        raise SchemaTypeNotFoundError(type_name)
    return SchemaTypeSpec.from_spec(spec)


@router.post("/validate", response_model=SchemaValidationResult)
async def validate_document(payload: ValidateRequest, active_settings: Settings = Depends(get_settings)):
    _require_content(payload.document)
    result = _validate(payload.document, active_settings)
    logger.info(
        "Validated structured data",
        extra=validation_context(result, payload.document.get("@type")),
    )
    return SchemaValidationResult.from_result(result, schema_type=payload.document.get("@type"))


@router.post("/validate/batch", response_model=BatchValidateResponse)
async def validate_documents(payload: BatchValidateRequest, active_settings: Settings = Depends(get_settings)):
    if len(payload.documents) > active_settings.max_batch_size:
        raise APIValidationError(
            f"At most {active_settings.max_batch_size} documents can be validated per request"
        )
    results = []
    for document in payload.documents:
        result = _validate(document, active_settings)
        results.append(SchemaValidationResult.from_result(result, schema_type=document.get("@type")))
    valid = sum(1 for item in results if item.is_valid)
    logger.info(
        "Validated structured data batch",
        extra={"total": len(results), "valid": valid, "invalid": len(results) - valid},
    )
    return BatchValidateResponse(total=len(results), valid=valid, invalid=len(results) - valid, results=results)


@router.post("/fix", response_model=FixResponse)
async def fix_document(payload: FixRequest, active_settings: Settings = Depends(get_settings)):
    """Propose a repaired document for manual review; nothing is written back."""
    _require_content(payload.document)
    diagnostics = _resolve_diagnostics(payload.document, payload.diagnostics, active_settings)
    fixed = attempt_to_fix_schema(payload.document, diagnostics, registry=DEFAULT_REGISTRY)
    revalidated = _validate(fixed if fixed is not None else payload.document, active_settings)
    logger.info(
        "Repaired structured data",
        extra={"modified": fixed is not None, **validation_context(revalidated, payload.document.get("@type"))},
    )
    return FixResponse(
        modified=fixed is not None,
        fixed_document=fixed,
        validation=SchemaValidationResult.from_result(revalidated, schema_type=payload.document.get("@type")),
    )


@router.post("/suggest", response_model=SuggestResponse)
async def suggest_document_fixes(payload: SuggestRequest, active_settings: Settings = Depends(get_settings)):
    _require_content(payload.document)
    diagnostics = _resolve_diagnostics(payload.document, payload.diagnostics, active_settings)
    fixes = suggest_fixes(payload.document, diagnostics, registry=DEFAULT_REGISTRY)
    suggestions = [
        FixSuggestion(path=diagnostic.path, message=diagnostic.message, severity=diagnostic.level, fix=fix)
        for diagnostic, fix in zip(diagnostics, fixes)
    ]
    return SuggestResponse(suggestions=suggestions)
