"""
Pydantic models for request/response validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from seo_schema.core.diagnostics import Diagnostic, ValidationResult
from seo_schema.core.registry import SchemaSpec


class IssueLevel(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class ValidationSeverity(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class SchemaDiagnostic(BaseModel):
    path: str
    message: str
    severity: Optional[IssueLevel] = Field(default=None, description="warning or error; absent means error")
    code: Optional[str] = None
    details: List["SchemaDiagnostic"] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> "SchemaDiagnostic":
        return cls(
            path=diagnostic.path,
            message=diagnostic.message,
            severity=diagnostic.severity,
            code=diagnostic.code,
            details=[cls.from_diagnostic(detail) for detail in diagnostic.details],
        )

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            path=self.path,
            message=self.message,
            severity=self.severity,
            code=self.code,
            details=tuple(detail.to_diagnostic() for detail in self.details),
        )


class SchemaValidationResult(BaseModel):
    is_valid: bool
    severity: ValidationSeverity = Field(description="ok, warning, or error")
    schema_type: Optional[Any] = None
    diagnostics: List[SchemaDiagnostic] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)

    @classmethod
    def from_result(cls, result: ValidationResult, schema_type: Any = None) -> "SchemaValidationResult":
        return cls(
            is_valid=result.is_valid,
            severity=result.severity,
            schema_type=schema_type,
            diagnostics=[SchemaDiagnostic.from_diagnostic(d) for d in result.diagnostics],
        )


class ValidateRequest(BaseModel):
    document: Dict[str, Any] = Field(..., description="Parsed JSON-LD object from a <script type=\"application/ld+json\"> tag.")


class BatchValidateRequest(BaseModel):
    documents: List[Dict[str, Any]] = Field(..., description="Parsed JSON-LD objects, one per script tag.")


class BatchValidateResponse(BaseModel):
    total: int = Field(ge=0)
    valid: int = Field(ge=0)
    invalid: int = Field(ge=0)
    results: List[SchemaValidationResult]


class FixRequest(BaseModel):
    document: Dict[str, Any]
    diagnostics: Optional[List[SchemaDiagnostic]] = Field(
        default=None,
        description="Diagnostics to repair; a fresh validation is used when omitted.",
    )


class FixResponse(BaseModel):
    modified: bool
    fixed_document: Optional[Dict[str, Any]] = None
    validation: SchemaValidationResult


class SuggestRequest(BaseModel):
    document: Dict[str, Any]
    diagnostics: Optional[List[SchemaDiagnostic]] = None


class FixSuggestion(BaseModel):
    path: str
    message: str
    severity: IssueLevel
    fix: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class SuggestResponse(BaseModel):
    suggestions: List[FixSuggestion]


class SchemaTypeSpec(BaseModel):
    name: str
    required: List[str]
    recommended: List[str]
    expected_type: Dict[str, str]

    @classmethod
    def from_spec(cls, spec: SchemaSpec) -> "SchemaTypeSpec":
        return cls(**spec.to_dict())


class SchemaTypeList(BaseModel):
    types: List[str]


class HealthResponse(BaseModel):
    status: str
    version: str


SchemaDiagnostic.model_rebuild()
