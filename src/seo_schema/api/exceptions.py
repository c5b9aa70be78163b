"""
Custom exception classes for the structured-data API.

The validation engine itself never raises for rule violations; these are
reserved for request-level failures.
"""

from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str = None,
        headers: dict = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or f"ERR_{status_code}"


class NotFoundError(APIException):
    """Resource not found."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
            error_code="NOT_FOUND"
        )


class APIValidationError(APIException):
    """Request payload is well-formed JSON but cannot be processed."""

    def __init__(self, detail: str = "Validation failed"):
        super().__init__(
            status_code=422,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )


class SchemaTypeNotFoundError(NotFoundError):
    """No validation rules are registered for a schema.org type."""

    def __init__(self, type_name: str):
        super().__init__(resource=f"Schema type {type_name}")
