"""Pydantic models for operation outcomes."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

OPERATION_STATUSES = ("success", "partial", "invalid", "fault")


class ValidationResult(BaseModel):
    """Outcome of XSD validation for one request body."""

    request_name: Optional[str] = None
    skipped: bool = False
    warnings: List[str] = []
    errors: List[str] = []

    @property
    def valid(self) -> bool:
        return not self.errors


class ServerFault(BaseModel):
    """HTTP error response returned by the API."""

    status_code: int
    fault_code: Optional[str] = None
    fault_string: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    body: str = ""


class ApiError(BaseModel):
    """Single error entry reported inside a successful response."""

    kind: str
    code: Optional[int] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    index: Optional[int] = None
    details: Any = None


class OperationResult(BaseModel):
    """Result of a service operation call."""

    service: Optional[str] = None
    operation: str
    status: str  # success, partial, invalid, fault
    data: Any = None
    validation: Optional[ValidationResult] = None
    fault: Optional[ServerFault] = None
    errors: List[ApiError] = []
    processing_time: Optional[float] = Field(None, ge=0.0)

    @field_validator('status')
    def validate_status(cls, v):
        """Ensure status is one of the known outcomes."""
        if v not in OPERATION_STATUSES:
            raise ValueError(f"Unknown operation status: {v}")
        return v

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def raise_for_status(self) -> "OperationResult":
        """Raise the matching SDK error unless the call fully succeeded.

        Returns:
            The result itself, for chaining

        Raises:
            RequestValidationError: The request failed XSD validation
            ApplicationFault: The API answered with a fault carrying details
            ServerError: The API answered with any other HTTP error
            PartialErrors: The response reported partial or batch errors
        """
        from bing_ads_sdk.errors import (
            ApplicationFault,
            PartialErrors,
            RequestValidationError,
            ServerError,
        )

        if self.status == "invalid" and self.validation is not None:
            raise RequestValidationError(self.validation)
        if self.status == "fault" and self.fault is not None:
            if self.fault.details:
                raise ApplicationFault({"details": self.fault.details, "fault": self.fault})
            raise ServerError(self.fault)
        if self.status == "partial":
            raise PartialErrors(self.errors)
        return self
