"""SDK exceptions and response error collection."""
from typing import Any, Dict, List, Optional

import structlog

from bing_ads_sdk.models.schemas import ApiError

logger = structlog.get_logger()

# Response keys (after normalization) that carry per-item error lists
ERROR_KEYS = ("partial_errors", "operation_errors", "batch_errors")


class BingAdsError(Exception):
    """Base class for all SDK errors."""


class RequestValidationError(BingAdsError):
    """Request body rejected by XSD validation before sending."""

    def __init__(self, result):
        self.result = result
        super().__init__(f"[XSD Validations] Errors: {result.errors}")


class ServerError(BingAdsError):
    """API answered with an HTTP client or server error."""

    def __init__(self, fault):
        self.fault = fault
        summary = fault.fault_string or fault.body[:200]
        super().__init__(f"HTTP {fault.status_code}: {summary}")


class ApplicationFault(BingAdsError):
    """SOAP fault carrying API error details."""

    def __init__(self, fault_hash: Dict[str, Any]):
        self.fault_hash = fault_hash or {}
        self.details = self.fault_hash.get("details")
        self.fault = self.fault_hash.get("fault")
        super().__init__(self.message)

    @property
    def errors(self) -> List[Dict[str, Any]]:
        """Error entries found anywhere in the fault details."""
        if not isinstance(self.details, dict):
            return []
        found: List[Dict[str, Any]] = []
        for detail in self.details.values():
            if not isinstance(detail, dict):
                continue
            for key, value in detail.items():
                if key.endswith("errors"):
                    found.extend(_flatten_error_container(value))
        return found

    @property
    def message(self) -> str:
        messages = [e.get("message") for e in self.errors if e.get("message")]
        if messages:
            return "; ".join(messages)
        if self.fault is not None and self.fault.fault_string:
            return self.fault.fault_string
        return "Application fault"


class PartialErrors(BingAdsError):
    """Response reported per-item errors."""

    def __init__(self, errors: List[ApiError]):
        self.errors = errors
        super().__init__("; ".join(e.message or e.error_code or "unknown" for e in errors))


def _flatten_error_container(value: Any) -> List[Dict[str, Any]]:
    """Turn ``{"batch_error": [...]}`` / ``[...]`` / ``{...}`` into a flat list of dicts."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        nested = [v for v in value.values() if isinstance(v, (list, dict))]
        if nested:
            found: List[Dict[str, Any]] = []
            for item in nested:
                found.extend(item if isinstance(item, list) else [item])
            return [item for item in found if isinstance(item, dict)]
        return [value]
    return []


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class ErrorHandler:
    """Collect API errors from a normalized response body."""

    @staticmethod
    def parse_errors(body: Any) -> List[ApiError]:
        """Extract partial, operation and batch errors.

        Args:
            body: Normalized response body

        Returns:
            List of ApiError models, empty when the response is clean
        """
        if not isinstance(body, dict):
            return []

        errors: List[ApiError] = []
        for key in ERROR_KEYS:
            kind = key[:-1]
            for entry in _flatten_error_container(body.get(key)):
                errors.append(
                    ApiError(
                        kind=kind,
                        code=_as_int(entry.get("code")),
                        error_code=entry.get("error_code"),
                        message=entry.get("message"),
                        index=_as_int(entry.get("index")),
                        details=entry.get("details"),
                    )
                )

        if errors:
            logger.warning(
                "Response contains errors",
                count=len(errors),
                error_codes=[e.error_code for e in errors],
            )
        return errors
