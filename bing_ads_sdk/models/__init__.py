"""Result models."""

from .schemas import ApiError, OperationResult, ServerFault, ValidationResult

__all__ = ["ApiError", "OperationResult", "ServerFault", "ValidationResult"]
