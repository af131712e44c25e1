"""SOAP client SDK for the Bing Ads API."""

from .client import BingAdsClient, service_wsdl_url
from .errors import (
    ApplicationFault,
    BingAdsError,
    PartialErrors,
    RequestValidationError,
    ServerError,
)
from .models.schemas import ApiError, OperationResult, ServerFault, ValidationResult
from .service import Service
from .settings import ClientSettings
from .transformers import normalize_request, normalize_response

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ApplicationFault",
    "BingAdsClient",
    "BingAdsError",
    "ClientSettings",
    "OperationResult",
    "PartialErrors",
    "RequestValidationError",
    "ServerError",
    "ServerFault",
    "Service",
    "ValidationResult",
    "normalize_request",
    "normalize_response",
    "service_wsdl_url",
]
