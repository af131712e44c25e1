"""XSD validation of outgoing request bodies."""
import copy
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import structlog
from lxml import etree

from bing_ads_sdk.models.schemas import ValidationResult
from bing_ads_sdk.settings import DEFAULT_VALIDATION_BYPASS

logger = structlog.get_logger()

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
ERROR_LEVELS = {"ERROR", "FATAL"}


class SchemaValidator:
    """Validate request bodies against the XSD files of the API."""

    def __init__(self, schema_path: str | Path, bypass: Optional[Iterable[str]] = None):
        """Initialize validator.

        Args:
            schema_path: Path to the main XSD file
            bypass: Request element names that are never validated
        """
        self.schema_path = Path(schema_path)
        self.bypass = set(DEFAULT_VALIDATION_BYPASS if bypass is None else bypass)
        self._schema = None

    @property
    def schema(self) -> etree.XMLSchema:
        """Parsed schema. Loading is slow, so it happens once per validator."""
        if self._schema is None:
            if not self.schema_path.exists():
                raise FileNotFoundError(f"XSD file not found: {self.schema_path}")
            logger.info("Loading XSD schema", path=str(self.schema_path))
            self._schema = etree.XMLSchema(etree.parse(str(self.schema_path)))
        return self._schema

    @staticmethod
    def extract_body(envelope) -> etree._Element:
        """Extract the request element from the Body of a SOAP envelope.

        The returned copy keeps the namespace declarations in scope on the
        envelope, so it can be validated on its own.

        Args:
            envelope: SOAP envelope as an lxml element, bytes or str

        Returns:
            Detached copy of the first element inside the Body
        """
        if isinstance(envelope, (bytes, str)):
            envelope = etree.fromstring(envelope.encode("utf-8") if isinstance(envelope, str) else envelope)

        body = envelope.find(f"{{{SOAP_ENV_NS}}}Body")
        if body is None:
            raise ValueError("No SOAP Body element found in request")

        for child in body:
            if isinstance(child.tag, str):
                return copy.deepcopy(child)
        raise ValueError("SOAP Body is empty")

    @staticmethod
    def partition(entries) -> Tuple[List[str], List[str]]:
        """Split schema log entries into (errors, warnings) messages."""
        errors: List[str] = []
        warnings: List[str] = []
        for entry in entries:
            message = f"{entry.level_name}: line {entry.line}: {entry.message}"
            if entry.level_name in ERROR_LEVELS:
                errors.append(message)
            else:
                warnings.append(message)
        return errors, warnings

    def validate(self, envelope) -> ValidationResult:
        """Validate the body of a SOAP envelope.

        Args:
            envelope: SOAP envelope as an lxml element, bytes or str

        Returns:
            ValidationResult with warnings and errors
        """
        body = self.extract_body(envelope)
        request_name = etree.QName(body).localname

        if request_name in self.bypass:
            logger.debug("[XSD Validations] Skipped", request=request_name)
            return ValidationResult(request_name=request_name, skipped=True)

        schema = self.schema
        schema.validate(etree.ElementTree(body))
        errors, warnings = self.partition(schema.error_log)

        if warnings:
            logger.debug("[XSD Validations] Warnings", request=request_name, warnings=warnings)
        if errors:
            logger.warning("[XSD Validations] Errors", request=request_name, errors=errors)

        return ValidationResult(request_name=request_name, warnings=warnings, errors=errors)
