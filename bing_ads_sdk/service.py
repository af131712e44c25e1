"""Calls to the operations of one SOAP service."""
import functools
import time
from typing import Any, List, Mapping, Optional

import structlog
from lxml import etree
from zeep.exceptions import ValidationError as ZeepValidationError
from zeep.helpers import serialize_object

from bing_ads_sdk.errors import ErrorHandler, ServerError
from bing_ads_sdk.header import SharedHeader
from bing_ads_sdk.models.schemas import OperationResult, ValidationResult
from bing_ads_sdk.pipeline.builder import RequestBuilder, ResponseWalker
from bing_ads_sdk.pipeline.callbacks import CallbackRegistry
from bing_ads_sdk.transformers.response_normalizer import snakize
from bing_ads_sdk.validators.schema_validator import SchemaValidator

logger = structlog.get_logger()


class Service:
    """Operations of a single WSDL service.

    Every WSDL operation is reachable through ``call`` and as a snake_case
    method, e.g. ``service.get_campaigns_by_ids({"account_id": 1})``.
    """

    def __init__(
        self,
        name: str,
        soap_client,
        header: SharedHeader,
        registry: CallbackRegistry,
        validator: Optional[SchemaValidator] = None,
    ):
        """Initialize service.

        Args:
            name: Service name used in logs and results
            soap_client: zeep client loaded with the service WSDL
            header: Shared header sent with every request
            registry: Hooks applied while building and parsing
            validator: XSD validator, None disables validation
        """
        self.name = name
        self.client = soap_client
        self.header = header
        self.validator = validator
        self.builder = RequestBuilder(registry)
        self.walker = ResponseWalker(registry)
        self._binding = soap_client.service._binding
        self._method_names = {snakize(operation): operation for operation in self.operations}

        for operation in self.operations:
            logger.debug("Defining operation", service=name, operation=operation)

    @property
    def operations(self) -> List[str]:
        """Operation names declared by the WSDL."""
        return list(self._binding.all())

    def operation_name(self, name: str) -> str:
        """Resolve an operation from its WSDL or snake_case name."""
        if name in self._binding.all():
            return name
        try:
            return self._method_names[snakize(name)]
        except KeyError:
            raise ValueError(f"Unknown operation {name!r} for service {self.name}") from None

    def __getattr__(self, attr: str):
        if attr.startswith("_"):
            raise AttributeError(attr)
        try:
            operation = self.operation_name(attr)
        except ValueError:
            raise AttributeError(f"{type(self).__name__} {self.name!r} has no operation {attr!r}") from None
        return functools.partial(self.call, operation)

    def call(self, operation: str, body: Optional[Mapping[str, Any]] = None) -> OperationResult:
        """Build, validate and send a request, then parse the response.

        Args:
            operation: WSDL or snake_case operation name
            body: Request data, keys in any casing

        Returns:
            OperationResult with status success, partial, invalid or fault
        """
        name = self.operation_name(operation)
        start_time = time.time()

        input_element = self._binding.get(name).input.body
        kwargs = self.builder.build(body, input_element)
        headers = self.header.elements(input_element.qname.namespace)

        logger.info("Calling operation", service=self.name, operation=name)

        validation = None
        try:
            envelope = self.client.create_message(self.client.service, name, _soapheaders=headers, **kwargs)
        except (TypeError, ZeepValidationError) as e:
            # zeep refuses fields the operation does not declare
            logger.warning("Request rejected before sending", service=self.name, operation=name, error=str(e))
            validation = ValidationResult(request_name=input_element.name, errors=[f"ERROR: {e}"])
            return self._result(name, start_time, status="invalid", validation=validation)
        logger.debug("Request envelope", operation=name, body=etree.tostring(envelope))

        if self.validator is not None:
            validation = self.validator.validate(envelope)
            if not validation.valid:
                return self._result(name, start_time, status="invalid", validation=validation)

        try:
            raw = getattr(self.client.service, name)(_soapheaders=headers, **kwargs)
        except ServerError as e:
            logger.warning(
                "Operation failed",
                service=self.name,
                operation=name,
                status=e.fault.status_code,
                fault=e.fault.fault_string,
            )
            return self._result(name, start_time, status="fault", validation=validation, fault=e.fault)

        data = self.walker.walk(serialize_object(raw, target_cls=dict))
        logger.debug("Response body", operation=name, body=data)

        errors = ErrorHandler.parse_errors(data)
        status = "partial" if errors else "success"
        return self._result(name, start_time, status=status, data=data, validation=validation, errors=errors)

    def _result(self, operation: str, start_time: float, **fields) -> OperationResult:
        processing_time = time.time() - start_time
        logger.info(
            "Operation completed",
            service=self.name,
            operation=operation,
            status=fields.get("status"),
            processing_time=f"{processing_time:.2f}s",
        )
        return OperationResult(
            service=self.name,
            operation=operation,
            processing_time=processing_time,
            **fields,
        )
