"""Build request payloads from nested dicts and walk decoded responses.

Both directions run the hooks of a ``CallbackRegistry`` one level at a time:
requests are walked top-down against the WSDL type model, responses are
walked bottom-up so every mapping is seen after its children.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set

import structlog
from zeep import xsd

from bing_ads_sdk.pipeline.callbacks import AFTER_CHILDREN_HASH, BEFORE_BUILD, CallbackRegistry
from bing_ads_sdk.transformers.request_normalizer import is_nil

logger = structlog.get_logger()


@dataclass
class TypeInfo:
    """Declared elements of a complex type, in schema order."""

    name: Optional[str]
    element_names: List[str] = field(default_factory=list)
    nillable_names: Set[str] = field(default_factory=set)


def describe_type(xsd_type, name: Optional[str] = None) -> TypeInfo:
    """Build a TypeInfo from a zeep complex type."""
    elements = list(getattr(xsd_type, "elements", []) or [])
    return TypeInfo(
        name=name or getattr(xsd_type, "name", None),
        element_names=[element_name for element_name, _ in elements],
        nillable_names={element_name for element_name, element in elements if getattr(element, "nillable", False)},
    )


def _is_complex(element) -> bool:
    return element is not None and isinstance(element.type, xsd.ComplexType)


def _array_item_name(xsd_type) -> Optional[str]:
    """Name of the single repeated child of an ArrayOfX style type."""
    elements = list(getattr(xsd_type, "elements", []) or [])
    if len(elements) == 1 and elements[0][1].accepts_multiple:
        return elements[0][0]
    return None


class RequestBuilder:
    """Turn a caller's nested dict into zeep keyword arguments."""

    def __init__(self, registry: CallbackRegistry):
        self.registry = registry

    def build(self, body: Optional[Mapping[str, Any]], element) -> Dict[str, Any]:
        """Build keyword arguments for the operation whose input is ``element``.

        Args:
            body: Caller data, any key casing
            element: zeep element of the operation input

        Returns:
            Ordered dict of canonical element names to values
        """
        return self._build_complex(body or {}, element.type, element.name)

    def _build_complex(self, value: Mapping[str, Any], xsd_type, name: Optional[str] = None) -> Dict[str, Any]:
        type_info = describe_type(xsd_type, name)
        records = [{"name": str(key), "args": [child]} for key, child in value.items()]

        for callback in self.registry.callbacks(BEFORE_BUILD):
            result = callback(records, type_info)
            if result is not None:
                records = result

        children = dict(getattr(xsd_type, "elements", []) or [])
        built: Dict[str, Any] = {}
        for record in records:
            element = children.get(record["name"])
            if element is None:
                logger.debug("Undeclared request field", type=type_info.name, field=record["name"])
            built[record["name"]] = self._build_value(record["args"], element)
        return built

    def _build_value(self, args: List[Any], element) -> Any:
        if is_nil(args):
            return xsd.Nil

        value = args[0] if args else None
        if not _is_complex(element):
            return value

        if isinstance(value, (list, tuple)):
            if element.accepts_multiple:
                return [
                    self._build_complex(item, element.type, element.name) if isinstance(item, Mapping) else item
                    for item in value
                ]
            item_name = _array_item_name(element.type)
            if item_name is not None:
                value = {item_name: list(value)}

        if isinstance(value, Mapping):
            return self._build_complex(value, element.type, element.name)
        return value


class ResponseWalker:
    """Apply response hooks to every mapping of a decoded response."""

    def __init__(self, registry: CallbackRegistry):
        self.registry = registry

    def walk(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            node = {key: self.walk(child) for key, child in value.items()}
            for callback in self.registry.callbacks(AFTER_CHILDREN_HASH):
                node = callback(node)
            return node
        if isinstance(value, list):
            return [self.walk(item) for item in value]
        return value
