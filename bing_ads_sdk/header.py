"""Shared SOAP header sent with every request."""
from typing import Any, Dict, List, Mapping, Optional

from lxml import etree

from bing_ads_sdk.transformers.request_normalizer import normalize_request

HEADER_FIELDS = [
    "AuthenticationToken",
    "CustomerAccountId",
    "CustomerId",
    "DeveloperToken",
    "Password",
    "UserName",
]


class SharedHeader:
    """Authentication and account header values."""

    def __init__(self, content: Optional[Mapping[str, Any]] = None):
        self._content = dict(content or {})

    def update(self, **values) -> None:
        self._content.update(values)

    def content(self) -> Dict[str, str]:
        """Header values under their canonical names, in header order."""
        records = [
            {"name": name, "args": [value]}
            for name, value in self._content.items()
            if value is not None
        ]
        normalize_request(records, HEADER_FIELDS)
        return {record["name"]: str(record["args"][0]) for record in records}

    def elements(self, namespace: Optional[str]) -> List[etree._Element]:
        """Header values as elements in the service namespace."""
        elements = []
        for name, value in self.content().items():
            element = etree.Element(etree.QName(namespace, name) if namespace else name)
            element.text = value
            elements.append(element)
        return elements
