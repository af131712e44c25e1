"""SOAP fault parsing for HTTP error responses."""
from typing import Any, Dict, Optional, Union

from lxml import etree

from bing_ads_sdk.models.schemas import ServerFault
from bing_ads_sdk.transformers.response_normalizer import normalize_tree

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"


def element_to_dict(element) -> Any:
    """Convert an element to plain Python data keyed by local names.

    Leaf elements become their text, repeated children become lists.
    """
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        if element.get(XSI_NIL) == "true":
            return None
        return element.text
    result: Dict[str, Any] = {}
    for child in children:
        name = etree.QName(child).localname
        value = element_to_dict(child)
        if name in result:
            if not isinstance(result[name], list):
                result[name] = [result[name]]
            result[name].append(value)
        else:
            result[name] = value
    return result


def parse_fault(status_code: int, content: Union[bytes, str, None]) -> ServerFault:
    """Build a ServerFault from an HTTP error body.

    Bodies that are not a SOAP envelope with a Fault element still produce a
    ServerFault holding the raw text.
    """
    if isinstance(content, bytes):
        text = content.decode("utf-8", errors="replace")
    else:
        text = content or ""

    fault_code: Optional[str] = None
    fault_string: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    try:
        root = etree.fromstring(content.encode("utf-8") if isinstance(content, str) else content) if content else None
    except etree.XMLSyntaxError:
        root = None

    if root is not None:
        fault = root.find(f".//{{{SOAP_ENV_NS}}}Fault")
        if fault is not None:
            fault_code = fault.findtext("faultcode")
            fault_string = fault.findtext("faultstring")
            detail = fault.find("detail")
            if detail is not None and len(detail):
                raw = element_to_dict(detail)
                if isinstance(raw, dict):
                    details = normalize_tree(raw)

    return ServerFault(
        status_code=status_code,
        fault_code=fault_code,
        fault_string=fault_string,
        details=details,
        body=text,
    )
