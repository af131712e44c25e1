"""Hook pipeline between caller data and the SOAP toolkit."""

from .builder import RequestBuilder, ResponseWalker, TypeInfo, describe_type
from .callbacks import AFTER_CHILDREN_HASH, BEFORE_BUILD, CallbackRegistry, default_registry

__all__ = [
    "AFTER_CHILDREN_HASH",
    "BEFORE_BUILD",
    "CallbackRegistry",
    "RequestBuilder",
    "ResponseWalker",
    "TypeInfo",
    "default_registry",
    "describe_type",
]
