"""Transformers package for request and response normalization."""

from .request_normalizer import (
    NIL_ATTRIBUTE,
    mark_nil_values,
    match_field_names,
    normalize_request,
)
from .response_normalizer import normalize_response, normalize_tree, snakize

__all__ = [
    "NIL_ATTRIBUTE",
    "mark_nil_values",
    "match_field_names",
    "normalize_request",
    "normalize_response",
    "normalize_tree",
    "snakize",
]
