"""HTTP transport package."""

from .connection_pool import ConnectionPool, PooledTransport, host_key
from .faults import element_to_dict, parse_fault

__all__ = ["ConnectionPool", "PooledTransport", "element_to_dict", "host_key", "parse_fault"]
