"""Callback registry for request building and response parsing hooks."""
import threading
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from bing_ads_sdk.transformers.request_normalizer import mark_nil_values, normalize_request
from bing_ads_sdk.transformers.response_normalizer import normalize_response

# Called once per complex type level with (records, type_info)
BEFORE_BUILD = "request.before_build"
# Called once per decoded mapping, after its children, with (mapping)
AFTER_CHILDREN_HASH = "response.after_children_hash"


class CallbackRegistry:
    """Ordered callback lists keyed by event name."""

    def __init__(self):
        self._store: Dict[str, List[Callable]] = {}
        self._lock = threading.Lock()

    @property
    def store(self) -> Dict[str, List[Callable]]:
        with self._lock:
            return {event: list(callbacks) for event, callbacks in self._store.items()}

    def register(self, callbacks: Mapping[str, Iterable[Callable]]) -> None:
        """Append callbacks for several events at once."""
        with self._lock:
            for event, funcs in callbacks.items():
                self._store.setdefault(event, []).extend(funcs)

    def on(self, event: str, callback: Optional[Callable] = None) -> Callable:
        """Append a single callback.

        Without ``callback`` it returns a decorator, so both
        ``registry.on(event, func)`` and ``@registry.on(event)`` work.
        """
        if callback is None:
            def decorator(func: Callable) -> Callable:
                self.register({event: [func]})
                return func

            return decorator
        self.register({event: [callback]})
        return callback

    def callbacks(self, event: str) -> List[Callable]:
        with self._lock:
            return list(self._store.get(event, []))

    def flush(self) -> None:
        with self._lock:
            self._store.clear()


def rename_and_sort(records, type_info):
    return normalize_request(records, type_info.element_names)


def mark_nils(records, type_info):
    return mark_nil_values(records, type_info.nillable_names)


def default_registry() -> CallbackRegistry:
    """Registry with the standard request and response normalization hooks."""
    registry = CallbackRegistry()
    registry.register(
        {
            BEFORE_BUILD: [rename_and_sort, mark_nils],
            AFTER_CHILDREN_HASH: [normalize_response],
        }
    )
    return registry
