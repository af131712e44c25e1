"""Keep-alive HTTP sessions and the zeep transport that uses them."""
import threading
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit

import requests
import structlog
from requests.adapters import HTTPAdapter, Retry
from zeep.transports import Transport

from bing_ads_sdk.errors import ServerError
from bing_ads_sdk.settings import (
    HTTP_INTERVAL_RETRY_COUNT_ON_TIMEOUT,
    HTTP_OPEN_TIMEOUT,
    HTTP_READ_TIMEOUT,
    HTTP_RETRY_COUNT_ON_TIMEOUT,
)
from bing_ads_sdk.transport.faults import parse_fault

logger = structlog.get_logger()


def host_key(url: str) -> str:
    """Scheme and host part of a URL, used to key connections."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


class ConnectionPool:
    """One persistent session per host, created on first use."""

    def __init__(
        self,
        open_timeout: float = HTTP_OPEN_TIMEOUT,
        read_timeout: float = HTTP_READ_TIMEOUT,
        retry_count: int = HTTP_RETRY_COUNT_ON_TIMEOUT,
        retry_interval: float = HTTP_INTERVAL_RETRY_COUNT_ON_TIMEOUT,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ) -> None:
        self.open_timeout = open_timeout
        self.read_timeout = read_timeout
        self.retry_count = retry_count
        self.retry_interval = retry_interval
        self.session_factory = session_factory or requests.Session
        self._sessions: Dict[str, requests.Session] = {}
        self._lock = threading.Lock()

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.open_timeout, self.read_timeout)

    @property
    def hosts(self):
        return list(self._sessions)

    def _new_session(self) -> requests.Session:
        session = self.session_factory()
        retry = Retry(
            total=self.retry_count,
            connect=self.retry_count,
            read=self.retry_count,
            status=0,
            backoff_factor=self.retry_interval,
            # SOAP calls are POSTs; the API treats them as idempotent
            allowed_methods=None,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry, pool_connections=1, pool_maxsize=10)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def connection(self, url: str) -> requests.Session:
        """Session for the host of ``url``."""
        key = host_key(url)
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                logger.debug("Opening HTTP connection", host=key)
                session = self._new_session()
                self._sessions[key] = session
            return session

    def close(self) -> None:
        """Close every open session."""
        with self._lock:
            sessions = list(self._sessions.items())
            self._sessions.clear()
        for key, session in sessions:
            logger.debug("Closing HTTP connection", host=key)
            session.close()


class PooledTransport(Transport):
    """zeep transport posting through a ConnectionPool.

    HTTP client and server errors are turned into ``ServerError`` before
    zeep attempts to parse the reply.
    """

    def __init__(self, pool: ConnectionPool, session: Optional[requests.Session] = None, **kwargs) -> None:
        super().__init__(session=session, **kwargs)
        self.pool = pool

    def post(self, address, message, headers):
        session = self.pool.connection(address)
        logger.debug("Sending SOAP request", address=address, body=message)
        response = session.post(address, data=message, headers=headers, timeout=self.pool.timeout)
        logger.debug("Received SOAP response", status=response.status_code, body=response.content)

        if 400 <= response.status_code < 600:
            fault = parse_fault(response.status_code, response.content)
            logger.warning(
                "HTTP error response",
                address=address,
                status=response.status_code,
                fault_code=fault.fault_code,
            )
            raise ServerError(fault)
        return response
