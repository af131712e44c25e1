"""Long-lived API client owning connections, schema and services."""
from typing import Callable, Dict, Optional

import requests
import structlog
import zeep

from bing_ads_sdk.header import SharedHeader
from bing_ads_sdk.pipeline.callbacks import CallbackRegistry, default_registry
from bing_ads_sdk.service import Service
from bing_ads_sdk.settings import ClientSettings
from bing_ads_sdk.transformers.response_normalizer import snakize
from bing_ads_sdk.transport.connection_pool import ConnectionPool, PooledTransport
from bing_ads_sdk.validators.schema_validator import SchemaValidator

logger = structlog.get_logger()

# service name -> (host prefix, path below /Api/)
SERVICE_ENDPOINTS: Dict[str, tuple] = {
    "ad_insight": ("adinsight", "Advertiser/AdInsight/v13/AdInsightService.svc"),
    "bulk": ("bulk", "Advertiser/CampaignManagement/v13/BulkService.svc"),
    "campaign_management": ("campaign", "Advertiser/CampaignManagement/v13/CampaignManagementService.svc"),
    "customer_billing": ("clientcenter", "Billing/v13/CustomerBillingService.svc"),
    "customer_management": ("clientcenter", "CustomerManagement/v13/CustomerManagementService.svc"),
    "reporting": ("reporting", "Advertiser/Reporting/v13/ReportingService.svc"),
}


def service_wsdl_url(service: str, environment: str = "production") -> str:
    """WSDL URL of a service in the given environment."""
    try:
        prefix, path = SERVICE_ENDPOINTS[service]
    except KeyError:
        raise ValueError(f"Unknown service: {service}") from None
    domain = "api.sandbox.bingads.microsoft.com" if environment == "sandbox" else "api.bingads.microsoft.com"
    return f"https://{prefix}.{domain}/Api/{path}?singleWsdl"


class BingAdsClient:
    """Entry point of the SDK.

    Holds one connection pool and one schema validator for its whole life;
    services created from it share both.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        registry: Optional[CallbackRegistry] = None,
    ) -> None:
        self.settings = settings or ClientSettings.from_env()
        self.pool = ConnectionPool(
            open_timeout=self.settings.open_timeout,
            read_timeout=self.settings.read_timeout,
            retry_count=self.settings.retry_count,
            retry_interval=self.settings.retry_interval,
            session_factory=session_factory,
        )
        self.registry = registry or default_registry()
        self.header = SharedHeader(self.settings.header_content())
        self._services: Dict[str, Service] = {}

        if self.settings.xsd_path:
            self.validator: Optional[SchemaValidator] = SchemaValidator(
                self.settings.xsd_path, bypass=self.settings.validation_bypass
            )
        else:
            self.validator = None
            logger.debug("XSD validation disabled, no schema configured")

    def wsdl_location(self, service: str) -> str:
        return self.settings.wsdl_paths.get(service) or service_wsdl_url(service, self.settings.environment)

    def service(self, name: str) -> Service:
        """Service by name, e.g. ``campaign_management``. Loaded once, then reused."""
        key = snakize(name)
        if key not in self._services:
            wsdl = self.wsdl_location(key)
            logger.info("Loading service", service=key, wsdl=wsdl)
            session = self.pool.connection(wsdl) if wsdl.startswith(("http://", "https://")) else None
            transport = PooledTransport(self.pool, session=session, timeout=self.settings.read_timeout)
            soap_client = zeep.Client(wsdl=wsdl, transport=transport)
            self._services[key] = Service(key, soap_client, self.header, self.registry, self.validator)
        return self._services[key]

    def __getattr__(self, attr: str) -> Service:
        if attr.startswith("_"):
            raise AttributeError(attr)
        settings = self.__dict__.get("settings")
        if settings is not None and (attr in SERVICE_ENDPOINTS or attr in settings.wsdl_paths):
            return self.service(attr)
        raise AttributeError(f"{type(self).__name__} has no attribute {attr!r}")

    def close_http_connections(self) -> None:
        self.pool.close()

    def close(self) -> None:
        self.close_http_connections()
        self._services.clear()

    def __enter__(self) -> "BingAdsClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
