"""Client configuration."""
import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENVIRONMENTS = ("production", "sandbox")

# Requests not covered by the official XSD files
DEFAULT_VALIDATION_BYPASS = ["SignupCustomerRequest"]

HTTP_OPEN_TIMEOUT = 10
HTTP_READ_TIMEOUT = 20
HTTP_RETRY_COUNT_ON_TIMEOUT = 2
HTTP_INTERVAL_RETRY_COUNT_ON_TIMEOUT = 1


class ClientSettings(BaseModel):
    """Credentials, endpoints and transport tuning for a client."""

    developer_token: Optional[str] = None
    authentication_token: Optional[str] = None
    customer_id: Optional[str] = None
    customer_account_id: Optional[str] = None
    environment: str = "production"
    xsd_path: Optional[str] = None
    validation_bypass: List[str] = Field(default_factory=lambda: list(DEFAULT_VALIDATION_BYPASS))
    open_timeout: float = Field(HTTP_OPEN_TIMEOUT, gt=0)
    read_timeout: float = Field(HTTP_READ_TIMEOUT, gt=0)
    retry_count: int = Field(HTTP_RETRY_COUNT_ON_TIMEOUT, ge=0)
    retry_interval: float = Field(HTTP_INTERVAL_RETRY_COUNT_ON_TIMEOUT, ge=0)
    wsdl_paths: Dict[str, str] = {}

    @field_validator('environment')
    def validate_environment(cls, v):
        """Accept known environments, case-insensitively."""
        env = (v or "").strip().lower()
        if env not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {ENVIRONMENTS}, got {v!r}")
        return env

    def header_content(self) -> Dict[str, Optional[str]]:
        """Values for the shared SOAP header."""
        return {
            "authentication_token": self.authentication_token,
            "customer_account_id": self.customer_account_id,
            "customer_id": self.customer_id,
            "developer_token": self.developer_token,
        }

    @classmethod
    def from_env(cls, **overrides) -> "ClientSettings":
        """Build settings from ``BING_ADS_*`` environment variables (and a .env file)."""
        load_dotenv()

        values = {
            "developer_token": os.getenv("BING_ADS_DEVELOPER_TOKEN"),
            "authentication_token": os.getenv("BING_ADS_AUTHENTICATION_TOKEN"),
            "customer_id": os.getenv("BING_ADS_CUSTOMER_ID"),
            "customer_account_id": os.getenv("BING_ADS_CUSTOMER_ACCOUNT_ID"),
            "environment": os.getenv("BING_ADS_ENVIRONMENT", "production"),
            "xsd_path": os.getenv("BING_ADS_XSD_PATH"),
        }

        bypass = os.getenv("BING_ADS_VALIDATION_BYPASS")
        if bypass is not None:
            values["validation_bypass"] = [name.strip() for name in bypass.split(",") if name.strip()]

        # service=location pairs, e.g. "campaign_management=/srv/wsdl/cm.wsdl"
        wsdl_paths = os.getenv("BING_ADS_WSDL_PATHS")
        if wsdl_paths:
            values["wsdl_paths"] = {
                service.strip(): location.strip()
                for service, _, location in (item.partition("=") for item in wsdl_paths.split(","))
                if service.strip() and location.strip()
            }

        for field, env_name in (
            ("open_timeout", "BING_ADS_OPEN_TIMEOUT"),
            ("read_timeout", "BING_ADS_READ_TIMEOUT"),
            ("retry_count", "BING_ADS_RETRY_COUNT"),
            ("retry_interval", "BING_ADS_RETRY_INTERVAL"),
        ):
            raw = os.getenv(env_name)
            if raw and raw.strip():
                values[field] = raw.strip()

        values.update(overrides)
        return cls(**values)
