"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from pathlib import Path

import pytest

from tests.mocks.http import FakeSessionFactory

FIXTURES_PATH = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture()
def wsdl_path():
    return FIXTURES_PATH / "campaign_management.wsdl"


@pytest.fixture()
def xsd_path():
    return FIXTURES_PATH / "main.xsd"


@pytest.fixture()
def settings(wsdl_path, xsd_path):
    from bing_ads_sdk.settings import ClientSettings

    return ClientSettings(
        developer_token="dev-token",
        authentication_token="oauth-token",
        customer_id="1001",
        customer_account_id="2002",
        environment="sandbox",
        xsd_path=str(xsd_path),
        wsdl_paths={"campaign_management": str(wsdl_path)},
    )


@pytest.fixture()
def http():
    return FakeSessionFactory()


@pytest.fixture()
def client(settings, http):
    from bing_ads_sdk.client import BingAdsClient

    client = BingAdsClient(settings, session_factory=http)
    yield client
    client.close()


@pytest.fixture()
def soap_client(wsdl_path):
    import zeep

    return zeep.Client(wsdl=str(wsdl_path))


@pytest.fixture()
def validator(xsd_path):
    from bing_ads_sdk.validators.schema_validator import SchemaValidator

    return SchemaValidator(xsd_path)
