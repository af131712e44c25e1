"""Tests for XSD validation of request bodies."""
from __future__ import annotations

import pytest
from lxml import etree

from bing_ads_sdk.validators.schema_validator import SchemaValidator
from tests.mocks import data as mock_data


def test_valid_request_has_no_errors(validator):
    result = validator.validate(mock_data.make_get_campaigns_request())
    assert result.request_name == "GetCampaignsByIdsRequest"
    assert result.valid
    assert result.errors == []
    assert not result.skipped


def test_missing_required_element_is_an_error(validator):
    result = validator.validate(mock_data.make_get_campaigns_request(account_id=None))
    assert not result.valid
    assert result.errors[0].startswith("ERROR: line")
    assert "AccountId" in result.errors[0]


def test_enumeration_violation_is_an_error(validator):
    result = validator.validate(mock_data.make_get_campaigns_request(campaign_type="Video"))
    assert not result.valid
    assert any("CampaignType" in message for message in result.errors)


def test_accepts_element_envelopes(validator):
    envelope = etree.fromstring(mock_data.make_get_campaigns_request().encode("utf-8"))
    assert validator.validate(envelope).valid


def test_bypassed_request_is_skipped(xsd_path):
    validator = SchemaValidator(xsd_path)
    envelope = mock_data.make_get_campaigns_request(request_name="SignupCustomerRequest")
    result = validator.validate(envelope)
    assert result.skipped
    assert result.valid
    assert validator._schema is None


def test_custom_bypass_list(xsd_path):
    validator = SchemaValidator(xsd_path, bypass=["GetCampaignsByIdsRequest"])
    result = validator.validate(mock_data.make_get_campaigns_request(account_id=None))
    assert result.skipped


def test_schema_is_loaded_once(validator):
    assert validator.schema is validator.schema


def test_missing_schema_file(tmp_path):
    validator = SchemaValidator(tmp_path / "missing.xsd")
    with pytest.raises(FileNotFoundError):
        validator.validate(mock_data.make_get_campaigns_request())


def test_extract_body_requires_body():
    envelope = f'<s:Envelope xmlns:s="{mock_data.SOAP_ENV_NS}"><s:Header/></s:Envelope>'
    with pytest.raises(ValueError, match="No SOAP Body"):
        SchemaValidator.extract_body(envelope)


def test_extract_body_requires_content():
    with pytest.raises(ValueError, match="empty"):
        SchemaValidator.extract_body(mock_data.make_envelope(""))


def test_extract_body_returns_detached_copy():
    envelope = etree.fromstring(mock_data.make_get_campaigns_request().encode("utf-8"))
    body = SchemaValidator.extract_body(envelope)
    assert body.getparent() is None
    assert etree.QName(body).namespace == mock_data.CAMPAIGN_NS
    assert len(envelope.find(f"{{{mock_data.SOAP_ENV_NS}}}Body")) == 1
