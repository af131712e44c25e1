"""Tests for the command line entrypoint."""
from __future__ import annotations

import json

import pytest
import structlog

import main
from bing_ads_sdk.client import BingAdsClient
from tests.mocks import data as mock_data


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


def test_parse_args_defaults():
    args = main.parse_args(["campaign_management", "get_campaigns_by_ids"])
    assert args.body == "{}"
    assert not args.sandbox
    assert args.log_level == "INFO"


def test_invalid_json_body(capsys):
    code = main.main(["campaign_management", "get_campaigns_by_ids", "--body", "{nope"])
    assert code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid JSON body" in captured.err


def test_call_prints_result(monkeypatch, capsys, settings, http):
    http.queue(200, mock_data.make_get_campaigns_response())
    captured = {}

    def from_env(**overrides):
        captured.update(overrides)
        return settings

    def make_client(client_settings):
        return BingAdsClient(client_settings, session_factory=http)

    monkeypatch.setattr(main.ClientSettings, "from_env", staticmethod(from_env))
    monkeypatch.setattr(main, "BingAdsClient", make_client)

    code = main.main(
        ["campaign_management", "GetCampaignsByIds", "--body", '{"account_id": 1}', "--sandbox"]
    )

    assert code == 0
    assert captured == {"environment": "sandbox"}
    output = json.loads(capsys.readouterr().out)
    assert output["status"] == "success"
    assert output["data"]["campaigns"]["campaign"][0]["name"] == "Spring Sale"
