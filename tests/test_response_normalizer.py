"""Unit tests for response key casing and long array unwrapping."""
from __future__ import annotations

import pytest

from bing_ads_sdk.transformers.response_normalizer import normalize_response, normalize_tree, snakize, to_int


def test_converts_camel_case_keys():
    out = normalize_response({"FirstKey": "", "Second": "", "Thirdkey": ""})
    assert set(out) == {"first_key", "second", "thirdkey"}


def test_converts_long_values_to_integer():
    out = normalize_response({"Key": {"long": [1]}})
    assert out == {"key": [1]}


def test_long_values_are_coerced():
    out = normalize_response({"CampaignIds": {"long": ["7", 8]}})
    assert out["campaign_ids"] == [7, 8]


def test_long_values_never_fail_on_bad_items():
    out = normalize_response({"Key": {"long": [None, "x", "1.5", "-4abc", 2.9]}})
    assert out == {"key": [0, 0, 1, -4, 2]}


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), ("12", 12), (" 3 ", 3), ("1.5", 1), ("abc", 0), (None, 0), (float("nan"), 0), ({}, 0)],
)
def test_to_int(value, expected):
    assert to_int(value) == expected


def test_other_wrappers_are_left_alone():
    value = {"campaign": [{"id": 1}]}
    out = normalize_response({"Campaigns": value})
    assert out["campaigns"] is value


def test_non_mapping_values_pass_through():
    out = normalize_response({"Name": "x", "Ids": [1, 2], "Missing": None})
    assert out == {"name": "x", "ids": [1, 2], "missing": None}


def test_collisions_are_last_write_wins():
    out = normalize_response({"FirstKey": 1, "first_key": 2})
    assert out == {"first_key": 2}


def test_does_not_mutate_input():
    source = {"Key": {"long": [1]}}
    normalize_response(source)
    assert source == {"Key": {"long": [1]}}


@pytest.mark.parametrize(
    "name, expected",
    [
        ("CampaignIds", "campaign_ids"),
        ("DailyBudget", "daily_budget"),
        ("already_snake", "already_snake"),
        ("AddressLine1", "address_line1"),
        ("URLPath", "url_path"),
        ("Id", "id"),
    ],
)
def test_snakize(name, expected):
    assert snakize(name) == expected


def test_key_casing_is_idempotent():
    once = normalize_response({"FirstKey": 1, "PartialErrors": None, "AddressLine1": "x"})
    twice = normalize_response(once)
    assert list(twice) == list(once)


def test_normalize_tree_walks_children_first():
    tree = {
        "AddCampaignsResponse": {
            "CampaignIds": {"long": [1, 2]},
            "PartialErrors": {"BatchError": [{"ErrorCode": "E1", "Index": 0}]},
        }
    }
    out = normalize_tree(tree)
    assert out == {
        "add_campaigns_response": {
            "campaign_ids": [1, 2],
            "partial_errors": {"batch_error": [{"error_code": "E1", "index": 0}]},
        }
    }
