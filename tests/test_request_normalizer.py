"""Unit tests for request field matching and ordering."""
from __future__ import annotations

from bing_ads_sdk.transformers.request_normalizer import (
    is_nil,
    mark_nil_values,
    match_field_names,
    normalize_request,
)
from tests.mocks import data as mock_data


def test_fuzzy_match_maps_to_declared_names():
    records = mock_data.make_records("camel_case", "with_underscore", "one_word")
    normalize_request(records, ["CamelCase", "With_Underscore", "Oneword"])
    assert [r["name"] for r in records] == ["CamelCase", "With_Underscore", "Oneword"]


def test_orders_records_following_declaration():
    records = mock_data.make_records("third", "first", "second")
    result = normalize_request(records, ["First", "Second", "Third"])
    assert result is records
    assert records == [
        {"name": "First", "args": []},
        {"name": "Second", "args": []},
        {"name": "Third", "args": []},
    ]


def test_unknown_names_move_to_end_in_original_order():
    records = mock_data.make_records("zeta", "second", "alpha", "first")
    normalize_request(records, ["First", "Second"])
    assert [r["name"] for r in records] == ["First", "Second", "zeta", "alpha"]


def test_empty_declaration_keeps_names_and_order():
    records = mock_data.make_records("b_name", "a_name")
    normalize_request(records, [])
    assert [r["name"] for r in records] == ["b_name", "a_name"]


def test_duplicates_are_all_renamed_and_keep_order():
    records = [
        {"name": "campaign_id", "args": [1]},
        {"name": "name", "args": ["x"]},
        {"name": "CAMPAIGN_ID", "args": [2]},
    ]
    normalize_request(records, ["CampaignId", "Name"])
    assert records == [
        {"name": "CampaignId", "args": [1]},
        {"name": "CampaignId", "args": [2]},
        {"name": "Name", "args": ["x"]},
    ]


def test_match_field_names_returns_index_map():
    renames = match_field_names(["account_id", "unknown", "CAMPAIGNIDS"], ["AccountId", "CampaignIds"])
    assert renames == {0: "AccountId", 2: "CampaignIds"}


def test_match_field_names_first_declaration_wins():
    renames = match_field_names(["a_b"], ["AB", "A_B"])
    assert renames == {0: "AB"}


def test_subsequence_of_declared_names_follows_declaration():
    declared = ["A", "B", "C", "D"]
    records = mock_data.make_records("x", "d", "y", "b", "a")
    normalize_request(records, declared)
    names = [r["name"] for r in records]
    matched = [n for n in names if n in declared]
    assert matched == ["A", "B", "D"]
    assert names[len(matched):] == ["x", "y"]


def test_mark_nil_values_flags_nillable_none():
    records = [
        {"name": "ShouldHaveNil", "args": [None]},
        {"name": "ShouldNotHaveNil", "args": []},
        {"name": "NotNillable", "args": [None]},
    ]
    mark_nil_values(records, {"ShouldHaveNil", "ShouldNotHaveNil"})
    assert records == [
        {"name": "ShouldHaveNil", "args": [None, {"xsi:nil": True}]},
        {"name": "ShouldNotHaveNil", "args": []},
        {"name": "NotNillable", "args": [None]},
    ]
    assert is_nil(records[0]["args"]) is True
    assert is_nil(records[2]["args"]) is False
