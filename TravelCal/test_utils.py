import math

import pytest

from utils import (
    describe_settlements,
    explain_all_participants,
    explain_participant_share,
    format_currency,
    generate_id,
    validate_amount,
    NO_TRANSFERS_MESSAGE,
)


participants = [
    {"participant_id": "P001", "name": "Alice"},
    {"participant_id": "P002", "name": "Bob"},
]

expenses = [
    {"expense_id": "E001", "payer_id": "P001", "amount": 80.0, "description": "Dinner"},
    {"expense_id": "E002", "payer_id": "P001", "amount": 20.0, "description": None},
]


@pytest.mark.parametrize("amount, expected", [
    (0, "₩0"),
    (50, "₩50"),
    (1234.5, "₩1,235"),
    (1234567.4, "₩1,234,567"),
    (-500, "-₩500"),
    (-0.2, "₩0"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_large_amounts():
    assert format_currency(1e30) == "₩1,000,000,000,000,000,000,000,000,000,000"
    assert format_currency(-1.5e30, decimals=2) == "-₩1,500,000,000,000,000,000,000,000,000,000.00"


def test_format_currency_overrides():
    assert format_currency(1234.5, symbol="$", decimals=2) == "$1,234.50"


def test_format_currency_from_environment(monkeypatch):
    monkeypatch.setenv("TRAVELCAL_CURRENCY_SYMBOL", "€")
    monkeypatch.setenv("TRAVELCAL_CURRENCY_DECIMALS", "2")
    assert format_currency(3.005) == "€3.01"


@pytest.mark.parametrize("value, valid", [
    (10, True),
    ("10.5", True),
    (0.01, True),
    (0, False),
    (-1, False),
    ("abc", False),
    (None, False),
    (math.nan, False),
    (math.inf, False),
    (True, False),
])
def test_validate_amount(value, valid):
    assert validate_amount(value) is valid


def test_generate_id():
    assert generate_id("P", 1) == "P001"
    assert generate_id("E", 42) == "E042"


def test_explain_participant_share():
    explanation = explain_participant_share("P001", participants, expenses)

    assert explanation["name"] == "Alice"
    assert explanation["total_paid"] == 100.0
    assert explanation["average_share"] == 50.0
    assert explanation["balance"] == 50.0
    assert [e["expense_id"] for e in explanation["expenses_paid"]] == ["E001", "E002"]
    assert "error" not in explanation


def test_explain_unknown_participant():
    explanation = explain_participant_share("P404", participants, expenses)
    assert explanation["error"] == "Participant P404 not found"
    assert explanation["expenses_paid"] == []


def test_explain_all_participants():
    explanations = explain_all_participants(participants, expenses)
    assert [e["participant_id"] for e in explanations] == ["P001", "P002"]
    assert explanations[1]["balance"] == -50.0


def test_describe_settlements():
    lines = describe_settlements([{"from_id": "P002", "to_id": "P001", "amount": 50.0}], participants)
    assert lines == ["Bob sends Alice ₩50"]


def test_describe_settlements_unknown_ids():
    lines = describe_settlements([{"from_id": "P009", "to_id": "P001", "amount": 1.0}], participants)
    assert lines == ["P009 sends Alice ₩1"]


def test_describe_no_settlements():
    assert describe_settlements([], participants) == [NO_TRANSFERS_MESSAGE]
