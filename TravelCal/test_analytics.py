from analytics import generate_analytics


participants = [
    {"participant_id": "P001", "name": "Alice"},
    {"participant_id": "P002", "name": "Bob"},
    {"participant_id": "P003", "name": "Charlie"},
]

expenses = [
    {"expense_id": "E001", "payer_id": "P001", "amount": 150000.0},
    {"expense_id": "E002", "payer_id": "P002", "amount": 60000.0},
    {"expense_id": "E003", "payer_id": "P001", "amount": 12000.0},
]


def test_analytics_summary():
    analytics = generate_analytics(participants, expenses)["analytics"]

    assert analytics["total_spent"] == 222000.0
    assert analytics["average_share"] == 74000.0
    assert analytics["expense_count"] == 3
    assert analytics["payer_totals"] == {"P001": 162000.0, "P002": 60000.0, "P003": 0.0}
    assert analytics["largest_expense"] == {"expense_id": "E001", "payer_id": "P001", "amount": 150000.0}


def test_warnings():
    warnings = generate_analytics(participants, expenses)["warnings"]

    assert len(warnings) == 2
    assert warnings[0].startswith("Warning: Alice paid 73.0% of total expenses")
    assert "₩162,000 of ₩222,000" in warnings[0]
    assert warnings[1] == "Warning: Charlie has not paid for any expense"


def test_unknown_payer_warning():
    result = generate_analytics(participants[:2], [
        {"expense_id": "E001", "payer_id": "P001", "amount": 100.0},
        {"expense_id": "E002", "payer_id": "P009", "amount": 50.0},
    ])

    assert result["analytics"]["payer_totals"] == {"P001": 100.0, "P002": 0.0}
    assert "Warning: ₩50 paid by unknown participant 'P009' is not credited to anyone" in result["warnings"]


def test_no_expenses():
    result = generate_analytics(participants, [])

    assert result["analytics"]["total_spent"] == 0.0
    assert result["analytics"]["largest_expense"] is None
    assert result["warnings"] == []
