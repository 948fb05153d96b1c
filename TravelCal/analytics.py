"""
Analytics Module

This module provides a spending report for the TravelCal expense splitter.

Features:
    - Total and average spend
    - Per-participant payer totals
    - Largest single expense
    - Smart warnings for spending imbalances and unattributed amounts

Data Model:
    Input - participants: list of dicts with:
        - participant_id: string
        - name: string (optional)

    Input - expenses: list of dicts with:
        - expense_id: string
        - payer_id: string
        - amount: float

    Output - dict containing:
        - analytics: dict with total_spent, average_share, expense_count,
                     payer_totals, largest_expense
        - warnings: list of warning strings

Functions:
    generate_analytics: Generate analytics and warnings from expense data.
"""

from collections import defaultdict

from splitter import calculate_totals
from utils import format_currency


# Share of the total above which a single payer is flagged
DOMINANT_PAYER_PERCENT = 40


def generate_analytics(participants: list[dict], expenses: list[dict]) -> dict:
    """
    Generate analytics and smart warnings from expense data.

    Analytics computed:
        - total_spent: Sum of all expenses
        - average_share: What each participant should have spent
        - expense_count: Number of expenses
        - payer_totals: Total amount paid by each participant (0 for non-payers)
        - largest_expense: expense_id, payer_id and amount of the biggest expense

    Warnings generated (rule-based):
        - If one participant paid > 40% of total cost (only with 3+ participants)
        - If a participant paid nothing at all
        - If an expense's payer is not a participant; its amount raises the
          average but is credited to nobody

    Args:
        participants: List of participant dicts with participant_id (name optional).
        expenses: List of expense dicts with payer_id and amount.

    Returns:
        dict: Contains two keys:
            - analytics: dict described above
            - warnings: list of warning strings
    """
    totals = calculate_totals(participants, expenses)
    total_spent = totals["total_spent"]

    names = {p["participant_id"]: p.get("name") or p["participant_id"] for p in participants}

    payer_totals = {participant_id: 0.0 for participant_id in names}
    unattributed = defaultdict(float)  # unknown payer_id -> amount

    for expense in expenses:
        payer_id = expense["payer_id"]
        if payer_id in payer_totals:
            payer_totals[payer_id] += expense["amount"]
        else:
            unattributed[payer_id] += expense["amount"]

    largest_expense = None
    if expenses:
        biggest = max(expenses, key=lambda e: e["amount"])
        largest_expense = {
            "expense_id": biggest.get("expense_id"),
            "payer_id": biggest["payer_id"],
            "amount": biggest["amount"]
        }

    analytics = {
        "total_spent": total_spent,
        "average_share": totals["average"],
        "expense_count": len(expenses),
        "payer_totals": payer_totals,
        "largest_expense": largest_expense
    }

    warnings = []

    # Rule 1: one participant carried a large share of the cost
    # With two participants one of them always pays at least half
    if total_spent > 0 and len(participants) > 2:
        for participant_id, amount in payer_totals.items():
            percentage = amount / total_spent * 100
            if percentage > DOMINANT_PAYER_PERCENT:
                warnings.append(
                    f"Warning: {names[participant_id]} paid {percentage:.1f}% of total expenses "
                    f"({format_currency(amount)} of {format_currency(total_spent)})"
                )

    # Rule 2: participants who paid nothing
    if expenses:
        for participant_id, amount in payer_totals.items():
            if amount == 0:
                warnings.append(f"Warning: {names[participant_id]} has not paid for any expense")

    # Rule 3: expenses whose payer is not a participant
    for payer_id, amount in unattributed.items():
        warnings.append(
            f"Warning: {format_currency(amount)} paid by unknown participant '{payer_id}' "
            f"is not credited to anyone"
        )

    return {
        "analytics": analytics,
        "warnings": warnings
    }
