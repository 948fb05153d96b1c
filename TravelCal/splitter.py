"""
Splitter Module

This module computes how much each participant paid and how far that is
from an equal share of the total.

Features:
    - Equal splitting of the total among all participants
    - Per-participant paid amount and balance
    - Expenses whose payer is not a participant count toward the total
      but are attributed to nobody

Data Model:
    Input - participants (list of dicts):
        - participant_id: string
        - name: string

    Input - expenses (list of dicts):
        - payer_id: string
        - amount: float

    Output - balances (list of dicts, in participant order):
        - participant_id: string
        - name: string
        - paid: float (sum of expenses paid by this participant)
        - balance: float (paid - average)
            - Positive = overpaid, receives money
            - Negative = underpaid, owes money

Functions:
    calculate_totals: Total spent, participant count and average share.
    calculate_balances: Calculate per-participant paid amount and balance.
"""


def calculate_totals(participants: list[dict], expenses: list[dict]) -> dict:
    """
    Calculate the trip totals that every balance is measured against.

    Args:
        participants: List of participant dicts.
        expenses: List of expense dicts with amount.

    Returns:
        dict: Contains:
            - total_spent: float (sum of all expense amounts, 0.0 if none)
            - participant_count: int
            - average: float (total_spent / participant_count, 0.0 if no participants)
    """
    total_spent = sum((expense["amount"] for expense in expenses), 0.0)
    participant_count = len(participants)

    # No participants means there is nobody to share with
    average = total_spent / participant_count if participant_count else 0.0

    return {
        "total_spent": total_spent,
        "participant_count": participant_count,
        "average": average
    }


def calculate_balances(participants: list[dict], expenses: list[dict]) -> list[dict]:
    """
    Calculate per-participant paid amounts and balances.

    For each participant:
        1. paid = sum of amounts of expenses whose payer_id is the participant
        2. balance = paid - average, where average = total_spent / participant_count

    Args:
        participants: List of participant dicts with participant_id and name.
        expenses: List of expense dicts with payer_id and amount.

    Returns:
        list[dict]: One dict per participant (same order as input) containing
            participant_id, name, paid and balance.

    Notes:
        - Amounts are NOT rounded; rounding is a display concern
        - A payer_id that matches no participant still raises the average
        - Does NOT modify its inputs
    """
    totals = calculate_totals(participants, expenses)
    average = totals["average"]

    # Sum paid amounts per payer
    paid_by = {}
    for expense in expenses:
        payer_id = expense["payer_id"]
        paid_by[payer_id] = paid_by.get(payer_id, 0.0) + expense["amount"]

    balances = []
    for participant in participants:
        participant_id = participant["participant_id"]
        paid = paid_by.get(participant_id, 0.0)
        balances.append({
            "participant_id": participant_id,
            "name": participant.get("name"),
            "paid": paid,
            "balance": paid - average
        })

    return balances
