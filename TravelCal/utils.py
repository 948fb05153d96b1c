"""
Utilities Module

This module provides utility functions and helpers for the TravelCal
expense splitter.

Features:
    - Transparency of each participant's balance
    - Human-readable settlement lines
    - Currency formatting
    - Amount validation
    - Sequential ID formatting

Data Model:
    Input - participants: list of dicts with:
        - participant_id: string
        - name: string

    Input - expenses: list of dicts with:
        - expense_id: string
        - payer_id: string
        - amount: float
        - description: string or None

    Input - settlements: list of dicts from compute_settlements() with:
        - from_id: string
        - to_id: string
        - amount: float

Functions:
    explain_participant_share: Get detailed breakdown for one participant.
    explain_all_participants: Get detailed breakdown for all participants.
    describe_settlements: Turn settlements into display lines.
    format_currency: Format amount with currency symbol.
    validate_amount: Validate if input is a valid monetary amount.
    generate_id: Generate a formatted identifier.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from config.settings import get_settings
from splitter import calculate_balances, calculate_totals


NO_TRANSFERS_MESSAGE = "Everything is balanced! No transfers needed."


def explain_participant_share(
    participant_id: str,
    participants: list[dict],
    expenses: list[dict]
) -> dict:
    """
    Generate detailed explanation of how a participant's balance was calculated.

    Args:
        participant_id: ID of the participant to explain.
        participants: List of participant dicts.
        expenses: List of expense dicts.

    Returns:
        dict: Explanation containing:
            - participant_id: string
            - name: string
            - expenses_paid: list of expense dicts paid by the participant
            - total_paid: float
            - average_share: float (what everyone should have spent)
            - balance: float (total_paid - average_share)
            - error: string (only if the participant is unknown)
    """
    totals = calculate_totals(participants, expenses)

    balance_info = next(
        (b for b in calculate_balances(participants, expenses) if b["participant_id"] == participant_id),
        None
    )

    if balance_info is None:
        return {
            "participant_id": participant_id,
            "name": None,
            "expenses_paid": [],
            "total_paid": 0.0,
            "average_share": totals["average"],
            "balance": 0.0,
            "error": f"Participant {participant_id} not found"
        }

    expenses_paid = [
        {
            "expense_id": expense.get("expense_id", "N/A"),
            "amount": expense["amount"],
            "description": expense.get("description")
        }
        for expense in expenses
        if expense["payer_id"] == participant_id
    ]

    return {
        "participant_id": participant_id,
        "name": balance_info["name"],
        "expenses_paid": expenses_paid,
        "total_paid": balance_info["paid"],
        "average_share": totals["average"],
        "balance": balance_info["balance"]
    }


def explain_all_participants(participants: list[dict], expenses: list[dict]) -> list[dict]:
    """
    Generate detailed explanations for all participants.

    Includes participants who paid nothing; ordered like the participants input.
    """
    return [
        explain_participant_share(p["participant_id"], participants, expenses)
        for p in participants
    ]


def describe_settlements(settlements: list[dict], participants: list[dict]) -> list[str]:
    """
    Turn settlement transactions into display lines.

    Example:
        "Bob sends Alice ₩50"

    Unknown participant IDs are shown as-is. An empty settlement list yields
    a single line saying that nothing needs to be transferred.
    """
    if not settlements:
        return [NO_TRANSFERS_MESSAGE]

    names = {p["participant_id"]: p.get("name") or p["participant_id"] for p in participants}

    return [
        f"{names.get(s['from_id'], s['from_id'])} sends "
        f"{names.get(s['to_id'], s['to_id'])} {format_currency(s['amount'])}"
        for s in settlements
    ]


def format_currency(amount: float, symbol: Optional[str] = None, decimals: Optional[int] = None) -> str:
    """
    Format a monetary amount with the appropriate currency symbol.

    Defaults come from the settings (₩ with no decimal places). Rounds
    half up, so 1234.5 becomes "₩1,235".

    Args:
        amount: The amount to format.
        symbol: Currency symbol override.
        decimals: Number of decimal places override.

    Returns:
        str: Formatted string like "₩1,235" or "-₩500".
    """
    settings = get_settings()
    symbol = settings.currency_symbol if symbol is None else symbol
    decimals = settings.currency_decimals if decimals is None else decimals

    value = Decimal(str(abs(amount)))

    # quantize needs every integer digit plus the decimals within the precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + decimals + 2)
        rounded = value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)

    # Avoid "-₩0" for amounts that round to zero
    sign = "-" if amount < 0 and rounded != 0 else ""
    formatted = f"{rounded:,.{decimals}f}"

    return f"{sign}{symbol}{formatted}"


def validate_amount(value) -> bool:
    """
    Validate if the input is a valid monetary amount.

    Args:
        value: Value to validate (number or numeric string).

    Returns:
        bool: True if a finite positive number.
    """
    if isinstance(value, bool):
        return False
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(amount) and amount > 0


def generate_id(prefix: str = "ID", number: int = 1) -> str:
    """
    Generate a formatted identifier.

    Args:
        prefix: Prefix for the ID (e.g., "P", "E").
        number: Numeric value to format.

    Returns:
        str: Formatted ID like "P001", "E042".
    """
    return f"{prefix}{number:03d}"
