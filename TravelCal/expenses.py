"""
Expenses Module

This module handles all expense-related operations for the TravelCal
expense splitter.

Features:
    - Add/delete expenses
    - Track who paid each expense
    - Optional free-text description

Data Model:
    Expense stored in the trip's expense list (trip_store.TripState)
    Fields:
        - expense_id: string (E001, E002, ... format)
        - payer_id: string (participant_id who paid)
        - amount: float (must be finite and > 0)
        - description: string or None

Functions:
    add_expense: Add a new expense to a trip.
    remove_expense: Delete an expense from a trip.
    get_expenses: Get all expenses for a trip.
    get_total_spent: Sum of all expense amounts for a trip.
"""

import re
from typing import Optional
from trip_store import get_store, MIN_PARTICIPANTS, STEP_EXPENSES
from utils import generate_id, validate_amount


class Expense:
    """
    Represents a single expense in the trip.

    Attributes:
        expense_id (str): Unique identifier in E### format.
        payer_id (str): Participant ID of who paid.
        amount (float): Amount of the expense (must be > 0).
        description (str | None): Optional description.
    """

    def __init__(
        self,
        expense_id: str,
        payer_id: str,
        amount: float,
        description: Optional[str] = None
    ):
        self.expense_id = expense_id
        self.payer_id = payer_id
        self.amount = amount
        self.description = description

    def to_dict(self) -> dict:
        """Convert expense to dictionary."""
        return {
            "expense_id": self.expense_id,
            "payer_id": self.payer_id,
            "amount": self.amount,
            "description": self.description
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        """Create an Expense instance from a dictionary."""
        return cls(
            expense_id=data.get("expense_id"),
            payer_id=data.get("payer_id"),
            amount=data.get("amount"),
            description=data.get("description")
        )

    def __repr__(self) -> str:
        """Return string representation of expense."""
        return f"Expense(id='{self.expense_id}', payer='{self.payer_id}', amount={self.amount})"


def _generate_next_expense_id(trip_id: str) -> str:
    """
    Generate the next sequential expense ID for a trip.

    Format: E001, E002, E003, ...

    Args:
        trip_id: The ID of the trip.

    Returns:
        str: Next expense ID in format E### (e.g., E001, E002).
    """
    trip = get_store().get_trip(trip_id)

    max_num = 0
    pattern = re.compile(r'^E(\d+)$')

    for expense in trip.expenses:
        match = pattern.match(expense.expense_id)
        if match:
            max_num = max(max_num, int(match.group(1)))

    return generate_id("E", max_num + 1)


def _validate_non_empty_string(value: str, field_name: str) -> bool:
    """
    Validate that a string is non-empty.

    Raises:
        ValueError: If string is empty or not a string.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    return True


def add_expense(
    trip_id: str,
    payer_id: str,
    amount,
    description: Optional[str] = None
) -> Expense:
    """
    Add a new expense to a trip.

    Args:
        trip_id: The ID of the trip.
        payer_id: Participant ID of who paid the expense.
        amount: Amount of the expense; numbers and numeric strings are accepted,
            the value must be finite and > 0.
        description: Optional description of the expense.

    Returns:
        Expense: The created expense object.

    Raises:
        ValueError: If input validation fails or expense entry is not open.
        TripNotFoundError: If the trip does not exist.

    Notes:
        - The payer becomes the trip's preselected payer for the next expense
        - No splitting is performed here
    """
    _validate_non_empty_string(trip_id, "trip_id")
    _validate_non_empty_string(payer_id, "payer_id")

    if not validate_amount(amount):
        raise ValueError(f"amount must be a positive number, got: {amount}")

    trip = get_store().get_trip(trip_id)

    if trip.step < STEP_EXPENSES:
        raise ValueError("Expense entry has not been started for this trip")
    if len(trip.participants) < MIN_PARTICIPANTS:
        raise ValueError(f"At least {MIN_PARTICIPANTS} participants are required to split bills.")

    # Validate payer_id exists
    if payer_id not in {p.participant_id for p in trip.participants}:
        raise ValueError(f"payer_id '{payer_id}' does not exist in trip {trip_id}")

    expense = Expense(
        expense_id=_generate_next_expense_id(trip_id),
        payer_id=payer_id,
        amount=float(amount),  # Ensure float type
        description=description.strip() if description and description.strip() else None
    )
    trip.expenses.append(expense)

    # Keep the payer selected for rapid multi-entry
    trip.default_payer_id = payer_id

    return expense


def remove_expense(trip_id: str, expense_id: str) -> Expense:
    """
    Delete an expense from a trip.

    Raises:
        ValueError: If the expense does not exist.
        TripNotFoundError: If the trip does not exist.
    """
    _validate_non_empty_string(trip_id, "trip_id")
    _validate_non_empty_string(expense_id, "expense_id")

    trip = get_store().get_trip(trip_id)

    expense = next((e for e in trip.expenses if e.expense_id == expense_id), None)
    if expense is None:
        raise ValueError(f"Expense {expense_id} not found in trip {trip_id}")

    trip.expenses.remove(expense)
    return expense


def get_expenses(trip_id: str) -> list[Expense]:
    """
    Get all expenses for a trip, in entry order.

    Raises:
        ValueError: If trip_id is invalid.
        TripNotFoundError: If the trip does not exist.
    """
    _validate_non_empty_string(trip_id, "trip_id")
    return list(get_store().get_trip(trip_id).expenses)


def get_total_spent(trip_id: str) -> float:
    return sum((e.amount for e in get_expenses(trip_id)), 0.0)
