"""
Trip Store Module

This module holds the application state for the TravelCal expense splitter.
Nothing is written to disk: every trip lives in process memory and is lost
on restart.

Features:
    - Create, fetch and delete trips
    - Track the entry step of each trip
    - Step transitions with the same guards the entry screens use
    - Reset a trip back to an empty state

Data Model:
    TripState (one per trip_id):
        - trip_id: string (trip_xxxxxxxx format)
        - name: string
        - participants: list of Participant (registration order)
        - expenses: list of Expense (entry order)
        - step: int
            1 = registering participants
            2 = entering expenses
            3 = viewing the settlement plan
        - default_payer_id: string or None (payer preselected for new expenses)

Functions:
    get_store: Get the process-wide TripStore.
    reset_store: Drop every trip (used by tests).
"""

import uuid
from typing import Optional


# Minimum group size before expenses can be entered
MIN_PARTICIPANTS = 2

STEP_PARTICIPANTS = 1
STEP_EXPENSES = 2
STEP_SETTLEMENT = 3

_store = None


class TripNotFoundError(LookupError):
    """Raised when a trip_id does not name a trip in the store."""


class TripState:
    """
    Mutable state of a single trip.

    Attributes:
        trip_id (str): Unique identifier of the trip.
        name (str): Display name of the trip.
        participants (list): Registered participants, in order.
        expenses (list): Recorded expenses, in order.
        step (int): Current entry step (1, 2 or 3).
        default_payer_id (str | None): Payer preselected for new expenses.
    """

    def __init__(self, trip_id: str, name: Optional[str] = None):
        self.trip_id = trip_id
        self.name = name or trip_id
        self.participants = []
        self.expenses = []
        self.step = STEP_PARTICIPANTS
        self.default_payer_id = None

    def to_dict(self) -> dict:
        """Convert trip state to a summary dictionary."""
        return {
            "trip_id": self.trip_id,
            "name": self.name,
            "step": self.step,
            "participant_count": len(self.participants),
            "expense_count": len(self.expenses),
            "total_spent": sum(e.amount for e in self.expenses),
            "default_payer_id": self.default_payer_id
        }

    def __repr__(self) -> str:
        return f"TripState(id='{self.trip_id}', step={self.step}, participants={len(self.participants)})"


class TripStore:
    """In-memory registry of trips keyed by trip_id."""

    def __init__(self):
        self._trips = {}

    def create_trip(self, name: Optional[str] = None) -> TripState:
        """
        Create a new, empty trip.

        Args:
            name: Optional display name (defaults to the generated trip_id).

        Returns:
            TripState: The created trip.
        """
        trip_id = f"trip_{uuid.uuid4().hex[:8]}"
        trip = TripState(trip_id, name.strip() if name and name.strip() else None)
        self._trips[trip_id] = trip
        return trip

    def get_trip(self, trip_id: str) -> TripState:
        """
        Fetch a trip by ID.

        Raises:
            TripNotFoundError: If the trip does not exist.
        """
        if trip_id not in self._trips:
            raise TripNotFoundError(f"Trip {trip_id} not found")
        return self._trips[trip_id]

    def delete_trip(self, trip_id: str) -> None:
        self.get_trip(trip_id)
        del self._trips[trip_id]

    def list_trips(self) -> list[TripState]:
        return list(self._trips.values())

    def start_expense_entry(self, trip_id: str) -> TripState:
        """
        Move a trip from participant registration to expense entry.

        The first participant becomes the default payer if none is set yet.

        Raises:
            TripNotFoundError: If the trip does not exist.
            ValueError: If fewer than MIN_PARTICIPANTS are registered.
        """
        trip = self.get_trip(trip_id)
        if len(trip.participants) < MIN_PARTICIPANTS:
            raise ValueError(f"At least {MIN_PARTICIPANTS} participants are required to split bills.")

        if trip.default_payer_id is None:
            trip.default_payer_id = trip.participants[0].participant_id

        trip.step = STEP_EXPENSES
        return trip

    def open_settlement(self, trip_id: str) -> TripState:
        """
        Move a trip to the settlement view.

        Raises:
            TripNotFoundError: If the trip does not exist.
            ValueError: If expense entry was never opened or no expense exists.
        """
        trip = self.get_trip(trip_id)
        if trip.step < STEP_EXPENSES:
            raise ValueError("Expense entry has not been started for this trip")
        if not trip.expenses:
            raise ValueError("At least one expense is required to calculate a settlement")

        trip.step = STEP_SETTLEMENT
        return trip

    def go_to_step(self, trip_id: str, step: int) -> TripState:
        """
        Navigate back to an earlier step (1 or 2).

        Raises:
            TripNotFoundError: If the trip does not exist.
            ValueError: If the step is not an earlier step.
        """
        trip = self.get_trip(trip_id)
        if step not in (STEP_PARTICIPANTS, STEP_EXPENSES):
            raise ValueError(f"step must be {STEP_PARTICIPANTS} or {STEP_EXPENSES}, got: {step}")
        if step > trip.step:
            raise ValueError(f"Cannot move forward from step {trip.step} to step {step}")

        trip.step = step
        return trip

    def reset_trip(self, trip_id: str) -> TripState:
        """Clear all participants and expenses and return to step 1."""
        trip = self.get_trip(trip_id)
        trip.participants = []
        trip.expenses = []
        trip.default_payer_id = None
        trip.step = STEP_PARTICIPANTS
        return trip


def get_store() -> TripStore:
    global _store
    if _store:
        return _store

    _store = TripStore()
    return _store


def reset_store() -> None:
    global _store
    _store = None
