"""
Participants Module

This module handles all participant-related operations for the TravelCal
expense splitter.

Features:
    - Add/remove participants to a trip
    - Retrieve participant details
    - Name lookup for display

Data Model:
    Participant stored in the trip's participant list (trip_store.TripState)
    Fields:
        - participant_id: string (P001, P002, ... format)
        - name: string

Functions:
    add_participant: Add a new participant to a trip.
    remove_participant: Remove a participant that no expense references.
    get_participants: Get all participants for a trip.
    get_participant_names: Map participant IDs to names.
"""

import re
from typing import Optional
from trip_store import get_store, STEP_PARTICIPANTS
from utils import generate_id


def _generate_next_participant_id(trip_id: str) -> str:
    """
    Generate the next sequential participant ID for a trip.

    Format: P001, P002, P003, ...

    Logic:
        1. Collect the IDs of the trip's current participants
        2. Extract numeric suffix from IDs matching P### format (e.g., P001 -> 1)
        3. Find the highest existing number
        4. Generate next ID with zero-padded 3-digit suffix

    A removed participant's number is reused only if it was the highest one,
    which is safe because removal requires that no expense references it.

    Args:
        trip_id: The ID of the trip.

    Returns:
        str: Next participant ID in format P### (e.g., P001, P002).
    """
    trip = get_store().get_trip(trip_id)

    max_num = 0
    pattern = re.compile(r'^P(\d+)$')

    for participant in trip.participants:
        match = pattern.match(participant.participant_id)
        if match:
            max_num = max(max_num, int(match.group(1)))

    return generate_id("P", max_num + 1)


class Participant:
    """
    Represents a participant in a trip.

    Attributes:
        participant_id (str): Unique identifier for the participant.
        name (str): Display name of the participant.
    """

    def __init__(self, name: str, participant_id: Optional[str] = None):
        self.participant_id = participant_id  # ID is generated externally via _generate_next_participant_id
        self.name = name

    def to_dict(self) -> dict:
        """Convert participant to dictionary."""
        return {
            "participant_id": self.participant_id,
            "name": self.name
        }

    def __repr__(self) -> str:
        """Return string representation of participant."""
        return f"Participant(id='{self.participant_id}', name='{self.name}')"

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        """Create a Participant instance from a dictionary."""
        return cls(
            participant_id=data.get("participant_id"),
            name=data.get("name")
        )


def _check_registration_open(trip) -> None:
    """
    Participants can only change while the trip is at the registration step.

    Raises:
        ValueError: If the trip has moved on to expense entry or settlement.
    """
    if trip.step != STEP_PARTICIPANTS:
        raise ValueError(
            f"Participants of trip {trip.trip_id} can only be changed at step {STEP_PARTICIPANTS}; "
            f"go back to participant registration first"
        )


def _validate_non_empty_string(value: str, field_name: str) -> bool:
    """
    Validate that a string is non-empty.

    Args:
        value: String to validate.
        field_name: Name of the field for error messages.

    Returns:
        bool: True if valid.

    Raises:
        ValueError: If string is empty or not a string.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    return True


def add_participant(trip_id: str, name: str) -> Participant:
    """
    Add a new participant to a trip.

    Args:
        trip_id: The ID of the trip.
        name: Name of the participant (surrounding whitespace is stripped).

    Returns:
        Participant: The created participant object.

    Raises:
        ValueError: If the name is empty or registration is closed.
        TripNotFoundError: If the trip does not exist.
    """
    _validate_non_empty_string(trip_id, "trip_id")
    _validate_non_empty_string(name, "name")

    trip = get_store().get_trip(trip_id)
    _check_registration_open(trip)

    participant = Participant(
        name=name.strip(),
        participant_id=_generate_next_participant_id(trip_id)
    )
    trip.participants.append(participant)

    return participant


def remove_participant(trip_id: str, participant_id: str) -> Participant:
    """
    Remove a participant from a trip.

    A participant that paid for any recorded expense cannot be removed;
    the expenses must be deleted first so that no expense is left without
    a payer.

    Args:
        trip_id: The ID of the trip.
        participant_id: The ID of the participant to remove.

    Returns:
        Participant: The removed participant.

    Raises:
        ValueError: If the participant is unknown or still referenced, or
            registration is closed.
        TripNotFoundError: If the trip does not exist.
    """
    _validate_non_empty_string(trip_id, "trip_id")
    _validate_non_empty_string(participant_id, "participant_id")

    trip = get_store().get_trip(trip_id)
    _check_registration_open(trip)

    participant = next((p for p in trip.participants if p.participant_id == participant_id), None)
    if participant is None:
        raise ValueError(f"Participant {participant_id} not found in trip {trip_id}")

    referenced = [e.expense_id for e in trip.expenses if e.payer_id == participant_id]
    if referenced:
        raise ValueError(
            f"Participant {participant_id} paid for expenses {', '.join(referenced)}; "
            f"remove those expenses first"
        )

    trip.participants.remove(participant)

    # Keep the preselected payer pointing at someone who still exists
    if trip.default_payer_id == participant_id:
        trip.default_payer_id = trip.participants[0].participant_id if trip.participants else None

    return participant


def get_participants(trip_id: str) -> list[Participant]:
    """
    Get all participants for a trip, in registration order.

    Raises:
        ValueError: If trip_id is invalid.
        TripNotFoundError: If the trip does not exist.
    """
    _validate_non_empty_string(trip_id, "trip_id")
    return list(get_store().get_trip(trip_id).participants)


def get_participant_names(trip_id: str) -> dict:
    """Map participant_id -> name for a trip."""
    return {p.participant_id: p.name for p in get_participants(trip_id)}
