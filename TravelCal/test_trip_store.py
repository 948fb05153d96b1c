import pytest

from participants import add_participant
from expenses import add_expense
from trip_store import get_store, TripNotFoundError, STEP_PARTICIPANTS, STEP_EXPENSES, STEP_SETTLEMENT


def test_create_and_get_trip():
    store = get_store()
    trip = store.create_trip("  Jeju  ")

    assert trip.trip_id.startswith("trip_")
    assert trip.name == "Jeju"
    assert store.get_trip(trip.trip_id) is trip
    assert trip.step == STEP_PARTICIPANTS


def test_unnamed_trip_uses_id():
    trip = get_store().create_trip()
    assert trip.name == trip.trip_id


def test_unknown_trip():
    with pytest.raises(TripNotFoundError):
        get_store().get_trip("trip_missing")


def test_delete_trip(trip):
    store = get_store()
    store.delete_trip(trip.trip_id)
    assert store.list_trips() == []


def test_start_needs_two_participants(trip):
    add_participant(trip.trip_id, "Alice")

    with pytest.raises(ValueError, match="At least 2 participants"):
        get_store().start_expense_entry(trip.trip_id)
    assert trip.step == STEP_PARTICIPANTS


def test_full_flow(trip):
    store = get_store()
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")

    store.start_expense_entry(trip.trip_id)
    assert trip.step == STEP_EXPENSES
    assert trip.default_payer_id == "P001"

    with pytest.raises(ValueError, match="At least one expense"):
        store.open_settlement(trip.trip_id)

    add_expense(trip.trip_id, "P001", 100)
    store.open_settlement(trip.trip_id)
    assert trip.step == STEP_SETTLEMENT

    store.go_to_step(trip.trip_id, STEP_EXPENSES)
    assert trip.step == STEP_EXPENSES

    summary = trip.to_dict()
    assert summary["participant_count"] == 2
    assert summary["expense_count"] == 1
    assert summary["total_spent"] == 100


def test_cannot_skip_ahead(trip):
    with pytest.raises(ValueError):
        get_store().go_to_step(trip.trip_id, STEP_EXPENSES)
    with pytest.raises(ValueError):
        get_store().go_to_step(trip.trip_id, STEP_SETTLEMENT)


def test_settlement_needs_expense_entry(trip):
    with pytest.raises(ValueError, match="not been started"):
        get_store().open_settlement(trip.trip_id)


def test_reset(trip):
    store = get_store()
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")
    store.start_expense_entry(trip.trip_id)
    add_expense(trip.trip_id, "P002", 100)

    store.reset_trip(trip.trip_id)

    assert trip.participants == []
    assert trip.expenses == []
    assert trip.step == STEP_PARTICIPANTS
    assert trip.default_payer_id is None
