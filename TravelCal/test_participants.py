import pytest

from participants import add_participant, remove_participant, get_participants, get_participant_names, Participant
from expenses import add_expense
from trip_store import get_store, TripNotFoundError, STEP_PARTICIPANTS


def test_sequential_ids(trip):
    alice = add_participant(trip.trip_id, "Alice")
    bob = add_participant(trip.trip_id, "  Bob  ")

    assert alice.participant_id == "P001"
    assert bob.participant_id == "P002"
    assert bob.name == "Bob"
    assert [p.name for p in get_participants(trip.trip_id)] == ["Alice", "Bob"]


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_name_rejected(trip, name):
    with pytest.raises(ValueError):
        add_participant(trip.trip_id, name)
    assert get_participants(trip.trip_id) == []


def test_unknown_trip():
    with pytest.raises(TripNotFoundError):
        add_participant("trip_missing", "Alice")


def test_remove_participant(trip):
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")

    removed = remove_participant(trip.trip_id, "P001")

    assert removed.name == "Alice"
    assert get_participant_names(trip.trip_id) == {"P002": "Bob"}
    # numbering continues from the highest remaining id
    assert add_participant(trip.trip_id, "Charlie").participant_id == "P003"


def test_remove_unknown_participant(trip):
    with pytest.raises(ValueError, match="not found"):
        remove_participant(trip.trip_id, "P001")


def test_remove_participant_with_expenses_is_forbidden(trip):
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")
    get_store().start_expense_entry(trip.trip_id)
    add_expense(trip.trip_id, "P002", 30000, "Taxi")
    get_store().go_to_step(trip.trip_id, STEP_PARTICIPANTS)

    with pytest.raises(ValueError, match="E001"):
        remove_participant(trip.trip_id, "P002")
    assert len(get_participants(trip.trip_id)) == 2


def test_remove_default_payer_moves_preselection(trip):
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")
    get_store().start_expense_entry(trip.trip_id)
    get_store().go_to_step(trip.trip_id, STEP_PARTICIPANTS)

    remove_participant(trip.trip_id, "P001")

    assert trip.default_payer_id == "P002"


def test_participant_dict_round_trip():
    p = Participant(name="Alice", participant_id="P001")
    assert Participant.from_dict(p.to_dict()).to_dict() == {"participant_id": "P001", "name": "Alice"}


def test_participants_are_locked_during_expense_entry(trip):
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")
    get_store().start_expense_entry(trip.trip_id)

    with pytest.raises(ValueError, match="only be changed at step 1"):
        remove_participant(trip.trip_id, "P002")
    with pytest.raises(ValueError, match="only be changed at step 1"):
        add_participant(trip.trip_id, "Charlie")

    assert [p.participant_id for p in get_participants(trip.trip_id)] == ["P001", "P002"]
    assert add_expense(trip.trip_id, "P001", 100).expense_id == "E001"


def test_shrunk_group_must_restart_expense_entry(trip):
    store = get_store()
    add_participant(trip.trip_id, "Alice")
    add_participant(trip.trip_id, "Bob")
    store.start_expense_entry(trip.trip_id)
    store.go_to_step(trip.trip_id, STEP_PARTICIPANTS)

    remove_participant(trip.trip_id, "P002")

    with pytest.raises(ValueError, match="not been started"):
        add_expense(trip.trip_id, "P001", 100)
    with pytest.raises(ValueError, match="At least 2 participants"):
        store.start_expense_entry(trip.trip_id)
