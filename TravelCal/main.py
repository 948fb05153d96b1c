"""
TravelCal - FastAPI Web Backend

This module serves as the main entry point for the TravelCal group expense
splitting API.

Features:
    - RESTful API for managing trips, participants, and expenses
    - In-memory trip state (nothing is persisted)
    - Settlement calculation with analytics and transparency reports
    - Stateless settlement endpoint for callers that keep their own state

Endpoints:
    POST   /trips                                        - Create a new trip
    GET    /trips/{trip_id}                              - Get trip state
    POST   /trips/{trip_id}/participants                 - Add participant to trip
    GET    /trips/{trip_id}/participants                 - List participants
    DELETE /trips/{trip_id}/participants/{participant_id} - Remove participant
    POST   /trips/{trip_id}/start                        - Open expense entry
    POST   /trips/{trip_id}/expenses                     - Add expense to trip
    GET    /trips/{trip_id}/expenses                     - List expenses
    DELETE /trips/{trip_id}/expenses/{expense_id}        - Remove expense
    POST   /trips/{trip_id}/calculate                    - Calculate settlement plan
    POST   /trips/{trip_id}/step/{step}                  - Navigate back a step
    POST   /trips/{trip_id}/reset                        - Clear the trip
    POST   /settlements                                  - Stateless settlement
    GET    /health                                       - Health check

Usage:
    uvicorn main:app --reload
"""

import logging
from typing import Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from participants import add_participant, remove_participant, get_participants, Participant
from expenses import add_expense, remove_expense, get_expenses, Expense
from splitter import calculate_balances, calculate_totals
from settlement import compute_settlements
from analytics import generate_analytics
from utils import explain_all_participants, describe_settlements, format_currency
from trip_store import get_store, TripNotFoundError
from config.settings import get_settings


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models for Request/Response Validation
# =============================================================================

class TripCreate(BaseModel):
    """Request model for creating a new trip."""
    name: Optional[str] = Field(None, description="Optional trip name")


class TripResponse(BaseModel):
    """Response model for trip state."""
    trip_id: str
    name: str
    step: int
    participant_count: int
    expense_count: int
    total_spent: float
    default_payer_id: Optional[str]


class ParticipantCreate(BaseModel):
    """Request model for adding a participant."""
    name: str = Field(..., min_length=1, description="Participant name")


class ParticipantResponse(BaseModel):
    """Response model for participant data."""
    participant_id: str
    name: str


class ExpenseCreate(BaseModel):
    """Request model for adding an expense."""
    payer_id: str = Field(..., min_length=1, description="Participant ID of payer")
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Expense amount (must be > 0)")
    description: Optional[str] = Field(None, description="Optional description")


class ExpenseResponse(BaseModel):
    """Response model for expense data."""
    expense_id: str
    payer_id: str
    amount: float
    description: Optional[str]


class SettlementResponse(BaseModel):
    """A single transfer from a debtor to a creditor."""
    from_id: str
    to_id: str
    amount: float


class CalculateResponse(BaseModel):
    """Response model for calculation results."""
    total_spent: float
    average_share: float
    balances: list
    settlements: list[SettlementResponse]
    lines: list[str]
    analytics: dict
    warnings: list
    explanations: list


class SettlementParticipant(BaseModel):
    """Participant as supplied by a stateless caller."""
    participant_id: str = Field(..., min_length=1)
    name: str = ""


class SettlementExpense(BaseModel):
    """Expense as supplied by a stateless caller."""
    expense_id: Optional[str] = None
    payer_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    description: Optional[str] = None


class SettlementRequest(BaseModel):
    """Request model for the stateless settlement endpoint."""
    participants: list[SettlementParticipant]
    expenses: list[SettlementExpense] = []


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="TravelCal",
    description="Easy travel expense splitting: who sends how much to whom",
    version="1.0.0"
)


# =============================================================================
# Helper Functions
# =============================================================================

def _participant_to_dict(p: Participant) -> dict:
    """Convert Participant object to dictionary."""
    return p.to_dict()


def _expense_to_dict(e: Expense) -> dict:
    """Convert Expense object to dictionary."""
    return e.to_dict()


def _raise_http(e: Exception):
    """Translate a domain exception into an HTTPException."""
    if isinstance(e, HTTPException):
        raise e
    if isinstance(e, TripNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    logger.exception("Unexpected error")
    raise HTTPException(status_code=500, detail=str(e))


def _build_results(participants_dicts: list[dict], expenses_dicts: list[dict]) -> CalculateResponse:
    """Run every calculation over plain participant/expense dicts."""
    totals = calculate_totals(participants_dicts, expenses_dicts)
    balances = calculate_balances(participants_dicts, expenses_dicts)
    settlements = compute_settlements(participants_dicts, expenses_dicts)
    analytics_result = generate_analytics(participants_dicts, expenses_dicts)
    explanations = explain_all_participants(participants_dicts, expenses_dicts)

    return CalculateResponse(
        total_spent=totals["total_spent"],
        average_share=totals["average"],
        balances=balances,
        settlements=settlements,
        lines=describe_settlements(settlements, participants_dicts),
        analytics=analytics_result["analytics"],
        warnings=analytics_result["warnings"],
        explanations=explanations
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.post("/trips", response_model=TripResponse, status_code=201)
async def create_trip(trip_data: TripCreate = None):
    """Create a new, empty trip."""
    trip = get_store().create_trip(trip_data.name if trip_data else None)
    logger.info("Created trip %s", trip.trip_id)
    return TripResponse(**trip.to_dict())


@app.get("/trips/{trip_id}", response_model=TripResponse)
async def get_trip(trip_id: str):
    """Get the current state of a trip."""
    try:
        return TripResponse(**get_store().get_trip(trip_id).to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/participants", response_model=ParticipantResponse, status_code=201)
async def add_trip_participant(trip_id: str, participant_data: ParticipantCreate):
    """
    Add a participant to a trip.

    Request flow:
        1. Validate input using Pydantic model
        2. Call add_participant() from participants.py
        3. Return created participant data
    """
    try:
        participant = add_participant(trip_id=trip_id, name=participant_data.name)
        return ParticipantResponse(**participant.to_dict())
    except Exception as e:
        _raise_http(e)


@app.get("/trips/{trip_id}/participants", response_model=list[ParticipantResponse])
async def list_trip_participants(trip_id: str):
    try:
        return [ParticipantResponse(**p.to_dict()) for p in get_participants(trip_id)]
    except Exception as e:
        _raise_http(e)


@app.delete("/trips/{trip_id}/participants/{participant_id}", response_model=ParticipantResponse)
async def remove_trip_participant(trip_id: str, participant_id: str):
    """Remove a participant who has not paid for any expense."""
    try:
        participant = remove_participant(trip_id=trip_id, participant_id=participant_id)
        return ParticipantResponse(**participant.to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/start", response_model=TripResponse)
async def start_trip_expense_entry(trip_id: str):
    """Open expense entry; requires at least two participants."""
    try:
        return TripResponse(**get_store().start_expense_entry(trip_id).to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/expenses", response_model=ExpenseResponse, status_code=201)
async def add_trip_expense(trip_id: str, expense_data: ExpenseCreate):
    """
    Add an expense to a trip.

    Request flow:
        1. Validate input using Pydantic model
        2. Call add_expense() from expenses.py
        3. Return created expense data
    """
    try:
        expense = add_expense(
            trip_id=trip_id,
            payer_id=expense_data.payer_id,
            amount=expense_data.amount,
            description=expense_data.description
        )
        return ExpenseResponse(**expense.to_dict())
    except Exception as e:
        _raise_http(e)


@app.get("/trips/{trip_id}/expenses", response_model=list[ExpenseResponse])
async def list_trip_expenses(trip_id: str):
    try:
        return [ExpenseResponse(**e.to_dict()) for e in get_expenses(trip_id)]
    except Exception as e:
        _raise_http(e)


@app.delete("/trips/{trip_id}/expenses/{expense_id}", response_model=ExpenseResponse)
async def remove_trip_expense(trip_id: str, expense_id: str):
    try:
        expense = remove_expense(trip_id=trip_id, expense_id=expense_id)
        return ExpenseResponse(**expense.to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/calculate", response_model=CalculateResponse)
async def calculate_trip_results(trip_id: str):
    """
    Calculate the settlement plan for a trip.

    Request flow:
        1. Move the trip to the settlement step (needs at least one expense)
        2. Fetch participants and expenses
        3. Calculate balances (splitter.py)
        4. Compute settlements (settlement.py)
        5. Generate analytics (analytics.py) and explanations (utils.py)
        6. Return complete results
    """
    try:
        get_store().open_settlement(trip_id)

        participants_dicts = [_participant_to_dict(p) for p in get_participants(trip_id)]
        expenses_dicts = [_expense_to_dict(e) for e in get_expenses(trip_id)]

        results = _build_results(participants_dicts, expenses_dicts)
        logger.info(
            "Trip %s: %d transfers, each person spends approx. %s",
            trip_id, len(results.settlements), format_currency(results.average_share)
        )
        return results
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/step/{step}", response_model=TripResponse)
async def go_to_trip_step(trip_id: str, step: int):
    """Navigate back to participant registration (1) or expense entry (2)."""
    try:
        return TripResponse(**get_store().go_to_step(trip_id, step).to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/trips/{trip_id}/reset", response_model=TripResponse)
async def reset_trip(trip_id: str):
    """Start over: drop all participants and expenses of a trip."""
    try:
        trip = get_store().reset_trip(trip_id)
        logger.info("Reset trip %s", trip_id)
        return TripResponse(**trip.to_dict())
    except Exception as e:
        _raise_http(e)


@app.post("/settlements", response_model=list[SettlementResponse])
async def settle(request: SettlementRequest):
    """
    Compute settlements for caller-supplied participants and expenses.

    Nothing is stored. Expenses whose payer is not among the participants
    raise the average but are credited to nobody.
    """
    ids = [p.participant_id for p in request.participants]
    if len(ids) != len(set(ids)):
        raise HTTPException(status_code=400, detail="participant_id values must be unique")

    return compute_settlements(
        [p.model_dump() for p in request.participants],
        [e.model_dump() for e in request.expenses]
    )


# =============================================================================
# Health Check Endpoint
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint to verify API is running."""
    return {"status": "healthy", "service": "TravelCal"}


# =============================================================================
# Run with: python main.py
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
