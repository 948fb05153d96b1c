"""
Settlement Module

This module turns per-participant balances into the list of transfers that
settles a trip so that everyone has contributed an equal share.

Features:
    - Greedy matching of the largest debtor with the largest creditor
    - Bounded number of iterations so that floating point drift can never
      keep the loop running
    - Residual balances inside the tolerance band are treated as settled
    - Replay of a settlement list onto balances for verification

Data Model:
    Input - participants: list of dicts with:
        - participant_id: string
        - name: string

    Input - expenses: list of dicts with:
        - payer_id: string
        - amount: float (> 0)

    Output - list of settlement transactions:
        - from_id: string (debtor who pays)
        - to_id: string (creditor who receives)
        - amount: float (> 0, not rounded)

Functions:
    compute_settlements: Compute the transfers that settle a trip.
    apply_settlements: Apply transfers to a list of balances.
"""

import logging

from splitter import calculate_balances


logger = logging.getLogger(__name__)

# Upper bound on matching rounds
MAX_ITERATIONS = 100

# Balances smaller than one currency unit count as settled
TOLERANCE = 1


def compute_settlements(participants: list[dict], expenses: list[dict]) -> list[dict]:
    """
    Compute the transfers that settle a trip.

    Uses a greedy algorithm:
        1. Compute every participant's balance (paid - average)
        2. Sort balances ascending (largest debtor first, largest creditor last)
        3. If both the first and the last balance are within TOLERANCE, stop
        4. The debtor pays the creditor min(|debtor balance|, creditor balance)
        5. Update both balances and repeat, at most MAX_ITERATIONS times

    Args:
        participants: List of participant dicts with participant_id and name.
        expenses: List of expense dicts with payer_id and amount.

    Returns:
        list[dict]: Settlement transactions in the order they were generated,
            each containing from_id, to_id and amount.

    Notes:
        - Returns [] when there are no participants or nothing was spent
        - Works on a private copy of the balances; inputs are not modified
        - Ties between equal balances are broken by the stable sort, i.e.
          by participant order
        - NaN or infinite amounts are not checked and corrupt the result
        - Reaching MAX_ITERATIONS silently truncates the list
    """
    if not participants:
        return []

    # Private working copy, only id and balance are needed
    balances = [
        {"participant_id": b["participant_id"], "balance": b["balance"]}
        for b in calculate_balances(participants, expenses)
    ]

    settlements = []

    for _ in range(MAX_ITERATIONS):
        balances.sort(key=lambda b: b["balance"])

        debtor = balances[0]
        creditor = balances[-1]

        if abs(debtor["balance"]) < TOLERANCE and abs(creditor["balance"]) < TOLERANCE:
            break

        amount = min(abs(debtor["balance"]), creditor["balance"])

        if amount > 0:
            settlements.append({
                "from_id": debtor["participant_id"],
                "to_id": creditor["participant_id"],
                "amount": amount
            })

        debtor["balance"] += amount
        creditor["balance"] -= amount
    else:
        logger.debug(
            "Settlement stopped after %d iterations with %d transfers",
            MAX_ITERATIONS, len(settlements)
        )

    return settlements


def apply_settlements(balances: list[dict], settlements: list[dict]) -> list[dict]:
    """
    Apply settlement transfers to a list of balances.

    The payer of a transfer has effectively paid more, so its balance rises;
    the receiver's balance falls by the same amount.

    Args:
        balances: Output of calculate_balances().
        settlements: Output of compute_settlements().

    Returns:
        list[dict]: New balance dicts with the transfers applied.

    Raises:
        ValueError: If a settlement references an unknown participant.
    """
    result = [dict(b) for b in balances]
    by_id = {b["participant_id"]: b for b in result}

    for settlement in settlements:
        for key in ("from_id", "to_id"):
            if settlement[key] not in by_id:
                raise ValueError(f"Settlement references unknown participant '{settlement[key]}'")

        by_id[settlement["from_id"]]["balance"] += settlement["amount"]
        by_id[settlement["to_id"]]["balance"] -= settlement["amount"]

    return result
