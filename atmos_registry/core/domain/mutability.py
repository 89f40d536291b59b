"""
Record mutability state machine definitions.

This module defines the mutability variants of a dataset record and the
allowed transitions between them. It is passive and validation-only; the
mutation coordinator consults it before touching a record.

Freeze covers descriptive metadata only. Ownership stays transferable in
every state.
"""

from __future__ import annotations

EDITABLE = "editable"
FROZEN = "frozen"

MUTABILITY_STATES: frozenset[str] = frozenset({EDITABLE, FROZEN})


# Allowed mutability transitions.
#
# Key   : previous state (or None if the record does not exist yet)
# Value : set of allowed next states
#
# Notes:
# - None -> frozen is only reachable through administrative import.
# - frozen is terminal; repeated freezes are no-ops.
MUTABILITY_ALLOWED_TRANSITIONS: dict[str | None, frozenset[str]] = {
    None: frozenset({EDITABLE, FROZEN}),

    EDITABLE: frozenset(
        {
            EDITABLE,
            FROZEN,
        }
    ),

    FROZEN: frozenset({FROZEN}),
}

METADATA_EDITABLE_STATES: frozenset[str] = frozenset({EDITABLE})
TRANSFERABLE_STATES: frozenset[str] = frozenset({EDITABLE, FROZEN})


def from_frozen_flag(metadata_frozen: bool) -> str:
    """Map the external boolean flag to a mutability state."""
    return FROZEN if metadata_frozen else EDITABLE


def is_valid_transition(prev_state: str | None, next_state: str) -> bool:
    """Return True if the transition prev_state -> next_state is allowed."""
    allowed = MUTABILITY_ALLOWED_TRANSITIONS.get(prev_state)
    if allowed is None:
        return False
    return next_state in allowed


def allows_metadata_update(state: str) -> bool:
    return state in METADATA_EDITABLE_STATES


def allows_transfer(state: str) -> bool:
    return state in TRANSFERABLE_STATES
