"""Canonical reject reasons for registry operations.

Reasons are plain strings so they can be counted, logged, and serialized
without conversion. ``ERROR_CODES`` maps each reason to the numeric code
clients have historically matched on.
"""

from __future__ import annotations


class RejectReason:
    INVALID_PARAMS = "InvalidParams"
    NOT_AUTHORIZED = "NotAuthorized"
    NOT_FOUND = "NotFound"
    METADATA_FROZEN = "MetadataFrozen"
    CONTRACT_PAUSED = "ContractPaused"
    ALREADY_EXISTS = "AlreadyExists"

    # Internal only: surfaced to callers as INVALID_PARAMS.
    CAPACITY_EXCEEDED = "CapacityExceeded"


ERROR_CODES: dict[str, int] = {
    RejectReason.INVALID_PARAMS: 400,
    RejectReason.NOT_AUTHORIZED: 401,
    RejectReason.METADATA_FROZEN: 403,
    RejectReason.NOT_FOUND: 404,
    RejectReason.ALREADY_EXISTS: 409,
    RejectReason.CAPACITY_EXCEEDED: 413,
    RejectReason.CONTRACT_PAUSED: 503,
}


def error_code(reason: str) -> int:
    """Return the numeric error code for a reject reason."""
    return ERROR_CODES[reason]
