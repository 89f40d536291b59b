"""Offset/limit pagination over identifier sequences.

Two entry points produce an ``IdPage``:

- ``page_sequence`` slices an arbitrary bounded sequence (owner index).
- ``page_id_range`` derives a contiguous sub-range of the global identifier
  space ``1..counter`` without any lookup.

Both clamp ``limit`` silently to ``max_page_size`` instead of rejecting it.
Negative offsets and limits are treated as zero.
"""

from __future__ import annotations

from typing import Sequence

from atmos_registry.core.domain.types import IdPage

DEFAULT_MAX_PAGE_SIZE: int = 50


def slice_sequence(sequence: Sequence[int], offset: int, limit: int) -> list[int]:
    """Return up to ``limit`` elements starting at ``offset`` (0-based)."""
    start = max(offset, 0)
    count = max(limit, 0)
    if start >= len(sequence):
        return []
    return list(sequence[start:start + count])


def next_cursor(offset: int, returned_count: int, total: int) -> int | None:
    """Return the offset of the next page, or None when exhausted."""
    end = offset + returned_count
    if end < total:
        return end
    return None


def effective_limit(limit: int, max_page_size: int) -> int:
    return min(max(limit, 0), max_page_size)


def page_sequence(
    sequence: Sequence[int],
    offset: int,
    limit: int,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> IdPage:
    """Page through a materialized sequence."""
    start = max(offset, 0)
    items = slice_sequence(sequence, start, effective_limit(limit, max_page_size))
    return IdPage(items=items, next_offset=next_cursor(start, len(items), len(sequence)))


def page_id_range(
    counter: int,
    offset: int,
    limit: int,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> IdPage:
    """Page through the identifier space ``1..counter``.

    Identifiers are 1-based and contiguous, so the page is
    ``[offset + 1 .. min(offset + limit, counter)]``.
    """
    start = max(offset, 0)
    if counter <= 0 or start >= counter:
        return IdPage(items=[], next_offset=None)

    last = min(start + effective_limit(limit, max_page_size), counter)
    items = list(range(start + 1, last + 1))
    return IdPage(items=items, next_offset=next_cursor(start, len(items), counter))
