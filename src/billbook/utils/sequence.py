from __future__ import annotations

from collections.abc import Iterable


def next_id(existing_ids: Iterable[int | str], default_start: int) -> int:
    """Return one past the highest identifier in ``existing_ids``.

    Values that do not parse as integers are skipped. The scan is seeded
    with ``default_start - 1``, so an empty collection (or one whose ids all
    sit below the start value) allocates ``default_start``.
    """
    highest = default_start - 1
    for raw in existing_ids:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            continue
        if value > highest:
            highest = value
    return highest + 1


def next_id_from_rows(rows: Iterable[list[str]], default_start: int) -> int:
    """Apply next_id to the first field of every persisted row."""
    return next_id((row[0].strip() for row in rows if row), default_start)
