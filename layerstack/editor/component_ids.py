"""Component id list helpers — single additions and numbered batches."""

from __future__ import annotations

from typing import Any

from layerstack.parsing import parse_int


def add_component_id(ids: list[str], new_id: str) -> list[str]:
    """Return a new list with *new_id* (trimmed) appended.

    Raises ``ValueError`` for a blank id or one already in *ids*.
    """
    value = new_id.strip()
    if value == "":
        raise ValueError("Please provide an identifier for the component")
    if value in ids:
        raise ValueError(f"Component {value!r} already exists")
    return [*ids, value]


def generate_component_ids(
    prefix: str,
    start: Any,
    end: Any,
    pad_digits: Any = 0,
) -> list[str]:
    """Generate ``prefix + number`` ids for every number in ``[start, end]``.

    *start*, *end* and *pad_digits* may be raw field input; non-numeric
    values raise ``ValueError``.  Numbers shorter than *pad_digits* are
    left-padded with zeros.

    >>> generate_component_ids("S", 8, 10, pad_digits=3)
    ['S008', 'S009', 'S010']
    """
    start_result = parse_int(start)
    end_result = parse_int(end)
    if not (start_result.ok and end_result.ok):
        raise ValueError("Start and End need to be whole numbers.")
    digits_result = parse_int(pad_digits)
    if not digits_result.ok:
        raise ValueError("Zero Padding Digits needs to be whole number.")

    prefix = prefix.strip()
    digits = max(int(digits_result.value), 0)
    return [
        f"{prefix}{str(number).zfill(digits)}"
        for number in range(int(start_result.value), int(end_result.value) + 1)
    ]


def merge_component_ids(ids: list[str], new_ids: list[str]) -> list[str]:
    """Append *new_ids* to *ids*, skipping ids that are already present."""
    merged = list(ids)
    for component_id in new_ids:
        if component_id not in merged:
            merged.append(component_id)
    return merged
