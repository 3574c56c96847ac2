from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class FieldKind(str, Enum):
    """Measurement fields a set may carry."""

    REPS = "reps"
    WEIGHT = "weight"
    DURATION_SEC = "durationSec"
    DISTANCE_M = "distanceM"
    INTERVALS = "intervals"
    WORK_SEC = "workSec"
    REST_SEC = "restSec"
    NOTES = "notes"


ALL_FIELDS: tuple[FieldKind, ...] = tuple(FieldKind)


@dataclass(frozen=True)
class Capabilities:
    """The four exercise flags that decide which set fields are legal."""

    has_load: bool = False
    has_reps: bool = False
    has_duration: bool = False
    has_intervals: bool = False

    @classmethod
    def from_row(cls, row: Mapping) -> "Capabilities":
        """Build from a catalog row; sqlite stores the flags as 0/1."""
        return cls(
            has_load=bool(row.get("hasLoad")),
            has_reps=bool(row.get("hasReps")),
            has_duration=bool(row.get("hasDuration")),
            has_intervals=bool(row.get("hasIntervals")),
        )


def legal_fields(caps: Capabilities) -> tuple[FieldKind, ...]:
    """Return the ordered set fields that are meaningful for ``caps``."""
    fields: list[FieldKind] = []
    if caps.has_reps:
        fields.append(FieldKind.REPS)
    if caps.has_load:
        fields.append(FieldKind.WEIGHT)
    if caps.has_duration:
        fields.extend((FieldKind.DURATION_SEC, FieldKind.DISTANCE_M))
    if caps.has_intervals:
        fields.extend((FieldKind.INTERVALS, FieldKind.WORK_SEC, FieldKind.REST_SEC))
    fields.append(FieldKind.NOTES)
    return tuple(fields)


def prune_set(values: Mapping, caps: Capabilities) -> dict:
    """Drop fields the exercise does not support.

    The result always has one key per ``FieldKind``; illegal or missing
    fields are ``None``.
    """
    allowed = {f.value for f in legal_fields(caps)}
    return {
        f.value: (values.get(f.value) if f.value in allowed else None)
        for f in ALL_FIELDS
    }
