"""Structural checks for itineraries produced by the completion model.

The model's answer is untrusted text. ``extract_json_object`` pulls the first
balanced JSON object out of it and ``validate_itinerary`` turns the decoded
payload into either ``Valid(itinerary)`` or ``Invalid(path, reason)``. Checks
are fail-fast: the first offending field path is reported.
"""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from plannity.schemas import ACTIVITY_TYPES, Itinerary


REQUIRED_ACTIVITY_FIELDS = ("time", "activity", "location", "description", "type")
NON_EMPTY_ACTIVITY_FIELDS = ("time", "activity", "location")


@dataclass(frozen=True)
class Valid:
    itinerary: Itinerary


@dataclass(frozen=True)
class Invalid:
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


ValidationResult = Union[Valid, Invalid]


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """Return the first balanced ``{...}`` span of ``text`` decoded as JSON.

    Braces inside JSON strings are ignored while scanning. Returns None when no
    balanced span exists or the span does not decode to an object.
    """
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                try:
                    payload = json.loads(text[start : index + 1])
                except json.JSONDecodeError:
                    return None
                return payload if isinstance(payload, dict) else None
    return None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_date(value: Any) -> dt.date | None:
    if not isinstance(value, str):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def _check_activity(activity: Any, path: str) -> Invalid | None:
    if not isinstance(activity, dict):
        return Invalid(path, "expected an object")
    for field in REQUIRED_ACTIVITY_FIELDS:
        if not isinstance(activity.get(field), str):
            return Invalid(f"{path}.{field}", "expected text")
    for field in NON_EMPTY_ACTIVITY_FIELDS:
        if not activity[field].strip():
            return Invalid(f"{path}.{field}", "must not be empty")
    if activity["type"] not in ACTIVITY_TYPES:
        return Invalid(f"{path}.type", f"unknown activity type {activity['type']!r}")
    return None


def validate_itinerary(
    candidate: Any,
    expected_days: int,
    trip_start: dt.date | None = None,
) -> ValidationResult:
    """Check ``candidate`` against the itinerary shape for an ``expected_days`` trip.

    When ``trip_start`` is given every day's date must also equal
    ``trip_start + (day - 1)``.
    """
    if not isinstance(candidate, dict):
        return Invalid("$", "expected an object")
    for field in ("destination", "summary"):
        if not isinstance(candidate.get(field), str):
            return Invalid(field, "expected text")

    days = candidate.get("days")
    if not isinstance(days, list):
        return Invalid("days", "expected a list")
    if len(days) != expected_days:
        return Invalid("days", f"expected {expected_days} days, got {len(days)}")

    for position, day in enumerate(days, start=1):
        path = f"days[{position - 1}]"
        if not isinstance(day, dict):
            return Invalid(path, "expected an object")
        if not _is_int(day.get("day")) or day["day"] != position:
            return Invalid(f"{path}.day", f"expected {position}, got {day.get('day')!r}")

        parsed = _parse_date(day.get("date"))
        if parsed is None:
            return Invalid(f"{path}.date", f"unparseable date {day.get('date')!r}")
        if trip_start is not None and parsed != trip_start + dt.timedelta(days=position - 1):
            return Invalid(f"{path}.date", f"{parsed} is not day {position} of a trip starting {trip_start}")

        activities = day.get("activities")
        if not isinstance(activities, list) or not activities:
            return Invalid(f"{path}.activities", "expected a non-empty list")
        for index, activity in enumerate(activities):
            problem = _check_activity(activity, f"{path}.activities[{index}]")
            if problem is not None:
                return problem

    try:
        return Valid(Itinerary.model_validate(candidate))
    except ValidationError as exc:
        return Invalid("$", str(exc))
