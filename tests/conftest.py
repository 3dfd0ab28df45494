"""Shared fixtures for the Plannity test-suite."""
from __future__ import annotations

import datetime as dt
from typing import Any, Callable

import pytest

from plannity.config import get_settings
from plannity.schemas import TripRequest


CREDENTIAL_ENV = ("DEEPSEEK_API_KEY", "GOOGLE_CUSTOM_SEARCH_API_KEY", "GOOGLE_CUSTOM_SEARCH_CX")


class FailingLLM:
    """Chat model stand-in whose every call fails like an unreachable endpoint."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or ConnectionError("completion endpoint unreachable")
        self.calls = 0

    async def ainvoke(self, messages: Any) -> Any:
        self.calls += 1
        raise self.exc


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Run every test without upstream credentials unless it sets them itself."""
    for name in CREDENTIAL_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def kyoto_request() -> TripRequest:
    return TripRequest.model_validate(
        {
            "destination": "京都",
            "budget": "100000",
            "people": "2",
            "dateRange": {"from": "2024-05-01", "to": "2024-05-03"},
            "travelStyle": "観光",
        }
    )


@pytest.fixture
def make_plan_payload() -> Callable[..., dict[str, Any]]:
    """Build a well-formed model answer with ``days`` days starting at ``start``."""

    def _make(days: int = 3, start: dt.date = dt.date(2024, 5, 1), destination: str = "Kyoto") -> dict[str, Any]:
        return {
            "destination": destination,
            "summary": "Temples, tea houses and a night in Gion.",
            "days": [
                {
                    "day": i + 1,
                    "date": (start + dt.timedelta(days=i)).isoformat(),
                    "activities": [
                        {
                            "time": "08:30",
                            "activity": "Breakfast",
                            "location": "Nishiki Market",
                            "description": "Street food breakfast",
                            "type": "meal",
                        },
                        {
                            "time": "10:00",
                            "activity": "Temple visit",
                            "location": f"Temple {i + 1}",
                            "description": "Morning walk",
                            "type": "sightseeing",
                        },
                        {
                            "time": "21:00",
                            "activity": "Check in",
                            "location": "Hotel Granvia Kyoto",
                            "description": "",
                            "type": "accommodation",
                        },
                    ],
                }
                for i in range(days)
            ],
        }

    return _make


@pytest.fixture
def failing_llm() -> FailingLLM:
    return FailingLLM()
