from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


ACTIVITY_TYPES = ("sightseeing", "meal", "accommodation", "transportation")
TRAVEL_STYLES = ("観光", "グルメ", "アクティビティ", "リラックス", "文化体験")

ActivityType = Literal["sightseeing", "meal", "accommodation", "transportation"]


class DateRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: dt.date = Field(..., alias="from", description="First day of the trip")
    end: dt.date = Field(..., alias="to", description="Last day of the trip (inclusive)")

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start > self.end:
            raise ValueError("dateRange.from must not be after dateRange.to")
        return self


class TripRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    destination: str = Field(..., min_length=1, description="Destination")
    budget: float = Field(..., gt=0, description="Total budget, currency-agnostic")
    people: int = Field(..., gt=0, description="Party size")
    date_range: DateRange = Field(..., alias="dateRange")
    travel_style: str = Field(..., alias="travelStyle", description="One of TRAVEL_STYLES")

    @field_validator("destination")
    @classmethod
    def _strip_destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("destination must not be blank")
        return value

    @field_validator("travel_style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        if value not in TRAVEL_STYLES:
            raise ValueError(f"unknown travel style: {value}")
        return value

    @property
    def number_of_days(self) -> int:
        return (self.date_range.end - self.date_range.start).days + 1


class Activity(BaseModel):
    time: str
    activity: str
    location: str
    description: str
    type: ActivityType


class ItineraryDay(BaseModel):
    day: int
    date: dt.date
    activities: list[Activity]


class Itinerary(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str
    summary: str
    days: list[ItineraryDay]


class LocationImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: str
    image_url: str = Field(..., alias="imageUrl")


class ImageQuery(BaseModel):
    query: str


class ImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")


class TravelPlanResponse(BaseModel):
    plan: Itinerary
    images: list[LocationImage]
