from __future__ import annotations

import datetime as dt

from plannity.schemas import Activity, Itinerary, ItineraryDay


def _day_activities(destination: str, travel_style: str) -> list[Activity]:
    return [
        Activity(
            time="08:00",
            activity="朝食",
            location=f"{destination}のホテルレストラン",
            description="ホテルでの朝食",
            type="meal",
        ),
        Activity(
            time="10:00",
            activity=f"{destination}観光",
            location=f"{destination}の人気スポット",
            description=f"{travel_style}を楽しむ",
            type="sightseeing",
        ),
        Activity(
            time="12:30",
            activity="昼食",
            location=f"{destination}のローカルレストラン",
            description="地元の料理を楽しむ",
            type="meal",
        ),
        Activity(
            time="14:00",
            activity="アクティビティ",
            location=f"{destination}のアクティビティスポット",
            description=f"{travel_style}に関連したアクティビティ",
            type="sightseeing",
        ),
        Activity(
            time="18:00",
            activity="夕食",
            location=f"{destination}の評価の高いレストラン",
            description="特別な夕食",
            type="meal",
        ),
        Activity(
            time="20:00",
            activity="宿泊",
            location=f"{destination}のホテル",
            description="快適なホテルでの宿泊",
            type="accommodation",
        ),
    ]


def generate_fallback(
    destination: str,
    number_of_days: int,
    trip_start: dt.date,
    travel_style: str,
) -> Itinerary:
    """Build the template itinerary used whenever synthesis fails.

    Pure and deterministic: no I/O, no parsing, never raises for a day count >= 1.
    """
    days = [
        ItineraryDay(
            day=i + 1,
            date=trip_start + dt.timedelta(days=i),
            activities=_day_activities(destination, travel_style),
        )
        for i in range(number_of_days)
    ]
    summary = (
        f"{destination}への{number_of_days}日間の旅行プランです。"
        f"{travel_style}を中心に、地元の文化や料理を楽しむことができます。"
        f"主要な観光スポットを訪れながら、{destination}の魅力を存分に体験できるプランになっています。"
    )
    return Itinerary(destination=destination, summary=summary, days=days)
