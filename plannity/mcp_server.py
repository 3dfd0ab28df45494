from __future__ import annotations

from datetime import date
from typing import Any
from mcp.server.fastmcp import FastMCP

from plannity.config import get_settings
from plannity.enrichment import resolve_image
from plannity.image_client import build_image_client
from plannity.schemas import DateRange, TripRequest
from plannity.workflow import build_llm, create_graph, synthesize


mcp = FastMCP("plannity-tools")


@mcp.tool()
async def generate_travel_plan(
    destination: str,
    budget: float,
    people: int,
    date_from: date,
    date_to: date,
    travel_style: str,
) -> dict[str, Any]:
    """Generate a day-by-day itinerary; falls back to a template plan when the model is unavailable."""
    settings = get_settings()
    request = TripRequest(
        destination=destination,
        budget=budget,
        people=people,
        date_range=DateRange(start=date_from, end=date_to),
        travel_style=travel_style,
    )
    graph = create_graph(build_llm(settings), llm_timeout_sec=settings.llm_timeout_sec)
    itinerary = await synthesize(graph, request)
    return itinerary.model_dump(mode="json")


@mcp.tool()
async def find_location_image(query: str) -> dict[str, Any]:
    """Find a representative image URL for a place; returns the placeholder when none is found."""
    settings = get_settings()
    client = build_image_client(settings)
    try:
        url = await resolve_image(client, query, settings.placeholder_image_url)
    finally:
        if client is not None:
            await client.aclose()
    return {"imageUrl": url}


if __name__ == "__main__":
    mcp.run()
