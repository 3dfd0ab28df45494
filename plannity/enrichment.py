from __future__ import annotations

import asyncio
import logging

from plannity.image_client import ImageSearchClient
from plannity.schemas import Itinerary, LocationImage


logger = logging.getLogger("plannity")

PLACEHOLDER_IMAGE_URL = "/placeholder.svg"


def unique_locations(itinerary: Itinerary) -> list[str]:
    """Activity locations across all days, deduplicated in first-seen order."""
    seen: dict[str, None] = {}
    for day in itinerary.days:
        for activity in day.activities:
            seen.setdefault(activity.location, None)
    return list(seen)


async def resolve_image(
    client: ImageSearchClient | None,
    query: str,
    placeholder: str = PLACEHOLDER_IMAGE_URL,
) -> str:
    """First image result for ``query``; the placeholder on any failure."""
    if client is None:
        logger.warning("image search credentials not configured, using placeholder")
        return placeholder
    try:
        url = await client.first_image_url(query)
    except Exception as exc:  # noqa: BLE001
        logger.warning("image search failed for %r: %r", query, exc)
        return placeholder
    if not url:
        logger.info("image search returned no results for %r", query)
        return placeholder
    return url


async def enrich_locations(
    itinerary: Itinerary,
    client: ImageSearchClient | None,
    placeholder: str = PLACEHOLDER_IMAGE_URL,
    max_concurrency: int = 5,
) -> dict[str, LocationImage]:
    locations = unique_locations(itinerary)
    logger.info("enrich start locations=%s", len(locations))
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _lookup(location: str) -> LocationImage:
        async with semaphore:
            url = await resolve_image(client, f"{location} {itinerary.destination}", placeholder)
        return LocationImage(location=location, image_url=url)

    images = await asyncio.gather(*(_lookup(location) for location in locations))
    logger.info("enrich done resolved=%s", sum(1 for image in images if image.image_url != placeholder))
    return {image.location: image for image in images}
