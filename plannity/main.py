from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from plannity.config import get_settings
from plannity.enrichment import enrich_locations, resolve_image
from plannity.image_client import ImageSearchClient, build_image_client
from plannity.schemas import (
    ImageQuery,
    ImageResponse,
    Itinerary,
    TravelPlanResponse,
    TripRequest,
)
from plannity.workflow import build_llm, create_graph, synthesize


app = FastAPI(title="Plannity", version="0.1.0")
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("plannity")


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    graph = create_graph(build_llm(settings), llm_timeout_sec=settings.llm_timeout_sec)

    app.state.settings = settings
    app.state.graph = graph
    app.state.image_client = build_image_client(settings)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    client: ImageSearchClient | None = getattr(app.state, "image_client", None)
    if client is not None:
        await client.aclose()


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/api/generate-plan", response_model=Itinerary)
async def generate_plan(request: TripRequest) -> Itinerary:
    return await synthesize(app.state.graph, request)


@app.post("/api/get-images", response_model=ImageResponse)
async def get_images(query: ImageQuery) -> ImageResponse:
    settings = app.state.settings
    url = await resolve_image(app.state.image_client, query.query, settings.placeholder_image_url)
    return ImageResponse(image_url=url)


@app.post("/api/travel-plan", response_model=TravelPlanResponse)
async def travel_plan(request: TripRequest) -> TravelPlanResponse:
    settings = app.state.settings
    itinerary = await synthesize(app.state.graph, request)
    images = await enrich_locations(
        itinerary,
        app.state.image_client,
        placeholder=settings.placeholder_image_url,
        max_concurrency=settings.image_max_concurrency,
    )
    return TravelPlanResponse(plan=itinerary, images=list(images.values()))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc: Exception):
    logger.exception("unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Failed to generate travel plan"})
