"""Tests for the FastAPI surface."""
from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from plannity.image_client import ImageSearchClient
from plannity.main import app
from plannity.workflow import create_graph


TRIP = {
    "destination": "京都",
    "budget": "100000",
    "people": "2",
    "dateRange": {"from": "2024-05-01", "to": "2024-05-03"},
    "travelStyle": "観光",
}


@pytest.fixture
def client():
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _image_client() -> ImageSearchClient:
    def handler(request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"]
        if "ホテル" in query:
            return httpx.Response(500)
        return httpx.Response(200, json={"items": [{"link": f"https://img.example.com/{query}.jpg"}]})

    return ImageSearchClient("k", "cx", transport=httpx.MockTransport(handler))


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}


def test_generate_plan_without_credentials_returns_fallback(client: TestClient):
    resp = client.post("/api/generate-plan", json=TRIP)

    assert resp.status_code == 200
    body = resp.json()
    assert body["destination"] == "京都"
    assert [d["day"] for d in body["days"]] == [1, 2, 3]
    assert body["days"][1]["date"] == "2024-05-02"
    assert all(len(d["activities"]) == 6 for d in body["days"])


def test_generate_plan_returns_model_plan(client: TestClient, make_plan_payload):
    payload = make_plan_payload(3)
    llm = FakeListChatModel(responses=["```json\n" + json.dumps(payload) + "\n```"])
    app.state.graph = create_graph(llm)

    resp = client.post("/api/generate-plan", json=TRIP)

    assert resp.status_code == 200
    assert resp.json() == payload


def test_generate_plan_rejects_reversed_dates(client: TestClient):
    bad = {**TRIP, "dateRange": {"from": "2024-05-03", "to": "2024-05-01"}}
    assert client.post("/api/generate-plan", json=bad).status_code == 422


def test_unexpected_failure_is_reported_as_error(client: TestClient):
    class BrokenGraph:
        async def ainvoke(self, state):
            raise RuntimeError("boom")

    app.state.graph = BrokenGraph()
    resp = client.post("/api/generate-plan", json=TRIP)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate travel plan"}


def test_get_images_without_credentials_returns_placeholder(client: TestClient):
    resp = client.post("/api/get-images", json={"query": "金閣寺 京都"})
    assert resp.status_code == 200
    assert resp.json() == {"imageUrl": "/placeholder.svg"}


def test_get_images_returns_first_result(client: TestClient):
    app.state.image_client = _image_client()
    resp = client.post("/api/get-images", json={"query": "金閣寺 京都"})
    assert resp.json() == {"imageUrl": "https://img.example.com/金閣寺 京都.jpg"}


def test_travel_plan_combines_plan_and_images(client: TestClient):
    app.state.image_client = _image_client()

    resp = client.post("/api/travel-plan", json=TRIP)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["plan"]["days"]) == 3
    locations = [image["location"] for image in body["images"]]
    assert locations == [
        "京都のホテルレストラン",
        "京都の人気スポット",
        "京都のローカルレストラン",
        "京都のアクティビティスポット",
        "京都の評価の高いレストラン",
        "京都のホテル",
    ]
    by_location = {image["location"]: image["imageUrl"] for image in body["images"]}
    assert by_location["京都のホテル"] == "/placeholder.svg"
    assert by_location["京都のホテルレストラン"] == "/placeholder.svg"
    assert by_location["京都の人気スポット"] == "https://img.example.com/京都の人気スポット 京都.jpg"
