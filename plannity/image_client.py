from __future__ import annotations

from typing import Any
import httpx

from plannity.config import Settings


class ImageSearchClient:
    """Google Custom Search client restricted to image results."""

    def __init__(
        self,
        api_key: str,
        search_engine_id: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.search_engine_id = search_engine_id
        self._client = httpx.AsyncClient(timeout=timeout, base_url="https://www.googleapis.com", transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "key": self.api_key, "cx": self.search_engine_id}
        resp = await self._client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()

    async def search_images(self, query: str, num: int = 1, img_size: str = "large") -> dict[str, Any]:
        params = {"q": query, "searchType": "image", "num": num, "imgSize": img_size}
        return await self._get("/customsearch/v1", params)

    async def first_image_url(self, query: str) -> str | None:
        raw = await self.search_images(query)
        items = raw.get("items") or []
        first = items[0] if items else {}
        return first.get("link") or None


def build_image_client(settings: Settings) -> ImageSearchClient | None:
    if not settings.google_custom_search_api_key or not settings.google_custom_search_cx:
        return None
    return ImageSearchClient(
        settings.google_custom_search_api_key,
        settings.google_custom_search_cx,
        timeout=settings.image_timeout_sec,
    )
