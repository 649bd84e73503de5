"""
HTTP record source for the listing controller.

Talks to the CareerBoard API with httpx and maps responses back onto the
shared error taxonomy: 404 -> NotFoundError, 409 -> TransitionRejected,
transport failures and anything else >= 400 -> SourceUnavailable.
"""
import logging
from typing import Any, Protocol

import httpx

from careerboard.config import settings
from careerboard.errors import NotFoundError, SourceUnavailable, TransitionRejected
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import Page, relay_page

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    async def list(self, query: ListQuery) -> Page: ...

    async def list_all(self) -> list: ...

    async def create(self, payload: dict) -> dict: ...

    async def update(self, record_id: str, patch: dict) -> dict: ...

    async def delete(self, record_id: str) -> bool: ...

    async def update_status(self, record_id: str, status: str, note: str | None = None) -> dict: ...


class ApiRecordSource:
    def __init__(self, client: httpx.AsyncClient, collection: str, api_prefix: str | None = None):
        self._client = client
        self._base = f"{api_prefix if api_prefix is not None else settings.api_prefix}/{collection}"

    async def _request(self, method: str, path: str = "", **kwargs) -> Any:
        url = f"{self._base}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise SourceUnavailable(f"Could not reach {url}") from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            if response.status_code == 404:
                raise NotFoundError(str(detail))
            if response.status_code == 409:
                raise TransitionRejected(str(detail))
            logger.error("%s %s returned %s: %s", method, url, response.status_code, detail)
            raise SourceUnavailable(f"{method} {url} returned {response.status_code}")
        return response.json()

    async def list(self, query: ListQuery) -> Page:
        data = await self._request("GET", params=query.to_params())
        return relay_page(data)

    async def list_all(self) -> list:
        return await self._request("GET", "/all")

    async def create(self, payload: dict) -> dict:
        return await self._request("POST", json=payload)

    async def update(self, record_id: str, patch: dict) -> dict:
        return await self._request("PUT", f"/{record_id}", json=patch)

    async def delete(self, record_id: str) -> bool:
        await self._request("DELETE", f"/{record_id}")
        return True

    async def update_status(self, record_id: str, status: str, note: str | None = None) -> dict:
        data = await self._request("POST", f"/{record_id}/status", json={"status": status, "note": note})
        return data["application"]

    async def advance(self, record_id: str, status: str) -> dict:
        data = await self._request("POST", f"/{record_id}/advance", json={"status": status})
        return data["application"]
