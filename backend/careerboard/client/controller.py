"""
Consumer-side listing controller.

Owns the current ListQuery and the latest result, nothing derived in
between. Every fetch takes a token; a response that is not for the latest
token is dropped, so a slow stale request cannot overwrite newer state.
"""
import asyncio
import logging
import uuid

from careerboard.config import settings
from careerboard.errors import ListingError, NotFoundError
from careerboard.services.listing import run_listing
from careerboard.services.listing_fields import ListingFields, resolve
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import Page

logger = logging.getLogger(__name__)


class ListingController:
    def __init__(
        self,
        source,
        fields: ListingFields,
        *,
        client_side: bool = False,
        query: ListQuery | None = None,
        debounce_seconds: float | None = None,
    ):
        self.source = source
        self.fields = fields
        # client_side: fetch everything, filter/sort/page locally.
        # Otherwise the source windows and we only relay its metadata.
        self.client_side = client_side
        self.query = query or ListQuery()
        self.result: Page | None = None
        self.records: list = []
        self.loading = False
        self.submitting = False
        self.last_error: str | None = None
        self._loaded = False
        self._latest_token = 0
        self._debounce_seconds = (
            settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._pending_search: asyncio.Task | None = None

    # -- fetching -----------------------------------------------------------

    async def refresh(self) -> Page | None:
        self._latest_token += 1
        token = self._latest_token
        query = self.query
        self.loading = True
        try:
            if self.client_side:
                records = await self.source.list_all()
            else:
                page = await self.source.list(query)
        except ListingError as exc:
            if token == self._latest_token:
                self.loading = False
                self._report("Failed to load records", exc)
            return None

        if token != self._latest_token:
            logger.debug("Dropping stale %s response (token %d < %d)", self.fields.kind, token, self._latest_token)
            return None
        if self.client_side:
            self.records = list(records)
            self._loaded = True
            # Query may have changed locally while the fetch was pending
            page = run_listing(self.records, self.query, self.fields)
        self.result = page
        self.loading = False
        self.last_error = None
        return page

    async def _apply_query(self, query: ListQuery) -> Page | None:
        self.query = query
        if self.client_side and self._loaded:
            self.result = run_listing(self.records, query, self.fields)
            return self.result
        return await self.refresh()

    async def set_filters(self, **criteria) -> Page | None:
        return await self._apply_query(self.query.with_criteria(**criteria))

    async def clear_filters(self) -> Page | None:
        return await self._apply_query(self.query.model_copy(update={"criteria": {}, "page": 1}))

    async def set_sort(self, key: str, direction: str | None = None) -> Page | None:
        return await self._apply_query(self.query.with_sort(key, direction))

    async def set_page(self, page) -> Page | None:
        return await self._apply_query(self.query.with_page(page))

    def set_search(self, text: str) -> asyncio.Task:
        """Debounced search; a newer keystroke cancels the pending one."""
        if self._pending_search is not None and not self._pending_search.done():
            self._pending_search.cancel()
        self._pending_search = asyncio.create_task(self._search_after_quiet_period(text))
        return self._pending_search

    async def _search_after_quiet_period(self, text: str) -> Page | None:
        await asyncio.sleep(self._debounce_seconds)
        return await self._apply_query(self.query.with_criteria(search=text))

    # -- mutations ----------------------------------------------------------

    async def create(self, payload: dict) -> bool:
        placeholder = {**payload, "id": f"pending-{uuid.uuid4()}"}
        snapshot = self._snapshot()
        self._replace_items(lambda items: [placeholder, *items])

        async def action():
            await self.source.create(payload)
            await self.refresh()

        return await self._mutate("create", action, rollback=lambda: self._restore(snapshot))

    async def update(self, record_id: str, patch: dict) -> bool:
        snapshot = self._snapshot()

        def merge(items):
            return [
                {**_as_dict(item), **patch} if resolve(item, "id") == record_id else item
                for item in items
            ]

        self._replace_items(merge)

        async def action():
            await self.source.update(record_id, patch)
            await self.refresh()

        return await self._mutate("update", action, rollback=lambda: self._restore(snapshot))

    async def delete(self, record_id: str) -> bool:
        async def action():
            await self.source.delete(record_id)
            await self.refresh()

        return await self._mutate("delete", action)

    async def transition(self, record_id: str, status: str, note: str | None = None) -> bool:
        async def action():
            await self.source.update_status(record_id, status, note)
            await self.refresh()

        return await self._mutate("status change", action)

    async def advance(self, record_id: str, status: str) -> bool:
        async def action():
            await self.source.advance(record_id, status)
            await self.refresh()

        return await self._mutate("quick action", action)

    async def _mutate(self, label: str, action, rollback=None) -> bool:
        if self.submitting:
            logger.warning("Ignoring %s on %s: another change is still in flight", label, self.fields.kind)
            self.last_error = "Another change is still being saved"
            if rollback:
                rollback()
            return False

        self.submitting = True
        try:
            await action()
        except NotFoundError as exc:
            if rollback:
                rollback()
            self._report(f"Failed to {label}", exc)
            # Reconcile with the source of truth
            await self.refresh()
            self.last_error = f"Failed to {label}: {exc.message}"
            return False
        except ListingError as exc:
            if rollback:
                rollback()
            self._report(f"Failed to {label}", exc)
            return False
        finally:
            self.submitting = False
        return True

    # -- helpers ------------------------------------------------------------

    def _report(self, prefix: str, exc: ListingError):
        logger.error("%s (%s): %s", prefix, self.fields.kind, exc.message)
        self.last_error = f"{prefix}: {exc.message}"

    def _snapshot(self):
        return self.result, list(self.records)

    def _restore(self, snapshot):
        self.result, self.records = snapshot[0], snapshot[1]

    def _replace_items(self, transform):
        if self.result is not None:
            self.result = self.result.model_copy(update={"items": transform(list(self.result.items))})
        if self.client_side:
            self.records = transform(list(self.records))


def _as_dict(item) -> dict:
    if isinstance(item, dict):
        return item
    if hasattr(item, "model_dump"):
        return item.model_dump()
    return dict(vars(item))
