"""
List View Controller

Fetch lifecycle for one list-bearing page: idle -> loading -> ready | failed.
Every page (menu, stores, owner dashboard) owns one controller and calls
`load()` when it is entered and again after each successful mutation.
"""
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import ValidationError

from storefront.core.config import settings
from storefront.schemas.meal import MenuItem
from storefront.schemas.store import Store
from storefront.services.api_client import ApiClient, ApiError

log = logging.getLogger(__name__)

T = TypeVar("T")


class ListStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    failed = "failed"


class ListViewController(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Dict[str, Any]]],
        parse: Callable[[Any], T],
        fallback_error: str = "Failed to load items",
        name: str = "items",
    ):
        self._fetch = fetch
        self._parse = parse
        self.fallback_error = fallback_error
        self.name = name

        self.items: List[T] = []
        self.status = ListStatus.idle
        self.error: Optional[str] = None

        self._generation = 0
        self._closed = False

    @property
    def loading(self) -> bool:
        return self.status == ListStatus.loading

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down; completions of in-flight loads are discarded from now on"""
        self._closed = True

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def load(self) -> None:
        """
        Fetch the collection and replace `items` on success.

        On failure the message lands in `error` and the last good `items` are
        kept. A completion is applied only if no later `load()` was issued.
        """
        if self._closed:
            return

        self._generation += 1
        generation = self._generation
        self.status = ListStatus.loading
        self.error = None

        try:
            response = await self._fetch()
            items = [self._parse(raw) for raw in (response.get("data") or [])]
        except ApiError as e:
            if self._is_current(generation):
                self.error = e.message or self.fallback_error
                self.status = ListStatus.failed
            log.error("Error fetching %s: %s", self.name, e.message)
            return
        except ValidationError as e:
            if self._is_current(generation):
                self.error = self.fallback_error
                self.status = ListStatus.failed
            log.error("Error reading %s: %s", self.name, e)
            return

        if not self._is_current(generation):
            log.debug("discarding stale %s result: generation=%s", self.name, generation)
            return

        self.items = items
        self.status = ListStatus.ready


# ---------- Page controllers ----------

def menu_controller(client: ApiClient) -> ListViewController[MenuItem]:
    return ListViewController(
        lambda: client.list_public_meals({"limit": settings.list_limit}),
        MenuItem.model_validate,
        fallback_error="Failed to load meals",
        name="meals",
    )


def store_controller(client: ApiClient) -> ListViewController[Store]:
    return ListViewController(
        lambda: client.list_stores({"limit": settings.list_limit}),
        Store.model_validate,
        fallback_error="Failed to load stores",
        name="stores",
    )


def owner_meals_controller(client: ApiClient) -> ListViewController[MenuItem]:
    return ListViewController(
        client.list_owner_meals,
        MenuItem.model_validate,
        fallback_error="Failed to load meals",
        name="owner meals",
    )
