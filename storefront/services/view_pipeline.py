"""
Derived View Pipeline

Pure filter -> sort over a loaded collection. The input list is never
mutated; every call builds a new list from (collection, query).
"""
from typing import Callable, Dict, List, Optional, Sequence, TypeVar, Union
from urllib.parse import urlencode

from pydantic import BaseModel

from storefront.core.constants import ALL_AREAS, ALL_CATEGORIES, ANY_TIME, SortOption
from storefront.schemas.meal import MenuItem
from storefront.schemas.store import Store

Rated = TypeVar("Rated", MenuItem, Store)


def _contains(text: Optional[str], needle: str) -> bool:
    return needle.lower() in (text or "").lower()


# ---------- Sort keys ----------

def _rating_key(item: Union[MenuItem, Store]) -> float:
    return -(item.rating or 0)


def _price_key(item: MenuItem) -> float:
    return item.price


def _price_desc_key(item: MenuItem) -> float:
    return -item.price


def _popularity_key(item: MenuItem) -> int:
    return -(item.review_count or 0)


SORT_KEYS: Dict[SortOption, Callable] = {
    SortOption.highest_rated: _rating_key,
    SortOption.price_low_to_high: _price_key,
    SortOption.price_high_to_low: _price_desc_key,
    SortOption.most_popular: _popularity_key,
}


def sort_items(items: Sequence[Rated], option: Optional[SortOption]) -> List[Rated]:
    """Stable sort by one key; `None` keeps the incoming order"""
    if option is None:
        return list(items)
    return sorted(items, key=SORT_KEYS[option])


# ---------- Menu ----------

class MenuQuery(BaseModel):
    search: str = ""
    category: str = ALL_CATEGORIES
    time_of_day: str = ANY_TIME
    store: str = ""
    sort: SortOption = SortOption.highest_rated

    def matches(self, item: MenuItem) -> bool:
        matches_search = _contains(item.name, self.search) or _contains(item.description, self.search)
        matches_category = self.category == ALL_CATEGORIES or item.category == self.category
        matches_time = self.time_of_day == ANY_TIME or item.time_of_day == self.time_of_day
        matches_store = not self.store or (item.store_name or "").lower() == self.store.lower()
        return matches_search and matches_category and matches_time and matches_store

    def order(self, items: Sequence[MenuItem]) -> List[MenuItem]:
        return sort_items(items, self.sort)


# ---------- Stores ----------

class StoreQuery(BaseModel):
    search: str = ""
    area: str = ALL_AREAS
    open_now: bool = False
    category: str = ""
    sort: Optional[SortOption] = None

    def matches(self, store: Store) -> bool:
        matches_search = _contains(store.name, self.search) or any(
            _contains(s, self.search) for s in store.specialties
        )
        area = store.address.area if store.address else None
        matches_area = self.area == ALL_AREAS or area == self.area
        matches_status = not self.open_now or store.is_active
        matches_category = not self.category or any(
            _contains(s, self.category) for s in store.specialties
        )
        return matches_search and matches_area and matches_status and matches_category

    def order(self, stores: Sequence[Store]) -> List[Store]:
        if self.sort not in (None, SortOption.highest_rated):
            raise ValueError(f"Stores cannot be sorted by {self.sort.value}")
        return sort_items(stores, self.sort)


def derive_view(collection: Sequence[Rated], query: Union[MenuQuery, StoreQuery]) -> List[Rated]:
    """Render-ready sequence: every filter ANDed, then the selected ordering"""
    return query.order([item for item in collection if query.matches(item)])


# ---------- Cross-page navigation ----------

def stores_url_for(item: MenuItem) -> str:
    return f"/stores?{urlencode({'category': item.category})}"


def menu_url_for(store: Store) -> str:
    return f"/menu?{urlencode({'store': store.name})}"
