from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from storefront.core.constants import (
    AREA_OPTIONS,
    CATEGORIES,
    CATEGORY_OPTIONS,
    SORT_OPTIONS,
    TAGS,
    TIME_OPTIONS,
    TimeOfDay,
)
from storefront.schemas.meal import MenuItem
from storefront.schemas.store import Store
from storefront.schemas.user import SessionUser
from storefront.services.list_controller import ListStatus
from storefront.services.view_pipeline import MenuQuery, StoreQuery


# ---------- Render-ready page documents ----------
class MenuPage(BaseModel):
    status: ListStatus
    error: Optional[str] = None
    filters: MenuQuery
    count: int
    # size of the whole collection before filtering
    total: int
    items: List[MenuItem]
    categories: List[str] = CATEGORY_OPTIONS
    times: List[str] = TIME_OPTIONS
    sorts: List[str] = SORT_OPTIONS
    # item id -> stores page pre-filtered by the item's category
    store_links: Dict[str, str] = {}


class StorePage(BaseModel):
    status: ListStatus
    error: Optional[str] = None
    filters: StoreQuery
    count: int
    stores: List[Store]
    areas: List[str] = AREA_OPTIONS
    # store id -> menu page pre-filtered by the store's name
    menu_links: Dict[str, str] = {}


class TimeSlot(BaseModel):
    key: TimeOfDay
    label: str
    hours: str


class OwnerDashboardPage(BaseModel):
    user: SessionUser
    tab: TimeOfDay
    time_slots: List[TimeSlot]
    status: ListStatus
    error: Optional[str] = None
    success_message: Optional[str] = None
    form_open: bool = False
    editing_id: Optional[str] = None
    form: Dict[str, Any] = {}
    form_errors: Dict[str, str] = {}
    items: List[MenuItem]
    categories: List[str] = CATEGORIES
    tags: List[str] = TAGS
