from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from storefront.auth.dependencies import get_api_client
from storefront.core.constants import ALL_AREAS, SortOption
from storefront.schemas.pages import StorePage
from storefront.services.api_client import ApiClient
from storefront.services.list_controller import store_controller
from storefront.services.view_pipeline import StoreQuery, derive_view, menu_url_for

router = APIRouter()


@router.get("", response_model=StorePage)
async def stores_page(
    search: str = "",
    area: str = ALL_AREAS,
    open_now: bool = False,
    category: str = "",
    sort: Optional[SortOption] = None,
    client: ApiClient = Depends(get_api_client),
):
    """Partner stores near the customer; `category` comes from the menu page"""
    if sort not in (None, SortOption.highest_rated):
        raise HTTPException(status_code=400, detail=f"Stores cannot be sorted by {sort.value}")

    controller = store_controller(client)
    try:
        await controller.load()
    finally:
        controller.close()

    query = StoreQuery(search=search, area=area, open_now=open_now, category=category, sort=sort)
    stores = derive_view(controller.items, query)

    return StorePage(
        status=controller.status,
        error=controller.error,
        filters=query,
        count=len(stores),
        stores=stores,
        menu_links={store.id: menu_url_for(store) for store in stores},
    )
