from fastapi import APIRouter, Depends

from storefront.auth.dependencies import get_api_client
from storefront.core.constants import ALL_CATEGORIES, ANY_TIME, SortOption
from storefront.schemas.pages import MenuPage
from storefront.services.api_client import ApiClient
from storefront.services.list_controller import menu_controller
from storefront.services.view_pipeline import MenuQuery, derive_view, stores_url_for

router = APIRouter()


@router.get("", response_model=MenuPage)
async def menu_page(
    search: str = "",
    category: str = ALL_CATEGORIES,
    time: str = ANY_TIME,
    sort: SortOption = SortOption.highest_rated,
    store: str = "",
    client: ApiClient = Depends(get_api_client),
):
    """Public menu: every available meal, filtered and sorted by the current selections"""
    controller = menu_controller(client)
    try:
        await controller.load()
    finally:
        controller.close()

    query = MenuQuery(search=search, category=category, time_of_day=time, sort=sort, store=store)
    items = derive_view(controller.items, query)

    return MenuPage(
        status=controller.status,
        error=controller.error,
        filters=query,
        count=len(items),
        total=len(controller.items),
        items=items,
        store_links={item.id: stores_url_for(item) for item in items},
    )
