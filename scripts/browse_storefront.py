# scripts/browse_storefront.py

import argparse
import asyncio
import sys

from storefront.auth.session import Session
from storefront.core.constants import ALL_AREAS, ALL_CATEGORIES, ANY_TIME, SortOption
from storefront.services.api_client import ApiClient
from storefront.services.list_controller import ListStatus, menu_controller, store_controller
from storefront.services.view_pipeline import MenuQuery, StoreQuery, derive_view

if sys.platform.startswith('win') and sys.version_info < (3, 10):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


async def show_menu(args):
    controller = menu_controller(ApiClient(Session(), base_url=args.api_url))
    await controller.load()
    if controller.status == ListStatus.failed:
        print(f"❌ {controller.error}")
        return 1

    query = MenuQuery(
        search=args.search,
        category=args.category,
        time_of_day=args.time,
        sort=SortOption(args.sort),
        store=args.store,
    )
    items = derive_view(controller.items, query)
    print(f"🍽️  {len(items)} of {len(controller.items)} menu items")
    for item in items:
        status = "" if item.is_available else "  (sold out)"
        print(f"  ⭐ {item.rating or 0:.1f}  ₹{item.price:<7.2f} {item.name} [{item.category}, {item.time_of_day.value}]{status}")
    return 0


async def show_stores(args):
    controller = store_controller(ApiClient(Session(), base_url=args.api_url))
    await controller.load()
    if controller.status == ListStatus.failed:
        print(f"❌ {controller.error}")
        return 1

    query = StoreQuery(search=args.search, area=args.area, open_now=args.open_now, category=args.category)
    stores = derive_view(controller.items, query)
    print(f"🏪 Found {len(stores)} stores near you")
    for store in stores:
        area = store.address.area if store.address and store.address.area else "?"
        state = "Open" if store.is_active else "Closed"
        print(f"  {store.name} ({area}) {state} - {', '.join(store.specialties)}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Browse the Breakfast4U menu and partner stores")
    parser.add_argument("--api-url", default=None, help="Backend API base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    menu = sub.add_parser("menu", help="List menu items")
    menu.add_argument("--search", default="")
    menu.add_argument("--category", default=ALL_CATEGORIES)
    menu.add_argument("--time", default=ANY_TIME)
    menu.add_argument("--sort", default=SortOption.highest_rated.value, choices=[o.value for o in SortOption])
    menu.add_argument("--store", default="")

    stores = sub.add_parser("stores", help="List partner stores")
    stores.add_argument("--search", default="")
    stores.add_argument("--area", default=ALL_AREAS)
    stores.add_argument("--open-now", action="store_true")
    stores.add_argument("--category", default="")

    args = parser.parse_args()
    handler = show_menu if args.command == "menu" else show_stores
    sys.exit(asyncio.run(handler(args)))


if __name__ == "__main__":
    main()
