"""
Meal Workflow

Owner dashboard state and the create / update / delete / availability
mutations. Writes go through the API client; on success the owner's list is
re-fetched in full, never patched in memory. Failures end up in `error`
(or `form_errors` for client-side validation) and never propagate.
"""
import asyncio
import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from storefront.core.config import settings
from storefront.core.constants import CATEGORIES, TimeOfDay
from storefront.schemas.meal import MealPayload, MenuItem
from storefront.services.api_client import ApiClient, ApiError
from storefront.services.list_controller import ListViewController, owner_meals_controller

log = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this item?"


class MealValidationError(Exception):
    """Raised when the meal form is missing required fields"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(errors.values()))
        self.errors = errors


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _number(value: Any, cast) -> Optional[Any]:
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _string_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(tag, str) for tag in value)


def _field_of(error: Dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    return str(loc[0]) if loc else "form"


def normalize_tags(value: Any) -> List[str]:
    """A single selection arrives as a string; none at all as empty/None"""
    if _blank(value):
        return []
    if isinstance(value, str):
        return [value]
    return [tag for tag in value if not _blank(tag)]


def validate_meal_form(form: Mapping[str, Any], time_of_day: TimeOfDay) -> MealPayload:
    errors: Dict[str, str] = {}

    if _blank(form.get("name")):
        errors["name"] = "Item name is required"

    if _blank(form.get("price")):
        errors["price"] = "Price is required"
    else:
        price = _number(form.get("price"), float)
        if price is None:
            errors["price"] = "Price must be a number"
        elif not math.isfinite(price):
            errors["price"] = "Price must be a number"
        elif price < 0:
            errors["price"] = "Price cannot be negative"

    category = form.get("category")
    if _blank(category):
        errors["category"] = "Category is required"
    elif category not in CATEGORIES:
        errors["category"] = f"Unknown category: {category}"

    if _blank(form.get("preparationTime")):
        errors["preparationTime"] = "Preparation time is required"
    else:
        minutes = _number(form.get("preparationTime"), int)
        if minutes is None:
            errors["preparationTime"] = "Preparation time must be a whole number of minutes"
        elif minutes < 1:
            errors["preparationTime"] = "Preparation time must be at least 1 minute"

    if _blank(form.get("description")):
        errors["description"] = "Description is required"

    if _blank(form.get("image")):
        errors["image"] = "Image URL is required"

    tags = form.get("tags")
    if not (_blank(tags) or isinstance(tags, str) or _string_list(tags)):
        errors["tags"] = "Tags must be a list of tag names"

    if errors:
        raise MealValidationError(errors)

    try:
        return MealPayload(
            name=str(form["name"]).strip(),
            description=str(form["description"]).strip(),
            price=float(form["price"]),
            image=str(form["image"]).strip(),
            category=category,
            time_of_day=time_of_day,
            tags=normalize_tags(form.get("tags")),
            preparation_time=int(form["preparationTime"]),
            is_available=True,
        )
    except ValidationError as e:
        raise MealValidationError({_field_of(err): err["msg"] for err in e.errors()}) from e


class MealWorkflow:
    def __init__(
        self,
        client: ApiClient,
        controller: Optional[ListViewController[MenuItem]] = None,
        notice_seconds: Optional[float] = None,
    ):
        self.client = client
        self.controller = controller or owner_meals_controller(client)
        self.notice_seconds = settings.notice_seconds if notice_seconds is None else notice_seconds

        self.active_tab = TimeOfDay.morning
        self.form_open = False
        self.editing: Optional[MenuItem] = None
        self.form: Dict[str, Any] = {}
        self.form_errors: Dict[str, str] = {}
        self.error: Optional[str] = None
        self.success_message: Optional[str] = None
        self._notice_timer: Optional[asyncio.TimerHandle] = None

    # ---------- Dashboard state ----------

    def select_tab(self, tab: TimeOfDay) -> None:
        self.active_tab = TimeOfDay(tab)

    @property
    def tab_items(self) -> List[MenuItem]:
        return [meal for meal in self.controller.items if meal.time_of_day == self.active_tab]

    def find(self, meal_id: str) -> Optional[MenuItem]:
        return next((meal for meal in self.controller.items if meal.id == meal_id), None)

    def open_form(self) -> None:
        self.form_open = True
        self.editing = None
        self.form = {}
        self.form_errors = {}

    def start_edit(self, item: MenuItem) -> Dict[str, Any]:
        """Open the form pre-filled from an existing item"""
        self.editing = item
        self.form_open = True
        self.form_errors = {}
        self.form = {
            "name": item.name,
            "description": item.description,
            "price": item.price,
            "image": item.image,
            "category": item.category,
            "tags": list(item.tags),
            "preparationTime": item.preparation_time,
        }
        return dict(self.form)

    def cancel(self) -> None:
        self.form_open = False
        self.editing = None
        self.form = {}
        self.form_errors = {}
        self.error = None

    def _close_form(self) -> None:
        self.form_open = False
        self.editing = None
        self.form = {}
        self.form_errors = {}

    # ---------- Success notice ----------

    def _flash(self, message: str) -> None:
        self.success_message = message
        if self._notice_timer is not None:
            self._notice_timer.cancel()
        loop = asyncio.get_running_loop()
        self._notice_timer = loop.call_later(self.notice_seconds, self._clear_notice)

    def _clear_notice(self) -> None:
        self.success_message = None
        self._notice_timer = None

    # ---------- Mutations ----------

    async def submit(self, form: Mapping[str, Any]) -> bool:
        """Create, or update the item under edit"""
        if self.editing is not None:
            return await self.update(self.editing.id, form)
        return await self.create(form)

    async def create(self, form: Mapping[str, Any]) -> bool:
        return await self._save(None, form)

    async def update(self, meal_id: str, form: Mapping[str, Any]) -> bool:
        return await self._save(meal_id, form)

    async def _save(self, meal_id: Optional[str], form: Mapping[str, Any]) -> bool:
        self.error = None
        self.success_message = None
        self.form = dict(form)

        try:
            payload = validate_meal_form(form, self.active_tab)
        except MealValidationError as e:
            self.form_errors = e.errors
            return False
        self.form_errors = {}

        try:
            if meal_id is not None:
                await self.client.update_meal(meal_id, payload.to_wire())
                message = "Meal updated successfully!"
            else:
                await self.client.create_meal(payload.to_wire())
                message = "Meal added successfully!"
        except ApiError as e:
            self.error = e.message or "Failed to save meal"
            log.error("Error saving meal: %s", e.message)
            return False

        self._flash(message)
        await self.controller.load()
        self._close_form()
        return True

    async def delete(self, meal_id: str, confirm: Callable[[str], bool]) -> bool:
        if not confirm(DELETE_CONFIRMATION):
            return False

        self.error = None
        try:
            await self.client.delete_meal(meal_id)
        except ApiError as e:
            self.error = e.message or "Failed to delete meal"
            log.error("Error deleting meal: %s", e.message)
            return False

        self._flash("Meal deleted successfully!")
        await self.controller.load()
        return True

    async def toggle_availability(self, item: MenuItem) -> bool:
        self.error = None
        payload = item.to_wire()
        payload["isAvailable"] = not item.is_available

        try:
            await self.client.update_meal(item.id, payload)
        except ApiError as e:
            self.error = e.message or "Failed to update availability"
            log.error("Error toggling availability: %s", e.message)
            return False

        await self.controller.load()
        return True
