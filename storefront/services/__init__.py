from .api_client import ApiClient, ApiError
from .list_controller import ListViewController, ListStatus
from .meal_workflow import MealWorkflow, MealValidationError
from .view_pipeline import MenuQuery, StoreQuery, derive_view

__all__ = [
    "ApiClient",
    "ApiError",
    "ListViewController",
    "ListStatus",
    "MealWorkflow",
    "MealValidationError",
    "MenuQuery",
    "StoreQuery",
    "derive_view",
]
