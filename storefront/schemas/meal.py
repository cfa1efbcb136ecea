from pydantic import ConfigDict, Field
from typing import Any, Dict, List, Optional

from storefront.core.constants import TimeOfDay
from storefront.schemas.base import CamelModel


# ---------- Menu Item (as served by the backend) ----------
class MenuItem(CamelModel):
    # Unknown backend fields are kept so the full record can be sent back
    model_config = ConfigDict(extra="allow")

    id: str = Field(alias="_id")
    name: str
    description: Optional[str] = ""
    price: float = Field(ge=0)
    category: str
    time_of_day: TimeOfDay
    tags: List[str] = []
    rating: Optional[float] = Field(default=0, ge=0)
    review_count: Optional[int] = Field(default=0, ge=0)
    preparation_time: Optional[int] = Field(default=None, ge=1)
    is_available: bool = True
    image: Optional[str] = None
    store_name: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------- Meal Payload (create / update body) ----------
class MealPayload(CamelModel):
    name: str
    description: str
    price: float = Field(ge=0)
    image: str
    category: str
    time_of_day: TimeOfDay
    tags: List[str] = []
    preparation_time: int = Field(ge=1)
    is_available: bool = True

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
