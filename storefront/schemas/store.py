from pydantic import ConfigDict, Field
from typing import List, Optional

from storefront.schemas.base import CamelModel


class Address(CamelModel):
    street: Optional[str] = None
    area: Optional[str] = None
    city: Optional[str] = None


class Store(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(alias="_id")
    name: str
    description: Optional[str] = ""
    address: Optional[Address] = None
    phone: Optional[str] = None
    specialties: List[str] = []
    features: List[str] = []
    rating: Optional[float] = Field(default=0, ge=0)
    is_active: bool = True
    images: List[str] = []
