from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional

from storefront.core.constants import Role
from storefront.schemas.base import CamelModel


class SessionUser(BaseModel):
    """User record kept in the session after login"""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: Optional[str] = None
    role: Role = Role.customer


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str
    phone: Optional[str] = None
    role: Role = Role.customer
    store_name: Optional[str] = None


class ContactForm(BaseModel):
    name: str
    email: str
    subject: Optional[str] = None
    message: str
