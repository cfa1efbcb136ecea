from .base import CamelModel

from .meal import (
    MenuItem,
    MealPayload,
)

from .store import (
    Address,
    Store,
)

from .user import (
    SessionUser,
    LoginRequest,
    RegisterRequest,
    ContactForm,
)
