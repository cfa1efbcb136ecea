# auth/session.py
import logging
from typing import Any, MutableMapping, Optional

from pydantic import ValidationError

from storefront.core.constants import Role
from storefront.schemas.user import SessionUser

log = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class Session:
    """
    Bearer token and user record held in a key-value store.

    In the web app the store is the signed cookie session (`request.session`);
    scripts and tests pass a plain dict. Written only by `start` and `clear`.
    """

    def __init__(self, store: Optional[MutableMapping[str, Any]] = None):
        self.store = store if store is not None else {}

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY) or None

    @property
    def user(self) -> Optional[SessionUser]:
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            return SessionUser.model_validate(raw)
        except ValidationError:
            log.warning("Discarding unreadable session user record")
            return None

    @property
    def role(self) -> Optional[Role]:
        user = self.user
        return user.role if user else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_owner(self) -> bool:
        return self.role == Role.owner

    def start(self, token: Optional[str], user: Any) -> SessionUser:
        """Begin a session from a login/registration response"""
        session_user = SessionUser.model_validate(user)
        if token:
            self.store[TOKEN_KEY] = token
        else:
            self.store.pop(TOKEN_KEY, None)
        self.store[USER_KEY] = session_user.model_dump(mode="json")
        log.info("session started: user=%s role=%s", session_user.id, session_user.role.value)
        return session_user

    def clear(self) -> None:
        self.store.pop(TOKEN_KEY, None)
        self.store.pop(USER_KEY, None)
