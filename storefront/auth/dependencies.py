# auth/dependencies.py
from typing import Optional

import httpx
from fastapi import Depends, Request

from storefront.auth.session import Session
from storefront.core.constants import Role
from storefront.schemas.user import SessionUser
from storefront.services.api_client import ApiClient


class AuthorizationError(Exception):
    """Missing or wrong-role session; the app turns this into a redirect"""

    def __init__(self, redirect_to: str, notice: Optional[str] = None):
        super().__init__(notice or f"Redirect to {redirect_to}")
        self.redirect_to = redirect_to
        self.notice = notice


def get_session(request: Request) -> Session:
    return Session(request.session)


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    # Overridden in tests with an httpx.MockTransport
    return None


def get_api_client(
    session: Session = Depends(get_session),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> ApiClient:
    return ApiClient(session, transport=transport)


async def get_current_user(session: Session = Depends(get_session)) -> SessionUser:
    user = session.user
    if not user:
        raise AuthorizationError("/signin")
    return user


async def get_current_owner(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if user.role != Role.owner:
        raise AuthorizationError("/", notice="Access denied. Owner account required.")
    return user
