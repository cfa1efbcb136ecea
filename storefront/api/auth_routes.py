from fastapi import APIRouter, Depends, HTTPException

from storefront.auth.dependencies import get_api_client, get_current_user
from storefront.schemas.user import LoginRequest, RegisterRequest, SessionUser
from storefront.services.api_client import ApiClient, ApiError

router = APIRouter()


def _raise(e: ApiError):
    raise HTTPException(status_code=e.status_code or 400, detail=e.message)


@router.post("/register")
async def register(body: RegisterRequest, client: ApiClient = Depends(get_api_client)):
    """Create an account on the backend and start a session from the response"""
    try:
        await client.register(body.model_dump(mode="json", by_alias=True, exclude_none=True))
    except ApiError as e:
        _raise(e)
    return {"message": "Registration successful", "user": client.session.user}


@router.post("/login")
async def login(body: LoginRequest, client: ApiClient = Depends(get_api_client)):
    try:
        await client.login(body.model_dump())
    except ApiError as e:
        _raise(e)
    return {"message": "Login successful", "user": client.session.user}


@router.post("/logout")
async def logout(client: ApiClient = Depends(get_api_client)):
    """Always ends the local session, even if the backend call fails"""
    await client.logout()
    return {"message": "Logged out"}


@router.get("/me")
async def current_user(
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_user),
):
    try:
        return await client.get_current_user()
    except ApiError as e:
        _raise(e)
