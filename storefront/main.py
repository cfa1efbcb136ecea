### storefront/main.py
import logging
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from storefront.api import auth_routes, contact_routes, menu_routes, owner_routes, store_routes
from storefront.auth.dependencies import AuthorizationError
from storefront.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


# Create the FastAPI app
app = FastAPI(
    title="Breakfast4U Storefront",
    version="1.0.0",
    description="Menu, partner stores and the owner dashboard on top of the Breakfast4U API.",
)

# ✅ Session middleware (holds the bearer token and user between requests)
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)


# ✅ Missing/wrong-role sessions redirect instead of erroring
@app.exception_handler(AuthorizationError)
async def authorization_redirect(request: Request, exc: AuthorizationError):
    url = exc.redirect_to
    if exc.notice:
        url = f"{url}?{urlencode({'notice': exc.notice})}"
    log.info("redirecting %s to %s", request.url.path, url)
    return RedirectResponse(url=url, status_code=302)


app.include_router(menu_routes.router, prefix="/menu", tags=["Menu"])
app.include_router(store_routes.router, prefix="/stores", tags=["Stores"])
app.include_router(owner_routes.router, prefix="/owner/meals", tags=["Owner Dashboard"])
app.include_router(auth_routes.router, prefix="/auth", tags=["Auth"])
app.include_router(contact_routes.router, prefix="/contact", tags=["Contact"])


@app.get("/")
async def landing(request: Request, notice: str = None):
    return {
        "name": "Breakfast4U",
        "notice": notice,
        "user": request.session.get("user"),
        "pages": {"menu": "/menu", "stores": "/stores", "dashboard": "/owner/meals"},
    }


@app.get("/signin")
async def signin(notice: str = None):
    """Where anonymous visitors to owner pages are sent"""
    return {
        "notice": notice,
        "login": {"method": "POST", "url": "/auth/login", "fields": ["email", "password"]},
        "register": {"method": "POST", "url": "/auth/register"},
    }
