import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.auth.dependencies import get_transport
from storefront.auth.session import Session
from storefront.main import app
from storefront.services.api_client import ApiClient

BASE_URL = "http://backend.test/api"

OWNER = {"_id": "u-owner", "name": "Asha", "email": "owner@breakfast4u.test", "role": "owner"}
CUSTOMER = {"_id": "u-cust", "name": "Ravi", "email": "ravi@breakfast4u.test", "role": "customer"}


def make_meal(meal_id: str, **overrides) -> Dict[str, Any]:
    meal = {
        "_id": meal_id,
        "name": f"Meal {meal_id}",
        "description": "Freshly made",
        "price": 50,
        "category": "Breakfast",
        "timeOfDay": "morning",
        "tags": [],
        "rating": 4.0,
        "reviewCount": 10,
        "preparationTime": 15,
        "isAvailable": True,
        "image": f"https://img.test/{meal_id}.jpg",
    }
    meal.update(overrides)
    return meal


def make_store(store_id: str, **overrides) -> Dict[str, Any]:
    store = {
        "_id": store_id,
        "name": f"Store {store_id}",
        "description": "Neighbourhood breakfast counter",
        "address": {"street": "Main Road", "area": "Takari", "city": "Sangli"},
        "phone": "+91 90000 00000",
        "specialties": ["Poha"],
        "features": ["Takeaway"],
        "rating": 4.2,
        "isActive": True,
        "images": [],
    }
    store.update(overrides)
    return store


class FakeBackend:
    """In-memory stand-in for the Breakfast4U REST API"""

    def __init__(self):
        self.meals: List[Dict[str, Any]] = [
            make_meal("m1", name="Masala Dosa", category="South Indian", rating=4.5, reviewCount=120, price=60),
            make_meal("m2", name="Pancake Stack", category="Pancakes", rating=None, reviewCount=None, price=90),
            make_meal("m3", name="Vada Pav", category="Street Food", timeOfDay="evening", rating=3.0, price=25),
        ]
        self.stores: List[Dict[str, Any]] = [
            make_store("s1", name="Dosa Corner", specialties=["Dosa", "Idli"], rating=4.8),
            make_store("s2", name="Pav Point", specialties=["Vada Pav"], isActive=False,
                       address={"street": "Station Road", "area": "Islampur"}),
            make_store("s3", name="Morning Bowl", specialties=["Poha", "Upma"], rating=3.9),
        ]
        self.requests: List[httpx.Request] = []
        self.overrides: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self._next_id = 100

    def fail(self, method: str, path: str, status: int = 500, body: Any = None):
        self.overrides[(method, path)] = (status, body if body is not None else {"message": "Internal server error"})

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (path is None or self.path_of(r) == path)
        ]

    @staticmethod
    def path_of(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/api"):] if path.startswith("/api") else path

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, self.path_of(request)
        body = json.loads(request.content) if request.content else None

        if (method, path) in self.overrides:
            status, payload = self.overrides[(method, path)]
            if isinstance(payload, str):
                return httpx.Response(status, text=payload)
            return httpx.Response(status, json=payload)

        if path == "/auth/login" and method == "POST":
            user = OWNER if body["email"] == OWNER["email"] else CUSTOMER
            return httpx.Response(200, json={"success": True, "token": f"token-{user['_id']}", "user": user})
        if path == "/auth/register" and method == "POST":
            user = {"_id": "u-new", "name": body["name"], "email": body["email"], "role": body.get("role", "customer")}
            return httpx.Response(201, json={"success": True, "data": {"token": "token-new", "user": user}})
        if path == "/auth/logout" and method == "POST":
            return httpx.Response(200, json={"success": True, "message": "Logged out"})
        if path == "/auth/me" and method == "GET":
            return httpx.Response(200, json={"success": True, "data": OWNER})
        if path == "/contact" and method == "POST":
            return httpx.Response(201, json={"success": True, "message": "Message received"})
        if path == "/stores" and method == "GET":
            return httpx.Response(200, json={"success": True, "data": self.stores})

        if path == "/meals":
            if method == "GET":
                return httpx.Response(200, json={"success": True, "data": self.meals})
            if method == "POST":
                self._next_id += 1
                meal = dict(body, _id=f"m{self._next_id}")
                self.meals.append(meal)
                return httpx.Response(201, json={"success": True, "data": meal})

        if path.startswith("/meals/"):
            meal_id = path.rsplit("/", 1)[1]
            index = next((i for i, m in enumerate(self.meals) if m["_id"] == meal_id), None)
            if index is None:
                return httpx.Response(404, json={"message": "Meal not found"})
            if method == "PUT":
                self.meals[index] = dict(self.meals[index], **body)
                return httpx.Response(200, json={"success": True, "data": self.meals[index]})
            if method == "DELETE":
                self.meals.pop(index)
                return httpx.Response(200, json={"success": True, "message": "Meal deleted"})

        return httpx.Response(404, json={"message": f"No route for {method} {path}"})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session() -> Session:
    return Session({})


@pytest.fixture
def owner_session() -> Session:
    session = Session({})
    session.start("token-u-owner", OWNER)
    return session


@pytest.fixture
def api(backend, session) -> ApiClient:
    return ApiClient(session, base_url=BASE_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def owner_api(backend, owner_session) -> ApiClient:
    return ApiClient(owner_session, base_url=BASE_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def web(backend):
    app.dependency_overrides[get_transport] = lambda: httpx.MockTransport(backend)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def owner_web(web):
    response = web.post("/auth/login", json={"email": OWNER["email"], "password": "secret"})
    assert response.status_code == 200
    return web
