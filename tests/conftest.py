"""Shared test fixtures and an in-memory stand-in for the Directus API."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from directus_setup.client.http import DirectusClient
from directus_setup.core.config import DirectusConfig

BASE_URL = "http://directus.test"
ACCESS_KEY = "static-access-token"


def make_config(**overrides: Any) -> DirectusConfig:
    defaults: dict[str, Any] = {"url": BASE_URL, "setup_token": ACCESS_KEY, "api_prefix": "/api"}
    defaults.update(overrides)
    return DirectusConfig(**defaults)


class FakeDirectus:
    """Minimal stateful Directus backend served through httpx.MockTransport.

    Tracks logins, created/deleted items in call order, and can be told to
    fail specific deletes or collection creations.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Any]] = {}
        self.items: dict[str, list[dict[str, Any]]] = {}
        self.next_id: dict[str, int] = {}
        self.logins = 0
        self.calls: list[tuple[str, str]] = []
        self.deleted: list[tuple[str, Any]] = []
        self.failing_deletes: set[tuple[str, Any]] = set()
        self.failing_creates: set[str] = set()
        self.create_failure_status = 500
        self.default_page = 100
        self.reject_login = False

    # -- state helpers -------------------------------------------------------

    def add_collection(self, name: str, fields: list[str] | None = None) -> None:
        self.collections[name] = {
            "collection": name,
            "fields": [{"field": f, "type": "string"} for f in (fields or ["id"])],
        }
        self.items.setdefault(name, [])
        self.next_id.setdefault(name, 1)

    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        stored = {"id": self.next_id[collection], **record}
        self.next_id[collection] += 1
        self.items[collection].append(stored)
        return stored

    def calls_to(self, method: str, prefix: str) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] == method and c[1].startswith(prefix)]

    # -- transport -----------------------------------------------------------

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        self.calls.append((method, path))

        if path == "/auth/login":
            return self._login(request)
        if request.headers.get("Authorization", "") != f"Bearer jwt-{self.logins}":
            return httpx.Response(401, json={"errors": [{"message": "Invalid token"}]})

        parts = path.removeprefix("/api/").split("/")
        resource = parts[0]
        if resource == "server":
            return httpx.Response(200, json={"data": {"directus": {"version": "10.8.0"}}})
        if resource == "collections":
            return self._collections(method, request)
        if resource == "fields":
            return self._fields(parts[1] if len(parts) > 1 else None)
        if resource == "items":
            return self._items(method, parts[1], parts[2] if len(parts) > 2 else None, request)
        return httpx.Response(404, json={"errors": [{"message": "Route not found"}]})

    def _login(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if self.reject_login or body.get("access_token") != ACCESS_KEY:
            return httpx.Response(401, json={"errors": [{"message": "Invalid credentials"}]})
        self.logins += 1
        return httpx.Response(
            200, json={"data": {"access_token": f"jwt-{self.logins}", "expires": 900000}}
        )

    def _collections(self, method: str, request: httpx.Request) -> httpx.Response:
        if method == "GET":
            listed = [{"collection": n} for n in self.collections]
            listed.append({"collection": "directus_users"})
            return httpx.Response(200, json={"data": listed})
        if method == "PATCH":
            name = request.url.path.rsplit("/", 1)[-1]
            self.collections[name].update(json.loads(request.content))
            return httpx.Response(200, json={"data": self.collections[name]})
        body = json.loads(request.content)
        name = body["collection"]
        if name in self.failing_creates:
            return httpx.Response(
                self.create_failure_status, json={"errors": [{"message": "boom"}]}
            )
        if name in self.collections:
            return httpx.Response(400, json={"errors": [{"message": "already exists"}]})
        self.add_collection(name, [f["field"] for f in body.get("fields", [])])
        return httpx.Response(200, json={"data": {"collection": name}})

    def _fields(self, collection: str | None) -> httpx.Response:
        if collection is None:
            fields = [
                {**f, "collection": name}
                for name, c in self.collections.items()
                for f in c["fields"]
            ]
            return httpx.Response(200, json={"data": fields})
        if collection not in self.collections:
            return httpx.Response(403, json={"errors": [{"message": "Forbidden"}]})
        return httpx.Response(200, json={"data": self.collections[collection]["fields"]})

    def _items(
        self, method: str, collection: str, item_id: str | None, request: httpx.Request
    ) -> httpx.Response:
        if collection not in self.collections:
            return httpx.Response(403, json={"errors": [{"message": "Forbidden"}]})
        rows = self.items[collection]

        if method == "GET":
            # Directus serves QUERY_LIMIT_DEFAULT rows unless told otherwise; -1 means all
            limit = int(request.url.params.get("limit", self.default_page))
            data = rows if limit < 0 else rows[:limit]
            return httpx.Response(200, json={"data": list(data)})
        if method == "POST":
            body = json.loads(request.content)
            if isinstance(body, list):
                return httpx.Response(200, json={"data": [self.insert(collection, r) for r in body]})
            return httpx.Response(200, json={"data": self.insert(collection, body)})

        match = next((r for r in rows if str(r["id"]) == item_id), None)
        if match is None:
            return httpx.Response(404, json={"errors": [{"message": "Not found"}]})
        if method == "PATCH":
            match.update(json.loads(request.content))
            return httpx.Response(200, json={"data": match})
        if method == "DELETE":
            if (collection, match["id"]) in self.failing_deletes:
                return httpx.Response(500, json={"errors": [{"message": "delete failed"}]})
            rows.remove(match)
            self.deleted.append((collection, match["id"]))
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def fake() -> FakeDirectus:
    return FakeDirectus()


@pytest_asyncio.fixture
async def client(fake: FakeDirectus):
    c = DirectusClient(make_config(), transport=fake.transport())
    try:
        yield c
    finally:
        await c.close()
