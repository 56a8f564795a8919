"""In-memory stand-in for the burger REST API, served through httpx.MockTransport."""

from __future__ import annotations

import json

import httpx

BURGERS = [
    {"id": "1", "name": "Classic Cheeseburger", "price": 9.5},
    {"id": "2", "name": "Veggie Deluxe", "price": 10.0},
]
TOPPINGS = [
    {"id": "t1", "name": "Bacon", "category": "meat"},
    {"id": "t2", "name": "Avocado", "category": "vegetable"},
]


class FakeBurgerApi:
    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.orders = {
            "o-pending": {"id": "o-pending", "userId": "user-1", "status": "pending", "items": []},
            "o-ready": {"id": "o-ready", "userId": "user-1", "status": "ready", "items": []},
        }

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if path == "/api/burgers":
            return httpx.Response(200, json=BURGERS)
        if path.startswith("/api/burgers/"):
            burger_id = path.rsplit("/", 1)[1]
            for burger in BURGERS:
                if burger["id"] == burger_id:
                    return httpx.Response(200, json=burger)
            return httpx.Response(404, json={"error": "Burger not found"})
        if path == "/api/toppings/categories":
            return httpx.Response(200, json=sorted({t["category"] for t in TOPPINGS}))
        if path == "/api/toppings":
            category = request.url.params.get("category")
            return httpx.Response(
                200, json=[t for t in TOPPINGS if not category or t["category"] == category]
            )
        if path == "/api/orders" and method == "POST":
            order = json.loads(request.content)
            order.update(id="o-new", status="pending")
            return httpx.Response(201, json=order)
        if path == "/api/orders":
            return httpx.Response(200, json=list(self.orders.values()))
        if path.startswith("/api/orders/"):
            order = self.orders.get(path.rsplit("/", 1)[1])
            if order is None:
                return httpx.Response(404, json={"error": "Order not found"})
            if method == "DELETE":
                if order["status"] != "pending":
                    return httpx.Response(
                        409, json={"error": "Order cannot be cancelled as it is not pending"}
                    )
                del self.orders[order["id"]]
                return httpx.Response(204)
            return httpx.Response(200, json=order)
        return httpx.Response(404)
