from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from burger_mcp.api_client import BurgerApiClient
from burger_mcp.bridge import ToolResult, create_tool_response
from burger_mcp.server import McpServer


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BurgerIdArgs(_ToolArgs):
    id: str = Field(description="ID of the burger to retrieve")


class ToppingsArgs(_ToolArgs):
    category: str | None = Field(
        default=None, description="Category of toppings to filter by (can be empty)"
    )


class ToppingIdArgs(_ToolArgs):
    id: str = Field(description="ID of the topping to retrieve")


class OrdersFilterArgs(_ToolArgs):
    user_id: str | None = Field(default=None, alias="userId", description="Filter orders by user ID")
    status: str | None = Field(
        default=None, description="Filter by order status. Comma-separated list allowed."
    )
    last: str | None = Field(
        default=None,
        description="Filter orders created in the last X minutes or hours (e.g. '60m', '2h')",
    )


class OrderIdArgs(_ToolArgs):
    id: str = Field(description="ID of the order to retrieve")


class OrderItem(_ToolArgs):
    burger_id: str = Field(alias="burgerId", description="ID of the burger")
    quantity: int = Field(ge=1, description="Quantity of the burger")
    extra_topping_ids: list[str] = Field(
        alias="extraToppingIds", description="List of extra topping IDs"
    )


class PlaceOrderArgs(_ToolArgs):
    user_id: str = Field(alias="userId", description="ID of the user placing the order")
    nickname: str | None = Field(
        default=None,
        description="Optional nickname for the order (only first 10 chars displayed)",
    )
    items: list[OrderItem] = Field(min_length=1, description="List of items in the order")


class CancelOrderArgs(_ToolArgs):
    id: str = Field(description="ID of the order to cancel")
    user_id: str = Field(alias="userId", description="ID of the user that placed the order")


def _segment(value: str) -> str:
    return quote(value, safe="")


def register_burger_tools(server: McpServer, api: BurgerApiClient) -> None:
    """Register the menu and order tools, all backed by the burger API."""

    async def get_burgers() -> ToolResult:
        return await create_tool_response(lambda: api.fetch("/api/burgers"))

    async def get_burger_by_id(args: BurgerIdArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch(f"/api/burgers/{_segment(args.id)}")
        )

    async def get_toppings(args: ToppingsArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch("/api/toppings", params={"category": args.category or ""})
        )

    async def get_topping_by_id(args: ToppingIdArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch(f"/api/toppings/{_segment(args.id)}")
        )

    async def get_topping_categories() -> ToolResult:
        return await create_tool_response(lambda: api.fetch("/api/toppings/categories"))

    async def get_orders(args: OrdersFilterArgs) -> ToolResult:
        params = {}
        if args.user_id:
            params["userId"] = args.user_id
        if args.status:
            params["status"] = args.status
        if args.last:
            params["last"] = args.last
        return await create_tool_response(
            lambda: api.fetch("/api/orders", params=params or None)
        )

    async def get_order_by_id(args: OrderIdArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch(f"/api/orders/{_segment(args.id)}")
        )

    async def place_order(args: PlaceOrderArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch(
                "/api/orders",
                method="POST",
                json=args.model_dump(by_alias=True, exclude_none=True),
            )
        )

    async def delete_order_by_id(args: CancelOrderArgs) -> ToolResult:
        return await create_tool_response(
            lambda: api.fetch(
                f"/api/orders/{_segment(args.id)}",
                method="DELETE",
                params={"userId": args.user_id},
            )
        )

    server.register_tool(
        "get_burgers", "Get a list of all burgers in the menu", get_burgers
    )
    server.register_tool(
        "get_burger_by_id", "Get a specific burger by its ID", get_burger_by_id, BurgerIdArgs
    )
    server.register_tool(
        "get_toppings", "Get a list of all toppings in the menu", get_toppings, ToppingsArgs
    )
    server.register_tool(
        "get_topping_by_id", "Get a specific topping by its ID", get_topping_by_id, ToppingIdArgs
    )
    server.register_tool(
        "get_topping_categories", "Get a list of all topping categories", get_topping_categories
    )
    server.register_tool(
        "get_orders", "Get a list of orders in the system", get_orders, OrdersFilterArgs
    )
    server.register_tool(
        "get_order_by_id", "Get a specific order by its ID", get_order_by_id, OrderIdArgs
    )
    server.register_tool(
        "place_order",
        "Place a new order with burgers (requires userId)",
        place_order,
        PlaceOrderArgs,
    )
    server.register_tool(
        "delete_order_by_id",
        'Cancel an order if it has not yet been started (status must be "pending", requires userId)',
        delete_order_by_id,
        CancelOrderArgs,
    )
