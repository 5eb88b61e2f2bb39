"""FastAPI routes for the menu and the order lifecycle.

Each route validates identifiers before touching the store, translates the
request schema into a domain command, processes it synchronously and wraps the
stored result in the success envelope. Errors propagate to the handlers in
``foodie.api.errors``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from foodie.api.schemas import (
    MenuItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    SuccessResponse,
    UpdateOrderStatusRequest,
)
from foodie.menu.queries import find_menu_items, get_menu_item, list_menu_items
from foodie.order.progress import SimulateOrderProgress, UpdateOrderStatus
from foodie.order.queries import get_order, list_orders
from foodie.shared.identifier import parse_identifier

menu_router = APIRouter(prefix="/api/menu", tags=["menu"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def valid_order_id(order_id: str) -> str:
    """Path dependency: resolved before the body, so a bad id is reported first."""
    return parse_identifier(order_id, message="Invalid order ID format")


def valid_menu_item_id(menu_item_id: str) -> str:
    return parse_identifier(menu_item_id, message="Invalid menu item ID format")


OrderId = Annotated[str, Depends(valid_order_id)]
MenuItemId = Annotated[str, Depends(valid_menu_item_id)]


def _order_responses(orders) -> list[OrderResponse]:
    menu_items = find_menu_items(line.menu_item_id for order in orders for line in order.lines)
    return [OrderResponse.from_order(order, menu_items) for order in orders]


def _order_response(order_id: str) -> SuccessResponse[OrderResponse]:
    (response,) = _order_responses([get_order(order_id)])
    return SuccessResponse[OrderResponse](data=response)


# --- Menu endpoints ---


@menu_router.get("", response_model=SuccessResponse[list[MenuItemResponse]])
async def list_menu(category: str | None = None):
    """List the menu, optionally one category only."""
    items = list_menu_items(category=category)
    return SuccessResponse[list[MenuItemResponse]](data=[MenuItemResponse.from_menu_item(item) for item in items])


@menu_router.get("/{menu_item_id}", response_model=SuccessResponse[MenuItemResponse])
async def fetch_menu_item(menu_item_id: MenuItemId):
    item = get_menu_item(menu_item_id)
    return SuccessResponse[MenuItemResponse](data=MenuItemResponse.from_menu_item(item))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=SuccessResponse[OrderResponse])
async def create_order(body: PlaceOrderRequest):
    """Place an order; prices are taken from the menu at this moment."""
    order_id = current_domain.process(body.to_command(), asynchronous=False)
    return _order_response(order_id)


@order_router.get("", response_model=SuccessResponse[list[OrderResponse]])
async def fetch_orders():
    """All orders, newest first."""
    return SuccessResponse[list[OrderResponse]](data=_order_responses(list_orders()))


@order_router.get("/{order_id}", response_model=SuccessResponse[OrderResponse])
async def fetch_order(order_id: OrderId):
    return _order_response(order_id)


@order_router.patch("/{order_id}/status", response_model=SuccessResponse[OrderResponse])
async def change_order_status(order_id: OrderId, body: UpdateOrderStatusRequest):
    """Move an order to a later status."""
    command = UpdateOrderStatus(order_id=order_id, status=body.status.value)
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


@order_router.post("/{order_id}/simulate", response_model=SuccessResponse[OrderResponse])
async def simulate_progress(order_id: OrderId):
    """Advance one status step; a delivered order is returned unchanged."""
    current_domain.process(SimulateOrderProgress(order_id=order_id), asynchronous=False)
    return _order_response(order_id)
