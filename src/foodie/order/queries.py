"""Read side of orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from foodie.order.order import Order


def get_order(order_id: str) -> Order:
    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return order


def list_orders() -> list[Order]:
    """Every order with its lines, newest first."""
    return current_domain.repository_for(Order)._dao.query.order_by(["-created_at", "id"]).all().items
