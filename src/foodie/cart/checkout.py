"""Checkout: submit the cart as an order.

The request is checked against the same ``PlaceOrderRequest`` contract the
API enforces, so obvious mistakes are reported without a round trip. The
server still validates everything again.
"""

import pydantic
from protean.exceptions import ValidationError

from foodie.api.schemas import PlaceOrderRequest, field_errors
from foodie.utils.logging import get_logger

logger = get_logger(__name__)


def build_order_request(cart, customer_name, customer_phone, customer_address) -> PlaceOrderRequest:
    if cart.is_empty():
        raise ValidationError({"items": ["Your cart is empty"]})

    try:
        return PlaceOrderRequest.model_validate(
            {
                "customerName": customer_name,
                "customerPhone": customer_phone,
                "customerAddress": customer_address,
                "items": cart.to_order_lines(),
            }
        )
    except pydantic.ValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from exc


def checkout(cart, client, customer_name, customer_phone, customer_address) -> dict:
    """Place the order and empty the cart. The cart is left intact on any failure."""
    request = build_order_request(cart, customer_name, customer_phone, customer_address)
    order = client.create_order(request)
    cart.clear()
    logger.info("checkout_completed", order_id=order["id"], total_amount=order["totalAmount"])
    return order
