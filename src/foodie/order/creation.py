"""PlaceOrder: turn a validated checkout into a persisted Order.

All referenced menu items are resolved in one query; if any is missing the
whole placement is refused and nothing is written. The order and its lines
are committed together in the handler's unit of work.
"""

import json

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from foodie.domain import foodie, logger
from foodie.menu.queries import find_menu_items
from foodie.order.order import Order


@foodie.command(part_of="Order")
class PlaceOrder:
    customer_name = String(required=True, max_length=100)
    customer_phone = String(required=True, max_length=15)
    customer_address = Text(required=True)
    items = Text(required=True)  # JSON: list of {"menu_item_id", "quantity"}


@foodie.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        requested_ids = [line["menu_item_id"] for line in items_data]
        menu_items = find_menu_items(requested_ids)

        missing = [menu_item_id for menu_item_id in dict.fromkeys(requested_ids) if menu_item_id not in menu_items]
        if missing:
            raise InvalidOperationError(
                "One or more menu items not found",
                extra_info={"missingItems": missing},
            )

        order = Order.place(
            customer_name=command.customer_name,
            customer_phone=command.customer_phone,
            customer_address=command.customer_address,
            lines=[(menu_items[line["menu_item_id"]], line["quantity"]) for line in items_data],
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=order.id,
            line_count=len(order.lines),
            total_amount=str(order.total_amount),
        )
        return str(order.id)
