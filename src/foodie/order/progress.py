"""Order status updates: explicit transitions and the demo auto-advance.

Both handlers load the order, apply the transition on the aggregate and save
it. A save that loses a race raises ``ExpectedVersionError``; the handler
wrapper then replays the command in a fresh unit of work, so the transition is
always re-validated against the status that is really stored. The number of
replays comes from ``[server.version_retry]`` in ``domain.toml``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from foodie.domain import foodie, logger
from foodie.order.order import Order


@foodie.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=32)


@foodie.command(part_of="Order")
class SimulateOrderProgress:
    order_id = Identifier(required=True)


def _load_order(order_id: str) -> Order:
    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return order


@foodie.command_handler(part_of=Order)
class OrderProgressHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = _load_order(command.order_id)
        previous_status = order.status
        order.transition_to(command.status)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_status_changed",
            order_id=command.order_id,
            previous_status=previous_status,
            new_status=order.status,
        )
        return str(order.id)

    @handle(SimulateOrderProgress)
    def simulate_order_progress(self, command):
        """Advance one step; an already delivered order is left unchanged."""
        order = _load_order(command.order_id)
        previous_status = order.status
        if not order.advance():
            logger.info("order_advance_skipped", order_id=command.order_id, status=order.status)
            return str(order.id)

        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_status_changed",
            order_id=command.order_id,
            previous_status=previous_status,
            new_status=order.status,
        )
        return str(order.id)
