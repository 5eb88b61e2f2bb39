"""Order aggregate: the core of the food ordering domain.

An Order is written once with all of its lines and afterwards only changes
status. Each line copies the menu item's price at placement time, so editing
the catalog never rewrites history.

Concurrent writers are detected through the aggregate version: a save whose
version no longer matches the stored row raises ``ExpectedVersionError``.
"""

from datetime import UTC, datetime

from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Decimal, HasMany, Identifier, Integer, String, Text

from foodie.domain import foodie
from foodie.order.status import OrderStatus, coerce_status, is_valid_transition, next_status
from foodie.shared.money import line_total, to_money


@foodie.entity(part_of="Order", limit=None)
class OrderLine:
    """One menu item on an order, with the unit price captured at placement."""

    menu_item_id = Identifier(required=True)
    position = Integer(default=0, min_value=0)
    quantity = Integer(required=True, min_value=1)
    unit_price = Decimal(required=True, min_value=0, precision=10, scale=2)

    @property
    def subtotal(self):
        return line_total(self.unit_price, self.quantity)


@foodie.aggregate(limit=None)
class Order:
    customer_name = String(required=True, max_length=100)
    customer_phone = String(required=True, max_length=15)
    customer_address = Text(required=True)
    status = String(max_length=32, choices=OrderStatus, default=OrderStatus.ORDER_RECEIVED.value)
    total_amount = Decimal(required=True, min_value=0, precision=10, scale=2)
    lines = HasMany(OrderLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_name, customer_phone, customer_address, lines):
        """Build a new order in ORDER_RECEIVED.

        Args:
            lines: Sequence of ``(MenuItem, quantity)`` pairs. Each line takes
                the menu item's current price as its unit price.
        """
        if not lines:
            raise ValidationError({"items": ["Order must have at least one item"]})

        order_lines = []
        total = to_money(0)
        for position, (menu_item, quantity) in enumerate(lines):
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise ValidationError({"items": ["Quantity must be at least 1"]})

            line = OrderLine(
                menu_item_id=str(menu_item.id),
                position=position,
                quantity=quantity,
                unit_price=to_money(menu_item.price),
            )
            order_lines.append(line)
            total += line.subtotal

        now = datetime.now(UTC)
        order = cls(
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_address=customer_address,
            status=OrderStatus.ORDER_RECEIVED.value,
            total_amount=to_money(total),
            created_at=now,
            updated_at=now,
        )
        order.add_lines(order_lines)
        return order

    @property
    def ordered_lines(self) -> list[OrderLine]:
        """Lines in the order they were placed; storage does not keep that order."""
        return sorted(self.lines, key=lambda line: line.position)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    @property
    def order_status(self) -> OrderStatus | None:
        return coerce_status(self.status)

    @property
    def is_delivered(self) -> bool:
        return self.order_status is OrderStatus.DELIVERED

    def _assert_can_transition(self, target) -> OrderStatus:
        """Validate that the current status allows moving to ``target``."""
        current = self.order_status
        target_status = coerce_status(target)
        if target_status is None:
            raise ValidationError({"status": [f"Unknown order status: {target}"]})

        if not is_valid_transition(current, target_status):
            raise InvalidOperationError(
                f"Cannot transition from {current.value} to {target_status.value}. Status can only move forward.",
                extra_info={"currentStatus": current.value, "requestedStatus": target_status.value},
            )
        return target_status

    def transition_to(self, target) -> None:
        """Move to ``target``, which must lie strictly ahead of the current status."""
        target_status = self._assert_can_transition(target)
        self.status = target_status.value
        self.updated_at = datetime.now(UTC)

    def advance(self) -> bool:
        """Move exactly one step forward.

        Returns False, changing nothing, when the order is already delivered.
        """
        target = next_status(self.status)
        if target is None:
            return False
        self.transition_to(target)
        return True
