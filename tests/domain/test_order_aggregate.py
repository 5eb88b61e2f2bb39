"""Tests for the Order aggregate: placement, price snapshots and transitions."""

from decimal import Decimal

import pytest
from foodie.menu.menu_item import MenuItem
from foodie.order.order import Order
from foodie.order.status import OrderStatus
from protean.exceptions import InvalidOperationError, ValidationError


def _menu_item(name="Margherita Pizza", price=12.99, category="Pizza"):
    return MenuItem.create(name=name, price=price, category=category)


def _place(lines=None):
    if lines is None:
        lines = [(_menu_item(), 1)]
    return Order.place(
        customer_name="Jane Doe",
        customer_phone="+1 555 123 4567",
        customer_address="42 Baker Street, London",
        lines=lines,
    )


def _order_at(status):
    order = _place()
    order.status = status.value
    return order


class TestOrderPlacement:
    def test_new_order_is_received(self):
        order = _place()
        assert order.status == OrderStatus.ORDER_RECEIVED.value
        assert order.order_status is OrderStatus.ORDER_RECEIVED
        assert order.id is not None

    def test_total_is_sum_of_snapshot_price_times_quantity(self):
        pizza = _menu_item("Margherita Pizza", 12.99)
        burger = _menu_item("Classic Cheeseburger", 9.99, "Burgers")

        order = _place([(pizza, 2), (burger, 1)])

        assert order.total_amount == Decimal("35.97")
        assert [line.subtotal for line in order.ordered_lines] == [Decimal("25.98"), Decimal("9.99")]

    def test_lines_snapshot_unit_price(self):
        pizza = _menu_item(price=12.99)
        order = _place([(pizza, 1)])

        pizza.reprice(20.00)

        assert order.ordered_lines[0].unit_price == Decimal("12.99")
        assert order.total_amount == Decimal("12.99")

    def test_lines_keep_request_order(self):
        items = [_menu_item(f"Dish {i}", 1 + i) for i in range(3)]
        order = _place([(item, 1) for item in items])

        assert [line.menu_item_id for line in order.ordered_lines] == [item.id for item in items]
        assert [line.position for line in order.ordered_lines] == [0, 1, 2]

    def test_requires_at_least_one_line(self):
        with pytest.raises(ValidationError) as exc:
            _place([])
        assert "items" in exc.value.messages

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_rejects_invalid_quantity(self, quantity):
        with pytest.raises(ValidationError):
            _place([(_menu_item(), quantity)])


class TestOrderTransitions:
    def test_transition_forward(self):
        order = _place()
        order.transition_to(OrderStatus.PREPARING)
        assert order.status == OrderStatus.PREPARING.value

    def test_transition_may_skip_steps(self):
        order = _place()
        order.transition_to("OUT_FOR_DELIVERY")
        assert order.status == OrderStatus.OUT_FOR_DELIVERY.value

    def test_backward_transition_rejected(self):
        order = _order_at(OrderStatus.OUT_FOR_DELIVERY)

        with pytest.raises(InvalidOperationError) as exc:
            order.transition_to(OrderStatus.PREPARING)

        assert "Cannot transition from OUT_FOR_DELIVERY to PREPARING" in str(exc.value)
        assert exc.value.extra_info == {"currentStatus": "OUT_FOR_DELIVERY", "requestedStatus": "PREPARING"}
        assert order.status == OrderStatus.OUT_FOR_DELIVERY.value

    def test_same_status_rejected(self):
        order = _order_at(OrderStatus.PREPARING)
        with pytest.raises(InvalidOperationError):
            order.transition_to(OrderStatus.PREPARING)

    def test_unknown_target_is_validation_error(self):
        order = _place()
        with pytest.raises(ValidationError) as exc:
            order.transition_to("CANCELLED")
        assert "status" in exc.value.messages

    def test_status_field_only_accepts_known_statuses(self):
        order = _place()
        with pytest.raises(ValidationError) as exc:
            order.status = "LOST"
        assert "status" in exc.value.messages
        assert order.status == OrderStatus.ORDER_RECEIVED.value


class TestOrderAdvance:
    def test_advances_one_step_at_a_time(self):
        order = _place()
        seen = []
        while order.advance():
            seen.append(order.status)

        assert seen == ["PREPARING", "OUT_FOR_DELIVERY", "DELIVERED"]
        assert order.is_delivered

    def test_advance_when_delivered_is_noop(self):
        order = _order_at(OrderStatus.DELIVERED)
        before = order.updated_at

        assert order.advance() is False
        assert order.status == OrderStatus.DELIVERED.value
        assert order.updated_at == before
