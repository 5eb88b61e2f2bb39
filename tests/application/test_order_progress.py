"""Tests for status updates: explicit transitions, auto-advance and lost races."""

import json
from uuid import uuid4

import pytest
from foodie.order import progress
from foodie.order.creation import PlaceOrder
from foodie.order.order import Order
from foodie.order.progress import SimulateOrderProgress, UpdateOrderStatus
from foodie.order.queries import get_order
from protean import current_domain
from protean.exceptions import (
    ExpectedVersionError,
    InvalidOperationError,
    ObjectNotFoundError,
    ValidationError,
)
from sqlalchemy import create_engine, update


@pytest.fixture()
def order_id(menu):
    command = PlaceOrder(
        customer_name="Jane Doe",
        customer_phone="555-123-4567",
        customer_address="42 Baker Street, London",
        items=json.dumps([{"menu_item_id": menu["French Fries"].id, "quantity": 1}]),
    )
    return current_domain.process(command, asynchronous=False)


def _update_status(order_id, status):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
    return get_order(order_id)


def _simulate(order_id):
    current_domain.process(SimulateOrderProgress(order_id=order_id), asynchronous=False)
    return get_order(order_id)


def _write_behind(order_id, status):
    """Change an order over a separate connection, bumping its version."""
    provider = current_domain.providers["default"]
    table = current_domain.repository_for(Order)._dao.database_model_cls.__table__
    engine = create_engine(provider.conn_info["database_uri"])
    try:
        with engine.begin() as connection:
            connection.execute(
                update(table).where(table.c.id == order_id).values(status=status, _version=table.c._version + 1)
            )
    finally:
        engine.dispose()


def _attempts():
    return current_domain.config["server"]["version_retry"]["max_retries"] + 1


class TestUpdateOrderStatus:
    def test_forward_transition(self, order_id):
        updated = _update_status(order_id, "PREPARING")

        assert updated.status == "PREPARING"
        assert updated._version == 1

    def test_skip_to_out_for_delivery(self, order_id):
        assert _update_status(order_id, "OUT_FOR_DELIVERY").status == "OUT_FOR_DELIVERY"

    def test_backward_transition_leaves_order_unchanged(self, order_id):
        _update_status(order_id, "OUT_FOR_DELIVERY")

        with pytest.raises(InvalidOperationError) as exc:
            _update_status(order_id, "PREPARING")

        assert str(exc.value).startswith("Cannot transition from OUT_FOR_DELIVERY to PREPARING")
        assert get_order(order_id).status == "OUT_FOR_DELIVERY"

    def test_unknown_status(self, order_id):
        with pytest.raises(ValidationError):
            _update_status(order_id, "CANCELLED")

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update_status(str(uuid4()), "PREPARING")


class TestSimulateOrderProgress:
    def test_walks_through_every_status(self, order_id):
        statuses = [_simulate(order_id).status for _ in range(3)]
        assert statuses == ["PREPARING", "OUT_FOR_DELIVERY", "DELIVERED"]

    def test_fourth_call_is_noop(self, order_id):
        for _ in range(3):
            _simulate(order_id)
        delivered = get_order(order_id)

        result = _simulate(order_id)

        assert result.status == "DELIVERED"
        assert result._version == delivered._version
        assert result.updated_at == delivered.updated_at

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _simulate(str(uuid4()))


class TestConcurrentUpdates:
    def test_stale_save_is_rejected(self, order_id):
        repo = current_domain.repository_for(Order)
        first = repo.get(order_id)
        second = repo.get(order_id)

        first.transition_to("PREPARING")
        repo.add(first)

        second.transition_to("OUT_FOR_DELIVERY")
        with pytest.raises(ExpectedVersionError):
            repo.add(second)

        assert get_order(order_id).status == "PREPARING"

    def test_lost_race_is_retried_against_fresh_status(self, order_id, monkeypatch):
        real_load = progress._load_order
        calls = []

        def racing_load(loaded_id):
            loaded = real_load(loaded_id)
            if not calls:
                _write_behind(loaded_id, "PREPARING")
            calls.append(loaded_id)
            return loaded

        monkeypatch.setattr(progress, "_load_order", racing_load)

        result = _simulate(order_id)

        assert len(calls) == 2
        assert result.status == "OUT_FOR_DELIVERY"

    def test_retry_revalidates_transition(self, order_id, monkeypatch):
        real_load = progress._load_order
        calls = []

        def racing_load(loaded_id):
            loaded = real_load(loaded_id)
            if not calls:
                _write_behind(loaded_id, "OUT_FOR_DELIVERY")
            calls.append(loaded_id)
            return loaded

        monkeypatch.setattr(progress, "_load_order", racing_load)

        with pytest.raises(InvalidOperationError):
            _update_status(order_id, "PREPARING")

        assert len(calls) == 2
        assert get_order(order_id).status == "OUT_FOR_DELIVERY"

    def test_conflict_after_exhausting_retries(self, order_id, monkeypatch):
        real_load = progress._load_order
        calls = []

        def always_racing_load(loaded_id):
            loaded = real_load(loaded_id)
            _write_behind(loaded_id, loaded.status)
            calls.append(loaded_id)
            return loaded

        monkeypatch.setattr(progress, "_load_order", always_racing_load)

        with pytest.raises(ExpectedVersionError):
            _simulate(order_id)

        assert len(calls) == _attempts()
        assert get_order(order_id).status == "ORDER_RECEIVED"
