"""Tests for catalog management, seeding and menu queries."""

import json
from decimal import Decimal
from uuid import uuid4

import pytest
from foodie.menu.management import AddMenuItem, UpdateMenuItemPrice
from foodie.menu.queries import find_menu_items, get_menu_item, list_menu_items
from foodie.menu.seed import DEFAULT_MENU, seed_menu
from foodie.order.creation import PlaceOrder
from foodie.order.queries import list_orders
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _process(command):
    return current_domain.process(command, asynchronous=False)


class TestAddMenuItem:
    def test_add(self):
        item_id = _process(AddMenuItem(name="Garlic Bread", price=5.49, category="Sides", description="Toasted"))

        stored = get_menu_item(item_id)
        assert stored.name == "Garlic Bread"
        assert stored.price == Decimal("5.49")
        assert stored.description == "Toasted"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _process(AddMenuItem(name="Garlic Bread", price=-1, category="Sides"))
        assert list_menu_items() == []


class TestUpdateMenuItemPrice:
    def test_reprice(self, menu):
        cola = menu["Cola"]
        _process(UpdateMenuItemPrice(menu_item_id=cola.id, price=2.99))
        assert get_menu_item(cola.id).price == Decimal("2.99")

    def test_unknown_item(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            _process(UpdateMenuItemPrice(menu_item_id=str(uuid4()), price=1))
        assert str(exc.value) == "Menu item not found"


class TestSeedMenu:
    def test_seeds_default_menu(self):
        items = seed_menu()
        assert len(items) == len(DEFAULT_MENU) == 12
        assert [item.name for item in items] == [entry["name"] for entry in DEFAULT_MENU]
        assert {item.category for item in items} == {"Pizza", "Burgers", "Sides", "Salads", "Desserts", "Drinks"}

    def test_reseeding_replaces_catalog_and_orders(self, menu):
        _process(
            PlaceOrder(
                customer_name="Jane Doe",
                customer_phone="555-123-4567",
                customer_address="42 Baker Street, London",
                items=json.dumps([{"menu_item_id": menu["Cola"].id, "quantity": 1}]),
            )
        )

        seed_menu([dict(name="Only Dish", price=1, category="Specials")])

        assert [item.name for item in list_menu_items()] == ["Only Dish"]
        assert list_orders() == []


class TestMenuQueries:
    def test_list_ordered_by_category_then_name(self, menu):
        items = list_menu_items()
        keys = [(item.category, item.name) for item in items]
        assert keys == sorted(keys)

    def test_filter_by_category(self, menu):
        items = list_menu_items(category="Drinks")
        assert [item.name for item in items] == ["Cola", "Lemonade"]

    def test_unknown_category_is_empty(self, menu):
        assert list_menu_items(category="Sushi") == []

    def test_get_unknown_item(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            get_menu_item(str(uuid4()))
        assert str(exc.value) == "Menu item not found"

    def test_find_menu_items_skips_unknown_ids(self, menu):
        cola = menu["Cola"]
        found = find_menu_items([cola.id, cola.id, str(uuid4())])
        assert list(found) == [cola.id]

    def test_find_menu_items_without_ids(self):
        assert find_menu_items([]) == {}
