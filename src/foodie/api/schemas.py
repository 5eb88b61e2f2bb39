"""Pydantic request/response schemas for the FoodieExpress API.

These are separate from the domain commands (anti-corruption pattern). The
request models double as the canonical validation contract: the API applies
them authoritatively and client-side checkout applies them before submitting.
Wire names are camelCase.
"""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from foodie.order.creation import PlaceOrder
from foodie.order.status import OrderStatus
from foodie.shared.identifier import is_identifier

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")

Money = Annotated[Decimal, PlainSerializer(float, return_type=float)]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; everything is stored in UTC.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


Timestamp = Annotated[datetime, AfterValidator(_as_utc)]

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def field_errors(errors) -> dict[str, list[str]]:
    """Collapse pydantic error entries into ``{field: [message, ...]}``.

    Nested locations are reported against their top-level field, so an error
    on ``items[0].quantity`` is listed under ``items``.
    """
    details: dict[str, list[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if error.get("type") == "json_invalid" or not loc:
            field = "body"
        else:
            field = str(loc[0])
        details.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return details


def _text_length(label: str, minimum: int, maximum: int, unit: str = "characters") -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < minimum:
            raise PydanticCustomError("too_short", f"{label} must be at least {minimum} {unit}")
        if len(value) > maximum:
            raise PydanticCustomError("too_long", f"{label} must be less than {maximum} {unit}")
        return value

    return AfterValidator(check)


CustomerName = Annotated[str, _text_length("Name", 2, 100)]
CustomerPhone = Annotated[str, _text_length("Phone", 10, 15, unit="digits")]
CustomerAddress = Annotated[str, _text_length("Address", 10, 500)]


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderLineInput(CamelModel):
    menu_item_id: str
    quantity: int

    @field_validator("menu_item_id")
    @classmethod
    def menu_item_id_must_be_uuid(cls, value):
        if not is_identifier(value):
            raise PydanticCustomError("identifier", "Invalid menu item ID")
        return value.lower()

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_must_be_whole_number(cls, value):
        # JSON numbers only: 2.0 is two, "2", 2.5 and true are not quantities.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PydanticCustomError("quantity_type", "Quantity must be a whole number")
        if isinstance(value, float):
            if not value.is_integer():
                raise PydanticCustomError("quantity_type", "Quantity must be a whole number")
            return int(value)
        return value

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, value):
        if value < 1:
            raise PydanticCustomError("quantity_too_small", "Quantity must be at least 1")
        return value


class PlaceOrderRequest(CamelModel):
    customer_name: CustomerName
    customer_phone: CustomerPhone
    customer_address: CustomerAddress
    items: list[OrderLineInput]

    @field_validator("customer_phone")
    @classmethod
    def phone_format(cls, value):
        if not PHONE_PATTERN.match(value):
            raise PydanticCustomError("phone_format", "Invalid phone number format")
        return value

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, value):
        if not value:
            raise PydanticCustomError("items_empty", "Order must have at least one item")
        return value

    def to_command(self) -> PlaceOrder:
        return PlaceOrder(
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            customer_address=self.customer_address,
            items=json.dumps([{"menu_item_id": line.menu_item_id, "quantity": line.quantity} for line in self.items]),
        )


class UpdateOrderStatusRequest(CamelModel):
    status: OrderStatus


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class MenuItemResponse(CamelModel):
    id: str
    name: str
    description: str
    price: Money
    image_url: str
    category: str
    created_at: Timestamp
    updated_at: Timestamp

    @classmethod
    def from_menu_item(cls, item) -> MenuItemResponse:
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price=item.price,
            image_url=item.image_url,
            category=item.category,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class OrderLineResponse(CamelModel):
    id: str
    menu_item_id: str
    quantity: int
    unit_price: Money
    subtotal: Money
    menu_item: MenuItemResponse | None = None


class OrderResponse(CamelModel):
    id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    status: str
    total_amount: Money
    created_at: Timestamp
    updated_at: Timestamp
    items: list[OrderLineResponse]

    @classmethod
    def from_order(cls, order, menu_items) -> OrderResponse:
        """Render ``order``; ``menu_items`` maps ids to the current catalog entries."""
        return cls(
            id=order.id,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_address=order.customer_address,
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderLineResponse(
                    id=line.id,
                    menu_item_id=line.menu_item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    subtotal=line.subtotal,
                    menu_item=(
                        MenuItemResponse.from_menu_item(menu_items[line.menu_item_id])
                        if line.menu_item_id in menu_items
                        else None
                    ),
                )
                for line in order.ordered_lines
            ],
        )


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: dict | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime
