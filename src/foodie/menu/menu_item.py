"""MenuItem aggregate: the purchasable entries of the catalog.

Menu items are reference data: seeded administratively and read by the order
flow, which copies the current price onto each order line instead of keeping
a live reference to it.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Decimal, String, Text

from foodie.domain import foodie
from foodie.shared.money import to_money


@foodie.aggregate(limit=None)
class MenuItem:
    name = String(required=True, max_length=100)
    description = Text(default="")
    price = Decimal(required=True, min_value=0, precision=10, scale=2)
    image_url = String(max_length=500, default="")
    category = String(required=True, max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @staticmethod
    def _validated_price(price):
        if price is None:
            raise ValidationError({"price": ["Price is required"]})
        amount = to_money(price)
        if amount < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        return amount

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, category, description="", image_url=""):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name cannot be empty"]})
        if not category or not category.strip():
            raise ValidationError({"category": ["Category cannot be empty"]})

        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            description=description or "",
            price=cls._validated_price(price),
            image_url=image_url or "",
            category=category.strip(),
            created_at=now,
            updated_at=now,
        )

    def reprice(self, price):
        """Change the catalog price. Existing orders keep their snapshot."""
        self.price = self._validated_price(price)
        self.updated_at = datetime.now(UTC)
