"""Default catalog used by ``manage.py seed`` and local development."""

from protean.utils.globals import current_domain

from foodie.domain import logger
from foodie.menu.management import AddMenuItem
from foodie.menu.menu_item import MenuItem
from foodie.menu.queries import find_menu_items
from foodie.order.order import Order, OrderLine

DEFAULT_MENU = [
    dict(
        name="Margherita Pizza",
        description="Classic pizza with fresh tomatoes, mozzarella cheese, and basil",
        price=12.99,
        image_url="https://images.unsplash.com/photo-1604068549290-dea0e4a305ca?w=400",
        category="Pizza",
    ),
    dict(
        name="Pepperoni Pizza",
        description="Loaded with spicy pepperoni and melted mozzarella cheese",
        price=14.99,
        image_url="https://images.unsplash.com/photo-1628840042765-356cda07504e?w=400",
        category="Pizza",
    ),
    dict(
        name="BBQ Chicken Pizza",
        description="Grilled chicken, BBQ sauce, red onions, and cilantro",
        price=15.99,
        image_url="https://images.unsplash.com/photo-1565299624946-b28f40a0ae38?w=400",
        category="Pizza",
    ),
    dict(
        name="Classic Cheeseburger",
        description="Juicy beef patty with cheddar cheese, lettuce, tomato, and special sauce",
        price=9.99,
        image_url="https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400",
        category="Burgers",
    ),
    dict(
        name="Double Bacon Burger",
        description="Two beef patties with crispy bacon, cheese, and caramelized onions",
        price=13.99,
        image_url="https://images.unsplash.com/photo-1594212699903-ec8a3eca50f5?w=400",
        category="Burgers",
    ),
    dict(
        name="Veggie Burger",
        description="Plant-based patty with avocado, sprouts, and chipotle mayo",
        price=11.99,
        image_url="https://images.unsplash.com/photo-1520072959219-c595dc870360?w=400",
        category="Burgers",
    ),
    dict(
        name="Chicken Wings",
        description="Crispy wings tossed in your choice of buffalo or BBQ sauce",
        price=10.99,
        image_url="https://images.unsplash.com/photo-1608039755401-742074f0548d?q=80&w=400",
        category="Sides",
    ),
    dict(
        name="French Fries",
        description="Golden crispy fries seasoned with sea salt",
        price=4.99,
        image_url="https://images.unsplash.com/photo-1573080496219-bb080dd4f877?w=400",
        category="Sides",
    ),
    dict(
        name="Caesar Salad",
        description="Fresh romaine lettuce, parmesan cheese, croutons, and Caesar dressing",
        price=8.99,
        image_url="https://images.unsplash.com/photo-1546793665-c74683f339c1?w=400",
        category="Salads",
    ),
    dict(
        name="Chocolate Brownie",
        description="Warm fudgy brownie served with vanilla ice cream",
        price=6.99,
        image_url="https://images.unsplash.com/photo-1564355808539-22fda35bed7e?w=400",
        category="Desserts",
    ),
    dict(
        name="Cola",
        description="Classic refreshing cola drink",
        price=2.49,
        image_url="https://images.unsplash.com/photo-1622483767028-3f66f32aef97?w=400",
        category="Drinks",
    ),
    dict(
        name="Lemonade",
        description="Fresh squeezed lemonade with a hint of mint",
        price=3.49,
        image_url="https://images.unsplash.com/photo-1621263764928-df1444c5e859?w=400",
        category="Drinks",
    ),
]


def seed_menu(items=None) -> list[MenuItem]:
    """Wipe orders and the catalog, then load ``items`` (default menu if omitted)."""
    for element in (OrderLine, Order, MenuItem):
        current_domain.repository_for(element)._dao.delete_all()

    ids = [current_domain.process(AddMenuItem(**entry), asynchronous=False) for entry in (items or DEFAULT_MENU)]
    stored = find_menu_items(ids)
    created = [stored[menu_item_id] for menu_item_id in ids]
    logger.info("menu_seeded", count=len(created))
    return created
