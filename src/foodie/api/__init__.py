"""FoodieExpress API package."""

from foodie.api.routes import menu_router, order_router

__all__ = ["menu_router", "order_router"]
