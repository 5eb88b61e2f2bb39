"""Read side of the catalog. Nothing here mutates."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from foodie.menu.menu_item import MenuItem


def find_menu_items(menu_item_ids) -> dict[str, MenuItem]:
    """Resolve many ids in a single query, keyed by id. Unknown ids are absent."""
    unique_ids = list(dict.fromkeys(menu_item_ids))
    if not unique_ids:
        return {}
    repo = current_domain.repository_for(MenuItem)
    items = repo._dao.query.filter(id__in=unique_ids).all().items
    return {str(item.id): item for item in items}


def list_menu_items(category: str | None = None) -> list[MenuItem]:
    """All menu items ordered by category then name, optionally one category only."""
    query = current_domain.repository_for(MenuItem)._dao.query
    if category:
        query = query.filter(category=category)
    return query.order_by(["category", "name"]).all().items


def get_menu_item(menu_item_id: str) -> MenuItem:
    item = current_domain.repository_for(MenuItem).get_or_none(menu_item_id)
    if item is None:
        raise ObjectNotFoundError("Menu item not found")
    return item
