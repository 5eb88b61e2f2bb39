"""Catalog management: commands and handlers used by seeding and admin tooling."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from foodie.domain import foodie, logger
from foodie.menu.menu_item import MenuItem


@foodie.command(part_of="MenuItem")
class AddMenuItem:
    name = String(required=True, max_length=100)
    price = Float(required=True)
    category = String(required=True, max_length=50)
    description = Text()
    image_url = String(max_length=500)


@foodie.command(part_of="MenuItem")
class UpdateMenuItemPrice:
    menu_item_id = Identifier(required=True)
    price = Float(required=True)


@foodie.command_handler(part_of=MenuItem)
class ManageMenuItemHandler:
    @handle(AddMenuItem)
    def add_menu_item(self, command):
        item = MenuItem.create(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image_url=command.image_url,
        )
        current_domain.repository_for(MenuItem).add(item)

        logger.info("menu_item_added", menu_item_id=item.id, name=item.name, price=str(item.price))
        return str(item.id)

    @handle(UpdateMenuItemPrice)
    def update_menu_item_price(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = repo.get_or_none(command.menu_item_id)
        if item is None:
            raise ObjectNotFoundError("Menu item not found")

        previous_price = item.price
        item.reprice(command.price)
        repo.add(item)

        logger.info(
            "menu_item_repriced",
            menu_item_id=item.id,
            previous_price=str(previous_price),
            new_price=str(item.price),
        )
        return str(item.id)
