"""FoodieExpress database management CLI.

Creates and drops the schema, loads the default menu and reprices items.
The target database is the ``default`` provider in ``foodie/domain.toml``
(``FOODIE_DATABASE_URL``).

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed                     # Replace catalog and orders with the default menu
    python src/manage.py reprice <id> <price>     # Change a menu item's price
"""

import argparse
import sys


def _database_uri(domain):
    return domain.config["databases"]["default"]["database_uri"]


def setup_database(domain):
    from foodie.utils.db import setup_db

    print(f"Creating database schema on {_database_uri(domain)!r}...")
    setup_db(domain)
    print("Done.")


def drop_database(domain):
    from foodie.utils.db import drop_db

    print(f"Dropping database schema on {_database_uri(domain)!r}...")
    drop_db(domain)
    print("Done.")


def seed_database(domain):
    from foodie.menu.seed import seed_menu
    from foodie.utils.db import setup_db

    setup_db(domain)
    print("Seeding menu...")
    with domain.domain_context():
        items = seed_menu()
    print(f"  {len(items)} menu items created.")
    print("Done.")


def reprice_menu_item(domain, menu_item_id, price):
    from foodie.menu.management import UpdateMenuItemPrice
    from foodie.menu.queries import get_menu_item

    with domain.domain_context():
        domain.process(UpdateMenuItemPrice(menu_item_id=menu_item_id, price=price), asynchronous=False)
        item = get_menu_item(menu_item_id)
    print(f"{item.name} now costs {item.price}.")


def prepare_domain():
    """Configure logging and load the foodie domain. Returns the ready domain."""
    from foodie.domain import foodie
    from foodie.utils.logging import configure_logging

    configure_logging(foodie)
    foodie.init()
    return foodie


def main(argv=None):
    from protean.exceptions import ObjectNotFoundError, ValidationError

    parser = argparse.ArgumentParser(description="FoodieExpress database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the default menu, removing existing orders")

    reprice_parser = subparsers.add_parser("reprice", help="Change a menu item's price")
    reprice_parser.add_argument("menu_item_id", help="Menu item ID")
    reprice_parser.add_argument("price", type=float, help="New price")

    args = parser.parse_args(argv)
    foodie = prepare_domain()

    try:
        if args.command == "setup-db":
            setup_database(foodie)
        elif args.command == "drop-db":
            drop_database(foodie)
        elif args.command == "seed":
            seed_database(foodie)
        elif args.command == "reprice":
            reprice_menu_item(foodie, args.menu_item_id, args.price)
    except ObjectNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as exc:
        print(f"Error: {exc.messages}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
