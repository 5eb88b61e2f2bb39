"""FoodieExpress storefront CLI: browse the menu, fill a cart, order and track.

The cart lives in a local JSON file (``FOODIE_CART_PATH``) so it survives
between invocations; everything else goes through the HTTP API at
``FOODIE_API_URL``.

Usage:
    python src/storefront.py menu [--category Pizza]
    python src/storefront.py cart show
    python src/storefront.py cart add <menu-item-id> [--quantity 2]
    python src/storefront.py cart remove <menu-item-id>
    python src/storefront.py cart set <menu-item-id> <quantity>
    python src/storefront.py cart clear
    python src/storefront.py checkout --name ... --phone ... --address ...
    python src/storefront.py orders
    python src/storefront.py track <order-id> [--no-simulate]
"""

import argparse
import sys

from rich.console import Console
from rich.live import Live

console = Console()


def _open_cart():
    from foodie.cart.cart import CartState
    from foodie.cart.storage import FileCartStorage
    from foodie.config import get_settings

    return CartState(FileCartStorage(get_settings().cart_path))


def show_menu(client, category=None):
    from foodie.client.display import render_menu

    console.print(render_menu(client.get_menu(category)))


def cart_command(client, args):
    from foodie.client.display import render_cart

    cart = _open_cart()
    if args.cart_command == "add":
        cart.add_item(client.get_menu_item(args.menu_item_id), args.quantity)
    elif args.cart_command == "remove":
        cart.remove_item(args.menu_item_id)
    elif args.cart_command == "set":
        cart.update_quantity(args.menu_item_id, args.quantity)
    elif args.cart_command == "clear":
        cart.clear()
    console.print(render_cart(cart))


def place_order(client, args):
    from foodie.cart.checkout import checkout
    from foodie.client.display import render_order

    order = checkout(_open_cart(), client, args.name, args.phone, args.address)
    console.print(render_order(order))
    console.print(f"Track it with: storefront.py track {order['id']}")


def show_orders(client):
    from rich.table import Table

    from foodie.client.display import STATUS_DISPLAY, format_price

    table = Table(title="Orders")
    table.add_column("ID", style="dim")
    table.add_column("Customer")
    table.add_column("Status")
    table.add_column("Total", justify="right", style="green")
    table.add_column("Placed")
    for order in client.list_orders():
        table.add_row(
            order["id"],
            order["customerName"],
            STATUS_DISPLAY.get(order["status"], (order["status"],))[0],
            format_price(order["totalAmount"]),
            order["createdAt"],
        )
    console.print(table)


def track_order(client, order_id, simulate=True):
    from foodie.client.display import render_order
    from foodie.client.tracking import OrderTracker

    tracker = OrderTracker(client, order_id, auto_advance=simulate)
    initial = tracker.refresh()
    with Live(render_order(initial), console=console, refresh_per_second=4) as live:
        tracker.on_update = lambda order: live.update(render_order(order))
        with tracker:
            try:
                tracker.wait_until_delivered()
            except KeyboardInterrupt:
                pass


def build_parser():
    parser = argparse.ArgumentParser(description="FoodieExpress storefront")
    parser.add_argument("--api-url", help="API base URL (default: FOODIE_API_URL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    menu_parser = subparsers.add_parser("menu", help="Show the menu")
    menu_parser.add_argument("--category", help="Only show one category")

    cart_parser = subparsers.add_parser("cart", help="Manage the local cart")
    cart_sub = cart_parser.add_subparsers(dest="cart_command", required=True)
    cart_sub.add_parser("show", help="Show the cart")
    add_parser = cart_sub.add_parser("add", help="Add a menu item")
    add_parser.add_argument("menu_item_id")
    add_parser.add_argument("--quantity", type=int, default=1)
    remove_parser = cart_sub.add_parser("remove", help="Remove a menu item")
    remove_parser.add_argument("menu_item_id")
    set_parser = cart_sub.add_parser("set", help="Set a line's quantity (0 removes it)")
    set_parser.add_argument("menu_item_id")
    set_parser.add_argument("quantity", type=int)
    cart_sub.add_parser("clear", help="Empty the cart")

    checkout_parser = subparsers.add_parser("checkout", help="Place an order for the cart")
    checkout_parser.add_argument("--name", required=True)
    checkout_parser.add_argument("--phone", required=True)
    checkout_parser.add_argument("--address", required=True)

    subparsers.add_parser("orders", help="List placed orders")

    track_parser = subparsers.add_parser("track", help="Follow an order until it is delivered")
    track_parser.add_argument("order_id")
    track_parser.add_argument(
        "--no-simulate",
        dest="simulate",
        action="store_false",
        help="Only poll; do not advance the order automatically",
    )
    return parser


def main(argv=None):
    from protean.exceptions import ValidationError

    from foodie.client.api import ApiError, FoodieClient
    from foodie.domain import foodie
    from foodie.utils.logging import configure_logging

    args = build_parser().parse_args(argv)
    configure_logging(foodie)

    with FoodieClient(base_url=args.api_url) as client:
        try:
            if args.command == "menu":
                show_menu(client, args.category)
            elif args.command == "cart":
                cart_command(client, args)
            elif args.command == "checkout":
                place_order(client, args)
            elif args.command == "orders":
                show_orders(client)
            elif args.command == "track":
                track_order(client, args.order_id, simulate=args.simulate)
        except ValidationError as exc:
            for field, messages in exc.messages.items():
                for message in messages:
                    console.print(f"[red]{field}:[/red] {message}")
            sys.exit(1)
        except ApiError as exc:
            console.print(f"[red]Error ({exc.status_code}):[/red] {exc.message}")
            if exc.details:
                console.print(exc.details)
            sys.exit(1)


if __name__ == "__main__":
    main()
