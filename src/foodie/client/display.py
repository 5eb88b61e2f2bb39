"""Terminal rendering for the storefront: menu, cart and order progress."""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from foodie.order.status import STATUS_ORDER, OrderStatus, status_index
from foodie.shared.money import to_money

STATUS_DISPLAY = {
    OrderStatus.ORDER_RECEIVED.value: ("Order Received", "Your order has been confirmed", "30-45 min"),
    OrderStatus.PREPARING.value: ("Preparing", "The kitchen is preparing your food", "20-35 min"),
    OrderStatus.OUT_FOR_DELIVERY.value: ("Out for Delivery", "Your rider is on the way", "10-15 min"),
    OrderStatus.DELIVERED.value: ("Delivered", "Enjoy your meal!", "Delivered"),
}


def format_price(value) -> str:
    return f"${to_money(value):.2f}"


def render_menu(menu_items) -> Table:
    table = Table(title="Menu", show_lines=False)
    table.add_column("Category", style="cyan")
    table.add_column("Item", style="bold")
    table.add_column("Description")
    table.add_column("Price", justify="right", style="green")
    table.add_column("ID", style="dim")

    for item in menu_items:
        table.add_row(
            item["category"],
            item["name"],
            item.get("description") or "",
            format_price(item["price"]),
            item["id"],
        )
    return table


def render_cart(cart):
    if cart.is_empty():
        return Text("Your cart is empty", style="dim")

    table = Table(title=f"Cart ({cart.total_items} items)")
    table.add_column("Item", style="bold")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Subtotal", justify="right", style="green")

    for item in cart.items:
        table.add_row(
            item.menu_item["name"],
            str(item.quantity),
            format_price(item.menu_item["price"]),
            format_price(item.subtotal),
        )
    table.add_section()
    table.add_row("Total", "", "", format_price(cart.total_amount), style="bold")
    return table


def render_progress(status) -> Text:
    """One line per status, ticking off everything up to the current one."""
    current = status_index(status)
    text = Text()
    for index, step in enumerate(STATUS_ORDER):
        label = STATUS_DISPLAY[step.value][0]
        if index < current:
            text.append(f"  [x] {label}\n", style="green")
        elif index == current:
            text.append(f"  [>] {label}\n", style="bold yellow")
        else:
            text.append(f"  [ ] {label}\n", style="dim")
    return text


def render_order(order) -> Panel:
    label, message, eta = STATUS_DISPLAY.get(order["status"], (order["status"], "", ""))

    lines = Table.grid(padding=(0, 2))
    lines.add_column()
    lines.add_column(justify="right")
    for line in order.get("items", []):
        name = (line.get("menuItem") or {}).get("name", line["menuItemId"])
        lines.add_row(f"{line['quantity']} x {name}", format_price(line["subtotal"]))
    lines.add_row(Text("Total", style="bold"), Text(format_price(order["totalAmount"]), style="bold"))

    header = Text.assemble((label, "bold"), "  ", (message, "italic"), "\n", ("ETA: ", "dim"), eta)
    customer = Text(f"{order['customerName']} | {order['customerPhone']}\n{order['customerAddress']}", style="dim")

    return Panel(
        Group(header, render_progress(order["status"]), lines, customer),
        title=f"Order {order['id']}",
    )
