# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.storefront_client import StoreClient, StoreAPIError
from storefront.config import Settings
from storefront.formatting import format_money, product_label, cart_line_label

settings = Settings.from_env()
console = Console()
c = StoreClient(base_url=settings.api_url)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Category", width=16)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Stock", justify="right", width=7)

    for p in products:
        stock = p.get("stock", 0)
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            format_money(p.get("price", 0), settings.currency),
            str(stock) if stock > 0 else "[red]0[/red]",
        )
    console.print(table)


def show_categories(categories: List[str]):
    if not categories:
        console.print("[italic yellow]No categories yet[/italic yellow]")
        return
    table = Table(title="🏷️ Categories", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Category", width=24)
    for i, cat in enumerate(categories, 1):
        table.add_row(str(i), cat)
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Your Cart - ", style="bold")
    title.append(cart.get('username') or 'Unknown User', style="bold cyan")
    title.append(f" - Total: {format_money(cart.get('total', 0), settings.currency)}", style="bold green")

    items = cart.get("items", [])
    if not items:
        console.print(Panel("<Cart is empty>", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Item", style="bold", width=40)
    table.add_column("Product ID", justify="right", width=10)

    for it in items:
        table.add_row(
            str(it["index"]),
            cart_line_label(it, settings.currency),
            str(it["product"]["id"]),
        )

    console.print(Panel(table, title=title, border_style="blue"))


def show_receipt(receipt: Dict[str, Any]):
    console.print(Panel.fit(
        f"[green]Order placed successfully![/green]\n"
        f"Order ID: [bold]{receipt.get('order_id', 'N/A')}[/bold]\n"
        f"Paid: [bold]{format_money(receipt.get('total', 0), settings.currency)}[/bold]",
        title="✅ Order Confirmation"
    ))


def show_orders(orders: List[Dict[str, Any]]):
    if not orders:
        console.print("[italic yellow]No orders found[/italic yellow]")
        return

    table = Table(
        title=f"📋 Orders for {c.username}",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
        show_lines=True
    )
    table.add_column("Order ID", style="dim", width=14)
    table.add_column("Contents", width=40)
    table.add_column("Status", width=10)
    table.add_column("Total", justify="right", width=14)

    for order in orders:
        items = order.get("items", [])
        names = [f"{it['name']} x{it['quantity']}" for it in items[:3]]
        contents = ", ".join(names) if names else "No items"
        if len(items) > 3:
            contents += f" +{len(items) - 3} more"
        table.add_row(
            order.get("order_id", "N/A")[:12] + "...",
            contents,
            f"[green]{order.get('status', 'N/A')}[/green]",
            format_money(order.get("total", 0), settings.currency),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Store errors become a red status panel and a None result.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except StoreAPIError as e:
        status_message = f"Error: {e.detail}"
        console.print(show_status(status_message, False))
        return None
    except OSError as e:
        status_message = f"Error: cannot reach store ({e})"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p["id"]) for p in product_cache], ignore_case=True)


def get_category_completer():
    return WordCompleter(try_api(c.list_categories) or [], ignore_case=True, sentence=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    who = f"👤 {c.username}" if c.username else "[dim]not logged in[/dim]"
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Shop from the terminal[/bold blue]",
        f"{who}  [dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = "", is_password: bool = False):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default,
                  is_password=is_password)


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product IDs are numbers.[/red]")
        return None


def require_login() -> bool:
    if c.token:
        return True
    console.print(show_status("Please login first.", False))
    return False


# ---------------------------
# Actions
# ---------------------------
def do_register():
    username = prompt_with_autocomplete("Username")
    password = prompt_with_autocomplete("Password", is_password=True)
    try_api(c.register, username, password, success_msg="Registration successful. You can now login.")


def do_login():
    global product_cache
    username = prompt_with_autocomplete("Username")
    password = prompt_with_autocomplete("Password", is_password=True)
    if c.token:
        try_api(c.logout)
    resp = try_api(c.login, username, password, success_msg=f"Login successful. Welcome {username.strip()}!")
    if resp:
        product_cache = try_api(c.list_products) or []


def do_browse():
    categories = try_api(c.list_categories)
    if categories is None:
        return
    show_categories(categories)
    if not categories:
        return
    category = prompt_with_autocomplete("Category", completer=get_category_completer(),
                                        default=categories[0]).strip()
    products = try_api(c.list_products, category)
    if products is not None:
        show_products(products, title=f"📦 {category}")


def do_add_to_cart():
    if not require_login():
        return
    pid = ask_product_id()
    if pid is None:
        return
    product = try_api(c.get_product, pid)
    if product is None:
        return
    console.print(product_label(product, settings.currency))
    if product["stock"] <= 0:
        console.print(show_status("Product out of stock.", False))
        return
    qty = Prompt.ask(f"Enter quantity (Available: {product['stock']})", default="1")
    cart = try_api(c.add_to_cart, pid, qty, success_msg=f"Added to cart: {product['name']} x {qty}")
    if cart:
        show_cart(cart)


def do_view_cart():
    if not require_login():
        return
    cart = try_api(c.view_cart)
    if cart:
        show_cart(cart)


def do_remove_from_cart():
    if not require_login():
        return
    cart = try_api(c.view_cart)
    if not cart:
        return
    show_cart(cart)
    if not cart["items"]:
        return
    idx = IntPrompt.ask("Line # to remove", default=0)
    resp = try_api(c.remove_from_cart, idx)
    if resp:
        console.print(show_status(f"Removed: {resp['removed']['product']['name']}"))
        show_cart(resp)


def do_checkout():
    global product_cache
    if not require_login():
        return
    receipt = try_api(c.checkout)
    if receipt:
        show_receipt(receipt)
        product_cache = try_api(c.list_products) or []


def do_list_orders():
    if not require_login():
        return
    orders = try_api(c.list_orders, success_msg=f"Orders loaded for {c.username}")
    if orders is not None:
        show_orders(orders)


def do_admin_add_product():
    global product_cache
    if not require_login():
        return
    if not c.is_admin:
        console.print(show_status(f"Admin only. Login as '{settings.admin_username}' user.", False))
        return
    name = prompt_with_autocomplete("Name")
    category = prompt_with_autocomplete("Category", completer=get_category_completer())
    price = Prompt.ask("Price")
    stock = Prompt.ask("Stock")
    resp = try_api(c.add_product, name, category, price, stock, success_msg="Product added.")
    if resp:
        show_products([resp])
        product_cache = try_api(c.list_products) or []


def do_admin_list_products():
    if not require_login():
        return
    if not c.is_admin:
        console.print(show_status(f"Admin only. Login as '{settings.admin_username}' user.", False))
        return
    products = try_api(c.list_products)
    if products is not None:
        show_products(products, title="📦 All Products")


def do_logout():
    if not require_login():
        return
    try_api(c.logout, success_msg="Logged out.")


def do_reset():
    global product_cache
    if Confirm.ask("[red]This will clear all data and reload the demo catalog. Continue?[/red]"):
        try_api(c.reset, success_msg="Store reset successfully")
        product_cache = []


ACTIONS = {
    "1": do_register,
    "2": do_login,
    "3": do_browse,
    "4": do_add_to_cart,
    "5": do_view_cart,
    "6": do_remove_from_cart,
    "7": do_checkout,
    "8": do_list_orders,
    "9": do_admin_add_product,
    "10": do_admin_list_products,
    "11": do_logout,
    "12": do_reset,
}


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())

    while True:
        if status_message:
            console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📝 Register", "7", "✅ Checkout"),
            ("2", "🔑 Login", "8", "📋 My orders"),
            ("3", "🏷️ Browse categories", "9", "➕ Admin: add product"),
            ("4", "🛒 Add to cart", "10", "📦 Admin: all products"),
            ("5", "🛒 View cart", "11", "🚪 Logout"),
            ("6", "➖ Remove from cart", "12", "🔄 Reset store"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(list(ACTIONS) + ["q", "quit", "exit"])
        ).strip()

        action = ACTIONS.get(choice)
        if action is not None:
            action()
        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for shopping! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
