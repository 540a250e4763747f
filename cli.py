# cli.py - interactive products console with autocomplete
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from sdk.productstore import ProductApiError, StoreClient

console = Console()
c = StoreClient()


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
category_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
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
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=9)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock
        )
    console.print(table)


def show_page(result: Dict[str, Any]):
    show_products(result.get("data", []))
    pg = result.get("pagination", {})
    console.print(
        f"[dim]{result.get('count', 0)} matching - page {pg.get('page')} of {pg.get('totalPages')}"
        f" (limit {pg.get('limit')}){' - more available' if pg.get('hasNext') else ''}[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    if not stats:
        console.print("[italic yellow]No stats available[/italic yellow]")
        return

    table = Table(box=box.ROUNDED, header_style="bold yellow", show_lines=True)
    table.add_column("Category", style="bold", width=20)
    table.add_column("Products", justify="right", width=10)
    for name, count in stats.get("categories", {}).items():
        table.add_row(name, str(count))

    prices = stats.get("priceStats", {})

    def _money(v: Optional[float]) -> str:
        return "-" if v is None else f"${v:.2f}"

    summary = (
        f"Total: [bold]{stats.get('totalProducts', 0)}[/bold]  "
        f"In stock: [green]{stats.get('totalInStock', 0)}[/green]  "
        f"Out of stock: [red]{stats.get('totalOutOfStock', 0)}[/red]\n"
        f"Highest: {_money(prices.get('highest'))}  "
        f"Lowest: {_money(prices.get('lowest'))}  "
        f"Average: {_money(prices.get('average'))}"
    )
    console.print(Panel(summary, title="📊 Product Stats", border_style="yellow"))
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
    Returns the result, or None after reporting the error in the status panel.
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
    except (ProductApiError, requests.RequestException) as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


def refresh_cache():
    global product_cache, category_cache
    result = try_api(c.list_products, limit=1000) or {}
    product_cache = result.get("data", [])
    category_cache = {p.get("category", "") for p in product_cache if p.get("category")}


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    if not product_cache:
        refresh_cache()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_name_completer():
    names = [p.get("name", "") for p in product_cache]
    return WordCompleter([n for n in names if n], ignore_case=True)


def get_category_completer():
    return WordCompleter(sorted(category_cache), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Products API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    name = prompt_with_autocomplete("Name", default=current.get("name", ""))
    description = prompt_with_autocomplete("Description", default=current.get("description", ""))
    price = ask_float("💰 Price", default=current.get("price", 10.0))
    category = prompt_with_autocomplete(
        "🏷️ Category", completer=get_category_completer(), default=current.get("category", "")
    )
    in_stock = Confirm.ask("In stock?", default=current.get("inStock", True))
    return {"name": name, "description": description, "price": price, "category": category, "in_stock": in_stock}


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔎 Filter products", "6", "✏️ Update product"),
            ("3", "🔍 Search products", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "8", "📊 Stats"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            result = try_api(c.list_products, page=page, success_msg="Products loaded successfully")
            if result is not None:
                show_page(result)

        elif choice == "2":
            category = prompt_with_autocomplete("Category (blank for any)", completer=get_category_completer())
            stock = Prompt.ask("In stock", choices=["any", "yes", "no"], default="any")
            in_stock = None if stock == "any" else stock == "yes"
            search = prompt_with_autocomplete("Name contains (blank for any)", completer=get_name_completer())
            limit = IntPrompt.ask("Per page", default=10)
            result = try_api(
                c.list_products, category or None, in_stock, search or None, 1, limit,
                success_msg="Filter applied"
            )
            if result is not None:
                show_page(result)

        elif choice == "3":
            term = prompt_with_autocomplete("Enter search term", completer=get_name_completer())
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Results for '{term}'")

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                refresh_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                resp = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])
                    refresh_cache()

        elif choice == "7":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                if try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted") is not None:
                    refresh_cache()

        elif choice == "8":
            stats = try_api(c.stats, success_msg="Stats loaded")
            if stats:
                show_stats(stats)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
