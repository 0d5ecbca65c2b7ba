# cli.py - interactive terminal client for the Product API
import math
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import ProductClient
import requests

console = Console()
c = ProductClient(
    base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY", "12345"),
)

status_message = "Ready"
last_ok = True
product_cache: List[Dict[str, Any]] = []
category_cache = set()

PROMPT_STYLE = PromptStyle.from_dict({
    'prompt': 'bold #5f87ff',
    'completion-menu.completion': 'bg:#303030 #d0d0d0',
    'completion-menu.completion.current': 'bg:#5f87ff #ffffff bold',
    'completion-menu.meta.completion': 'bg:#262626 #8a8a8a italic',
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
    table.add_column("ID", style="dim", width=36)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"{p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            in_stock,
        )
    console.print(table)


def show_stats(stats: Dict[str, int]):
    if not stats:
        console.print("[italic yellow]No categories yet[/italic yellow]")
        return

    table = Table(box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", width=20)
    table.add_column("Products", justify="right", width=10)
    for category, count in sorted(stats.items()):
        table.add_row(category, str(count))
    table.add_row("[bold]total[/bold]", f"[bold]{sum(stats.values())}[/bold]")
    console.print(Panel(table, title="📊 Products per category", border_style="yellow"))


def status_panel(message: str, ok: bool = True) -> Panel:
    icon, style = ("✔", "green") if ok else ("✖", "red")
    return Panel.fit(
        f"[{style}]{icon} {message}[/{style}]",
        title="Last action",
        subtitle=f"[dim]{c.base_url}[/dim]",
        border_style=style,
    )


# ---------------------------
# API wrapper
# ---------------------------
def _error_text(e: Exception) -> str:
    # the API answers every failure with {"error": "..."}
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('error', e.response.text)}"
        except ValueError:
            return f"HTTP {e.response.status_code}: {e.response.text}"
    return str(e)


def call_api(label: str, fn, *args, announce: bool = True, **kwargs):
    """Run one SDK call while a spinner shows ``label``.

    On success the result is returned and, when ``announce`` is set, the
    status panel reports ``label``. Any HTTP or connection failure is shown
    with the API's error message and ``None`` is returned.
    """
    global status_message, last_ok
    try:
        with Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[cyan]{task.description}…"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description=label, total=None)
            result = fn(*args, **kwargs)
    except requests.exceptions.RequestException as e:
        status_message, last_ok = f"{label} failed: {_error_text(e)}", False
        console.print(status_panel(status_message, ok=False))
        return None

    if announce:
        status_message, last_ok = label, True
        console.print(status_panel(label))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_caches():
    global product_cache, category_cache
    product_cache = call_api("Refreshing products", c.list_products, announce=False) or []
    category_cache = {p.get("category", "") for p in product_cache if p.get("category")}


def get_product_completer():
    if not product_cache:
        refresh_caches()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    return WordCompleter(sorted(category_cache), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def ask_text(message: str, completer=None, default: str = "", required: bool = True) -> str:
    # the API rejects empty name/description/category, so re-ask here
    while True:
        value = prompt(
            [("class:prompt", f"{message} › ")],
            completer=completer,
            complete_while_typing=True,
            style=PROMPT_STYLE,
            default=default,
        ).strip()
        if value or not required:
            return value
        console.print(f"[red]{message} cannot be empty.[/red]")


def parse_price(raw: str) -> Union[int, float]:
    """Parse a price typed by the user.

    Accepts plain decimals, optionally prefixed with ``$``. Negative and
    non-finite values raise ``ValueError``. Whole amounts come back as
    ``int`` so ``10`` is sent as ``10`` rather than ``10.0``.
    """
    try:
        value = float(raw.strip().lstrip("$").replace(",", ""))
    except ValueError:
        raise ValueError("enter an amount like 12.50")
    if not math.isfinite(value):
        raise ValueError("price must be a finite number")
    if value < 0:
        raise ValueError("price cannot be negative")
    return int(value) if value.is_integer() else round(value, 2)


def ask_price(message: str, default: Union[int, float] = 10) -> Union[int, float]:
    while True:
        raw = Prompt.ask(message, default=str(default), console=console)
        try:
            return parse_price(raw)
        except ValueError as e:
            console.print(f"[red]Invalid price: {e}[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": ask_text("Name", default=current.get("name", "")),
        "description": ask_text("Description", default=current.get("description", "")),
        "price": ask_price("💰 Price", default=current.get("price", 10)),
        "category": ask_text(
            "🏷️ Category", completer=get_category_completer(), default=current.get("category", "general")
        ),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


# ---------------------------
# Main menu
# ---------------------------
MENU = [
    ("1", "📦 List products", "5", "✏️ Update product"),
    ("2", "🔍 Search products", "6", "🗑️ Delete product"),
    ("3", "ℹ️ Get product by ID", "7", "📊 Category stats"),
    ("4", "➕ Create product", "q", "👋 Quit"),
]


def _delete(pid: str) -> bool:
    c.delete_product(pid)
    return True


def menu():
    console.clear()
    console.print(create_header())
    refresh_caches()

    while True:
        console.print(status_panel(status_message, ok=last_ok))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in MENU:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = ask_text(
            "Choose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"]),
            required=False,
        ).lower()

        if choice == "1":
            products = call_api("Loading products", c.list_products)
            if products is not None:
                show_products(products)

        elif choice == "2":
            term = ask_text("Search term")
            res = call_api(f"Searching for '{term}'", c.search_products, term)
            if res is not None:
                show_products(res["results"], title=f"🔍 {res['total']} match(es) for '{term}'")

        elif choice == "3":
            pid = ask_text("Product ID", completer=get_product_completer())
            resp = call_api(f"Fetching {pid}", c.get_product, pid)
            if resp:
                show_products([resp])

        elif choice == "4":
            fields = ask_product_fields()
            resp = call_api(f"Creating '{fields['name']}'", c.create_product, **fields)
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                refresh_caches()

        elif choice == "5":
            pid = ask_text("Product ID", completer=get_product_completer())
            current = call_api(f"Fetching {pid}", c.get_product, pid, announce=False)
            if current:
                fields = ask_product_fields(current)
                resp = call_api(f"Updating {pid}", c.update_product, pid, **fields)
                if resp:
                    show_products([resp])
                    refresh_caches()

        elif choice == "6":
            pid = ask_text("Product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                if call_api(f"Deleting {pid}", _delete, pid):
                    refresh_caches()

        elif choice == "7":
            stats = call_api("Counting products per category", c.stats)
            if stats is not None:
                show_stats(stats)

        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
