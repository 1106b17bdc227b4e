"""Command Line Interface (CLI) for user interaction."""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar

from rich.console import Console
from rich.table import Table
from rich.prompt import Prompt, Confirm, IntPrompt
from rich.panel import Panel
from rich.text import Text

import config
from utils.logger import get_logger
from utils.error_handler import UserCancelledError

logger = get_logger()
console = Console()

T = TypeVar('T') # Generic type for selection items

CHECK_LABELS = (
    ("accessibility", "Accessibility"),
    ("requiredFiles", "Required Files"),
    ("structure", "Structure"),
)

def display_welcome():
    """Displays a welcome message."""
    console.print(Panel(
        "[bold green]Submission Link Checker[/bold green]",
        title="Welcome",
        border_style="blue"
    ))
    console.print("Checks GitHub repositories, GitHub Pages sites and Google Drive links, then scores them.")
    console.rule()

def display_farewell():
    console.rule()
    console.print("[bold cyan]Goodbye.[/bold cyan]")

def display_error(message: str):
    """Displays an error message in a standard format."""
    console.print(Panel(f"[bold red]Error:[/bold red] {message}", title="Error", border_style="red"))

def display_warning(message: str):
    console.print(f"[yellow]Warning:[/yellow] {message}")

def display_success(message: str):
    console.print(f"[green]Success:[/green] {message}")

def prompt_for_selection(items: List[T], display_func: Callable[[T], str], prompt_message: str) -> Optional[T]:
    """Prompts the user to select an item from a list.

    Args:
        items: The list of items to choose from.
        display_func: A function that takes an item and returns a string representation for display.
        prompt_message: The message to display before the list.

    Returns:
        The selected item, or None if no items are available.

    Raises:
        UserCancelledError: If the user explicitly cancels (by entering 0).
    """
    if not items:
        console.print("[yellow]No items available for selection.[/yellow]")
        return None

    console.print(prompt_message)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Item", style="cyan")

    choices = []
    for i, item in enumerate(items):
        table.add_row(str(i + 1), display_func(item))
        choices.append(str(i + 1))

    console.print(table)
    console.print("Enter 0 to cancel.")

    choice = IntPrompt.ask("Select item number", choices=choices + ["0"], show_choices=False)
    if choice == 0:
        raise UserCancelledError("User cancelled selection.")
    return items[choice - 1]

def prompt_for_link() -> str:
    """Asks for a submission link; an empty answer cancels."""
    link = Prompt.ask("Submission link").strip()
    if not link:
        raise UserCancelledError("No submission link entered.")
    return link

def prompt_for_menu_action() -> str:
    return Prompt.ask(
        "\n[bold blue]Action[/bold blue] ([c]heck, [r]ecent, [e]xport, [q]uit)",
        choices=["c", "r", "e", "q"],
        default="c",
        show_choices=False
    )

def prompt_for_export_format() -> str:
    return Prompt.ask("Export format", choices=["csv", "json"], default="csv")

def confirm_action(message: str, default: bool = True) -> bool:
    return Confirm.ask(message, default=default)

def _status_line(check: Dict[str, Any], label: str) -> Text:
    passed = bool(check.get('passed'))
    icon = '✅' if passed else '❌'
    return Text(f"{icon} {label}: {check.get('message', '')}", style="green" if passed else "red")

def render_result_card(result: Dict[str, Any]):
    """Prints the outcome of one grading run as a panel."""
    results = result.get('results', {})
    body = Text()
    body.append("Submission: ", style="bold")
    body.append(f"{result.get('link')}\n", style="underline cyan")
    body.append("Assignment: ", style="bold")
    body.append(f"{result.get('assignmentType')}\n\n")

    for key, label in CHECK_LABELS:
        body.append_text(_status_line(results.get(key, {}), label))
        body.append("\n")

    directories = results.get('structure', {}).get('directories')
    if directories:
        body.append(f"   Project directories: {', '.join(directories)}\n", style="dim")

    score = result.get('score', 0)
    body.append(f"\nFinal Score: {score}%", style="bold green" if score >= 70 else "bold yellow")
    console.print(Panel(body, title="Result", border_style="blue"))

    found = results.get('requiredFiles', {}).get('found') or []
    if config.DEBUG and found:
        logger.debug(f"Files considered for {result.get('link')}: {found}")

def render_recent_results(records: List[Dict[str, Any]]):
    """Prints the recent results table; nothing when the history is empty."""
    if not records:
        console.print("[yellow]No recent results.[/yellow]")
        return

    table = Table(title="Recent Results", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Assignment", style="cyan")
    table.add_column("Submission")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Checked", style="dim")

    for i, record in enumerate(records):
        table.add_row(
            str(i + 1),
            record.get('assignmentType', 'N/A'),
            record.get('link', 'N/A'),
            f"{record.get('score', 0)}%",
            format_timestamp(record.get('timestamp'))
        )
    console.print(table)

def format_timestamp(timestamp_ms: Optional[int]) -> str:
    """Formats an epoch-milliseconds timestamp for display."""
    if not timestamp_ms:
        return "-"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime('%Y-%m-%d %H:%M')

def format_record_for_display(record: Dict[str, Any]) -> str:
    return f"{record.get('assignmentType', 'N/A')} - {record.get('link', 'N/A')} - {record.get('score', 0)}%"
