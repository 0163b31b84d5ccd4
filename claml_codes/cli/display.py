"""Rich display utilities for CLI output."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from claml_codes.models.code import Code, CodeMeta
from claml_codes.search.index import SearchHit

console = Console()


def format_age_range(meta: CodeMeta) -> str:
    """Format the age bounds of a code.

    Args:
        meta: Code metadata.

    Returns:
        Range such as '1-17', '>= 65', or 'any'.
    """
    if meta.min_age is None and meta.max_age is None:
        return "any"
    if meta.max_age is None:
        return f">= {meta.min_age}"
    if meta.min_age is None:
        return f"<= {meta.max_age}"
    return f"{meta.min_age}-{meta.max_age}"


def format_flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def create_hits_table(hits: list[SearchHit], query: str) -> Table:
    """Create a table listing search hits.

    Args:
        hits: Ordered search hits.
        query: The query, shown in the title.

    Returns:
        Rich Table object.
    """
    table = Table(title=f"Results for '{query}'", show_header=True)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Label", style="white")
    table.add_column("Modifier", style="magenta")
    table.add_column("Score", justify="right")

    for hit in hits:
        table.add_row(
            hit.code.code,
            hit.code.label,
            hit.code.modifier_label or "",
            str(hit.score),
        )

    return table


def create_children_table(code: Code) -> Table:
    """Create a table of a code's direct children."""
    table = Table(title=f"Children of {code.code}", show_header=True)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Label", style="white")
    table.add_column("Children", justify="right", style="dim")

    for child in code.sub_codes:
        table.add_row(child.code, child.full_label, str(len(child.sub_codes)))

    return table


def create_code_panel(code: Code) -> Panel:
    """Create a panel displaying a code's label and metadata.

    Args:
        code: Code to display.

    Returns:
        Rich Panel object.
    """
    meta = code.meta
    lines = [
        f"[bold]Code:[/bold] {code.code}",
        f"[bold]Label:[/bold] {code.label}",
    ]
    if code.modifier_label:
        lines.append(f"[bold]Modifier:[/bold] {code.modifier_label}")
    lines.extend([
        "",
        "[bold cyan]Applicability[/bold cyan]",
        f"  Ambulatory: {format_flag(meta.applicable_for_ambulatory)}",
        f"  Stationary: {format_flag(meta.applicable_for_stationary)}",
        f"  Age: {format_age_range(meta)}",
        f"  Sex: {meta.sex.value if meta.sex else 'any'}",
    ])

    return Panel(
        "\n".join(lines),
        title=f"[bold]{code.code}[/bold]",
        border_style="blue",
    )


def print_error(message: str) -> None:
    """Print an error message.

    Args:
        message: Error message to display.
    """
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message to display.
    """
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message to display.
    """
    console.print(f"[bold blue]Info:[/bold blue] {message}")
