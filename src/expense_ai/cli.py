import logging
import sys
import typer
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from expense_ai.categorization import CategorizationEngine
from expense_ai.domain.enums import Period
from expense_ai.domain.models import ExpenseRecord
from expense_ai.ocr.factory import OcrEngineFactory
from expense_ai.services.receipt_service import ReceiptService, InterpretationFailedError
from expense_ai.services.record_builder import ExpenseRecordBuilder
from expense_ai.services.session import ExpenseSession

app = typer.Typer(
    name="expense-ai",
    help="Turn receipt scans into categorized expense records",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    service: Optional[ReceiptService] = None


state = State()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    )
):
    """
    Expense AI - Scan receipts, categorize them and total your spending.
    """
    configure_logging(verbose)

    if not OcrEngineFactory.get_available_engines():
        OcrEngineFactory.load_engines_from_config()

    # One session per invocation; records are not persisted
    state.service = ReceiptService(ExpenseSession(), ExpenseRecordBuilder())
    state.verbose = verbose


def _confidence_style(confidence: float) -> str:
    if confidence >= 0.8:
        return "green"
    if confidence > 0.6:
        return "yellow"
    return "red"


def _print_records(records: List[ExpenseRecord], title: str) -> None:
    records_table = Table(title=title)
    records_table.add_column("Date", style="cyan")
    records_table.add_column("Source", style="dim")
    records_table.add_column("Description", style="white", max_width=40)
    records_table.add_column("Category", style="magenta")
    records_table.add_column("Confidence", justify="right")
    records_table.add_column("Amount", justify="right", style="red")

    for record in records:
        desc = record.description[:37] + "..." if len(record.description) > 40 else record.description
        style = _confidence_style(record.confidence)
        records_table.add_row(
            str(record.date),
            record.source or "-",
            desc,
            record.category,
            f"[{style}]{record.confidence:.0%}[/{style}]",
            f"${record.amount:,.2f}",
        )

    console.print(records_table)


def _print_summary(session: ExpenseSession, period: Period, zero_fill: bool) -> None:
    total = session.running_total

    # ═══════════════════════════════════════════════════════════
    # SPENDING BY CATEGORY
    # ═══════════════════════════════════════════════════════════

    top_categories = session.top_categories()
    if top_categories:
        console.print(f"\n[bold]Spending by Category[/bold]")

        category_table = Table(show_header=True, box=None, padding=(0, 2))
        category_table.add_column("Category", style="cyan", no_wrap=True)
        category_table.add_column("Amount", justify="right", style="red")
        category_table.add_column("% of Total", justify="right", style="dim")

        for category, amount in top_categories:
            percentage = (amount / total * 100) if total > 0 else 0
            category_table.add_row(
                category,
                f"${amount:,.2f}",
                f"{percentage:.1f}%"
            )

        console.print(category_table)

    # ═══════════════════════════════════════════════════════════
    # SPENDING OVER TIME
    # ═══════════════════════════════════════════════════════════

    buckets = session.period_totals(period=period, zero_fill=zero_fill)
    if buckets:
        console.print(f"\n[bold]Spending by {period.value.capitalize()}[/bold]")

        period_table = Table(show_header=True, box=None, padding=(0, 2))
        period_table.add_column(period.value.capitalize(), style="cyan", no_wrap=True)
        period_table.add_column("Receipts", justify="right", style="dim")
        period_table.add_column("Amount", justify="right", style="red")

        for bucket in buckets:
            period_table.add_row(bucket.period, str(bucket.count), f"${bucket.total:,.2f}")

        console.print(period_table)

    console.print(Panel(
        f"[bold]Receipts:[/bold] {len(session)}\n"
        f"[bold red]💸 Running total:[/bold red] ${total:,.2f}",
        title="[bold]Session Summary[/bold]",
        border_style="cyan",
        padding=(1, 2)
    ))


@app.command(name="scan")
def scan(
    filepaths: List[Path] = typer.Argument(
        ...,
        help="Receipt images, PDFs or text files",
        file_okay=True,
        dir_okay=False
    ),
    engine: Optional[str] = typer.Option(
        None,
        "--engine", "-e",
        help="OCR engine to use for every file (tesseract, pdf, text). "
             "Defaults to picking one by file extension",
    ),
    period: Optional[Period] = typer.Option(
        None,
        "--period", "-p",
        help="Time bucket for the spending-over-time table",
        case_sensitive=False,
    ),
    zero_fill: Optional[bool] = typer.Option(
        None,
        "--zero-fill/--no-zero-fill",
        help="Show periods without receipts as zero",
    ),
):
    """
    Scan receipts and summarize the spending they contain.

    Examples:
        expense-ai scan receipt.jpg
        expense-ai scan lunch.png taxi.png invoice.pdf --period day
        expense-ai scan scan.txt --engine text --zero-fill
    """
    session = state.service.session
    failures = 0

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Scanning receipts...", total=None)

            for filepath in filepaths:
                progress.update(task, description=f"Scanning {filepath.name}...")
                try:
                    state.service.scan_receipt(filepath, engine_name=engine)
                except InterpretationFailedError as e:
                    failures += 1
                    console.print(f"[bold red]Error:[/bold red] {e}")
                    if state.verbose:
                        console.print_exception()

            progress.update(task, completed=True)

        if len(session) == 0:
            console.print(Panel(
                "[yellow]No receipts could be interpreted[/yellow]",
                title="Empty Session",
                border_style="yellow"
            ))
        else:
            _print_records(list(session.records), title=f"Scanned Receipts ({len(session)})")
            _print_summary(
                session,
                period=period or session.default_period,
                zero_fill=session.default_zero_fill if zero_fill is None else zero_fill,
            )

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)

    if failures:
        console.print(f"[yellow]⚠️  {failures} of {len(filepaths)} receipt(s) failed[/yellow]")
        raise typer.Exit(code=1)


@app.command(name="interpret")
def interpret(
    text: str = typer.Argument(
        ...,
        help="Receipt text, or '-' to read it from stdin",
    ),
):
    """
    Interpret text that was already recognized from a receipt.

    Examples:
        expense-ai interpret "Lunch at Pizza Place Total $18.40"
        tesseract receipt.png - | expense-ai interpret -
    """
    try:
        if text == "-":
            text = sys.stdin.read()

        result = state.service.record_text(text)
        _print_records([result.record], title="Interpreted Receipt")

        if state.verbose:
            console.print(f"\n[dim]→ id {result.record.id}[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="categories")
def categories():
    """
    Show the category taxonomy and its keywords.
    """
    try:
        engine = CategorizationEngine()

        console.print(Panel(
            engine.get_taxonomy_info(),
            title="[bold]Category Taxonomy[/bold]",
            border_style="magenta",
            padding=(1, 2)
        ))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
