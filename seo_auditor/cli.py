"""Typer CLI application for SEO Page Auditor.

Commands:
    audit     Render a live URL, probe it and print the audit.
    html      Audit a saved HTML file with explicit technical flags (offline).
    schema    Extract and list the structured data of a live URL.
    alt-tags  List the images of a live URL that lack alt attributes.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from seo_auditor.errors import AuditError
from seo_auditor.models import AltTagReport, AuditInput, AuditResult, Priority, SchemaReport, TechnicalFlags
from seo_auditor.settings import Settings, load_settings
from seo_auditor.utils.helpers import ensure_scheme
from seo_auditor.utils.validators import validate_url

console = Console()
app = typer.Typer(
    name="seo-audit",
    help="SEO Page Auditor -- score a single page and list what to fix.",
    add_completion=False,
    no_args_is_help=True,
)

_PRIORITY_STYLE = {
    Priority.HIGH: "[red]High[/red]",
    Priority.MEDIUM: "[yellow]Medium[/yellow]",
    Priority.LOW: "[dim]Low[/dim]",
}


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context."""
    return asyncio.run(coro)


def _load(config: Optional[Path]) -> Settings:
    return load_settings(str(config) if config else None)


def _fail(message: str) -> None:
    console.print(f"[red]✘ {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _print_audit(result: AuditResult, show_details: bool = False) -> None:
    """Pretty-print an audit result using Rich."""
    bd = result.score_breakdown
    table = Table(title=f"SEO Audit: {result.url}", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan", min_width=18)
    table.add_column("Points", justify="right")
    table.add_column("Max", justify="right")
    table.add_row("On-Page SEO", str(bd.on_page), "45")
    table.add_row("Technical SEO", str(bd.technical), "30")
    table.add_row("Local SEO", str(bd.local), "15")
    table.add_row("Social", str(bd.social), "10")
    table.add_row("[bold]Total[/bold]", f"[bold]{bd.total}[/bold]", "100")
    console.print(table)
    console.print(Panel(
        f"Grade: [bold]{bd.grade}[/bold]\n"
        f"On-Page: {bd.on_page_percentage}% ({bd.on_page_message})",
        title="Summary",
    ))

    if show_details:
        for rule in bd.details:
            style = "green" if rule.passed else "red"
            console.print(f"  [{style}]{rule}[/{style}]")

    contact = result.contact
    console.print(
        f"Phone: {contact.phone or '-'}"
        + (f" [dim]({contact.phone_source})[/dim]" if contact.phone_source else "")
    )
    console.print(
        f"Address: {contact.address or '-'}"
        + (f" [dim]({contact.address_source})[/dim]" if contact.address_source else "")
    )

    if result.recommendations:
        rec_table = Table(title="Recommendations", show_header=True, header_style="bold magenta")
        rec_table.add_column("#", justify="right")
        rec_table.add_column("Priority", min_width=8)
        rec_table.add_column("Category", style="cyan")
        rec_table.add_column("Action", max_width=70)
        for idx, rec in enumerate(result.recommendations, 1):
            rec_table.add_row(str(idx), _PRIORITY_STYLE[rec.priority], rec.category.value, rec.title)
        console.print(rec_table)


def _print_schema(report: SchemaReport) -> None:
    table = Table(title=f"Structured Data: {report.url}", show_header=True, header_style="bold magenta")
    table.add_column("Format", style="cyan")
    table.add_column("Items", justify="right")
    table.add_row("JSON-LD", str(len(report.json_ld)))
    table.add_row("Microdata", str(len(report.microdata)))
    table.add_row("RDFa", str(len(report.rdfa)))
    console.print(table)
    console.print(f"Types: {', '.join(report.types) or '-'}")


def _print_alt_tags(report: AltTagReport) -> None:
    table = Table(title=f"Alt Tags: {report.url}", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total images", str(report.total_images))
    table.add_row("Relevant images", str(report.relevant_images))
    table.add_row("With alt", str(len(report.with_alt)))
    table.add_row("Missing alt", str(len(report.without_alt)))
    table.add_row("Tracking pixels", str(report.tracking_pixels))
    table.add_row("[bold]Alt coverage[/bold]", f"[bold]{report.alt_coverage}%[/bold]")
    console.print(table)
    for image in report.without_alt:
        console.print(f"  [red]✗[/red] {image.src or '(no src)'}")


# ------------------------------------------------------------------
# audit
# ------------------------------------------------------------------
@app.command()
def audit(
    url: str = typer.Argument(..., help="Page URL (https:// is assumed when omitted)."),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    no_probe: bool = typer.Option(False, "--no-probe", help="Skip the robots.txt / sitemap.xml checks."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Alternative settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Render a live page and audit it."""
    _setup_logging(verbose)
    url = ensure_scheme(url)
    ok, error = validate_url(url)
    if not ok:
        _fail(error)

    from seo_auditor.modules.audit import PageAuditor

    try:
        auditor = PageAuditor(_load(config))
        if as_json:
            result = _run_async(auditor.audit_url(url, probe=not no_probe))
        else:
            console.print(Panel(f"[bold cyan]SEO Audit: {url}[/bold cyan]"))
            with Progress(
                SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console,
            ) as progress:
                progress.add_task(description="Rendering and auditing page...", total=None)
                result = _run_async(auditor.audit_url(url, probe=not no_probe))
    except AuditError as exc:
        _fail(exc.message)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    _print_audit(result, show_details=verbose)
    console.print("[green]✔[/green] Audit complete.")


# ------------------------------------------------------------------
# html
# ------------------------------------------------------------------
@app.command()
def html(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved (rendered) HTML file."),
    url: str = typer.Option(..., "--url", "-u", help="URL the HTML was rendered from."),
    ssl: Optional[bool] = typer.Option(None, "--ssl/--no-ssl", help="Override SSL (default: from URL scheme)."),
    robots: bool = typer.Option(False, "--robots", help="robots.txt is present."),
    sitemap: bool = typer.Option(False, "--sitemap", help="sitemap.xml is present."),
    analytics: Optional[bool] = typer.Option(
        None, "--analytics/--no-analytics", help="Override analytics detection (default: scan the HTML).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Alternative settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Audit a saved HTML file without any network access."""
    _setup_logging(verbose)
    from seo_auditor.modules.audit import PageAuditor
    from seo_auditor.modules.page_facts import detect_analytics

    url = ensure_scheme(url)
    try:
        settings = _load(config)
    except AuditError as exc:
        _fail(exc.message)

    rendered_html = file.read_text(encoding="utf-8", errors="replace")
    technical = TechnicalFlags(
        has_ssl=url.startswith("https://") if ssl is None else ssl,
        has_robots_txt=robots,
        has_sitemap=sitemap,
        has_analytics=(
            detect_analytics(rendered_html, settings.analytics_signatures) if analytics is None else analytics
        ),
    )
    result = PageAuditor(settings).audit(AuditInput(url=url, rendered_html=rendered_html, technical=technical))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    _print_audit(result, show_details=verbose)


# ------------------------------------------------------------------
# schema
# ------------------------------------------------------------------
@app.command()
def schema(
    url: str = typer.Argument(..., help="Page URL to fetch (no JavaScript rendering)."),
    as_json: bool = typer.Option(False, "--json", help="Print the extracted items as JSON."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Alternative settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """List JSON-LD, Microdata and RDFa items found on a page."""
    _setup_logging(verbose)
    from seo_auditor.modules.structured_data import SchemaValidator

    url = ensure_scheme(url)
    try:
        report = _run_async(SchemaValidator(_load(config)).validate_url(url))
    except AuditError as exc:
        _fail(exc.message)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return
    _print_schema(report)


# ------------------------------------------------------------------
# alt-tags
# ------------------------------------------------------------------
@app.command("alt-tags")
def alt_tags(
    url: str = typer.Argument(..., help="Page URL to fetch (no JavaScript rendering)."),
    as_json: bool = typer.Option(False, "--json", help="Print the full report as JSON."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Alternative settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """List images missing alt attributes (tracking pixels excluded)."""
    _setup_logging(verbose)
    from seo_auditor.modules.alt_tags import AltTagChecker

    try:
        report = _run_async(AltTagChecker(_load(config)).check_url(url))
    except AuditError as exc:
        _fail(exc.message)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return
    _print_alt_tags(report)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
