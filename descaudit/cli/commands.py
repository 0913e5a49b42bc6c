"""
Command-line interface for descaudit.

This module provides CLI commands for auditing and correcting descriptions
and for running the style linters over a set of files.
"""

import json
import sys
import click
import logging
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..core.matcher import DescriptionToken, QUOTE_CHARS
from ..core.rules import DescriptionRuleEngine
from ..core.corrector import DescriptionCorrector
from ..core.reporter import ReportRenderer
from ..core.style import StyleChecker
from ..core.errors import DescAuditError

console = Console()

logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def parse_token(description: str) -> DescriptionToken:
    """Use a quoted argument as-is, wrap bare text in double quotes."""
    if len(description) >= 2 and description[0] in QUOTE_CHARS and description[-1] == description[0]:
        return DescriptionToken(description)
    return DescriptionToken.from_text(description)


def split_cops(value):
    if not value:
        return None
    return [cop.strip() for cop in value.split(',') if cop.strip()]


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx, verbose):
    """descaudit - audit descriptions and run style checks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


@main.command()
@click.argument('description', required=False)
@click.option('--name', '-n', default='', help='Name of the formula or cask')
@click.option('--kind', '-k', type=click.Choice(['formula', 'cask']), default='formula',
              help='Kind of item being described')
@click.option('--missing', is_flag=True, help='Audit an item that has no description at all')
def audit(description, name, kind, missing):
    """Audit a description against the style rules."""
    token = None if missing or description is None else parse_token(description)

    engine = DescriptionRuleEngine()
    renderer = ReportRenderer()
    problems = engine.audit(kind, name, token)

    if not problems:
        console.print("[green]Description looks good![/green]")
        return

    for problem in problems:
        console.print(Text(renderer.render_problem(problem), style="yellow"))
    console.print(f"\n[bold]{len(problems)} problem(s) found[/bold]")
    sys.exit(1)


@main.command()
@click.argument('description')
@click.option('--name', '-n', default='', help='Name of the formula or cask')
def correct(description, name):
    """Print the auto-corrected form of a description."""
    corrector = DescriptionCorrector()
    replacement = corrector.correct(parse_token(description), name)

    if replacement is None:
        console.print("[yellow]No correction possible for this description[/yellow]")
        sys.exit(1)

    if not replacement.changed:
        console.print("[green]No changes needed[/green]")
    click.echo(replacement.replacement)


@main.command()
@click.argument('files', nargs=-1, type=click.Path())
@click.option('--fix', is_flag=True, help='Auto-correct offenses instead of running in parallel')
@click.option('--except-cops', help='Comma-separated cops or departments to skip')
@click.option('--only-cops', help='Comma-separated cops or departments to run')
@click.option('--display-cop-names', is_flag=True, help='Show cop names next to offenses')
@click.option('--debug', is_flag=True, help='Pass --debug to the linter')
@click.option('--json', 'as_json', is_flag=True, help='Collect offenses from the JSON report')
@click.option('--output', '-o', type=click.Path(), help='Output file for the JSON report')
@click.pass_context
def style(ctx, files, fix, except_cops, only_cops, display_cop_names, debug, as_json, output):
    """Run the style linters over FILES (or the whole library)."""
    if except_cops and only_cops:
        raise click.UsageError("--except-cops and --only-cops are mutually exclusive")

    verbose = ctx.obj.get("verbose", False)
    checker = StyleChecker()
    options = dict(
        fix=fix,
        except_cops=split_cops(except_cops),
        only_cops=split_cops(only_cops),
        display_cop_names=display_cop_names,
        verbose=verbose,
    )

    try:
        if not as_json:
            success = checker.check_style_and_print(list(files), debug=debug, **options)
            sys.exit(0 if success else 1)

        result = checker.check_style_json(list(files), **options)
    except DescAuditError as e:
        console.print(Text(f"Error: {e}", style="red"))
        sys.exit(1)

    display_run_result(result, display_cop_names or verbose)

    if output:
        save_report_to_file(ReportRenderer().export_report(result), output)
        console.print(f"[green]Report saved to {output}[/green]")

    sys.exit(1 if result.offense_count else 0)


def display_run_result(result, show_rule_id):
    """Display offenses per file followed by a summary table."""
    renderer = ReportRenderer()

    for path in result.paths:
        console.print(Text(f"== {path} ==", style="bold cyan"))
        for offense in result.file_offenses(path):
            console.print(renderer.render_text(offense, show_rule_id))

    summary_text = (
        f"Offending Files: {len(result.paths)}\n"
        f"Offenses: {result.offense_count}\n"
        f"Corrected: {result.corrected_count}"
    )
    console.print(Panel(summary_text, title="Style Summary", border_style="blue"))

    counts = result.counts_by_cop()
    if not counts:
        return

    table = Table(title="Offenses by Cop")
    table.add_column("Cop", style="cyan")
    table.add_column("Count", justify="center")
    for cop_name, count in counts.items():
        table.add_row(cop_name, str(count))
    console.print(table)


def save_report_to_file(report_data, output_path):
    """Save the JSON-equivalent report to a file."""
    with open(output_path, 'w') as f:
        json.dump(report_data, f, indent=2)


if __name__ == '__main__':
    main()
