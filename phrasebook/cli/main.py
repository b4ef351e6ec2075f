"""
Phrasebook CLI - Run feature files with the built-in step library.
"""

import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()

ENVIRONMENT_TEMPLATE = '''\
"""behave hooks: browser session and run record from phrasebook."""

from phrasebook.environment import *  # noqa: F401,F403
'''

STEPS_TEMPLATE = '''\
"""Load the phrasebook phrase catalog; add project steps below."""

import phrasebook.steps.library  # noqa: F401
'''


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _behave_args(paths, userdata, tags, dry_run):
    args = list(paths)
    for name, value in userdata.items():
        if value is not None:
            args += ["-D", f"{name}={value}"]
    for tag in tags:
        args += ["--tags", tag]
    if dry_run:
        args.append("--dry-run")
    return args


@click.group()
@click.version_option(package_name="phrasebook", prog_name="phrasebook")
def cli():
    """📖 Phrasebook - BDD step definitions for Selenium

    Run plain-language feature files against a live browser.
    """
    pass


@cli.command()
@click.argument('paths', nargs=-1, type=click.Path(exists=True))
@click.option('--headless/--headed', default=None, help='Run browser in headless mode')
@click.option('--base-url', default=None, help='Base URL for relative navigation steps')
@click.option('--version-tag', default=None, help='Screenshot subdirectory (defaults to $VERSION)')
@click.option('--screenshot-dir', default=None, help='Screenshot root directory')
@click.option('--report-dir', default='./phrasebook_reports', help='Run record output directory')
@click.option('--tags', '-t', multiple=True, help='Only run scenarios matching these behave tag expressions')
@click.option('--dry-run', is_flag=True, help='Match steps without running them')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def run(paths, headless, base_url, version_tag, screenshot_dir, report_dir, tags, dry_run, verbose):
    """
    Run feature files with behave.

    PATHS default to ./features, which must contain environment.py and
    a steps/ module loading the phrase catalog (see `phrasebook init`).

    \b
    Examples:

        phrasebook run features/login.feature --headless

        VERSION=v2 phrasebook run --base-url https://staging.example.com
    """
    from behave.__main__ import main as behave_main

    _configure_logging(verbose)

    paths = paths or ("features",)
    userdata = {
        "headless": None if headless is None else str(headless).lower(),
        "base_url": base_url,
        "version": version_tag,
        "screenshot_dir": screenshot_dir,
        "report_dir": report_dir,
    }

    console.print(Panel.fit(
        f"[bold blue]📖 Phrasebook[/bold blue]\n"
        f"[dim]{escape(', '.join(paths))}[/dim]",
        border_style="blue"
    ))

    exit_code = behave_main(_behave_args(paths, userdata, tags, dry_run))

    if exit_code == 0:
        console.print("[bold green]✅ All features passed[/bold green]")
    else:
        console.print(f"[bold red]❌ Run failed[/bold red] [dim](run records in {escape(report_dir)})[/dim]")
        raise SystemExit(exit_code)


@cli.command()
@click.argument('directory', default='features', type=click.Path(file_okay=False))
def init(directory):
    """Create the behave hooks and steps module that load Phrasebook."""
    files = [
        (os.path.join(directory, "environment.py"), ENVIRONMENT_TEMPLATE),
        (os.path.join(directory, "steps", "phrasebook_steps.py"), STEPS_TEMPLATE),
    ]

    for path, content in files:
        if os.path.exists(path):
            console.print(f"[yellow]⏭️  Kept existing {escape(path)}[/yellow]")
            continue
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        console.print(f"[green]✅ Created {escape(path)}[/green]")


@cli.command()
def steps():
    """List the available step phrases."""
    from behave.step_registry import registry as step_registry
    import phrasebook.steps.library  # noqa: F401

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Keyword", style="green", width=8)
    table.add_column("Phrase", style="yellow")

    count = 0
    for step_type in ("given", "when", "then", "step"):
        for matcher in step_registry.steps[step_type]:
            table.add_row(step_type.title(), escape(matcher.pattern))
            count += 1

    console.print(table)
    console.print(f"[dim]{count} step(s) registered[/dim]")


@cli.command()
@click.option('--features', 'features_dir', default='features', help='Features directory to check')
def doctor(features_dir):
    """
    Check that a browser starts and the features directory is wired up.
    """
    from selenium.common.exceptions import WebDriverException

    from phrasebook.core.driver_factory import create_driver

    console.print(Panel.fit(
        f"[bold cyan]🩺 Phrasebook Doctor[/bold cyan]\n"
        f"[dim]Browser and project check[/dim]",
        border_style="cyan"
    ))
    console.print()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Check", style="blue")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")

    all_good = True

    try:
        driver = create_driver(headless=True)
    except WebDriverException as e:
        all_good = False
        reason = next(iter((e.msg or str(e)).strip().splitlines()), type(e).__name__)
        table.add_row("Chrome (headless)", "[red]❌ Failed[/red]", escape(reason))
    else:
        try:
            browser_version = driver.capabilities.get("browserVersion", "unknown")
        finally:
            driver.quit()
        table.add_row("Chrome (headless)", "[green]✅ Started[/green]", f"version {escape(browser_version)}")

    for name in ("environment.py", "steps"):
        path = os.path.join(features_dir, name)
        if os.path.exists(path):
            table.add_row(escape(path), "[green]✅ Found[/green]", "")
        else:
            all_good = False
            table.add_row(escape(path), "[red]❌ Missing[/red]", "run: phrasebook init")

    console.print(table)
    console.print()

    if all_good:
        console.print("[bold green]✅ Phrasebook is ready.[/bold green]")
    else:
        console.print("[red]Some checks failed.[/red]")
        raise SystemExit(1)


@cli.command()
def version():
    """Show version information."""
    from phrasebook import __version__
    console.print(f"Phrasebook v{__version__}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
