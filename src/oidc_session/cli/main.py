"""
Top-level CLI commands: check-url.
"""

import typer

from oidc_session.navigation import is_callback_url, strip_query


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from oidc_session.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING")


def check_url(
    url: str = typer.Argument(help="Address the application was loaded with"),
):
    """Tell whether a URL looks like a provider callback."""
    if is_callback_url(url):
        typer.echo("✅ Provider callback")
    else:
        typer.echo("➖ Not a provider callback")
    typer.echo(f"Bare path: {strip_query(url)}")


def register_commands(app: typer.Typer):
    app.command("check-url")(check_url)
