"""
oidc-session CLI.

- main:   check-url
- config: show
"""

import typer

from oidc_session.cli.config import config_app
from oidc_session.cli.main import configure_logging, register_commands

app = typer.Typer(help="oidc-session - OpenID Connect session helper")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    oidc-session - OpenID Connect session helper.
    """
    configure_logging(verbose)


register_commands(app)

app.add_typer(config_app, name="config")

if __name__ == "__main__":
    app()
