"""
CLI subcommands for inspecting configuration.

Usage:
    oidc-session config show [--env-file .env]
"""

import json

import typer

from oidc_session.config import ClientSettings
from oidc_session.exceptions import ConfigurationError

config_app = typer.Typer(help="Inspect OIDC client configuration")


@config_app.command("show")
def config_show(
    env_file: str = typer.Option(None, "--env-file", help="Path to a .env file"),
    prefix: str = typer.Option("OIDC_", "--prefix", help="Environment variable prefix"),
):
    """Resolve client settings from the environment and print them."""
    try:
        settings = ClientSettings.from_env(prefix=prefix, env_file=env_file)
    except ConfigurationError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    data = settings.model_dump()
    data["silent_renew_enabled"] = settings.silent_renew_enabled
    typer.echo(json.dumps(data, indent=2))
