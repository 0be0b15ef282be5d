"""Environment command: effective provider settings."""

import click

from ...config.credentials import CredentialManager


@click.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show the effective AI provider, model and API key status."""
    llm = ctx.obj.config.llm
    credentials = CredentialManager()

    ctx.obj.rich_cli.display_key_values(
        "Environment",
        {
            "Provider": llm.provider,
            "Model": llm.resolved_model,
            "API key": "set" if credentials.has_api_key() else "missing",
            "Config file": ctx.obj.config_path or "auto",
        },
    )
