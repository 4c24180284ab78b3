"""farmai - ask the configured AI provider a question from the shell."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import PROVIDER_NAMES

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Config file (default: ./farmai.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Farm assistant AI providers."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None


def _load_config(ctx: click.Context) -> dict:
    from ..core.config import get_effective_config

    try:
        return get_effective_config(ctx.obj.get("config_path"))
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.pass_context
@click.argument("prompt")
@click.option("--system", "-s", "system_prompt", type=str, help="System message")
@click.option("--provider", type=click.Choice(PROVIDER_NAMES), help="Provider override")
@click.option("--model", "-m", type=str, help="Model override")
@click.option("--max-tokens", type=int, help="Maximum tokens to generate")
@click.option("--temperature", "-t", type=float, help="Sampling temperature")
@click.option("--json", "as_json", is_flag=True, help="Print the full response as JSON")
def complete(
    ctx: click.Context,
    prompt: str,
    system_prompt: str | None,
    provider: str | None,
    model: str | None,
    max_tokens: int | None,
    temperature: float | None,
    as_json: bool,
) -> None:
    """Run one completion and print the reply.

    Example: farmai complete "ช่วยแนะนำการใส่ปุ๋ย" --provider gemini
    """
    from ..models.provider import AiCompletionOptions, AiMessage, AiRole
    from ..providers.base import ProviderError
    from ..providers.factory import get_ai_provider

    config = _load_config(ctx)
    try:
        ai_provider = get_ai_provider(config, provider_override=provider, model_override=model)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    messages = []
    if system_prompt:
        messages.append(AiMessage(role=AiRole.SYSTEM, content=system_prompt))
    messages.append(AiMessage(role=AiRole.USER, content=prompt))
    options = AiCompletionOptions(
        messages=messages, max_tokens=max_tokens, temperature=temperature
    )

    try:
        response = asyncio.run(ai_provider.complete(options))
    except ProviderError as e:
        err_console.print(f"  [red]ERROR[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if as_json:
        click.echo(response.model_dump_json(indent=2))
        return

    click.echo(response.content)
    tokens = response.tokens_used if response.tokens_used is not None else "?"
    err_console.print(
        f"  [dim]INFO[/dim] {response.provider}/{response.model} tokens={tokens}"
    )


@cli.command()
@click.pass_context
def providers(ctx: click.Context) -> None:
    """List providers, their current model and availability."""
    from ..providers.factory import ProviderRegistry

    config = _load_config(ctx)
    try:
        registry = ProviderRegistry(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title="AI providers")
    table.add_column("Provider")
    table.add_column("Name")
    table.add_column("Model")
    table.add_column("Available")
    for status in registry.get_available_providers():
        marker = "*" if status.name == registry.current_provider_name else ""
        table.add_row(
            f"{status.name}{marker}",
            status.label,
            status.model,
            "[green]yes[/green]" if status.available else "[dim]no[/dim]",
        )
    console.print(table)


@cli.command()
@click.pass_context
@click.argument("provider", type=click.Choice(PROVIDER_NAMES))
@click.option("--live", is_flag=True, help="Fetch the list from the vendor API")
def models(ctx: click.Context, provider: str, live: bool) -> None:
    """List the models a provider offers."""
    from ..core.config import resolve_api_key
    from ..providers.catalog import AVAILABLE_MODELS, fetch_models

    if live:
        config = _load_config(ctx)
        ai_config = config.get("ai", {})
        api_key = resolve_api_key(ai_config.get(provider) or {})
        options = asyncio.run(
            fetch_models(provider, api_key, timeout=ai_config.get("timeout_seconds"))
        )
    else:
        options = AVAILABLE_MODELS[provider]

    table = Table(title=f"{provider} models")
    table.add_column("Model")
    table.add_column("Name")
    table.add_column("Description")
    for option in options:
        table.add_row(option.id, option.name, option.description)
    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
