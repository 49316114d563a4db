"""CLI commands for Pepper Pal."""

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pepperpal import __logo__, __version__

app = typer.Typer(
    name="pepperpal",
    help=f"{__logo__} Pepper Pal - Peppercoin community assistant",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(enabled: bool, level: str = "INFO") -> None:
    """Library code never touches sinks; the CLI owns them."""
    logger.remove()
    if enabled:
        logger.add(sys.stderr, level=level.upper())
        logger.enable("pepperpal")
    else:
        logger.disable("pepperpal")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} Pepper Pal v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """Pepper Pal - Peppercoin community assistant."""
    pass


# ============================================================================
# One-shot commands
# ============================================================================


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    user: str = typer.Option("cli", "--user", "-u", help="Sender id used for rate limiting"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show runtime logs"),
):
    """Run one question through the full pipeline."""
    from pepperpal.bus.events import InboundMessage
    from pepperpal.service import ChatService
    from pepperpal.settings import get_settings

    settings = get_settings()
    _configure_logging(logs, settings.log_level)

    if not settings.ai_configured:
        console.print("[yellow]No OpenRouter API key set; only template answers will work.[/yellow]")

    service = ChatService.from_settings(settings)
    message = InboundMessage(channel="cli", sender_id=user, chat_id=user, content=question)

    async def run_once():
        with console.status("[dim]Pepper Pal is thinking...[/dim]", spinner="dots"):
            return await service.ask(message)

    reply = asyncio.run(run_once())
    if reply is None:
        console.print("[dim](no reply)[/dim]")
        return

    console.print(f"[cyan]{__logo__} Pepper Pal[/cyan]")
    console.print(Text(reply.content))
    elapsed = reply.metadata.get("processing_time_ms")
    if elapsed is not None:
        console.print(f"[dim]{elapsed:.0f} ms[/dim]")


@app.command()
def classify(
    question: str = typer.Argument(..., help="Question to analyse"),
):
    """Show how a question would be classified and planned (no model call)."""
    from pepperpal.pipeline.classifier import classify as classify_query
    from pepperpal.pipeline.planner import plan
    from pepperpal.safety.intent_detector import check_forbidden

    _configure_logging(False)

    forbidden = check_forbidden(question)
    classification = classify_query(question)
    response_plan = plan(classification)

    table = Table(title="Classification")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("forbidden", forbidden.intent or "no")
    table.add_row("intent", classification.intent.value)
    table.add_row("complexity", str(classification.complexity))
    table.add_row("length bucket", classification.length_bucket.value)
    table.add_row("response class", classification.response_class.value)
    table.add_row("char budget", str(classification.char_budget))
    table.add_row("keywords", ", ".join(classification.keywords) or "-")
    table.add_row("strategy", response_plan.strategy.value)
    table.add_row("model tier", response_plan.model_tier.value)
    table.add_row("split", "yes" if response_plan.should_split else "no")
    table.add_row("sections", ", ".join(response_plan.knowledge_sections))

    console.print(table)


# ============================================================================
# Bot
# ============================================================================


@app.command()
def run(
    proxy: str = typer.Option(None, "--proxy", help="HTTP proxy for the Telegram API"),
):
    """Start the Telegram bot (long polling)."""
    from pepperpal.channels.telegram import TelegramChannel
    from pepperpal.service import ChatService
    from pepperpal.settings import get_settings

    settings = get_settings()
    _configure_logging(True, settings.log_level)

    if not settings.bot_token:
        console.print("[red]Error: PEPPERPAL_BOT_TOKEN is not set.[/red]")
        raise typer.Exit(1)
    if not settings.ai_configured:
        console.print("[yellow]Warning: no OpenRouter API key; generated answers will fail.[/yellow]")

    service = ChatService.from_settings(settings)
    if not service.knowledge.is_available():
        console.print(f"[yellow]Warning: knowledge unavailable ({settings.knowledge_path})[/yellow]")

    channel = TelegramChannel(settings.bot_token, service, proxy=proxy)
    console.print(f"{__logo__} Starting Pepper Pal as @{settings.bot_username}...")

    async def serve():
        try:
            await channel.start()
        finally:
            await channel.stop()

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        console.print("\nShutting down...")


if __name__ == "__main__":
    app()
