import typer
from typing_extensions import Annotated
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from pathlib import Path
import asyncio
import logging

from clonesome import __version__
from clonesome.chat import generate_character_response
from clonesome.core import generate_image_core
from clonesome.models import GenerationRequest
from clonesome.config import settings
from clonesome.prompts import STYLE_SUFFIXES
from clonesome.utils import (
    generate_filename,
    get_image_extension,
    sanitize_filename,
    save_image_from_url,
)

app = typer.Typer(
    name="clonesome",
    help="🎭 Generate character images and chat with CloneSome AI characters.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"CloneSome Version: [bold green]{__version__}[/bold green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log engine activity at DEBUG level."),
    ] = False,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    prompt: Annotated[
        str | None,
        typer.Option(
            "--prompt",
            "-p",
            help="Description of the character to draw. If not provided, you will be asked to enter it.",
            show_default=False,
        ),
    ] = None,
    style: Annotated[
        str,
        typer.Option(
            "--style",
            "-s",
            help=f"Style preset ({', '.join(STYLE_SUFFIXES)}). Unknown styles are sent as-is.",
        ),
    ] = "realistic",
    width: Annotated[int, typer.Option(min=1, help="Image width in pixels.")] = 1024,
    height: Annotated[int, typer.Option(min=1, help="Image height in pixels.")] = 1024,
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            help="Download the generated image into the output directory.",
            is_flag=True,
        ),
    ] = False,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Filename for --save (e.g., hero.png). If not provided, one will be generated.",
        ),
    ] = None,
):
    if not settings.provider.api_token:
        console.print(
            "[bold red]Error:[/bold red] No provider token configured. Set CLONESOME__PROVIDER__API_TOKEN or REPLICATE_API_TOKEN."
        )
        raise typer.Exit(code=1)

    if prompt is None:
        prompt = typer.prompt("Please enter the prompt for image generation")

    console.print(f"🖼️ Generating [bold cyan]{style}[/bold cyan] image")
    console.print(f'📜 Prompt: "{prompt}"')
    request = GenerationRequest(prompt=prompt, style=style, width=width, height=height)

    with console.status("[spinner]Processing...", spinner="dots"):
        result = asyncio.run(generate_image_core(request))

    if not result.success:
        console.print(
            f"\n[bold red]Error generating image ({result.status_code}):[/bold red] {result.error}"
        )
        raise typer.Exit(code=1)

    success_message = f"Image generated successfully! URL: [blue]{result.image_url}[/blue]"
    if save:
        if output:
            filename = sanitize_filename(output)
        else:
            filename = generate_filename(
                prompt=prompt, extension=get_image_extension(result.image_url)
            )
        saved_path = asyncio.run(
            save_image_from_url(result.image_url, Path(settings.output_dir) / filename)
        )
        if saved_path:
            success_message += f"\nSaved to: [green]{saved_path}[/green]"
        else:
            success_message += "\n[yellow]Download failed; the URL above is still valid.[/yellow]"
    console.print(
        Panel(
            success_message,
            title="[bold green]Success ✨[/bold green]",
            expand=False,
        )
    )


@app.command()
def chat(
    message: Annotated[str, typer.Argument(help="What you say to the character.")],
    personality: Annotated[
        str,
        typer.Option(
            "--personality",
            "-P",
            help="Character personality description (e.g., 'warm and friendly').",
        ),
    ],
):
    if not message.strip() or not personality.strip():
        console.print(
            "[bold red]Error:[/bold red] Message and character personality are required."
        )
        raise typer.Exit(code=1)
    console.print(
        Panel(
            generate_character_response(message, personality),
            title="[bold magenta]Character[/bold magenta]",
            expand=False,
        )
    )


@app.command(name="show-config")
def show_config_command():
    provider = settings.provider
    table = Table(title="⚙️ CloneSome Provider Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")
    table.add_row("API Token", "✅ Set" if provider.api_token else "⚠️ Not Set")
    table.add_row("Base URL", str(provider.base_url))
    table.add_row("Model Version", provider.model_version)
    table.add_row("Inference Steps", str(provider.num_inference_steps))
    table.add_row("Poll Interval", f"{provider.poll_interval}s")
    table.add_row("Max Poll Attempts", str(provider.max_poll_attempts))
    table.add_row(
        "Poll Timeout",
        f"{provider.poll_timeout}s" if provider.poll_timeout else "None",
    )
    table.add_row("Output Directory", settings.output_dir)
    console.print(table)


if __name__ == "__main__":
    app()
