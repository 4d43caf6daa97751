"""CLI for BrandSpark - AI logo generation and enhancement."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .agents import create_logo_agent
from .agents.base import LogoServiceError, ProviderNotConfiguredError, load_image_as_data_url
from .api.config import Settings
from .services.downloads import download_filename, download_payload

console = Console()
app = typer.Typer(
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


@app.callback()
def main(
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Load environment variables from this file before reading settings",
    ),
):
    """BrandSpark: generate new logo concepts or enhance an existing logo."""
    if env_file:
        if not env_file.exists():
            console.print(f"[red][X] Error:[/red] Env file not found: {env_file}")
            raise typer.Exit(1)
        load_dotenv(env_file, override=True)


def _build_agent(settings: Settings):
    try:
        return create_logo_agent(settings)
    except ProviderNotConfiguredError as e:
        console.print(f"[red][X] Error:[/red] {e}")
        console.print("[dim]Set GEMINI_API_KEY (or OPENAI_API_KEY with IMAGE_PROVIDER=openai)[/dim]")
        raise typer.Exit(1)


def _save(data_url: str, output_dir: Path, filename: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    path.write_bytes(download_payload(data_url))
    return path


@app.command()
def generate(
    brand: str = typer.Argument(..., help="Brand name"),
    prompt: str = typer.Option("", "--prompt", "-p", help="Style description (optional)"),
    output: Path = typer.Option(Path("outputs"), "--output", "-o", help="Output directory"),
):
    """
    Generate four logo variants for a brand.

    Examples:
        brandspark generate "Aperture Labs"
        brandspark generate "Aperture Labs" -p "minimalist camera shutter icon"
    """
    if not brand.strip():
        console.print("[red][X] Error:[/red] Please provide a brand name.")
        raise typer.Exit(1)

    agent = _build_agent(Settings())
    console.print(f"\n[blue][Gen] {agent.name}:[/blue] Generating logos for '{brand}'...")

    try:
        logos = asyncio.run(agent.generate_logos(brand, prompt))
    except LogoServiceError as e:
        console.print(f"[red][X] Failed to generate logos.[/red] {e}")
        raise typer.Exit(1)

    for i, logo in enumerate(logos, 1):
        path = _save(logo, output, download_filename(brand, i))
        console.print(f"[green][OK][/green] {path}")

    console.print(f"\n[bold]{len(logos)} logos saved to {output}/[/bold]")


@app.command()
def enhance(
    image: Path = typer.Argument(..., help="Logo or sketch to enhance"),
    prompt: str = typer.Argument(..., help="Description of the changes"),
    brand: str = typer.Option("", "--brand", "-b", help="Brand name used in the filename"),
    output: Path = typer.Option(Path("outputs"), "--output", "-o", help="Output directory"),
):
    """
    Enhance an existing logo following a change description.

    Example:
        brandspark enhance sketch.png "make this logo look 3D"
    """
    if not image.exists():
        console.print(f"[red][X] Error:[/red] Image not found: {image}")
        raise typer.Exit(1)
    if not prompt.strip():
        console.print("[red][X] Error:[/red] Please provide a description of the changes you want.")
        raise typer.Exit(1)

    agent = _build_agent(Settings())
    console.print(f"\n[blue][Edit] {agent.name}:[/blue] Enhancing {image.name}...")

    try:
        enhanced = asyncio.run(agent.enhance_logo(load_image_as_data_url(image), prompt))
    except LogoServiceError as e:
        console.print(f"[red][X] Failed to enhance logo.[/red] {e}")
        raise typer.Exit(1)

    path = _save(enhanced, output, download_filename(brand, 1))
    console.print(f"[green][OK][/green] {path}")


@app.command()
def info():
    """Show the configured image provider and models."""
    settings = Settings()

    table = Table(title="BrandSpark configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Provider", settings.IMAGE_PROVIDER)
    if settings.IMAGE_PROVIDER == "openai":
        table.add_row("Model", settings.OPENAI_IMAGE_MODEL)
    else:
        table.add_row("Generation model", settings.GEMINI_IMAGE_MODEL)
        table.add_row("Edit model", settings.GEMINI_EDIT_MODEL)
    table.add_row("API key", "[green]set[/green]" if settings.provider_api_key else "[red]missing[/red]")
    table.add_row("Environment", settings.ENVIRONMENT)

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Server host"),
    port: int = typer.Option(8000, "--port", "-p", help="Server port"),
    reload: bool = typer.Option(False, "--reload", help="Hot reload for development"),
):
    """
    Start the BrandSpark server (studio page + API).

    Examples:
        brandspark serve                    # http://localhost:8000
        brandspark serve --port 3001
        brandspark serve --reload
    """
    import uvicorn

    console.print("\n[bold]BrandSpark Server[/bold]")
    console.print(f"  Studio: http://{host}:{port}/")
    console.print(f"  Docs: http://{host}:{port}/docs")
    console.print(f"  Reload: {'Yes' if reload else 'No'}")
    console.print()

    uvicorn.run(
        "brandspark.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
