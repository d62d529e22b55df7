"""Command-line interface for attribution_document.

Provides the main entry point and subcommands for generating attribution
documents and managing the license text cache.
"""

import asyncio
import io
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from jinja2 import TemplateError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from attribution_document.cache import LicenseTextCache
from attribution_document.emitters import HtmlDocumentEmitter
from attribution_document.licenses import collect_licenses
from attribution_document.models import AnalysisResult
from attribution_document.network import NetworkConfig
from attribution_document.providers import (
    CachedLicenseTextProvider,
    ChainedLicenseTextProvider,
    DirectoryLicenseTextProvider,
    LicenseTextProvider,
    SpdxLicenseTextFetcher,
)
from attribution_document.readers import get_reader
from attribution_document.reporter import (
    TEMPLATE_ID,
    TEMPLATE_PATH,
    AttributionDocumentReporter,
    ProjectCountError,
)

app = typer.Typer(
    name="attribution-document",
    help="Generate license attribution documents from dependency analysis results.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("attribution_document")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("attribution_document").setLevel(level)


def _all_license_ids(result: AnalysisResult) -> list[str]:
    """Return the selected licenses of all packages and projects."""
    ids: set[str] = set()
    for record in (*result.packages, *result.projects):
        ids.update(collect_licenses(record.id, result))
    return sorted(ids)


async def _prefetch_license_texts(
    license_ids: list[str],
    cache: LicenseTextCache,
    network: NetworkConfig,
) -> int:
    """Download missing SPDX license texts into the cache.

    Returns:
        Number of licenses that have a text afterwards.
    """
    async with SpdxLicenseTextFetcher(network=network) as fetcher:
        texts = await fetcher.fetch_batch(license_ids, cache=cache)
    return sum(1 for text in texts.values() if text is not None)


def _build_text_provider(
    license_texts: list[Path],
    cache: Optional[LicenseTextCache],
) -> LicenseTextProvider:
    providers: list[LicenseTextProvider] = []
    if license_texts:
        providers.append(DirectoryLicenseTextProvider(license_texts))
    if cache is not None:
        providers.append(CachedLicenseTextProvider(cache))
    return ChainedLicenseTextProvider(providers)


@app.command()
def generate(
    input_file: Annotated[
        Path,
        typer.Option(
            "--input",
            "-i",
            help="Path to the analysis result (JSON)",
            exists=True,
            readable=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output file path",
        ),
    ] = Path("attribution-document.html"),
    template_id: Annotated[
        Optional[str],
        typer.Option(
            "--template-id",
            help="Identifier of a custom template (requires --template-path)",
        ),
    ] = None,
    template_path: Annotated[
        Optional[Path],
        typer.Option(
            "--template-path",
            help="Directory containing custom templates (requires --template-id)",
            exists=True,
            file_okay=False,
        ),
    ] = None,
    license_texts: Annotated[
        Optional[list[Path]],
        typer.Option(
            "--license-texts",
            "-l",
            help="Directory with license text files named after the license",
            exists=True,
            file_okay=False,
        ),
    ] = None,
    fetch_spdx_texts: Annotated[
        bool,
        typer.Option(
            "--fetch-spdx-texts",
            help="Download missing license texts from the SPDX license list",
        ),
    ] = False,
    proxy: Annotated[
        Optional[str],
        typer.Option(
            "--proxy",
            envvar="ATTRIBUTION_DOCUMENT_PROXY",
            help="Proxy URL for downloads, may contain user:password",
        ),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option(
            "--no-cache",
            help="Do not use cached license texts",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Generate an attribution document.

    Reads a dependency analysis result, selects the licenses and copyrights
    of every package, and renders them into a single document.
    """
    _setup_logging(verbose)

    if (template_id is None) != (template_path is None):
        console.print(
            "[yellow]Warning: --template-id and --template-path must be given "
            "together, using the default template[/yellow]"
        )

    try:
        reader = get_reader(input_file)
        if verbose:
            console.print(f"[dim]Using reader: {reader.source_name}[/dim]")
        result = reader.read()
    except (ValueError, FileNotFoundError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(
        f"Found [bold]{len(result.packages)}[/bold] packages "
        f"in [bold]{len(result.projects)}[/bold] project(s)"
    )

    cache = None if no_cache else LicenseTextCache()

    if fetch_spdx_texts:
        if cache is None:
            err_console.print("[red]Error:[/red] --fetch-spdx-texts requires the cache")
            raise typer.Exit(code=1)

        network = NetworkConfig.from_proxy_url(proxy) if proxy else NetworkConfig.from_env()
        license_ids = _all_license_ids(result)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Fetching license texts...", total=None)
            found = asyncio.run(_prefetch_license_texts(license_ids, cache, network))
            progress.update(task, completed=True)

        console.print(f"License texts available for [bold]{found}[/bold]/{len(license_ids)} licenses")

    options: dict[str, str] = {}
    if template_id is not None:
        options[TEMPLATE_ID] = template_id
    if template_path is not None:
        options[TEMPLATE_PATH] = str(template_path)

    reporter = AttributionDocumentReporter(
        emitter=HtmlDocumentEmitter(filename=output.name),
        text_provider=_build_text_provider(license_texts or [], cache),
    )

    buffer = io.BytesIO()
    try:
        written = reporter.generate_report(buffer, result, options)
    except ProjectCountError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except (TemplateError, OSError) as e:
        err_console.print(f"[red]Error generating document:[/red] {e}")
        raise typer.Exit(code=1)

    if written is None:
        console.print("[yellow]No document was produced[/yellow]")
        raise typer.Exit(code=0)

    try:
        output.write_bytes(buffer.getvalue())
    except OSError as e:
        err_console.print(f"[red]Error writing output:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]Generated:[/green] {output}")


@app.command()
def cache(
    action: Annotated[
        str,
        typer.Argument(help="Cache action: 'show' or 'clear'"),
    ],
    license_id: Annotated[
        Optional[str],
        typer.Argument(help="Specific license to clear (optional)"),
    ] = None,
) -> None:
    """Manage the license text cache.

    Actions:
        show  - Display cache location, entry count, and size
        clear - Clear all cached texts (or a specific license)
    """
    cache_instance = LicenseTextCache()

    if action == "show":
        info = cache_instance.info()
        console.print(f"[bold]Cache Location:[/bold] {info['path']}")
        console.print(f"[bold]Entries:[/bold] {info['count']}")
        console.print(f"[bold]Size:[/bold] {info['size_bytes'] / 1024:.1f} KB")

    elif action == "clear":
        if license_id:
            cache_instance.clear(license_id=license_id)
            console.print(f"[green]Cleared cache for:[/green] {license_id}")
        else:
            cache_instance.clear()
            console.print("[green]Cache cleared[/green]")

    else:
        err_console.print(f"[red]Unknown action:[/red] {action}")
        err_console.print("Valid actions: show, clear")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
