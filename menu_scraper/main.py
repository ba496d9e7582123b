"""
Main CLI entry point for the menu crawler.
Supports multiple modes: single-url, list-from-file, html-file
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import CrawlerConfig, load_config_from_env, load_config_from_file
from .document import ParseError
from .export import MenuExporter
from .extract import MenuExtractor
from .fetch import Fetcher, FetchError, BotChallengeError
from .models import ExtractionResult

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(config: CrawlerConfig):
    """Setup structured logging"""
    handlers: List[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


async def fetch_with_retries(fetcher: Fetcher, url: str, config: CrawlerConfig) -> str:
    """Fetch with exponential backoff; bot challenges are not retried"""
    attempt = 0
    while True:
        try:
            html, _ = await fetcher.fetch(url)
            return html
        except BotChallengeError:
            raise
        except FetchError as e:
            if attempt >= config.max_retries:
                raise
            backoff = config.get_backoff(attempt)
            logger.warning(f"{e} - retrying in {backoff:.1f}s")
            await asyncio.sleep(backoff)
            attempt += 1


async def crawl_url(url: str, fetcher: Fetcher, extractor: MenuExtractor,
                    config: CrawlerConfig) -> Tuple[str, Optional[ExtractionResult], Optional[str]]:
    """Fetch and extract one page; failures are reported, not raised"""
    try:
        html = await fetch_with_retries(fetcher, url, config)
        return url, extractor.extract(html, url), None
    except (FetchError, ParseError) as e:
        return url, None, str(e)


async def crawl_urls(urls: List[str], config: CrawlerConfig,
                     extractor: MenuExtractor) -> List[Tuple[str, Optional[ExtractionResult], Optional[str]]]:
    """Crawl pages concurrently; each extraction owns its own document"""
    async with Fetcher(config) as fetcher:
        return await asyncio.gather(*(crawl_url(url, fetcher, extractor, config) for url in urls))


def print_summary(outcomes: List[Tuple[str, Optional[ExtractionResult], Optional[str]]]):
    """Rich table of per-URL results"""
    table = Table(title="Summary")
    table.add_column("URL", style="cyan")
    table.add_column("Restaurant", style="green")
    table.add_column("Items", justify="right")
    table.add_column("Status")

    for url, result, error in outcomes:
        if result is None:
            table.add_row(url, "-", "-", f"[red]✗ {error}[/red]")
        elif result.is_empty:
            table.add_row(url, result.restaurant_name, "0", "[yellow]empty[/yellow]")
        else:
            table.add_row(url, result.restaurant_name, str(len(result.items)), "[green]ok[/green]")

    console.print(table)


def build_config(args) -> CrawlerConfig:
    """Config from file or environment, then CLI overrides"""
    if args.config:
        config = load_config_from_file(args.config)
    else:
        config = load_config_from_env()

    if args.output:
        config.output_path = args.output
    if args.format:
        config.output_format = args.format
    if args.retries is not None:
        config.max_retries = args.retries
    if args.debug:
        config.debug_mode = True
        config.log_level = "DEBUG"
    return config


async def main_async(args) -> int:
    """Main async function"""
    config = build_config(args)
    setup_logging(config)

    extractor = MenuExtractor(config)
    exporter = MenuExporter(config)

    console.print("[bold green]Menu Crawler Starting[/bold green]")
    console.print(f"Mode: {args.mode}")
    console.print(f"Output: {config.output_path} ({config.output_format})")

    if args.mode == 'single-url':
        if not args.url:
            console.print("[red]Error: --url required for single-url mode[/red]")
            return 1
        outcomes = await crawl_urls([args.url], config, extractor)

    elif args.mode == 'list-from-file':
        if not args.file:
            console.print("[red]Error: --file required for list-from-file mode[/red]")
            return 1
        file_path = Path(args.file)
        if not file_path.exists():
            console.print(f"[red]Error: File not found: {args.file}[/red]")
            return 1

        # Read URLs from file (one per line)
        with open(file_path, 'r', encoding='utf-8') as f:
            urls = [line.strip() for line in f if line.strip()]

        console.print(f"[cyan]Loaded {len(urls)} URLs from file[/cyan]")
        outcomes = await crawl_urls(urls, config, extractor)

    elif args.mode == 'html-file':
        if not args.file:
            console.print("[red]Error: --file required for html-file mode[/red]")
            return 1
        file_path = Path(args.file)
        if not file_path.exists():
            console.print(f"[red]Error: File not found: {args.file}[/red]")
            return 1

        html = file_path.read_bytes()
        outcomes = [(str(file_path), extractor.extract(html, args.url), None)]

    else:
        console.print(f"[red]Error: Unknown mode: {args.mode}[/red]")
        return 1

    print_summary(outcomes)

    results = [result for _, result, _ in outcomes if result is not None]
    if not results:
        console.print("[red]Error: No page could be extracted[/red]")
        return 1

    output_file = exporter.export(results)
    console.print(f"\n[green]✓ Data exported to: {output_file}[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract restaurant menus from food-delivery pages",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--mode',
        choices=['single-url', 'list-from-file', 'html-file'],
        required=True,
        help='Crawling mode: single-url, list-from-file, or html-file'
    )

    parser.add_argument(
        '--url',
        help='Page URL (required for single-url mode, used as image origin for html-file mode)'
    )

    parser.add_argument(
        '--file',
        help='File of URLs, one per line (list-from-file) or a saved HTML page (html-file)'
    )

    parser.add_argument(
        '--config',
        help='Path to YAML configuration file'
    )

    parser.add_argument(
        '--output',
        '-o',
        help='Output file path (default: menu.json)'
    )

    parser.add_argument(
        '--format',
        choices=['json', 'csv'],
        help='Output format (default: json)'
    )

    parser.add_argument(
        '--retries',
        type=int,
        help='Fetch retries per URL'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    try:
        exit_code = asyncio.run(main_async(args))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Fatal error: {e}[/red]")
        if args.debug:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
