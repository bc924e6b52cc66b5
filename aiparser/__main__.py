"""CLI entry point: python -m aiparser INPUT [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from aiparser.items import ParsedResponse, ParseOptions, ProviderIdentity
from aiparser.markup import wrap_fragment
from aiparser.parser import ResponseParser
from aiparser.profiles import load_profile

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aiparser",
        description=(
            "Normalize a captured AI-chat response (ChatGPT, Gemini, Perplexity,\n"
            "Copilot, AI Overview, AI Mode, Grok) into sanitized HTML."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", metavar="INPUT",
                        help="Captured response: a JSON file, raw HTML/text file, or '-' for stdin")
    parser.add_argument("--provider", default=None, type=str.upper,
                        choices=[p.value for p in ProviderIdentity], metavar="NAME",
                        help="Skip detection and use this provider")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML option profile (default + per-provider overrides)")
    parser.add_argument("--remove-header", dest="remove_header", action="store_true", default=None,
                        help="Strip the provider's navigation chrome")
    parser.add_argument("--keep-header", dest="remove_header", action="store_false",
                        help="Keep the header even where removal is the default")
    parser.add_argument("--remove-footer", dest="remove_footer", action="store_true", default=None,
                        help="Strip the provider's input/composer chrome")
    parser.add_argument("--keep-footer", dest="remove_footer", action="store_false",
                        help="Keep the footer even where removal is the default")
    parser.add_argument("--remove-sidebar", action="store_true", default=None,
                        help="Strip the provider's side panel")
    parser.add_argument("--remove-links", action="store_true", default=None,
                        help="Make links non-interactive")
    parser.add_argument("--invert-colors", action="store_true", default=None,
                        help="Render in the opposite of the provider's default theme")
    parser.add_argument("--theme", choices=["light", "dark"], default=None,
                        help="Requested theme")
    parser.add_argument("--base-url", default=None, metavar="URL",
                        help="Override the injected <base href> (default: provider origin)")
    parser.add_argument("--format", dest="output_format", default="html",
                        choices=["html", "text", "markdown", "json"],
                        help="Output format (default: html)")
    parser.add_argument("--wrap", action="store_true", default=False,
                        help="Wrap fragment output in a locked-down HTML document")
    parser.add_argument("--detect", action="store_true", default=False,
                        help="Only print the ranked provider detection table")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="Write output to FILE instead of stdout")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _read_input(source: str) -> Any:
    """Load a captured response.  JSON is decoded; anything else is a raw string."""
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _collect_options(args: argparse.Namespace, provider: str | None) -> ParseOptions:
    cli = {
        "remove_header": args.remove_header,
        "remove_footer": args.remove_footer,
        "remove_sidebar": args.remove_sidebar,
        "remove_links": args.remove_links,
        "invert_colors": args.invert_colors,
        "theme": args.theme,
        "base_url": args.base_url,
    }
    explicit = {key: value for key, value in cli.items() if value is not None}
    base = load_profile(args.profile, provider) if args.profile else ParseOptions()
    return base.merged(explicit)


def _render(parsed: ParsedResponse, output_format: str, wrap: bool) -> str:
    if output_format == "json":
        return json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "text":
        return parsed.to_text()
    if output_format == "markdown":
        return parsed.to_markdown()
    if wrap and not parsed.metadata.get("isFullDocument"):
        return wrap_fragment(parsed.html or parsed.text or "")
    return parsed.html or parsed.text or ""


def _print_detection(parser: ResponseParser, response: Any) -> None:
    ranked = parser.detect_all_providers(response)
    best = parser.detect_provider(response)
    try:
        from rich import box
        from rich.console import Console
        from rich.table import Table

        console = Console()
        tbl = Table(box=box.SIMPLE, title="Provider detection")
        tbl.add_column("Provider", style="cyan")
        tbl.add_column("Pattern ratio", justify="right")
        tbl.add_column("Selected", justify="center")
        for result in ranked:
            chosen = "[green]✓[/green]" if str(result.provider) == best else ""
            tbl.add_row(str(result.provider), f"{result.confidence:.2f}", chosen)
        console.print(tbl)
        if not ranked:
            console.print("[yellow]No provider matched; the generic fallback would be used.[/yellow]")
    except ImportError:
        for result in ranked:
            print(f"{result.provider}\t{result.confidence:.2f}")


def _print_summary(parsed: ParsedResponse) -> None:
    try:
        from rich.console import Console
        from rich.panel import Panel

        flags = "\n".join(f"{key}: {value}" for key, value in parsed.metadata.items())
        Console(stderr=True).print(
            Panel.fit(
                f"[bold cyan]{parsed.provider}[/bold cyan]\n"
                f"HTML chars: {len(parsed.html):,}\n"
                f"Sources:    {len(parsed.sources or [])}\n"
                f"{flags}",
                border_style="cyan",
                title="[bold]Parsed[/bold]",
            ),
        )
    except ImportError:
        print(f"aiparser | {parsed.provider} | {parsed.metadata}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        response = _read_input(args.input)
    except OSError as exc:
        print(f"ERROR: Could not read {args.input}: {exc}", file=sys.stderr)
        return 1

    response_parser = ResponseParser()

    if args.detect:
        _print_detection(response_parser, response)
        return 0

    provider = args.provider or response_parser.detect_provider(response)
    options = _collect_options(args, provider)

    if args.provider:
        parsed = response_parser.parse_with_provider(response, args.provider, options)
    else:
        parsed = response_parser.parse(response, options)

    if parsed is None:
        print("ERROR: No renderable content found in input", file=sys.stderr)
        return 1

    output = _render(parsed, args.output_format, args.wrap)
    if args.out:
        Path(args.out).write_text(output, encoding="utf-8")
        _print_summary(parsed)
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
