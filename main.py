# main.py

"""Entry point for price_scraper (HTTP server or one-shot CLI scrape)."""

import argparse
import asyncio
import logging
import sys

from price_scraper.config.logging_config import setup_logging
from price_scraper.config.settings import Settings

logger = logging.getLogger("price_scraper.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="price_scraper",
        description="UK product page price scraper.",
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help="Product URL. Omit to start the HTTP server.",
    )
    parser.add_argument(
        "--html",
        default=None,
        dest="html_path",
        help="Extract from a saved HTML file instead of a live browser.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format for a one-shot scrape (default: json).",
    )
    parser.add_argument(
        "--host",
        default=None,
        help=f"Server bind address (default: {Settings.HOST}).",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help=f"Server port (default: {Settings.PORT}).",
    )
    return parser


def _run_server(args: argparse.Namespace) -> None:
    """Serve ``/scrape`` over HTTP until interrupted."""
    import uvicorn

    from price_scraper.api.app import create_app

    host = args.host or Settings.HOST
    port = args.port or Settings.PORT
    logger.info("UK price scraper listening on %s:%d", host, port)
    try:
        uvicorn.run(create_app(), host=host, port=port, log_config=None)
    except Exception:
        logger.critical("Fatal error in HTTP server", exc_info=True)
        raise
    finally:
        logger.info("price_scraper server shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a single headless scrape and exit."""
    from price_scraper.cli.runner import cli_scrape

    exit_code = asyncio.run(
        cli_scrape(
            url=args.url,
            html_path=args.html_path,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def main() -> None:
    """Route to the server (no URL) or a one-shot scrape."""
    parser = _build_parser()
    args = parser.parse_args()
    serving = args.url is None and args.html_path is None

    log_file = setup_logging(
        console_level=logging.INFO if serving else logging.WARNING,
        serving=serving,
    )
    logger.info("price_scraper starting, log file: %s", log_file)

    if serving:
        _run_server(args)
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
