"""
CLI runner for the bookstore console.

Usage:
    python -m bookstore.run [OPTIONS]

    # Start with the built-in stock
    python -m bookstore.run

    # Start with stock from a URL or a file
    python -m bookstore.run --seed https://example.org/books.txt
    python -m bookstore.run --seed books.txt
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import StoreConfig
from .console import ConsoleBookStore
from .seed import load_seed_text
from .store import BookStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("bookstore")


def build_console(config: StoreConfig) -> ConsoleBookStore:
    """Create a console with a store stocked from the configured seed."""
    console = ConsoleBookStore(
        store=BookStore(),
        commit_purchases=config.console.commit_purchases,
        prompt=config.console.prompt,
    )

    stock_string = asyncio.run(
        load_seed_text(config.seed.source, config.seed.timeout_seconds)
    )
    if stock_string:
        console.add_stock(stock_string)
    else:
        logger.warning("Starting with an empty stock")
    return console


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="bookstore: In-memory book stock and shopping cart console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Start with the built-in stock
    python -m bookstore.run

    # Load the stock from a URL, falling back to a file with that name
    python -m bookstore.run --seed https://example.org/books.txt

    # Take bought books out of the stock
    python -m bookstore.run --commit
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("bookstore.yaml"),
        help="Path to config file (default: bookstore.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        help="URL or file with the initial stock (title;author;price;quantity per line)",
    )
    parser.add_argument(
        "--commit",
        action="store_true",
        help="Remove bought books from the stock when buying",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Load config
    config = StoreConfig.from_yaml(args.config)
    if args.seed:
        config.seed.source = args.seed
    if args.commit:
        config.console.commit_purchases = True

    logger.info(f"Config loaded from {args.config}")
    logger.info(f"Seed: {config.seed.source or 'built-in stock'}")

    console = build_console(config)
    try:
        console.start()
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
