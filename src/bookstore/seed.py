"""
Loading the initial stock string.

The source can be an http(s) URL, a path to a local file, or nothing at all,
in which case the built-in stock is used. A source that can't be read gives an
empty string and the store starts out empty.
"""

import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

DEFAULT_STOCK = "\n".join(
    [
        "Mastering åäö;Average Swede;762.00;15",
        "How To Spend Money;Rich Bloke;1,000,000.00;1",
        "Generic Title;First Author;185.50;5",
        "Generic Title;Second Author;1,748.00;3",
        "Random Sales;Cunning Bastard;999.00;20",
        "Random Sales;Cunning Bastard;499.50;3",
        "Desired;Rich Bloke;564.50;0",
    ]
)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


async def fetch_stock_text(url: str, timeout_seconds: float = 10.0) -> str | None:
    """
    Download a stock string.

    Returns:
        The response body, or None if the request failed
    """
    logger.debug(f"Fetching stock from {url}")

    async with httpx.AsyncClient(timeout=timeout_seconds) as client:
        try:
            response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error fetching stock from {url}: {e}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Could not fetch stock from {url}: {e}")
            return None


def read_stock_file(path: Path) -> str | None:
    """Read a stock string from a file, None if it can't be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read stock file {path}: {e}")
        return None


async def load_seed_text(source: str | None, timeout_seconds: float = 10.0) -> str:
    """
    Get the initial stock string for a source.

    Strategy:
    1. No source: the built-in stock
    2. A URL: download it, falling back to reading it as a file
    3. Anything else: read it as a file
    """
    if source is None:
        logger.info("Using the built-in stock")
        return DEFAULT_STOCK

    if is_url(source):
        text = await fetch_stock_text(source, timeout_seconds)
        if text:
            logger.info(f"Loaded stock from {source}")
            return text

    text = read_stock_file(Path(source))
    if text is not None:
        logger.info(f"Loaded stock from file {source}")
        return text

    logger.warning(f"No stock could be loaded from {source}, starting empty")
    return ""
