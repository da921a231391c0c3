"""
Settling a list of books against the stock.

Settlement only quotes: it reports which books can be bought and what they
cost without touching the stock. `commit` is the separate step that takes the
bought copies out of the stock.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from .books import Book
from .stock import BookStock, ReducedStock

logger = logging.getLogger(__name__)


class BuyStatus(str, Enum):
    """Outcome for a single book in a purchase."""

    OK = "ok"  # Available, counted in the total
    NOT_IN_STOCK = "not_in_stock"  # Stocked, but none left for this copy
    DOES_NOT_EXIST = "does_not_exist"  # Not in the stock at all


@dataclass
class Settlement:
    """Statuses for each book, in input order, and the total price."""

    books: list[Book] = field(default_factory=list)
    statuses: list[BuyStatus] = field(default_factory=list)
    total_price: Decimal = Decimal(0)

    @property
    def bought(self) -> list[Book]:
        """Books with status OK."""
        return [
            book
            for book, status in zip(self.books, self.statuses)
            if status == BuyStatus.OK
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "lines": [
                {**book.to_dict(), "status": status.value}
                for book, status in zip(self.books, self.statuses)
            ],
            "total_price": str(self.total_price),
        }


def settle(books: Sequence[Book], stock: BookStock) -> Settlement:
    """
    Work out which books can be bought from the stock.

    The quantity of each distinct book is read once and used as a running
    balance while walking the books in input order. Copies are granted first
    come, first served: with two in stock and the same book three times in a
    row, the first two are OK and the third is NOT_IN_STOCK.
    """
    balances = stock.snapshot_quantities(books)
    statuses: list[BuyStatus] = []

    for book in books:
        balance = balances[book]
        if balance is None:
            statuses.append(BuyStatus.DOES_NOT_EXIST)
        elif balance <= 0:
            statuses.append(BuyStatus.NOT_IN_STOCK)
        else:
            statuses.append(BuyStatus.OK)
            balances[book] = balance - 1

    total = get_total_price(books, statuses)
    logger.debug(
        f"Settled {len(books)} book(s): "
        f"{statuses.count(BuyStatus.OK)} available, total {total}"
    )
    return Settlement(books=list(books), statuses=statuses, total_price=total)


def get_total_price(books: Sequence[Book], statuses: Sequence[BuyStatus]) -> Decimal:
    """
    Sum the prices of the books whose status is OK.

    Raises:
        ValueError: if the sequences have different lengths
    """
    if len(books) != len(statuses):
        raise ValueError("Books and statuses need to have the same length")
    return sum(
        (book.price for book, status in zip(books, statuses) if status == BuyStatus.OK),
        Decimal(0),
    )


def commit(settlement: Settlement, stock: BookStock) -> list[ReducedStock]:
    """
    Take every book with status OK out of the stock, one copy per line.

    Books that disappeared from the stock since the settlement, or ran out
    in the meantime, are skipped.
    """
    reduced: list[ReducedStock] = []
    for book in settlement.bought:
        book_id = stock.get_book_id(book)
        if book_id is None:
            logger.warning(f"Book {book.title!r} left the stock before commit")
            continue
        result = stock.reduce_quantity(book_id, 1)
        if result is None or result.removed == 0:
            logger.warning(f"Book {book.title!r} ran out before commit")
            continue
        reduced.append(result)
    logger.info(f"Committed purchase of {len(reduced)} book(s)")
    return reduced
