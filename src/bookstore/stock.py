"""
Book stock ledger.

Every distinct book gets an id the first time it is stocked. Ids count up from
0 and are never handed out again, even after the book is removed.
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from .books import Book, parse_books

logger = logging.getLogger(__name__)


class RemovedStock(NamedTuple):
    """A book taken out of the stock together with the quantity it had."""

    book: Book
    quantity: int


class ReducedStock(NamedTuple):
    """A book whose quantity was reduced and how much was actually removed."""

    book: Book
    removed: int


def matches_prefix(query: str, book: Book) -> bool:
    """
    Check if the query matches the beginning of the book's title or author.

    Each field is cut to the length of the query before a case-insensitive
    comparison, so a query longer than a field never matches that field.
    """
    needle = query.casefold()
    return any(
        len(field) >= len(query) and field[: len(query)].casefold() == needle
        for field in (book.title, book.author)
    )


class BookStock:
    """
    In-memory ledger of books, their ids and quantities.

    Lookups for unknown ids or books return None rather than raising.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._next_id = 0
        self._books: dict[int, Book] = {}
        self._quantities: dict[int, int] = {}
        self._book_ids: dict[Book, int] = {}

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book: object) -> bool:
        return book in self._book_ids

    # -------------------------------------------------------------------------
    # Adding
    # -------------------------------------------------------------------------

    def add_book(self, book: Book, quantity: int) -> int:
        """
        Stock zero or more copies of a book.

        A book that is already stocked keeps its id and gets the quantity
        added to it; a new book gets the next free id.

        Returns:
            The id of the book

        Raises:
            ValueError: if the book is None or the quantity is negative
        """
        if book is None:
            raise ValueError("Book can't be None")
        if quantity < 0:
            raise ValueError("Quantity can't be negative")

        with self._lock:
            book_id = self._book_ids.get(book)
            if book_id is None:
                book_id = self._next_id
                self._next_id += 1
                self._books[book_id] = book
                self._book_ids[book] = book_id
                self._quantities[book_id] = quantity
                logger.debug(f"Stocked new book {book_id}: {book.title!r} x{quantity}")
            else:
                self._quantities[book_id] += quantity
                logger.debug(
                    f"Added {quantity} to book {book_id}, "
                    f"now {self._quantities[book_id]}"
                )
        return book_id

    def add_batch(self, books: Sequence[Book], quantities: Sequence[int]) -> list[int]:
        """
        Stock several books at once. Both sequences must have the same length.

        Returns:
            The ids of the books, in input order
        """
        if len(books) != len(quantities):
            raise ValueError("Both sequences need to have the same length")

        with self._lock:
            ids = [self.add_book(book, qty) for book, qty in zip(books, quantities)]
        logger.info(f"Added a batch of {len(ids)} book(s) to the stock")
        return ids

    def parse_and_add_batch(self, stock_string: str) -> list[int]:
        """
        Parse a stock string and add every book in it.

        The whole string is parsed before anything is stocked, so a malformed
        line leaves the ledger untouched.

        Raises:
            BookParseError: for the first malformed line
        """
        parsed = parse_books(stock_string)
        books = [book for book, _ in parsed]
        quantities = [qty for _, qty in parsed]
        return self.add_batch(books, quantities)

    # -------------------------------------------------------------------------
    # Removing
    # -------------------------------------------------------------------------

    def remove_book(self, book_id: int) -> RemovedStock | None:
        """Remove the book with this id. Other books keep their ids."""
        with self._lock:
            book = self._books.pop(book_id, None)
            if book is None:
                return None
            quantity = self._quantities.pop(book_id)
            del self._book_ids[book]
        logger.debug(f"Removed book {book_id}: {book.title!r} ({quantity} in stock)")
        return RemovedStock(book, quantity)

    def remove(self, book: Book) -> RemovedStock | None:
        """Remove a book from the stock. Other books keep their ids."""
        with self._lock:
            book_id = self._book_ids.get(book)
            if book_id is None:
                return None
            return self.remove_book(book_id)

    def reduce_quantity(self, book_id: int, amount: int) -> ReducedStock | None:
        """
        Take up to `amount` copies of a book out of the stock.

        The quantity never drops below zero; the result says how many copies
        were actually removed.

        Raises:
            ValueError: if the amount is negative
        """
        if amount < 0:
            raise ValueError("Amount can't be negative")

        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                return None
            current = self._quantities[book_id]
            removed = min(amount, current)
            self._quantities[book_id] = current - removed
        logger.debug(f"Reduced book {book_id} by {removed} (asked for {amount})")
        return ReducedStock(book, removed)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_book(self, book_id: int) -> Book | None:
        return self._books.get(book_id)

    def get_book_id(self, book: Book) -> int | None:
        return self._book_ids.get(book)

    def get_quantity(self, key: int | Book) -> int | None:
        """Quantity in stock for an id or a book, None if it isn't stocked."""
        book_id = key if isinstance(key, int) else self._book_ids.get(key)
        if book_id is None:
            return None
        return self._quantities.get(book_id)

    def get_stock(self) -> list[Book]:
        """All stocked books in id order."""
        with self._lock:
            return [self._books[book_id] for book_id in sorted(self._books)]

    list_all = get_stock

    def search(self, query: str) -> list[Book]:
        """Books whose title or author starts with the query, ignoring case."""
        return [book for book in self.get_stock() if matches_prefix(query, book)]

    def snapshot_quantities(self, books: Iterable[Book]) -> dict[Book, int | None]:
        """Read the current quantity of each distinct book in one go."""
        with self._lock:
            return {book: self.get_quantity(book) for book in dict.fromkeys(books)}
