"""Shopping cart holding books waiting to be bought."""

import logging

from .books import Book

logger = logging.getLogger(__name__)


class BookCart:
    """Ordered list of books. The same book may appear any number of times."""

    def __init__(self):
        self._books: list[Book] = []

    def __len__(self) -> int:
        return len(self._books)

    def add_to_cart(self, book: Book | None, quantity: int = 1) -> bool:
        """
        Add a number of copies of a book to the cart.

        Each copy is a separate cart line.

        Returns:
            True if something was added, False for a missing book or a
            quantity below one
        """
        if book is None:
            logger.debug("Refused to add a missing book to the cart")
            return False
        if quantity < 1:
            return False
        self._books.extend([book] * quantity)
        return True

    def get_cart_content(self) -> list[Book]:
        """Snapshot of the books in the cart, in the order they were added."""
        return list(self._books)

    def remove_from_cart(self, index: int) -> Book:
        """
        Remove the book at an index. Books after it move forward one index.

        Raises:
            IndexError: if the index is outside the cart
        """
        if not 0 <= index < len(self._books):
            raise IndexError(f"No book in cart on index {index}")
        return self._books.pop(index)

    def clear(self) -> None:
        self._books.clear()
