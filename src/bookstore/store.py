"""
Book store combining a stock ledger with a customer's cart.
"""

import logging
from decimal import Decimal

from .books import Book
from .cart import BookCart
from .settlement import BuyStatus, Settlement, commit, get_total_price, settle
from .stock import BookStock, ReducedStock

logger = logging.getLogger(__name__)


class BookStore:
    """
    A stock and a cart.

    The stock can be shared with other stores; the cart belongs to this one.
    """

    def __init__(
        self,
        stock: BookStock | None = None,
        initial_stock_string: str | None = None,
    ):
        self.stock = stock if stock is not None else BookStock()
        self.cart = BookCart()
        if initial_stock_string:
            self.add_stock_text(initial_stock_string)

    # -------------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------------

    def add_to_stock(self, book: Book | None, quantity: int) -> bool:
        """Stock a book. Returns False for a missing book or negative quantity."""
        if book is None or quantity < 0:
            return False
        self.stock.add_book(book, quantity)
        return True

    def add_stock_text(self, stock_string: str) -> list[int]:
        """
        Stock every book in a `title;author;price;quantity` string.

        Raises:
            BookParseError: if a line is malformed; nothing is stocked then
        """
        return self.stock.parse_and_add_batch(stock_string)

    def search(self, search_string: str = "") -> list[Book]:
        """
        Books whose title or author starts with the search string.

        Not case sensitive: "hell" finds "Hello World" by "Someone" and
        "The Story of My Life" by "Hellen Keller". An empty search string
        lists everything.
        """
        return self.stock.search(search_string)

    # -------------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------------

    def add(self, book: Book | None, quantity: int = 1) -> bool:
        """Put copies of a book in the cart."""
        return self.cart.add_to_cart(book, quantity)

    def get_cart_content(self) -> list[Book]:
        return self.cart.get_cart_content()

    def remove_from_cart(self, index: int) -> Book:
        return self.cart.remove_from_cart(index)

    # -------------------------------------------------------------------------
    # Buying
    # -------------------------------------------------------------------------

    def buy(self, *books: Book) -> list[BuyStatus]:
        """Status of each book against the current stock, in input order."""
        return settle(books, self.stock).statuses

    def get_total_price(self, books: list[Book], statuses: list[BuyStatus]) -> Decimal:
        return get_total_price(books, statuses)

    def quote(self) -> Settlement:
        """Settle the cart without changing the stock."""
        return settle(self.cart.get_cart_content(), self.stock)

    def checkout(self) -> tuple[Settlement, list[ReducedStock]]:
        """Settle the cart, take the available books out of stock, empty the cart."""
        settlement = self.quote()
        reduced = commit(settlement, self.stock)
        self.cart.clear()
        logger.info(
            f"Checkout: {len(reduced)} of {len(settlement.books)} book(s) bought "
            f"for {settlement.total_price}"
        )
        return settlement, reduced
