"""
Line-oriented console for the bookstore.

Commands are written as "command arg1;arg2;arg3...". The command word is not
case sensitive and anything unknown shows the help text.
"""

import logging
import sys
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import TextIO

from . import formatting
from .books import DIGIT_GROUPING, Book, BookParseError, parse_integer
from .store import BookStore

logger = logging.getLogger(__name__)

ADD_CART = "add"
REMOVE_CART = "remove"
CART = "cart"
ADD_STOCK = "addstock"
REMOVE_STOCK = "remstock"
FIND = "find"
LIST = "list"
BUY = "buy"
EXIT = "exit"
HELP = "help"

COMMAND_HELP = {
    ADD_CART: "[id;(quantity)] Add a book to your cart",
    REMOVE_CART: "[cartindex] Remove a book from your cart",
    ADD_STOCK: "[title;author;price;quantity] Add a new book to the store's stock",
    REMOVE_STOCK: "[id;(quantity)] Remove a book, or some copies of it, from the store's stock",
    LIST: "[(searchstring)] List all books with that title or by that author\n"
    "\t\t\tLists everything if no searchstring is specified",
    FIND: "[searchstring] Same as list",
    CART: "Lists all books currently in your shopping cart",
    BUY: "Buy contents of your shopping cart",
    EXIT: "Exit program",
    HELP: "List all available commands",
}


class ConsoleBookStore:
    """Reads commands, runs them against a store and prints the results."""

    def __init__(
        self,
        store: BookStore | None = None,
        commit_purchases: bool = False,
        prompt: str = ">>",
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ):
        self.store = store if store is not None else BookStore()
        self.commit_purchases = commit_purchases
        self.prompt = prompt
        self.input = input_stream if input_stream is not None else sys.stdin
        self.output = output_stream if output_stream is not None else sys.stdout
        self.running = False

        self.commands: dict[str, Callable[[list[str], list[str]], None]] = {
            ADD_CART: self._command_add_to_cart,
            REMOVE_CART: self._command_remove_from_cart,
            ADD_STOCK: self._command_add_to_stock,
            REMOVE_STOCK: self._command_remove_from_stock,
            LIST: self._command_list,
            FIND: self._command_list,
            CART: self._command_cart,
            BUY: self._command_buy,
            EXIT: self._command_exit,
            HELP: self._command_help,
        }

    def add_stock(self, stock_string: str) -> bool:
        """Stock the books in a stock string. Returns False if it didn't parse."""
        try:
            ids = self.store.add_stock_text(stock_string)
        except BookParseError as e:
            logger.warning(f"Stock not loaded, line {e.line_number} is malformed: {e.line}")
            self._write(str(e))
            return False
        logger.info(f"Stocked {len(ids)} book record(s)")
        return True

    def start(self) -> None:
        """Run commands until "exit" or the end of the input."""
        self._write("Hello and welcome to our store!")
        self._write("To list available commands, type help")
        self.running = True
        while self.running:
            self.output.write(self.prompt)
            self.output.flush()
            line = self.input.readline()
            if not line:
                break
            for message in self.execute_command(line.rstrip("\r\n")):
                self._write(message)
        self.running = False

    def execute_command(self, line: str) -> list[str]:
        """Run one command line and return the messages it produced."""
        parts = line.split(" ", 1)
        command = parts[0].lower()
        args = parts[1].split(";") if len(parts) > 1 else []

        messages: list[str] = []
        handler = self.commands.get(command, self._command_help)
        logger.debug(f"Command {command!r} with {len(args)} argument(s)")
        handler(args, messages)
        return messages

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def _command_add_to_cart(self, args: list[str], messages: list[str]) -> None:
        if not _has_argument(args, 0):
            messages.append("Too few arguments! Need at least a book id.")
            return

        book_id = _positive_integer_argument(args, 0, messages)
        if book_id is None:
            return
        book = self.store.stock.get_book(book_id)
        if book is None:
            messages.append(f"Couldn't find any book with the id {args[0]}")
            return

        quantity = 1
        if _has_argument(args, 1):
            quantity = _positive_integer_argument(args, 1, messages)
            if quantity is None:
                return

        if self.store.add(book, quantity):
            messages.append(
                f"Successfully added {quantity}x {book.title} by {book.author} to cart!"
            )
        else:
            messages.append(
                f"Failed to add {quantity}x {book.title} by {book.author} to cart!"
            )

    def _command_remove_from_cart(self, args: list[str], messages: list[str]) -> None:
        if not _has_argument(args, 0):
            messages.append("Too few arguments! Need a cart index.")
            return

        index = _positive_integer_argument(args, 0, messages)
        if index is None:
            return
        try:
            book = self.store.remove_from_cart(index)
        except IndexError:
            messages.append(f"No book in cart on index {index}")
            return
        messages.append(f"Successfully removed {book.title} by {book.author} from your cart")

    def _command_add_to_stock(self, args: list[str], messages: list[str]) -> None:
        if not _has_argument(args, 3):
            messages.append(
                f"Too few arguments! Need 4 arguments but only found {len(args)} "
                "(title;author;price;quantity)"
            )
            messages.append(str(args))
            return

        title, author = args[0], args[1]
        price = _decimal_argument(args, 2, messages)
        quantity = _positive_integer_argument(args, 3, messages)
        if price is None or quantity is None:
            return

        try:
            book = Book(title, author, price)
        except ValueError as e:
            messages.append(f"Couldn't add the book: {e}")
            return
        self.store.add_to_stock(book, quantity)
        messages.append("Added a new book to the store:")
        messages.append(formatting.book_row(book))

    def _command_remove_from_stock(self, args: list[str], messages: list[str]) -> None:
        if not _has_argument(args, 0):
            messages.append(
                "Too few arguments! Need at least the ID of the book to remove, "
                "quantity to remove is optional"
            )
            return

        book_id = _positive_integer_argument(args, 0, messages)
        if book_id is None:
            return

        if _has_argument(args, 1):
            amount = _positive_integer_argument(args, 1, messages)
            if amount is None:
                return
            reduced = self.store.stock.reduce_quantity(book_id, amount)
            if reduced is None:
                messages.append("No books where removed")
            else:
                messages.append(
                    f"Removed {reduced.removed}x {reduced.book.title} "
                    f"by {reduced.book.author} from the store"
                )
            return

        removed = self.store.stock.remove_book(book_id)
        if removed is None:
            messages.append("No books where removed")
        else:
            messages.append("Removed book from the store:")
            messages.append(formatting.book_row(removed.book))

    def _command_list(self, args: list[str], messages: list[str]) -> None:
        search_string = args[0] if _has_argument(args, 0) else ""
        books = self.store.search(search_string)
        if not books:
            messages.append("Couldn't find anything")
            return

        messages.append(formatting.stock_header_row())
        for book in books:
            book_id = self.store.stock.get_book_id(book)
            quantity = self.store.stock.get_quantity(book)
            messages.append(formatting.stock_row(book_id, book, quantity))

    def _command_cart(self, args: list[str], messages: list[str]) -> None:
        books = self.store.get_cart_content()
        if not books:
            messages.append("There are no books in your cart")
            return

        messages.append(formatting.cart_header_row())
        for index, book in enumerate(books):
            messages.append(formatting.cart_row(index, book))

    def _command_buy(self, args: list[str], messages: list[str]) -> None:
        if self.commit_purchases:
            settlement, _ = self.store.checkout()
        else:
            settlement = self.store.quote()
        messages.extend(formatting.settlement_rows(settlement))

    def _command_exit(self, args: list[str], messages: list[str]) -> None:
        self.running = False
        messages.append("Bye!")

    def _command_help(self, args: list[str], messages: list[str]) -> None:
        for command, help_text in COMMAND_HELP.items():
            messages.append(f"{command:>8} - {help_text}")
        messages.append('Written as: "command arg1;arg2;arg3..."')

    def _write(self, message: str) -> None:
        self.output.write(message + "\n")


def _has_argument(args: list[str], index: int) -> bool:
    return len(args) > index


def _positive_integer_argument(
    args: list[str], index: int, messages: list[str]
) -> int | None:
    """Parse a non-negative integer argument, adding a message on failure."""
    try:
        value = parse_integer(args[index])
        if value < 0:
            raise ValueError(value)
        return value
    except ValueError:
        messages.append(
            f"Argument number {index + 1} isn't a valid positive integer. ({args[index]})"
        )
    return None


def _decimal_argument(args: list[str], index: int, messages: list[str]) -> Decimal | None:
    """Parse a decimal argument, adding a message on failure."""
    try:
        if DIGIT_GROUPING in args[index]:
            raise InvalidOperation(args[index])
        return Decimal(args[index])
    except InvalidOperation:
        messages.append(
            f"Argument number {index + 1} isn't a valid decimal number. ({args[index]})"
        )
    return None
