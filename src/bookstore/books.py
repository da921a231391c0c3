"""
Book values and the `title;author;price;quantity` record format.

A stock string holds one book per line, four values separated by ';':

    Generic Title;First Author;1,748.00;3

Thousands separators in the price are ignored. Blank lines are skipped.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

FIELD_SEPARATOR = ";"
THOUSANDS_SEPARATOR = ","
DIGIT_GROUPING = "_"  # accepted by int() and Decimal(), not by the record format
LINE_BREAK = re.compile(r"\r\n|\r|\n")

PARSE_INDEX_TITLE = 0
PARSE_INDEX_AUTHOR = 1
PARSE_INDEX_PRICE = 2
PARSE_INDEX_QUANTITY = 3
PARSE_FIELD_COUNT = 4


class BookParseError(ValueError):
    """A stock record could not be parsed.

    Carries the 1-indexed line number and the raw text of the offending line.
    """

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Error while parsing on line {line_number}: {line} ({reason})")


def to_price(value: "Decimal | str | int") -> Decimal:
    """Convert a price value to a Decimal. An empty string means zero."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        if value == "":
            return Decimal(0)
        if DIGIT_GROUPING in value:
            raise ValueError(f"Price isn't a decimal number: {value!r}")
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"Price isn't a decimal number: {value!r}") from e
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    raise TypeError(f"Unsupported price type: {type(value).__name__}")


def parse_integer(value: str) -> int:
    """Parse a plain base-10 integer, rejecting `_` digit grouping."""
    if DIGIT_GROUPING in value:
        raise ValueError(f"invalid literal for int() with base 10: {value!r}")
    return int(value)


@dataclass(frozen=True)
class Book:
    """A book in the store.

    Books compare and hash by value, so two books with the same title, author
    and price are the same book as far as the stock is concerned.
    """

    title: str
    author: str
    price: Decimal

    def __post_init__(self):
        if self.title is None or self.author is None or self.price is None:
            raise TypeError("Book title, author and price can't be None")
        price = to_price(self.price)
        if not price.is_finite():
            raise ValueError(f"Price must be a finite number: {price}")
        if price < 0:
            raise ValueError(f"Price can't be negative: {price}")
        object.__setattr__(self, "price", price)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "author": self.author,
            "price": str(self.price),
        }


def parse_book(book_string: str) -> tuple[Book, int] | None:
    """
    Parse a single `title;author;price;quantity` record.

    Returns None for an empty string.

    Raises:
        ValueError: if there are too few fields, the price isn't a decimal
            number, or the quantity isn't a non-negative integer
    """
    if not book_string:
        return None

    fields = book_string.split(FIELD_SEPARATOR)
    if len(fields) < PARSE_FIELD_COUNT:
        raise ValueError(
            f"Expected {PARSE_FIELD_COUNT} fields (title;author;price;quantity) "
            f"but found {len(fields)}"
        )

    title = fields[PARSE_INDEX_TITLE]
    author = fields[PARSE_INDEX_AUTHOR]
    price = fields[PARSE_INDEX_PRICE].replace(THOUSANDS_SEPARATOR, "").strip()

    quantity_field = fields[PARSE_INDEX_QUANTITY].strip()
    try:
        quantity = parse_integer(quantity_field)
    except ValueError as e:
        raise ValueError(f"Quantity isn't an integer: {quantity_field!r}") from e
    if quantity < 0:
        raise ValueError(f"Quantity can't be negative: {quantity}")

    return Book(title, author, to_price(price)), quantity


def parse_books(stock_string: str) -> list[tuple[Book, int]]:
    """
    Parse every record in a stock string.

    Each non-blank line must contain exactly one book. Parsing stops at the
    first malformed line and nothing is returned for the call.

    Raises:
        BookParseError: with the line number of the first malformed line
    """
    books: list[tuple[Book, int]] = []
    for line_number, line in enumerate(LINE_BREAK.split(stock_string), start=1):
        if not line.strip():
            continue
        try:
            parsed = parse_book(line)
        except (ValueError, TypeError) as e:
            raise BookParseError(line_number, line, str(e)) from e
        if parsed is not None:
            books.append(parsed)
    return books


def format_book_record(book: Book, quantity: int) -> str:
    """Render a book and quantity as a record that `parse_book` accepts."""
    return FIELD_SEPARATOR.join(
        [book.title, book.author, f"{book.price:.2f}", str(quantity)]
    )
