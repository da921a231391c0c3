"""Fixed-width text rows for listing books, the cart and purchases."""

from decimal import Decimal

from .books import Book
from .settlement import BuyStatus, Settlement

TITLE_WIDTH = 24
AUTHOR_WIDTH = 24
PRICE_WIDTH = 16
COLUMN_WIDTH = 8  # id, cart index and quantity columns

STATUS_LABELS = {
    BuyStatus.NOT_IN_STOCK: "NOT IN STOCK",
    BuyStatus.DOES_NOT_EXIST: "DOES NOT EXIST",
}


def format_price(price: Decimal) -> str:
    return f"{price:.2f}"


def header_row() -> str:
    return f"{'Title':>{TITLE_WIDTH}}{'Author':>{AUTHOR_WIDTH}}{'Price':>{PRICE_WIDTH}}"


def header_row_with_quantity() -> str:
    return header_row() + f"{'Qty':>{COLUMN_WIDTH}}"


def book_row(book: Book) -> str:
    return (
        f"{book.title:>{TITLE_WIDTH}}"
        f"{book.author:>{AUTHOR_WIDTH}}"
        f"{format_price(book.price):>{PRICE_WIDTH}}"
    )


def book_row_with_quantity(book: Book, quantity: int) -> str:
    return book_row(book) + f"{quantity:>{COLUMN_WIDTH}}"


def stock_header_row() -> str:
    return f"{'ID':>{COLUMN_WIDTH}}{header_row_with_quantity()}"


def stock_row(book_id: int, book: Book, quantity: int) -> str:
    return f"{book_id:>{COLUMN_WIDTH}}{book_row_with_quantity(book, quantity)}"


def cart_header_row() -> str:
    return f"{'Index':>{COLUMN_WIDTH}}{header_row()}"


def cart_row(index: int, book: Book) -> str:
    return f"{index:>{COLUMN_WIDTH}}{book_row(book)}"


def buy_row(book: Book, status: BuyStatus) -> str:
    """Book row with the price replaced by the reason when it can't be bought."""
    if status == BuyStatus.OK:
        last_column = format_price(book.price)
    else:
        last_column = STATUS_LABELS.get(status, "ERROR")
    return (
        f"{book.title:>{TITLE_WIDTH}}"
        f"{book.author:>{AUTHOR_WIDTH}}"
        f"{last_column:>{PRICE_WIDTH}}"
    )


def total_row(total: Decimal) -> str:
    return f"{'TOTAL':>{TITLE_WIDTH + AUTHOR_WIDTH}}{format_price(total):>{PRICE_WIDTH}}"


def settlement_rows(settlement: Settlement) -> list[str]:
    """One row per book followed by the total."""
    rows = [
        buy_row(book, status)
        for book, status in zip(settlement.books, settlement.statuses)
    ]
    rows.append(total_row(settlement.total_price))
    return rows
