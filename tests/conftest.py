"""Shared pytest fixtures for bookstore tests."""

from decimal import Decimal

import pytest

from bookstore.books import Book
from bookstore.stock import BookStock
from bookstore.store import BookStore

TEST_BOOKS = [
    (Book("Mastering åäö", "Average Swede", Decimal("762.00")), 15),
    (Book("How To Spend Money", "Rich Bloke", Decimal("1000000.00")), 1),
    (Book("Generic Title", "First Author", Decimal("185.50")), 5),
    (Book("Generic Title", "Second Author", Decimal("1748.00")), 3),
    (Book("Random Sales", "Cunning Bastard", Decimal("999.00")), 20),
    (Book("Random Sales", "Cunning Bastard", Decimal("499.00")), 3),
    (Book("Desired", "Rich Bloke", Decimal("564.50")), 3),
]


@pytest.fixture
def test_books():
    """The books and quantities every stock fixture starts with."""
    return list(TEST_BOOKS)


@pytest.fixture
def stock(test_books):
    """A ledger holding the test books with ids 0..6."""
    ledger = BookStock()
    for book, quantity in test_books:
        ledger.add_book(book, quantity)
    return ledger


@pytest.fixture
def store(stock):
    """A store around the test stock with an empty cart."""
    return BookStore(stock=stock)
