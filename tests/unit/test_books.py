"""Tests for Book values and stock record parsing."""

from decimal import Decimal

import pytest

from bookstore.books import (
    Book,
    BookParseError,
    format_book_record,
    parse_book,
    parse_books,
)


class TestBook:
    """Test the Book value type."""

    def test_constructor(self):
        """Should keep title, author and price."""
        book = Book("A", "B", Decimal(0))
        assert book.title == "A"
        assert book.author == "B"
        assert book.price == Decimal(0)

    def test_constructor_none(self):
        """Should reject missing fields."""
        with pytest.raises(TypeError):
            Book(None, None, "")

    def test_constructor_empty_price(self):
        """An empty price string means zero."""
        book = Book("", "", "")
        assert book.price == Decimal(0)

    def test_constructor_price_string(self):
        """Should parse a price given as a string."""
        book = Book("", "", "1000.01")
        assert book.price == Decimal("1000.01")

    def test_constructor_negative_price(self):
        """Should reject negative prices."""
        with pytest.raises(ValueError, match="negative"):
            Book("A", "B", Decimal("-1"))

    def test_constructor_nan_price(self):
        """Should reject non-finite prices."""
        with pytest.raises(ValueError, match="finite"):
            Book("A", "B", "NaN")

    def test_value_equality(self):
        """Books with the same fields are equal and hash alike."""
        a = Book("Hello World", "Someone", "10")
        b = Book("Hello World", "Someone", Decimal("10.00"))
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_price_is_different_book(self):
        """The price is part of the book's identity."""
        assert Book("Random Sales", "Cunning Bastard", "999") != Book(
            "Random Sales", "Cunning Bastard", "499"
        )

    def test_immutable(self):
        """Books can't be changed after construction."""
        book = Book("A", "B", "1")
        with pytest.raises(AttributeError):
            book.title = "C"

    def test_to_dict(self):
        """Should serialize the price as an exact string."""
        book = Book("A", "B", "185.50")
        assert book.to_dict() == {"title": "A", "author": "B", "price": "185.50"}


class TestParseBook:
    """Test parsing a single stock record."""

    def test_parse_book(self):
        """Should parse title, author, price and quantity."""
        book, quantity = parse_book("Hello World;;100.03;0")
        assert book == Book("Hello World", "", Decimal("100.03"))
        assert quantity == 0

    def test_strips_thousands_separators(self):
        """Commas in the price are thousands separators."""
        book, quantity = parse_book("How To Spend Money;Rich Bloke;1,000,000.00;1")
        assert book.price == Decimal("1000000")
        assert quantity == 1

    def test_empty_string(self):
        """An empty record gives nothing."""
        assert parse_book("") is None

    def test_too_few_fields(self):
        """Should reject records with fewer than four fields."""
        with pytest.raises(ValueError, match="Expected 4 fields"):
            parse_book("a;b;0")

    def test_non_numeric_price(self):
        """Should reject a price that isn't a number."""
        with pytest.raises(ValueError, match="Price"):
            parse_book("a;b;c;1")

    def test_non_numeric_quantity(self):
        """Should reject a quantity that isn't an integer."""
        with pytest.raises(ValueError, match="Quantity"):
            parse_book("a;b;1;d")

    def test_negative_quantity(self):
        """Should reject a negative quantity."""
        with pytest.raises(ValueError, match="negative"):
            parse_book("a;b;1;-2")

    def test_digit_grouping_rejected(self):
        """Underscores aren't accepted in quantities or prices."""
        with pytest.raises(ValueError, match="Quantity"):
            parse_book("a;b;1;1_000")
        with pytest.raises(ValueError, match="Price"):
            parse_book("a;b;1_000;1")

    def test_extra_fields_ignored(self):
        """Fields after the quantity are ignored."""
        book, quantity = parse_book("a;b;1;2;extra")
        assert book == Book("a", "b", "1")
        assert quantity == 2

    def test_round_trip(self):
        """A formatted record parses back to the same book and quantity."""
        book = Book("Generic Title", "Second Author", Decimal("1748.00"))
        assert parse_book(format_book_record(book, 3)) == (book, 3)

    def test_round_trip_rounds_to_cents(self):
        """Formatting keeps two fraction digits."""
        book = Book("A", "B", Decimal("10.004"))
        record = format_book_record(book, 1)
        assert record == "A;B;10.00;1"
        parsed, _ = parse_book(record)
        assert abs(parsed.price - book.price) < Decimal("0.01")


class TestParseBooks:
    """Test parsing a whole stock string."""

    def test_parse_books(self):
        """Should parse every line in order."""
        books = parse_books("ABC;Me;0;0\nHello World;Someone;1000;1\n")
        assert books == [
            (Book("ABC", "Me", "0"), 0),
            (Book("Hello World", "Someone", "1000"), 1),
        ]

    def test_skips_blank_lines(self):
        """Blank lines are not records."""
        books = parse_books("\nA;B;1;1\n\n   \nC;D;2;2\n")
        assert len(books) == 2

    def test_windows_line_endings(self):
        """Should accept CRLF line endings."""
        books = parse_books("A;B;1;1\r\nC;D;2;2\r\n")
        assert [b.title for b, _ in books] == ["A", "C"]

    def test_only_line_breaks_split_records(self):
        """Form feeds and other separators stay inside the record."""
        books = parse_books("A\x0cB;C;1;1\nD E;F;2;2")
        assert [b.title for b, _ in books] == ["A\x0cB", "D E"]

        with pytest.raises(BookParseError) as exc_info:
            parse_books("A\x0cB;C;1;1\nbad")
        assert exc_info.value.line_number == 2

    def test_non_numeric_value_reports_line(self):
        """Should report the 1-indexed line of a malformed value."""
        with pytest.raises(BookParseError) as exc_info:
            parse_books("hello;world;0;0\na;b;c;d")
        assert exc_info.value.line_number == 2
        assert exc_info.value.line == "a;b;c;d"

    def test_too_few_fields_reports_line(self):
        """Should report the line with too few fields."""
        with pytest.raises(BookParseError) as exc_info:
            parse_books("hello;world;0;0\na;b;0")
        assert exc_info.value.line_number == 2

    def test_blank_lines_count_towards_line_number(self):
        """Line numbers refer to the raw text, blank lines included."""
        with pytest.raises(BookParseError) as exc_info:
            parse_books("a;b;1;1\n\n\nbroken")
        assert exc_info.value.line_number == 4

    def test_parse_error_is_value_error(self):
        """Callers catching ValueError also catch parse errors."""
        with pytest.raises(ValueError):
            parse_books("nope")
