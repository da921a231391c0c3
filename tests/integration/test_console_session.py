"""Integration tests for a whole console session.

These tests verify that:
- A scripted session stocks, fills the cart, buys and exits
- The session ends cleanly at the end of the input
- Quoting leaves the stock alone while committing takes books out
"""

import io

from bookstore.console import ConsoleBookStore
from bookstore.seed import DEFAULT_STOCK
from bookstore.store import BookStore


def run_session(commands, commit_purchases=False, store=None):
    """Run commands through a console and return it with its output."""
    console = ConsoleBookStore(
        store=store,
        commit_purchases=commit_purchases,
        input_stream=io.StringIO("".join(f"{c}\n" for c in commands)),
        output_stream=io.StringIO(),
    )
    console.add_stock(DEFAULT_STOCK)
    console.start()
    return console, console.output.getvalue()


class TestConsoleSession:
    """Tests for scripted sessions on the built-in stock."""

    def test_exit_ends_session(self):
        """Commands after exit are not run."""
        console, output = run_session(["exit", "add 0"])

        assert output.startswith("Hello and welcome to our store!")
        assert "Bye!" in output
        assert console.running is False
        assert console.store.get_cart_content() == []

    def test_end_of_input_ends_session(self):
        """Running out of input stops the loop without exit."""
        console, output = run_session(["list"])

        assert "How To Spend Money" in output
        assert "Bye!" not in output
        assert console.running is False

    def test_shopping_session_quotes(self):
        """Buying only quotes the cart by default."""
        console, output = run_session(
            ["add 1;2", "add 6", "cart", "buy", "exit"]
        )

        assert "Successfully added 2x How To Spend Money by Rich Bloke to cart!" in output
        assert "NOT IN STOCK" in output
        assert "1000000.00" in output
        # "Desired" starts with no copies
        assert output.count("NOT IN STOCK") == 2
        assert console.store.stock.get_quantity(1) == 1
        assert len(console.store.get_cart_content()) == 3

    def test_shopping_session_commits(self):
        """With commits on, bought books leave the stock."""
        console, output = run_session(
            ["add 0;2", "buy", "cart", "exit"], commit_purchases=True
        )

        assert "There are no books in your cart" in output
        assert console.store.stock.get_quantity(0) == 13

    def test_stock_management_session(self):
        """Books can be stocked and removed from the console."""
        console, output = run_session(
            [
                "addstock Fresh Print;New Author;12.00;2",
                "find fresh",
                "remstock 7;1",
                "remstock 0",
                "exit",
            ]
        )

        assert "Added a new book to the store:" in output
        assert "Removed 1x Fresh Print by New Author from the store" in output
        assert "Removed book from the store:" in output
        assert console.store.stock.get_quantity(7) == 1
        assert console.store.stock.get_book(0) is None

    def test_two_consoles_share_stock(self):
        """A purchase on one console is visible to another over the same stock."""
        shared = BookStore()
        run_session(["add 1", "buy", "exit"], commit_purchases=True, store=shared)

        other = ConsoleBookStore(store=BookStore(stock=shared.stock), output_stream=io.StringIO())
        other.execute_command("add 1")
        messages = other.execute_command("buy")

        assert "NOT IN STOCK" in messages[0]
