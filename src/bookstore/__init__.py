"""
bookstore: In-memory book stock and shopping-cart manager.

Keeps a ledger of books with quantities, lets a customer search it, collect
books in a cart, and settle the cart against the live stock from a console.
"""

__version__ = "0.1.0"
