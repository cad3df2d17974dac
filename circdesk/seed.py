from __future__ import annotations
from datetime import date, timedelta
import logging

from .api import LibrarySystem
from .domain import Book, BookType, PatronType

logger = logging.getLogger(__name__)


def seed_demo_data(sys: LibrarySystem) -> None:
    # patrons
    alice = sys.create_patron("P001", "Alice Reader", "alice@example.com", PatronType.STUDENT)
    bob = sys.create_patron("P002", "Bob Lecturer", "bob@example.com", PatronType.FACULTY)
    sys.create_patron("P003", "Cory Kid", "cory@example.com", PatronType.CHILD)

    # books
    dune = sys.add_book(
        Book("9780441172719", "Dune", "Frank Herbert", BookType.FICTION, total_copies=2)
    )
    calculus = sys.add_book(
        Book("978-0-13-468662-2", "Calculus", "Tom Apostol", BookType.TEXTBOOK, total_copies=1)
    )
    sys.add_book(
        Book("9780199571123", "Oxford Dictionary", "Oxford", BookType.REFERENCE, total_copies=1)
    )
    sys.add_book(
        Book("9780590353427", "The Gruffalo", "Julia Donaldson", BookType.CHILDREN, total_copies=3)
    )

    # checkouts
    sys.checkout(dune.isbn, alice.patron_id)
    sys.checkout(calculus.isbn, alice.patron_id)
    sys.checkout(dune.isbn, bob.patron_id)

    # simulate overdue (manually tweak due date for testing); loan set and history must agree
    overdue_due = date.today() - timedelta(days=10)
    alice.add_checked_out_book(calculus.isbn, overdue_due)
    loan = sys.loans.find_open(alice.patron_id, calculus.isbn)
    if loan:
        loan.due_at = overdue_due

    logger.info("[seed] patrons: %s", [p.name for p in sys.patrons.list_all()])
    logger.info("[seed] books: %s", [b.title for b in sys.books.list_all()])
