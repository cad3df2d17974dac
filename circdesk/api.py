from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import logging

from .config import DEFAULT_POLICY, CirculationPolicy
from .domain import Book, BookType, LoanRecord, Patron, PatronType, StatusCode
from .exceptions import (
    DuplicateBookError,
    DuplicatePatronError,
    InvalidISBNError,
    UnknownBookError,
    UnknownPatronError,
)
from .repositories import BookRepo, LoanRepo, PatronRepo
from .services import (
    CatalogService,
    CirculationService,
    FineCalculator,
    FineService,
    PatronService,
)
from .validation import is_valid_isbn

logger = logging.getLogger(__name__)


class LibrarySystem:
    """
    A simple facade that wires repos + services and offers a compact API.

    Each instance owns its own registries, so separate desks (or tests)
    never share state.
    """

    def __init__(self, policy: CirculationPolicy = DEFAULT_POLICY) -> None:
        # repos
        self.patrons = PatronRepo()
        self.books = BookRepo()
        self.loans = LoanRepo()

        # services
        self.patron_service = PatronService(self.patrons)
        self.catalog = CatalogService(self.books)
        self.fine_calculator = FineCalculator(policy)
        self.fine_service = FineService(self.fine_calculator)
        self.circulation = CirculationService(
            self.patrons, self.books, self.loans, self.fine_service, policy
        )

    # ---- patron module
    def register_patron(self, patron: Patron) -> Patron:
        if patron.patron_id in self.patrons:
            raise DuplicatePatronError(patron.patron_id)
        logger.info("[patron] registered %s (%s)", patron.patron_id, patron.patron_type.name)
        return self.patron_service.register(patron)

    def create_patron(
        self,
        patron_id: str,
        name: str,
        email: str,
        patron_type: PatronType = PatronType.PUBLIC,
    ) -> Patron:
        return self.register_patron(Patron(patron_id, name, email, patron_type))

    def find_patron(self, patron_id: str) -> Patron:
        patron = self.patron_service.get(patron_id)
        if patron is None:
            raise UnknownPatronError(patron_id)
        return patron

    # ---- book/catalog module
    def add_book(self, book: Book) -> Book:
        if not is_valid_isbn(book.isbn):
            raise InvalidISBNError(book.isbn)
        if book.isbn in self.books:
            raise DuplicateBookError(book.isbn)
        logger.info("[catalog] added %s (%d copies)", book.isbn, book.total_copies)
        return self.catalog.add_book(book)

    def find_book(self, isbn: str) -> Book:
        book = self.catalog.get(isbn)
        if book is None:
            raise UnknownBookError(isbn)
        return book

    def search_books(self, text: str) -> List[Book]:
        return self.catalog.search(text)

    def count_books_by_type(self, book_type: Optional[BookType], only_available: bool = False) -> int:
        return self.catalog.count_books_by_type(book_type, only_available)

    def get_inventory(self) -> Dict[str, Book]:
        return self.books.snapshot()

    def get_patrons(self) -> Dict[str, Patron]:
        return self.patrons.snapshot()

    # ---- circulation module
    def checkout(self, isbn: str, patron_id: str, today: Optional[date] = None) -> StatusCode:
        # unknown ids map to the same codes as a missing book/patron
        return self.circulation.checkout_book(
            self.catalog.get(isbn), self.patron_service.get(patron_id), today
        )

    def return_book(self, isbn: str, patron_id: str, today: Optional[date] = None) -> Decimal:
        return self.circulation.return_book(isbn, self.patron_service.get(patron_id), today)

    # ---- fines
    def calculate_fine(self, days_overdue: int, book_type: Optional[BookType]) -> Decimal:
        return self.fine_calculator.calculate(days_overdue, book_type)

    def pay_fine(self, patron_id: str, amount) -> Decimal:
        return self.fine_service.pay(self.find_patron(patron_id), amount)

    def pay_all_fines(self, patron_id: str) -> Decimal:
        return self.fine_service.pay_all(self.find_patron(patron_id))

    # ---- reporting
    def report_overdue(self, today: Optional[date] = None) -> List[LoanRecord]:
        return self.circulation.list_overdue_loans(today)

    def report_inventory(self) -> List[Tuple[Book, int, int]]:
        """
        Returns tuples of (Book, total_copies, available_copies)
        """
        return [(b, b.total_copies, b.available_copies) for b in self.books.list_all()]
