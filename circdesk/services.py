from __future__ import annotations
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional
import logging
import uuid

from .config import DEFAULT_POLICY, RETURN_FAILED, CirculationPolicy
from .domain import Book, BookType, LoanRecord, Patron, StatusCode
from .money import ZERO, format_money, to_decimal, to_money
from .repositories import BookRepo, LoanRepo, PatronRepo

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


class PatronService:
    def __init__(self, patrons: PatronRepo) -> None:
        self.patrons = patrons

    def register(self, patron: Patron) -> Patron:
        self.patrons.add(patron)
        return patron

    def get(self, patron_id: str) -> Optional[Patron]:
        return self.patrons.get(patron_id)


class CatalogService:
    def __init__(self, books: BookRepo) -> None:
        self.books = books

    def add_book(self, book: Book) -> Book:
        self.books.add(book)
        return book

    def get(self, isbn: str) -> Optional[Book]:
        return self.books.get(isbn)

    def search(self, text: str) -> List[Book]:
        return self.books.search(text)

    def count_books_by_type(self, book_type: Optional[BookType], only_available: bool) -> int:
        return self.books.count_by_type(book_type, only_available)


class FineCalculator:
    """
    Tiered overdue fines.

    Tiers are additive: day 10 of a FICTION loan costs 7 * 0.25 + 3 * 0.50.
    Double-rate book types double the accrued total, and the cap applies
    after doubling.
    """

    def __init__(self, policy: CirculationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def calculate(self, days_overdue: int, book_type: Optional[BookType]) -> Decimal:
        if days_overdue <= 0:
            return ZERO

        fine = ZERO
        for first, last, rate in self.policy.fine_tiers:
            if days_overdue < first:
                break
            upto = days_overdue if last is None else min(days_overdue, last)
            fine += (upto - first + 1) * rate

        if book_type in self.policy.double_rate_types:
            fine *= 2

        return to_money(min(fine, self.policy.max_fine))


class FineService:
    def __init__(self, calculator: FineCalculator) -> None:
        self.calculator = calculator

    def assess(self, patron: Patron, days_overdue: int, book_type: Optional[BookType]) -> Decimal:
        fine = self.calculator.calculate(days_overdue, book_type)
        if fine > ZERO:
            patron.add_fine(fine)
            logger.info(
                "[fine] %s charged %s for %d day(s) overdue (balance %s)",
                patron.patron_id,
                format_money(fine),
                days_overdue,
                format_money(patron.fine_balance),
            )
        return fine

    def pay(self, patron: Patron, amount) -> Decimal:
        applied = patron.pay_fine(amount)
        logger.info(
            "[fine] %s paid %s (balance %s)",
            patron.patron_id,
            format_money(applied),
            format_money(patron.fine_balance),
        )
        return applied

    def pay_all(self, patron: Patron) -> Decimal:
        return self.pay(patron, patron.fine_balance)


class CirculationService:
    def __init__(
        self,
        patrons: PatronRepo,
        books: BookRepo,
        loans: LoanRepo,
        fines: FineService,
        policy: CirculationPolicy = DEFAULT_POLICY,
    ):
        self.patrons = patrons
        self.books = books
        self.loans = loans
        self.fines = fines
        self.policy = policy

    def validate_patron_eligibility(self, patron: Optional[Patron]) -> StatusCode:
        """
        Patron-only checks, first match wins: missing, suspended, too many
        overdue loans, unpaid fines at or above the limit.
        """
        if patron is None:
            return StatusCode.PATRON_NULL
        if patron.account_suspended:
            return StatusCode.PATRON_SUSPENDED
        if patron.overdue_count >= self.policy.overdue_limit:
            return StatusCode.PATRON_OVERDUE
        if to_decimal(patron.fine_balance) >= self.policy.fine_limit:
            return StatusCode.FINE_LIMIT
        return StatusCode.ELIGIBLE

    def checkout_book(
        self,
        book: Optional[Book],
        patron: Optional[Patron],
        today: Optional[date] = None,
    ) -> StatusCode:
        """
        Check ``book`` out to ``patron`` (or renew it if the patron already
        holds it).

        Any code outside the success families leaves book and patron untouched.
        A renewal skips the availability and limit checks and never takes
        another copy.
        """
        eligibility = self.validate_patron_eligibility(patron)
        if eligibility is not StatusCode.ELIGIBLE:
            logger.info("[checkout] patron not eligible: %s", eligibility)
            return eligibility
        if book is None:
            logger.info("[checkout] no book given")
            return StatusCode.BOOK_NULL
        if book.reference_only:
            logger.info("[checkout] %s is reference-only", book.isbn)
            return StatusCode.BOOK_REFERENCE

        today = today or date.today()
        due = today + timedelta(days=patron.loan_period_days)

        if patron.has_book_checked_out(book.isbn):
            patron.add_checked_out_book(book.isbn, due)
            record = self.loans.find_open(patron.patron_id, book.isbn)
            if record is not None:
                record.due_at = due
            logger.info("[checkout] %s renewed %s until %s", patron.patron_id, book.isbn, due)
            return StatusCode.SUCCESS_RENEWAL

        if not book.is_available():
            logger.info("[checkout] no copies of %s available", book.isbn)
            return StatusCode.BOOK_UNAVAILABLE

        limit = patron.max_checkout_limit
        if patron.checkout_count >= limit:
            logger.info("[checkout] %s is at the limit of %d loans", patron.patron_id, limit)
            return StatusCode.CHECKOUT_LIMIT

        patron.add_checked_out_book(book.isbn, due)
        book.checkout()
        self.loans.add(
            LoanRecord(
                loan_id=_new_id("loan"),
                patron_id=patron.patron_id,
                isbn=book.isbn,
                checkout_at=today,
                due_at=due,
            )
        )
        logger.info("[checkout] %s took %s, due %s", patron.patron_id, book.isbn, due)

        # overdue_count is maintained outside the desk; this checkout never changes it
        if 1 <= patron.overdue_count < self.policy.overdue_limit:
            return StatusCode.SUCCESS_OVERDUE_WARNING
        if patron.checkout_count >= limit - self.policy.warning_margin:
            return StatusCode.SUCCESS_CHECKOUT_WARNING
        return StatusCode.SUCCESS

    def return_book(
        self,
        isbn: str,
        patron: Optional[Patron],
        today: Optional[date] = None,
    ) -> Decimal:
        """
        Returns the fine charged (0.00 when on time), or ``RETURN_FAILED``
        if the patron is missing, does not hold ``isbn``, or the book is not
        in the inventory. Nothing is changed on failure.
        """
        if patron is None or not patron.has_book_checked_out(isbn):
            logger.info("[return] no open loan for %s", isbn)
            return RETURN_FAILED

        book = self.books.get(isbn)
        if book is None:
            logger.info("[return] %s is not in the inventory", isbn)
            return RETURN_FAILED

        today = today or date.today()
        due = patron.checked_out_books[isbn]
        days_overdue = (today - due).days

        fine = ZERO
        if days_overdue > 0:
            fine = self.fines.assess(patron, days_overdue, book.book_type)

        patron.remove_checked_out_book(isbn)
        if not book.return_copy():
            logger.warning("[return] %s already has all %d copies in", isbn, book.total_copies)

        self.loans.close(patron.patron_id, isbn, today)
        logger.info("[return] %s returned %s, fine %s", patron.patron_id, isbn, format_money(fine))
        return fine

    def list_patron_loans(self, patron_id: str) -> List[LoanRecord]:
        return self.loans.list_by_patron(patron_id)

    def list_overdue_loans(self, today: Optional[date] = None) -> List[LoanRecord]:
        return self.loans.list_overdue(today)
