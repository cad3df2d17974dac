from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, auto
from typing import Dict, Optional

from .money import to_decimal, to_money, ZERO


class PatronType(Enum):
    FACULTY = auto()
    STAFF = auto()
    STUDENT = auto()
    PUBLIC = auto()
    CHILD = auto()


# concurrent loans allowed per patron type
CHECKOUT_LIMITS: Dict[PatronType, int] = {
    PatronType.FACULTY: 20,
    PatronType.STAFF: 15,
    PatronType.STUDENT: 10,
    PatronType.PUBLIC: 5,
    PatronType.CHILD: 3,
}

LOAN_PERIOD_DAYS: Dict[PatronType, int] = {
    PatronType.FACULTY: 30,
    PatronType.STAFF: 21,
    PatronType.STUDENT: 14,
    PatronType.PUBLIC: 14,
    PatronType.CHILD: 7,
}


class BookType(Enum):
    FICTION = auto()
    NONFICTION = auto()
    REFERENCE = auto()
    TEXTBOOK = auto()
    CHILDREN = auto()


class StatusCode(Enum):
    """
    Outcome of an eligibility check or a checkout.

    Callers should compare members, not numbers; ``code`` carries the stable
    numeric contract (leading digit is the family).
    """

    ELIGIBLE = auto()
    SUCCESS = auto()
    SUCCESS_RENEWAL = auto()
    SUCCESS_OVERDUE_WARNING = auto()
    SUCCESS_CHECKOUT_WARNING = auto()
    BOOK_UNAVAILABLE = auto()
    BOOK_NULL = auto()
    PATRON_SUSPENDED = auto()
    PATRON_NULL = auto()
    CHECKOUT_LIMIT = auto()
    PATRON_OVERDUE = auto()
    FINE_LIMIT = auto()
    BOOK_REFERENCE = auto()

    @property
    def code(self) -> Decimal:
        return _STATUS_CODES[self]

    @property
    def family(self) -> int:
        return int(self.code)

    @property
    def is_success(self) -> bool:
        return self.family <= 1

    def __str__(self) -> str:
        return f"{self.name}({self.code})"


_STATUS_CODES: Dict[StatusCode, Decimal] = {
    StatusCode.ELIGIBLE: Decimal("0.0"),
    StatusCode.SUCCESS: Decimal("0.0"),
    StatusCode.SUCCESS_RENEWAL: Decimal("0.1"),
    StatusCode.SUCCESS_OVERDUE_WARNING: Decimal("1.0"),
    StatusCode.SUCCESS_CHECKOUT_WARNING: Decimal("1.1"),
    StatusCode.BOOK_UNAVAILABLE: Decimal("2.0"),
    StatusCode.BOOK_NULL: Decimal("2.1"),
    StatusCode.PATRON_SUSPENDED: Decimal("3.0"),
    StatusCode.PATRON_NULL: Decimal("3.1"),
    StatusCode.CHECKOUT_LIMIT: Decimal("3.2"),
    StatusCode.PATRON_OVERDUE: Decimal("4.0"),
    StatusCode.FINE_LIMIT: Decimal("4.1"),
    StatusCode.BOOK_REFERENCE: Decimal("5.0"),
}


@dataclass
class Patron:
    patron_id: str
    name: str
    email: str
    patron_type: PatronType = PatronType.PUBLIC
    account_suspended: bool = False
    overdue_count: int = 0
    fine_balance: Decimal = ZERO
    checked_out_books: Dict[str, date] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fine_balance = to_decimal(self.fine_balance)

    @property
    def max_checkout_limit(self) -> int:
        return CHECKOUT_LIMITS[self.patron_type]

    @property
    def loan_period_days(self) -> int:
        return LOAN_PERIOD_DAYS[self.patron_type]

    @property
    def checkout_count(self) -> int:
        return len(self.checked_out_books)

    def has_book_checked_out(self, isbn: str) -> bool:
        return isbn in self.checked_out_books

    def add_checked_out_book(self, isbn: str, due_date: date) -> None:
        # also used for renewals: an existing key just gets the new due date
        self.checked_out_books[isbn] = due_date

    def remove_checked_out_book(self, isbn: str) -> Optional[date]:
        return self.checked_out_books.pop(isbn, None)

    def add_fine(self, amount) -> None:
        # the field is public, so a caller may have stored a float
        self.fine_balance = to_decimal(self.fine_balance) + to_money(amount)

    def pay_fine(self, amount) -> Decimal:
        """Apply a payment; returns what was actually applied."""
        amount = to_money(amount)
        if amount < ZERO:
            raise ValueError("payment amount must not be negative")
        balance = to_decimal(self.fine_balance)
        applied = min(amount, balance)
        self.fine_balance = balance - applied
        return applied


@dataclass
class Book:
    isbn: str
    title: str
    author: str
    book_type: BookType = BookType.FICTION
    total_copies: int = 1
    available_copies: Optional[int] = None
    reference_only: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.total_copies < 0:
            raise ValueError("total_copies must not be negative")
        if self.available_copies is None:
            self.available_copies = self.total_copies
        if not 0 <= self.available_copies <= self.total_copies:
            raise ValueError("available_copies must be between 0 and total_copies")
        if self.reference_only is None:
            self.reference_only = self.book_type is BookType.REFERENCE

    def is_available(self) -> bool:
        return self.available_copies > 0

    def checkout(self) -> None:
        if self.available_copies <= 0:
            raise ValueError(f"no copies of {self.isbn} left to check out")
        self.available_copies -= 1

    def return_copy(self) -> bool:
        """Put one copy back on the shelf; False if every copy is already in."""
        if self.available_copies >= self.total_copies:
            return False
        self.available_copies += 1
        return True


@dataclass
class LoanRecord:
    loan_id: str
    patron_id: str
    isbn: str
    checkout_at: date
    due_at: date
    returned_at: Optional[date] = None

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def is_overdue(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return self.is_open and today > self.due_at

    def mark_returned(self, when: Optional[date] = None) -> None:
        self.returned_at = when or date.today()
