from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional, Tuple

from .domain import Book, BookType, LoanRecord, Patron


class PatronRepo:
    def __init__(self) -> None:
        self._patrons: Dict[str, Patron] = {}

    def add(self, patron: Patron) -> None:
        self._patrons[patron.patron_id] = patron

    def get(self, patron_id: str) -> Optional[Patron]:
        return self._patrons.get(patron_id)

    def __contains__(self, patron_id: str) -> bool:
        return patron_id in self._patrons

    def list_all(self) -> List[Patron]:
        return list(self._patrons.values())

    def snapshot(self) -> Dict[str, Patron]:
        return dict(self._patrons)


class BookRepo:
    def __init__(self) -> None:
        self._books: Dict[str, Book] = {}

    def add(self, book: Book) -> None:
        self._books[book.isbn] = book

    def get(self, isbn: str) -> Optional[Book]:
        return self._books.get(isbn)

    def __contains__(self, isbn: str) -> bool:
        return isbn in self._books

    def list_all(self) -> List[Book]:
        return list(self._books.values())

    def snapshot(self) -> Dict[str, Book]:
        return dict(self._books)

    def search(self, text: str) -> List[Book]:
        t = text.lower().strip()

        def matches(b: Book) -> bool:
            return t in b.title.lower() or t in b.author.lower() or t in b.isbn.lower()

        return [b for b in self._books.values() if matches(b)]

    def count_by_type(self, book_type: Optional[BookType], only_available: bool) -> int:
        if book_type is None:
            return 0
        return sum(
            1
            for b in self._books.values()
            if b.book_type is book_type and (not only_available or b.is_available())
        )


class LoanRepo:
    """
    Loan history. Records are never deleted; open ones are also indexed by
    (patron_id, isbn), of which there is at most one at a time.
    """

    def __init__(self) -> None:
        self._loans: Dict[str, LoanRecord] = {}
        self._open: Dict[Tuple[str, str], LoanRecord] = {}

    def add(self, loan: LoanRecord) -> None:
        self._loans[loan.loan_id] = loan
        if loan.is_open:
            self._open[(loan.patron_id, loan.isbn)] = loan

    def get(self, loan_id: str) -> Optional[LoanRecord]:
        return self._loans.get(loan_id)

    def find_open(self, patron_id: str, isbn: str) -> Optional[LoanRecord]:
        return self._open.get((patron_id, isbn))

    def close(self, patron_id: str, isbn: str, when: date) -> Optional[LoanRecord]:
        loan = self._open.pop((patron_id, isbn), None)
        if loan is not None:
            loan.mark_returned(when)
        return loan

    def list_all(self) -> List[LoanRecord]:
        return list(self._loans.values())

    def list_by_patron(self, patron_id: str) -> List[LoanRecord]:
        return [l for l in self._loans.values() if l.patron_id == patron_id]

    def list_open(self) -> List[LoanRecord]:
        return list(self._open.values())

    def list_overdue(self, today: Optional[date] = None) -> List[LoanRecord]:
        return [l for l in self._open.values() if l.is_overdue(today)]
