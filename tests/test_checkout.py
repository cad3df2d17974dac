from datetime import date, timedelta
from decimal import Decimal

import pytest

from circdesk import Book, BookType, LibrarySystem, Patron, PatronType, StatusCode

from .helpers import TODAY, make_books


def checkout(system: LibrarySystem, book, patron) -> StatusCode:
    return system.circulation.checkout_book(book, patron, TODAY)


def assert_untouched(book: Book, patron: Patron, copies: int, loans: dict) -> None:
    assert book.available_copies == copies
    assert patron.checked_out_books == loans


# ---- eligibility


def test_eligible_patron(system: LibrarySystem, patron: Patron) -> None:
    assert system.circulation.validate_patron_eligibility(patron) is StatusCode.ELIGIBLE


def test_missing_patron(system: LibrarySystem, book: Book) -> None:
    assert system.circulation.validate_patron_eligibility(None) is StatusCode.PATRON_NULL
    assert checkout(system, book, None) is StatusCode.PATRON_NULL
    assert book.available_copies == 5


def test_suspension_wins_over_overdue_and_fines(system: LibrarySystem, patron: Patron) -> None:
    patron.account_suspended = True
    patron.overdue_count = 5
    patron.add_fine(50)
    assert system.circulation.validate_patron_eligibility(patron) is StatusCode.PATRON_SUSPENDED


def test_overdue_wins_over_fines(system: LibrarySystem, patron: Patron) -> None:
    patron.overdue_count = 3
    patron.add_fine(50)
    assert system.circulation.validate_patron_eligibility(patron) is StatusCode.PATRON_OVERDUE


@pytest.mark.parametrize("overdue", [3, 4, 10])
def test_overdue_patron_is_refused_whatever_the_book(
    system: LibrarySystem, patron: Patron, overdue: int
) -> None:
    patron.overdue_count = overdue
    books = [
        system.add_book(Book("1111111111", "Gone", "A", total_copies=0)),
        system.add_book(Book("2222222222", "Atlas", "A", BookType.REFERENCE)),
        system.add_book(Book("3333333333", "Here", "A", total_copies=2)),
    ]
    for b in books + [None]:
        copies = b.available_copies if b else None
        assert checkout(system, b, patron) is StatusCode.PATRON_OVERDUE
        if b:
            assert b.available_copies == copies
    assert patron.checked_out_books == {}


@pytest.mark.parametrize(
    "balance, expected",
    [
        ("9.99", StatusCode.SUCCESS),
        ("10.00", StatusCode.FINE_LIMIT),
        ("10.01", StatusCode.FINE_LIMIT),
    ],
)
def test_fine_limit_boundary(
    system: LibrarySystem, book: Book, patron: Patron, balance: str, expected: StatusCode
) -> None:
    patron.add_fine(Decimal(balance))
    assert checkout(system, book, patron) is expected
    if expected is StatusCode.FINE_LIMIT:
        assert_untouched(book, patron, 5, {})


@pytest.mark.parametrize("balance", [9.995, "9.999", Decimal("9.9999")])
def test_sub_cent_balance_below_the_limit_is_eligible(
    system: LibrarySystem, book: Book, balance
) -> None:
    p = system.register_patron(Patron("P2", "n", "e", PatronType.STUDENT, fine_balance=balance))
    assert p.fine_balance < Decimal("10.00")
    assert checkout(system, book, p) is StatusCode.SUCCESS


def test_suspended_patron_changes_nothing(system: LibrarySystem, book: Book, patron: Patron) -> None:
    patron.account_suspended = True
    assert checkout(system, book, patron) is StatusCode.PATRON_SUSPENDED
    assert_untouched(book, patron, 5, {})
    assert system.loans.list_all() == []


def test_fine_limit_accumulated_from_floats(system: LibrarySystem, book: Book, patron: Patron) -> None:
    for _ in range(10):
        patron.add_fine(0.999)
    # ten times 1.00 after rounding each charge to the cent
    assert patron.fine_balance == Decimal("10.00")
    assert checkout(system, book, patron) is StatusCode.FINE_LIMIT


# ---- book checks


def test_missing_book(system: LibrarySystem, patron: Patron) -> None:
    assert checkout(system, None, patron) is StatusCode.BOOK_NULL
    assert patron.checked_out_books == {}


def test_reference_only_book(system: LibrarySystem, patron: Patron) -> None:
    atlas = system.add_book(Book("2222222222", "Atlas", "A", BookType.REFERENCE, total_copies=3))
    assert checkout(system, atlas, patron) is StatusCode.BOOK_REFERENCE
    assert_untouched(atlas, patron, 3, {})


def test_reference_flag_on_a_normal_type(system: LibrarySystem, patron: Patron) -> None:
    rare = system.add_book(Book("2222222222", "Rare", "A", BookType.NONFICTION, reference_only=True))
    assert checkout(system, rare, patron) is StatusCode.BOOK_REFERENCE


def test_unavailable_book(system: LibrarySystem, patron: Patron) -> None:
    gone = system.add_book(Book("1111111111", "Gone", "A", total_copies=1, available_copies=0))
    assert checkout(system, gone, patron) is StatusCode.BOOK_UNAVAILABLE
    assert_untouched(gone, patron, 0, {})
    assert system.loans.list_all() == []


# ---- success paths


def test_normal_checkout(system: LibrarySystem, book: Book, patron: Patron) -> None:
    assert checkout(system, book, patron) is StatusCode.SUCCESS
    assert book.available_copies == 4
    assert patron.checked_out_books == {book.isbn: TODAY + timedelta(days=14)}

    record = system.loans.find_open(patron.patron_id, book.isbn)
    assert record is not None
    assert record.checkout_at == TODAY
    assert record.returned_at is None


def test_due_date_follows_patron_type(system: LibrarySystem, book: Book) -> None:
    child = system.create_patron("C1", "Kid", "kid@example.com", PatronType.CHILD)
    checkout(system, book, child)
    assert child.checked_out_books[book.isbn] == TODAY + timedelta(days=child.loan_period_days)


def test_default_today(system: LibrarySystem, book: Book, patron: Patron) -> None:
    assert system.circulation.checkout_book(book, patron) is StatusCode.SUCCESS
    assert patron.checked_out_books[book.isbn] == date.today() + timedelta(days=14)


def test_renewal_keeps_the_copy(system: LibrarySystem, book: Book, patron: Patron) -> None:
    patron.add_checked_out_book(book.isbn, date(2026, 4, 1))
    assert checkout(system, book, patron) is StatusCode.SUCCESS_RENEWAL
    assert book.available_copies == 5
    assert patron.checked_out_books == {book.isbn: TODAY + timedelta(days=14)}


def test_renewal_moves_the_open_record(system: LibrarySystem, book: Book, patron: Patron) -> None:
    checkout(system, book, patron)
    later = TODAY + timedelta(days=5)
    assert system.circulation.checkout_book(book, patron, later) is StatusCode.SUCCESS_RENEWAL
    assert book.available_copies == 4
    record = system.loans.find_open(patron.patron_id, book.isbn)
    assert record.due_at == later + timedelta(days=14)
    assert len(system.loans.list_all()) == 1


def test_renewal_bypasses_availability_and_limit(system: LibrarySystem) -> None:
    child = system.create_patron("C1", "Kid", "kid@example.com", PatronType.CHILD)
    books = make_books(system, 3, copies=1)
    for b in books:
        checkout(system, b, child)
    assert all(b.available_copies == 0 for b in books)
    assert child.checkout_count == 3
    assert checkout(system, books[0], child) is StatusCode.SUCCESS_RENEWAL


@pytest.mark.parametrize("overdue", [1, 2])
def test_overdue_warning(system: LibrarySystem, book: Book, patron: Patron, overdue: int) -> None:
    patron.overdue_count = overdue
    assert checkout(system, book, patron) is StatusCode.SUCCESS_OVERDUE_WARNING
    assert book.available_copies == 4
    assert book.isbn in patron.checked_out_books


def test_negative_overdue_count_is_not_a_warning(system: LibrarySystem, book: Book, patron: Patron) -> None:
    patron.overdue_count = -1
    assert checkout(system, book, patron) is StatusCode.SUCCESS


def test_overdue_warning_beats_limit_warning(system: LibrarySystem) -> None:
    public = system.create_patron("P9", "Pub", "pub@example.com", PatronType.PUBLIC)
    books = make_books(system, 4)
    for b in books[:3]:
        public.add_checked_out_book(b.isbn, TODAY)
    public.overdue_count = 2
    assert checkout(system, books[3], public) is StatusCode.SUCCESS_OVERDUE_WARNING


@pytest.mark.parametrize(
    "patron_type, held, expected",
    [
        (PatronType.PUBLIC, 1, StatusCode.SUCCESS),
        (PatronType.PUBLIC, 2, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.PUBLIC, 4, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.PUBLIC, 5, StatusCode.CHECKOUT_LIMIT),
        (PatronType.CHILD, 0, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.CHILD, 2, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.CHILD, 3, StatusCode.CHECKOUT_LIMIT),
        (PatronType.STUDENT, 6, StatusCode.SUCCESS),
        (PatronType.STUDENT, 7, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.FACULTY, 17, StatusCode.SUCCESS_CHECKOUT_WARNING),
        (PatronType.FACULTY, 20, StatusCode.CHECKOUT_LIMIT),
    ],
)
def test_checkout_limit_boundaries(
    system: LibrarySystem, patron_type: PatronType, held: int, expected: StatusCode
) -> None:
    p = system.create_patron("X1", "x", "x@example.com", patron_type)
    for i in range(held):
        p.add_checked_out_book(f"held-{i}", TODAY)
    target = system.add_book(Book("9999999999", "Target", "A", total_copies=1))

    result = checkout(system, target, p)

    assert result is expected
    if result is StatusCode.CHECKOUT_LIMIT:
        assert_untouched(target, p, 1, {f"held-{i}": TODAY for i in range(held)})
    else:
        assert target.available_copies == 0
        assert p.checkout_count == held + 1


def test_child_over_limit_keeps_previous_loans(system: LibrarySystem) -> None:
    child = system.create_patron("C1", "Kid", "kid@example.com", PatronType.CHILD)
    books = make_books(system, 5)
    for b in books[:4]:
        child.add_checked_out_book(b.isbn, date(2026, 5, 25))

    assert checkout(system, books[4], child) is StatusCode.CHECKOUT_LIMIT
    assert not child.has_book_checked_out(books[4].isbn)
    assert child.has_book_checked_out(books[1].isbn)
    assert child.checkout_count == 4


def test_last_copy_goes_to_first_patron(system: LibrarySystem) -> None:
    last = system.add_book(Book("1111111111", "Last", "A", total_copies=1))
    a = system.create_patron("A", "a", "a@example.com", PatronType.STUDENT)
    b = system.create_patron("B", "b", "b@example.com", PatronType.STUDENT)
    assert checkout(system, last, a) is StatusCode.SUCCESS
    assert checkout(system, last, b) is StatusCode.BOOK_UNAVAILABLE
    assert b.checked_out_books == {}
