import pytest

from circdesk import Book, BookType, LibrarySystem, Patron, PatronType


@pytest.fixture
def system() -> LibrarySystem:
    return LibrarySystem()


@pytest.fixture
def book(system: LibrarySystem) -> Book:
    return system.add_book(
        Book("978-0-123456-78-9", "Test Book", "Test Author", BookType.FICTION, total_copies=5)
    )


@pytest.fixture
def patron(system: LibrarySystem) -> Patron:
    return system.create_patron("P001", "Test Patron", "test@example.com", PatronType.STUDENT)
