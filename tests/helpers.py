from datetime import date
from typing import List

from circdesk import Book, BookType, LibrarySystem

TODAY = date(2026, 5, 1)


def make_books(
    system: LibrarySystem, n: int, book_type: BookType = BookType.FICTION, copies: int = 5
) -> List[Book]:
    return [
        system.add_book(Book(f"97800000000{i:02d}", f"Book {i}", "Author", book_type, total_copies=copies))
        for i in range(n)
    ]
