from __future__ import annotations
import logging

from circdesk import LibrarySystem, seed_demo_data
from circdesk.domain import BookType
from circdesk.money import format_money


def demo_flow() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sys = LibrarySystem()
    seed_demo_data(sys)

    # Search
    print("\n[demo] search 'dune':", [b.title for b in sys.search_books("dune")])

    # Report inventory
    print("\n[demo] inventory:")
    for book, total, available in sys.report_inventory():
        print(f"  - {book.title}: total={total}, available={available}")
    print("[demo] fiction titles on the shelf:", sys.count_books_by_type(BookType.FICTION, True))

    # Reference books never leave the desk
    status = sys.checkout("9780199571123", "P002")
    print("\n[demo] Bob asks for the dictionary:", status)

    # Renewal keeps the same copy
    status = sys.checkout("9780441172719", "P001")
    print("[demo] Alice renews Dune:", status)

    # A child patron is warned on the very first loan (limit 3)
    status = sys.checkout("9780590353427", "P003")
    print("[demo] Cory borrows The Gruffalo:", status)

    # Return an overdue textbook (10 days -> doubled fine)
    fine = sys.return_book("978-0-13-468662-2", "P001")
    print(f"\n[demo] Alice returns Calculus, fine {format_money(fine)}")

    paid = sys.pay_all_fines("P001")
    print(f"[demo] Alice paid fines: {format_money(paid)}")

    print("\n[demo] overdue loans:", [l.isbn for l in sys.report_overdue()])


if __name__ == "__main__":
    demo_flow()
