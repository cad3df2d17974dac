"""
CircDesk: library circulation desk.

Exports key modules for convenient imports.
"""

from .domain import (
    PatronType,
    BookType,
    StatusCode,
    Patron,
    Book,
    LoanRecord,
)

from .config import CirculationPolicy, DEFAULT_POLICY, RETURN_FAILED

from .exceptions import (
    CirculationError,
    DuplicateBookError,
    DuplicatePatronError,
    InvalidISBNError,
    UnknownBookError,
    UnknownPatronError,
)

from .repositories import (
    PatronRepo,
    BookRepo,
    LoanRepo,
)

from .services import (
    PatronService,
    CatalogService,
    FineCalculator,
    FineService,
    CirculationService,
)

from .validation import is_valid_isbn, is_patron_type

from .api import LibrarySystem
from .seed import seed_demo_data

__all__ = [
    # domain
    "PatronType",
    "BookType",
    "StatusCode",
    "Patron",
    "Book",
    "LoanRecord",
    # config
    "CirculationPolicy",
    "DEFAULT_POLICY",
    "RETURN_FAILED",
    # errors
    "CirculationError",
    "DuplicateBookError",
    "DuplicatePatronError",
    "InvalidISBNError",
    "UnknownBookError",
    "UnknownPatronError",
    # repos
    "PatronRepo",
    "BookRepo",
    "LoanRepo",
    # services
    "PatronService",
    "CatalogService",
    "FineCalculator",
    "FineService",
    "CirculationService",
    # validation
    "is_valid_isbn",
    "is_patron_type",
    # api
    "LibrarySystem",
    # seed
    "seed_demo_data",
]
