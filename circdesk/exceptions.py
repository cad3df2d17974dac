class CirculationError(Exception):
    """Base exception for misuse of the circulation desk registries."""


class DuplicateBookError(CirculationError):
    """A book with this ISBN is already in the inventory."""


class DuplicatePatronError(CirculationError):
    """A patron with this id is already registered."""


class InvalidISBNError(CirculationError):
    """The ISBN is not a 10 or 13 digit number."""


class UnknownBookError(CirculationError):
    """No book with this ISBN is in the inventory."""


class UnknownPatronError(CirculationError):
    """No patron with this id is registered."""
